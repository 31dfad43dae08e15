"""Remote and local byte retrieval for string image references."""

from os import PathLike

import aiofiles
import httpx
from loguru import logger

REMOTE_PREFIXES = ("http://", "https://")

DEFAULT_TIMEOUT = 30.0


def is_remote_reference(reference: str) -> bool:
    return reference.startswith(REMOTE_PREFIXES)


async def fetch_bytes(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> bytes:
    """Download the body of ``url``.

    Args:
        url: http(s) URL
        client: Optional shared client. A short-lived client is created otherwise.
        timeout: Timeout in seconds for the short-lived client

    Returns:
        Response body

    Raises:
        httpx.HTTPError: On transport failures or non-2xx responses
    """
    logger.debug(f"Fetching image from {url}")

    if client is not None:
        response = await client.get(url, follow_redirects=True)
    else:
        async with httpx.AsyncClient(timeout=timeout) as short_lived:
            response = await short_lived.get(url, follow_redirects=True)

    _ = response.raise_for_status()
    return response.content


async def read_file_bytes(path: str | PathLike[str]) -> bytes:
    """Read a local file without blocking the event loop.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    async with aiofiles.open(path, "rb") as f:
        return await f.read()

from pathlib import Path
from urllib.parse import unquote, urlparse

import aiofiles
import httpx
from loguru import logger

from pmtracker.domain.errors import PhotoFetchError
from pmtracker.domain.ports.image_fetcher_port import ImageFetcherPort

DEFAULT_TIMEOUT_S = 15.0


class ImageFetcher(ImageFetcherPort):
    """Resolve photo references: http(s) URLs, file:// URIs or plain paths.

    An injected AsyncClient is reused and left open; otherwise a client is
    created per fetch.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._client = client
        self.timeout_s = timeout_s

    async def fetch(self, ref: str) -> bytes:
        scheme = urlparse(ref).scheme.lower()
        if scheme in ("http", "https"):
            return await self._fetch_http(ref)
        if scheme == "file":
            return await self._read_file(Path(unquote(urlparse(ref).path)))
        if scheme and len(scheme) > 1:
            raise PhotoFetchError(f"Unsupported reference scheme '{scheme}'")
        return await self._read_file(Path(ref))

    async def _fetch_http(self, url: str) -> bytes:
        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=self.timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as http:
                    response = await http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PhotoFetchError(f"HTTP {e.response.status_code} for {url}") from e
        except httpx.HTTPError as e:
            raise PhotoFetchError(f"Request failed for {url}: {e}") from e
        logger.debug("Fetched {} ({} bytes)", url, len(response.content))
        return response.content

    async def _read_file(self, path: Path) -> bytes:
        if not path.is_file():
            raise PhotoFetchError(f"Photo not found: {path}")
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise PhotoFetchError(f"Could not read {path}: {e}") from e

from pathlib import Path

import httpx
import pytest

from pmtracker.domain.errors import PhotoFetchError
from pmtracker.infrastructure.fetching.image_fetcher import ImageFetcher


def _client(handler: object) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))  # type: ignore[arg-type]


class TestHttpFetch:
    async def test_returns_body(self, png_bytes: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/pm-photos/a.png"
            return httpx.Response(200, content=png_bytes)

        async with _client(handler) as client:
            data = await ImageFetcher(client=client).fetch("https://blob.test/pm-photos/a.png")

        assert data == png_bytes

    async def test_http_error_status(self) -> None:
        async with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(PhotoFetchError, match="HTTP 404"):
                await ImageFetcher(client=client).fetch("https://blob.test/missing.png")

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(PhotoFetchError, match="Request failed"):
                await ImageFetcher(client=client).fetch("http://blob.test/a.png")


class TestFileFetch:
    async def test_file_uri(self, tmp_path: Path, jpeg_bytes: bytes) -> None:
        photo = tmp_path / "foto 1.jpg"
        photo.write_bytes(jpeg_bytes)

        assert await ImageFetcher().fetch(photo.resolve().as_uri()) == jpeg_bytes

    async def test_plain_path(self, tmp_path: Path, jpeg_bytes: bytes) -> None:
        photo = tmp_path / "p.jpg"
        photo.write_bytes(jpeg_bytes)

        assert await ImageFetcher().fetch(str(photo)) == jpeg_bytes

    async def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PhotoFetchError, match="not found"):
            await ImageFetcher().fetch(str(tmp_path / "nope.jpg"))

    async def test_unsupported_scheme(self) -> None:
        with pytest.raises(PhotoFetchError, match="scheme"):
            await ImageFetcher().fetch("ftp://host/a.jpg")

"""Asynchronous HTTP body source using httpx."""

import logging
import httpx
from typing import AsyncIterator, Optional

from .base import CHUNK_SIZE, parse_content_length


logger = logging.getLogger(__name__)

# Global async client
_client: Optional[httpx.AsyncClient] = None


def _get_client() -> httpx.AsyncClient:
    """Get or create the global httpx AsyncClient."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(timeout=60.0)
    return _client


class HTTPAsyncSource:
    """Streams the body of a GET response asynchronously."""

    def __init__(self, url: str):
        self.url = url
        self.bytes_read = 0
        self.requests_made = 0
        self.content_length: Optional[int] = None
        self._response: Optional[httpx.Response] = None
        self._chunks: Optional[AsyncIterator[bytes]] = None
        self._pending = b""
        self._opened = False

    async def _ensure_opened(self):
        """Send the streaming GET if not already done."""
        if self._opened:
            return

        client = _get_client()
        request = client.build_request("GET", self.url)
        try:
            response = await client.send(request, stream=True)
            self.requests_made += 1
        except httpx.RequestError as e:
            raise IOError(f"GET request failed: {e}")

        if response.status_code >= 400:
            await response.aclose()
            raise IOError(f"GET request failed with status {response.status_code}")

        # untrusted header; a bad value just means the length is unknown
        self.content_length = parse_content_length(response.headers.get('content-length'))
        logger.debug("Opened %s (status %d, content-length %s)",
                     self.url, response.status_code, self.content_length)

        self._response = response
        self._chunks = response.aiter_bytes(chunk_size=CHUNK_SIZE)
        self._opened = True

    async def read(self, size: int) -> bytes:
        """Return at most `size` bytes of the body; b"" at end-of-stream."""
        await self._ensure_opened()
        if self._response is None:
            raise IOError("Source is closed")

        while not self._pending:
            try:
                self._pending = await self._chunks.__anext__()
            except StopAsyncIteration:
                return b""
            except httpx.HTTPError as e:
                raise IOError(f"Reading response body failed: {e}")

        data, self._pending = self._pending[:size], self._pending[size:]
        self.bytes_read += len(data)
        return data

    async def __aenter__(self):
        await self._ensure_opened()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the response; the client is shared and stays open."""
        if self._response is not None:
            await self._response.aclose()
            self._response = None
            self._chunks = None


async def open_http_source_async(url: str) -> HTTPAsyncSource:
    """Create an asynchronous HTTP source."""
    source = HTTPAsyncSource(url)
    await source._ensure_opened()
    return source


async def close_global_client():
    """Close the global httpx client. Call this at application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None

"""Synchronous HTTP body source using requests."""

import logging
import requests
from typing import Iterator, Optional

from .base import CHUNK_SIZE, parse_content_length


logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPSource:
    """Streams the body of a GET response, one pull at a time."""

    def __init__(self, url: str, timeout: float = 30):
        self.url = url
        self.bytes_read = 0
        self.requests_made = 0
        self.content_length: Optional[int] = None
        self._session = _get_session()
        self._response: Optional[requests.Response] = None
        self._chunks: Optional[Iterator[bytes]] = None
        self._pending = b""

        # Send the request immediately so status errors surface on open
        self._perform_get(timeout)

    def _perform_get(self, timeout: float):
        """Issue the streaming GET and check the status."""
        try:
            response = self._session.get(self.url, stream=True, timeout=timeout)
            self.requests_made += 1
        except requests.RequestException as e:
            raise IOError(f"GET request failed: {e}")

        if response.status_code >= 400:
            response.close()
            raise IOError(f"GET request failed with status {response.status_code}")

        # untrusted header; a bad value just means the length is unknown
        self.content_length = parse_content_length(response.headers.get('content-length'))
        logger.debug("Opened %s (status %d, content-length %s)",
                     self.url, response.status_code, self.content_length)

        self._response = response
        self._chunks = response.iter_content(chunk_size=CHUNK_SIZE)

    def read(self, size: int) -> bytes:
        """Return at most `size` bytes of the body; b"" at end-of-stream."""
        if self._response is None:
            raise IOError("Source is closed")

        while not self._pending:
            try:
                chunk = next(self._chunks, None)
            except requests.RequestException as e:
                raise IOError(f"Reading response body failed: {e}")
            if chunk is None:
                return b""
            self._pending = chunk

        data, self._pending = self._pending[:size], self._pending[size:]
        self.bytes_read += len(data)
        return data

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Release the connection back to the shared session."""
        if self._response is not None:
            self._response.close()
            self._response = None
            self._chunks = None


def open_http_source(url: str) -> HTTPSource:
    """Create a synchronous HTTP source."""
    return HTTPSource(url)

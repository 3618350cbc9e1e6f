"""Base protocols and shared constants for byte sources."""

from typing import Optional, Protocol, runtime_checkable

from ..core.size import ByteSize, MB


DEFAULT_LIMIT = ByteSize(10 * MB)
CHUNK_SIZE = 64 * 1024


@runtime_checkable
class Source(Protocol):
    """Protocol for synchronous byte sources."""

    bytes_read: int  # running total

    def read(self, size: int) -> bytes:
        """Return at most `size` bytes; b"" at end-of-stream.
        Failures → raise IOError.
        """
        ...


@runtime_checkable
class AsyncSource(Protocol):
    """Protocol for asynchronous byte sources."""

    bytes_read: int  # running total

    async def read(self, size: int) -> bytes:
        """Return at most `size` bytes; b"" at end-of-stream.
        Failures → raise IOError.
        """
        ...


def parse_content_length(value: Optional[str]) -> Optional[int]:
    """Return the Content-Length as an int, or None if missing or malformed."""
    if not value:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None

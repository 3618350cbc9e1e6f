"""Local file sources."""

import asyncio
from pathlib import Path
from typing import BinaryIO, Union


class LocalSource:
    """Synchronous source over a local file or an already-open binary stream."""

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self.bytes_read = 0
        self.requests_made = 0
        self._file = None
        self._should_close_file = False

        if hasattr(source, 'read'):
            # BinaryIO object, caller owns it
            self._file = source
        else:
            # Path or str
            self._file = open(source, 'rb')
            self._should_close_file = True

    def readinto(self, buffer) -> int:
        """Fill `buffer` with up to len(buffer) bytes; 0 at end-of-stream."""
        if self._file is None:
            raise IOError("Source is closed")
        self.requests_made += 1

        if hasattr(self._file, 'readinto'):
            count = self._file.readinto(buffer)
        else:
            chunk = self._file.read(len(buffer))
            count = len(chunk)
            buffer[:count] = chunk

        if count is None:
            raise BlockingIOError("Stream has no data available")
        self.bytes_read += count
        return count

    def read(self, size: int) -> bytes:
        """Return at most `size` bytes; b"" at end-of-stream."""
        buf = bytearray(size)
        count = self.readinto(buf)
        return bytes(buf[:count])

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the file if we opened it."""
        if self._should_close_file and self._file is not None:
            self._file.close()
        self._file = None


class LocalAsyncSource:
    """Asynchronous local source - thin wrapper around the sync one."""

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self._sync_source = LocalSource(source)

    @property
    def bytes_read(self) -> int:
        return self._sync_source.bytes_read

    @property
    def requests_made(self) -> int:
        return self._sync_source.requests_made

    async def read(self, size: int) -> bytes:
        """Return at most `size` bytes; b"" at end-of-stream."""
        return await asyncio.to_thread(self._sync_source.read, size)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying sync source."""
        await asyncio.to_thread(self._sync_source.close)


def open_local_source(source: Union[Path, str, BinaryIO]) -> LocalSource:
    """Create a synchronous local source."""
    return LocalSource(source)


async def open_local_source_async(source: Union[Path, str, BinaryIO]) -> LocalAsyncSource:
    """Create an asynchronous local source."""
    return LocalAsyncSource(source)

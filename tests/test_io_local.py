"""Tests for local file sources."""

import pytest
import tempfile
from pathlib import Path
import io

from safeio.core.model import LimitReachedError
from safeio.core.readall import read_all_limit, read_all_limit_async
from safeio.io.local import LocalSource, LocalAsyncSource, open_local_source, open_local_source_async


class TestLocalSource:
    """Test synchronous local source."""

    def test_basic_read(self):
        """Test sequential pulls."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            source = LocalSource(f.name)

            assert source.read(4) == b"0123"
            assert source.read(4) == b"4567"
            assert source.read(4) == b"89"
            assert source.read(4) == b""

            # Check bytes_read accounting
            assert source.bytes_read == 10
            assert source.requests_made == 4

            source.close()

    def test_binary_io_source(self):
        """Test using BinaryIO as source; the caller's stream stays open."""
        bio = io.BytesIO(b"0123456789")

        source = LocalSource(bio)
        buf = bytearray(6)
        assert source.readinto(buf) == 6
        assert bytes(buf) == b"012345"
        source.close()

        assert not bio.closed

    def test_path_source(self):
        """Test using Path as source."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile(delete=False) as f:
            f.write(test_data)
            temp_path = Path(f.name)

        try:
            with LocalSource(temp_path) as source:
                assert read_all_limit(source, 100) == test_data
                assert source.bytes_read == 10
        finally:
            temp_path.unlink()

    def test_limit_on_file(self):
        """A file larger than the limit is cut off."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"x" * 4096)
            f.flush()

            with LocalSource(f.name) as source:
                with pytest.raises(LimitReachedError) as exc_info:
                    read_all_limit(source, 1000)
            assert exc_info.value.data == b"x" * 1000

    def test_empty_file(self):
        """Empty files read as empty."""
        with tempfile.NamedTemporaryFile() as f:
            with LocalSource(f.name) as source:
                assert read_all_limit(source, 10) == b""

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            LocalSource("/nonexistent/definitely/missing.bin")

    def test_read_after_close(self):
        source = LocalSource(io.BytesIO(b"abc"))
        source.close()
        with pytest.raises(IOError, match="closed"):
            source.read(1)

    def test_stream_without_readinto(self):
        """Streams that only offer read() still work."""
        class ReadOnly:
            def __init__(self):
                self._bio = io.BytesIO(b"abcdef")

            def read(self, n):
                return self._bio.read(n)

        with LocalSource(ReadOnly()) as source:
            assert read_all_limit(source, 6) == b"abcdef"


class TestLocalAsyncSource:
    """Test asynchronous local source."""

    @pytest.mark.asyncio
    async def test_basic_read(self):
        """Test basic async reads."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            source = LocalAsyncSource(f.name)

            assert await source.read(5) == b"01234"
            assert await source.read(5) == b"56789"
            assert source.bytes_read == 10

            await source.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async context manager usage."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"z" * 3000)
            f.flush()

            async with LocalAsyncSource(f.name) as source:
                assert await read_all_limit_async(source, 3000) == b"z" * 3000
                assert source.requests_made >= 2


class TestFactoryFunctions:
    """Test factory functions."""

    def test_open_local_source(self):
        """Test sync factory function."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"0123456789")
            f.flush()

            source = open_local_source(f.name)
            assert isinstance(source, LocalSource)
            assert source.read(5) == b"01234"
            source.close()

    @pytest.mark.asyncio
    async def test_open_local_source_async(self):
        """Test async factory function."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"0123456789")
            f.flush()

            source = await open_local_source_async(f.name)
            assert isinstance(source, LocalAsyncSource)
            assert await source.read(5) == b"01234"
            await source.close()

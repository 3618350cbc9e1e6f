"""safeio - read byte sources to completion without unbounded memory growth."""

import logging

from .core.model import LimitReachedError, InvalidLimitError, ReadResult, is_limit_reached   # re-export
from .core.size import ByteSize, KB, MB, GB, TB, PB, EB, ZB, YB, format_byte_size, parse_byte_size
from .core.readall import (
    read_all_limit, read_all_limit_async,
    read_all_limit_result, read_all_limit_result_async,
)
from .io import open_source, open_source_async, DEFAULT_LIMIT

logger = logging.getLogger(__name__)


async def read_source(source, limit: float = DEFAULT_LIMIT) -> ReadResult:
    """Read a path, URL or stream asynchronously, keeping at most `limit` bytes."""
    try:
        src = await open_source_async(source)
    except (IOError, OSError) as e:
        logger.debug("Could not open %s: %s", source, e)
        return ReadResult(data=b"", error=e, limit=ByteSize(limit))
    try:
        return await read_all_limit_result_async(src, limit)
    finally:
        await src.close()


def read_source_sync(source, limit: float = DEFAULT_LIMIT) -> ReadResult:
    """Read a path, URL or stream synchronously, keeping at most `limit` bytes."""
    try:
        src = open_source(source)
    except (IOError, OSError) as e:
        logger.debug("Could not open %s: %s", source, e)
        return ReadResult(data=b"", error=e, limit=ByteSize(limit))
    try:
        return read_all_limit_result(src, limit)
    finally:
        src.close()


__all__ = [
    "read_all_limit", "read_all_limit_async",
    "read_all_limit_result", "read_all_limit_result_async",
    "read_source", "read_source_sync",
    "ByteSize", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB",
    "format_byte_size", "parse_byte_size",
    "LimitReachedError", "InvalidLimitError", "ReadResult", "is_limit_reached",
    "DEFAULT_LIMIT",
]

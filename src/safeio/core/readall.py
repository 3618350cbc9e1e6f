"""Read a source to end-of-stream without retaining more than a fixed number of bytes."""

from __future__ import annotations
import logging
import math

from .model import InvalidLimitError, LimitReachedError, ReadResult
from .size import ByteSize

logger = logging.getLogger(__name__)

INITIAL_BUFFER_SIZE = 512
MIN_GROWTH = 512


def _check_limit(limit: float) -> int:
    if not math.isfinite(limit):
        raise InvalidLimitError(f"Read limit must be finite: {limit}")
    if limit < 0:
        raise InvalidLimitError(f"Read limit cannot be negative: {limit}")
    return int(limit)


def _check_count(count: int | None, window: memoryview) -> int:
    if count is None:
        raise BlockingIOError("Source has no data available")
    if not 0 <= count <= len(window):
        raise OSError(f"Source reported {count} bytes, requested at most {len(window)}")
    return count


def _grow(buf: bytearray) -> None:
    # at least double, so appends stay amortised O(1)
    buf.extend(bytes(max(len(buf), MIN_GROWTH)))


def _pull(source, window: memoryview) -> int:
    """Read at most ``len(window)`` bytes from ``source`` into ``window``.

    Returns the number of bytes stored; 0 means end-of-stream.
    """
    readinto = getattr(source, "readinto", None)
    if readinto is not None:
        return _check_count(readinto(window), window)

    chunk = source.read(len(window))
    if len(chunk) > len(window):
        raise OSError(f"Source returned {len(chunk)} bytes, requested at most {len(window)}")
    window[:len(chunk)] = chunk
    return len(chunk)


async def _pull_async(source, window: memoryview) -> int:
    """Async counterpart of ``_pull`` for sources with ``async readinto`` or ``async read``."""
    readinto = getattr(source, "readinto", None)
    if readinto is not None:
        return _check_count(await readinto(window), window)

    chunk = await source.read(len(window))
    if len(chunk) > len(window):
        raise OSError(f"Source returned {len(chunk)} bytes, requested at most {len(window)}")
    window[:len(chunk)] = chunk
    return len(chunk)


def read_all_limit_result(source, limit: float) -> ReadResult:
    """Read ``source`` until end-of-stream, keeping at most ``limit`` bytes.

    Every outcome is returned rather than raised:

    - end-of-stream at or under the limit: all bytes, ``error`` is None
    - more than ``limit`` bytes produced: the first ``limit`` bytes and a
      LimitReachedError
    - the source raised: the bytes read so far and the source's own exception

    A negative ``limit`` raises InvalidLimitError before the source is touched.
    """
    n = _check_limit(limit)
    size = ByteSize(limit)
    buf = bytearray(min(INITIAL_BUFFER_SIZE, n))
    used = 0
    total = 0

    while True:
        if used == len(buf):
            _grow(buf)
        try:
            with memoryview(buf)[used:] as window:
                count = _pull(source, window)
        except Exception as exc:
            logger.debug("Source failed after %d bytes: %r", used, exc)
            return ReadResult(data=bytes(buf[:used]), error=exc, limit=size)

        total += count
        if total > n:
            logger.debug("Read limit of %s reached", size)
            data = bytes(buf[:n])
            return ReadResult(data=data, error=LimitReachedError(size, data), limit=size)

        if count == 0:
            return ReadResult(data=bytes(buf[:used]), error=None, limit=size)
        used += count


async def read_all_limit_result_async(source, limit: float) -> ReadResult:
    """Async version of ``read_all_limit_result``; the source's methods are awaited."""
    n = _check_limit(limit)
    size = ByteSize(limit)
    buf = bytearray(min(INITIAL_BUFFER_SIZE, n))
    used = 0
    total = 0

    while True:
        if used == len(buf):
            _grow(buf)
        try:
            with memoryview(buf)[used:] as window:
                count = await _pull_async(source, window)
        except Exception as exc:
            logger.debug("Source failed after %d bytes: %r", used, exc)
            return ReadResult(data=bytes(buf[:used]), error=exc, limit=size)

        total += count
        if total > n:
            logger.debug("Read limit of %s reached", size)
            data = bytes(buf[:n])
            return ReadResult(data=data, error=LimitReachedError(size, data), limit=size)

        if count == 0:
            return ReadResult(data=bytes(buf[:used]), error=None, limit=size)
        used += count


def read_all_limit(source, limit: float) -> bytes:
    """Read ``source`` to end-of-stream and return its bytes.

    Raises LimitReachedError (``.data`` holds the first ``limit`` bytes) if the
    source produces more than ``limit`` bytes. Exceptions raised by the source
    propagate unchanged.
    """
    result = read_all_limit_result(source, limit)
    if result.error is not None:
        raise result.error
    return result.data


async def read_all_limit_async(source, limit: float) -> bytes:
    """Async version of ``read_all_limit``."""
    result = await read_all_limit_result_async(source, limit)
    if result.error is not None:
        raise result.error
    return result.data

"""Throughput sanity benchmark for the bounded reader.

Compares read_all_limit against a plain unbounded read() on in-memory and
small-pull sources. Meant for manual runs, not CI.
"""

import asyncio
import io
import sys
import time
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from safeio import read_all_limit, read_all_limit_async, MB


class TrickleSource:
    """Hands out at most `chunk` bytes per pull, like a slow socket."""

    def __init__(self, data: bytes, chunk: int):
        self._bio = io.BytesIO(data)
        self._chunk = chunk

    def read(self, size: int) -> bytes:
        return self._bio.read(min(size, self._chunk))


class AsyncTrickleSource(TrickleSource):
    async def read(self, size: int) -> bytes:
        return super().read(size)


def _timed(label, fn):
    start = time.perf_counter()
    out = fn()
    elapsed = time.perf_counter() - start
    print(f"{label:<40} {len(out) / MB / elapsed:8.1f} MB/s")


def bench_sync(data: bytes):
    _timed("io.BytesIO.read()", lambda: io.BytesIO(data).read())
    _timed("read_all_limit(BytesIO)", lambda: read_all_limit(io.BytesIO(data), len(data)))
    _timed("read_all_limit(trickle 4KB)", lambda: read_all_limit(TrickleSource(data, 4096), len(data)))


async def bench_async(data: bytes):
    start = time.perf_counter()
    out = await read_all_limit_async(AsyncTrickleSource(data, 4096), len(data))
    elapsed = time.perf_counter() - start
    print(f"{'read_all_limit_async(trickle 4KB)':<40} {len(out) / MB / elapsed:8.1f} MB/s")


if __name__ == "__main__":
    print("safeio bounded read benchmark")
    print("=" * 40)

    payload = b"\xab" * int(64 * MB)
    bench_sync(payload)
    asyncio.run(bench_async(payload))

    print("\nBenchmark complete!")

"""I/O layer for safeio - byte sources to feed the bounded reader."""

# Re-export these for import convenience
from .base import Source, AsyncSource, DEFAULT_LIMIT
from .local import open_local_source, open_local_source_async
from .http_sync import open_http_source
from .http_async import open_http_source_async, close_global_client


def _is_url(source) -> bool:
    return str(source).startswith(('http://', 'https://'))


def open_source(source):
    """Factory function to create the appropriate Source for a path, URL or stream."""
    if hasattr(source, 'read'):  # BinaryIO
        return open_local_source(source)

    if _is_url(source):
        return open_http_source(str(source))
    return open_local_source(source)


async def open_source_async(source):
    """Factory function to create the appropriate AsyncSource for a path, URL or stream."""
    if hasattr(source, 'read'):  # BinaryIO
        return await open_local_source_async(source)

    if _is_url(source):
        return await open_http_source_async(str(source))
    return await open_local_source_async(source)


__all__ = [
    "Source", "AsyncSource", "DEFAULT_LIMIT",
    "open_source", "open_source_async", "close_global_client",
    "open_local_source", "open_local_source_async",
    "open_http_source", "open_http_source_async",
]

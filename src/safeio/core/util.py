from __future__ import annotations
import base64
from typing import Any, Dict, Iterable

from .model import ReadResult
from .size import format_byte_size


def result_asdict(res: ReadResult, *, source: str | None = None, peek: int | None = None,
                  fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict (skip None) optionally filtered."""
    payload = {
        "source": source,
        "success": res.success,
        "bytes_read": res.bytes_read,
        "size": format_byte_size(res.bytes_read),
        "limit": str(res.limit),
        "limit_reached": res.limit_reached,
        "error": str(res.error) if res.error is not None else None,
        "error_type": type(res.error).__name__ if res.error is not None else None,
    }
    if peek:
        payload["peek"] = base64.b64encode(res.data[:peek]).decode("ascii")
    payload = {k: v for k, v in payload.items() if v is not None}
    if fields:
        wanted = set(fields) | {"success"}
        payload = {k: v for k, v in payload.items() if k in wanted}
    return payload

"""Byte counts and their human-readable rendering."""

from __future__ import annotations
import re


class ByteSize(float):
    """A count of bytes. ``str()`` renders it with a KB..YB suffix.

    The rendering is for logs and error text only; it is lossy and must not be
    parsed back or compared.
    """

    __slots__ = ()

    def __str__(self) -> str:
        return format_byte_size(self)

    def __repr__(self) -> str:
        return f"ByteSize({float(self)!r})"


KB = ByteSize(1 << 10)
MB = ByteSize(1 << 20)
GB = ByteSize(1 << 30)
TB = ByteSize(1 << 40)
PB = ByteSize(1 << 50)
EB = ByteSize(1 << 60)
ZB = ByteSize(1 << 70)
YB = ByteSize(1 << 80)

# largest first; the first threshold the value reaches wins
_MAGNITUDES: tuple[tuple[ByteSize, str], ...] = (
    (YB, "YB"),
    (ZB, "ZB"),
    (EB, "EB"),
    (PB, "PB"),
    (TB, "TB"),
    (GB, "GB"),
    (MB, "MB"),
    (KB, "KB"),
)

_SUFFIXES = {suffix: mult for mult, suffix in _MAGNITUDES}
_SUFFIXES["B"] = ByteSize(1)

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d*)?|\.\d+)\s*([KMGTPEZY]?B)?\s*$", re.IGNORECASE)


def format_byte_size(value: float) -> str:
    """Return ``value`` as e.g. ``"1.5KB"``; values under 1024 get a plain ``B``."""
    v = float(value)
    for threshold, suffix in _MAGNITUDES:
        if v >= threshold:
            return f"{v / threshold:.1f}{suffix}"
    return f"{v:.1f}B"


def parse_byte_size(text: str | int | float) -> ByteSize:
    """Parse ``"512"``, ``"512B"``, ``"1.5KB"`` or ``"10 mb"`` into a ByteSize.

    Raises ValueError for anything else, including negative numbers.
    """
    if isinstance(text, (int, float)):
        if text < 0:
            raise ValueError(f"Byte size cannot be negative: {text}")
        return ByteSize(text)

    m = _SIZE_RE.match(text)
    if not m:
        raise ValueError(f"Invalid byte size: {text!r}")
    number, suffix = m.groups()
    return ByteSize(float(number) * _SUFFIXES[(suffix or "B").upper()])

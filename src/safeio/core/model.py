from __future__ import annotations
from dataclasses import dataclass

from .size import ByteSize


class LimitReachedError(IOError):
    """Raised when a source produces more bytes than the read limit allows.

    ``data`` holds the first ``limit`` bytes that were read before the read
    stopped.
    """

    message = "read limit reached"

    def __init__(self, limit: float, data: bytes = b"") -> None:
        self.limit = ByteSize(limit)
        self.data = data
        super().__init__(f"{self.message}: limit is {self.limit!s}")

    def __reduce__(self):
        return (type(self), (self.limit, self.data))


class InvalidLimitError(ValueError):
    """Raised when a read limit is negative or not a finite number."""
    pass


def is_limit_reached(exc: BaseException | None) -> bool:
    """True if ``exc`` or anything in its cause/context chain is a LimitReachedError."""
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, LimitReachedError):
            return True
        seen.add(id(exc))
        exc = exc.__cause__ or exc.__context__
    return False


@dataclass(slots=True)
class ReadResult:
    data: bytes
    error: BaseException | None
    limit: ByteSize

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def bytes_read(self) -> int:
        return len(self.data)

    @property
    def limit_reached(self) -> bool:
        return is_limit_reached(self.error)

"""
Error types.

```
                 (ShapeIOError)
                       ╷
          ┌────────────┴─────────────┐
          ╵                          ╵
  InvalidShapeError         InternalWriterError
```

Failures of the output sink are not wrapped: a writer lets the sink's ``OSError``
propagate unchanged.
"""

from dataclasses import dataclass
from typing import Any, TypeGuard


__docformat__ = "google"
__all__ = (
    "ShapeIOError",
    "InvalidShapeError",
    "InternalWriterError",
    "is_invalid_shape",
    "is_internal_error",
)


class ShapeIOError(Exception):
    """Base exception for shapes that could not be written."""


@dataclass(kw_only=True)
class InvalidShapeError(ShapeIOError, ValueError):
    """
    A writer was given something it cannot encode.

    This error is raised before any output is written.

    Attributes:
        shape: the rejected value, f.e. ``None``
        reason: why the value was rejected
    """

    shape: Any
    reason: str

    def __str__(self) -> str:
        return f"cannot write {self.shape!r}: {self.reason}"


@dataclass(kw_only=True)
class InternalWriterError(ShapeIOError):
    """
    Writing to an in-memory buffer failed.

    Such a buffer cannot fail, which means this is a bug rather than an
    environmental condition, and there is nothing worth retrying.

    Attributes:
        cause: the exception raised by the buffer
    """

    cause: OSError

    def __str__(self) -> str:
        return f"in-memory write failed: {self.cause}"


def is_invalid_shape(err: BaseException | None) -> TypeGuard[InvalidShapeError]:
    """``True`` if this is an ``InvalidShapeError``."""
    return isinstance(err, InvalidShapeError)


def is_internal_error(err: BaseException | None) -> TypeGuard[InternalWriterError]:
    """``True`` if this is an ``InternalWriterError``."""
    return isinstance(err, InternalWriterError)

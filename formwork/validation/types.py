"""
Result and error types for formwork validation.

Provides a minimal Result type (Ok/Err) and the structured error record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from ..errors import ValidationFailed

T = TypeVar("T")

Path = tuple[str | int, ...]


class ErrorKind(Enum):
    """Why a value was rejected."""

    TYPE_MISMATCH = "type_mismatch"
    SHAPE_MISMATCH = "shape_mismatch"
    MISSING_FIELD = "missing_field"
    NO_UNION_MEMBER_MATCHED = "no_union_member_matched"
    INTERSECT_MEMBER_FAILED = "intersect_member_failed"
    LITERAL_MISMATCH = "literal_mismatch"
    COERCION_FAILED = "coercion_failed"


def format_path(path: Path) -> str:
    """
    Render a path for humans.

    Examples:
        ()                      -> "<root>"
        ("user", "tags", 2)     -> "user.tags[2]"
        (0, "name")             -> "[0].name"
    """
    if not path:
        return "<root>"
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        elif out:
            out += f".{part}"
        else:
            out = str(part)
    return out


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    A single rejection.

    `path` locates the offending node from the root of the validated value.
    Aggregate failures (unions, intersections) keep the member failures that
    led to them in `causes`.
    """

    kind: ErrorKind
    message: str
    path: Path = ()
    causes: tuple[ValidationError, ...] = field(default=())

    def __str__(self) -> str:
        return f"{format_path(self.path)}: {self.message}"


ValidationErrors = list[ValidationError]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing the validated value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Failure result containing every error found, in document order."""

    errors: ValidationErrors

    @property
    def error(self) -> ValidationError:
        """The first failure in document order."""
        return self.errors[0]

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ValidationFailed(self.errors)


ValidationResult = Ok[Any] | Err

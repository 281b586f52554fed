"""
Leaf policies: how primitive and literal descriptors accept values.

The traversal in engine.py never looks at strict vs non-strict; it hands
every leaf to the active policy's `check`.
"""

from __future__ import annotations

import math
import re
from typing import Any

from ..schema.core import (
    BooleanType,
    Descriptor,
    FloatType,
    IDType,
    IntType,
    LiteralType,
    NumberType,
    StringType,
    describe,
)
from .types import Err, ErrorKind, Ok, Path, ValidationError, ValidationResult

# Plain decimal literal: -1, 1.5, .5, 1e3. No "nan", "inf" or underscores.
_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_TEXT = re.compile(r"[+-]?\d+")


def is_number(value: Any) -> bool:
    """int or finite float; bool is deliberately excluded."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _mismatch(expected: str, value: Any, path: Path) -> Err:
    return Err(
        [
            ValidationError(
                ErrorKind.TYPE_MISMATCH,
                f"Expected {expected}, got {_kind(value)}: {repr(value)[:50]}",
                path,
            )
        ]
    )


def _coercion_failed(expected: str, value: str, path: Path) -> Err:
    return Err(
        [
            ValidationError(
                ErrorKind.COERCION_FAILED,
                f"Cannot parse {value[:50]!r} as {expected}",
                path,
            )
        ]
    )


class LeafPolicy:
    """
    Strategy for leaf checks.

    One method per primitive kind. Subclasses override the kinds whose
    acceptance rules differ; `check` dispatches on the descriptor class.
    """

    name = "abstract"

    def check(self, descriptor: Descriptor, value: Any, path: Path = ()) -> ValidationResult:
        match descriptor:
            case NumberType():
                return self.number(value, path)
            case FloatType():
                return self.float(value, path)
            case IntType():
                return self.int(value, path)
            case StringType():
                return self.string(value, path)
            case BooleanType():
                return self.boolean(value, path)
            case IDType():
                return self.id(value, path)
            case LiteralType():
                return self.literal(descriptor, value, path)
        raise TypeError(f"{describe(descriptor)} is not a leaf descriptor")

    def number(self, value: Any, path: Path) -> ValidationResult:
        raise NotImplementedError

    def float(self, value: Any, path: Path) -> ValidationResult:
        return self.number(value, path)

    def int(self, value: Any, path: Path) -> ValidationResult:
        raise NotImplementedError

    def string(self, value: Any, path: Path) -> ValidationResult:
        if isinstance(value, str):
            return Ok(value)
        return _mismatch("string", value, path)

    def boolean(self, value: Any, path: Path) -> ValidationResult:
        raise NotImplementedError

    def id(self, value: Any, path: Path) -> ValidationResult:
        if isinstance(value, str) and value:
            return Ok(value)
        return _mismatch("non-empty string", value, path)

    def literal(self, descriptor: LiteralType, value: Any, path: Path) -> ValidationResult:
        expected = descriptor.value
        if _same_literal(expected, value):
            return Ok(value)
        return Err(
            [
                ValidationError(
                    ErrorKind.LITERAL_MISMATCH,
                    f"Expected {expected!r}, got {repr(value)[:50]}",
                    path,
                )
            ]
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


def _same_literal(expected: Any, value: Any) -> bool:
    if isinstance(expected, bool) or isinstance(value, bool):
        return type(expected) is type(value) and expected == value
    if isinstance(expected, str):
        return isinstance(value, str) and expected == value
    return is_number(value) and expected == value


class StrictPolicy(LeafPolicy):
    """Exact primitive typing. Nothing is coerced."""

    name = "strict"

    def number(self, value: Any, path: Path) -> ValidationResult:
        if is_number(value):
            return Ok(value)
        return _mismatch("number", value, path)

    def int(self, value: Any, path: Path) -> ValidationResult:
        if is_number(value) and (isinstance(value, int) or value.is_integer()):
            return Ok(value)
        return _mismatch("integer", value, path)

    def boolean(self, value: Any, path: Path) -> ValidationResult:
        if isinstance(value, bool):
            return Ok(value)
        return _mismatch("boolean", value, path)


class NonStrictPolicy(LeafPolicy):
    """
    Bounded coercion for loosely typed input such as query strings.

    Numbers may arrive as text, Int truncates toward zero, and the exact
    tokens "true"/"false" become booleans. String, ID and Literal behave as
    in StrictPolicy.
    """

    name = "non-strict"

    def number(self, value: Any, path: Path) -> ValidationResult:
        if is_number(value):
            return Ok(value)
        if isinstance(value, str):
            parsed = _parse_number(value)
            if parsed is None:
                return _coercion_failed("number", value, path)
            return Ok(parsed)
        return _mismatch("number", value, path)

    def int(self, value: Any, path: Path) -> ValidationResult:
        if is_number(value):
            return Ok(math.trunc(value))
        if isinstance(value, str):
            if _INTEGER_TEXT.fullmatch(value):
                try:
                    return Ok(int(value))
                except ValueError:
                    # Longer than sys.get_int_max_str_digits()
                    return _coercion_failed("integer", value, path)
            parsed = _parse_number(value)
            if parsed is None:
                return _coercion_failed("integer", value, path)
            return Ok(math.trunc(parsed))
        return _mismatch("integer", value, path)

    def boolean(self, value: Any, path: Path) -> ValidationResult:
        if isinstance(value, bool):
            return Ok(value)
        if value == "true":
            return Ok(True)
        if value == "false":
            return Ok(False)
        if isinstance(value, str):
            return _coercion_failed("boolean", value, path)
        return _mismatch("boolean", value, path)


def _parse_number(text: str) -> float | None:
    if not _NUMERIC_TEXT.fullmatch(text):
        return None
    parsed = float(text)
    return parsed if math.isfinite(parsed) else None


STRICT = StrictPolicy()
NON_STRICT = NonStrictPolicy()

_POLICIES: dict[str, LeafPolicy] = {
    STRICT.name: STRICT,
    NON_STRICT.name: NON_STRICT,
}


def get_policy(policy: str | LeafPolicy) -> LeafPolicy:
    """
    Look up a policy by name ("strict" or "non-strict").

    LeafPolicy instances pass through so callers can plug in their own.
    """
    if isinstance(policy, LeafPolicy):
        return policy
    try:
        return _POLICIES[policy]
    except KeyError:
        raise ValueError(
            f"Unknown leaf policy {policy!r}; expected one of {sorted(_POLICIES)}"
        ) from None

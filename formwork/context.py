"""
Context manager for validation configuration (strict vs non-strict).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Optional

from .schema.core import SchemaLike
from .validation.engine import create_validator
from .validation.policies import NON_STRICT, STRICT, LeafPolicy
from .validation.types import ValidationResult

# Context variable for strict mode
_strict_mode: ContextVar[bool] = ContextVar("strict_mode", default=True)


def is_strict() -> bool:
    """Check if strict mode is currently enabled."""
    return _strict_mode.get()


def current_policy(strict: Optional[bool] = None) -> LeafPolicy:
    """The leaf policy for `strict`, or for the current context when None."""
    if strict is None:
        strict = is_strict()
    return STRICT if strict else NON_STRICT


@contextmanager
def validation_context(*, strict: bool = True):
    """
    Context manager for validation configuration.

    Args:
        strict: If False, validate() and pipelines without an explicit policy
               coerce textual numbers and "true"/"false" tokens.

    Example:
        from formwork import Int, Struct, validate, validation_context

        Page = Struct({"page": Int})

        validate({"page": "2"}, Page)          # Err, strict by default

        with validation_context(strict=False):
            validate({"page": "2"}, Page)      # Ok({"page": 2})
    """
    token = _strict_mode.set(strict)
    try:
        yield
    finally:
        _strict_mode.reset(token)


def validate(value: Any, schema: SchemaLike) -> ValidationResult:
    """
    Validate a value with the policy selected by the current context.

    Usage:
        result = validate({"name": "Alice", "extra": 1}, {"name": str})
        result.value   # {"name": "Alice"}
    """
    return create_validator(schema, current_policy())(value)

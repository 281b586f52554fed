"""
Exceptions raised by formwork.

Invalid input data never raises; it is reported as an Err value. These
exceptions cover programmer mistakes and explicit unwrapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .validation.types import ValidationError


class SchemaDefinitionError(ValueError):
    """A descriptor was constructed from malformed arguments."""


class ValidationFailed(ValueError):
    """Raised when a failed validation result is unwrapped."""

    def __init__(self, errors: Sequence[ValidationError], stage: str | None = None):
        self.errors = list(errors)
        self.stage = stage
        lines = [str(e) for e in self.errors]
        prefix = f"{stage} validation failed" if stage else "Validation failed"
        super().__init__(f"{prefix}: {'; '.join(lines)}")


class PipelineExhausted(RuntimeError):
    """The last middleware called next() and no fallback was configured."""

"""
formwork validation - walk untyped values against schema descriptors.

Usage:
    from formwork.schema import Boolean, Int, Struct
    from formwork.validation import create_non_strict_validator, create_strict_validator

    Query = Struct({"page": Int, "archived": Boolean})

    create_strict_validator(Query)({"page": "2", "archived": "false"})      # Err
    create_non_strict_validator(Query)({"page": "2", "archived": "false"})  # Ok
"""

from .engine import (
    Validator,
    create_non_strict_validator,
    create_strict_validator,
    create_validator,
    walk,
)
from .policies import NON_STRICT, STRICT, LeafPolicy, NonStrictPolicy, StrictPolicy, get_policy
from .types import (
    Err,
    ErrorKind,
    Ok,
    Path,
    ValidationError,
    ValidationErrors,
    ValidationResult,
    format_path,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    "ErrorKind",
    "ValidationError",
    "ValidationErrors",
    "ValidationResult",
    "Path",
    "format_path",
    # Engine
    "Validator",
    "create_validator",
    "create_strict_validator",
    "create_non_strict_validator",
    "walk",
    # Policies
    "LeafPolicy",
    "StrictPolicy",
    "NonStrictPolicy",
    "STRICT",
    "NON_STRICT",
    "get_policy",
]

"""
The @handler decorator for schema-checked single-argument functions.
"""

from functools import wraps
from typing import Any, Callable, Optional

from .context import current_policy
from .errors import ValidationFailed
from .schema.core import SchemaLike, to_descriptor
from .validation.engine import create_validator
from .validation.types import Err


def handler(
    *,
    input: Optional[SchemaLike] = None,
    output: Optional[SchemaLike] = None,
    strict: Optional[bool] = None,
) -> Callable:
    """
    Decorator that validates a function's argument and return value.

    The decorated function receives the pruned input and its result is
    pruned against `output`. Either side may be omitted.

        @handler(input=Struct({"id": ID}), output=Struct({"name": String}))
        def load_user(req):
            return {"name": users[req["id"]], "internal": True}

        load_user({"id": "u1", "trace": "x"})  # {"name": ...}

    Args:
        strict: Leaf policy; None follows validation_context()

    Raises:
        ValidationFailed: When the argument or the return value is rejected.
    """
    input_d = to_descriptor(input) if input is not None else None
    output_d = to_descriptor(output) if output is not None else None

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(value: Any) -> Any:
            policy = current_policy(strict)

            if input_d is not None:
                checked = create_validator(input_d, policy)(value)
                if isinstance(checked, Err):
                    raise ValidationFailed(checked.errors, stage="input")
                value = checked.value

            result = func(value)

            if output_d is not None:
                produced = create_validator(output_d, policy)(result)
                if isinstance(produced, Err):
                    raise ValidationFailed(produced.errors, stage="output")
                result = produced.value

            return result

        return wrapper

    return decorator

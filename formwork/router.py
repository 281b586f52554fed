"""
RouterPipeline - a Pipeline whose input and output are schema checked.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from .context import current_policy
from .errors import ValidationFailed
from .pipeline import Middleware, Pipeline
from .schema.core import SchemaLike, to_descriptor
from .validation.engine import create_validator
from .validation.policies import LeafPolicy
from .validation.types import Err

logger = logging.getLogger(__name__)


class RouterPipeline(Pipeline):
    """
    Validates the input before the chain runs and the output after it.

    Middleware only ever sees the pruned, validated input. A rejected input
    or output short-circuits with ValidationFailed (stage "input" or
    "output").
    """

    def __init__(
        self,
        input: SchemaLike,
        output: SchemaLike,
        strict: Optional[bool] = None,
        middlewares: Optional[Iterable[Middleware]] = None,
        fallback: Optional[Callable[[Any], Any]] = None,
    ):
        """
        Args:
            input: Descriptor the incoming value must match
            output: Descriptor the chain's result must match
            strict: Leaf policy; None follows validation_context()
            middlewares: Initial middleware, run in order
            fallback: See Pipeline
        """
        super().__init__(middlewares, fallback)
        self.input = to_descriptor(input)
        self.output = to_descriptor(output)
        self.strict = strict

    @property
    def policy(self) -> LeafPolicy:
        return current_policy(self.strict)

    def _dispatch(self, value: Any, fallback: Optional[Callable[[Any], Any]]) -> Any:
        policy = self.policy

        checked = create_validator(self.input, policy)(value)
        if isinstance(checked, Err):
            logger.debug("Router input rejected: %s", checked.error)
            raise ValidationFailed(checked.errors, stage="input")

        result = super()._dispatch(checked.value, fallback)

        produced = create_validator(self.output, policy)(result)
        if isinstance(produced, Err):
            logger.debug("Router output rejected: %s", produced.error)
            raise ValidationFailed(produced.errors, stage="output")

        return produced.value


def create_router_pipeline(
    input: SchemaLike, output: SchemaLike, strict: Optional[bool] = None
) -> RouterPipeline:
    return RouterPipeline(input=input, output=output, strict=strict)

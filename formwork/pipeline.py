"""
Pipeline - an ordered chain of middleware.

Each middleware receives the current value and a `next` callable. Calling
`next()` hands the same value to the following middleware; `next(other)`
hands it `other`. Whatever the middleware returns is the pipeline's result
at that point.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from .errors import PipelineExhausted

Next = Callable[..., Any]
Middleware = Callable[[Any, Next], Any]


class Pipeline:
    def __init__(
        self,
        middlewares: Optional[Iterable[Middleware]] = None,
        fallback: Optional[Callable[[Any], Any]] = None,
    ):
        """
        Initialize a Pipeline.

        Args:
            middlewares: Initial middleware, run in order
            fallback: Called with the value when the last middleware calls
                next(); without one, PipelineExhausted is raised
        """
        self.middlewares: list[Middleware] = list(middlewares or [])
        self.fallback = fallback

    def add(self, *middlewares: Middleware) -> Pipeline:
        """Append middleware. Returns self so calls can be chained."""
        for middleware in middlewares:
            if not callable(middleware):
                raise TypeError(
                    f"Middleware must be callable, got {type(middleware).__name__}"
                )
            self.middlewares.append(middleware)
        return self

    def run(self, value: Any) -> Any:
        return self._dispatch(value, self.fallback)

    def middleware(self, value: Any, next: Next) -> Any:
        """Run this pipeline inside a parent; falls through to the parent's next."""
        return self._dispatch(value, next)

    def __call__(self, value: Any) -> Any:
        return self.run(value)

    def _dispatch(self, value: Any, fallback: Optional[Callable[[Any], Any]]) -> Any:
        middlewares = tuple(self.middlewares)

        def step(index: int, current: Any) -> Any:
            if index >= len(middlewares):
                if fallback is None:
                    raise PipelineExhausted(
                        f"All {len(middlewares)} middleware called next() without returning"
                    )
                return fallback(current)

            def next_(*args: Any) -> Any:
                return step(index + 1, args[0] if args else current)

            return middlewares[index](current, next_)

        return step(0, value)

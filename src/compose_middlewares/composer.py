"""Compose an ordered middleware stack into a single awaitable entry point."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import Any

from .errors import MiddlewareTypeError
from .middleware import Advance, Handler
from .run import Run

logger = logging.getLogger(__name__)


def _noop(context: Any, next: Advance) -> None:
    return None


def _accepts_context_and_next(fn: Any) -> bool:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins and some C callables have no introspectable signature.
        return True
    try:
        sig.bind(None, None)
    except TypeError:
        return False
    return True


class ComposedMiddleware:
    """Entry point returned by Composer.build.

    ``await composed(context, next=None)`` runs the stack once. The instance
    holds nothing but the captured stack, so it can be awaited any number of
    times, concurrently, or placed inside another stack.
    """

    def __init__(self, middlewares: tuple[Handler, ...]) -> None:
        self._middlewares = middlewares

    @property
    def middlewares(self) -> tuple[Handler, ...]:
        return self._middlewares

    async def __call__(self, context: Any, next: Handler | None = None) -> Any:
        if next is not None and not callable(next):
            raise MiddlewareTypeError("next must be callable")
        tail = next if next is not None else _noop
        run = Run(context, self._middlewares + (tail,))
        return await run.start()

    def __repr__(self) -> str:
        names = ", ".join(getattr(m, "__qualname__", type(m).__name__) for m in self._middlewares)
        return f"ComposedMiddleware([{names}])"


class Composer:
    """Validates middleware stacks and builds their entry points."""

    @staticmethod
    def validate(middlewares: Any) -> None:
        if not isinstance(middlewares, Sequence) or isinstance(middlewares, (str, bytes, bytearray)):
            raise MiddlewareTypeError("Middleware stack must be an array!")
        for fn in middlewares:
            if not callable(fn) or not _accepts_context_and_next(fn):
                raise MiddlewareTypeError("Middleware stack must be composed of functions!")

    @classmethod
    def build(cls, middlewares: Sequence[Handler] | None) -> ComposedMiddleware:
        cls.validate(middlewares)
        stack = tuple(middlewares)
        logger.debug("composed %d middleware", len(stack))
        return ComposedMiddleware(stack)


def compose(middlewares: Sequence[Handler] | None = None) -> ComposedMiddleware:
    """Shorthand for ``Composer.build``; a missing stack is rejected like any non-sequence."""
    return Composer.build(middlewares)

"""Middleware interface: (context, next) -> result, plain or awaitable."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Union

if TYPE_CHECKING:
    from .run import Step

# next() -> awaitable resolving to the downstream result
Advance = Callable[..., "Step"]

# (context, next) -> value | awaitable
Handler = Callable[[Any, Advance], Union[Any, Awaitable[Any]]]


class Middleware(ABC):
    """Base class for class-based middleware.

    Instances are callables with the handler signature, so they can sit in a
    stack next to plain functions and ``async def`` functions.
    """

    def __call__(self, context: Any, next: Advance) -> Any:
        return self.handle(context, next)

    @abstractmethod
    def handle(self, context: Any, next: Advance) -> Any:
        """Run this middleware; call ``next()`` at most once to continue downstream."""
        ...

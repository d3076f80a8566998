"""Errors raised by the composer itself. Handler exceptions are never wrapped."""

from __future__ import annotations


class ComposeError(Exception):
    """Base class for faults raised by compose_middlewares."""


class MiddlewareTypeError(ComposeError, TypeError):
    """Middleware stack (or the final continuation) has the wrong shape."""


class NextCalledTwiceError(ComposeError, RuntimeError):
    """A continuation was invoked more than once within the same run."""

    def __init__(self, position: int) -> None:
        super().__init__("next() should only be called once")
        self.position = position

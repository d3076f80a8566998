"""Recursive middleware composition: koa-style (context, next) stacks for asyncio."""

import logging

from .composer import ComposedMiddleware, Composer, compose
from .errors import ComposeError, MiddlewareTypeError, NextCalledTwiceError
from .middleware import Advance, Handler, Middleware
from .run import AdvanceState, Next, Run, Step

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "compose",
    "Composer",
    "ComposedMiddleware",
    "Middleware",
    "Handler",
    "Advance",
    "Next",
    "Step",
    "Run",
    "AdvanceState",
    "ComposeError",
    "MiddlewareTypeError",
    "NextCalledTwiceError",
]

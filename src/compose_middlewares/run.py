"""Per-invocation state of a composed middleware stack.

A Run is created for every call of a ComposedMiddleware. It owns the
once-guards for that call only: one AdvanceState per chain position, indexed
by the position of the ``next`` handed to the middleware at that position.
Nothing here is shared between runs.
"""

from __future__ import annotations

import inspect
import logging
import uuid
from enum import Enum
from typing import Any, Callable, Generator

from .config import trace_enabled
from .errors import NextCalledTwiceError

logger = logging.getLogger(__name__)


class AdvanceState(str, Enum):
    PENDING = "pending"
    INVOKED = "invoked"
    COMPLETED = "completed"
    FAULTED = "faulted"


class Step:
    """Awaitable returned by ``next()``.

    Wraps whatever the downstream middleware returned. Plain values resolve
    immediately; awaitables are awaited in place, so suspension order is
    exactly the order the middleware choose. An ``async def`` downstream does
    not start until the Step is first awaited. Once settled, the value (or
    exception) is cached and every later await returns (or raises) it again.
    """

    __slots__ = ("_result", "_on_settle", "_settled", "_value", "_error")

    def __init__(
        self,
        result: Any,
        on_settle: Callable[[AdvanceState], None] | None = None,
    ) -> None:
        self._result = result
        self._on_settle = on_settle
        self._settled = False
        self._value: Any = None
        self._error: BaseException | None = None

    def __await__(self) -> Generator[Any, None, Any]:
        if self._settled:
            if self._error is not None:
                raise self._error
            return self._value
        result = self._result
        if not inspect.isawaitable(result):
            return result
        iterator = result.__await__() if hasattr(result, "__await__") else result
        try:
            value = yield from iterator
        except BaseException as exc:
            self._settled, self._error = True, exc
            self._settle(AdvanceState.FAULTED)
            raise
        self._settled, self._value = True, value
        self._settle(AdvanceState.COMPLETED)
        return value

    def _settle(self, state: AdvanceState) -> None:
        if self._on_settle is not None:
            self._on_settle(state)

    def __repr__(self) -> str:
        return f"Step({self._result!r})"


class Next:
    """Single-use continuation bound to one chain position of one run.

    Extra positional arguments are ignored, so a Next can itself be passed as
    the final continuation of a nested stack.
    """

    __slots__ = ("_run", "position")

    def __init__(self, run: Run, position: int) -> None:
        self._run = run
        self.position = position

    def __call__(self, *_args: Any) -> Step:
        return self._run.advance(self.position)

    def __repr__(self) -> str:
        return f"<Next position={self.position} run={self._run.run_id}>"


class Run:
    """One invocation of a composed stack: shared context plus the once-guards."""

    def __init__(self, context: Any, chain: tuple[Callable[..., Any], ...]) -> None:
        self.context = context
        self.run_id = uuid.uuid4().hex[:12]
        self._chain = chain
        self.states: list[AdvanceState] = [AdvanceState.PENDING] * len(chain)
        self._trace = trace_enabled()

    def start(self) -> Step:
        """Invoke the first middleware; the entry call itself is not guarded."""
        return Step(self._dispatch(0))

    def advance(self, position: int) -> Step:
        if self.states[position] is not AdvanceState.PENDING:
            raise NextCalledTwiceError(position)
        self.states[position] = AdvanceState.INVOKED

        try:
            result = self._dispatch(position + 1)
        except BaseException:
            self.states[position] = AdvanceState.FAULTED
            raise

        def settle(state: AdvanceState) -> None:
            self.states[position] = state

        if not inspect.isawaitable(result):
            settle(AdvanceState.COMPLETED)
        return Step(result, settle)

    def _dispatch(self, index: int) -> Any:
        if index >= len(self._chain):
            return None
        fn = self._chain[index]
        if self._trace:
            name = getattr(fn, "__qualname__", type(fn).__name__)
            logger.debug(
                "dispatch %s at position %d",
                name,
                index,
                extra={"run_id": self.run_id, "position": index, "middleware": name},
            )
        return fn(self.context, Next(self, index))

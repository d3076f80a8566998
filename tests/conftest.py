import asyncio
import logging

import pytest


async def wait(ms: int = 1) -> None:
    await asyncio.sleep(ms / 1000)


@pytest.fixture()
def ordered_mw():
    """Factory: middleware pushing `before`, awaiting next(), then pushing `after`."""

    def make(before, after):
        async def mw(ctx, next):
            ctx["arr"].append(before)
            await wait(1)
            await next()
            await wait(1)
            ctx["arr"].append(after)

        return mw

    return make


@pytest.fixture(autouse=True)
def _isolate_env_and_loggers(monkeypatch):
    # Ensure deterministic tests across runs.
    monkeypatch.delenv("COMPOSE_MIDDLEWARES_TRACE", raising=False)
    logger = logging.getLogger("compose_middlewares")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)

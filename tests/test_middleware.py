import pytest

from compose_middlewares import Middleware, compose


class Recorder(Middleware):
    def __init__(self, name: str) -> None:
        self.name = name

    async def handle(self, context, next):
        context["arr"].append(f"{self.name}:before")
        result = await next()
        context["arr"].append(f"{self.name}:after")
        return result


class Tally(Middleware):
    def handle(self, context, next):
        context["count"] = context.get("count", 0) + 1
        return next()


def test_middleware_is_abstract():
    with pytest.raises(TypeError):
        Middleware()


async def test_class_based_middleware_composes_with_functions():
    ctx = {"arr": []}

    async def plain(context, next):
        context["arr"].append("plain")
        return await next()

    result = await compose([Recorder("a"), plain, Recorder("b")])(ctx, lambda c, n: "end")

    assert result == "end"
    assert ctx["arr"] == ["a:before", "plain", "b:before", "b:after", "a:after"]


async def test_sync_class_based_middleware():
    ctx = {}

    await compose([Tally(), Tally(), Tally()])(ctx)

    assert ctx["count"] == 3

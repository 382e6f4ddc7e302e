"""Tests for routeguard._internal.invoke — sync and async handlers."""

from routeguard._internal.invoke import invoke


async def test_sync_handler() -> None:
    def handler(value):
        return value * 2

    assert await invoke(handler, 21) == 42


async def test_async_handler() -> None:
    async def handler(value):
        return value * 2

    assert await invoke(handler, 21) == 42


async def test_kwargs_forwarded() -> None:
    def handler(*, name):
        return f"hello {name}"

    assert await invoke(handler, name="thing") == "hello thing"

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest
from aiohttp import web
from aiohttp import test_utils

from clanstats.backends import HttpStorage
from clanstats.utils import fetcher
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import StorageError


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


class BlobServer:
    """Serve one blob, optionally answering 429 a number of times first."""

    def __init__(self, throttle: int = 0, put_status: int = 201) -> None:
        self.content: bytes | None = None
        self.throttle = throttle
        self.put_status = put_status
        self.requests: list[str] = []
        self.app = web.Application()
        self.app.router.add_get("/storage.json", self.handle_get)
        self.app.router.add_put("/storage.json", self.handle_put)

    async def handle_get(self, request: web.Request) -> web.Response:
        self.requests.append("GET")
        if self.throttle:
            self.throttle -= 1
            return web.Response(status=429)
        if self.content is None:
            return web.Response(status=404)
        return web.Response(body=self.content)

    async def handle_put(self, request: web.Request) -> web.Response:
        self.requests.append("PUT")
        if self.put_status < 300:
            self.content = await request.read()
        return web.Response(status=self.put_status)


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_sleep(delay: float) -> None:
        return None

    monkeypatch.setattr(fetcher, "asyncio", SimpleNamespace(sleep=fake_sleep))


def _with_server(blob: BlobServer, scenario) -> Any:
    async def wrapper() -> Any:
        async with test_utils.TestServer(blob.app) as server:
            return await scenario(str(server.make_url("/storage.json")))

    return _run(wrapper())


def test_write_then_load() -> None:
    blob = BlobServer()

    async def scenario(url: str) -> bytes:
        backend = HttpStorage(url)
        await backend.write(b"blob")
        return await backend.load()

    assert _with_server(blob, scenario) == b"blob"
    assert blob.content == b"blob"


def test_identical_content_skips_put() -> None:
    blob = BlobServer()

    async def scenario(url: str) -> None:
        backend = HttpStorage(url)
        await backend.write(b"blob")
        await backend.write(b"blob")

    _with_server(blob, scenario)

    assert blob.requests == ["GET", "PUT", "GET"]


def test_load_missing_blob() -> None:
    async def scenario(url: str) -> bytes:
        return await HttpStorage(url).load()

    with pytest.raises(StorageError) as excinfo:
        _with_server(BlobServer(), scenario)
    assert excinfo.value.kind == ErrorKind.NOT_FOUND


def test_throttled_requests_are_retried() -> None:
    blob = BlobServer(throttle=2)
    blob.content = b"blob"

    async def scenario(url: str) -> bytes:
        return await HttpStorage(url).load()

    assert _with_server(blob, scenario) == b"blob"
    assert blob.requests == ["GET", "GET", "GET"]


def test_retries_are_bounded() -> None:
    blob = BlobServer(throttle=10)

    async def scenario(url: str) -> bytes:
        return await HttpStorage(url, max_retries=3).load()

    with pytest.raises(StorageError) as excinfo:
        _with_server(blob, scenario)
    assert excinfo.value.kind == ErrorKind.BACKEND_UNREACHABLE
    assert blob.requests == ["GET", "GET", "GET"]


def test_rejected_put_fails() -> None:
    async def scenario(url: str) -> None:
        await HttpStorage(url).write(b"blob")

    with pytest.raises(StorageError) as excinfo:
        _with_server(BlobServer(put_status=403), scenario)
    assert excinfo.value.kind == ErrorKind.BACKEND_UNREACHABLE


def test_unreachable_server() -> None:
    async def scenario() -> bytes:
        return await HttpStorage("http://127.0.0.1:9/storage.json", timeout=2).load()

    with pytest.raises(StorageError) as excinfo:
        _run(scenario())
    assert excinfo.value.kind == ErrorKind.BACKEND_UNREACHABLE

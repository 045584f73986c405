# File: tests/conftest.py
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List

import pytest
from aiohttp import web

_ELAPSED = re.compile(r"\(\d+ms\)")


class RecordingHost:
    """Host that keeps both output channels in memory."""

    def __init__(self) -> None:
        self.logs: List[str] = []
        self.errors: List[str] = []

    def log(self, message: str) -> None:
        self.logs.append(_ELAPSED.sub("(00ms)", message))

    def error(self, message: str) -> None:
        self.errors.append(_ELAPSED.sub("(00ms)", message))


@pytest.fixture()
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture()
def serve(unused_tcp_port_factory) -> Callable[[web.Application], AsyncIterator[str]]:
    """
    Return an async context manager that runs *app* on a free port
    and yields its base URL.
    """

    @asynccontextmanager
    async def _serve(app: web.Application) -> AsyncIterator[str]:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        try:
            yield f"http://127.0.0.1:{port}"
        finally:
            await runner.cleanup()

    return _serve


@pytest.fixture()
def closed_port_url(unused_tcp_port_factory) -> str:
    """URL of a port nothing listens on."""
    return f"http://127.0.0.1:{unused_tcp_port_factory()}"

"""
tests/conftest.py – Shared fixtures.

``exchange`` starts an in-process aiohttp server that plays the exchange:
tests register (method, path) → JSON body mocks and afterwards inspect the
requests it received, including the raw query string that was signed.

The ``--integration`` flag gates live tests in test_integration.py.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from mbx_sdk import Config, Credentials, MBXClient

MOCKS = Path(__file__).parent / "mocks"

API_KEY    = "test-api-key"
SECRET_KEY = "test-secret-key"
RECV_WINDOW = 1234


# ---------------------------------------------------------------------------
# pytest plugin: --integration flag + skip logic
# ---------------------------------------------------------------------------

def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests against the testnet",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--integration"):
        return
    skip_integration = pytest.mark.skip(reason="pass --integration to run against testnet")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# ---------------------------------------------------------------------------
# Mock exchange
# ---------------------------------------------------------------------------

def load_mock(relative: str) -> str:
    return (MOCKS / relative).read_text()


@dataclass
class RecordedRequest:
    method:  str
    path:    str
    query:   str
    headers: Mapping[str, str]
    body:    bytes


@dataclass
class _Mock:
    body:    Union[str, bytes]
    status:  int
    delay:   float = 0.0
    hits:    int = 0


@dataclass
class MockExchange:
    url:      str = ""
    requests: list[RecordedRequest] = field(default_factory=list)
    _mocks:   dict[tuple[str, str], _Mock] = field(default_factory=dict)

    def mock(
        self,
        method: str,
        path: str,
        *,
        fixture: Optional[str] = None,
        body: Any = None,
        status: int = 200,
        delay: float = 0.0,
    ) -> _Mock:
        if fixture is not None:
            text = load_mock(fixture)
        elif isinstance(body, (str, bytes)):
            text = body
        else:
            text = json.dumps(body if body is not None else {})
        entry = _Mock(body=text, status=status, delay=delay)
        self._mocks[(method.upper(), path)] = entry
        return entry

    @property
    def last(self) -> RecordedRequest:
        assert self.requests, "no request reached the mock exchange"
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(RecordedRequest(
            method=request.method,
            path=request.path,
            query=request.rel_url.raw_query_string,
            headers=request.headers.copy(),
            body=await request.read(),
        ))
        entry = self._mocks.get((request.method, request.path))
        if entry is None:
            return web.json_response({"code": -1000, "msg": "no mock registered"}, status=404)
        entry.hits += 1
        if entry.delay:
            await asyncio.sleep(entry.delay)
        if isinstance(entry.body, bytes):
            return web.Response(body=entry.body, status=entry.status, content_type="text/html", charset="utf-8")
        return web.Response(
            text=entry.body,
            status=entry.status,
            content_type="application/json",
            charset="utf-8",
        )


@pytest_asyncio.fixture
async def exchange():
    mock = MockExchange()
    app  = web.Application()
    app.router.add_route("*", "/{tail:.*}", mock.handle)
    server = TestServer(app)
    await server.start_server()
    mock.url = f"http://{server.host}:{server.port}"
    try:
        yield mock
    finally:
        await server.close()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key=API_KEY, secret_key=SECRET_KEY)


@pytest.fixture
def config(exchange: MockExchange) -> Config:
    return (
        Config()
        .with_spot_endpoint(exchange.url)
        .with_futures_endpoint(exchange.url)
        .with_recv_window(RECV_WINDOW)
    )


@pytest_asyncio.fixture
async def client(config: Config):
    async with MBXClient(api_key=API_KEY, secret_key=SECRET_KEY, config=config) as c:
        yield c

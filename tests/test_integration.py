"""
tests/test_integration.py – Integration smoke tests against the futures testnet.

These tests make real network calls.  Public-endpoint tests need no
credentials; account tests need a testnet API key + secret.  Everything is
skipped unless pytest runs with the --integration flag (see conftest.py).

HOW TO RUN
----------
    export MBX_API_KEY="your_testnet_api_key"
    export MBX_SECRET_KEY="your_testnet_secret"

    pytest tests/test_integration.py -v --integration

WHAT THESE TESTS VERIFY
-----------------------
  1. Connectivity  – ping / server time on spot and futures testnet
  2. Symbols       – BTCUSDT is listed in futures exchange info
  3. Signed GET    – balance and position risk decode
  4. Exchange err  – an unknown symbol is rejected with a negative code
  5. Listen key    – a user data stream can be opened, kept alive and closed

Each test is independent: failures in earlier tests don't cascade.
"""

from __future__ import annotations

import os
import time

import pytest
import pytest_asyncio

from mbx_sdk import (
    Config,
    ExchangeError,
    MBXClient,
    MBXEnv,
    NotFoundError,
)

API_KEY    = os.environ.get("MBX_API_KEY",    "")
SECRET_KEY = os.environ.get("MBX_SECRET_KEY", "")

_CREDS_PRESENT = bool(API_KEY and SECRET_KEY)

needs_creds = pytest.mark.skipif(not _CREDS_PRESENT, reason="MBX testnet credentials not set in environment")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client():
    """Fresh MBXClient against testnet per test."""
    async with MBXClient(api_key=API_KEY, secret_key=SECRET_KEY, config=Config.for_env(MBXEnv.TESTNET)) as c:
        yield c


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------

@pytest.mark.integration
@pytest.mark.asyncio
async def test_ping(client: MBXClient) -> None:
    assert await client.futures.ping() == "pong"
    assert await client.spot.ping() == "pong"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_server_time_close_to_local_clock(client: MBXClient) -> None:
    server = await client.futures.get_server_time()
    assert abs(server.server_time - int(time.time() * 1000)) < 60_000


@pytest.mark.integration
@pytest.mark.asyncio
async def test_symbol_lookup(client: MBXClient) -> None:
    symbol = await client.futures.get_symbol_info("btcusdt")
    assert symbol.symbol == "BTCUSDT"
    assert symbol.quote_asset == "USDT"

    with pytest.raises(NotFoundError):
        await client.futures.get_symbol_info("NOTAREALSYMBOL")


# ---------------------------------------------------------------------------
# Signed / key-only endpoints
# ---------------------------------------------------------------------------

@pytest.mark.integration
@needs_creds
@pytest.mark.asyncio
async def test_account_balance(client: MBXClient) -> None:
    balances = await client.futures_account.account_balance()
    assert balances, "Balance list is empty"
    assert all(b.asset for b in balances)


@pytest.mark.integration
@needs_creds
@pytest.mark.asyncio
async def test_position_information(client: MBXClient) -> None:
    positions = await client.futures_account.position_information()
    assert isinstance(positions, list)


@pytest.mark.integration
@needs_creds
@pytest.mark.asyncio
async def test_unknown_symbol_is_exchange_error(client: MBXClient) -> None:
    with pytest.raises(ExchangeError) as excinfo:
        await client.futures_account.get_all_open_orders("NOTAREALSYMBOL")
    assert excinfo.value.code < 0


@pytest.mark.integration
@needs_creds
@pytest.mark.asyncio
async def test_user_data_stream_lifecycle(client: MBXClient) -> None:
    stream = await client.futures_account.start_user_data_stream()
    assert stream.listen_key
    await client.futures_account.keep_alive_user_data_stream(stream.listen_key)
    await client.futures_account.close_user_data_stream(stream.listen_key)

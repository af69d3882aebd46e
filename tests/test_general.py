"""
tests/test_general.py – Spot / futures market-data wrappers against a mock exchange.

Verifies that public endpoints go out unsigned and without the API key
header, that exchange info decodes, and that symbol lookup is
case-insensitive with NotFoundError for unlisted symbols.
"""

from __future__ import annotations

import pytest

from mbx_sdk import ExchangeError, MBXClient, NotFoundError, ServerTime
from mbx_sdk.auth import API_KEY_HEADER
from mbx_sdk.general import find_symbol
from mbx_sdk.types import ExchangeInformation

from conftest import MockExchange, load_mock


@pytest.mark.asyncio
async def test_futures_ping(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/fapi/v1/ping", body={})

    assert await client.futures.ping() == "pong"

    request = exchange.last
    assert request.path == "/fapi/v1/ping"
    assert request.query == ""
    assert API_KEY_HEADER not in request.headers


@pytest.mark.asyncio
async def test_spot_ping(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/api/v3/ping", body={})

    assert await client.spot.ping() == "pong"
    assert exchange.last.path == "/api/v3/ping"


@pytest.mark.asyncio
async def test_futures_server_time(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/fapi/v1/time", fixture="futures/general/server_time.json")

    assert await client.futures.get_server_time() == ServerTime(server_time=1499827319559)


@pytest.mark.asyncio
async def test_spot_server_time(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/api/v3/time", body={"serverTime": 1})

    assert (await client.spot.get_server_time()).server_time == 1


@pytest.mark.asyncio
async def test_futures_exchange_info(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/fapi/v1/exchangeInfo", fixture="futures/general/exchange_info.json")

    info = await client.futures.exchange_info()

    assert info.timezone == "UTC"
    assert [s.symbol for s in info.symbols] == ["BTCUSDT", "LTCUSDT"]
    assert info.rate_limits[0].limit == 2400
    assert info.symbols[0].contract_type == "PERPETUAL"
    assert info.symbols[0].maint_margin_percent == pytest.approx(2.5)


@pytest.mark.asyncio
async def test_get_symbol_info_case_insensitive(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/fapi/v1/exchangeInfo", fixture="futures/general/exchange_info.json")

    symbol = await client.futures.get_symbol_info("ltcusdt")

    assert symbol.symbol == "LTCUSDT"
    assert symbol.base_asset == "LTC"


@pytest.mark.asyncio
async def test_get_symbol_info_not_found(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/fapi/v1/exchangeInfo", fixture="futures/general/exchange_info.json")

    with pytest.raises(NotFoundError, match="DOGEUSDT"):
        await client.futures.get_symbol_info("DOGEUSDT")


@pytest.mark.asyncio
async def test_spot_get_symbol_info(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock("GET", "/api/v3/exchangeInfo", fixture="spot/exchange_info.json")

    symbol = await client.spot.get_symbol_info("EthBtc")

    assert symbol.symbol == "ETHBTC"
    assert symbol.quote_asset == "BTC"
    assert symbol.contract_type is None


@pytest.mark.asyncio
async def test_get_symbol_info_propagates_exchange_error(exchange: MockExchange, client: MBXClient) -> None:
    exchange.mock(
        "GET", "/fapi/v1/exchangeInfo",
        body={"code": -1003, "msg": "Too many requests."},
        status=429,
    )

    with pytest.raises(ExchangeError) as excinfo:
        await client.futures.get_symbol_info("BTCUSDT")
    assert excinfo.value.code == -1003


class TestFindSymbol:
    def test_scan(self) -> None:
        info = ExchangeInformation.model_validate_json(load_mock("futures/general/exchange_info.json"))
        assert find_symbol(info, "btcusdt").symbol == "BTCUSDT"

    def test_empty_listing(self) -> None:
        info = ExchangeInformation(timezone="UTC", server_time=0)
        with pytest.raises(NotFoundError):
            find_symbol(info, "BTCUSDT")

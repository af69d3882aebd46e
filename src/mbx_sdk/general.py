"""
general.py – Market-data wrappers (connectivity, server time, exchange rules).

SpotGeneral and FuturesGeneral expose the same four operations against
their own market's endpoints:

    ping()                → "pong"
    get_server_time()     → ServerTime
    exchange_info()       → ExchangeInformation
    get_symbol_info(name) → Symbol, case-insensitive; NotFoundError if unlisted
"""

from __future__ import annotations

from .api import API
from .errors import NotFoundError
from .rest import AsyncRestClient
from .types import Empty, ExchangeInformation, ServerTime, Symbol


def find_symbol(info: ExchangeInformation, symbol: str) -> Symbol:
    """Linear scan of the listed symbols for a case-insensitive match."""
    wanted = symbol.upper()
    for item in info.symbols:
        if item.symbol.upper() == wanted:
            return item
    raise NotFoundError(f"Symbol {symbol!r} not found")


class _General:
    _PING:          API
    _TIME:          API
    _EXCHANGE_INFO: API

    def __init__(self, client: AsyncRestClient) -> None:
        self._client = client

    async def ping(self) -> str:
        """Test connectivity."""
        await self._client.call(self._PING, model=Empty)
        return "pong"

    async def get_server_time(self) -> ServerTime:
        return await self._client.call(self._TIME, model=ServerTime)

    async def exchange_info(self) -> ExchangeInformation:
        """Current trading rules and symbol information."""
        return await self._client.call(self._EXCHANGE_INFO, model=ExchangeInformation)

    async def get_symbol_info(self, symbol: str) -> Symbol:
        return find_symbol(await self.exchange_info(), symbol)


class SpotGeneral(_General):
    _PING          = API.SPOT_PING
    _TIME          = API.SPOT_TIME
    _EXCHANGE_INFO = API.SPOT_EXCHANGE_INFO


class FuturesGeneral(_General):
    _PING          = API.FUTURES_PING
    _TIME          = API.FUTURES_TIME
    _EXCHANGE_INFO = API.FUTURES_EXCHANGE_INFO

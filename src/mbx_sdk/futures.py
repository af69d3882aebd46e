"""
futures.py – USDⓈ-M futures trading and account wrappers.

Each method maps typed arguments to a ParameterSet, dispatches it through
the shared AsyncRestClient and returns a typed model.  Nothing is cached
between calls.

Boolean conventions differ per parameter on this API: order flags
(``closePosition``, ``reduceOnly``, ``priceProtect``) are sent as
``TRUE``/``FALSE`` while ``dualSidePosition`` is sent as ``true``/``false``.

Usage
-----
    account = FuturesAccount(rest)
    await account.change_initial_leverage("LTCUSDT", 2)
    tx = await account.stop_market_close_buy("SRMUSDT", 10.5)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, model_validator

from .api import API
from .encoding import BoolStyle, ParameterSet
from .rest import AsyncRestClient
from .types import (
    AccountBalance,
    ChangeLeverageResponse,
    Empty,
    Income,
    IncomeType,
    MarginType,
    OrderSide,
    OrderType,
    PositionRisk,
    PositionSide,
    TimeInForce,
    Transaction,
    UserDataStream,
    WorkingType,
)

_UPPER = BoolStyle.UPPER

_NEEDS_PRICE      = {OrderType.LIMIT, OrderType.STOP, OrderType.TAKE_PROFIT}
_NEEDS_STOP_PRICE = {OrderType.STOP, OrderType.TAKE_PROFIT, OrderType.STOP_MARKET, OrderType.TAKE_PROFIT_MARKET}
_CLOSABLE         = {OrderType.STOP_MARKET, OrderType.TAKE_PROFIT_MARKET}


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class CustomOrderRequest(BaseModel):
    """
    A fully specified futures order.

    Validated on construction so inconsistent combinations fail before
    any network I/O:
      - LIMIT / STOP / TAKE_PROFIT need ``price`` and ``qty``
      - STOP* / TAKE_PROFIT* need ``stop_price``
      - STOP_MARKET / TAKE_PROFIT_MARKET need ``qty`` or ``close_position``
      - TRAILING_STOP_MARKET needs ``callback_rate``
      - MARKET needs ``qty``
      - ``close_position`` cannot be combined with ``qty`` or ``reduce_only``
    """
    symbol:              str
    side:                OrderSide
    order_type:          OrderType
    position_side:       Optional[PositionSide] = None
    time_in_force:       Optional[TimeInForce]  = None
    qty:                 Optional[float]        = None
    reduce_only:         Optional[bool]         = None
    price:               Optional[float]        = None
    stop_price:          Optional[float]        = None
    close_position:      Optional[bool]         = None
    activation_price:    Optional[float]        = None
    callback_rate:       Optional[float]        = None
    working_type:        Optional[WorkingType]  = None
    price_protect:       Optional[bool]         = None
    new_client_order_id: Optional[str]          = None

    @model_validator(mode="after")
    def validate_combination(self) -> "CustomOrderRequest":
        kind = self.order_type
        if not self.symbol:
            raise ValueError("symbol must be non-empty")
        if kind in _NEEDS_PRICE and (self.price is None or self.qty is None):
            raise ValueError(f"{kind.value} orders require price and qty")
        if kind in _NEEDS_STOP_PRICE and self.stop_price is None:
            raise ValueError(f"{kind.value} orders require stop_price")
        if kind in _CLOSABLE and self.qty is None and not self.close_position:
            raise ValueError(f"{kind.value} orders require qty or close_position")
        if kind is OrderType.TRAILING_STOP_MARKET and self.callback_rate is None:
            raise ValueError("TRAILING_STOP_MARKET orders require callback_rate")
        if kind is OrderType.MARKET and self.qty is None:
            raise ValueError("MARKET orders require qty")
        if self.close_position:
            if kind not in _CLOSABLE:
                raise ValueError("close_position is only valid for STOP_MARKET / TAKE_PROFIT_MARKET")
            if self.qty is not None or self.reduce_only:
                raise ValueError("close_position cannot be combined with qty or reduce_only")
        for name in ("qty", "price", "stop_price", "activation_price", "callback_rate"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        return self


class IncomeRequest(BaseModel):
    """Filters for the income history endpoint; all optional."""
    symbol:      Optional[str]        = None
    income_type: Optional[IncomeType] = None
    start_time:  Optional[int]        = None
    end_time:    Optional[int]        = None
    limit:       Optional[int]        = None

    @model_validator(mode="after")
    def validate_window(self) -> "IncomeRequest":
        if self.start_time is not None and self.end_time is not None and self.start_time > self.end_time:
            raise ValueError("start_time must not be after end_time")
        if self.limit is not None and not (1 <= self.limit <= 1000):
            raise ValueError(f"limit must be between 1 and 1000, got {self.limit}")
        return self


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _order_params(order: CustomOrderRequest) -> ParameterSet:
    """Wire parameters for POST /fapi/v1/order."""
    return (
        ParameterSet()
        .add("symbol",           order.symbol)
        .add("side",             order.side)
        .add("type",             order.order_type)
        .add("positionSide",     order.position_side)
        .add("timeInForce",      order.time_in_force)
        .add("quantity",         order.qty)
        .add("reduceOnly",       order.reduce_only, bool_style=_UPPER)
        .add("price",            order.price)
        .add("stopPrice",        order.stop_price)
        .add("closePosition",    order.close_position, bool_style=_UPPER)
        .add("activationPrice",  order.activation_price)
        .add("callbackRate",     order.callback_rate)
        .add("workingType",      order.working_type)
        .add("priceProtect",     order.price_protect, bool_style=_UPPER)
        .add("newClientOrderId", order.new_client_order_id)
    )


def _income_params(request: IncomeRequest) -> ParameterSet:
    return (
        ParameterSet()
        .add("symbol",     request.symbol)
        .add("incomeType", request.income_type)
        .add("startTime",  request.start_time)
        .add("endTime",    request.end_time)
        .add("limit",      request.limit)
    )


# ---------------------------------------------------------------------------
# Account wrapper
# ---------------------------------------------------------------------------

class FuturesAccount:
    """Signed futures trading / account operations over a shared AsyncRestClient."""

    def __init__(self, client: AsyncRestClient) -> None:
        self._client = client

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def custom_order(self, order: CustomOrderRequest) -> Transaction:
        return await self._client.call(API.FUTURES_ORDER, _order_params(order), Transaction)

    async def limit_buy(
        self,
        symbol: str,
        qty: float,
        price: float,
        time_in_force: TimeInForce = TimeInForce.GTC,
    ) -> Transaction:
        return await self.custom_order(CustomOrderRequest(
            symbol=symbol, side=OrderSide.BUY, order_type=OrderType.LIMIT,
            qty=qty, price=price, time_in_force=time_in_force,
        ))

    async def limit_sell(
        self,
        symbol: str,
        qty: float,
        price: float,
        time_in_force: TimeInForce = TimeInForce.GTC,
    ) -> Transaction:
        return await self.custom_order(CustomOrderRequest(
            symbol=symbol, side=OrderSide.SELL, order_type=OrderType.LIMIT,
            qty=qty, price=price, time_in_force=time_in_force,
        ))

    async def market_buy(self, symbol: str, qty: float) -> Transaction:
        return await self.custom_order(CustomOrderRequest(
            symbol=symbol, side=OrderSide.BUY, order_type=OrderType.MARKET, qty=qty,
        ))

    async def market_sell(self, symbol: str, qty: float) -> Transaction:
        return await self.custom_order(CustomOrderRequest(
            symbol=symbol, side=OrderSide.SELL, order_type=OrderType.MARKET, qty=qty,
        ))

    async def stop_market_close_buy(self, symbol: str, stop_price: float) -> Transaction:
        """Stop-market order that closes the whole short position once triggered."""
        return await self.custom_order(CustomOrderRequest(
            symbol=symbol, side=OrderSide.BUY, order_type=OrderType.STOP_MARKET,
            stop_price=stop_price, close_position=True,
        ))

    async def stop_market_close_sell(self, symbol: str, stop_price: float) -> Transaction:
        """Stop-market order that closes the whole long position once triggered."""
        return await self.custom_order(CustomOrderRequest(
            symbol=symbol, side=OrderSide.SELL, order_type=OrderType.STOP_MARKET,
            stop_price=stop_price, close_position=True,
        ))

    async def cancel_order(self, symbol: str, order_id: int) -> Transaction:
        params = ParameterSet().add("symbol", symbol).add("orderId", order_id)
        return await self._client.call(API.FUTURES_CANCEL_ORDER, params, Transaction)

    async def cancel_order_with_client_id(self, symbol: str, client_order_id: str) -> Transaction:
        params = ParameterSet().add("symbol", symbol).add("origClientOrderId", client_order_id)
        return await self._client.call(API.FUTURES_CANCEL_ORDER, params, Transaction)

    async def get_all_open_orders(self, symbol: Optional[str] = None) -> list[Transaction]:
        params = ParameterSet().add("symbol", symbol)
        return await self._client.call(API.FUTURES_OPEN_ORDERS, params, list[Transaction])

    async def cancel_all_open_orders(self, symbol: str) -> None:
        await self._client.call(API.FUTURES_ALL_OPEN_ORDERS, ParameterSet().add("symbol", symbol), Empty)

    # ------------------------------------------------------------------
    # Leverage / margin / position mode
    # ------------------------------------------------------------------

    async def change_initial_leverage(self, symbol: str, leverage: int) -> ChangeLeverageResponse:
        if not (1 <= leverage <= 125):
            raise ValueError(f"leverage must be between 1 and 125, got {leverage}")
        params = ParameterSet().add("symbol", symbol).add("leverage", leverage)
        return await self._client.call(API.FUTURES_CHANGE_LEVERAGE, params, ChangeLeverageResponse)

    async def change_margin_type(self, symbol: str, isolated: bool) -> None:
        margin_type = MarginType.ISOLATED if isolated else MarginType.CROSSED
        params = ParameterSet().add("symbol", symbol).add("marginType", margin_type)
        await self._client.call(API.FUTURES_MARGIN_TYPE, params, Empty)

    async def change_position_margin(self, symbol: str, amount: float, is_adding: bool) -> None:
        """Add (type=1) or reduce (type=2) isolated margin on a position."""
        if amount <= 0:
            raise ValueError(f"amount must be positive, got {amount}")
        params = (
            ParameterSet()
            .add("symbol", symbol)
            .add("amount", amount)
            .add("type", 1 if is_adding else 2)
        )
        await self._client.call(API.FUTURES_POSITION_MARGIN, params, Empty)

    async def change_position_mode(self, dual_side_position: bool) -> None:
        """Switch between hedge mode (True) and one-way mode (False)."""
        params = ParameterSet().add("dualSidePosition", dual_side_position, bool_style=BoolStyle.LOWER)
        await self._client.call(API.FUTURES_CHANGE_POSITION_MODE, params, Empty)

    # ------------------------------------------------------------------
    # Account data
    # ------------------------------------------------------------------

    async def get_income(self, request: IncomeRequest) -> list[Income]:
        return await self._client.call(API.FUTURES_INCOME, _income_params(request), list[Income])

    async def position_information(self, symbol: Optional[str] = None) -> list[PositionRisk]:
        params = ParameterSet().add("symbol", symbol)
        return await self._client.call(API.FUTURES_POSITION_RISK, params, list[PositionRisk])

    async def account_balance(self) -> list[AccountBalance]:
        return await self._client.call(API.FUTURES_BALANCE, model=list[AccountBalance])

    # ------------------------------------------------------------------
    # User data stream listen keys (key header only, unsigned)
    # ------------------------------------------------------------------

    async def start_user_data_stream(self) -> UserDataStream:
        return await self._client.call(API.FUTURES_USER_DATA_STREAM_START, model=UserDataStream)

    async def keep_alive_user_data_stream(self, listen_key: str) -> None:
        params = ParameterSet().add("listenKey", listen_key)
        await self._client.call(API.FUTURES_USER_DATA_STREAM_KEEP, params, Empty)

    async def close_user_data_stream(self, listen_key: str) -> None:
        params = ParameterSet().add("listenKey", listen_key)
        await self._client.call(API.FUTURES_USER_DATA_STREAM_CLOSE, params, Empty)

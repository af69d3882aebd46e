"""
types.py – Pydantic v2 models and enums for the spot / USDⓈ-M futures REST API.

The exchange returns most monetary values as JSON strings ("10.5") and
timestamps as integer milliseconds.  Models here accept either form and
expose numbers as float, matching what callers compare against.

Field names are snake_case; the wire names are camelCase and are mapped
through an alias generator, so both spellings are accepted on input:

    tx = Transaction.model_validate(raw)
    tx.orig_type          # "STOP_MARKET"
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Environment / market
# ---------------------------------------------------------------------------

@unique
class MBXEnv(Enum):
    """Deployment environment."""
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def label(self) -> str:
        return self.value


@unique
class Market(Enum):
    SPOT    = "spot"
    FUTURES = "futures"


# ---------------------------------------------------------------------------
# Trading enumerations  (string values are the exact wire spelling)
# ---------------------------------------------------------------------------

@unique
class OrderSide(str, Enum):
    BUY  = "BUY"
    SELL = "SELL"


@unique
class OrderType(str, Enum):
    LIMIT                = "LIMIT"
    MARKET               = "MARKET"
    STOP                 = "STOP"
    STOP_MARKET          = "STOP_MARKET"
    TAKE_PROFIT          = "TAKE_PROFIT"
    TAKE_PROFIT_MARKET   = "TAKE_PROFIT_MARKET"
    TRAILING_STOP_MARKET = "TRAILING_STOP_MARKET"


@unique
class PositionSide(str, Enum):
    BOTH  = "BOTH"
    LONG  = "LONG"
    SHORT = "SHORT"


@unique
class TimeInForce(str, Enum):
    GTC = "GTC"   # good till cancel
    IOC = "IOC"   # immediate or cancel
    FOK = "FOK"   # fill or kill
    GTX = "GTX"   # post only


@unique
class WorkingType(str, Enum):
    MARK_PRICE     = "MARK_PRICE"
    CONTRACT_PRICE = "CONTRACT_PRICE"


@unique
class MarginType(str, Enum):
    ISOLATED = "ISOLATED"
    CROSSED  = "CROSSED"


@unique
class IncomeType(str, Enum):
    TRANSFER        = "TRANSFER"
    WELCOME_BONUS   = "WELCOME_BONUS"
    REALIZED_PNL    = "REALIZED_PNL"
    FUNDING_FEE     = "FUNDING_FEE"
    COMMISSION      = "COMMISSION"
    INSURANCE_CLEAR = "INSURANCE_CLEAR"


# ---------------------------------------------------------------------------
# Base model
# ---------------------------------------------------------------------------

class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown keys are ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Empty(_WireModel):
    """Placeholder for endpoints whose body carries nothing the caller needs."""


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------

class ServerTime(_WireModel):
    server_time: int


class RateLimit(_WireModel):
    rate_limit_type: str
    interval:        str
    interval_num:    int = 1
    limit:           int


class Symbol(_WireModel):
    """
    Symbol metadata from exchangeInfo.

    Spot and futures listings share the identifying fields; the
    futures-only contract fields are optional.
    """
    symbol:               str
    status:               str = ""
    base_asset:           str
    quote_asset:          str
    base_asset_precision: int = 8
    quote_precision:      int = 8
    order_types:          list[str] = []
    time_in_force:        list[str] = []
    filters:              list[dict[str, Any]] = []

    # futures-only
    pair:                    Optional[str]   = None
    contract_type:           Optional[str]   = None
    delivery_date:           Optional[int]   = None
    onboard_date:            Optional[int]   = None
    margin_asset:            Optional[str]   = None
    maint_margin_percent:    Optional[float] = None
    required_margin_percent: Optional[float] = None
    price_precision:         Optional[int]   = None
    quantity_precision:      Optional[int]   = None
    underlying_type:         Optional[str]   = None

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("symbol must be a non-empty string")
        return v


class ExchangeInformation(_WireModel):
    timezone:         str
    server_time:      int
    rate_limits:      list[RateLimit] = []
    exchange_filters: list[Any] = []
    symbols:          list[Symbol] = []


# ---------------------------------------------------------------------------
# Futures trading
# ---------------------------------------------------------------------------

class Transaction(_WireModel):
    """An order as echoed back by the futures order endpoints."""
    client_order_id: str   = ""
    cum_qty:         float = 0.0
    cum_quote:       float = 0.0
    executed_qty:    float = 0.0
    order_id:        int
    avg_price:       float = 0.0
    orig_qty:        float = 0.0
    price:           float = 0.0
    reduce_only:     bool  = False
    side:            str
    position_side:   str   = "BOTH"
    status:          str
    stop_price:      float = 0.0
    close_position:  bool  = False
    symbol:          str
    time_in_force:   str   = ""
    order_type:      str   = Field(alias="type")
    orig_type:       str   = ""
    activate_price:  Optional[float] = None
    price_rate:      Optional[float] = None
    update_time:     int   = 0
    working_type:    str   = ""
    price_protect:   bool  = False


class ChangeLeverageResponse(_WireModel):
    leverage:           int
    max_notional_value: float
    symbol:             str


class Income(_WireModel):
    symbol:      str = ""
    income_type: str
    income:      float
    asset:       str
    info:        str = ""
    time:        int
    tran_id:     Union[int, str] = ""
    trade_id:    Union[int, str] = ""


class PositionRisk(_WireModel):
    entry_price:         float
    margin_type:         str
    is_auto_add_margin:  bool = False
    isolated_margin:     float = 0.0
    leverage:            int
    liquidation_price:   float = 0.0
    mark_price:          float = 0.0
    max_notional_value:  float = 0.0
    position_amt:        float
    symbol:              str
    un_realized_profit:  float = 0.0
    position_side:       str = "BOTH"
    update_time:         int = 0


class AccountBalance(_WireModel):
    account_alias:        str = ""
    asset:                str
    balance:              float
    cross_wallet_balance: float = 0.0
    cross_un_pnl:         float = 0.0
    available_balance:    float = 0.0
    max_withdraw_amount:  float = 0.0
    margin_available:     bool = True
    update_time:          int = 0


class UserDataStream(_WireModel):
    listen_key: str

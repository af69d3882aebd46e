"""
MBX SDK – Python client for the spot and USDⓈ-M futures REST API.

Provides:
  - Unified façade                     (client.py   → MBXClient)
  - Endpoint registry                  (api.py      → API, Endpoint)
  - Immutable configuration            (config.py   → Config)
  - API credentials                    (auth.py     → Credentials)
  - Canonical query encoding           (encoding.py → ParameterSet, BoolStyle)
  - HMAC-SHA256 request signing        (signing.py  → sign_params)
  - Typed Ok / Err results             (response.py → interpret_response)
  - Async + sync dispatch              (rest.py     → AsyncRestClient, RestClient)
  - Market-data wrappers               (general.py  → SpotGeneral, FuturesGeneral)
  - Futures trading / account wrappers (futures.py  → FuturesAccount)
  - Typed Pydantic v2 models           (types.py)

Quickstart
----------
    import asyncio
    from mbx_sdk import MBXClient

    async def main() -> None:
        async with MBXClient(api_key="...", secret_key="...") as client:
            now = await client.futures.get_server_time()
            tx  = await client.futures_account.stop_market_close_buy("BTCUSDT", 25_000.0)

    asyncio.run(main())
"""

from .types import (
    # Environment
    MBXEnv,
    Market,
    # Enums
    OrderSide,
    OrderType,
    PositionSide,
    TimeInForce,
    WorkingType,
    MarginType,
    IncomeType,
    # Models
    Empty,
    ServerTime,
    RateLimit,
    Symbol,
    ExchangeInformation,
    Transaction,
    ChangeLeverageResponse,
    Income,
    PositionRisk,
    AccountBalance,
    UserDataStream,
)
from .errors import (
    MBXError,
    AuthenticationError,
    TransportError,
    ExchangeError,
    DecodeError,
    NotFoundError,
)
from .api import API, Endpoint, HTTPMethod, Security
from .config import Config
from .auth import Credentials
from .encoding import BoolStyle, ParameterSet, encode_params
from .signing import SignedRequest, TimestampProvider, hmac_signature, sign_params
from .response import Err, ExchangeResponse, Ok, interpret_response
from .rest import AsyncRestClient, RestClient
from .general import FuturesGeneral, SpotGeneral
from .futures import CustomOrderRequest, FuturesAccount, IncomeRequest
from .client import MBXClient

__all__ = [
    # Environment
    "MBXEnv",
    "Market",
    # Enums
    "OrderSide",
    "OrderType",
    "PositionSide",
    "TimeInForce",
    "WorkingType",
    "MarginType",
    "IncomeType",
    # Models
    "Empty",
    "ServerTime",
    "RateLimit",
    "Symbol",
    "ExchangeInformation",
    "Transaction",
    "ChangeLeverageResponse",
    "Income",
    "PositionRisk",
    "AccountBalance",
    "UserDataStream",
    # Errors
    "MBXError",
    "AuthenticationError",
    "TransportError",
    "ExchangeError",
    "DecodeError",
    "NotFoundError",
    # Endpoint registry
    "API",
    "Endpoint",
    "HTTPMethod",
    "Security",
    # Configuration / credentials
    "Config",
    "Credentials",
    # Encoding / signing
    "BoolStyle",
    "ParameterSet",
    "encode_params",
    "SignedRequest",
    "TimestampProvider",
    "hmac_signature",
    "sign_params",
    # Results
    "Ok",
    "Err",
    "ExchangeResponse",
    "interpret_response",
    # REST
    "AsyncRestClient",
    "RestClient",
    # Wrappers
    "SpotGeneral",
    "FuturesGeneral",
    "FuturesAccount",
    "CustomOrderRequest",
    "IncomeRequest",
    # Unified façade
    "MBXClient",
]

__version__ = "0.1.0"

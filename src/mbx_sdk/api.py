"""
api.py – Endpoint registry.

Every operation the SDK issues is a member of the closed ``API`` enum.
Each member's value is an immutable ``Endpoint``: which market it targets,
the HTTP verb, the path relative to that market's base URL, and how the
request must be authenticated.

    API.FUTURES_CHANGE_LEVERAGE.endpoint
    # Endpoint(market=<Market.FUTURES>, method=<HTTPMethod.POST>,
    #          path='/fapi/v1/leverage', security=<Security.SIGNED>)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Union

from .types import Market


@unique
class HTTPMethod(str, Enum):
    GET    = "GET"
    POST   = "POST"
    PUT    = "PUT"
    DELETE = "DELETE"


@unique
class Security(Enum):
    NONE    = "none"      # public
    API_KEY = "api_key"   # key header only, unsigned
    SIGNED  = "signed"    # key header + timestamp + HMAC signature

    @property
    def needs_api_key(self) -> bool:
        return self is not Security.NONE


@dataclass(frozen=True)
class Endpoint:
    market:   Market
    method:   HTTPMethod
    path:     str
    security: Security = Security.NONE

    def __post_init__(self) -> None:
        if not self.path.startswith("/") or "://" in self.path:
            raise ValueError(f"Endpoint path must be relative and start with '/': {self.path!r}")

    @property
    def signed(self) -> bool:
        return self.security is Security.SIGNED


_S, _F = Market.SPOT, Market.FUTURES
_GET, _POST, _PUT, _DELETE = HTTPMethod.GET, HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.DELETE


class API(Enum):
    # Spot market data
    SPOT_PING          = Endpoint(_S, _GET, "/api/v3/ping")
    SPOT_TIME          = Endpoint(_S, _GET, "/api/v3/time")
    SPOT_EXCHANGE_INFO = Endpoint(_S, _GET, "/api/v3/exchangeInfo")

    # Futures market data
    FUTURES_PING          = Endpoint(_F, _GET, "/fapi/v1/ping")
    FUTURES_TIME          = Endpoint(_F, _GET, "/fapi/v1/time")
    FUTURES_EXCHANGE_INFO = Endpoint(_F, _GET, "/fapi/v1/exchangeInfo")

    # Futures trading
    FUTURES_ORDER            = Endpoint(_F, _POST,   "/fapi/v1/order",         Security.SIGNED)
    FUTURES_CANCEL_ORDER     = Endpoint(_F, _DELETE, "/fapi/v1/order",         Security.SIGNED)
    FUTURES_OPEN_ORDERS      = Endpoint(_F, _GET,    "/fapi/v1/openOrders",    Security.SIGNED)
    FUTURES_ALL_OPEN_ORDERS  = Endpoint(_F, _DELETE, "/fapi/v1/allOpenOrders", Security.SIGNED)

    # Futures account
    FUTURES_CHANGE_LEVERAGE        = Endpoint(_F, _POST, "/fapi/v1/leverage",           Security.SIGNED)
    FUTURES_MARGIN_TYPE            = Endpoint(_F, _POST, "/fapi/v1/marginType",         Security.SIGNED)
    FUTURES_POSITION_MARGIN        = Endpoint(_F, _POST, "/fapi/v1/positionMargin",     Security.SIGNED)
    FUTURES_CHANGE_POSITION_MODE   = Endpoint(_F, _POST, "/fapi/v1/positionSide/dual",  Security.SIGNED)
    FUTURES_INCOME                 = Endpoint(_F, _GET,  "/fapi/v1/income",             Security.SIGNED)
    FUTURES_POSITION_RISK          = Endpoint(_F, _GET,  "/fapi/v2/positionRisk",       Security.SIGNED)
    FUTURES_BALANCE                = Endpoint(_F, _GET,  "/fapi/v2/balance",            Security.SIGNED)

    # Futures user data stream (listen key management, key header only)
    FUTURES_USER_DATA_STREAM_START = Endpoint(_F, _POST,   "/fapi/v1/listenKey", Security.API_KEY)
    FUTURES_USER_DATA_STREAM_KEEP  = Endpoint(_F, _PUT,    "/fapi/v1/listenKey", Security.API_KEY)
    FUTURES_USER_DATA_STREAM_CLOSE = Endpoint(_F, _DELETE, "/fapi/v1/listenKey", Security.API_KEY)

    @property
    def endpoint(self) -> Endpoint:
        return self.value


EndpointLike = Union[API, Endpoint]


def resolve(api: EndpointLike) -> Endpoint:
    """Accept either a registry member or an ad-hoc Endpoint."""
    return api.value if isinstance(api, API) else api

"""
config.py – Immutable client configuration.

A Config carries everything a client needs that is not a credential:
the base URL for each market, the default recvWindow attached to signed
requests, and the HTTP timeout.  It is frozen; the ``with_*`` helpers
return modified copies, so several independently configured clients
(mainnet and testnet, or a mock server in tests) can coexist.

Usage
-----
    from mbx_sdk import Config, MBXEnv

    config = Config.for_env(MBXEnv.TESTNET).with_recv_window(1234)
    local  = Config().with_futures_endpoint("http://127.0.0.1:8080")
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .types import Market, MBXEnv

# ---------------------------------------------------------------------------
# Environment base URLs
# ---------------------------------------------------------------------------

_ENDPOINTS: dict[str, dict[str, str]] = {
    "mainnet": {
        "spot":    "https://api.binance.com",
        "futures": "https://fapi.binance.com",
    },
    "testnet": {
        "spot":    "https://testnet.binance.vision",
        "futures": "https://testnet.binancefuture.com",
    },
}

DEFAULT_RECV_WINDOW = 5000
DEFAULT_TIMEOUT_S   = 10.0


def _env_label(env: Union[MBXEnv, str]) -> str:
    """Normalise an MBXEnv enum or string to a lowercase label key."""
    if isinstance(env, MBXEnv):
        return env.label
    label = env.lower()
    if label not in _ENDPOINTS:
        raise ValueError(f"Unknown environment {env!r}; expected one of {sorted(_ENDPOINTS)}")
    return label


@dataclass(frozen=True)
class Config:
    """
    Read-only client configuration.

    Parameters
    ----------
    spot_rest_api_endpoint    : Base URL for spot endpoints
    futures_rest_api_endpoint : Base URL for USDⓈ-M futures endpoints
    recv_window               : Milliseconds of staleness the exchange tolerates
                                for signed requests; None omits the parameter
    timeout                   : Total HTTP timeout per request, in seconds
    """

    spot_rest_api_endpoint:    str           = _ENDPOINTS["mainnet"]["spot"]
    futures_rest_api_endpoint: str           = _ENDPOINTS["mainnet"]["futures"]
    recv_window:               Optional[int] = DEFAULT_RECV_WINDOW
    timeout:                   float         = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        if self.recv_window is not None and self.recv_window <= 0:
            raise ValueError(f"recv_window must be positive, got {self.recv_window}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def for_env(cls, env: Union[MBXEnv, str] = MBXEnv.MAINNET) -> "Config":
        urls = _ENDPOINTS[_env_label(env)]
        return cls(spot_rest_api_endpoint=urls["spot"], futures_rest_api_endpoint=urls["futures"])

    def base_url(self, market: Market) -> str:
        if market is Market.SPOT:
            return self.spot_rest_api_endpoint.rstrip("/")
        return self.futures_rest_api_endpoint.rstrip("/")

    # ------------------------------------------------------------------
    # Copy-on-write helpers
    # ------------------------------------------------------------------

    def with_spot_endpoint(self, url: str) -> "Config":
        return replace(self, spot_rest_api_endpoint=url)

    def with_futures_endpoint(self, url: str) -> "Config":
        return replace(self, futures_rest_api_endpoint=url)

    def with_recv_window(self, recv_window: Optional[int]) -> "Config":
        return replace(self, recv_window=recv_window)

    def with_timeout(self, timeout: float) -> "Config":
        return replace(self, timeout=timeout)

"""
client.py – Unified MBXClient façade.

Single entry point that owns one AsyncRestClient and exposes the typed
wrappers on top of it, so every wrapper shares the same credentials,
configuration and connection pool.

Usage
-----
    import asyncio
    from mbx_sdk import Config, MBXClient, MBXEnv

    async def main() -> None:
        config = Config.for_env(MBXEnv.TESTNET)
        async with MBXClient(api_key="...", secret_key="...", config=config) as client:
            info = await client.futures.get_symbol_info("btcusdt")
            await client.futures_account.change_initial_leverage("BTCUSDT", 5)

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Optional

from .auth import Credentials
from .config import Config
from .futures import FuturesAccount
from .general import FuturesGeneral, SpotGeneral
from .rest import AsyncRestClient
from .signing import TimestampProvider


class MBXClient:
    """
    Unified façade for the spot + USDⓈ-M futures REST API.

    Parameters
    ----------
    api_key            : API key; needed for key-only and signed endpoints
    secret_key         : Secret; needed for signed endpoints
    config             : Base URLs, recvWindow and timeout (default: mainnet)
    timestamp_provider : Millisecond clock used when signing
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        *,
        config: Optional[Config] = None,
        timestamp_provider: Optional[TimestampProvider] = None,
    ) -> None:
        self.rest = AsyncRestClient(
            Credentials(api_key=api_key, secret_key=secret_key),
            config or Config(),
            timestamp_provider=timestamp_provider,
        )
        self.spot            = SpotGeneral(self.rest)
        self.futures         = FuturesGeneral(self.rest)
        self.futures_account = FuturesAccount(self.rest)

    # ------------------------------------------------------------------
    # Async context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "MBXClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the shared HTTP session."""
        await self.rest.close()

    @property
    def config(self) -> Config:
        return self.rest.config

    @property
    def credentials(self) -> Credentials:
        return self.rest.credentials

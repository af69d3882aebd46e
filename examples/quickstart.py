"""
examples/quickstart.py – End-to-end demo of the MBX SDK.

Walks through the main flows against the futures testnet:
  1. Check connectivity and server time (public)
  2. Look up symbol rules from exchange info
  3. Read balances and positions (signed)
  4. Set leverage and place a protective close-position stop
  5. Open and close a user data stream listen key
  6. Use the synchronous client for a one-off call

HOW TO RUN
----------
    export MBX_API_KEY="your_api_key"
    export MBX_SECRET_KEY="your_secret"
    python examples/quickstart.py

    Everything targets TESTNET by default.  Set MBX_ENV=mainnet to go live.
"""

from __future__ import annotations

import asyncio
import logging
import os

from mbx_sdk import (
    API,
    Config,
    Credentials,
    Err,
    MBXClient,
    MBXError,
    RestClient,
    ServerTime,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s – %(message)s",
)
logger = logging.getLogger("quickstart")

# ---------------------------------------------------------------------------
# Config – read from environment variables
# ---------------------------------------------------------------------------

API_KEY    = os.environ.get("MBX_API_KEY",    "")
SECRET_KEY = os.environ.get("MBX_SECRET_KEY", "")
ENV        = os.environ.get("MBX_ENV",        "testnet")   # or "mainnet"

SYMBOL = "BTCUSDT"


# ---------------------------------------------------------------------------
# Part 1 – async façade
# ---------------------------------------------------------------------------

async def async_demo(config: Config) -> None:
    logger.info("=== Async demo (%s) ===", ENV)

    async with MBXClient(api_key=API_KEY or None, secret_key=SECRET_KEY or None, config=config) as client:
        # 1. Connectivity (public, no credentials needed)
        logger.info("Ping: %s", await client.futures.ping())
        now = await client.futures.get_server_time()
        logger.info("Server time: %d", now.server_time)

        # 2. Symbol rules
        symbol = await client.futures.get_symbol_info(SYMBOL)
        logger.info(
            "%s – price precision=%s  qty precision=%s  filters=%d",
            symbol.symbol, symbol.price_precision, symbol.quantity_precision, len(symbol.filters),
        )

        if not client.credentials.can_sign:
            logger.info("No credentials set – skipping signed calls")
            return

        # 3. Account data
        try:
            for balance in await client.futures_account.account_balance():
                logger.info("Balance %s: %.4f available", balance.asset, balance.available_balance)
            positions = await client.futures_account.position_information(SYMBOL)
            logger.info("Positions on %s: %d", SYMBOL, len(positions))
        except MBXError as exc:
            logger.warning("Account query failed: %s", exc)

        # 4. Leverage + a protective stop far below market
        try:
            leverage = await client.futures_account.change_initial_leverage(SYMBOL, 5)
            logger.info("Leverage now %dx (max notional %s)", leverage.leverage, leverage.max_notional_value)

            tx = await client.futures_account.stop_market_close_sell(SYMBOL, 1_000.0)
            logger.info("Stop placed – id=%s  status=%s", tx.order_id, tx.status)
            await client.futures_account.cancel_order(SYMBOL, tx.order_id)
            logger.info("Stop cancelled")
        except MBXError as exc:
            logger.warning("Order flow failed: %s", exc)

        # 5. Listen key lifecycle
        try:
            stream = await client.futures_account.start_user_data_stream()
            logger.info("Listen key: %s…", stream.listen_key[:12])
            await client.futures_account.keep_alive_user_data_stream(stream.listen_key)
            await client.futures_account.close_user_data_stream(stream.listen_key)
        except MBXError as exc:
            logger.warning("User data stream failed: %s", exc)


# ---------------------------------------------------------------------------
# Part 2 – synchronous client, result-style error handling
# ---------------------------------------------------------------------------

def sync_demo(config: Config) -> None:
    logger.info("=== Sync demo ===")
    with RestClient(Credentials(API_KEY or None, SECRET_KEY or None), config) as rest:
        result = rest.send(API.SPOT_TIME, model=ServerTime)
        if isinstance(result, Err):
            logger.warning("Spot time failed: %s", result.error)
        else:
            logger.info("Spot server time: %d", result.value.server_time)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    config = Config.for_env(ENV)
    asyncio.run(async_demo(config))
    sync_demo(config)


if __name__ == "__main__":
    main()

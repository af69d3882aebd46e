"""
signing.py – HMAC-SHA256 request signing.

How it works
------------
1. Copy the caller's parameters and add ``timestamp`` (milliseconds since
   the epoch, captured now) and, when configured, ``recvWindow``.  A caller-
   supplied ``timestamp`` is overwritten; a ``signature`` key is dropped.
2. Encode the result canonically (sorted keys, see encoding.py).
3. signature = hex(HMAC-SHA256(secret_key, encoded_query)), lowercase.
4. Append ``signature=<hex>`` as the final query component.

The signature covers exactly the bytes sent before ``&signature=``; the
returned SignedRequest is never re-encoded.

TimestampProvider
-----------------
The default provider reads the wall clock.  Inject a fixed provider for
reproducible signatures in tests, or an offset-corrected one when the
local clock drifts from the exchange::

    sign_params(params, secret, recv_window=5000, timestamp_provider=lambda: 1_700_000_000_000)
"""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from .encoding import ParameterSet, ParamValue

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

# Callable with no args that returns a millisecond timestamp
TimestampProvider = Callable[[], int]


def _default_timestamp() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SignedRequest:
    """
    A canonical query plus its signature, built for a single dispatch.

    query     : encoded parameters including timestamp / recvWindow
    signature : lowercase hex HMAC-SHA256 of ``query``
    """
    query:     str
    signature: str

    @property
    def query_string(self) -> str:
        """The full wire query with ``signature`` last."""
        return f"{self.query}&signature={self.signature}"


def hmac_signature(secret_key: str, payload: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``payload`` keyed by ``secret_key``."""
    return hmac.new(
        secret_key.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_params(
    params: Union[ParameterSet, Mapping[str, ParamValue], None],
    secret_key: str,
    recv_window: Optional[int] = None,
    *,
    timestamp: Optional[int] = None,
    timestamp_provider: Optional[TimestampProvider] = None,
) -> SignedRequest:
    """
    Add timestamp / recvWindow to a copy of ``params`` and sign it.

    Parameters
    ----------
    params             : Request parameters; not mutated
    secret_key         : Secret used as the HMAC key
    recv_window        : Optional staleness tolerance in milliseconds
    timestamp          : Explicit timestamp (ms); wins over the provider
    timestamp_provider : Source of timestamps when ``timestamp`` is None

    Raises
    ------
    ValueError if ``secret_key`` is empty.
    """
    if not secret_key:
        raise ValueError("secret_key must be non-empty")

    if isinstance(params, ParameterSet):
        signed = params.copy()
    else:
        signed = ParameterSet(params)

    if timestamp is None:
        timestamp = (timestamp_provider or _default_timestamp)()

    # signature is appended once, after the signed block
    signed.add("signature", None)
    signed.add("timestamp", int(timestamp))
    if recv_window is not None:
        signed.add("recvWindow", int(recv_window))

    query = signed.encode()
    return SignedRequest(query=query, signature=hmac_signature(secret_key, query))

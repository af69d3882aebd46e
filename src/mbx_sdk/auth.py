"""
auth.py – API credentials.

The exchange authenticates REST calls two ways:

1. Key-only endpoints (e.g. listen-key management) need the API key in the
   ``X-MBX-APIKEY`` header.
2. Signed endpoints additionally need an HMAC-SHA256 signature of the query
   string computed with the secret key (see signing.py).

Credentials are supplied once, at client construction, and never change.
Checks happen before any network I/O so a misconfigured client fails fast.

Usage
-----
    from mbx_sdk import Credentials

    creds = Credentials(api_key="...", secret_key="...")
    public_only = Credentials()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import AuthenticationError

API_KEY_HEADER = "X-MBX-APIKEY"


@dataclass(frozen=True)
class Credentials:
    """
    API key + optional secret.

    Parameters
    ----------
    api_key    : API key created in the exchange web UI
    secret_key : Secret paired with the key; required for signed calls
    """

    api_key:    Optional[str] = None
    secret_key: Optional[str] = field(default=None, repr=False)

    @property
    def can_sign(self) -> bool:
        return bool(self.secret_key)

    def require_api_key(self) -> str:
        if not self.api_key:
            raise AuthenticationError("An API key is required for this endpoint")
        return self.api_key

    def require_secret(self) -> str:
        if not self.secret_key:
            raise AuthenticationError("A secret key is required to sign this request")
        return self.secret_key

    def headers(self) -> dict[str, str]:
        """Header dict carrying the API key."""
        return {API_KEY_HEADER: self.require_api_key()}

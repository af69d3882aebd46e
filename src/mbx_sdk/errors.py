"""
errors.py – Error taxonomy for the MBX REST SDK.

Every failure a call can produce is one of:

  AuthenticationError  missing credentials for a signed / key-only call
  TransportError       network, TLS or timeout failure, or an error body
                       that is not the exchange's {code, msg} envelope
  ExchangeError        well-formed {code, msg} rejection from the exchange
  DecodeError          success body that does not match the expected model
  NotFoundError        derived lookups (e.g. symbol info) with no match
"""

from __future__ import annotations

from typing import Optional


class MBXError(Exception):
    """Base class for all errors raised by the SDK."""


class AuthenticationError(MBXError):
    """Raised before any network I/O when a call lacks the credentials it needs."""


class TransportError(MBXError):
    """Raised on connection / timeout failures or unrecognised error bodies."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: str = "",
        method: str = "",
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.body        = body
        self.method      = method.upper()
        self.path        = path
        status   = f" [{status_code}]" if status_code is not None else ""
        location = f" {self.method} {self.path}" if path else ""
        super().__init__(f"Transport error{status}{location}: {message}")


class ExchangeError(MBXError):
    """The exchange rejected the request with its {code, msg} envelope."""

    def __init__(self, code: int, message: str, status_code: Optional[int] = None) -> None:
        self.code        = code
        self.message     = message
        self.status_code = status_code
        super().__init__(f"Exchange error {code}: {message}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExchangeError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))


class DecodeError(MBXError):
    """A success response could not be parsed into the expected model."""

    def __init__(self, detail: str, body: str = "") -> None:
        self.detail = detail
        self.body   = body
        super().__init__(f"Failed to decode response: {detail}")


class NotFoundError(MBXError):
    """A derived lookup found no matching entry."""

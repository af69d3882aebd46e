"""
response.py – Turn a raw HTTP status + body into a typed result.

Every call ends in exactly one of two variants:

    Ok(value)   value is an instance of the model the operation expects
    Err(error)  error is one of the errors.py taxonomy

Decision rules
--------------
- 2xx with a body that validates against the model          → Ok
- 2xx carrying a ``{code, msg}`` envelope with code < 0      → Err(ExchangeError)
  (the exchange occasionally rejects with HTTP 200; non-negative
  codes such as ``{"code": 200, "msg": "success"}`` are acknowledgements)
- 2xx whose body does not match the model or is not JSON    → Err(DecodeError)
- non-2xx with a ``{code, msg}`` envelope                    → Err(ExchangeError)
- non-2xx with anything else                                 → Err(TransportError)

Usage
-----
    result = interpret_response(400, '{"code": -1121, "msg": "Invalid symbol."}', ServerTime)
    if isinstance(result, Err):
        print(result.error.code)          # -1121
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError, ExchangeError, MBXError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Result variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: MBXError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


ExchangeResponse = Union[Ok[T], Err]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def parse_error_envelope(data: Any) -> Optional[tuple[int, str]]:
    """Return (code, msg) if ``data`` is the exchange's error envelope."""
    if not isinstance(data, dict) or "code" not in data or "msg" not in data:
        return None
    code = data["code"]
    if isinstance(code, bool):
        return None
    try:
        return int(code), str(data["msg"])
    except (TypeError, ValueError):
        return None


def _is_success(status: int) -> bool:
    return 200 <= status < 300


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

def interpret_response(
    status: int,
    body: str,
    model: Any = None,
    *,
    method: str = "",
    path: str = "",
) -> ExchangeResponse:
    """
    Classify and decode one HTTP response.

    Parameters
    ----------
    status : HTTP status code
    body   : Response body text
    model  : Expected success type (a Pydantic model, ``list[Model]``, ...);
             None returns the decoded JSON unchanged
    method : HTTP method, for error context
    path   : Request path, for error context
    """
    if _is_success(status):
        try:
            data = json.loads(body) if body.strip() else {}
        except json.JSONDecodeError as exc:
            return Err(DecodeError(f"body is not JSON ({exc})", body))

        envelope = parse_error_envelope(data)
        if envelope is not None and envelope[0] < 0:
            logger.debug("Exchange rejection with HTTP %d on %s %s: %s", status, method, path, envelope)
            return Err(ExchangeError(envelope[0], envelope[1], status_code=status))

        if model is None:
            return Ok(data)
        try:
            return Ok(_adapter(model).validate_python(data))
        except ValidationError as exc:
            return Err(DecodeError(str(exc), body))

    try:
        data = json.loads(body)
    except ValueError:
        data = None

    envelope = parse_error_envelope(data)
    if envelope is not None:
        logger.debug("Exchange rejection with HTTP %d on %s %s: %s", status, method, path, envelope)
        return Err(ExchangeError(envelope[0], envelope[1], status_code=status))

    return Err(TransportError(
        "unrecognised error response",
        status_code=status,
        body=body,
        method=method,
        path=path,
    ))

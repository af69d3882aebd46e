"""
rest.py – Request dispatch (async and sync).

Both clients take an endpoint from the registry plus parameters, and:

1. encode the parameters canonically (or sign them for SIGNED endpoints),
2. attach the ``X-MBX-APIKEY`` header for key-only and signed endpoints,
3. issue exactly one HTTP request (no retries, no caching),
4. hand status + body to the response interpreter.

Parameters always travel in the query string, including for POST / PUT /
DELETE; request bodies are empty.

``send()`` returns an Ok / Err result and never raises an SDK error.
``call()`` unwraps that result, raising the carried error.  Cancelling
the task awaiting ``send()`` aborts the in-flight request.

Usage – async
-------------
    from mbx_sdk import API, AsyncRestClient, Config, Credentials, ServerTime

    async with AsyncRestClient(Credentials("key", "secret"), Config()) as rest:
        now = await rest.call(API.FUTURES_TIME, model=ServerTime)

Usage – sync
------------
    rest   = RestClient(Credentials("key", "secret"), Config())
    result = rest.send(API.SPOT_TIME, model=ServerTime)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import aiohttp
import requests
from yarl import URL

from .api import EndpointLike, Endpoint, resolve
from .auth import Credentials
from .config import Config
from .encoding import ParameterSet, ParamValue, encode_params
from .errors import AuthenticationError, TransportError
from .response import Err, ExchangeResponse, interpret_response
from .signing import TimestampProvider, sign_params

logger = logging.getLogger(__name__)

Params = Union[ParameterSet, Mapping[str, ParamValue], None]


# ---------------------------------------------------------------------------
# Request preparation (shared by sync and async clients)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _PreparedRequest:
    method:  str
    path:    str
    url:     str
    headers: dict[str, str]
    log_url: str   # url without the signature


def _prepare(
    endpoint: Endpoint,
    params: Params,
    credentials: Credentials,
    config: Config,
    timestamp_provider: Optional[TimestampProvider],
) -> _PreparedRequest:
    """Build URL + headers.  Raises AuthenticationError before any I/O."""
    headers: dict[str, str] = {}
    if endpoint.signed:
        secret = credentials.require_secret()
        headers.update(credentials.headers())
        signed   = sign_params(params, secret, config.recv_window, timestamp_provider=timestamp_provider)
        query    = signed.query_string
        log_query = signed.query
    else:
        if endpoint.security.needs_api_key:
            headers.update(credentials.headers())
        query = log_query = encode_params(params)

    base = config.base_url(endpoint.market) + endpoint.path
    return _PreparedRequest(
        method=endpoint.method.value,
        path=endpoint.path,
        url=f"{base}?{query}" if query else base,
        headers=headers,
        log_url=f"{base}?{log_query}" if log_query else base,
    )


class _BaseRestClient:
    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        config: Optional[Config] = None,
        *,
        timestamp_provider: Optional[TimestampProvider] = None,
    ) -> None:
        self._credentials        = credentials or Credentials()
        self._config             = config or Config()
        self._timestamp_provider = timestamp_provider

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def config(self) -> Config:
        return self._config

    def _prepare(self, api: EndpointLike, params: Params) -> _PreparedRequest:
        return _prepare(resolve(api), params, self._credentials, self._config, self._timestamp_provider)


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------

class AsyncRestClient(_BaseRestClient):
    """
    aiohttp-based dispatcher.

    One ClientSession (and so one connection pool) is created lazily and
    shared by every concurrent call; a caller-supplied session is used as
    is and left open on close().

    Parameters
    ----------
    credentials        : API key / secret (default: none, public calls only)
    config             : Base URLs, recvWindow and timeout
    timestamp_provider : Millisecond clock used for signing
    session            : Optional externally owned aiohttp.ClientSession
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        config: Optional[Config] = None,
        *,
        timestamp_provider: Optional[TimestampProvider] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        super().__init__(credentials, config, timestamp_provider=timestamp_provider)
        self._session       = session
        self._owns_session  = session is None

    async def __aenter__(self) -> "AsyncRestClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session      = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def send(self, api: EndpointLike, params: Params = None, model: Any = None) -> ExchangeResponse:
        """Dispatch one request and return Ok(model instance) or Err(error)."""
        try:
            prepared = self._prepare(api, params)
        except AuthenticationError as exc:
            return Err(exc)

        session = self._get_session()
        logger.debug("%s %s", prepared.method, prepared.log_url)
        try:
            async with session.request(
                prepared.method,
                URL(prepared.url, encoded=True),
                headers=prepared.headers,
                timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            ) as resp:
                status = resp.status
                body   = await resp.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.debug("Transport failure on %s %s: %r", prepared.method, prepared.path, exc)
            return Err(TransportError(
                str(exc) or type(exc).__name__,
                method=prepared.method,
                path=prepared.path,
            ))

        return interpret_response(status, body, model, method=prepared.method, path=prepared.path)

    async def call(self, api: EndpointLike, params: Params = None, model: Any = None) -> Any:
        """Like send(), but raise the error instead of returning Err."""
        return (await self.send(api, params, model)).unwrap()


# ---------------------------------------------------------------------------
# Synchronous client
# ---------------------------------------------------------------------------

class RestClient(_BaseRestClient):
    """
    requests-based dispatcher for scripts and notebooks.

    Same contract as AsyncRestClient; one requests.Session is reused.
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        config: Optional[Config] = None,
        *,
        timestamp_provider: Optional[TimestampProvider] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(credentials, config, timestamp_provider=timestamp_provider)
        self._session = session or requests.Session()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def send(self, api: EndpointLike, params: Params = None, model: Any = None) -> ExchangeResponse:
        try:
            prepared = self._prepare(api, params)
        except AuthenticationError as exc:
            return Err(exc)

        logger.debug("%s %s", prepared.method, prepared.log_url)
        try:
            resp = self._session.request(
                prepared.method,
                prepared.url,
                headers=prepared.headers,
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("Transport failure on %s %s: %r", prepared.method, prepared.path, exc)
            return Err(TransportError(
                str(exc) or type(exc).__name__,
                method=prepared.method,
                path=prepared.path,
            ))

        return interpret_response(resp.status_code, resp.text, model, method=prepared.method, path=prepared.path)

    def call(self, api: EndpointLike, params: Params = None, model: Any = None) -> Any:
        return self.send(api, params, model).unwrap()

"""Remote identity client: authenticated GETs decoded into pydantic records."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from oauth_gate.errors import DecodeError, RequestBuildError, TransportError

T = TypeVar("T")

TOKEN_PARAM = "access_token"
REDACTED = "REDACTED"
USER_AGENT = "oauth-gate/0.1"


def redact_url(url: httpx.URL | str) -> str:
    """Render ``url`` with the access token replaced."""
    url = httpx.URL(url)
    if TOKEN_PARAM in url.params:
        url = url.copy_set_param(TOKEN_PARAM, REDACTED)
    return str(url)


def dump_request(request: httpx.Request) -> str:
    """Wire-style dump of an outgoing request, token redacted."""
    lines = [f"{request.method} {redact_url(request.url)} HTTP/1.1"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    return "\n".join(lines)


class RedactTokenFilter(logging.Filter):
    """Redacts the token from URLs httpx passes as log arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_url(arg) if isinstance(arg, httpx.URL) else arg for arg in record.args
            )
        return True


def install_token_redaction(logger: logging.Logger | None = None) -> RedactTokenFilter:
    """Attach a ``RedactTokenFilter`` to ``logger`` unless one is present.

    httpx logs every request URL at INFO, query string included, so the
    ``httpx`` logger is the default target.
    """
    target = logger or logging.getLogger("httpx")
    for existing in target.filters:
        if isinstance(existing, RedactTokenFilter):
            return existing
    token_filter = RedactTokenFilter()
    target.addFilter(token_filter)
    return token_filter


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


class RemoteIdentityClient:
    """Issues GET requests with the token passed as a query parameter.

    A fresh ``httpx.AsyncClient`` is opened per request, so one instance can
    serve concurrent checks. ``transport`` lets tests substitute a mock.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._log = logger or logging.getLogger(__name__)
        install_token_redaction()

    async def fetch_json(
        self,
        url: str,
        token: str,
        shape: type[T] | Any,
        params: dict[str, str] | None = None,
    ) -> T:
        """GET ``url`` and decode the JSON body as ``shape``.

        Raises RequestBuildError, TransportError or DecodeError.
        """
        query = dict(params or {})
        query[TOKEN_PARAM] = token

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self._timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        ) as client:
            try:
                request = client.build_request("GET", url, params=query)
            except httpx.InvalidURL as exc:
                self._log.warning("failed building request for %s", url)
                raise RequestBuildError(
                    f"Failed building request: {exc}", details={"url": url}
                ) from exc

            target = redact_url(request.url)
            try:
                response = await client.send(request)
            except httpx.UnsupportedProtocol as exc:
                self._log.warning("failed building request for %s", target)
                self._debug(request)
                raise RequestBuildError(
                    f"Unsupported URL for GET {target}", details={"url": target}
                ) from exc
            except httpx.HTTPError as exc:
                self._log.warning("failed making request to %s: %s", target, type(exc).__name__)
                self._debug(request)
                raise TransportError(
                    f"GET {target} failed: {type(exc).__name__}", details={"url": target}
                ) from exc

            if not response.is_success:
                self._log.warning(
                    "failed making request to %s: status %d", target, response.status_code
                )
                self._debug(request)
                raise TransportError(
                    f"GET {target} returned {response.status_code}",
                    status_code=response.status_code,
                    details={"url": target},
                )

            try:
                return _adapter(shape).validate_json(response.content)
            except ValidationError as exc:
                self._log.warning("failed decoding response from %s", target)
                self._debug(request)
                raise DecodeError(
                    f"GET {target} returned a malformed body",
                    details={"url": target, "errors": exc.error_count()},
                ) from exc

    def _debug(self, request: httpx.Request) -> None:
        self._log.debug("outgoing request:\n%s\n", dump_request(request))

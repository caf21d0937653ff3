"""Request executor: one authenticated call to the REST API.

Pure I/O glue: URL assembly, headers, JSON body, send through httpx, then hand
the raw response to `core.services.responses.decode_response`.
No retries and no rate limiting: every failure is raised to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from connectwise.adapters.http_client import build_async_client, build_headers
from connectwise.core.domain.models import (
    ApplicationFailure,
    ClientConfig,
    HttpMethod,
    RequestSpec,
)
from connectwise.core.errors import ApplicationError, ConfigurationError, TransportError
from connectwise.core.params import parameterize
from connectwise.core.services.responses import decode_response

logger = logging.getLogger(__name__)


def _transport_code(exc: httpx.TransportError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "ETIMEDOUT"
    if isinstance(exc, httpx.ConnectError):
        return "ECONNREFUSED"
    return "ETRANSPORT"


def _plain(params: Any) -> Any:
    if isinstance(params, BaseModel):
        return params.model_dump(mode="json", by_alias=True, exclude_none=True)
    return params


def build_request_spec(path: str | None, method: str | HttpMethod | None, params: Any = None) -> RequestSpec:
    """Validate the call arguments.

    Raises:
        ConfigurationError: missing path, missing or unknown method, or GET
            params that are neither a mapping nor a string.
    """

    if not path:
        raise ConfigurationError("path must be defined", field="path")
    if not method:
        raise ConfigurationError("method must be defined", field="method")
    try:
        http_method = HttpMethod(str(getattr(method, "value", method)).upper())
    except ValueError as exc:
        raise ConfigurationError(f"unsupported method: {method}", field="method") from exc

    params = _plain(params)
    if http_method is HttpMethod.GET and params and not isinstance(params, (str, Mapping)):
        raise ConfigurationError(
            f"GET params must be a mapping or a string, got {type(params).__name__}",
            field="params",
        )
    return RequestSpec(path=path, method=http_method, params=params)


class RestExecutor:
    """Sends requests for one `ClientConfig`.

    With `http_client` set, every call goes through that client (the caller
    owns its lifecycle). Otherwise each call opens and closes its own client.
    """

    def __init__(self, config: ClientConfig, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._http_client = http_client

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _build_url(self, spec: RequestSpec) -> str:
        url = spec.url_for(self._config.api_url)
        if spec.method is HttpMethod.GET and spec.params:
            url += parameterize(spec.params)
        return url

    async def _send(self, client: httpx.AsyncClient, spec: RequestSpec) -> httpx.Response:
        url = self._build_url(spec)
        headers = build_headers(self._config)
        content: str | None = None
        if spec.method.has_body:
            headers["Content-Type"] = "application/json"
            if spec.params is not None:
                content = json.dumps(spec.params)

        logger.debug("%s %s", spec.method.value, url)
        try:
            response = await client.request(
                spec.method.value,
                url,
                headers=headers,
                content=content,
                timeout=self._config.timeout_seconds,
            )
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", spec.method.value, url, exc)
            raise TransportError(_transport_code(exc), str(exc), [exc]) from exc
        logger.debug("%s %s -> %s", spec.method.value, url, response.status_code)
        return response

    async def execute(self, path: str, method: str | HttpMethod, params: Any = None) -> Any:
        """Perform `method` on `path` and return the decoded JSON body.

        Raises:
            ConfigurationError: invalid arguments (before any I/O).
            TransportError: network failure or timeout.
            ParseError: the body is not JSON.
            ApplicationError: the body reports a failure (`.body` is the payload).
        """

        spec = build_request_spec(path, method, params)
        if self._http_client is not None:
            response = await self._send(self._http_client, spec)
        else:
            async with build_async_client(self._config) as client:
                response = await self._send(client, spec)

        outcome = decode_response(spec.method, response.status_code, response.text)
        if isinstance(outcome, ApplicationFailure):
            raise ApplicationError(outcome.body)
        return outcome.body

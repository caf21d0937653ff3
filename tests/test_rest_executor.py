from __future__ import annotations

import json

import httpx
import pytest
from pydantic import BaseModel, Field

from connectwise.adapters import rest_executor
from connectwise.adapters.rest_executor import RestExecutor
from connectwise.core.errors import (
    ApiError,
    ApplicationError,
    ConfigurationError,
    ParseError,
    TransportError,
)

API = "https://cw.example.com/v4_6_release/apis/3.0"


@pytest.mark.asyncio
async def test_get_builds_url_query_and_headers(config, mock_client, sent):
    client = mock_client(lambda request: httpx.Response(200, json=[{"id": 1}]))
    executor = RestExecutor(config, http_client=client)

    body = await executor.execute("/x", "GET", {"a": 1, "b": 2})

    assert body == [{"id": 1}]
    request = sent[0]
    assert request.method == "GET"
    assert str(request.url) == f"{API}/x?a=1&b=2"
    assert request.headers["Authorization"] == config.auth
    assert request.headers["Cache-Control"] == "no-cache"
    assert request.headers["Accept"] == (
        "application/json; application/vnd.connectwise.com+json; version=3.0.0"
    )
    assert "Content-Type" not in request.headers


@pytest.mark.asyncio
async def test_get_query_values_with_delimiters(config, mock_client, sent):
    client = mock_client(lambda request: httpx.Response(200, json=[]))
    executor = RestExecutor(config, http_client=client)

    await executor.execute("/service/tickets", "GET", {"conditions": "summary like \"a&b=c d\""})

    assert sent[0].url.params["conditions"] == 'summary like "a&b=c d"'


@pytest.mark.asyncio
async def test_absolute_path_bypasses_api_url(config, mock_client, sent):
    client = mock_client(lambda request: httpx.Response(200, json={"id": 9}))
    executor = RestExecutor(config, http_client=client)

    await executor.execute("HTTPS://other.example.com/v1/thing", "GET")

    assert sent[0].url.host == "other.example.com"
    assert sent[0].url.path == "/v1/thing"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
async def test_write_methods_send_json_body(config, mock_client, sent, method):
    client = mock_client(lambda request: httpx.Response(200, json={"id": 7}))
    executor = RestExecutor(config, http_client=client)

    body = await executor.execute("/company/companies", method, {"name": "Acme"})

    assert body == {"id": 7}
    assert sent[0].method == method
    assert sent[0].headers["Content-Type"] == "application/json"
    assert json.loads(sent[0].content) == {"name": "Acme"}
    assert sent[0].url.query == b""


@pytest.mark.asyncio
async def test_post_without_params_has_no_body(config, mock_client, sent):
    client = mock_client(lambda request: httpx.Response(200, json={"ok": True}))
    executor = RestExecutor(config, http_client=client)

    await executor.execute("/system/ping", "post")

    assert sent[0].content == b""
    assert sent[0].headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_pydantic_params_are_dumped_by_alias(config, mock_client, sent):
    class Note(BaseModel):
        text: str
        internal: bool = Field(alias="internalAnalysisFlag")

    client = mock_client(lambda request: httpx.Response(201, json={"id": 1}))
    executor = RestExecutor(config, http_client=client)

    await executor.execute("/service/tickets/1/notes", "POST", Note(text="hi", internalAnalysisFlag=True))

    assert json.loads(sent[0].content) == {"text": "hi", "internalAnalysisFlag": True}


@pytest.mark.asyncio
async def test_delete_with_empty_body_resolves_to_empty_object(config, mock_client):
    client = mock_client(lambda request: httpx.Response(200, text=""))
    executor = RestExecutor(config, http_client=client)

    assert await executor.execute("/company/companies/1", "DELETE") == {}


@pytest.mark.asyncio
async def test_post_204_resolves_to_empty_object(config, mock_client):
    client = mock_client(lambda request: httpx.Response(204))
    executor = RestExecutor(config, http_client=client)

    assert await executor.execute("/company/companies", "POST", {"name": "x"}) == {}


@pytest.mark.asyncio
async def test_application_error_carries_the_body(config, mock_client):
    client = mock_client(lambda request: httpx.Response(200, json={"code": "ERR1", "message": "bad"}))
    executor = RestExecutor(config, http_client=client)

    with pytest.raises(ApplicationError) as excinfo:
        await executor.execute("/x", "GET")

    err = excinfo.value
    assert err.body == {"code": "ERR1", "message": "bad"}
    assert err.to_dict() == {"code": "ERR1", "message": "bad"}
    assert err.code == "ERR1"
    assert err.message == "bad"


@pytest.mark.asyncio
async def test_unparsable_body_is_parse_error(config, mock_client):
    client = mock_client(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))
    executor = RestExecutor(config, http_client=client)

    with pytest.raises(ParseError) as excinfo:
        await executor.execute("/x", "GET")

    assert excinfo.value.to_dict()["code"] == "EPARSE"
    assert excinfo.value.to_dict()["message"] == "Error parsing response from server."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("exc_type", "code"),
    [
        (httpx.ReadTimeout, "ETIMEDOUT"),
        (httpx.ConnectError, "ECONNREFUSED"),
        (httpx.RemoteProtocolError, "ETRANSPORT"),
    ],
)
async def test_transport_failures_are_wrapped(config, mock_client, exc_type, code):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("boom", request=request)

    executor = RestExecutor(config, http_client=mock_client(handler))

    with pytest.raises(TransportError) as excinfo:
        await executor.execute("/x", "GET")

    err = excinfo.value
    assert err.code == code
    assert err.message == "boom"
    assert isinstance(err.errors[0], exc_type)
    assert err.__cause__ is err.errors[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "method", "field"),
    [("", "GET", "path"), (None, "GET", "path"), ("/x", "", "method"), ("/x", "TRACE", "method")],
)
async def test_invalid_arguments_fail_before_io(config, mock_client, sent, path, method, field):
    executor = RestExecutor(config, http_client=mock_client(lambda request: httpx.Response(200, json={})))

    with pytest.raises(ConfigurationError) as excinfo:
        await executor.execute(path, method)

    assert excinfo.value.field == field
    assert not isinstance(excinfo.value, ApiError)
    assert sent == []


@pytest.mark.asyncio
async def test_without_injected_client_uses_configured_builder(config, monkeypatch, sent):
    built = []

    def fake_builder(cfg):
        built.append(cfg)

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200, json={"id": 1})

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(rest_executor, "build_async_client", fake_builder)
    executor = RestExecutor(config)

    assert await executor.execute("/x", "GET") == {"id": 1}
    assert await executor.execute("/y", "GET") == {"id": 1}
    assert built == [config, config]
    assert sent[1].extensions["timeout"]["read"] == config.timeout_seconds


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [0, False])
async def test_falsy_code_resolves_with_the_body(config, mock_client, code):
    client = mock_client(lambda request: httpx.Response(200, json={"code": code, "id": 1}))
    executor = RestExecutor(config, http_client=client)

    assert await executor.execute("/x", "GET") == {"code": code, "id": 1}


@pytest.mark.asyncio
async def test_get_with_list_params_fails_before_io(config, mock_client, sent):
    executor = RestExecutor(config, http_client=mock_client(lambda request: httpx.Response(200, json=[])))

    with pytest.raises(ConfigurationError) as excinfo:
        await executor.execute("/x", "GET", ["a", "b"])

    assert excinfo.value.field == "params"
    assert sent == []

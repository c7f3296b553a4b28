import asyncio
import logging
from typing import Optional
from unittest.mock import MagicMock

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from paycheckout.client.http import AsyncClient, Client
from paycheckout.client.types import ApiAuth, ApiConnection
from paycheckout.core.exceptions import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    CardError,
    IdempotencyError,
    InvalidRequestError,
    PermissionDeniedError,
    RateLimitError,
    ResponseDecodeError,
)


class Thing(BaseModel):
    id: str


def _connection(**overrides) -> ApiConnection:
    fields = dict(
        base_url="https://api.example.test/v1",
        timeout_seconds=1.0,
        headers={},
        auth=ApiAuth(kind="bearer", secret_key="sk_test_123"),
    )
    fields.update(overrides)
    return ApiConnection(**fields)


def _client(handler, **overrides) -> Client:
    http = httpx.Client(base_url="https://api.example.test/v1", transport=httpx.MockTransport(handler))
    return Client(_connection(**overrides), client=http)


def _error_handler(status_code, error=None, **kwargs):
    def handler(request):
        body = {"error": error} if error is not None else {}
        return httpx.Response(status_code, json=body, headers={"request-id": "req_err"}, **kwargs)

    return handler


def test_post_form_with_mocked_httpx_client():
    http = MagicMock(spec=httpx.Client)

    response = MagicMock()
    response.is_success = True
    response.status_code = 200
    response.headers = {}
    response.json.return_value = {"id": "thing_1"}
    http.post.return_value = response

    client = Client(_connection(api_version="2020-08-27"), client=http)
    result = client.post_form("/things", {"name": "x", "tags": ["a"]}, Thing)

    http.post.assert_called_once_with(
        "/things",
        data={"name": "x", "tags[0]": "a"},
        headers={"Authorization": "Bearer sk_test_123", "Stripe-Version": "2020-08-27"},
    )
    assert result == Thing(id="thing_1")


def test_post_form_accepts_plain_pydantic_models():
    class Params(BaseModel):
        name: str
        note: Optional[str] = None

    http = MagicMock(spec=httpx.Client)
    response = MagicMock(is_success=True, status_code=200, headers={})
    response.json.return_value = {"id": "thing_1"}
    http.post.return_value = response

    Client(_connection(), client=http).post_form("/things", Params(name="x"), Thing)

    _, kwargs = http.post.call_args
    assert kwargs["data"] == {"name": "x"}


@pytest.mark.parametrize(
    "status_code, error_type, expected",
    [
        (400, "invalid_request_error", InvalidRequestError),
        (401, None, AuthenticationError),
        (402, "card_error", CardError),
        (403, None, PermissionDeniedError),
        (404, "invalid_request_error", InvalidRequestError),
        (409, None, IdempotencyError),
        (400, "idempotency_error", IdempotencyError),
        (429, None, RateLimitError),
        (500, "api_error", ApiError),
    ],
)
def test_error_status_maps_to_exception(status_code, error_type, expected):
    error = {"message": "nope", "type": error_type, "code": "some_code", "param": "customer"}
    client = _client(_error_handler(status_code, error))

    with pytest.raises(expected) as exc_info:
        client.post_form("/things", {}, Thing)

    exc = exc_info.value
    assert type(exc) is expected
    assert exc.status_code == status_code
    assert exc.error_type == error_type
    assert exc.code == "some_code"
    assert exc.param == "customer"
    assert exc.request_id == "req_err"
    assert exc.message == "nope"
    assert "request_id=req_err" in str(exc)


def test_error_without_error_object_uses_status_message():
    client = _client(_error_handler(500))

    with pytest.raises(ApiError) as exc_info:
        client.post_form("/things", {}, Thing)

    assert exc_info.value.message == "API returned HTTP 500"


def test_non_json_error_body():
    client = _client(lambda request: httpx.Response(502, text="Bad gateway"))

    with pytest.raises(ResponseDecodeError) as exc_info:
        client.post_form("/things", {}, Thing)

    assert exc_info.value.status_code == 502
    assert "Bad gateway" in exc_info.value.message


def test_non_json_success_body():
    client = _client(lambda request: httpx.Response(200, text="<html>", headers={"content-type": "text/html"}))

    with pytest.raises(ResponseDecodeError) as exc_info:
        client.post_form("/things", {}, Thing)

    assert "text/html" in exc_info.value.message


def test_response_not_matching_model():
    client = _client(lambda request: httpx.Response(200, json={"unexpected": True}))

    with pytest.raises(ResponseDecodeError) as exc_info:
        client.post_form("/things", {}, Thing)

    assert isinstance(exc_info.value.__cause__, ValidationError)
    assert exc_info.value.body == {"unexpected": True}


def test_transport_failure_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(ApiConnectionError) as exc_info:
        client.post_form("/things", {}, Thing)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_async_error_mapping():
    async def run():
        http = httpx.AsyncClient(
            base_url="https://api.example.test/v1",
            transport=httpx.MockTransport(_error_handler(401, {"message": "Invalid API Key"})),
        )
        async with AsyncClient(_connection(), client=http) as client:
            await client.post_form("/things", {}, Thing)

    with pytest.raises(AuthenticationError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.message == "Invalid API Key"


def test_async_transport_failure_is_wrapped():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async def run():
        http = httpx.AsyncClient(base_url="https://api.example.test/v1", transport=httpx.MockTransport(handler))
        async with AsyncClient(_connection(), client=http) as client:
            await client.post_form("/things", {}, Thing)

    with pytest.raises(ApiConnectionError):
        asyncio.run(run())


def test_client_builds_httpx_client_from_connection():
    client = Client(_connection(timeout_seconds=7.5))
    try:
        assert str(client._client.base_url) == "https://api.example.test/v1/"
        assert client._client.timeout.read == 7.5
    finally:
        client.close()


def test_failed_request_logs_warning_with_remote_request_id(caplog):
    client = _client(_error_handler(400, {"message": "nope", "type": "invalid_request_error"}))

    with caplog.at_level(logging.DEBUG, logger="paycheckout"):
        with pytest.raises(InvalidRequestError):
            client.post_form("/things", {"name": "x"}, Thing)

    ours = [r for r in caplog.records if r.name == "paycheckout.client.http"]
    sent = [r for r in ours if r.levelno == logging.DEBUG]
    failed = [r for r in ours if r.levelno == logging.WARNING]

    assert sent and "POST /things" in sent[0].getMessage()
    assert len(failed) == 1
    assert failed[0].request_id == "req_err"
    assert "status=400" in failed[0].getMessage()


def test_successful_request_logs_debug_with_remote_request_id(caplog):
    client = _client(lambda request: httpx.Response(200, json={"id": "thing_1"}, headers={"request-id": "req_ok"}))

    with caplog.at_level(logging.DEBUG, logger="paycheckout"):
        client.post_form("/things", {}, Thing)

    done = [
        r for r in caplog.records
        if r.name == "paycheckout.client.http" and "-> 200" in r.getMessage()
    ]
    assert len(done) == 1
    assert done[0].request_id == "req_ok"

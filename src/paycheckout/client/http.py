from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from paycheckout.client.auth import build_auth_headers
from paycheckout.client.form import encode_form
from paycheckout.client.types import ApiConnection
from paycheckout.core.exceptions import (
    ApiConnectionError,
    ResponseDecodeError,
    error_class_for,
)
from paycheckout.core.logger import get_logger, push_request_id, reset_request_id

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

FormParams = Union[BaseModel, Mapping[str, Any], None]

REQUEST_ID_HEADER = "request-id"


def params_to_mapping(params: FormParams) -> Dict[str, Any]:
    """Turn request params into a plain mapping with unset fields dropped."""
    if params is None:
        return {}
    to_params = getattr(params, "to_params", None)
    if callable(to_params):
        return to_params()
    if isinstance(params, BaseModel):
        return params.model_dump(mode="json", exclude_none=True)
    return dict(params)


class _BaseClient:
    def __init__(self, connection: ApiConnection):
        self.connection = connection

        headers = dict(connection.headers)
        headers.update(build_auth_headers(connection.auth))
        if connection.api_version:
            headers["Stripe-Version"] = connection.api_version
        self._headers = headers

    def _request_headers(self, idempotency_key: Optional[str]) -> Dict[str, str]:
        headers = dict(self._headers)
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key
        return headers

    @staticmethod
    def _form_body(params: FormParams) -> Dict[str, str]:
        # Bracketed keys carry the list index, so pairs never repeat a key.
        return dict(encode_form(params_to_mapping(params)))

    def _handle_response(self, resp: httpx.Response, path: str, response_model: Type[T]) -> T:
        request_id = resp.headers.get(REQUEST_ID_HEADER)
        token = push_request_id(request_id)
        try:
            if not resp.is_success:
                raise self._error_from_response(resp, path, request_id)

            try:
                data: Any = resp.json()
            except ValueError as e:
                content_type = resp.headers.get("content-type", "unknown")
                raise ResponseDecodeError(
                    f"Failed to parse API response as JSON. Content-Type: {content_type}. "
                    f"Response preview: {resp.text[:500]}",
                    status_code=resp.status_code,
                    request_id=request_id,
                ) from e

            try:
                result = response_model.model_validate(data)
            except ValidationError as e:
                raise ResponseDecodeError(
                    f"Response from {path} does not match {response_model.__name__}",
                    status_code=resp.status_code,
                    request_id=request_id,
                    body=data if isinstance(data, dict) else None,
                ) from e

            logger.debug("POST %s -> %s", path, resp.status_code)
            return result
        finally:
            reset_request_id(token)

    def _error_from_response(self, resp: httpx.Response, path: str, request_id: Optional[str]):
        try:
            body = resp.json()
        except ValueError:
            logger.warning("POST %s failed with non-JSON body (status=%s)", path, resp.status_code)
            return ResponseDecodeError(
                f"API returned HTTP {resp.status_code} with a non-JSON body: {resp.text[:500]}",
                status_code=resp.status_code,
                request_id=request_id,
            )

        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            error = {}

        error_type = error.get("type")
        exc_class = error_class_for(resp.status_code, error_type)
        logger.warning(
            "POST %s failed: status=%s type=%s code=%s",
            path,
            resp.status_code,
            error_type,
            error.get("code"),
        )
        return exc_class(
            error.get("message") or f"API returned HTTP {resp.status_code}",
            status_code=resp.status_code,
            error_type=error_type,
            code=error.get("code"),
            param=error.get("param"),
            request_id=request_id,
            body=body if isinstance(body, dict) else None,
        )


class Client(_BaseClient):
    """Blocking client: ``post_form`` returns the deserialized model."""

    def __init__(
        self,
        connection: ApiConnection,
        *,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(connection)
        self._client = client or httpx.Client(
            base_url=connection.base_url,
            timeout=connection.timeout_seconds,
        )

    def post_form(
        self,
        path: str,
        params: FormParams,
        response_model: Type[T],
        *,
        idempotency_key: Optional[str] = None,
    ) -> T:
        data = self._form_body(params)
        logger.debug("POST %s with %d form fields", path, len(data))
        try:
            resp = self._client.post(path, data=data, headers=self._request_headers(idempotency_key))
        except httpx.TransportError as e:
            logger.warning("POST %s failed before a response was received: %s", path, e)
            raise ApiConnectionError(f"Request to {path} failed: {e}") from e
        return self._handle_response(resp, path, response_model)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncClient(_BaseClient):
    """Non-blocking client: ``post_form`` returns an awaitable of the model."""

    def __init__(
        self,
        connection: ApiConnection,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(connection)
        self._client = client or httpx.AsyncClient(
            base_url=connection.base_url,
            timeout=connection.timeout_seconds,
        )

    async def post_form(
        self,
        path: str,
        params: FormParams,
        response_model: Type[T],
        *,
        idempotency_key: Optional[str] = None,
    ) -> T:
        data = self._form_body(params)
        logger.debug("POST %s with %d form fields", path, len(data))
        try:
            resp = await self._client.post(path, data=data, headers=self._request_headers(idempotency_key))
        except httpx.TransportError as e:
            logger.warning("POST %s failed before a response was received: %s", path, e)
            raise ApiConnectionError(f"Request to {path} failed: {e}") from e
        return self._handle_response(resp, path, response_model)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

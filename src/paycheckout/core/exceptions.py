"""
Exception classes for the paycheckout client.

Every failure of a remote call is raised by the HTTP client layer as one of
these types. Resource helpers let them propagate to the caller untouched.
"""

from typing import Any, Dict, Optional


class PaycheckoutException(Exception):
    """Base exception class for all paycheckout exceptions."""

    pass


class ConfigurationError(PaycheckoutException):
    """Raised when client configuration cannot be turned into a working client."""

    pass


class ApiConnectionError(PaycheckoutException):
    """Raised when the request never produced an HTTP response (DNS, TLS, timeout...)."""

    pass


class ApiError(PaycheckoutException):
    """
    Raised when the remote API answers with an error.

    Carries the fields of the API's error object when the body could be parsed.

    Example:
        >>> try:
        ...     CheckoutSession.create(client, params)
        ... except ApiError as e:
        ...     print(e.status_code, e.code, e.param)
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
        param: Optional[str] = None,
        request_id: Optional[str] = None,
        body: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.code = code
        self.param = param
        self.request_id = request_id
        self.body = body or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.param:
            parts.append(f"param={self.param}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        return " | ".join(parts)


class InvalidRequestError(ApiError):
    """Raised for 400/404 responses: bad parameters or unknown resources."""

    pass


class AuthenticationError(ApiError):
    """Raised for 401 responses: missing or invalid secret key."""

    pass


class CardError(ApiError):
    """Raised for 402 responses."""

    pass


class PermissionDeniedError(ApiError):
    """Raised for 403 responses: the key lacks access to the resource."""

    pass


class IdempotencyError(ApiError):
    """Raised when an Idempotency-Key was reused with different parameters."""

    pass


class RateLimitError(ApiError):
    """Raised for 429 responses."""

    pass


class ResponseDecodeError(ApiError):
    """Raised when a response body is not JSON or does not fit the expected model."""

    pass


_STATUS_ERRORS = {
    400: InvalidRequestError,
    401: AuthenticationError,
    402: CardError,
    403: PermissionDeniedError,
    404: InvalidRequestError,
    409: IdempotencyError,
    429: RateLimitError,
}


def error_class_for(status_code: int, error_type: Optional[str] = None) -> type:
    """Pick the ApiError subclass for an HTTP status and the API's error type."""
    if error_type == "idempotency_error":
        return IdempotencyError
    return _STATUS_ERRORS.get(status_code, ApiError)

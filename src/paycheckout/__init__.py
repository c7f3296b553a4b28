"""paycheckout.

Client for the checkout-session resource of a Stripe-style payment API.

Build a ``CreateCheckoutSession``, pass it with a ``Client`` (or
``AsyncClient``) to ``CheckoutSession.create`` and get back the created
session.
"""

from paycheckout.client.http import AsyncClient, Client
from paycheckout.client.types import ApiAuth, ApiConnection
from paycheckout.core.exceptions import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    CardError,
    ConfigurationError,
    IdempotencyError,
    InvalidRequestError,
    PaycheckoutException,
    PermissionDeniedError,
    RateLimitError,
    ResponseDecodeError,
)
from paycheckout.models.client_config import ClientConfig
from paycheckout.resources.checkout_session import CheckoutSession
from paycheckout.resources.checkout_session_params import (
    CheckoutSessionLineItem,
    CheckoutSessionLineItemPriceData,
    CheckoutSessionLineItemPriceDataProductData,
    CreateCheckoutSession,
)
from paycheckout.resources.types import (
    CheckoutSessionBillingAddressCollection,
    CheckoutSessionLocale,
    CheckoutSessionMode,
    CheckoutSessionSubmitType,
    Currency,
)
from paycheckout.wiring.client_wiring import build_async_client, build_client

__version__ = "0.1.0"

__all__ = [
    "ApiAuth",
    "ApiConnection",
    "ApiConnectionError",
    "ApiError",
    "AsyncClient",
    "AuthenticationError",
    "CardError",
    "CheckoutSession",
    "CheckoutSessionBillingAddressCollection",
    "CheckoutSessionLineItem",
    "CheckoutSessionLineItemPriceData",
    "CheckoutSessionLineItemPriceDataProductData",
    "CheckoutSessionLocale",
    "CheckoutSessionMode",
    "CheckoutSessionSubmitType",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "CreateCheckoutSession",
    "Currency",
    "IdempotencyError",
    "InvalidRequestError",
    "PaycheckoutException",
    "PermissionDeniedError",
    "RateLimitError",
    "ResponseDecodeError",
    "build_async_client",
    "build_client",
]

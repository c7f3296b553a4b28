from __future__ import annotations

from typing import Annotated, Any, Awaitable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from paycheckout.client.http import AsyncClient, Client
from paycheckout.resources.checkout_session_params import CreateCheckoutSession
from paycheckout.resources.types import (
    CheckoutSessionBillingAddressCollection,
    CheckoutSessionLocale,
    CheckoutSessionMode,
    CheckoutSessionSubmitType,
)


CHECKOUT_SESSIONS_PATH = "/checkout/sessions"

# Known values parse into the enum; values added to the API later stay strings.
OpenBillingAddressCollection = Annotated[
    Union[CheckoutSessionBillingAddressCollection, str], Field(union_mode="left_to_right")
]
OpenLocale = Annotated[Union[CheckoutSessionLocale, str], Field(union_mode="left_to_right")]
OpenMode = Annotated[Union[CheckoutSessionMode, str], Field(union_mode="left_to_right")]
OpenSubmitType = Annotated[Union[CheckoutSessionSubmitType, str], Field(union_mode="left_to_right")]


class CheckoutSession(BaseModel):
    """A Checkout Session as returned by the API.

    Values the enums do not know yet are kept as plain strings, and unknown
    fields are preserved as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    object: str = "checkout.session"

    cancel_url: Optional[str] = None
    success_url: Optional[str] = None
    url: Optional[str] = None

    client_reference_id: Optional[str] = None
    customer: Optional[Union[str, Dict[str, Any]]] = None
    customer_email: Optional[str] = None
    billing_address_collection: Optional[OpenBillingAddressCollection] = None

    livemode: bool = False
    locale: Optional[OpenLocale] = None
    mode: Optional[OpenMode] = None
    submit_type: Optional[OpenSubmitType] = None
    payment_method_types: List[str] = Field(default_factory=list)

    # Expandable: an id, or the full object when requested with expand[].
    payment_intent: Optional[Union[str, Dict[str, Any]]] = None
    setup_intent: Optional[Union[str, Dict[str, Any]]] = None
    subscription: Optional[Union[str, Dict[str, Any]]] = None

    payment_status: Optional[str] = None
    status: Optional[str] = None
    amount_subtotal: Optional[int] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None

    metadata: Optional[Dict[str, str]] = None
    created: Optional[int] = None
    expires_at: Optional[int] = None

    @classmethod
    def create(
        cls,
        client: Union[Client, AsyncClient],
        params: CreateCheckoutSession,
        **kwargs: Any,
    ) -> Union[CheckoutSession, Awaitable[CheckoutSession]]:
        """Create a Checkout Session.

        ``client`` is a ``Client`` or ``AsyncClient``; the result is a
        ``CheckoutSession`` for the former and an awaitable of one for the
        latter. Errors raised by the client are not caught here.

        For more details see https://stripe.com/docs/api/checkout/sessions/create
        """
        return client.post_form(CHECKOUT_SESSIONS_PATH, params, cls, **kwargs)

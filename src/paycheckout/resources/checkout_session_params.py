"""
Parameters for ``CheckoutSession.create``.

See https://stripe.com/docs/api/checkout/sessions/create for the field
reference. Every optional field left as ``None`` is dropped from the encoded
form body rather than sent as an empty value.

Not modeled yet: ``payment_intent_data``, ``setup_intent_data`` and
``subscription_data`` on the session, and ``images``/``metadata`` on product
data.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from paycheckout.resources.types import (
    CheckoutSessionBillingAddressCollection,
    CheckoutSessionLocale,
    CheckoutSessionMode,
    CheckoutSessionSubmitType,
    Currency,
)


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_params(self) -> Dict[str, Any]:
        """Wire representation: JSON-compatible values with unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class CheckoutSessionLineItemPriceDataProductData(_Params):
    name: str
    description: Optional[str] = None


class CheckoutSessionLineItemPriceData(_Params):
    # Amount per unit in the currency's minor unit (e.g. cents).
    unit_amount: int
    currency: Currency
    product_data: CheckoutSessionLineItemPriceDataProductData


class CheckoutSessionLineItem(_Params):
    """One purchasable entry of a session.

    The API accepts exactly one of ``price``, ``price_data`` or ``amount``;
    only inline ``price_data`` is modeled here.
    """

    quantity: int
    price_data: CheckoutSessionLineItemPriceData

    description: Optional[str] = None
    images: Optional[List[str]] = None
    # Tax rate ids applied depending on the customer's billing/shipping address.
    dynamic_tax_rates: Optional[List[str]] = None


class CreateCheckoutSession(_Params):
    """The parameters for ``CheckoutSession.create``.

    Required:
        cancel_url: Where the customer goes if they cancel and return to your site.
        success_url: Where the customer goes after a successful payment or subscription.
        payment_method_types: Payment method types the session accepts, e.g. ``["card"]``.

    Optional:
        client_reference_id: Your own reference (cart id, user id) to reconcile the session.
        customer: Id of an existing customer; a new one is created otherwise.
        customer_email: Prefills the email of the customer created by Checkout.
        billing_address_collection: ``auto`` or ``required``.
        line_items: What the customer is purchasing.
        locale: Language Checkout is displayed in.
        mode: ``payment``, ``setup`` or ``subscription``.
        submit_type: Submit button wording; only for sessions with line items.
    """

    cancel_url: str
    success_url: str
    payment_method_types: List[str]

    client_reference_id: Optional[str] = None
    customer: Optional[str] = None
    customer_email: Optional[str] = None
    billing_address_collection: Optional[CheckoutSessionBillingAddressCollection] = None
    line_items: Optional[List[CheckoutSessionLineItem]] = None
    locale: Optional[CheckoutSessionLocale] = None
    mode: Optional[CheckoutSessionMode] = None
    submit_type: Optional[CheckoutSessionSubmitType] = None

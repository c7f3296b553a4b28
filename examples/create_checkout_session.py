"""
Example: Creating a Checkout Session.

Reads the secret key from STRIPE_SECRET_KEY, creates a one-item payment
session and prints the hosted checkout URL. The async variant does the same
with AsyncClient.
"""

import asyncio

from paycheckout import (
    CheckoutSession,
    CheckoutSessionLineItem,
    CheckoutSessionLineItemPriceData,
    CheckoutSessionLineItemPriceDataProductData,
    CheckoutSessionMode,
    ClientConfig,
    CreateCheckoutSession,
    Currency,
    build_async_client,
    build_client,
)

params = CreateCheckoutSession(
    cancel_url="http://localhost:3000/cancel",
    success_url="http://localhost:3000/success",
    payment_method_types=["card"],
    client_reference_id="cart_42",
    mode=CheckoutSessionMode.PAYMENT,
    line_items=[
        CheckoutSessionLineItem(
            quantity=1,
            price_data=CheckoutSessionLineItemPriceData(
                unit_amount=2000,
                currency=Currency.USD,
                product_data=CheckoutSessionLineItemPriceDataProductData(name="Purchase 2000 credits"),
            ),
        )
    ],
)

config = ClientConfig.from_env()


# =============================================================================
# Example 1: Blocking client
# =============================================================================
with build_client(config) as client:
    session = CheckoutSession.create(client, params)
print(f"Session {session.id}: {session.url}")


# =============================================================================
# Example 2: Async client
# =============================================================================
async def main() -> None:
    async with build_async_client(config) as client:
        session = await CheckoutSession.create(client, params, idempotency_key="cart_42-v1")
    print(f"Session {session.id}: {session.url}")


asyncio.run(main())

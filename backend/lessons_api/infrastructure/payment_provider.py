"""Stripe Checkout Gateway — mints hosted checkout sessions for the premium offer.

Invariants:
    - One line item, quantity 1, card payments, mode=payment
    - All Stripe failures mapped to UpstreamFailureError (core/errors.py); no retry
    - Never blocks the event loop: the SDK call runs in a worker thread

Design Decisions:
    - api_key passed per call instead of setting stripe.api_key globally (ADR: no global state)
"""

import asyncio
import logging

import stripe

from lessons_api.core.errors import UpstreamFailureError

logger = logging.getLogger(__name__)


class StripeCheckoutGateway:
    """CheckoutGateway backed by Stripe Checkout."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    async def create_session(
        self,
        *,
        product_name: str,
        unit_amount: int,
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> str:
        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create,
                api_key=self._api_key,
                payment_method_types=["card"],
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {"name": product_name},
                            "unit_amount": unit_amount,
                        },
                        "quantity": 1,
                    },
                ],
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error(
                f"Stripe checkout failed: {e.user_message or type(e).__name__}",
                extra={"collaborator": "stripe"},
            )
            raise UpstreamFailureError("Payment provider", "checkout session")
        return session.url

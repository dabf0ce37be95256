"""Billing Handlers — create_checkout_session, confirm_payment.

Invariants:
    - Checkout always sells the single fixed PremiumOffer; no pending-session record is kept
    - confirm_payment only touches the caller's own account (never a body-supplied email)

Design Decisions:
    - confirm_payment trusts the verified caller identity as proof of payment and does NOT
      consult the payment provider (existing contract). Logged at WARNING on every call
      so the gap stays visible in production logs.
"""

import logging

from lessons_api.core.domain_types import CallerIdentity, PremiumOffer
from lessons_api.core.repository_protocols import CheckoutGateway, Store
from lessons_api.services.handle_accounts import AccountHandlers

logger = logging.getLogger(__name__)


class BillingHandlers:
    """Premium purchase handoff and confirmation."""

    def __init__(self, store: Store, gateway: CheckoutGateway, offer: PremiumOffer):
        self.store = store
        self.gateway = gateway
        self.offer = offer

    async def create_checkout_session(self, caller: CallerIdentity) -> str:
        """Mint a hosted checkout session and return its redirect URL."""
        url = await self.gateway.create_session(
            product_name=self.offer.product_name,
            unit_amount=self.offer.unit_amount,
            currency=self.offer.currency,
            success_url=self.offer.success_url,
            cancel_url=self.offer.cancel_url,
        )
        logger.info("Checkout session created", extra={"caller_email": caller.email})
        return url

    async def confirm_payment(self, caller: CallerIdentity) -> None:
        logger.warning(
            "Premium granted without provider-side payment verification",
            extra={"caller_email": caller.email},
        )
        await AccountHandlers(self.store).mark_premium(caller)

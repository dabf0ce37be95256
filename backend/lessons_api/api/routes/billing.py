"""Billing Routes — checkout session handoff and payment confirmation.

Invariants:
    - Both routes require a verified caller
    - /payments/success only upgrades the caller's own account; the body is ignored

Design Decisions:
    - No provider-side verification on /payments/success (existing contract, see
      services/handle_billing.py)
"""

from fastapi import APIRouter, Depends

from lessons_api.api.dependencies import (
    get_caller, get_checkout_gateway, get_premium_offer, get_store,
)
from lessons_api.core.domain_types import CallerIdentity, PremiumOffer
from lessons_api.core.repository_protocols import CheckoutGateway, Store
from lessons_api.schemas.billing import (
    CheckoutSessionResponse, PaymentConfirmation,
)
from lessons_api.services.handle_billing import BillingHandlers

router = APIRouter(prefix="/api/v1/payments", tags=["billing"])


@router.post("/checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
    gateway: CheckoutGateway = Depends(get_checkout_gateway),
    offer: PremiumOffer = Depends(get_premium_offer),
):
    url = await BillingHandlers(store, gateway, offer).create_checkout_session(caller)
    return CheckoutSessionResponse(url=url)


@router.post("/success", response_model=PaymentConfirmation)
async def confirm_payment(
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
    gateway: CheckoutGateway = Depends(get_checkout_gateway),
    offer: PremiumOffer = Depends(get_premium_offer),
):
    await BillingHandlers(store, gateway, offer).confirm_payment(caller)
    return PaymentConfirmation(success=True)

"""Request Dependencies — identity gate, admin elevation and per-request collaborators.

Invariants:
    - get_caller rejects before any store access: no header → MISSING_CREDENTIAL,
      rejected token → INVALID_CREDENTIAL
    - require_admin always depends on get_caller (elevation never replaces identity)
    - get_optional_caller: absent or blank header → anonymous; present-but-invalid still rejected
    - Store is built per request over the request's AsyncSession

Design Decisions:
    - Provider clients live on app.state (created in lifespan) and are resolved through
      dependencies, so tests swap them with app.dependency_overrides
"""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lessons_api.config import get_settings
from lessons_api.core.access_policy import parse_bearer_token
from lessons_api.core.domain_types import CallerIdentity, PremiumOffer
from lessons_api.core.errors import UpstreamFailureError
from lessons_api.core.repository_protocols import (
    CheckoutGateway, IdentityVerifier, Store,
)
from lessons_api.infrastructure.database import get_db
from lessons_api.infrastructure.repositories import build_store
from lessons_api.services.handle_admin import AdminHandlers


async def get_store(db: AsyncSession = Depends(get_db)) -> Store:
    return build_store(db)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    verifier = getattr(request.app.state, "identity_verifier", None)
    if verifier is None:
        raise UpstreamFailureError("Identity provider", "lookup")
    return verifier


def get_checkout_gateway(request: Request) -> CheckoutGateway:
    gateway = getattr(request.app.state, "checkout_gateway", None)
    if gateway is None:
        raise UpstreamFailureError("Payment provider", "lookup")
    return gateway


def get_premium_offer() -> PremiumOffer:
    settings = get_settings()
    base = settings.client_url.rstrip("/")
    return PremiumOffer(
        product_name=settings.premium_product_name,
        unit_amount=settings.premium_unit_amount,
        currency=settings.premium_currency,
        success_url=f"{base}/payment/success",
        cancel_url=f"{base}/payment/cancel",
    )


async def get_caller(
    authorization: str | None = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> CallerIdentity:
    """Resolve the bearer credential into a verified caller."""
    token = parse_bearer_token(authorization)
    return await verifier.verify(token)


async def get_optional_caller(
    authorization: str | None = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> CallerIdentity | None:
    if authorization is None or not authorization.strip():
        return None
    token = parse_bearer_token(authorization)
    return await verifier.verify(token)


async def require_admin(
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
) -> CallerIdentity:
    """Admin elevation, applied after identity resolution."""
    await AdminHandlers(store).require_admin(caller)
    return caller

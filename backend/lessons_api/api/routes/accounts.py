"""Account Routes — registration and lookup by email.

Invariants:
    - POST /users is unauthenticated and idempotent (200 + created=false on repeat)
    - GET /users/{email} requires any verified caller (not restricted to self)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from lessons_api.api.dependencies import get_caller, get_store
from lessons_api.core.domain_types import CallerIdentity, Email, RegistrationOutcome
from lessons_api.core.repository_protocols import Store
from lessons_api.schemas.account import (
    AccountRegister, AccountResponse, RegistrationResponse,
)
from lessons_api.services.handle_accounts import AccountHandlers

router = APIRouter(prefix="/api/v1/users", tags=["accounts"])


@router.post(
    "", response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_account(
    body: AccountRegister, store: Store = Depends(get_store),
):
    """Register the profile; repeat registrations are a no-op."""
    outcome, _ = await AccountHandlers(store).register(body.model_dump())
    if outcome == RegistrationOutcome.ALREADY_EXISTS:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=RegistrationResponse(
                message="User already exists", created=False,
            ).model_dump(by_alias=True),
        )
    return RegistrationResponse(message="User created", created=True)


@router.get("/{email}", response_model=AccountResponse)
async def get_account(
    email: str,
    caller: CallerIdentity = Depends(get_caller),
    store: Store = Depends(get_store),
):
    return await AccountHandlers(store).get_account(Email(email.strip().lower()))

"""Account Handlers — register, get_account, mark_premium.

Invariants:
    - register is idempotent: an existing email yields ALREADY_EXISTS, never a second account
    - New accounts always start as role=user, is_premium=False
    - mark_premium only ever targets the caller's own verified email

Design Decisions:
    - Existence check + insert_if_absent: the check answers the common case cheaply,
      the store's unique email settles concurrent duplicates (ADR: no locks)
"""

import logging
from datetime import datetime, timezone

from lessons_api.core.build_records import build_account_record
from lessons_api.core.domain_types import (
    CallerIdentity, Email, RegistrationOutcome,
)
from lessons_api.core.errors import ResourceNotFoundError
from lessons_api.core.repository_protocols import Store

logger = logging.getLogger(__name__)


class AccountHandlers:
    """Account lifecycle handlers."""

    def __init__(self, store: Store):
        self.store = store

    async def register(self, profile: dict) -> tuple[RegistrationOutcome, dict]:
        """Create the account unless the email is already registered."""
        email = profile["email"]
        existing = await self.store.accounts.get_by_email(email)
        if existing is not None:
            return RegistrationOutcome.ALREADY_EXISTS, existing

        record = build_account_record(profile, datetime.now(timezone.utc))
        created = await self.store.accounts.insert_if_absent(record)
        if not created:
            # Lost a concurrent registration race for the same email
            existing = await self.store.accounts.get_by_email(email)
            return RegistrationOutcome.ALREADY_EXISTS, existing or record

        logger.info("Account registered", extra={"caller_email": email})
        return RegistrationOutcome.CREATED, record

    async def get_account(self, email: Email) -> dict:
        account = await self.store.accounts.get_by_email(email)
        if account is None:
            raise ResourceNotFoundError("Account", email)
        return account

    async def mark_premium(self, caller: CallerIdentity) -> None:
        """Flip is_premium on the caller's own account."""
        updated = await self.store.accounts.set_premium(caller.email)
        if not updated:
            raise ResourceNotFoundError("Account", caller.email)
        logger.info("Account marked premium", extra={"caller_email": caller.email})

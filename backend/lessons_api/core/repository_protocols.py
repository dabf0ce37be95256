"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO (store, identity provider, payment provider) accessed through Protocol types
    - Records cross the boundary as plain dicts with snake_case keys
    - add_to_set is duplicate-free at the store, not in application code

Design Decisions:
    - Protocol over ABC: structural subtyping, the in-memory test store needs no inheritance
    - Store bundles the three repositories and is injected per request
      (ADR: no module-global collection handles, no startup-ordering requirement)
"""

from dataclasses import dataclass
from typing import Protocol

from lessons_api.core.domain_types import (
    CallerIdentity, Email, LessonId, LessonQuery, SetField,
)


class AccountRepository(Protocol):
    """Contract for account persistence — implemented by shell."""
    async def get_by_email(self, email: Email) -> dict | None: ...
    async def insert_if_absent(self, account: dict) -> bool: ...
    async def list_all(self) -> list[dict]: ...
    async def set_premium(self, email: Email) -> bool: ...
    async def count(self) -> int: ...


class LessonRepository(Protocol):
    """Contract for lesson persistence — implemented by shell."""
    async def get_by_id(self, lesson_id: LessonId) -> dict | None: ...
    async def find(self, query: LessonQuery) -> list[dict]: ...
    async def insert(self, lesson: dict) -> dict: ...
    async def update(self, lesson_id: LessonId, fields: dict) -> dict | None: ...
    async def delete(self, lesson_id: LessonId) -> bool: ...
    async def add_to_set(
        self, lesson_id: LessonId, set_field: SetField, email: Email,
    ) -> bool: ...
    async def count(self) -> int: ...


class ReportRepository(Protocol):
    """Contract for report persistence (append-only) — implemented by shell."""
    async def insert(self, report: dict) -> dict: ...
    async def list_all(self) -> list[dict]: ...
    async def count(self) -> int: ...


class IdentityVerifier(Protocol):
    """Contract for the external identity provider.

    Raises InvalidCredentialError for any rejected token and
    UpstreamFailureError when the provider cannot be reached.
    """
    async def verify(self, token: str) -> CallerIdentity: ...


class CheckoutGateway(Protocol):
    """Contract for the external payment provider. Returns the hosted checkout URL."""
    async def create_session(
        self,
        *,
        product_name: str,
        unit_amount: int,
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> str: ...


@dataclass(frozen=True)
class Store:
    """Per-request storage context handed to every service handler."""
    accounts: AccountRepository
    lessons: LessonRepository
    reports: ReportRepository

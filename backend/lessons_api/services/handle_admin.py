"""Admin Handlers — require_admin, list_accounts, list_reports, get_stats.

Invariants:
    - require_admin runs after identity resolution and before any admin read
    - get_stats is read-only: literal document counts at call time
"""

from lessons_api.core.access_policy import check_admin
from lessons_api.core.domain_types import CallerIdentity
from lessons_api.core.repository_protocols import Store


class AdminHandlers:
    """Admin-only reads plus the admin elevation check itself."""

    def __init__(self, store: Store):
        self.store = store

    async def require_admin(self, caller: CallerIdentity) -> dict:
        """Load the caller's account and require role=admin."""
        account = await self.store.accounts.get_by_email(caller.email)
        check_admin(caller, account)
        return account

    async def list_accounts(self) -> list[dict]:
        return await self.store.accounts.list_all()

    async def list_reports(self) -> list[dict]:
        return await self.store.reports.list_all()

    async def get_stats(self) -> dict:
        return {
            "total_users": await self.store.accounts.count(),
            "total_lessons": await self.store.lessons.count(),
            "reported_lessons": await self.store.reports.count(),
        }

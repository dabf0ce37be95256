"""Report Handlers — submit_report.

Invariants:
    - Reporter email and created_at are server-stamped from the verified identity
    - Reports are append-only; the referenced lesson is not checked for existence
"""

import logging
from datetime import datetime, timezone

from lessons_api.core.build_records import build_report_record
from lessons_api.core.domain_types import CallerIdentity
from lessons_api.core.repository_protocols import Store

logger = logging.getLogger(__name__)


class ReportHandlers:
    """Abuse report intake."""

    def __init__(self, store: Store):
        self.store = store

    async def submit_report(self, caller: CallerIdentity, payload: dict) -> dict:
        record = build_report_record(caller, payload, datetime.now(timezone.utc))
        report = await self.store.reports.insert(record)
        logger.info(
            "Report submitted",
            extra={"caller_email": caller.email, "lesson_id": record["lesson_id"]},
        )
        return report

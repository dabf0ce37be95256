"""Report Schemas — abuse report payload and admin view.

Invariants:
    - ReportCreate never carries the reporter: email and createdAt are server-stamped
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from lessons_api.schemas.base import CamelModel


class ReportCreate(CamelModel):
    lesson_id: str | None = Field(None, max_length=64)
    reason: str = Field(min_length=1, max_length=2000)
    details: str | None = Field(None, max_length=5000)


class ReportResponse(CamelModel):
    id: UUID
    email: str
    lesson_id: str | None = None
    reason: str
    details: str | None = None
    created_at: datetime

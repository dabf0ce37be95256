"""Record Builders — server-side field whitelisting for every write path.

Invariants:
    - Persisted records are built from caller identity + an allow-listed subset of the payload
    - role, is_premium, creator_email, likes, favorites, email (reports) and created_at
      are ALWAYS server-assigned — payload values for them are dropped
    - Builders are pure: "now" is passed in by the shell

Design Decisions:
    - Explicit allow-lists over "merge then overwrite": a new privileged field can never
      leak through a raw merge (ADR: security)
"""

from datetime import datetime

from lessons_api.core.domain_types import (
    AccessLevel, CallerIdentity, Role, Visibility,
)

ACCOUNT_PROFILE_FIELDS = frozenset({"email", "name", "photo_url"})

LESSON_CONTENT_FIELDS = frozenset({
    "title", "description", "category", "emotional_tone",
    "image_url", "access_level", "visibility",
})

REQUIRED_LESSON_FIELDS = frozenset({
    "title", "description", "access_level", "visibility",
})

REPORT_FIELDS = frozenset({"lesson_id", "reason", "details"})


def _allow(payload: dict, allowed: frozenset[str]) -> dict:
    return {k: v for k, v in payload.items() if k in allowed}


def _enum_value(value):
    return value.value if hasattr(value, "value") else value


def build_account_record(profile: dict, now: datetime) -> dict:
    """New account: role=user, is_premium=False regardless of payload."""
    record = {"name": None, "photo_url": None}
    record.update(_allow(profile, ACCOUNT_PROFILE_FIELDS))
    record.update({
        "role": Role.USER.value,
        "is_premium": False,
        "created_at": now,
    })
    return record


def build_lesson_record(
    caller: CallerIdentity, content: dict, now: datetime,
) -> dict:
    """New lesson owned by the caller with empty like/favorite sets."""
    record = {
        "description": "",
        "category": None,
        "emotional_tone": None,
        "image_url": None,
        "access_level": AccessLevel.PUBLIC.value,
        "visibility": Visibility.PUBLIC.value,
    }
    record.update({
        k: _enum_value(v) for k, v in _allow(content, LESSON_CONTENT_FIELDS).items()
    })
    record.update({
        "creator_email": caller.email,
        "likes": [],
        "favorites": [],
        "created_at": now,
    })
    return record


def build_lesson_patch(patch: dict) -> dict:
    """Partial update restricted to content fields. Nulls only clear optional fields."""
    return {
        k: _enum_value(v)
        for k, v in _allow(patch, LESSON_CONTENT_FIELDS).items()
        if v is not None or k not in REQUIRED_LESSON_FIELDS
    }


def build_report_record(
    caller: CallerIdentity, payload: dict, now: datetime,
) -> dict:
    """Report stamped with the reporter's verified email."""
    record = {"lesson_id": None, "reason": "", "details": None}
    record.update(_allow(payload, REPORT_FIELDS))
    record.update({"email": caller.email, "created_at": now})
    return record

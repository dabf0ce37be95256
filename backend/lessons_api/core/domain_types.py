"""Domain Types — rich types that replace bare strings across the codebase.

Invariants:
    - Email and LessonId wrap primitives — never pass a bare str where an identity is meant
    - All valid states encoded as Enums — no raw string matching in policy code
    - Unknown sort keys parse to None (store-defined order), never to an error

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to DB string columns without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

Email = NewType("Email", str)
LessonId = NewType("LessonId", UUID)
ReportId = NewType("ReportId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account role. Only set out-of-band; no route promotes a user."""
    USER = "user"
    ADMIN = "admin"


class AccessLevel(str, Enum):
    """Lesson gating — premium lessons need a premium account or authorship."""
    PUBLIC = "public"
    PREMIUM = "premium"


class Visibility(str, Enum):
    """Lesson listing visibility — only public lessons appear in the open listing."""
    PUBLIC = "public"
    PRIVATE = "private"


class LessonSort(str, Enum):
    """Supported listing orders."""
    NEWEST = "newest"
    MOST_SAVED = "mostSaved"

    @classmethod
    def parse(cls, value: str | None) -> "LessonSort | None":
        """Lenient parse: unknown or absent values mean store-defined order."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class RegistrationOutcome(str, Enum):
    """Result of register(): ALREADY_EXISTS is a normal result, not a failure."""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class SetField(str, Enum):
    """Lesson email-set fields that support add-to-set."""
    LIKES = "likes"
    FAVORITES = "favorites"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class CallerIdentity:
    """Verified caller, as resolved by the identity provider."""
    email: Email
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class LessonQuery:
    """Listing filters. public_only=False is reserved for the admin listing."""
    category: str | None = None
    emotional_tone: str | None = None
    keyword: str | None = None
    sort: LessonSort | None = None
    public_only: bool = True


@dataclass(frozen=True)
class PremiumOffer:
    """The single, fixed premium product sold through checkout."""
    product_name: str
    unit_amount: int        # minor currency units
    currency: str
    success_url: str
    cancel_url: str

"""Access Policy — who may read, write and delete which resource.

Invariants:
    - Credential parsing happens before any store access
    - Admin elevation is applied AFTER identity resolution, never instead of it
    - Premium lessons: visible to their creator or to premium accounts, nobody else
    - Lesson mutation: creator or admin (single authoritative policy)
    - Every check raises a typed LessonsApiError; returning means "allowed"

Design Decisions:
    - Pure functions over account/lesson dicts: the shell loads, the core decides
    - A caller without an account is treated as role=user, isPremium=false
"""

from lessons_api.core.domain_types import (
    AccessLevel, CallerIdentity, Email, Role,
)
from lessons_api.core.errors import (
    ErrorContext,
    InsufficientPrivilegeError,
    MissingCredentialError,
    OwnershipDeniedError,
    PremiumRequiredError,
)

BEARER_PREFIX = "Bearer "


def parse_bearer_token(authorization: str | None) -> str:
    """Extract the token from an Authorization header or raise MissingCredentialError."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingCredentialError()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise MissingCredentialError()
    return token


def is_admin(account: dict | None) -> bool:
    return account is not None and account.get("role") == Role.ADMIN.value


def is_premium(account: dict | None) -> bool:
    return account is not None and account.get("is_premium") is True


def check_admin(caller: CallerIdentity, account: dict | None) -> None:
    """Require the caller's account to carry the admin role."""
    if not is_admin(account):
        raise InsufficientPrivilegeError(
            Role.ADMIN.value, ErrorContext(caller_email=caller.email),
        )


def check_lesson_visible(
    lesson: dict, caller: CallerIdentity | None, account: dict | None,
) -> None:
    """Premium gate for reading a lesson."""
    if lesson["access_level"] != AccessLevel.PREMIUM.value:
        return
    if caller is None:
        raise PremiumRequiredError("Premium lesson: sign in with a premium account")
    if caller.email == lesson["creator_email"] or is_premium(account):
        return
    raise PremiumRequiredError(
        "Premium lesson: upgrade to premium to view",
        ErrorContext(caller_email=caller.email, resource_id=str(lesson["id"])),
    )


def check_premium_authoring(
    access_level: AccessLevel, caller: CallerIdentity, account: dict | None,
) -> None:
    """Only premium accounts may author premium lessons."""
    if access_level == AccessLevel.PREMIUM and not is_premium(account):
        raise PremiumRequiredError(
            "Upgrade to premium to author premium content",
            ErrorContext(caller_email=caller.email),
        )


def is_lesson_owner(lesson: dict, email: Email) -> bool:
    return lesson["creator_email"] == email


def check_lesson_ownership(
    lesson: dict, caller: CallerIdentity, account: dict | None,
) -> None:
    """Creator-or-admin rule for update and delete."""
    if is_lesson_owner(lesson, caller.email) or is_admin(account):
        return
    raise OwnershipDeniedError(
        str(lesson["id"]), ErrorContext(caller_email=caller.email),
    )

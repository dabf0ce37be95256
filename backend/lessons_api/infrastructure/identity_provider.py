"""Firebase Identity Verifier — resolves a bearer ID token into a CallerIdentity.

Invariants:
    - No cryptographic verification happens here: firebase_admin.auth.verify_id_token does it
    - Rejected tokens (expired, revoked, malformed, bad signature, disabled user,
      no email claim) → InvalidCredentialError
    - Provider unreachable or misconfigured → UpstreamFailureError
    - Never blocks the event loop: SDK calls run in a worker thread

Design Decisions:
    - Named firebase app initialized lazily on first verification: startup succeeds
      without credentials (health probes, migrations), misconfiguration surfaces as 503
    - check_revoked off by default: it costs an extra provider round trip per request
"""

import asyncio
import logging

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from lessons_api.core.domain_types import CallerIdentity, Email
from lessons_api.core.errors import (
    ErrorContext, InvalidCredentialError, UpstreamFailureError,
)

logger = logging.getLogger(__name__)


class FirebaseIdentityVerifier:
    """IdentityVerifier backed by Firebase Authentication."""

    APP_NAME = "lessons-api"

    def __init__(self, service_account: dict, check_revoked: bool = False):
        self._service_account = service_account
        self._check_revoked = check_revoked
        self._app: firebase_admin.App | None = None

    async def verify(self, token: str) -> CallerIdentity:
        app = await asyncio.to_thread(self._get_app)
        try:
            claims = await asyncio.to_thread(
                auth.verify_id_token, token,
                app=app, check_revoked=self._check_revoked,
            )
        except (auth.InvalidIdTokenError, auth.UserDisabledError) as e:
            logger.warning(f"Rejected ID token: {type(e).__name__}")
            raise InvalidCredentialError(type(e).__name__)
        except auth.CertificateFetchError as e:
            logger.error(
                f"Firebase certificate fetch failed: {e}",
                extra={"collaborator": "firebase"},
            )
            raise UpstreamFailureError("Identity provider", "certificate fetch")
        except FirebaseError as e:
            logger.error(
                f"Firebase verification error: {e}",
                extra={"collaborator": "firebase"},
            )
            raise UpstreamFailureError("Identity provider", "token verification")
        except ValueError:
            raise InvalidCredentialError("malformed")

        email = claims.get("email")
        if not email:
            raise InvalidCredentialError(
                "missing email claim",
                ErrorContext(debug_info={"uid": claims.get("uid")}),
            )
        return CallerIdentity(email=Email(email.strip().lower()), claims=claims)

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app
        try:
            self._app = firebase_admin.get_app(self.APP_NAME)
        except ValueError:
            try:
                cred = credentials.Certificate(self._service_account)
                self._app = firebase_admin.initialize_app(cred, name=self.APP_NAME)
            except (ValueError, FirebaseError) as e:
                logger.error(
                    f"Firebase initialization failed: {e}",
                    extra={"collaborator": "firebase"},
                )
                raise UpstreamFailureError("Identity provider", "initialization")
        return self._app

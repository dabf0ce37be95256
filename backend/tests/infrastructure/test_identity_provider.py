"""Firebase Identity Verifier — SDK outcomes mapped onto the credential taxonomy.

Invariants:
    - Token rejections (expired, revoked, disabled, malformed) → INVALID_CREDENTIAL
    - Certificate fetch and other provider errors → UPSTREAM_FAILURE
    - A verified token without an email claim is still rejected
    - Misconfigured credentials surface as UPSTREAM_FAILURE, not at startup
"""

import pytest
from firebase_admin import auth
from firebase_admin.exceptions import UnavailableError

from lessons_api.core.errors import InvalidCredentialError, UpstreamFailureError
from lessons_api.infrastructure.identity_provider import FirebaseIdentityVerifier

FAKE_APP = object()


@pytest.fixture
def verifier():
    v = FirebaseIdentityVerifier({}, check_revoked=True)
    v._app = FAKE_APP
    return v


def _patch_verify(monkeypatch, outcome):
    calls = []

    def fake_verify_id_token(token, app=None, check_revoked=False):
        calls.append({"token": token, "app": app, "check_revoked": check_revoked})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(auth, "verify_id_token", fake_verify_id_token)
    return calls


async def test_verified_token_yields_caller(monkeypatch, verifier):
    calls = _patch_verify(monkeypatch, {"uid": "u1", "email": "ana@lessons.io"})
    caller = await verifier.verify("id-token")
    assert caller.email == "ana@lessons.io"
    assert caller.claims["uid"] == "u1"
    assert calls == [{"token": "id-token", "app": FAKE_APP, "check_revoked": True}]


async def test_caller_email_is_lowercased(monkeypatch, verifier):
    _patch_verify(monkeypatch, {"uid": "u1", "email": "Ana@Lessons.IO"})
    caller = await verifier.verify("id-token")
    assert caller.email == "ana@lessons.io"


@pytest.mark.parametrize("error", [
    auth.InvalidIdTokenError("bad signature"),
    auth.ExpiredIdTokenError("expired", None),
    auth.RevokedIdTokenError("revoked"),
    auth.UserDisabledError("disabled"),
    ValueError("not a JWT"),
])
async def test_rejected_tokens_are_invalid_credentials(monkeypatch, verifier, error):
    _patch_verify(monkeypatch, error)
    with pytest.raises(InvalidCredentialError) as exc:
        await verifier.verify("id-token")
    assert exc.value.http_status == 401


async def test_token_without_email_claim_is_rejected(monkeypatch, verifier):
    _patch_verify(monkeypatch, {"uid": "phone-only"})
    with pytest.raises(InvalidCredentialError) as exc:
        await verifier.verify("id-token")
    assert exc.value.reason == "missing email claim"


async def test_certificate_fetch_failure_is_upstream(monkeypatch, verifier):
    _patch_verify(monkeypatch, auth.CertificateFetchError("no certs", None))
    with pytest.raises(UpstreamFailureError) as exc:
        await verifier.verify("id-token")
    assert exc.value.http_status == 503


async def test_provider_unavailable_is_upstream(monkeypatch, verifier):
    _patch_verify(monkeypatch, UnavailableError("down"))
    with pytest.raises(UpstreamFailureError):
        await verifier.verify("id-token")


async def test_invalid_service_account_is_upstream():
    verifier = FirebaseIdentityVerifier({"type": "service_account"})
    with pytest.raises(UpstreamFailureError) as exc:
        await verifier.verify("id-token")
    assert exc.value.operation == "initialization"

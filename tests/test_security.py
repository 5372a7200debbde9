"""Identity token verification."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.api.deps import resolve_identity
from app.config import settings
from app.core.security import InvalidTokenError, create_identity_token, decode_token
from app.utils.exceptions import AuthenticationError


def test_round_trip_keeps_profile_claims() -> None:
    token = create_identity_token("idp_1", email="a@example.com", name="A", image_url="https://x.test/a.png")

    claims = resolve_identity(token)

    assert claims.sub == "idp_1"
    assert claims.email == "a@example.com"
    assert claims.name == "A"
    assert claims.image_url == "https://x.test/a.png"


def test_expired_token_is_rejected() -> None:
    token = create_identity_token("idp_1", expires_minutes=-1)

    with pytest.raises(InvalidTokenError):
        decode_token(token)
    with pytest.raises(AuthenticationError):
        resolve_identity(token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "idp_1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm=settings.IDENTITY_TOKEN_ALGORITHM,
    )

    with pytest.raises(AuthenticationError):
        resolve_identity(token)


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode(
        {"email": "a@example.com", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.SECRET_KEY,
        algorithm=settings.IDENTITY_TOKEN_ALGORITHM,
    )

    with pytest.raises(AuthenticationError):
        resolve_identity(token)


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_is_rejected(token) -> None:
    with pytest.raises(AuthenticationError):
        resolve_identity(token)

"""Identity token handling.

Revix does not manage credentials. The identity provider issues signed JWTs
whose ``sub`` claim is the stable user id; this module verifies them and can
mint equivalent tokens for local tooling and tests.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from app.config import settings


class InvalidTokenError(Exception):
    """Raised when an identity token cannot be decoded or is invalid."""


def create_identity_token(
    subject: str,
    *,
    email: str | None = None,
    name: str | None = None,
    image_url: str | None = None,
    expires_minutes: int = 60,
) -> str:
    """Create a signed identity token carrying the supplied profile claims."""

    payload: Dict[str, Any] = {
        "sub": str(subject),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=expires_minutes),
    }
    if email is not None:
        payload["email"] = email
    if name is not None:
        payload["name"] = name
    if image_url is not None:
        payload["image_url"] = image_url
    if settings.IDENTITY_TOKEN_ISSUER:
        payload["iss"] = settings.IDENTITY_TOKEN_ISSUER
    if settings.IDENTITY_TOKEN_AUDIENCE:
        payload["aud"] = settings.IDENTITY_TOKEN_AUDIENCE
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.IDENTITY_TOKEN_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode a JWT and return its payload, raising ``InvalidTokenError`` if invalid."""

    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.IDENTITY_TOKEN_ALGORITHM],
            audience=settings.IDENTITY_TOKEN_AUDIENCE,
            issuer=settings.IDENTITY_TOKEN_ISSUER,
            options={"verify_aud": settings.IDENTITY_TOKEN_AUDIENCE is not None},
        )
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

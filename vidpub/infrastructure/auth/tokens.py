"""Bearer token parsing and JWT validation."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from vidpub.domain.errors import AuthFailure

ISSUER = "vidpub-access"
ALGORITHM = "HS256"


def get_bearer_token(auth_header: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not auth_header:
        raise AuthFailure("missing Authorization header")
    scheme, _, token = auth_header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthFailure("malformed Authorization header")
    return token


def make_jwt(user_id: str, secret: str, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Issue an access token for ``user_id``."""
    now = datetime.now(timezone.utc)
    claims = {"iss": ISSUER, "sub": user_id, "iat": now, "exp": now + expires_in}
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def validate_jwt(token: str, secret: str) -> str:
    """Return the user id (``sub``) of a valid access token."""
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            issuer=ISSUER,
            options={"require": ["exp", "sub", "iss"]},
        )
    except jwt.PyJWTError as exc:
        raise AuthFailure(f"invalid token: {exc}") from exc
    return claims["sub"]

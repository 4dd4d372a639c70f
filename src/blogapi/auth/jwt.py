"""JWT access token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The token
is self-contained: user id in `sub`, plus email and display name, signed
with HS256 using the configured secret. Verification checks signature,
issuer, audience and expiry — all four, every time. No refresh tokens,
no revocation list: a token is good until `exp`.

TokenService receives Settings in its constructor; it never reads global
configuration at call time.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from blogapi.config import Settings
from blogapi.db.models import MAX_ID
from blogapi.errors import Unauthenticated

# Claim that takes precedence over "sub" when resolving the user id
NAME_IDENTIFIER_CLAIM = "nameid"


class TokenError(Unauthenticated):
    """Raised when a token fails verification."""


@dataclass(frozen=True)
class Claims:
    """Verified identity carried by a token."""

    subject: str
    email: str
    name: str
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int  # seconds


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Mints and verifies signed access tokens."""

    def __init__(self, settings: Settings, clock: Callable[[], datetime] = utcnow):
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._ttl = timedelta(minutes=settings.access_token_expire_minutes)
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, user_id: int, email: str, name: Optional[str] = None) -> IssuedToken:
        """Create a signed token for a user."""
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "email": email,
            "name": name or "",
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "exp": now + self._ttl,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_in=self.ttl_seconds)

    def verify(self, token: str) -> Claims:
        """Verify and decode a token.

        Raises TokenError on a bad signature, wrong issuer/audience,
        expiry, or a missing subject.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iss", "aud"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired")
        except jwt.InvalidTokenError:
            raise TokenError("Invalid token")

        subject = payload.get(NAME_IDENTIFIER_CLAIM) or payload.get("sub")
        if not subject:
            raise TokenError("Invalid token")

        return Claims(
            subject=str(subject),
            email=payload.get("email", ""),
            name=payload.get("name", ""),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


def resolve_user_id(claims: Claims) -> int:
    """Turn verified claims into the caller's numeric user id."""
    try:
        user_id = int(claims.subject)
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token subject")
    if not 1 <= user_id <= MAX_ID:
        raise Unauthenticated("Invalid token subject")
    return user_id

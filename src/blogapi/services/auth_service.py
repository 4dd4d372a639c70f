"""Registration and login.

Learn: Service layer separates business logic from HTTP routing.
Both flows end the same way — a freshly issued access token plus the
user's public profile — so the API returns one response shape for both.

Login failures are deliberately uniform: an unknown email and a wrong
password raise the same Unauthenticated("Invalid credentials.") so the
endpoint cannot be used to probe which emails have accounts.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.jwt import TokenService
from blogapi.auth.password import hash_password, verify_password
from blogapi.db.models import User
from blogapi.errors import Conflict, Unauthenticated, ValidationError
from blogapi.services.credential_store import CredentialStore

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials."
MISSING_CREDENTIALS = "Email and password are required."


@dataclass(frozen=True)
class AuthResult:
    token: str
    expires_in: int
    user_id: int
    email: str
    name: str


class AuthService:
    """Business logic for account registration and login."""

    def __init__(self, db: AsyncSession, tokens: TokenService):
        self.db = db
        self.tokens = tokens
        self.users = CredentialStore(db)

    async def register(
        self, email: Optional[str], password: Optional[str], name: Optional[str] = None
    ) -> AuthResult:
        if _blank(email) or _blank(password):
            raise ValidationError(MISSING_CREDENTIALS)

        try:
            user = await self.users.create(
                email=email, name=name, password_hash=hash_password(password)
            )
            await self.db.commit()
        except IntegrityError:
            # Lost the race against a concurrent registration of the same email
            await self.db.rollback()
            raise Conflict("Email already in use.")
        except Conflict:
            await self.db.rollback()
            raise

        logger.info("auth.registered", user_id=user.id)
        return self._result_for(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if _blank(email) or _blank(password):
            raise ValidationError(MISSING_CREDENTIALS)

        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", reason="invalid_credentials")
            raise Unauthenticated(INVALID_CREDENTIALS)

        logger.info("auth.login", user_id=user.id)
        return self._result_for(user)

    def _result_for(self, user: User) -> AuthResult:
        issued = self.tokens.issue(user.id, user.email, user.name)
        return AuthResult(
            token=issued.token,
            expires_in=issued.expires_in,
            user_id=user.id,
            email=user.email,
            name=user.name,
        )


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()

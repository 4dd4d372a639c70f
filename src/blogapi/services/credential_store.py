"""User persistence for registration and login."""

from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.db.models import User
from blogapi.errors import Conflict, NotFound


class CredentialStore:
    """Reads and creates User rows. Email is the lookup key."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    async def create(self, email: str, name: Optional[str], password_hash: str) -> User:
        """Insert a new active user.

        Learn: the existence check and the insert are two statements, so
        two simultaneous registrations can both pass the check. The unique
        constraint on users.email then rejects the second insert at commit.
        """
        if await self.email_exists(email):
            raise Conflict("Email already in use.")

        user = User(
            email=email,
            name=name or "",
            password_hash=password_hash,
            active=1,
        )
        self.db.add(user)
        await self.db.flush()
        return user

    async def find_by_email(self, email: str) -> User:
        user = await self.get_by_email(email)
        if user is None:
            raise NotFound("User not found.")
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

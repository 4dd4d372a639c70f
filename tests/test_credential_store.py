"""CredentialStore — create and look up users by email."""

import pytest

from blogapi.errors import Conflict, NotFound
from blogapi.services.credential_store import CredentialStore


@pytest.mark.asyncio
async def test_create_then_find(db_session):
    store = CredentialStore(db_session)
    user = await store.create("ada@example.com", "Ada", "$2b$12$digest")
    await db_session.commit()

    found = await store.find_by_email("ada@example.com")
    assert found.id == user.id
    assert found.name == "Ada"
    assert found.active == 1
    assert found.password_hash == "$2b$12$digest"


@pytest.mark.asyncio
async def test_name_defaults_to_empty(db_session):
    user = await CredentialStore(db_session).create("anon@example.com", None, "digest")
    assert user.name == ""


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(db_session):
    store = CredentialStore(db_session)
    await store.create("dup@example.com", "One", "digest")
    await db_session.commit()

    with pytest.raises(Conflict):
        await store.create("dup@example.com", "Two", "digest")


@pytest.mark.asyncio
async def test_find_unknown_email(db_session):
    store = CredentialStore(db_session)
    with pytest.raises(NotFound):
        await store.find_by_email("nobody@example.com")
    assert await store.get_by_email("nobody@example.com") is None

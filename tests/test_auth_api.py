"""Auth API tests.

Tests cover:
1. Registration + duplicate prevention
2. Login → JWT
3. Uniform failure for unknown email vs wrong password
4. 400 for blank/missing fields
"""

import uuid

import pytest

from tests.conftest import register


def _email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_returns_token(client, token_service):
    email = _email("reg")
    body = await register(client, email=email, name="Test User")

    assert body["email"] == email
    assert body["name"] == "Test User"
    assert body["expiresIn"] == 3600
    assert isinstance(body["userId"], int)

    claims = token_service.verify(body["token"])
    assert claims.subject == str(body["userId"])
    assert claims.email == email


@pytest.mark.asyncio
async def test_register_without_name_defaults_to_empty(client):
    r = await client.post(
        "/api/auth/register",
        json={"email": _email("noname"), "password": "password_123"},
    )
    assert r.status_code == 201
    assert r.json()["name"] == ""


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    """Can't register with the same email twice."""
    email = _email("dup")
    await register(client, email=email)

    r = await client.post(
        "/api/auth/register",
        json={"email": email, "name": "Again", "password": "password_456"},
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "Email already in use."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"password": "password_123"},
        {"email": "someone@example.com"},
        {"email": "   ", "password": "password_123"},
        {"email": "someone@example.com", "password": ""},
    ],
)
async def test_register_missing_fields(client, body):
    r = await client.post("/api/auth/register", json=body)
    assert r.status_code == 400
    assert r.json()["detail"] == "Email and password are required."


@pytest.mark.asyncio
async def test_register_malformed_body(client):
    r = await client.post("/api/auth/register", json={"email": ["not", "a", "string"]})
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client, token_service):
    email = _email("login")
    registered = await register(client, email=email, name="Login User", password="my_password_123")

    r = await client.post(
        "/api/auth/login",
        json={"email": email, "password": "my_password_123"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["userId"] == registered["userId"]
    assert body["name"] == "Login User"
    assert token_service.verify(body["token"]).subject == str(registered["userId"])


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(client):
    email = _email("enum")
    await register(client, email=email, password="correct_password")

    wrong_pw = await client.post(
        "/api/auth/login",
        json={"email": email, "password": "wrong_password"},
    )
    no_user = await client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "whatever"},
    )

    assert wrong_pw.status_code == no_user.status_code == 401
    assert wrong_pw.json() == no_user.json() == {"detail": "Invalid credentials."}


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    r = await client.post("/api/auth/login", json={"email": "a@example.com"})
    assert r.status_code == 400

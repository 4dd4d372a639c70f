"""Token service, identity resolution, and signing-key configuration."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from pydantic import ValidationError as SettingsError

from blogapi.auth.jwt import Claims, TokenError, TokenService, resolve_user_id
from blogapi.config import Settings
from blogapi.errors import Unauthenticated


def test_issue_then_verify_returns_claims(token_service):
    issued = token_service.issue(42, "ada@example.com", "Ada")
    assert issued.expires_in == 3600

    claims = token_service.verify(issued.token)
    assert claims.subject == "42"
    assert claims.email == "ada@example.com"
    assert claims.name == "Ada"
    assert claims.expires_at > datetime.now(timezone.utc)


def test_payload_carries_issuer_and_audience(settings, token_service):
    issued = token_service.issue(7, "bob@example.com", "")
    payload = jwt.decode(issued.token, options={"verify_signature": False})
    assert payload["sub"] == "7"
    assert payload["iss"] == settings.jwt_issuer
    assert payload["aud"] == settings.jwt_audience
    assert payload["exp"] - payload["iat"] == 3600


def test_token_invalid_after_ttl(settings):
    two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
    past = TokenService(settings, clock=lambda: two_hours_ago)
    issued = past.issue(1, "old@example.com", "Old")

    with pytest.raises(TokenError, match="expired"):
        TokenService(settings).verify(issued.token)


def test_ttl_is_configurable(settings):
    short = settings.model_copy(update={"access_token_expire_minutes": 5})
    assert TokenService(short).issue(1, "a@example.com").expires_in == 300


def test_tampered_token_rejected(token_service):
    token = token_service.issue(1, "a@example.com", "A").token
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(TokenError):
        token_service.verify(forged)


def test_wrong_key_rejected(settings, token_service):
    other = settings.model_copy(update={"jwt_secret": "another-signing-key-0123456789abcdef-xyz"})
    token = TokenService(other).issue(1, "a@example.com").token
    with pytest.raises(TokenError):
        token_service.verify(token)


@pytest.mark.parametrize("field", ["jwt_issuer", "jwt_audience"])
def test_wrong_issuer_or_audience_rejected(settings, token_service, field):
    other = settings.model_copy(update={field: "someone-else"})
    token = TokenService(other).issue(1, "a@example.com").token
    with pytest.raises(TokenError):
        token_service.verify(token)


def test_garbage_token_rejected(token_service):
    with pytest.raises(TokenError):
        token_service.verify("invalid_token_here")


def test_token_error_is_unauthenticated():
    assert issubclass(TokenError, Unauthenticated)


def test_name_identifier_claim_takes_precedence(settings, token_service):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "nameid": "99",
            "sub": "1",
            "email": "n@example.com",
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "exp": now + timedelta(minutes=5),
        },
        settings.jwt_secret,
        algorithm="HS256",
    )
    assert resolve_user_id(token_service.verify(token)) == 99


def test_resolve_user_id_requires_numeric_subject():
    expires = datetime.now(timezone.utc)
    assert resolve_user_id(Claims("12", "e", "n", expires)) == 12
    with pytest.raises(Unauthenticated):
        resolve_user_id(Claims("abc", "e", "n", expires))
    with pytest.raises(Unauthenticated):
        resolve_user_id(Claims("", "e", "n", expires))


def test_missing_signing_key_is_a_config_error(monkeypatch):
    monkeypatch.delenv("BLOGAPI_JWT_SECRET", raising=False)
    with pytest.raises(SettingsError):
        Settings(_env_file=None)


def test_short_signing_key_is_a_config_error(monkeypatch):
    monkeypatch.setenv("BLOGAPI_JWT_SECRET", "too-short")
    with pytest.raises(SettingsError):
        Settings(_env_file=None)


def test_settings_are_immutable(settings):
    with pytest.raises(SettingsError):
        settings.jwt_secret = "x" * 40


@pytest.mark.parametrize("subject", ["0", "-4", str(10**19)])
def test_resolve_user_id_rejects_out_of_range_subject(subject):
    with pytest.raises(Unauthenticated):
        resolve_user_id(Claims(subject, "e", "n", datetime.now(timezone.utc)))


def test_max_page_size_cannot_exceed_100():
    with pytest.raises(SettingsError):
        Settings(_env_file=None, max_page_size=500)
    assert Settings(_env_file=None, max_page_size=100).max_page_size == 100

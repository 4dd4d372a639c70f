"""Pydantic schemas for registration and login.

Learn: email/password are Optional here on purpose. Blank or missing
values are rejected by AuthService with a 400 and a readable message,
instead of FastAPI's generic 422 field-error list.
"""

from typing import Optional

from blogapi.schemas.base import ApiModel


class RegisterRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(ApiModel):
    token: str
    expires_in: int  # seconds
    user_id: int
    email: str
    name: str

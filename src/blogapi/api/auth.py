"""Auth API — registration and login.

Learn: Routes for user authentication:
- POST /auth/register → create account, returns a token right away (201)
- POST /auth/login → email/password → token (200)

Both return AuthResponse: token, expiresIn (seconds), userId, email, name.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.dependencies import get_token_service
from blogapi.auth.jwt import TokenService
from blogapi.db.engine import get_db
from blogapi.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from blogapi.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, tokens)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account and log it in."""
    return await svc.register(email=body.email, password=body.password, name=body.name)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(_svc)):
    """Login with email and password → JWT."""
    return await svc.login(email=body.email, password=body.password)

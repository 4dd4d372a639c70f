"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract and
validate the caller's identity from the request. The only trusted source
of a user id is a verified token — route handlers never read a user id
from the body or query string.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from blogapi.auth.jwt import Claims, TokenService, resolve_user_id
from blogapi.errors import Unauthenticated


def get_token_service(request: Request) -> TokenService:
    """The app-wide TokenService built in create_app()."""
    return request.app.state.token_service


def get_claims(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Claims:
    """Verify the bearer token (401 if missing or invalid)."""
    if not authorization:
        raise Unauthenticated("Authentication required")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Authentication required")

    return tokens.verify(token.strip())


def get_current_user_id(claims: Claims = Depends(get_claims)) -> int:
    """Numeric id of the authenticated caller."""
    return resolve_user_id(claims)

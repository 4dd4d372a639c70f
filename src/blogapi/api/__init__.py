"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter, so every posts route rejects unauthenticated
requests before the handler runs. Health and auth routers are open.
"""

from fastapi import APIRouter, Depends

from blogapi.api.auth import router as auth_router
from blogapi.api.health import router as health_router
from blogapi.api.posts import router as posts_router
from blogapi.auth.dependencies import get_current_user_id

# All protected routers require authentication
_auth = [Depends(get_current_user_id)]

api_router = APIRouter(prefix="/api")

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid bearer token
api_router.include_router(posts_router, tags=["posts"], dependencies=_auth)

"""Post API routes.

Learn: every handler takes the caller's id from get_current_user_id
(the verified token) and hands it to PostService, which scopes every
query by it. 404 covers both "no such post" and "someone else's post".
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.dependencies import get_current_user_id
from blogapi.db.engine import get_db
from blogapi.db.models import MAX_ID
from blogapi.schemas.post import PostCreate, PostPage, PostRead
from blogapi.services.post_service import PostService

router = APIRouter(prefix="/posts")


def _svc(request: Request, db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db, max_page_size=request.app.state.settings.max_page_size)


@router.get("", response_model=PostPage)
async def list_posts(
    request: Request,
    page_number: Optional[int] = Query(1, alias="pageNumber"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    user_id: int = Depends(get_current_user_id),
    svc: PostService = Depends(_svc),
):
    """Paginated list of the caller's posts, newest first."""
    if page_size is None:
        page_size = request.app.state.settings.default_page_size
    page = await svc.list_posts(user_id, page_number=page_number, page_size=page_size)
    return PostPage.model_validate(page)


@router.get("/{post_id}", response_model=PostRead, name="get_post")
async def get_post(
    post_id: int = Path(..., ge=1, le=MAX_ID),
    user_id: int = Depends(get_current_user_id),
    svc: PostService = Depends(_svc),
):
    post = await svc.get_post(post_id, user_id)
    return PostRead.model_validate(post)


@router.post("", response_model=PostRead, status_code=201)
async def create_post(
    body: PostCreate,
    request: Request,
    response: Response,
    user_id: int = Depends(get_current_user_id),
    svc: PostService = Depends(_svc),
):
    """Create a post. Tag names are reused if they exist, created if not."""
    post = await svc.create_post(
        user_id,
        title=body.title,
        excerpt=body.excerpt,
        context=body.context,
        published_at=body.published_at,
        publish_status=body.publish_status,
        tags=body.tags,
    )
    response.headers["Location"] = str(request.url_for("get_post", post_id=post.id).path)
    return PostRead.model_validate(post)

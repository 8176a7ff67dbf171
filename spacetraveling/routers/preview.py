import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from spacetraveling import dependencies as deps
from spacetraveling.errors import FetchError, NotFoundError
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/preview")
async def enter_preview(
    token: str = Query(..., min_length=1),
    documentId: Optional[str] = Query(None),
    repo: PrismicPostsRepo = Depends(deps.get_posts_repo),
):
    """
    Start a preview session: remember the preview ref and send the editor
    to the document being previewed.
    """
    location = settings.BASE_BLOG_URL
    if documentId:
        try:
            doc = await repo.get_doc_by_id(documentId, ref=token)
        except NotFoundError:
            raise HTTPException(status_code=404, detail="Previewed document not found")
        except FetchError as e:
            logger.error(f"Failed to resolve preview document {documentId}: {e}")
            raise HTTPException(status_code=503, detail="Failed to start preview")
        if doc.get("uid"):
            location = f"{settings.BASE_BLOG_URL}/post/{doc['uid']}"

    response = RedirectResponse(location, status_code=307)
    response.set_cookie(settings.PREVIEW_COOKIE_NAME, token, httponly=True)
    return response


@router.get("/exit-preview")
async def exit_preview():
    response = RedirectResponse(settings.BASE_BLOG_URL, status_code=307)
    response.delete_cookie(settings.PREVIEW_COOKIE_NAME)
    return response

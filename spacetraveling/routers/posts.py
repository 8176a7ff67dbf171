import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from spacetraveling import dependencies as deps
from spacetraveling.errors import FetchError, IntegrityError, NotFoundError
from spacetraveling.schemas.blog import PostPage, PostsPagination
from spacetraveling.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=PostsPagination)
async def list_posts(
    cursor: Optional[str] = Query(None, description="next_page cursor"),
    ref: Optional[str] = Depends(deps.get_preview_ref),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get one page of post summaries."""
    try:
        return await service.list_posts(ref=ref, cursor=cursor)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FetchError as e:
        logger.error(f"CMS unavailable while listing posts: {e}")
        raise HTTPException(status_code=503, detail="Failed to retrieve posts")
    except IntegrityError as e:
        logger.error(f"Malformed CMS response while listing posts: {e}")
        raise HTTPException(status_code=502, detail="Malformed post data")


@router.get("/posts/slugs", response_model=List[str])
async def list_post_slugs(
    ref: Optional[str] = Depends(deps.get_preview_ref),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get the uid of every post, across all pages."""
    try:
        return await service.list_slugs(ref=ref)
    except FetchError as e:
        logger.error(f"CMS unavailable while collecting slugs: {e}")
        raise HTTPException(status_code=503, detail="Failed to retrieve posts")
    except IntegrityError as e:
        logger.error(f"Malformed CMS response while collecting slugs: {e}")
        raise HTTPException(status_code=502, detail="Malformed post data")


@router.get("/posts/{uid}", response_model=PostPage)
async def get_post(
    uid: str,
    ref: Optional[str] = Depends(deps.get_preview_ref),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a full post page by uid."""
    try:
        return await service.get_post(uid, ref=ref)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except FetchError as e:
        logger.error(f"CMS unavailable while retrieving post {uid}: {e}")
        raise HTTPException(status_code=503, detail="Failed to retrieve post")
    except IntegrityError as e:
        logger.error(f"Malformed CMS response for post {uid}: {e}")
        raise HTTPException(status_code=502, detail="Malformed post data")

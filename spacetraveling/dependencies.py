import json
from typing import Optional

from fastapi import Depends, Query, Request

from spacetraveling.db.prismic import PrismicClient
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.posts_service import PostsService
from spacetraveling.settings import settings


def get_prismic_client(request: Request) -> PrismicClient:
    return request.app.state.prismic


def get_posts_repo(prismic=Depends(get_prismic_client)):
    return PrismicPostsRepo(prismic)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)


def get_preview_ref(
    request: Request,
    ref: Optional[str] = Query(None, description="Prismic content-version ref"),
) -> Optional[str]:
    """Explicit ``ref`` query param wins over the preview cookie."""
    if ref:
        return ref
    return preview_ref_from_cookie(request.cookies.get(settings.PREVIEW_COOKIE_NAME))


def preview_ref_from_cookie(value: Optional[str]) -> Optional[str]:
    """
    The preview cookie holds either the bare preview ref or the toolbar's
    JSON form: ``{"<repo>.prismic.io": {"preview": "<ref>"}}``.
    """
    if not value:
        return None
    try:
        parsed = json.loads(value)
    except ValueError:
        return value
    if isinstance(parsed, dict):
        for entry in parsed.values():
            if isinstance(entry, dict) and entry.get("preview"):
                return entry["preview"]
        return None
    return value

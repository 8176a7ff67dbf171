import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from spacetraveling.errors import IntegrityError
from spacetraveling.schemas.blog import AdjacentPost, AdjacentPosts

logger = logging.getLogger(__name__)


class AdjacentPostResolver:
    """Finds the posts published right before and right after a given post."""

    def __init__(self, repo):
        self.repo = repo

    async def resolve(self, post_id: str, ref: Optional[str] = None) -> AdjacentPosts:
        previous_doc, next_doc = await asyncio.gather(
            self.repo.get_previous_doc(post_id, ref),
            self.repo.get_next_doc(post_id, ref),
        )
        logger.debug(
            f"Adjacent posts for {post_id}: "
            f"previous={previous_doc is not None} next={next_doc is not None}"
        )
        return AdjacentPosts(
            previous=to_adjacent_post(previous_doc),
            next=to_adjacent_post(next_doc),
        )


def to_adjacent_post(doc: Optional[dict]) -> Optional[AdjacentPost]:
    if doc is None:
        return None
    uid = doc.get("uid")
    title = (doc.get("data") or {}).get("title")
    if not uid:
        raise IntegrityError("uid", doc.get("id"))
    if title is None:
        raise IntegrityError("title", doc.get("id"))
    try:
        return AdjacentPost(slug=uid, title=title)
    except ValidationError as e:
        field = "uid" if e.errors()[0]["loc"] == ("slug",) else "title"
        raise IntegrityError(field, doc.get("id")) from e

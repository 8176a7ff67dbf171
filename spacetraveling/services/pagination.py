import logging
from typing import Optional

from spacetraveling.schemas.blog import PaginationState
from spacetraveling.services.post_mapper import map_post_summary

logger = logging.getLogger(__name__)


class PaginationTracker:
    """
    Holds the posts loaded so far and the cursor to the next page.

    ``state`` is only ever replaced, never mutated, and only once the next
    page has been fetched and mapped in full. A failed load leaves the
    previous state in place.
    """

    def __init__(self, repo, first_page: Optional[PaginationState] = None):
        self.repo = repo
        self.state = first_page or PaginationState()
        self._loading = False

    def initialize(self, first_page: PaginationState) -> None:
        self.state = first_page

    @property
    def has_next(self) -> bool:
        return self.state.nextPageCursor is not None

    async def load_next(self) -> PaginationState:
        if not self.has_next:
            return self.state
        if self._loading:
            raise RuntimeError("A page load is already in flight")

        self._loading = True
        try:
            current = self.state
            response = await self.repo.load_page(current.nextPageCursor)
            fetched = [map_post_summary(doc) for doc in response.get("results") or []]
        finally:
            self._loading = False

        if self.state is not current:
            logger.debug("Tracker was re-initialized during a load, dropping page")
            return self.state

        seen = {post.uid for post in current.results}
        appended = []
        for post in fetched:
            if post.uid in seen:
                logger.debug(f"Skipping already loaded post {post.uid}")
                continue
            seen.add(post.uid)
            appended.append(post)

        self.state = PaginationState(
            results=[*current.results, *appended],
            nextPageCursor=response.get("next_page"),
        )
        logger.debug(
            f"Loaded {len(appended)} posts, {len(self.state.results)} in total"
        )
        return self.state

    async def load_all(self) -> PaginationState:
        while self.has_next:
            cursor = self.state.nextPageCursor
            await self.load_next()
            if self.state.nextPageCursor == cursor:
                logger.warning(f"Prismic returned the same next_page twice: {cursor}")
                break
        return self.state

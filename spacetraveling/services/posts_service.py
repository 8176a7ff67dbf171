import logging
from typing import List, Optional

from spacetraveling.schemas.blog import (
    PaginationState,
    PostListItem,
    PostPage,
    PostsPagination,
    RenderedSection,
)
from spacetraveling.services import rich_text
from spacetraveling.services.adjacent_posts import AdjacentPostResolver
from spacetraveling.services.pagination import PaginationTracker
from spacetraveling.services.post_mapper import map_post_detail, map_post_page
from spacetraveling.services.reading_time import estimate_reading_time
from spacetraveling.utils import format_edited_at, format_publication_date

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, resolver: Optional[AdjacentPostResolver] = None):
        self.repo = repo
        self.resolver = resolver or AdjacentPostResolver(repo)

    async def list_posts(
        self, ref: Optional[str] = None, cursor: Optional[str] = None
    ) -> PostsPagination:
        """Return the first page of posts, or the page behind ``cursor``."""
        if cursor:
            response = await self.repo.load_page(cursor)
        else:
            response = await self.repo.list_posts(ref)
        page = map_post_page(response)
        return to_posts_pagination(page, preview=ref is not None)

    async def list_slugs(self, ref: Optional[str] = None) -> List[str]:
        """Walk every page of the listing and collect post uids."""
        ref = await self.repo.resolve_ref(ref)
        tracker = PaginationTracker(self.repo)
        tracker.initialize(map_post_page(await self.repo.list_posts(ref)))
        state = await tracker.load_all()
        logger.info(f"Collected {len(state.results)} post slugs")
        return [post.uid for post in state.results]

    async def get_post(self, uid: str, ref: Optional[str] = None) -> PostPage:
        preview = ref is not None
        ref = await self.repo.resolve_ref(ref)

        detail = map_post_detail(await self.repo.get_post_doc(uid, ref))
        navigation = await self.resolver.resolve(detail.id, ref)

        return PostPage(
            uid=detail.uid,
            title=detail.title,
            subtitle=detail.subtitle,
            author=detail.author,
            bannerUrl=detail.bannerUrl,
            firstPublicationDate=detail.firstPublicationDate,
            lastPublicationDate=detail.lastPublicationDate,
            publishedOn=format_publication_date(detail.firstPublicationDate),
            editedAt=format_edited_at(
                detail.firstPublicationDate, detail.lastPublicationDate
            ),
            readingTime=estimate_reading_time(detail.content),
            content=[
                RenderedSection(
                    heading=section.heading, html=rich_text.as_html(section.body)
                )
                for section in detail.content
            ],
            navigation=navigation,
            preview=preview,
        )


def to_posts_pagination(
    page: PaginationState, preview: bool = False
) -> PostsPagination:
    return PostsPagination(
        results=[
            PostListItem(
                **post.model_dump(),
                publishedOn=format_publication_date(post.firstPublicationDate),
            )
            for post in page.results
        ],
        nextPageCursor=page.nextPageCursor,
        preview=preview,
    )

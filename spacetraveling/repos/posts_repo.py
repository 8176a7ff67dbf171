from typing import List, Optional

from spacetraveling.db.prismic import PrismicClient, at
from spacetraveling.settings import settings

SUMMARY_FIELDS = ("title", "subtitle", "author")
NEWEST_FIRST = "[document.first_publication_date desc]"
OLDEST_EDIT_FIRST = "[document.last_publication_date]"
NEWEST_EDIT_FIRST = "[document.last_publication_date desc]"


class PrismicPostsRepo:
    def __init__(
        self,
        client: PrismicClient,
        post_type: Optional[str] = None,
        page_size: Optional[int] = None,
    ):
        self.client = client
        self.post_type = post_type or settings.PRISMIC_POST_TYPE
        self.page_size = page_size or settings.POSTS_PAGE_SIZE

    async def resolve_ref(self, ref: Optional[str] = None) -> str:
        return ref or await self.client.get_master_ref()

    async def list_posts(self, ref: Optional[str] = None) -> dict:
        return await self.client.query(
            self._type_predicate(),
            fetch=self._fetch_fields(*SUMMARY_FIELDS),
            page_size=self.page_size,
            ref=ref,
            orderings=NEWEST_FIRST,
        )

    async def load_page(self, cursor: str) -> dict:
        return await self.client.fetch_page(cursor)

    async def get_post_doc(self, uid: str, ref: Optional[str] = None) -> dict:
        return await self.client.get_by_uid(self.post_type, uid, ref=ref)

    async def get_doc_by_id(self, doc_id: str, ref: Optional[str] = None) -> dict:
        return await self.client.get_by_id(doc_id, ref=ref)

    async def get_next_doc(
        self, post_id: str, ref: Optional[str] = None
    ) -> Optional[dict]:
        return await self._neighbour(post_id, OLDEST_EDIT_FIRST, ref)

    async def get_previous_doc(
        self, post_id: str, ref: Optional[str] = None
    ) -> Optional[dict]:
        return await self._neighbour(post_id, NEWEST_EDIT_FIRST, ref)

    async def _neighbour(
        self, post_id: str, orderings: str, ref: Optional[str]
    ) -> Optional[dict]:
        response = await self.client.query(
            self._type_predicate(),
            fetch=self._fetch_fields("title"),
            page_size=1,
            ref=ref,
            orderings=orderings,
            after=post_id,
        )
        results = response["results"]
        return results[0] if results else None

    def _type_predicate(self) -> List[str]:
        return [at("document.type", self.post_type)]

    def _fetch_fields(self, *fields: str) -> List[str]:
        return [f"{self.post_type}.{field}" for field in fields]

from spacetraveling.errors import NotFoundError


def make_post_doc(
    uid: str,
    *,
    doc_id: str | None = None,
    title: str | None = None,
    first_publication_date: str | None = "2021-03-25T19:25:28+0000",
    last_publication_date: str | None = "2021-03-25T19:25:28+0000",
    content: list | None = None,
) -> dict:
    """Raw Prismic document for the ``posts`` type."""
    return {
        "id": doc_id or f"id-{uid}",
        "uid": uid,
        "type": "posts",
        "first_publication_date": first_publication_date,
        "last_publication_date": last_publication_date,
        "data": {
            "title": title or uid.replace("-", " ").title(),
            "subtitle": f"About {uid}",
            "author": "Ada Lovelace",
            "banner": {"url": f"https://images.prismic.io/{uid}.png"},
            "content": content if content is not None else [],
        },
    }


def paragraph(text: str, spans: list | None = None) -> dict:
    return {"type": "paragraph", "text": text, "spans": spans or []}


class FakeRepo:
    """
    In-memory posts repo stand-in.

    ``pages`` maps a cursor to a search response; the ``None`` key is the
    first page. ``ordered`` is the post list sorted by last publication date
    and drives the previous/next lookups. ``errors`` maps a method name to
    the exception it should raise.
    """

    def __init__(
        self,
        pages: dict | None = None,
        ordered: list | None = None,
        master_ref: str = "master-ref",
    ):
        self.pages = pages or {}
        self.ordered = ordered or []
        self.master_ref = master_ref
        self.errors: dict = {}
        self.calls: list = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    async def resolve_ref(self, ref=None):
        self._record("resolve_ref", ref)
        return ref or self.master_ref

    async def list_posts(self, ref=None):
        self._record("list_posts", ref)
        return self.pages.get(None, {"results": [], "next_page": None})

    async def load_page(self, cursor):
        self._record("load_page", cursor)
        return self.pages[cursor]

    async def get_post_doc(self, uid, ref=None):
        self._record("get_post_doc", uid, ref)
        for doc in self.ordered:
            if doc["uid"] == uid:
                return doc
        raise NotFoundError(uid)

    async def get_doc_by_id(self, doc_id, ref=None):
        self._record("get_doc_by_id", doc_id, ref)
        for doc in self.ordered:
            if doc["id"] == doc_id:
                return doc
        raise NotFoundError(doc_id)

    async def get_next_doc(self, post_id, ref=None):
        self._record("get_next_doc", post_id, ref)
        index = self._index(post_id)
        return self.ordered[index + 1] if index + 1 < len(self.ordered) else None

    async def get_previous_doc(self, post_id, ref=None):
        self._record("get_previous_doc", post_id, ref)
        index = self._index(post_id)
        return self.ordered[index - 1] if index > 0 else None

    def _index(self, post_id):
        return next(i for i, doc in enumerate(self.ordered) if doc["id"] == post_id)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None, slugs=None):
        self._list_posts_return = list_posts_return
        self._get_post_return = get_post_return
        self._slugs = slugs or []
        self.error = None
        self.calls = []

    async def list_posts(self, ref=None, cursor=None):
        self.calls.append(("list_posts", ref, cursor))
        if self.error:
            raise self.error
        return self._list_posts_return

    async def list_slugs(self, ref=None):
        self.calls.append(("list_slugs", ref))
        if self.error:
            raise self.error
        return self._slugs

    async def get_post(self, uid, ref=None):
        self.calls.append(("get_post", uid, ref))
        if self.error:
            raise self.error
        return self._get_post_return

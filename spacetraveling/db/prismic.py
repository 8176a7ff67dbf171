import json
import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from spacetraveling.errors import FetchError, NotFoundError
from spacetraveling.settings import Settings, settings

logger = logging.getLogger(__name__)


def at(path: str, value: str) -> str:
    """Build a Prismic ``at`` predicate, e.g. ``[at(document.type, "posts")]``."""
    return f"[at({path}, {json.dumps(value)})]"


class PrismicClient:
    """
    Thin async gateway over the Prismic REST API v2.
    Every method returns the decoded JSON body; interpretation is left to
    the repos and mappers.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_endpoint: str,
        access_token: str = "",
    ):
        self.http = http
        self.api_endpoint = api_endpoint.rstrip("/")
        self.access_token = access_token
        api_url = httpx.URL(self.api_endpoint)
        self.api_host = api_url.host
        self.api_scheme = api_url.scheme

    async def aclose(self) -> None:
        await self.http.aclose()

    async def get_master_ref(self) -> str:
        api = await self._get_json(
            httpx.URL(self.api_endpoint, params=self._auth_params())
        )
        refs = api.get("refs") if isinstance(api, dict) else None
        for ref in refs or []:
            if ref.get("isMasterRef"):
                return ref["ref"]
        raise FetchError("Prismic API did not advertise a master ref")

    async def query(
        self,
        predicates: Iterable[str],
        *,
        fetch: Optional[Iterable[str]] = None,
        page_size: Optional[int] = None,
        ref: Optional[str] = None,
        orderings: Optional[str] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "ref": ref or await self.get_master_ref(),
            "q": f"[{''.join(predicates)}]",
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if page_size:
            params["pageSize"] = page_size
        if orderings:
            params["orderings"] = orderings
        if after:
            params["after"] = after
        params.update(self._auth_params())

        url = httpx.URL(f"{self.api_endpoint}/documents/search", params=params)
        return await self._search(url)

    async def get_by_uid(
        self, doc_type: str, uid: str, *, ref: Optional[str] = None
    ) -> Dict[str, Any]:
        response = await self.query(
            [at(f"my.{doc_type}.uid", uid)], page_size=1, ref=ref
        )
        results = response["results"]
        if not results:
            raise NotFoundError(uid)
        return results[0]

    async def get_by_id(
        self, doc_id: str, *, ref: Optional[str] = None
    ) -> Dict[str, Any]:
        response = await self.query([at("document.id", doc_id)], page_size=1, ref=ref)
        results = response["results"]
        if not results:
            raise NotFoundError(doc_id)
        return results[0]

    async def fetch_page(self, cursor: str) -> Dict[str, Any]:
        """
        Dereference a ``next_page`` URL handed out by a previous search.
        The cursor keeps its own query; only the access token is added.
        """
        url = httpx.URL(cursor)
        if url.host != self.api_host or url.scheme != self.api_scheme:
            raise ValueError(f"Cursor does not point at the Prismic API: {cursor}")

        return await self._search(url.copy_merge_params(self._auth_params()))

    def _auth_params(self) -> Dict[str, str]:
        return {"access_token": self.access_token} if self.access_token else {}

    async def _search(self, url: httpx.URL) -> Dict[str, Any]:
        data = await self._get_json(url)
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            logger.warning(f"Unexpected Prismic search payload from {url.path}")
            raise FetchError("Prismic search response has no results list")

        # next_page echoes the request query, token included
        next_page = data.get("next_page")
        if next_page:
            data["next_page"] = str(
                httpx.URL(next_page).copy_remove_param("access_token")
            )
        return data

    async def _get_json(self, url: httpx.URL) -> Any:
        try:
            resp = await self.http.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Prismic request to {url.path} failed: {e}")
            raise FetchError(f"Prismic request failed: {e}") from e

        if resp.status_code != 200:
            logger.warning(f"Prismic API {resp.status_code} for {url.path}")
            raise FetchError(
                f"Prismic API answered {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.warning(f"Prismic API returned invalid JSON for {url.path}")
            raise FetchError("Prismic API returned invalid JSON") from e


def create_prismic_client(current_settings: Settings = settings) -> PrismicClient:
    """
    Build a PrismicClient with its own httpx.AsyncClient.
    Called from the application lifespan to avoid import-time connections.
    """
    http = httpx.AsyncClient(timeout=current_settings.PRISMIC_TIMEOUT_SECONDS)
    return PrismicClient(
        http,
        api_endpoint=current_settings.PRISMIC_API_ENDPOINT,
        access_token=current_settings.PRISMIC_ACCESS_TOKEN,
    )

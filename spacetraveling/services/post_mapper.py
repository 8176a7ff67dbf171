import datetime
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from spacetraveling.errors import IntegrityError
from spacetraveling.schemas.blog import (
    ContentSection,
    PaginationState,
    PostDetail,
    PostSummary,
)

logger = logging.getLogger(__name__)

PRISMIC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_MISSING = object()


def map_post_summary(doc: dict) -> PostSummary:
    """Map a raw Prismic document onto the listing shape."""
    data = _require_block(doc, "data")
    return _build(
        PostSummary,
        doc,
        uid=_require(doc, "uid", doc),
        firstPublicationDate=_timestamp(doc, "first_publication_date"),
        title=_require(data, "title", doc),
        subtitle=_require(data, "subtitle", doc),
        author=_require(data, "author", doc),
    )


def map_post_detail(doc: dict) -> PostDetail:
    """
    Map a raw Prismic document onto the full post shape.
    Rich-text bodies are kept exactly as the CMS sent them.
    """
    summary = map_post_summary(doc)
    data = doc["data"]
    banner = _require(data, "banner", doc)
    if not isinstance(banner, dict):
        raise IntegrityError("banner", _doc_id(doc))

    return _build(
        PostDetail,
        doc,
        id=_require(doc, "id", doc),
        uid=summary.uid,
        firstPublicationDate=summary.firstPublicationDate,
        lastPublicationDate=_timestamp(doc, "last_publication_date"),
        title=summary.title,
        subtitle=summary.subtitle,
        author=summary.author,
        bannerUrl=_require(banner, "url", doc, field="banner.url"),
        content=_map_sections(_require(data, "content", doc), doc),
    )


def map_post_page(response: dict) -> PaginationState:
    """Map a Prismic search response (results + next_page) onto a page."""
    return PaginationState(
        results=[map_post_summary(doc) for doc in response.get("results") or []],
        nextPageCursor=response.get("next_page"),
    )


def _build(model, doc: dict, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        field = ".".join(str(part) for part in e.errors()[0]["loc"])
        raise IntegrityError(field, _doc_id(doc)) from e


def parse_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    if value is None:
        return None
    try:
        return datetime.datetime.strptime(value, PRISMIC_TIMESTAMP_FORMAT)
    except (TypeError, ValueError):
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))


def _map_sections(raw_sections: Any, doc: dict) -> List[ContentSection]:
    if not isinstance(raw_sections, list):
        raise IntegrityError("content", _doc_id(doc))

    sections = []
    for index, section in enumerate(raw_sections):
        if not isinstance(section, dict) or "body" not in section:
            raise IntegrityError(f"content[{index}].body", _doc_id(doc))
        if "heading" not in section:
            raise IntegrityError(f"content[{index}].heading", _doc_id(doc))
        sections.append(
            _build(
                ContentSection,
                doc,
                heading=section.get("heading") or "",
                body=section["body"] or [],
            )
        )
    return sections


def _timestamp(doc: dict, key: str) -> Optional[datetime.datetime]:
    if key not in doc:
        raise IntegrityError(key, _doc_id(doc))
    try:
        return parse_timestamp(doc[key])
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Unparsable {key} {doc[key]!r} on {_doc_id(doc)}: {e}")
        raise IntegrityError(key, _doc_id(doc)) from e


def _require_block(doc: dict, key: str) -> Dict[str, Any]:
    block = doc.get(key) if isinstance(doc, dict) else None
    if not isinstance(block, dict):
        raise IntegrityError(key, _doc_id(doc))
    return block


def _require(block: dict, key: str, doc: dict, field: Optional[str] = None) -> Any:
    value = block.get(key, _MISSING)
    if value is _MISSING or value is None:
        raise IntegrityError(field or key, _doc_id(doc))
    return value


def _doc_id(doc: Any) -> Optional[str]:
    if not isinstance(doc, dict):
        return None
    return doc.get("id") or doc.get("uid")

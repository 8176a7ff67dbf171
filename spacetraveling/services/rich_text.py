"""
Render Prismic structured text.

A structured-text value is a list of blocks such as::

    {"type": "paragraph", "text": "Hello world", "spans": [
        {"start": 0, "end": 5, "type": "strong"}
    ]}

``as_text`` flattens it for word counting, ``as_html`` renders it for display.
"""

import html
from typing import Any, Dict, Iterable, List, Optional

BLOCK_TAGS = {
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "paragraph": "p",
    "preformatted": "pre",
}
LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}


def as_text(
    rich_text: Optional[Iterable[Dict[str, Any]]], join_string: str = " "
) -> str:
    if not rich_text:
        return ""
    return join_string.join(
        block.get("text") or "" for block in rich_text if "text" in block
    )


def as_html(rich_text: Optional[Iterable[Dict[str, Any]]]) -> str:
    if not rich_text:
        return ""

    parts: List[str] = []
    open_list: Optional[str] = None
    for block in rich_text:
        block_type = block.get("type")
        list_tag = LIST_TAGS.get(block_type)

        if open_list and list_tag != open_list:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and open_list is None:
            parts.append(f"<{list_tag}>")
            open_list = list_tag

        parts.append(render_block(block))

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(parts)


def render_block(block: Dict[str, Any]) -> str:
    block_type = block.get("type")

    if block_type in BLOCK_TAGS:
        tag = BLOCK_TAGS[block_type]
        inner = render_spans(block.get("text", ""), block.get("spans"))
        return f"<{tag}>{inner}</{tag}>"
    if block_type in LIST_TAGS:
        return f"<li>{render_spans(block.get('text', ''), block.get('spans'))}</li>"
    if block_type == "image":
        src = html.escape(block.get("url", ""), quote=True)
        alt = html.escape(block.get("alt") or "", quote=True)
        return f'<p class="block-img"><img src="{src}" alt="{alt}" /></p>'
    if block_type == "embed":
        oembed = block.get("oembed") or {}
        provider = html.escape(oembed.get("provider_name") or "", quote=True)
        # oEmbed markup is trusted CMS output and rendered as-is
        markup = oembed.get("html") or ""
        return f'<div data-oembed-provider="{provider}">{markup}</div>'
    return ""


def render_spans(text: str, spans: Optional[List[Dict[str, Any]]]) -> str:
    """
    Apply inline spans to ``text``.
    Overlapping spans are split into segments so the output stays well nested.
    """
    text = text or ""
    spans = [s for s in spans or [] if s.get("end", 0) > s.get("start", 0)]
    if not spans:
        return _escape(text)

    boundaries = sorted(
        {0, len(text)}
        | {max(0, min(s["start"], len(text))) for s in spans}
        | {max(0, min(s["end"], len(text))) for s in spans}
    )

    out: List[str] = []
    for start, end in zip(boundaries, boundaries[1:]):
        segment = _escape(text[start:end])
        covering = sorted(
            (s for s in spans if s["start"] <= start and s["end"] >= end),
            key=lambda s: (s["start"], -s["end"]),
        )
        for span in reversed(covering):
            open_tag, close_tag = _span_tags(span)
            segment = f"{open_tag}{segment}{close_tag}"
        out.append(segment)
    return "".join(out)


def _span_tags(span: Dict[str, Any]) -> tuple:
    span_type = span.get("type")
    if span_type == "strong":
        return "<strong>", "</strong>"
    if span_type == "em":
        return "<em>", "</em>"
    if span_type == "hyperlink":
        url = (span.get("data") or {}).get("url", "")
        target = (span.get("data") or {}).get("target")
        attrs = f' href="{html.escape(url, quote=True)}"'
        if target:
            attrs += f' target="{html.escape(target, quote=True)}" rel="noopener"'
        return f"<a{attrs}>", "</a>"
    if span_type == "label":
        label = (span.get("data") or {}).get("label", "")
        return f'<span class="{html.escape(label, quote=True)}">', "</span>"
    return "", ""


def _escape(text: str) -> str:
    return html.escape(text).replace("\n", "<br />")

"""
Rich-text and link helpers exposed to templates.

Rich-text fields arrive as a list of blocks (``heading1``, ``paragraph``,
``list-item``, ``image``...), each with its text and a list of character
spans (``strong``, ``em``, ``hyperlink``, ``label``). These helpers turn them
into plain text or HTML.
"""

from typing import Any, Callable, Dict, List, Optional

from markupsafe import Markup, escape

from folio_site.content.models import Entry

LinkResolver = Callable[[Any], str]

# Single-page document types, each served at "/<type>".
PAGE_TYPES = ("about", "essays", "creation", "index")

_LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}
_HEADING_TAGS = {f"heading{level}": f"h{level}" for level in range(1, 7)}


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, Entry):
        return getattr(obj, key, default)
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def link_resolver(doc: Any) -> str:
    """Returns the site URL of a linked document or the target of a web link."""
    if not doc:
        return "/"

    link_type = _get(doc, "link_type")
    if link_type in ("Web", "Media"):
        return _get(doc, "url") or "/"
    if _get(doc, "isBroken") or _get(doc, "is_broken"):
        return "/"

    doc_type = _get(doc, "type")
    uid = _get(doc, "uid")
    if doc_type == "project" and uid:
        return f"/case/{uid}"
    if doc_type == "post" and uid:
        return f"/article/{uid}"
    if doc_type in PAGE_TYPES:
        return f"/{doc_type}"
    return "/"


def as_text(field: Any, separator: str = " ") -> str:
    """Plain text of a rich-text field; scalar fields (numbers, dates) render as-is."""
    if isinstance(field, (int, float)):
        return str(field)
    if not field or isinstance(field, dict):
        return ""
    if isinstance(field, str):
        return field
    if not isinstance(field, (list, tuple)):
        return str(field)
    return separator.join(block.get("text", "") for block in field if isinstance(block, dict))


def _text(segment: str) -> str:
    return str(escape(segment)).replace("\n", "<br />")


def _wrap(span: Dict[str, Any], inner: str, resolver: LinkResolver) -> str:
    span_type = span.get("type")
    data = span.get("data") or {}
    if span_type == "strong":
        return f"<strong>{inner}</strong>"
    if span_type == "em":
        return f"<em>{inner}</em>"
    if span_type == "hyperlink":
        href = escape(resolver(data))
        if data.get("target"):
            return f'<a href="{href}" target="{escape(data["target"])}" rel="noopener">{inner}</a>'
        return f'<a href="{href}">{inner}</a>'
    if span_type == "label":
        return f'<span class="{escape(data.get("label", ""))}">{inner}</span>'
    return inner


def _render_range(text: str, start: int, end: int, spans: List[Dict[str, Any]], resolver: LinkResolver) -> str:
    out = []
    cursor = start
    i = 0
    while i < len(spans):
        span = spans[i]
        span_start = max(span["start"], cursor)
        span_end = min(span["end"], end)

        # Spans nested inside this one are rendered within it.
        j = i + 1
        while j < len(spans) and spans[j]["end"] <= span["end"]:
            j += 1

        if span_start < span_end:
            out.append(_text(text[cursor:span_start]))
            inner = _render_range(text, span_start, span_end, spans[i + 1:j], resolver)
            out.append(_wrap(span, inner, resolver))
            cursor = span_end
        i = j

    out.append(_text(text[cursor:end]))
    return "".join(out)


def _utf16_offsets(text: str) -> List[int]:
    """Maps each UTF-16 code unit offset of ``text`` to a code point index."""
    offsets = []
    for index, char in enumerate(text):
        offsets.append(index)
        if ord(char) > 0xFFFF:
            offsets.append(index)
    offsets.append(len(text))
    return offsets


def render_spans(text: str, spans: Optional[List[Dict[str, Any]]], resolver: LinkResolver = link_resolver) -> str:
    """Renders ``text`` with its spans; span offsets count UTF-16 code units."""
    offsets = _utf16_offsets(text)
    last = len(offsets) - 1
    converted = [
        {**span, "start": offsets[min(max(span["start"], 0), last)], "end": offsets[min(max(span["end"], 0), last)]}
        for span in spans or []
    ]
    ordered = sorted(converted, key=lambda span: (span["start"], -span["end"]))
    return _render_range(text, 0, len(text), ordered, resolver)


def _render_block(block: Dict[str, Any], resolver: LinkResolver) -> str:
    block_type = block.get("type", "paragraph")

    if block_type == "image":
        alt = escape(block.get("alt") or "")
        img = f'<img src="{escape(block.get("url", ""))}" alt="{alt}" />'
        if block.get("linkTo"):
            img = f'<a href="{escape(resolver(block["linkTo"]))}">{img}</a>'
        return f'<p class="block-img">{img}</p>'

    if block_type == "embed":
        oembed = block.get("oembed") or {}
        return (
            f'<div data-oembed="{escape(oembed.get("embed_url", ""))}" '
            f'data-oembed-type="{escape(oembed.get("type", ""))}" '
            f'data-oembed-provider="{escape(oembed.get("provider_name", ""))}">'
            f'{oembed.get("html", "")}</div>'
        )

    inner = render_spans(block.get("text", ""), block.get("spans"), resolver)

    if block_type in _HEADING_TAGS:
        tag = _HEADING_TAGS[block_type]
        return f"<{tag}>{inner}</{tag}>"
    if block_type == "preformatted":
        return f"<pre>{inner}</pre>"
    if block_type in _LIST_TAGS:
        return f"<li>{inner}</li>"
    return f"<p>{inner}</p>"


def as_html(field: Any, resolver: LinkResolver = link_resolver) -> Markup:
    """HTML of a rich-text field; consecutive list items share one list."""
    if not field:
        return Markup("")
    if not isinstance(field, (list, tuple)):
        return Markup(f"<p>{_text(str(field))}</p>")

    out = []
    open_list = None
    for block in field:
        if not isinstance(block, dict):
            continue
        list_tag = _LIST_TAGS.get(block.get("type"))
        if list_tag != open_list:
            if open_list:
                out.append(f"</{open_list}>")
            if list_tag:
                out.append(f"<{list_tag}>")
            open_list = list_tag
        out.append(_render_block(block, resolver))
    if open_list:
        out.append(f"</{open_list}>")

    return Markup("".join(out))

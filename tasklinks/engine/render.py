"""Coordinator for the link rendering pipeline."""

from __future__ import annotations

from .escape import escape_html, escape_to_trusted
from .markdown import MARKDOWN_LINK, replace_markdown_links
from .segments import link_plain_urls
from .types import TrustedHtml

MARKDOWN_HINT = "]("


def has_link_hint(text: str) -> bool:
    """Cheap substring test run before any regular expression."""

    return "://" in text or "www." in text.lower() or MARKDOWN_HINT in text


def render_links(text: str, link_rendering_enabled: bool = True) -> TrustedHtml:
    """Render URLs and markdown links in ``text`` as anchors.

    Everything outside the generated ``<a>`` tags is escaped. Most task
    titles carry no links, so the function returns escaped text as early
    as it can.
    """

    if not text:
        return TrustedHtml("")

    if not link_rendering_enabled or not has_link_hint(text):
        return escape_to_trusted(text)

    markdown_count = 0
    if MARKDOWN_HINT in text and MARKDOWN_LINK.search(text):
        html, markdown_count = replace_markdown_links(text)
    else:
        html = escape_html(text)

    html, url_count = link_plain_urls(html)

    if not markdown_count and not url_count:
        return escape_to_trusted(text)
    return TrustedHtml(html)

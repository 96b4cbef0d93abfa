"""Extraction of ``[title](url)`` markdown links."""

from __future__ import annotations

import re
from typing import Iterator, List, Tuple

from .escape import build_anchor, escape_html
from .plain_urls import MAX_URL_LENGTH
from .schemes import classify_target
from .types import LinkCandidate

# Link text never contains "[", so a run of brackets fails at the next one
# instead of rescanning the rest of the input. Both captures are capped.
MARKDOWN_LINK = re.compile(
    rf"\[([^\[\]]{{1,{MAX_URL_LENGTH}}}+)\]\(([^)]{{1,{MAX_URL_LENGTH}}}+)\)"
)


def iter_markdown_links(text: str) -> Iterator[Tuple[re.Match[str], LinkCandidate]]:
    """Yield each markdown link in ``text`` from left to right."""

    for match in MARKDOWN_LINK.finditer(text):
        yield match, LinkCandidate(display_text=match.group(1), raw_target=match.group(2))


def render_candidate(candidate: LinkCandidate) -> str:
    """Return an anchor for a safe target, or only the escaped display text."""

    target = classify_target(candidate.raw_target)
    if not target.is_safe:
        return escape_html(candidate.display_text)
    return build_anchor(target.normalized_href, candidate.display_text)


def replace_markdown_links(text: str) -> Tuple[str, int]:
    """Render markdown links in ``text`` and escape everything around them.

    Returns the HTML and the number of links that matched, including links
    dropped for an unsafe scheme.
    """

    pieces: List[str] = []
    last = 0
    count = 0
    for match, candidate in iter_markdown_links(text):
        pieces.append(escape_html(text[last:match.start()]))
        pieces.append(render_candidate(candidate))
        last = match.end()
        count += 1
    pieces.append(escape_html(text[last:]))
    return "".join(pieces), count

"""Detection of bare ``http(s)://``, ``file://`` and ``www.`` URLs."""

from __future__ import annotations

import re
from typing import Iterator, List, Tuple

from .escape import build_anchor, escape_html, unescape_html
from .schemes import classify_target, is_scheme_safe
from .types import UrlMatch

# Upper bound on a single URL token. The possessive quantifier never gives
# characters back, so an over-long token fails after one pass.
MAX_URL_LENGTH = 2000

_TOKEN = rf"\S{{1,{MAX_URL_LENGTH}}}+(?=\s|$)"

URL_PATTERN = re.compile(
    rf"(?:(?:https?|file)://{_TOKEN}|www\.{_TOKEN})",
    flags=re.IGNORECASE,
)

TRAILING_PUNCTUATION = re.compile(r"[.,;!?]+$")


def strip_trailing_punctuation(url: str) -> Tuple[str, str]:
    """Split sentence punctuation off the end of ``url``.

    Returns ``(cleaned, trailing)`` where ``cleaned + trailing == url``.
    """

    cleaned = TRAILING_PUNCTUATION.sub("", url)
    return cleaned, url[len(cleaned):]


def render_url(url: str) -> str:
    """Return HTML for one raw URL token: an anchor, or escaped text."""

    cleaned, trailing = strip_trailing_punctuation(url)
    target = classify_target(cleaned)
    if not target.is_safe:
        return escape_html(url)
    return build_anchor(target.normalized_href, cleaned) + escape_html(trailing)


def link_raw_urls(text: str) -> Tuple[str, int]:
    """Escape raw ``text`` and turn its URL tokens into anchors.

    The length cap applies to the URL as typed, and every piece of the
    output is escaped exactly once.
    """

    pieces: List[str] = []
    last = 0
    count = 0
    for match in URL_PATTERN.finditer(text):
        pieces.append(escape_html(text[last:match.start()]))
        pieces.append(render_url(match.group(0)))
        last = match.end()
        count += 1
    pieces.append(escape_html(text[last:]))
    return "".join(pieces), count


def link_escaped_urls(escaped: str) -> Tuple[str, int]:
    """Replace URL tokens inside literal text that is already escaped.

    The run is unescaped back to the raw text first, so tokens are matched
    and length-capped on what the user typed.
    """

    return link_raw_urls(unescape_html(escaped))


def find_plain_urls(text: str) -> Iterator[UrlMatch]:
    """Yield scheme-safe bare URLs in raw ``text`` with their offsets."""

    for match in URL_PATTERN.finditer(text):
        cleaned, _ = strip_trailing_punctuation(match.group(0))
        if not is_scheme_safe(cleaned):
            continue
        yield UrlMatch(url=cleaned, start=match.start(), end=match.start() + len(cleaned))

"""Anchor-aware segmentation of engine-produced HTML."""

from __future__ import annotations

import re
from typing import List, Tuple

from .plain_urls import link_escaped_urls
from .types import ANCHOR, LITERAL, Segment

ANCHOR_TAG = re.compile(r"<a\b[^>]*>.*?</a>", flags=re.DOTALL)


def segment_anchors(html: str) -> List[Segment]:
    """Partition ``html`` into anchor and literal runs.

    Joining the ``text`` of every returned segment gives back ``html``.
    """

    segments: List[Segment] = []
    last = 0
    for match in ANCHOR_TAG.finditer(html):
        if match.start() > last:
            segments.append(Segment(html[last:match.start()], LITERAL))
        segments.append(Segment(match.group(0), ANCHOR))
        last = match.end()
    if last < len(html):
        segments.append(Segment(html[last:], LITERAL))
    return segments


def link_plain_urls(html: str) -> Tuple[str, int]:
    """Link bare URLs in the literal runs of ``html``.

    Anchor runs are copied through unchanged so their href and label are
    never wrapped a second time.
    """

    pieces: List[str] = []
    count = 0
    for segment in segment_anchors(html):
        if segment.is_anchor:
            pieces.append(segment.text)
            continue
        linked, found = link_escaped_urls(segment.text)
        pieces.append(linked)
        count += found
    return "".join(pieces), count

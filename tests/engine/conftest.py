"""Shared helpers for engine tests."""

from __future__ import annotations

import re

from tasklinks.engine.segments import segment_anchors

ENTITY = re.compile(r"&(?:amp|lt|gt|quot);")
ANCHOR_SHAPE = re.compile(
    r'^<a href="([^"<>]*)" target="_blank" rel="noopener noreferrer">([^<>"]*)</a>$'
)


def anchor(href: str, label: str) -> str:
    return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{label}</a>'


def assert_fully_escaped(html: str) -> None:
    """Fail if any markup outside the engine's own anchors is unescaped."""

    for segment in segment_anchors(html):
        if segment.is_anchor:
            assert ANCHOR_SHAPE.match(segment.text), segment.text
            continue
        for char in '<>"':
            assert char not in segment.text, segment.text
        assert "&" not in ENTITY.sub("", segment.text), segment.text

"""Typed data structures used by the link rendering engine."""

from __future__ import annotations

from dataclasses import dataclass

LITERAL = "literal"
ANCHOR = "anchor"


@dataclass(frozen=True)
class TrustedHtml:
    """HTML produced by the engine that is safe to insert without escaping.

    Only the escaping and rendering functions of :mod:`tasklinks.engine`
    build instances. ``__html__`` lets ``conditional_escape`` and
    ``format_html`` accept the value without escaping it again.
    """

    html: str = ""

    def __html__(self) -> str:
        return self.html

    def __str__(self) -> str:
        return self.html

    def __bool__(self) -> bool:
        return bool(self.html)


@dataclass(frozen=True)
class Segment:
    """Contiguous run of a string, either plain text or a generated anchor."""

    text: str
    kind: str = LITERAL

    @property
    def is_anchor(self) -> bool:
        return self.kind == ANCHOR


@dataclass(frozen=True)
class LinkCandidate:
    """Display text and raw target taken from markdown or a bare URL."""

    display_text: str
    raw_target: str


@dataclass(frozen=True)
class ClassifiedTarget:
    """Scheme verdict and navigable href for a raw link target."""

    raw_target: str
    is_safe: bool
    normalized_href: str


@dataclass(frozen=True)
class UrlMatch:
    """A bare URL found in raw text, with trailing punctuation removed."""

    url: str
    start: int
    end: int

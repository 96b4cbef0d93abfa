"""Short-syntax settings and the URL behaviors they select.

The rendering engine does not look at these settings. The task title
feature uses :func:`apply_url_behavior` to decide what happens to a URL
typed into a title before the title is rendered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Tuple

from django.core.exceptions import ImproperlyConfigured

from .engine.markdown import MARKDOWN_LINK
from .engine.plain_urls import find_plain_urls
from .engine.schemes import normalize_href
from .services import UrlMetadataService, get_metadata_service, url_basename


class UrlBehavior(str, Enum):
    EXTRACT = "extract"
    KEEP_URL = "keep-url"
    KEEP_TITLE = "keep-title"

    @property
    def label(self) -> str:
        return URL_BEHAVIOR_LABELS[self]


URL_BEHAVIOR_LABELS = {
    UrlBehavior.EXTRACT: "Extract to attachments (remove from title)",
    UrlBehavior.KEEP_URL: "Keep URL in title (clickable)",
    UrlBehavior.KEEP_TITLE: "Replace with page title (clickable)",
}


@dataclass(frozen=True)
class ShortSyntaxConfig:
    """Which title shortcuts are enabled and how typed URLs are handled."""

    is_enable_project: bool = True
    is_enable_tag: bool = True
    is_enable_due: bool = True
    url_behavior: UrlBehavior = UrlBehavior.KEEP_URL

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ShortSyntaxConfig":
        raw_behavior = data.get("url_behavior", UrlBehavior.KEEP_URL.value)
        try:
            behavior = UrlBehavior(raw_behavior)
        except ValueError as exc:
            choices = ", ".join(item.value for item in UrlBehavior)
            raise ImproperlyConfigured(
                f"Unknown url_behavior {raw_behavior!r}; expected one of {choices}."
            ) from exc
        return cls(
            is_enable_project=bool(data.get("is_enable_project", True)),
            is_enable_tag=bool(data.get("is_enable_tag", True)),
            is_enable_due=bool(data.get("is_enable_due", True)),
            url_behavior=behavior,
        )


@dataclass(frozen=True)
class LinkAttachment:
    """A URL moved out of a task title."""

    url: str
    title: str


@dataclass(frozen=True)
class ProcessedTitle:
    title: str
    attachments: List[LinkAttachment] = field(default_factory=list)


def _markdown_spans(text: str) -> List[Tuple[int, int]]:
    return [match.span() for match in MARKDOWN_LINK.finditer(text)]


def _inside(spans: List[Tuple[int, int]], start: int, end: int) -> bool:
    return any(span_start <= start and end <= span_end for span_start, span_end in spans)


def _markdown_label(title: str) -> str:
    return re.sub(r"[\[\]]", "", title).strip()


def apply_url_behavior(
    title: str,
    config: ShortSyntaxConfig,
    service: UrlMetadataService | None = None,
) -> ProcessedTitle:
    """Apply ``config.url_behavior`` to the bare URLs in ``title``.

    URLs that already form the target or label of a markdown link are left
    alone. ``keep-title`` looks each URL up through ``service`` (the shared
    title service by default) and falls back to the URL basename.
    """

    if not title or config.url_behavior is UrlBehavior.KEEP_URL:
        return ProcessedTitle(title=title)

    protected = _markdown_spans(title)
    matches = [
        match
        for match in find_plain_urls(title)
        if not _inside(protected, match.start, match.end)
    ]
    if not matches:
        return ProcessedTitle(title=title)

    pieces: List[str] = []
    attachments: List[LinkAttachment] = []
    last = 0

    if config.url_behavior is UrlBehavior.EXTRACT:
        for match in matches:
            pieces.append(title[last:match.start])
            attachments.append(
                LinkAttachment(url=normalize_href(match.url), title=url_basename(match.url))
            )
            last = match.end
        pieces.append(title[last:])
        return ProcessedTitle(title=" ".join("".join(pieces).split()), attachments=attachments)

    lookup = service or get_metadata_service()
    for match in matches:
        pieces.append(title[last:match.start])
        if ")" in match.url:
            # Cannot be a markdown target, keep the raw URL.
            pieces.append(match.url)
        else:
            href = normalize_href(match.url)
            label = _markdown_label(lookup.fetch_title(href, url_basename(match.url)))
            pieces.append(f"[{label or match.url}]({match.url})")
        last = match.end
    pieces.append(title[last:])
    return ProcessedTitle(title="".join(pieces))


def get_default_short_syntax() -> ShortSyntaxConfig:
    """Return the short-syntax defaults from the tasklinks configuration."""

    from .config import get_config

    return ShortSyntaxConfig.from_mapping(get_config().section("short_syntax"))

"""URL scheme classification and href normalisation."""

from __future__ import annotations

import re

from .types import ClassifiedTarget

DANGEROUS_SCHEMES = ("javascript:", "data:", "vbscript:")
SAFE_PREFIXES = ("http://", "https://", "file://", "//")

_QUALIFIED = re.compile(r"^(?:https?|file)://", flags=re.IGNORECASE)


def is_scheme_safe(candidate: str) -> bool:
    """Return True when ``candidate`` may be placed in an ``href``.

    Known dangerous schemes are rejected, web and file URLs are accepted, and
    strings without ``://`` are treated as bare hosts or paths. Any other
    ``scheme://`` is rejected.
    """

    lowered = candidate.strip().lower()
    if lowered.startswith(DANGEROUS_SCHEMES):
        return False
    if lowered.startswith(SAFE_PREFIXES):
        return True
    return "://" not in lowered


def normalize_href(url: str) -> str:
    """Turn a scheme-safe URL into a fully qualified href."""

    if _QUALIFIED.match(url):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    return f"http://{url}"


def classify_target(raw_target: str) -> ClassifiedTarget:
    target = raw_target.strip()
    if not is_scheme_safe(target):
        return ClassifiedTarget(raw_target=raw_target, is_safe=False, normalized_href="")
    return ClassifiedTarget(
        raw_target=raw_target,
        is_safe=True,
        normalized_href=normalize_href(target),
    )

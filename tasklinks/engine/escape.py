"""Escaping helpers for literal text destined for markup."""

from __future__ import annotations

from .types import TrustedHtml

# Ampersand first so entities produced by later steps are not escaped twice.
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def escape_html(text: str) -> str:
    """Escape ``text`` for use as element content or a double-quoted attribute.

    Not idempotent: escaping already escaped text escapes it again, so each
    literal must pass through here exactly once.
    """

    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def unescape_html(text: str) -> str:
    """Reverse :func:`escape_html` exactly, leaving any other entity alone."""

    for char, entity in reversed(_ESCAPES):
        text = text.replace(entity, char)
    return text


def escape_to_trusted(text: str) -> TrustedHtml:
    return TrustedHtml(escape_html(text))


def build_anchor(href: str, label: str) -> str:
    """Return the one anchor shape the engine emits, escaping both parts."""

    return (
        f'<a href="{escape_html(href)}" target="_blank" rel="noopener noreferrer">'
        f"{escape_html(label)}</a>"
    )

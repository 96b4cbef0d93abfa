"""Text to HTML link rendering engine for task titles."""

from .escape import escape_html, escape_to_trusted
from .render import render_links
from .types import TrustedHtml

__all__ = ["TrustedHtml", "escape_html", "escape_to_trusted", "render_links"]

"""Template filter that renders links in task titles.

Usage::

    {% load tasklinks %}
    {{ task.title|render_links }}
    {{ task.title|render_links:False }}
"""

from __future__ import annotations

from django import template
from django.utils.safestring import SafeString, mark_safe

from tasklinks.engine import render_links as render_links_html

register = template.Library()


@register.filter(name='render_links')
def render_links(value: object, enabled: bool = True) -> SafeString:
    """Return ``value`` as HTML with clickable links, everything else escaped."""

    text = '' if value is None else str(value)
    return mark_safe(render_links_html(text, bool(enabled)).html)

"""Forms for the tasklinks app.

The short-syntax form mirrors the settings section that lets users turn
title shortcuts on and off and pick what happens to URLs typed into a
task title. The preview and lookup forms validate input for the views.
"""

from __future__ import annotations

from django import forms

from .engine.schemes import is_scheme_safe
from .shortsyntax import ShortSyntaxConfig, UrlBehavior

URL_BEHAVIOR_HELP = (
    'Note: "Replace with page title" may not work for every external URL. '
    "It falls back to the final part of the URL."
)


class ShortSyntaxForm(forms.Form):
    """Toggles for title shortcuts plus the URL behavior choice."""

    is_enable_project = forms.BooleanField(
        required=False,
        initial=True,
        label='Enable project short syntax',
    )
    is_enable_tag = forms.BooleanField(
        required=False,
        initial=True,
        label='Enable tag short syntax',
    )
    is_enable_due = forms.BooleanField(
        required=False,
        initial=True,
        label='Enable due date short syntax',
    )
    url_behavior = forms.ChoiceField(
        required=True,
        label='URL Behavior',
        choices=[(behavior.value, behavior.label) for behavior in UrlBehavior],
        initial=UrlBehavior.KEEP_URL.value,
        help_text=URL_BEHAVIOR_HELP,
    )

    @classmethod
    def from_config(cls, config: ShortSyntaxConfig, **kwargs) -> "ShortSyntaxForm":
        initial = {
            'is_enable_project': config.is_enable_project,
            'is_enable_tag': config.is_enable_tag,
            'is_enable_due': config.is_enable_due,
            'url_behavior': config.url_behavior.value,
        }
        return cls(initial=initial, **kwargs)

    def to_config(self) -> ShortSyntaxConfig:
        """Build a :class:`ShortSyntaxConfig` from validated data."""

        data = self.cleaned_data
        return ShortSyntaxConfig(
            is_enable_project=data['is_enable_project'],
            is_enable_tag=data['is_enable_tag'],
            is_enable_due=data['is_enable_due'],
            url_behavior=UrlBehavior(data['url_behavior']),
        )


class TaskTitlePreviewForm(ShortSyntaxForm):
    """Task title to preview, rendered with the chosen settings."""

    title = forms.CharField(
        max_length=2000,
        strip=False,
        widget=forms.TextInput(attrs={'placeholder': 'Read [the docs](https://example.com) or www.example.com'}),
        label='Task title',
    )
    render_links = forms.BooleanField(
        required=False,
        initial=True,
        label='Render links',
        help_text='Show URLs and markdown links as clickable links.',
    )

    field_order = ['title', 'render_links']


class TitleLookupForm(forms.Form):
    url = forms.CharField(max_length=2000)
    fallback = forms.CharField(max_length=300, required=False)

    def clean_url(self) -> str:
        url = self.cleaned_data['url'].strip()
        if not is_scheme_safe(url):
            raise forms.ValidationError('Only http, https and file URLs can be looked up.')
        return url

"""Django views for the tasklinks app.

The preview page shows how a task title renders once the chosen URL
behavior has been applied. The title endpoint exposes the page title
service to front-end code that replaces URLs with page titles.
"""

from __future__ import annotations

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET, require_http_methods

from .config import get_config
from .forms import ShortSyntaxForm, TaskTitlePreviewForm, TitleLookupForm
from .services import get_metadata_service, url_basename
from .shortsyntax import apply_url_behavior, get_default_short_syntax


@require_http_methods(['GET', 'POST'])
def preview(request: HttpRequest) -> HttpResponse:
    """Render a task title with links, after applying the URL behavior."""

    context: dict[str, object] = {}
    if request.method == 'POST':
        form = TaskTitlePreviewForm(request.POST)
        if form.is_valid():
            processed = apply_url_behavior(form.cleaned_data['title'], form.to_config())
            context.update(
                {
                    'processed': processed,
                    'render_links': form.cleaned_data['render_links'],
                }
            )
    else:
        defaults = ShortSyntaxForm.from_config(get_default_short_syntax()).initial
        form = TaskTitlePreviewForm(initial={**defaults, 'render_links': get_config().render_links})

    context['form'] = form
    return render(request, 'tasklinks/preview.html', context)


@require_GET
def title_lookup(request: HttpRequest) -> JsonResponse:
    """Return the page title for ``?url=``, or the fallback when unavailable."""

    form = TitleLookupForm(request.GET)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    url = form.cleaned_data['url']
    fallback = form.cleaned_data['fallback'] or url_basename(url)
    title = get_metadata_service().fetch_title(url, fallback)
    return JsonResponse({'url': url, 'title': title})

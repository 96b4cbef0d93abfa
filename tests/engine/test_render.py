"""End-to-end rendering tests."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from tasklinks.engine import TrustedHtml, escape_html, render_links

from .conftest import anchor, assert_fully_escaped

SAMPLES = [
    "Just text",
    "<script>alert('x')</script> http://a.com & [b](www.b.com)",
    '[x](javascript:alert(1)) and "quoted" <b>bold</b>',
    "Tom & Jerry ](not a link",
    '<a href="javascript:alert(1)">http://evil.com</a>',
    "[http://a.com](http://b.com) and http://c.com/?q=1&r=2.",
    "www.example.com, //cdn.example.com file:///C:/notes.txt",
]


def test_empty_input_renders_empty():
    assert render_links("") == TrustedHtml("")


def test_plain_text_passes_through():
    assert render_links("Just text").html == "Just text"


@pytest.mark.parametrize("text", SAMPLES)
def test_disabled_rendering_is_plain_escaping(text):
    assert render_links(text, False) == TrustedHtml(escape_html(text))


@pytest.mark.parametrize("text", SAMPLES)
def test_output_is_escaped_outside_generated_anchors(text):
    assert_fully_escaped(render_links(text).html)


def test_unsafe_markdown_link_renders_title_only():
    html = render_links("[x](javascript:alert(1))").html

    assert 'href="javascript:' not in html
    assert html == "x)"


def test_unknown_scheme_stays_plain_text():
    assert render_links("Task javascript://evil").html == "Task javascript://evil"


def test_trailing_punctuation_is_left_outside_the_anchor():
    html = render_links("See http://a.com/x.").html

    assert html == "See " + anchor("http://a.com/x", "http://a.com/x") + "."


def test_www_links_are_normalised():
    html = render_links("Visit www.example.com").html

    assert html == "Visit " + anchor("http://www.example.com", "www.example.com")


def test_quote_breakout_is_escaped_in_href():
    html = render_links('[t](http://e.com/"onmouseover="x)').html

    assert 'href="http://e.com/&quot;onmouseover=&quot;x"' in html
    assert html.count('"') == 6


def test_markdown_label_with_url_is_not_wrapped_twice():
    html = render_links("[http://a.com](http://b.com) and http://c.com").html

    assert html == (
        anchor("http://b.com", "http://a.com")
        + " and "
        + anchor("http://c.com", "http://c.com")
    )


def test_user_typed_anchor_is_escaped_not_trusted():
    html = render_links('<a href="javascript:alert(1)">http://evil.com</a>').html

    assert html.startswith("&lt;a href=&quot;javascript:alert(1)&quot;&gt;")
    assert 'href="javascript' not in html


def test_hint_without_a_match_falls_back_to_escaping():
    assert render_links("a ](b <c>").html == "a ](b &lt;c&gt;"


def test_rendering_is_stateless_across_threads():
    texts = SAMPLES * 20
    expected = [render_links(text) for text in texts]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(render_links, texts))

    assert results == expected


def test_ampersand_heavy_url_is_still_linked():
    text = "x http://a.com/?" + "&" * 500
    html = render_links(text).html

    assert html == "x " + anchor(escape_html(text[2:]), escape_html(text[2:]))


def test_uppercase_www_is_detected_and_keeps_its_case():
    html = render_links("WWW.EXAMPLE.COM").html

    assert html == anchor("http://WWW.EXAMPLE.COM", "WWW.EXAMPLE.COM")

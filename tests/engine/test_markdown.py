"""Markdown link extraction tests."""

from __future__ import annotations

import time

from tasklinks.engine import render_links
from tasklinks.engine.markdown import iter_markdown_links, replace_markdown_links

from .conftest import anchor, assert_fully_escaped


def test_safe_link_becomes_anchor_and_surroundings_are_escaped():
    html, count = replace_markdown_links("Read [the docs](https://example.com/docs) <now>")

    assert count == 1
    assert html == (
        "Read " + anchor("https://example.com/docs", "the docs") + " &lt;now&gt;"
    )


def test_schemeless_and_protocol_relative_targets_are_normalised():
    html, count = replace_markdown_links("[a](www.a.com) [b](//b.com/x)")

    assert count == 2
    assert anchor("http://www.a.com", "a") in html
    assert anchor("https://b.com/x", "b") in html


def test_unsafe_target_keeps_only_escaped_title():
    html, count = replace_markdown_links('[<click>](javascript:alert("x"))')

    assert count == 1
    assert "href" not in html
    assert html == "&lt;click&gt;)"


def test_matches_are_left_to_right_and_non_overlapping():
    found = [candidate for _, candidate in iter_markdown_links("[a](x.com) [b](y.com)")]

    assert [(c.display_text, c.raw_target) for c in found] == [("a", "x.com"), ("b", "y.com")]


def test_text_without_links_is_only_escaped():
    html, count = replace_markdown_links("a ](b & c")

    assert count == 0
    assert html == "a ](b &amp; c"


def test_quote_in_target_cannot_break_out_of_href():
    html, _ = replace_markdown_links('[t](http://e.com/"onmouseover="x)')

    assert html == anchor("http://e.com/&quot;onmouseover=&quot;x", "t")
    assert_fully_escaped(html)


def test_link_text_starts_after_the_last_open_bracket():
    html, count = replace_markdown_links("[a [b](x.com)")

    assert count == 1
    assert html == "[a " + anchor("http://x.com", "b")


def test_run_of_open_brackets_is_rejected_quickly():
    started = time.perf_counter()
    html = render_links("[" * 30000 + "](").html
    elapsed = time.perf_counter() - started

    assert elapsed < 1.0
    assert html == "[" * 30000 + "]("


def test_unterminated_targets_are_rejected_quickly():
    text = "[a](" * 7500
    started = time.perf_counter()
    html, count = replace_markdown_links(text)
    elapsed = time.perf_counter() - started

    assert elapsed < 1.0
    assert count == 0
    assert html == text

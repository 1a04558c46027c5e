"""Tests for the restricted Markdown renderer."""

from __future__ import annotations

from text2lesson.application.markdown_lite import render_markdown, rule


def test_render_markdown_returns_empty_string_for_empty_source() -> None:
    assert render_markdown("") == ""


def test_render_markdown_wraps_plain_text_in_paragraph() -> None:
    html = render_markdown("Hello world")

    assert html.strip() == "<p>Hello world</p>"


def test_render_markdown_separates_paragraphs_on_blank_lines() -> None:
    html = render_markdown("First\n\nSecond")

    assert "<p>First</p>" in html
    assert "<p>Second</p>" in html


def test_render_markdown_normalises_windows_line_endings() -> None:
    html = render_markdown("one\r\ntwo")

    assert "<p>one\ntwo</p>" in html
    assert "\r" not in html


def test_render_markdown_escapes_raw_html() -> None:
    html = render_markdown("<script>alert(1)</script>")

    assert "<script>" not in html
    assert "&lt;script>alert(1)&lt;/script>" in html


def test_render_markdown_keeps_line_breaks_and_sub_sup_tags() -> None:
    html = render_markdown("H<sub>2</sub>O<br>x<sup>2</sup>")

    assert html.strip() == "<p>H<sub>2</sub>O<br>x<sup>2</sup></p>"


def test_render_markdown_escapes_ampersands_but_keeps_entities() -> None:
    html = render_markdown("Fish & chips &amp; peas &#169;")

    assert html.strip() == "<p>Fish &amp; chips &amp; peas &#169;</p>"


def test_render_markdown_replaces_nul_characters() -> None:
    html = render_markdown("a\0b")

    assert "\0" not in html
    assert "a\ufffdb" in html


def test_render_markdown_renders_atx_headings_without_closing_hashes() -> None:
    assert render_markdown("# Title").strip() == "<h1>Title</h1>"
    assert render_markdown("## Sub ##").strip() == "<h2>Sub</h2>"


def test_render_markdown_clamps_heading_level_to_six() -> None:
    assert render_markdown("######## Deep").strip() == "<h6>Deep</h6>"


def test_render_markdown_renders_setext_heading_before_paragraph() -> None:
    html = render_markdown("Title\n=====\nBody text")

    assert "<h1>Title</h1>" in html
    assert "<p>Body text</p>" in html


def test_render_markdown_renders_block_quote() -> None:
    assert render_markdown("> quoted").strip() == "<blockquote>quoted</blockquote>"


def test_render_markdown_renders_indented_code_block() -> None:
    assert render_markdown("    x = 1").strip() == "<pre><code>x = 1</code></pre>"


def test_render_markdown_renders_horizontal_rule_instead_of_list() -> None:
    assert render_markdown("---").strip() == "<hr>"


def test_render_markdown_renders_unordered_list_items() -> None:
    html = render_markdown("- apples\n- pears").strip()

    assert html == "<ul><li>apples</li>\n<li>pears</li></ul>"


def test_render_markdown_renders_ordered_list_items() -> None:
    html = render_markdown("1. one\n2. two").strip()

    assert html == "<ol><li>one</li>\n<li>two</li></ol>"


def test_render_markdown_renders_strong_and_emphasis() -> None:
    html = render_markdown("This is **bold** and *soft*")

    assert html.strip() == "<p>This is <strong>bold</strong> and <em>soft</em></p>"


def test_render_markdown_backslash_escape_prevents_emphasis() -> None:
    html = render_markdown(r"\*not em\*")

    assert "<em>" not in html
    assert "&#42;not em&#42;" in html


def test_render_markdown_renders_inline_code() -> None:
    assert "<code>print()</code>" in render_markdown("Call `print()` now")


def test_render_markdown_renders_links_in_new_tab() -> None:
    html = render_markdown("[Docs](https://example.com/docs)")

    assert '<a target="_blank" href="https://example.com/docs" title="">Docs</a>' in html


def test_render_markdown_renders_image_with_title() -> None:
    html = render_markdown('![Cat](https://example.com/cat.png "A cat")')

    assert '<img alt="Cat" src="https://example.com/cat.png" title="A cat"/>' in html


def test_render_markdown_autolinks_urls() -> None:
    html = render_markdown("<https://example.com>")

    assert '<a target="_blank" href="https://example.com">https://example.com</a>' in html


def test_render_markdown_encodes_email_autolinks_as_entities() -> None:
    html = render_markdown("<ann@example.com>")

    assert "ann@example.com" not in html
    assert "&#97;&#110;&#110;&#64;" in html


def test_render_markdown_pre_rules_run_before_escaping() -> None:
    html = render_markdown("x", pre=(rule("wrap_x", "x", "<b>x</b>"),))

    assert "&lt;b>x&lt;/b>" in html


def test_render_markdown_post_rules_run_after_markup() -> None:
    html = render_markdown("hello", post=(rule("wrap_hello", "hello", "<b>hello</b>"),))

    assert html.strip() == "<p><b>hello</b></p>"

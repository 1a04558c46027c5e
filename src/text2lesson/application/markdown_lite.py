"""Renderer for the restricted Markdown dialect used in lesson text.

The renderer is a fixed, ordered pipeline of `RewriteRule` objects. Each rule
is a global find/replace over the whole current text, so rule N always sees
the cumulative output of rules 1..N-1. The stage order below is part of the
contract and must not be rearranged:

1. line ending normalisation
2. security replacements (NUL characters)
3. caller supplied `pre` rules
4. HTML escaping (`&` and `<`, keeping `<br>`, `<sub>` and `<sup>`)
5. Markdown backslash escapes
6. block rules (headings, quotes, code, rules, lists, paragraphs)
7. span rules (images, links, autolinks, code, strong, emphasis)
8. caller supplied `post` rules
9. clean up of blank lines and empty paragraphs

Escaping runs before any Markdown rule, so raw angle brackets in author text
can never inject markup. Supported Markdown is deliberately limited: lazy
block quotes, nested blocks, inline HTML and reference links are not
supported. The renderer never raises; any input produces some HTML.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from text2lesson.application.html_text import (
    AMPERSAND_PATTERN,
    NUL_REPLACEMENT,
    encode_char_to_entity,
    encode_to_entities,
)

Replacement = str | Callable[[re.Match[str]], str]


@dataclass(frozen=True)
class RewriteRule:
    """One named global find/replace step of the rendering pipeline."""

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def rule(name: str, pattern: str, replacement: Replacement, flags: int = 0) -> RewriteRule:
    """Build a `RewriteRule` from an uncompiled pattern."""
    return RewriteRule(name=name, pattern=re.compile(pattern, flags), replacement=replacement)


def all_lines_start_with(
    name: str,
    line_start: str,
    *,
    block_prefix: str,
    block_suffix: str,
    line_prefix: str = "",
    line_suffix: str = "",
    trim_contents: bool = False,
) -> RewriteRule:
    """Build a rule wrapping every run of lines that begin with `line_start`.

    `line_start` is a regular expression fragment; any group it contains must
    be non-capturing. Each line of a run has the prefix stripped and is wrapped
    in `line_prefix`/`line_suffix`; the run itself is wrapped in
    `block_prefix`/`block_suffix` and separated from its neighbours by a blank
    line so later rules treat it as an independent block.
    """
    block_pattern = re.compile(rf"(?:^|\n){line_start}[\s\S]*?(?:(\n(?!{line_start}))|\Z)")
    line_pattern = re.compile(rf"^{line_start}(\s*.*)$", re.MULTILINE)

    def replace_line(match: re.Match[str]) -> str:
        return f"{line_prefix}{match.group(1)}{line_suffix}"

    def replace_block(match: re.Match[str]) -> str:
        contents = line_pattern.sub(replace_line, match.group(0))
        if trim_contents:
            contents = contents.lstrip("\r\n").rstrip()
        return f"\n\n{block_prefix}{contents}{block_suffix}\n\n"

    return RewriteRule(name=name, pattern=block_pattern, replacement=replace_block)


def _atx_heading(match: re.Match[str]) -> str:
    level = min(len(match.group(1)), 6)
    return f"\n\n<h{level}>{match.group(2).strip()}</h{level}>\n"


def _optional_title(match: re.Match[str], index: int) -> str:
    return match.group(index) or ""


def _image(match: re.Match[str]) -> str:
    return (
        f'<img alt="{match.group(1)}" src="{match.group(2)}" '
        f'title="{_optional_title(match, 3)}"/>'
    )


def _link(match: re.Match[str]) -> str:
    return (
        f'<a target="_blank" href="{match.group(2)}" '
        f'title="{_optional_title(match, 3)}">{match.group(1)}</a>'
    )


def _email_link(match: re.Match[str]) -> str:
    encoded = encode_to_entities(match.group(1))
    return f'<a href="{encoded}">{encoded}</a>'


def _inline_code(match: re.Match[str]) -> str:
    code = match.group(1) if match.group(1) is not None else match.group(2)
    return f"<code>{code}</code>"


LINE_ENDING_RULES: tuple[RewriteRule, ...] = (
    rule("normalise_line_endings", r"\r\n?", "\n"),
)

SECURITY_RULES: tuple[RewriteRule, ...] = (
    rule("replace_nul", "\0", NUL_REPLACEMENT),
)

HTML_ESCAPE_RULES: tuple[RewriteRule, ...] = (
    rule("escape_ampersand", AMPERSAND_PATTERN, "&amp;"),
    rule("escape_less_than", r"<(?!/?(?:br|sub|sup)>)", "&lt;", re.IGNORECASE),
)

MARKDOWN_ESCAPE_RULES: tuple[RewriteRule, ...] = (
    rule(
        "markdown_escape",
        r"\\([\\`*_{}\[\]()#+.!-])",
        lambda match: encode_char_to_entity(match.group(1)),
    ),
)

# Horizontal rules must be found before unordered lists so that three or more
# `-` characters become a rule and not a list item.
BLOCK_RULES: tuple[RewriteRule, ...] = (
    rule("setext_heading_1", r"(?:(.+)\n=+\n)", r"\n\n<h1>\1</h1>\n\n"),
    rule("setext_heading_2", r"(?:(.+)\n-+\n)", r"\n\n<h2>\1</h2>\n\n"),
    rule("atx_heading", r"^(#+)(?: *)(.+?)(?:#*)[ \t]*$", _atx_heading, re.MULTILINE),
    all_lines_start_with(
        "block_quote",
        r">[ \t]*",
        block_prefix="<blockquote>",
        block_suffix="</blockquote>",
    ),
    all_lines_start_with(
        "code_block",
        r"(?: {4}|\t)",
        block_prefix="<pre><code>",
        block_suffix="</code></pre>",
        trim_contents=True,
    ),
    rule("horizontal_rule", r"^(?:[*_-] *){3,}\s*$", r"\n\n<hr>\n\n", re.MULTILINE),
    all_lines_start_with(
        "unordered_list",
        r" {0,3}[*+-][ \t]*",
        block_prefix="<ul>",
        block_suffix="</ul>",
        line_prefix="<li>",
        line_suffix="</li>",
    ),
    all_lines_start_with(
        "ordered_list",
        r" {0,3}\d+\.[ \t]*",
        block_prefix="<ol>",
        block_suffix="</ol>",
        line_prefix="<li>",
        line_suffix="</li>",
    ),
    rule("paragraph", r"(?:(?:^|\n{2,})(?!<\w+>))((?:.(?:\n(?!\n))?)+)", r"\n\n<p>\1</p>\n\n"),
    rule("collapse_blank_lines", r"\n{2,}", r"\n\n"),
)

_URL = r"https?://[-\w@:%.+~#=/]+"

SPAN_RULES: tuple[RewriteRule, ...] = (
    rule("image", rf'!\[(.*)\]\(({_URL})(?: +"(.*)")?\)', _image, re.MULTILINE),
    rule("link", rf'\[(.*)\]\(({_URL})(?: +"(.*)")?\)', _link, re.MULTILINE),
    rule("url_autolink", rf"(?:&lt;|<)({_URL})>", r'<a target="_blank" href="\1">\1</a>'),
    rule(
        "email_autolink",
        r"(?:&lt;|<)(\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,4})+)>",
        _email_link,
    ),
    rule("inline_code", r"(?:`{2,}(.*?)`{2,}|`(.*?)`)", _inline_code),
    rule("strong_asterisks", r"\*\*([^\s])(.*?)([^\s])\*\*", r"<strong>\1\2\3</strong>"),
    rule("strong_underscores", r"__([^\s])(.*?)([^\s])__", r"<strong>\1\2\3</strong>"),
    rule("emphasis_asterisk", r"\*([^\s])(.*?)([^\s])\*", r"<em>\1\2\3</em>"),
    rule("emphasis_underscore", r"_([^\s])(.*?)([^\s])_", r"<em>\1\2\3</em>"),
)

CLEANUP_RULES: tuple[RewriteRule, ...] = (
    rule("empty_whitespace_lines", r"^\s*$", "", re.MULTILINE),
    rule("empty_containers", r"<(?:p|div)>\s*?</(?:p|div)>", "", re.IGNORECASE),
)


def markup_rules(pre: Sequence[RewriteRule] = ()) -> tuple[RewriteRule, ...]:
    """Return stages 1 to 7 with the caller `pre` rules in place."""
    return (
        *LINE_ENDING_RULES,
        *SECURITY_RULES,
        *pre,
        *HTML_ESCAPE_RULES,
        *MARKDOWN_ESCAPE_RULES,
        *BLOCK_RULES,
        *SPAN_RULES,
    )


def build_pipeline(
    pre: Sequence[RewriteRule] = (),
    post: Sequence[RewriteRule] = (),
) -> tuple[RewriteRule, ...]:
    """Return the full ordered rule sequence with caller hooks in place."""
    return (*markup_rules(pre), *post, *CLEANUP_RULES)


def apply_rules(text: str, rules: Iterable[RewriteRule]) -> str:
    for current_rule in rules:
        text = current_rule.apply(text)
    return text


def render_markup(source: str, *, pre: Sequence[RewriteRule] = ()) -> str:
    """Run the pipeline up to the span rules, leaving room for post processing.

    Callers that need results beyond a plain string from their post stage use
    this together with `clean_up_html` instead of `render_markdown`.
    """
    if not source:
        return ""
    return apply_rules(source, markup_rules(pre))


def clean_up_html(html: str) -> str:
    return apply_rules(html, CLEANUP_RULES)


def render_markdown(
    source: str,
    *,
    pre: Sequence[RewriteRule] = (),
    post: Sequence[RewriteRule] = (),
) -> str:
    """Convert lesson Markdown to an HTML fragment."""
    if not source:
        return ""
    return apply_rules(source, build_pipeline(pre=pre, post=post))

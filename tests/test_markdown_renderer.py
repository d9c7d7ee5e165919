# tests/test_markdown_renderer.py
import html
import re
from concurrent.futures import ThreadPoolExecutor

import markdown
import pytest

from html_check import check_document
from mdtabs.services.markdown_renderer import MarkdownRenderer, nesting_depth

SAMPLES = [
    "",
    "plain words, no markup at all",
    "# Heading\n\nParagraph text",
    "**bold** and *italic* and ~~struck~~",
    "| a | b |\n|---|---|\n| 1 | 2 |",
    "- [x] done\n- [ ] todo",
    "see https://example.com for more",
    "Text with a footnote[^1].\n\n[^1]: The note.",
    "> quoted\n>\n> > nested",
    "unclosed **bold and `code",
    "<div>raw <b>html</div>",
    "tabs\tand\r\nwindows newlines\r\n",
    "émoji ✓ and ünïcödé",
]


def test_renderer_basic_html(renderer: MarkdownRenderer):
    result = renderer.render("# Title\n\nSome **bold** text.")
    assert result.ok is True
    assert result.error_message is None
    assert "<h1" in result.html and "Title" in result.html
    assert "<strong>bold</strong>" in result.html
    # Template + CSS present
    assert result.html.lower().startswith("<!doctype html")
    assert "<style>" in result.html


@pytest.mark.parametrize("source", SAMPLES)
def test_every_result_is_a_balanced_document(renderer: MarkdownRenderer, source: str):
    result = renderer.render(source)
    assert result.html
    check_document(result.html)


def test_empty_input_renders_empty_body(renderer: MarkdownRenderer):
    result = renderer.render("")
    assert result.ok is True
    assert check_document(result.html) == ""


def test_heading_and_paragraph(renderer: MarkdownRenderer):
    out = renderer.render("# Heading\n\nParagraph text").html
    assert re.findall(r"<h1\b[^>]*>(.*?)</h1>", out) == ["Heading"]
    assert re.findall(r"<p>(.*?)</p>", out) == ["Paragraph text"]


def test_bold_and_italic(renderer: MarkdownRenderer):
    out = renderer.render("**bold** and *italic*").html
    assert "<strong>bold</strong>" in out
    assert "<em>italic</em>" in out


def test_extensions_tables_strikethrough_autolinks_tasklists(renderer: MarkdownRenderer):
    out = renderer.render(
        "| a | b |\n|---|---|\n| 1 | 2 |\n\n"
        "~~gone~~\n\n"
        "visit https://example.com today\n\n"
        "- [x] done\n- [ ] todo\n"
    ).html
    assert "<table>" in out and "<td>1</td>" in out
    assert "<del>gone</del>" in out
    assert 'href="https://example.com"' in out
    assert "task-list-item" in out and 'type="checkbox"' in out


def test_code_block(renderer: MarkdownRenderer):
    out = renderer.render("```python\nprint('x')\n```").html
    # codehilite wraps as <div class="codehilite"><pre>...
    assert "<pre" in out and "print" in out


def test_code_highlighting_can_be_disabled():
    out = MarkdownRenderer(highlight_code=False).render("```python\nprint('x')\n```").html
    assert "codehilite" not in out
    assert "<pre><code" in out


def test_render_is_deterministic(renderer: MarkdownRenderer):
    src = "# A\n\nText[^n] with https://example.com\n\n[^n]: note\n\n- [ ] x"
    assert renderer.render(src) == renderer.render(src)


def test_render_is_safe_across_threads(renderer: MarkdownRenderer):
    src = "# Shared\n\n" + "\n".join(f"- item {i}" for i in range(50))
    expected = renderer.render(src)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(renderer.render, [src] * 32))
    assert all(r == expected for r in results)


@pytest.mark.parametrize(
    "source",
    [
        ">" * 200 + " deep",
        "[" * 500 + "x",
        "\n".join(" " * (4 * i) + "- item" for i in range(100)),
    ],
)
def test_adversarial_nesting_returns_fallback(renderer: MarkdownRenderer, source: str):
    result = renderer.render(source)
    assert result.ok is False
    assert result.error_message and "nesting too deep" in result.error_message
    body = check_document(result.html)
    assert "Preview unavailable" in body
    assert html.escape(result.error_message) in result.html


def test_nesting_limit_is_configurable():
    r = MarkdownRenderer(max_nesting=2)
    assert r.render("> > two").ok is True
    assert r.render("> > > three").ok is False


def test_library_fault_is_contained(monkeypatch, renderer: MarkdownRenderer):
    def boom(self, source):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(markdown.Markdown, "convert", boom)
    result = renderer.render("# fine")
    assert result.ok is False
    assert result.error_message == "RuntimeError: parser exploded"
    assert "parser exploded" in result.html
    check_document(result.html)


def test_error_message_is_escaped_in_fallback(monkeypatch, renderer: MarkdownRenderer):
    def boom(self, source):
        raise ValueError("<script>alert(1)</script>")

    monkeypatch.setattr(markdown.Markdown, "convert", boom)
    result = renderer.render("x")
    assert "<script>alert" not in result.html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in result.html


def test_failures_are_logged(caplog, renderer: MarkdownRenderer):
    with caplog.at_level("WARNING", logger="mdtabs"):
        renderer.render(">" * 100)
    assert any("nesting too deep" in r.getMessage() for r in caplog.records)


def test_to_html_matches_render(renderer: MarkdownRenderer):
    assert renderer.to_html("*x*") == renderer.render("*x*").html


@pytest.mark.parametrize(
    ("source", "depth"),
    [
        ("plain", 0),
        ("> > quote", 2),
        ("[a](b) and [c]", 1),
        ("- a\n    - b\n        - c", 3),
        ("[[[", 3),
        ("]]] [", 1),
        ("[[ one\n\n[[ two", 2),
        ("# heading [\nbody [", 1),
        ("    - literal\n        - still literal", 0),
        ("```\n> > > fenced\n[[[[\n```", 0),
        ("~~~~\n```\n>>>>\n~~~~\n> after", 1),
        ("para\n\n- a\n    - b\n\nend\n\n    - code", 2),
    ],
)
def test_nesting_depth(source: str, depth: int):
    assert nesting_depth(source) == depth


def test_unmatched_brackets_in_separate_paragraphs_render(renderer: MarkdownRenderer):
    source = "\n\n".join(f"Range {i}: [0, {i})" for i in range(70))
    result = renderer.render(source)
    assert result.ok is True
    assert "Range 69: [0, 69)" in check_document(result.html)


@pytest.mark.parametrize(
    "source",
    [
        "    " + " " * 300 + "- literal in code block",
        "```\n" + "> " * 100 + "\n```",
        "~~~\n" + "[" * 100 + "\n~~~",
    ],
)
def test_deep_looking_code_blocks_render(renderer: MarkdownRenderer, source: str):
    result = renderer.render(source)
    assert result.ok is True
    assert "<code>" in result.html or "<pre" in result.html

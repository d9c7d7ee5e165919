# mdtabs/services/markdown_renderer.py
from __future__ import annotations

import html
import logging
import re

import markdown
from bs4 import BeautifulSoup

from mdtabs.domain.interfaces import IMarkdownRenderer
from mdtabs.domain.models import RenderResult
from mdtabs.errors import InternalRenderFault, ParseFailure, RenderError
from mdtabs.utils.constants import CSS_PREVIEW, ERROR_TEMPLATE, HTML_TEMPLATE

logger = logging.getLogger(__name__)

DEFAULT_MAX_NESTING = 64

_QUOTE_PREFIX_RE = re.compile(r"^(?:[ \t]{0,3}>)+")
_LIST_ITEM_RE = re.compile(r"^( *)(?:[-*+]|\d+[.)])[ \t]")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_HEADING_RE = re.compile(r"^ {0,3}#{1,6}(?:[ \t]|$)")


def _closes_fence(line: str, fence: str) -> bool:
    m = _FENCE_RE.match(line)
    return (
        m is not None
        and m.group(1)[0] == fence[0]
        and len(m.group(1)) >= len(fence)
        and not line[m.end():].strip()
    )


def nesting_depth(markdown_text: str) -> int:
    """
    Deepest structural nesting found in the source.

    Three things count: blockquote markers on one line, list indentation levels
    inside a list, and '[' brackets left open within one paragraph. Fenced and
    indented code blocks are literal text and are skipped.
    """
    deepest = 0
    open_brackets = 0
    fence: str | None = None
    in_list = False
    in_code = False
    after_blank = True

    for raw in markdown_text.splitlines():
        line = raw.expandtabs(4)
        if fence is not None:
            if _closes_fence(line, fence):
                fence = None
            continue
        if not line.strip():
            open_brackets = 0
            after_blank = True
            continue

        indent = len(line) - len(line.lstrip(" "))
        if in_code and indent >= 4:
            continue
        in_code = False

        opening = _FENCE_RE.match(line)
        if opening:
            fence = opening.group(1)
            open_brackets = 0
            after_blank = False
            continue
        if indent >= 4 and after_blank and not in_list:
            in_code = True
            continue

        item = _LIST_ITEM_RE.match(line)
        if item and (indent < 4 or in_list):
            in_list = True
            open_brackets = 0
            deepest = max(deepest, indent // 4 + 1)
        elif after_blank and indent < 2:
            # an unindented paragraph after a blank line closes the list
            in_list = False
        heading = _HEADING_RE.match(line) is not None
        if heading:
            open_brackets = 0
        after_blank = False

        quote = _QUOTE_PREFIX_RE.match(line)
        if quote:
            deepest = max(deepest, quote.group(0).count(">"))
        for ch in line:
            if ch == "[":
                open_brackets += 1
                deepest = max(deepest, open_brackets)
            elif ch == "]" and open_brackets:
                open_brackets -= 1
        if heading:
            open_brackets = 0
    return deepest


class MarkdownRenderer(IMarkdownRenderer):
    """
    Converts Markdown to a complete HTML document.

    Stateless: a new python-markdown instance is built for every call, so the
    renderer may be shared across threads. Errors never escape render(); they
    come back as a failed RenderResult carrying a fallback document.
    """

    def __init__(
        self,
        *,
        max_nesting: int = DEFAULT_MAX_NESTING,
        highlight_code: bool = True,
    ) -> None:
        self.max_nesting = max_nesting
        self.highlight_code = highlight_code

    def render(self, markdown_text: str) -> RenderResult:
        try:
            body = self._convert(markdown_text)
        except RenderError as e:
            return self._failure(str(e))
        return RenderResult.success(HTML_TEMPLATE.format(css=CSS_PREVIEW, body=body))

    def to_html(self, markdown_text: str) -> str:
        return self.render(markdown_text).html

    # -------------------- helpers --------------------

    def _extensions(self) -> tuple[list[str], dict[str, dict]]:
        exts = [
            "extra",  # tables, fenced code, footnotes, def lists, abbr, attr_list
            "sane_lists",
            "toc",
            "smarty",
            "pymdownx.tilde",  # ~~strikethrough~~
            "pymdownx.magiclink",  # bare URL autolinks
            "pymdownx.tasklist",  # - [ ] / - [x]
        ]
        ext_cfg: dict[str, dict] = {
            "pymdownx.tilde": {"subscript": False},
            "pymdownx.tasklist": {"custom_checkbox": False},
        }
        if self.highlight_code:
            exts.append("codehilite")
            ext_cfg["codehilite"] = {"guess_lang": False, "noclasses": True}
        return exts, ext_cfg

    def _convert(self, markdown_text: str) -> str:
        depth = nesting_depth(markdown_text)
        if depth > self.max_nesting:
            raise ParseFailure(
                f"Markdown nesting too deep: {depth} levels (limit {self.max_nesting})"
            )

        exts, ext_cfg = self._extensions()
        try:
            md = markdown.Markdown(
                extensions=exts, extension_configs=ext_cfg, output_format="html5"
            )
            fragment = md.convert(markdown_text)
            # Raw HTML passes through python-markdown untouched; re-serialize so
            # stray or unclosed tags cannot break the surrounding document.
            return str(BeautifulSoup(fragment, "html.parser"))
        except Exception as e:
            raise InternalRenderFault(f"{type(e).__name__}: {e}") from e

    def _failure(self, message: str) -> RenderResult:
        logger.warning("Markdown render failed: %s", message)
        body = ERROR_TEMPLATE.format(message=html.escape(message))
        return RenderResult.failure(HTML_TEMPLATE.format(css=CSS_PREVIEW, body=body), message)

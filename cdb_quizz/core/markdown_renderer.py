"""Markdown rendering helpers for Qt rich-text widgets.

Architecture note:
    Explanations and question texts come from a language model and regularly
    contain emphasis, lists or the odd inline code span. They are rendered
    with markdown-it into the HTML subset ``QLabel``/``QTextBrowser`` accept,
    with raw HTML disabled so generated text can never inject markup of its
    own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown text into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html, "breaks": True})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str | None) -> str:
        """Render a markdown string into an HTML fragment; empty input gives ``""``."""
        sanitized = (markdown_text or "").strip()
        if not sanitized:
            return ""
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str | None) -> str:
        """Render without the wrapping paragraph, for single-line labels."""
        sanitized = (markdown_text or "").strip()
        if not sanitized:
            return ""
        return self._markdown.renderInline(sanitized)

    def wrap_document(self, body_html: str, font_size: int = 14, color: str = "#1F2937") -> str:
        return (
            f'<div style="font-size:{font_size}pt; color:{html.escape(color)}; line-height:1.4;">'
            f"{body_html}</div>"
        )


renderer = MarkdownRenderer()
# Shared instance; MarkdownIt is safe to reuse for read-only renders.

"""Markdown rendering: mistune with custom node handlers and Pygments highlighting."""

from ptdsite.markdown.highlight import highlight_code, normalize_language, stylesheet
from ptdsite.markdown.renderer import (
    HANDLERS,
    MarkdownRenderer,
    heading_anchor,
    is_external,
    render_markdown,
)

__all__ = [
    "HANDLERS",
    "MarkdownRenderer",
    "heading_anchor",
    "highlight_code",
    "is_external",
    "normalize_language",
    "render_markdown",
    "stylesheet",
]

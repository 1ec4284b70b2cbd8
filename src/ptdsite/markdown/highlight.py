"""Syntax highlighting for fenced code blocks via Pygments."""

from __future__ import annotations

import html
import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

LANGUAGE_ALIASES: dict[str, str] = {
    "rb": "ruby",
    "ruby": "ruby",
    "rs": "rust",
    "rust": "rust",
    "js": "javascript",
    "javascript": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
    "py": "python",
    "python": "python",
    "sh": "bash",
    "bash": "bash",
    "shell": "bash",
    "yml": "yaml",
    "yaml": "yaml",
    "json": "json",
    "xml": "xml",
    "html": "html",
    "css": "css",
    "sql": "sql",
    "c": "c",
    "cpp": "cpp",
    "c++": "cpp",
    "java": "java",
    "go": "go",
}

_FORMATTER = HtmlFormatter(cssclass="highlight")


def normalize_language(language: str) -> str:
    """Map a fence language tag onto the lexer name used for it."""
    lang = language.strip().lower()
    return LANGUAGE_ALIASES.get(lang, lang)


def plain_code_block(code: str) -> str:
    """Unhighlighted block with ``& < > " '`` escaped."""
    return f"<pre><code>{html.escape(code, quote=True)}</code></pre>\n"


def highlight_code(code: str, language: str | None) -> str:
    """Highlight ``code`` as ``language``, falling back to a plain block.

    No language, or one Pygments has no lexer for, gives the escaped
    ``<pre><code>`` form instead of an error.
    """
    if not language or not language.strip():
        return plain_code_block(code)

    lang = normalize_language(language)
    try:
        lexer = get_lexer_by_name(lang)
    except ClassNotFound:
        logger.debug("No lexer for %r, rendering plain code block", language)
        return plain_code_block(code)
    return highlight(code, lexer, _FORMATTER)


def stylesheet(style: str = "default") -> str:
    """CSS rules for the ``.highlight`` classes Pygments emits."""
    return HtmlFormatter(style=style, cssclass="highlight").get_style_defs(".highlight")

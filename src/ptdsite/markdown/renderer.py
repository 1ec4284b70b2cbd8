"""Markdown to HTML rendering for documentation and blog bodies.

Built on mistune. Instead of subclassing its HTML renderer, each customised
node kind has a plain handler function ``(renderer, ...) -> str``; the set
lives in ``HANDLERS`` and each one is bound onto the renderer instance at
construction, where it shadows the ``HTMLRenderer`` method of the same name.
Two inline rules, written as mistune plugins, turn ``_text_`` into an
underline and leave ``*`` inside a word alone.
"""

from __future__ import annotations

import functools
import html
import logging
import re
from collections.abc import Callable

import mistune
from mistune.util import striptags

from ptdsite.markdown.highlight import highlight_code

logger = logging.getLogger(__name__)

EXTERNAL_PREFIXES = ("http://", "https://")

#: ``*`` run with a letter or digit on both sides, as in ``foo*bar*baz``
INTRAWORD_STAR_PATTERN = r"\*(?<=[^\W_]\*)\**(?=[^\W_])"
#: ``_`` opening an underline: no word character before, text after
UNDERLINE_PATTERN = r"_(?<!\w_)(?=[^\s_])"
_UNDERLINE_END = re.compile(r"(?<=[^\s_])_(?!\w)")


# ---------------------------------------------------------------------------
# Inline rules
# ---------------------------------------------------------------------------


def parse_intraword_star(
    inline: mistune.InlineParser, m: re.Match, state: mistune.InlineState
) -> int:
    state.append_token({"type": "intraword_star", "raw": m.group(0)})
    return m.end()


def render_intraword_star(renderer: mistune.HTMLRenderer, text: str) -> str:
    return text


def no_intra_emphasis(md: mistune.Markdown) -> None:
    """Keep ``*`` between word characters as literal text."""
    md.inline.register(
        "intraword_star", INTRAWORD_STAR_PATTERN, parse_intraword_star, before="emphasis"
    )
    if md.renderer and md.renderer.NAME == "html":
        md.renderer.register("intraword_star", render_intraword_star)


def parse_underline(
    inline: mistune.InlineParser, m: re.Match, state: mistune.InlineState
) -> int | None:
    pos = m.end()
    end = _UNDERLINE_END.search(state.src, pos)
    if end is None:
        return None
    new_state = state.copy()
    new_state.src = state.src[pos : end.start()]
    children = inline.render(new_state)
    state.append_token({"type": "underline", "children": children})
    return end.end()


def render_underline(renderer: mistune.HTMLRenderer, text: str) -> str:
    return f"<u>{text}</u>"


def underline(md: mistune.Markdown) -> None:
    """``_text_`` renders as ``<u>text</u>``; ``__text__`` stays strong."""
    md.inline.register("underline", UNDERLINE_PATTERN, parse_underline, before="emphasis")
    if md.renderer and md.renderer.NAME == "html":
        md.renderer.register("underline", render_underline)


PLUGINS: list[str | Callable[[mistune.Markdown], None]] = [
    "url",
    "table",
    "strikethrough",
    "superscript",
    "mark",
    "footnotes",
    underline,
    no_intra_emphasis,
]


def heading_anchor(text: str) -> str:
    """``Hello World`` → ``hello-world``; markup and punctuation are dropped."""
    plain = html.unescape(striptags(text)).lower()
    plain = re.sub(r"[^\w\s-]", "", plain)
    return re.sub(r"\s+", "-", plain.strip())


def is_external(url: str) -> bool:
    return url.startswith(EXTERNAL_PREFIXES)


def _title_attr(title: str | None) -> str:
    return f' title="{html.escape(title)}"' if title else ""


# ---------------------------------------------------------------------------
# Node handlers
# ---------------------------------------------------------------------------


def render_heading(renderer: mistune.HTMLRenderer, text: str, level: int, **attrs: object) -> str:
    anchor = heading_anchor(text)
    return f'<h{level} id="{anchor}">{text}</h{level}>\n'


def render_block_code(renderer: mistune.HTMLRenderer, code: str, info: str | None = None) -> str:
    language = info.split(None, 1)[0] if info and info.strip() else None
    return highlight_code(code, language)


def render_table(renderer: mistune.HTMLRenderer, text: str) -> str:
    return (
        '<div class="table-responsive"><table class="table table-striped">\n'
        f"{text}</table></div>\n"
    )


def render_link(
    renderer: mistune.HTMLRenderer, text: str, url: str, title: str | None = None
) -> str:
    href = renderer.safe_url(url)
    if is_external(url):
        return (
            f'<a href="{href}"{_title_attr(title)} target="_blank" '
            f'rel="noopener noreferrer">{text}</a>'
        )
    return f'<a href="{href}"{_title_attr(title)}>{text}</a>'


def render_image(
    renderer: mistune.HTMLRenderer, text: str, url: str, title: str | None = None
) -> str:
    src = renderer.safe_url(url)
    alt = striptags(text)
    return f'<img src="{src}" alt="{alt}"{_title_attr(title)} class="img-fluid">'


def render_block_quote(renderer: mistune.HTMLRenderer, text: str) -> str:
    return f'<blockquote class="blockquote">\n{text}</blockquote>\n'


HANDLERS: dict[str, Callable[..., str]] = {
    "heading": render_heading,
    "block_code": render_block_code,
    "table": render_table,
    "link": render_link,
    "image": render_image,
    "block_quote": render_block_quote,
}


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class MarkdownRenderer:
    """Fixed-configuration Markdown renderer.

    Holds no per-call state, so one instance can serve concurrent callers.
    Raw HTML in the source is passed through.
    """

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(escape=False, plugins=PLUGINS)
        renderer = self._markdown.renderer
        # mistune looks up instance attributes before registered callbacks
        for name, handler in HANDLERS.items():
            setattr(renderer, name, functools.partial(handler, renderer))

    def render(self, content: str) -> str:
        """Render a Markdown body to an HTML string."""
        return self._markdown(content)

    __call__ = render


_default_renderer: MarkdownRenderer | None = None


def render_markdown(content: str) -> str:
    """Render with a shared module-level renderer."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = MarkdownRenderer()
    return _default_renderer.render(content)

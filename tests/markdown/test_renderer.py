"""Tests for MarkdownRenderer and its node handlers."""

import pytest
from ptdsite.markdown.renderer import (
    HANDLERS,
    MarkdownRenderer,
    heading_anchor,
    is_external,
    render_markdown,
)


@pytest.fixture(scope="module")
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


class TestHeadings:
    def test_h1_with_anchor(self, renderer: MarkdownRenderer):
        html = renderer.render("# Hello World")
        assert '<h1 id="hello-world">Hello World</h1>' in html

    def test_levels(self, renderer: MarkdownRenderer):
        html = renderer.render("### Deep Dive")
        assert '<h3 id="deep-dive">' in html

    def test_space_required_after_marker(self, renderer: MarkdownRenderer):
        html = renderer.render("#hashtag")
        assert "<h1" not in html

    @pytest.mark.parametrize(
        ("text", "anchor"),
        [
            ("Hello World", "hello-world"),
            ("What's new?", "whats-new"),
            ("Multiple   spaces here", "multiple-spaces-here"),
            ("Keep-hyphens", "keep-hyphens"),
            ("Use <code>render</code>", "use-render"),
            ("Q&amp;A", "qa"),
            ("Café Menü", "café-menü"),
        ],
    )
    def test_heading_anchor(self, text: str, anchor: str):
        assert heading_anchor(text) == anchor


class TestCodeBlocks:
    def test_known_language_is_highlighted(self, renderer: MarkdownRenderer):
        html = renderer.render("```ruby\nputs 'Hello'\n```")
        assert '<div class="highlight">' in html
        assert "puts" in html

    def test_alias_is_highlighted(self, renderer: MarkdownRenderer):
        html = renderer.render("```py\nprint(1)\n```")
        assert '<div class="highlight">' in html

    def test_unknown_language_falls_back(self, renderer: MarkdownRenderer):
        html = renderer.render("```notalanguage\n<script>alert('x')</script>\n```")
        assert "<pre><code>" in html
        assert "&lt;script&gt;" in html
        assert "<script>" not in html
        assert "&#x27;x&#x27;" in html

    def test_no_language_falls_back(self, renderer: MarkdownRenderer):
        html = renderer.render('```\na < b && "c"\n```')
        assert "<pre><code>a &lt; b &amp;&amp; &quot;c&quot;" in html

    def test_fallback_escapes_quotes(self, renderer: MarkdownRenderer):
        html = renderer.render("```\nit's \"quoted\"\n```")
        assert "<pre><code>it&#x27;s &quot;quoted&quot;\n</code></pre>" in html

    def test_indented_code_block(self, renderer: MarkdownRenderer):
        html = renderer.render("Para\n\n    indented <code>\n")
        assert "<pre><code>indented &lt;code&gt;" in html


class TestTables:
    def test_responsive_wrapper(self, renderer: MarkdownRenderer):
        html = renderer.render("| Header |\n|--------|\n| Cell   |")
        assert '<div class="table-responsive">' in html
        assert '<table class="table table-striped">' in html
        assert "Cell" in html


class TestLinks:
    def test_external_link(self, renderer: MarkdownRenderer):
        html = renderer.render("[x](https://example.com)")
        assert 'href="https://example.com"' in html
        assert 'target="_blank"' in html
        assert 'rel="noopener noreferrer"' in html

    def test_http_link_is_external(self, renderer: MarkdownRenderer):
        html = renderer.render("[x](http://example.com)")
        assert 'target="_blank"' in html

    def test_internal_link(self, renderer: MarkdownRenderer):
        html = renderer.render("[x](/docs)")
        assert '<a href="/docs">x</a>' in html
        assert "target=" not in html
        assert "noopener" not in html

    def test_title_is_escaped(self, renderer: MarkdownRenderer):
        html = renderer.render('[x](/docs "Say <hi>")')
        assert 'title="Say &lt;hi&gt;"' in html

    def test_bare_url_is_autolinked(self, renderer: MarkdownRenderer):
        html = renderer.render("Visit https://example.com today")
        assert '<a href="https://example.com"' in html
        assert 'target="_blank"' in html

    def test_harmful_protocol_neutralised(self, renderer: MarkdownRenderer):
        html = renderer.render("[x](javascript:alert(1))")
        assert "javascript:" not in html

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://a.b", True),
            ("http://a.b", True),
            ("/docs", False),
            ("mailto:me@example.com", False),
            ("#section", False),
        ],
    )
    def test_is_external(self, url: str, expected: bool):
        assert is_external(url) is expected


class TestImagesAndQuotes:
    def test_image_class(self, renderer: MarkdownRenderer):
        html = renderer.render("![Alt text](image.jpg)")
        assert 'src="image.jpg"' in html
        assert 'alt="Alt text"' in html
        assert 'class="img-fluid"' in html

    def test_image_title(self, renderer: MarkdownRenderer):
        html = renderer.render('![a](i.png "A title")')
        assert 'title="A title"' in html

    def test_blockquote_class(self, renderer: MarkdownRenderer):
        html = renderer.render("> This is a quote")
        assert '<blockquote class="blockquote">' in html
        assert "This is a quote" in html


class TestInlineExtensions:
    def test_strikethrough(self, renderer: MarkdownRenderer):
        assert "<del>gone</del>" in renderer.render("~~gone~~")

    def test_mark(self, renderer: MarkdownRenderer):
        assert "<mark>hot</mark>" in renderer.render("==hot==")

    def test_superscript(self, renderer: MarkdownRenderer):
        assert "<sup>2</sup>" in renderer.render("x^2^")

    def test_no_intra_word_emphasis(self, renderer: MarkdownRenderer):
        html = renderer.render("snake_case_name")
        assert "<em>" not in html

    def test_no_intra_word_star_emphasis(self, renderer: MarkdownRenderer):
        assert "<p>foo*bar*baz</p>" in renderer.render("foo*bar*baz")
        assert "<p>2**10**3</p>" in renderer.render("2**10**3")

    def test_star_emphasis_at_word_boundaries(self, renderer: MarkdownRenderer):
        assert "<em>em</em>" in renderer.render("some *em* text")
        assert "<strong>bold</strong>" in renderer.render("some **bold** text")

    def test_single_underscore_is_underline(self, renderer: MarkdownRenderer):
        assert "<p><u>under</u></p>" in renderer.render("_under_")
        assert "an <u>underlined phrase</u> here" in renderer.render("an _underlined phrase_ here")

    def test_double_underscore_is_strong(self, renderer: MarkdownRenderer):
        assert "<strong>strong</strong>" in renderer.render("__strong__")

    def test_footnotes(self, renderer: MarkdownRenderer):
        html = renderer.render("Text[^1]\n\n[^1]: The note.\n")
        assert "footnote" in html
        assert "The note." in html

    def test_raw_html_passes_through(self, renderer: MarkdownRenderer):
        html = renderer.render('<div class="callout">hi</div>\n')
        assert '<div class="callout">hi</div>' in html


class TestRendererShape:
    def test_handler_set(self):
        assert set(HANDLERS) == {
            "heading",
            "block_code",
            "table",
            "link",
            "image",
            "block_quote",
        }

    def test_callable_and_module_helper_agree(self, renderer: MarkdownRenderer):
        text = "# Title\n\nSome *text*."
        assert renderer(text) == renderer.render(text) == render_markdown(text)

    def test_malformed_markdown_does_not_raise(self, renderer: MarkdownRenderer):
        html = renderer.render("```\nunclosed fence\n\n[broken](link\n| a |\n")
        assert isinstance(html, str)

    def test_empty_input(self, renderer: MarkdownRenderer):
        assert renderer.render("") == ""

"""Smoke tests for the CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ptdsite.cli import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for key in ("PTDSITE_ENV", "PTDSITE_CONTENT_DIR", "PTDSITE_DEFAULT_AUTHOR"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("ptdsite.config.GLOBAL_CONFIG_PATH", tmp_path / "no-global.toml")
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    (root / "pages").mkdir(parents=True)
    (root / "pages" / "about.html").write_text("<h1>About us</h1>", encoding="utf-8")
    (root / "blog").mkdir()
    (root / "blog" / "2024-01-02-hello.md").write_text(
        "---\ntitle: Hello\ndate: 2024-01-02\n---\nHi.\n", encoding="utf-8"
    )
    (root / "blog" / "2024-02-03-hidden.md").write_text(
        "---\ntitle: Hidden\ndate: 2024-02-03\npublished: false\n---\nSecret.\n",
        encoding="utf-8",
    )
    (root / "docs" / "guide").mkdir(parents=True)
    (root / "docs" / "guide" / "intro.md").write_text(
        "---\ntitle: Introduction\ndescription: Read me first\n---\nWelcome.\n",
        encoding="utf-8",
    )
    return root


class TestCLI:
    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "stats" in result.output

    def test_main_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "ptdsite" in result.output


class TestStats:
    def test_json(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "stats", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["page_count"] == 1
        assert data["blog_post_count"] == 1
        assert data["documentation_count"] == 1

    def test_dev_mode_counts_unpublished(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(
            app, ["--content-dir", str(content_dir), "--dev", "stats", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["blog_post_count"] == 2

    def test_table(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "stats"])
        assert result.exit_code == 0
        assert "Blog posts" in result.output


class TestPosts:
    def test_lists_published(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "posts"])
        assert result.exit_code == 0
        assert "2024/01/02/hello" in result.output
        assert "Hidden" not in result.output


class TestDocs:
    def test_tree(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "docs"])
        assert result.exit_code == 0
        assert "guide" in result.output
        assert "Introduction" in result.output


class TestPage:
    def test_prints_body(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "page", "about"])
        assert result.exit_code == 0
        assert "<h1>About us</h1>" in result.output

    def test_missing_page(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "page", "nope"])
        assert result.exit_code == 1


class TestRender:
    def test_renders_markdown_without_frontmatter(self, runner: CliRunner, tmp_path: Path):
        source = tmp_path / "post.md"
        source.write_text("---\ntitle: T\n---\n# Hello World\n", encoding="utf-8")
        result = runner.invoke(app, ["render", str(source)])
        assert result.exit_code == 0
        assert 'id="hello-world"' in result.output
        assert "title: T" not in result.output


class TestStyles:
    def test_default_style(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["styles"])
        assert result.exit_code == 0
        assert ".highlight" in result.output

    def test_unknown_style(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["styles", "--style", "no-such-style"])
        assert result.exit_code == 1


class TestReload:
    def test_refused_outside_development(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "reload"])
        assert result.exit_code == 1

    def test_allowed_in_development(self, runner: CliRunner, content_dir: Path) -> None:
        result = runner.invoke(app, ["--content-dir", str(content_dir), "--dev", "reload"])
        assert result.exit_code == 0
        assert "Content reloaded" in result.output

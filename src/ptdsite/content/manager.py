"""File-backed content index.

Scans the pages, blog and docs trees under a content root, turns every file
into a typed record and keeps the result as one immutable snapshot. Queries
read the current snapshot; ``reload_content`` builds a fresh one and swaps it
in, so readers never observe a half-built index.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from ptdsite.config import DEFAULT_AUTHOR
from ptdsite.content.frontmatter import ParsedDocument, parse_document
from ptdsite.content.models import (
    DEFAULT_DOC_ORDER,
    BlogPost,
    ContentSnapshot,
    ContentStats,
    Documentation,
    DocumentationEntry,
    Page,
)
from ptdsite.content.slugs import (
    blog_slug,
    date_slug,
    default_title,
    documentation_title,
    page_slug,
    resolve_post_date,
)
from ptdsite.errors import ContentLoadError, ReloadNotAllowedError

if TYPE_CHECKING:
    from ptdsite.config import SiteConfig

logger = logging.getLogger(__name__)

PAGE_SUFFIX = ".html"
MARKDOWN_SUFFIX = ".md"


class ContentManager:
    """In-memory index over a content directory.

    Args:
        content_dir: Root holding the pages, blog and docs subdirectories.
        development: Keep unpublished blog posts and allow ad hoc reloads.
        default_author: Author for posts whose frontmatter names none.
        pages_dir, blog_dir, docs_dir: Subdirectory names under the root.
    """

    def __init__(
        self,
        content_dir: Path | str,
        *,
        development: bool = False,
        default_author: str = DEFAULT_AUTHOR,
        pages_dir: str = "pages",
        blog_dir: str = "blog",
        docs_dir: str = "docs",
    ) -> None:
        self._root = Path(content_dir)
        self._development = development
        self._default_author = default_author
        self._pages_dir = self._root / pages_dir
        self._blog_dir = self._root / blog_dir
        self._docs_dir = self._root / docs_dir
        self._snapshot = self._load()

    @classmethod
    def from_config(cls, config: SiteConfig) -> ContentManager:
        """Build a manager from a loaded SiteConfig."""
        return cls(
            config.content.root,
            development=config.development,
            default_author=config.blog.default_author,
            pages_dir=config.content.pages,
            blog_dir=config.content.blog,
            docs_dir=config.content.docs,
        )

    # ── Properties ───────────────────────────────────────────────

    @property
    def content_dir(self) -> Path:
        return self._root

    @property
    def development(self) -> bool:
        return self._development

    @property
    def reload_allowed(self) -> bool:
        """Ad hoc reloads from the outside are a development-only feature."""
        return self._development

    @property
    def snapshot(self) -> ContentSnapshot:
        return self._snapshot

    @property
    def pages(self) -> dict[str, Page]:
        return dict(self._snapshot.pages)

    @property
    def blog_posts(self) -> dict[str, BlogPost]:
        return dict(self._snapshot.blog_posts)

    @property
    def documentation(self) -> dict[str, dict[str, Documentation]]:
        return {cat: dict(docs) for cat, docs in self._snapshot.documentation.items()}

    # ── Queries ──────────────────────────────────────────────────

    def get_page(self, slug: str) -> Page | None:
        """Return a page by slug, or None if not found."""
        return self._snapshot.pages.get(str(slug))

    def get_blog_post(self, slug: str) -> BlogPost | None:
        """Return a blog post by slug, or None if not found."""
        return self._snapshot.blog_posts.get(str(slug))

    def get_blog_post_by_date_slug(
        self,
        year: int | str,
        month: int | str,
        day: int | str,
        slug: str,
    ) -> BlogPost | None:
        """Return the post whose resolved date and slug both match.

        Date parts may be strings straight from a URL; non-numeric parts
        never match anything.
        """
        try:
            wanted = (int(year), int(month), int(day))
        except (TypeError, ValueError):
            return None
        for post in self._snapshot.blog_posts.values():
            if post.slug == slug and (post.date.year, post.date.month, post.date.day) == wanted:
                return post
        return None

    def get_blog_posts(self, limit: int | None = None) -> list[BlogPost]:
        """Return posts newest first; ties keep scan order.

        Args:
            limit: Keep only the first ``limit`` posts.
        """
        posts = sorted(self._snapshot.blog_posts.values(), key=lambda p: p.date, reverse=True)
        if limit is not None:
            posts = posts[: max(limit, 0)]
        return posts

    def get_documentation(self, category: str, slug: str) -> Documentation | None:
        """Return a documentation article, or None if category or slug is unknown."""
        return self._snapshot.documentation.get(str(category), {}).get(str(slug))

    def get_documentation_index(self) -> dict[str, list[DocumentationEntry]]:
        """Map each category to its articles in display order."""
        return {
            category: [
                DocumentationEntry(title=doc.title, slug=doc.slug, description=doc.description)
                for doc in docs.values()
            ]
            for category, docs in self._snapshot.documentation.items()
        }

    def get_stats(self) -> ContentStats:
        """Counts for the current snapshot, stamped with the time of the call."""
        snap = self._snapshot
        return ContentStats(
            page_count=len(snap.pages),
            blog_post_count=len(snap.blog_posts),
            documentation_count=snap.documentation_count,
            last_updated=datetime.now(tz=UTC),
        )

    # ── Reload ───────────────────────────────────────────────────

    def reload_content(self) -> None:
        """Rescan every tree and replace the snapshot.

        The old snapshot stays visible until the new one is complete; if the
        scan raises, it stays in place.
        """
        self._snapshot = self._load()

    def request_reload(self) -> None:
        """Reload on behalf of an outside caller (e.g. a ``?reload=true`` request).

        Raises:
            ReloadNotAllowedError: Outside development mode.
        """
        if not self.reload_allowed:
            raise ReloadNotAllowedError("Content reload is only available in development mode")
        self.reload_content()

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> ContentSnapshot:
        snapshot = ContentSnapshot(
            pages=self._load_pages(),
            blog_posts=self._load_blog_posts(),
            documentation=self._load_documentation(),
            loaded_at=datetime.now(tz=UTC),
        )
        logger.info(
            "Loaded %d pages, %d blog posts, %d docs from %s",
            len(snapshot.pages),
            len(snapshot.blog_posts),
            snapshot.documentation_count,
            self._root,
        )
        return snapshot

    def _load_pages(self) -> dict[str, Page]:
        pages: dict[str, Page] = {}
        for path in _list_files(self._pages_dir, PAGE_SUFFIX):
            loaded = _read_file(path)
            if loaded is None:
                continue
            doc, modified = loaded
            slug = page_slug(path.stem)
            pages[slug] = Page(
                slug=slug,
                title=doc.metadata.title or default_title(slug),
                description=doc.metadata.description,
                body=doc.body,
                updated_at=modified,
            )
        return pages

    def _load_blog_posts(self) -> dict[str, BlogPost]:
        posts: dict[str, BlogPost] = {}
        for path in _list_files(self._blog_dir, MARKDOWN_SUFFIX):
            loaded = _read_file(path)
            if loaded is None:
                continue
            doc, modified = loaded
            if not doc.has_frontmatter:
                logger.debug("Skipping blog file without frontmatter: %s", path)
                continue

            meta = doc.metadata
            slug = blog_slug(path.stem)
            post_date = resolve_post_date(meta.post_date, modified)
            posts[slug] = BlogPost(
                slug=slug,
                date_slug=date_slug(post_date, slug),
                filename=path.stem,
                title=meta.title or default_title(slug),
                description=meta.description,
                author=meta.author or self._default_author,
                date=post_date,
                created_at=meta.created_at,
                tags=meta.tags or [],
                body=doc.body,
                published=meta.published,
                updated_at=modified,
            )

        if self._development:
            return posts
        hidden = [slug for slug, post in posts.items() if not post.published]
        if hidden:
            logger.debug("Hiding %d unpublished posts: %s", len(hidden), ", ".join(hidden))
        return {slug: post for slug, post in posts.items() if post.published}

    def _load_documentation(self) -> dict[str, dict[str, Documentation]]:
        documentation: dict[str, dict[str, Documentation]] = {}
        for category_dir in _list_dirs(self._docs_dir):
            category = category_dir.name
            docs: dict[str, Documentation] = {}
            for path in _list_files(category_dir, MARKDOWN_SUFFIX):
                loaded = _read_file(path)
                if loaded is None:
                    continue
                doc, modified = loaded
                slug = path.stem
                order = doc.metadata.order
                docs[slug] = Documentation(
                    slug=slug,
                    category=category,
                    title=doc.metadata.title or documentation_title(slug),
                    description=doc.metadata.description,
                    order=DEFAULT_DOC_ORDER if order is None else order,
                    body=doc.body,
                    updated_at=modified,
                )
            # sorted() is stable, so equal orders keep scan order
            documentation[category] = dict(sorted(docs.items(), key=lambda item: item[1].order))
        return documentation


def _scan(directory: Path) -> list[Path]:
    """List a directory in name order; a missing directory is empty.

    Raises:
        ContentLoadError: The directory exists but cannot be listed.
    """
    try:
        if not directory.is_dir():
            return []
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise ContentLoadError(directory, exc.strerror or str(exc)) from exc
    return [p for p in entries if not p.name.startswith(".")]


def _list_files(directory: Path, suffix: str) -> list[Path]:
    return [p for p in _scan(directory) if p.suffix == suffix and p.is_file()]


def _list_dirs(directory: Path) -> list[Path]:
    return [p for p in _scan(directory) if p.is_dir()]


def _read_file(path: Path) -> tuple[ParsedDocument, datetime] | None:
    """Read and parse one file; None (with a warning) if it cannot be read."""
    try:
        text = path.read_text(encoding="utf-8")
        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read content file %s: %s", path, exc)
        return None
    return parse_document(text, source=str(path)), modified

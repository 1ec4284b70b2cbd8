"""Content domain models: pure Pydantic v2 data types.

Every file in the content tree becomes one frozen record: a ``Page``, a
``BlogPost`` or a ``Documentation`` article. The three share the common
``ContentRecord`` fields and are told apart by their ``kind`` tag.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ptdsite.content.slugs import coerce_date

DEFAULT_DOC_ORDER = 999


class ContentKind(StrEnum):
    """Collection a record belongs to."""

    PAGE = "page"
    BLOG_POST = "blog_post"
    DOCUMENTATION = "documentation"


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


class FrontMatter(BaseModel):
    """Recognised frontmatter keys, decoded and typed.

    Missing or ill-typed values are None; ``published`` is only False when the
    file says exactly ``published: false``.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    description: str | None = None
    post_date: date | None = None
    created_at: datetime | None = None
    author: str | None = None
    tags: list[str] | None = None
    published: bool = True
    order: int | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> FrontMatter:
        """Decode a raw YAML mapping, ignoring unknown keys."""
        return cls(
            title=_as_text(raw.get("title")),
            description=_as_text(raw.get("description")),
            post_date=coerce_date(raw.get("date")),
            created_at=_as_datetime(raw.get("created_at")),
            author=_as_text(raw.get("author")),
            tags=_as_tags(raw.get("tags")),
            published=raw.get("published") is not False,
            order=_as_int(raw.get("order")),
        )


def _as_text(value: object) -> str | None:
    if value is None or isinstance(value, (list, dict)):
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _as_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _as_tags(value: object) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, (list, tuple)):
        return [str(t) for t in value if t is not None]
    return None


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class ContentRecord(BaseModel):
    """Fields every content record carries."""

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str | None = None
    body: str
    updated_at: datetime


class Page(ContentRecord):
    """Standalone HTML page; ``body`` is raw HTML."""

    kind: Literal[ContentKind.PAGE] = ContentKind.PAGE


class BlogPost(ContentRecord):
    """Dated blog post; ``body`` is raw Markdown."""

    kind: Literal[ContentKind.BLOG_POST] = ContentKind.BLOG_POST
    date_slug: str
    filename: str
    author: str
    date: date
    created_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    published: bool = True


class Documentation(ContentRecord):
    """Documentation article inside a category; ``body`` is raw Markdown."""

    kind: Literal[ContentKind.DOCUMENTATION] = ContentKind.DOCUMENTATION
    category: str
    order: int = DEFAULT_DOC_ORDER


ContentRecordUnion = Annotated[Page | BlogPost | Documentation, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Index views
# ---------------------------------------------------------------------------


class DocumentationEntry(BaseModel):
    """One line of the documentation index."""

    title: str
    slug: str
    description: str | None = None


class ContentStats(BaseModel):
    """Aggregate counts for the loaded snapshot."""

    page_count: int = 0
    blog_post_count: int = 0
    documentation_count: int = 0
    last_updated: datetime


class ContentSnapshot(BaseModel):
    """The three collections produced by one full scan.

    Replaced wholesale on reload, never patched.
    """

    model_config = ConfigDict(frozen=True)

    pages: dict[str, Page] = Field(default_factory=dict)
    blog_posts: dict[str, BlogPost] = Field(default_factory=dict)
    documentation: dict[str, dict[str, Documentation]] = Field(default_factory=dict)
    loaded_at: datetime

    @property
    def documentation_count(self) -> int:
        return sum(len(docs) for docs in self.documentation.values())

"""Identifier derivation: filenames to slugs, default titles and dates.

Pure functions, no I/O. The content manager feeds them file stems and
modification times and gets back the identifiers records are keyed by.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime

logger = logging.getLogger(__name__)

TIMESTAMP_PREFIX = re.compile(r"^\d{14}_")
DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}-")

# Textual date formats accepted in frontmatter besides ISO 8601.
DATE_FORMATS = (
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
)


def page_slug(stem: str) -> str:
    """Pages are keyed by their file stem, case preserved."""
    return stem


def blog_slug(stem: str) -> str:
    """Derive a blog post slug from its file stem.

    ``20231215143022_my-post`` → ``my-post``;
    ``2023-12-15-my-post-title`` → ``my-post-title``; anything else is used
    verbatim. A prefix with nothing after it keeps the whole stem.
    """
    if TIMESTAMP_PREFIX.match(stem):
        rest = stem.split("_", 1)[1]
    elif DATE_PREFIX.match(stem):
        rest = stem.split("-", 3)[3]
    else:
        return stem
    if not rest:
        logger.debug("Empty slug after date prefix in %r, using full name", stem)
        return stem
    return rest


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; ``str.capitalize`` lowers the rest."""
    return text[:1].upper() + text[1:]


def default_title(slug: str) -> str:
    """Fallback title for pages and blog posts."""
    return capitalize_first(slug)


def documentation_title(slug: str) -> str:
    """Fallback title for documentation: ``getting-started`` → ``Getting started``."""
    return capitalize_first(slug.replace("-", " "))


def coerce_date(value: object) -> date | None:
    """Interpret a frontmatter value as a calendar date.

    YAML already turns ``2023-12-15`` into a ``date`` and full timestamps into
    ``datetime``; strings get ISO parsing first and then a few common textual
    formats. Returns None for anything that cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def resolve_post_date(value: object, modified: datetime) -> date:
    """Frontmatter date when readable, else the file's local modification date."""
    parsed = coerce_date(value)
    if parsed is not None:
        return parsed
    if value is not None:
        logger.debug("Unparseable post date %r, falling back to mtime", value)
    return modified.astimezone().date()


def date_slug(post_date: date, slug: str) -> str:
    """Public URL fragment for a post: ``YYYY/MM/DD/slug``."""
    return f"{post_date:%Y/%m/%d}/{slug}"

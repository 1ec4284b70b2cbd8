"""Content domain: typed records, frontmatter parsing and the file-backed index."""

from ptdsite.content.frontmatter import ParsedDocument, parse_document
from ptdsite.content.manager import ContentManager
from ptdsite.content.models import (
    BlogPost,
    ContentKind,
    ContentRecord,
    ContentRecordUnion,
    ContentSnapshot,
    ContentStats,
    Documentation,
    DocumentationEntry,
    FrontMatter,
    Page,
)

__all__ = [
    "BlogPost",
    "ContentKind",
    "ContentManager",
    "ContentRecord",
    "ContentRecordUnion",
    "ContentSnapshot",
    "ContentStats",
    "Documentation",
    "DocumentationEntry",
    "FrontMatter",
    "Page",
    "ParsedDocument",
    "parse_document",
]

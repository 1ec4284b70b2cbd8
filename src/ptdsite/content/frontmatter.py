"""Split a content file into its YAML frontmatter and body."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import yaml

from ptdsite.content.models import FrontMatter

logger = logging.getLogger(__name__)

DELIMITER = "---"


@dataclass(frozen=True)
class ParsedDocument:
    """A file's decoded metadata and remaining body text."""

    metadata: FrontMatter = field(default_factory=FrontMatter)
    body: str = ""
    has_frontmatter: bool = False


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return ``(raw_yaml, body)``; ``raw_yaml`` is None without a leading block.

    Only the first two delimiters split, so ``---`` inside the body (a
    Markdown rule, say) is left alone. Text without frontmatter comes back
    untouched; a body after frontmatter is stripped.
    """
    if not text.startswith(DELIMITER):
        return None, text

    parts = text.split(DELIMITER, 2)
    raw = parts[1]
    body = parts[2].strip() if len(parts) == 3 else ""
    return raw, body


def load_metadata(raw: str, source: str = "<string>") -> dict[str, Any]:
    """Decode a YAML block into a mapping, never raising.

    Anything that is not a mapping (a list, a scalar, a syntax error) yields
    an empty dict.
    """
    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as exc:
        # ValueError: YAML timestamps like 2023-13-45 fail in the constructor.
        logger.warning("Malformed frontmatter in %s: %s", source, exc)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Frontmatter in %s is not a mapping, ignoring", source)
        return {}
    return {str(k): v for k, v in data.items()}


def parse_document(text: str, source: str = "<string>") -> ParsedDocument:
    """Parse a whole file into typed metadata and body.

    Args:
        text: Full file contents.
        source: Label used in log messages (usually the file path).
    """
    raw, body = split_frontmatter(text)
    if raw is None:
        return ParsedDocument(body=body)
    metadata = FrontMatter.from_mapping(load_metadata(raw, source))
    return ParsedDocument(metadata=metadata, body=body, has_frontmatter=True)

"""Exception hierarchy for ptdsite.

Lookups that miss return ``None``; exceptions are reserved for failures the
caller has to see.
"""

from __future__ import annotations

from pathlib import Path


class PtdSiteError(Exception):
    """Base class for all ptdsite errors."""


class ContentError(PtdSiteError):
    """Something went wrong while building the content index."""


class ContentLoadError(ContentError):
    """A content directory exists but could not be listed.

    Individual unreadable files are skipped; this is raised only when a whole
    tree is inaccessible, since serving an empty site is worse than failing.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read content directory {path}: {reason}")


class ReloadNotAllowedError(PtdSiteError):
    """An ad hoc reload was requested outside development mode."""

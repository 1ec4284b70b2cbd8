"""Unified configuration loaded from .ptdsite.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".ptdsite.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "ptdsite" / "config.toml"

DEVELOPMENT = "development"
DEFAULT_AUTHOR = "Sebastian Buza"


class ContentSectionConfig(BaseModel):
    """[content] section."""

    directory: str = "./content"
    pages: str = "pages"
    blog: str = "blog"
    docs: str = "docs"

    @property
    def root(self) -> Path:
        return Path(self.directory)


class BlogSectionConfig(BaseModel):
    """[blog] section."""

    default_author: str = DEFAULT_AUTHOR


class SiteConfig(BaseModel):
    """Top-level configuration for the content index and renderer."""

    environment: str = "production"
    content: ContentSectionConfig = Field(default_factory=ContentSectionConfig)
    blog: BlogSectionConfig = Field(default_factory=BlogSectionConfig)

    @property
    def development(self) -> bool:
        """True when unpublished posts are visible and ad hoc reloads allowed."""
        return self.environment.strip().lower() == DEVELOPMENT


def load_config(path: str | Path | None = None) -> SiteConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .ptdsite.toml in CWD
    3. ~/.config/ptdsite/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SiteConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = SiteConfig.model_validate(data) if data else SiteConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SiteConfig, **cli_kwargs: object) -> SiteConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values (``content_dir``, ``environment``,
            ``default_author``).

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str] | str] = {
        "content_dir": ("content", "directory"),
        "default_author": ("blog", "default_author"),
        "environment": "environment",
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        target = mapping[key]
        if isinstance(target, tuple):
            section, field = target
            data[section][field] = str(value)
        else:
            data[target] = value

    return SiteConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiteConfig) -> SiteConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "PTDSITE_CONTENT_DIR": ("content", "directory"),
        "PTDSITE_DEFAULT_AUTHOR": ("blog", "default_author"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    env = os.environ.get("PTDSITE_ENV")
    if env:
        data["environment"] = env

    return SiteConfig.model_validate(data)

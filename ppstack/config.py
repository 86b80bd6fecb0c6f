"""Configuration for ppstack, loaded from ``~/.ppstack/config.toml``."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from .models import Similarity
from .palette import DEFAULT_PALETTE, Palette
from .paths import PathFormat

logger = logging.getLogger(__name__)

BASE_DIR = Path(os.environ.get("PPSTACK_HOME", str(Path.home() / ".ppstack"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"


@dataclass(frozen=True)
class RenderConfig:
    path_format: PathFormat = PathFormat.REL
    similarity: Similarity = Similarity.ANY_POINTER
    all_routines: bool = True
    palette: Palette = DEFAULT_PALETTE


def load_full_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the entire TOML config (all sections).

    Missing or unreadable files yield an empty dict.
    """
    path = config_file or CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config [%s]: expected a table", name)
        return {}
    return section


def load_palette(config: Optional[Dict[str, Any]] = None) -> Palette:
    """Build a palette from the ``[palette]`` section over the defaults."""
    if config is None:
        config = load_full_config()
    section = _section(config, "palette")
    palette = DEFAULT_PALETTE
    for role, name in section.items():
        try:
            palette = palette.with_names(**{role: str(name)})
        except ValueError as exc:
            logger.warning("Ignoring palette entry %s=%r: %s", role, name, exc)
    return palette


def load_config(config_file: Optional[Path] = None) -> RenderConfig:
    """Load render settings from the ``[render]`` and ``[palette]`` sections."""
    config = load_full_config(config_file)
    section = _section(config, "render")
    defaults = RenderConfig()

    path_format = defaults.path_format
    if "path_format" in section:
        try:
            path_format = PathFormat(str(section["path_format"]).lower())
        except ValueError:
            logger.warning("Unknown path_format %r, using %s", section["path_format"], path_format.value)

    similarity = defaults.similarity
    if "similarity" in section:
        try:
            similarity = Similarity[str(section["similarity"]).upper()]
        except KeyError:
            logger.warning("Unknown similarity %r, using %s", section["similarity"], similarity.name.lower())

    all_routines = defaults.all_routines
    if "all_routines" in section:
        if isinstance(section["all_routines"], bool):
            all_routines = section["all_routines"]
        else:
            logger.warning("all_routines must be a boolean, got %r", section["all_routines"])

    return RenderConfig(
        path_format=path_format,
        similarity=similarity,
        all_routines=all_routines,
        palette=load_palette(config),
    )

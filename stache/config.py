"""
Configuration and data files.

``stache.yaml`` (or the file given with ``--config``) holds defaults for the
command line tool. Context files are YAML mappings; JSON files load the same
way since JSON is a subset of YAML.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

# Single source of truth for file names and environment variables.
CONFIG_FILE = "stache.yaml"
DEBUG_ENV = "STACHE_DEBUG"

_yaml = YAML(typ="safe")


@dataclass
class StacheConfig:
    """Settings of the command line tool."""
    defaults: Dict[str, Any] = field(default_factory=dict)
    encoding: str = "utf-8"
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict) -> StacheConfig:
        """Create from a parsed YAML mapping."""
        defaults = data.get("defaults") or {}
        if not isinstance(defaults, dict):
            raise ConfigError("'defaults' must be a mapping")
        return cls(
            defaults=dict(defaults),
            encoding=str(data.get("encoding", "utf-8")),
            log_level=str(data.get("log_level", "WARNING")).upper(),
        )


def read_yaml_map(path: Path, encoding: str = "utf-8") -> dict:
    """
    Reads a YAML (or JSON) file that must contain a mapping.

    An empty file gives an empty mapping.

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping
    """
    try:
        text = path.read_text(encoding=encoding)
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    return parse_yaml_map(text, str(path))


def parse_yaml_map(text: str, source: str = "<string>") -> dict:
    """Parses YAML text that must contain a mapping."""
    try:
        raw = _yaml.load(text)
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {source}")
    return raw


def load_config(root: Path, path: Optional[Path] = None) -> StacheConfig:
    """
    Loads the tool configuration.

    Args:
        root: Directory searched for ``stache.yaml`` when ``path`` is not given
        path: Explicit configuration file

    Returns:
        Parsed configuration, or defaults when no file exists
    """
    if path is None:
        path = root / CONFIG_FILE
        if not path.is_file():
            return StacheConfig()
    return StacheConfig.from_dict(read_yaml_map(path))


def parse_assignment(assignment: str) -> tuple[str, Any]:
    """
    Parses ``KEY=VALUE`` from the command line.

    The value is read as a YAML scalar, so ``n=3`` gives an int and
    ``flag=true`` a bool.
    """
    if "=" not in assignment:
        raise ConfigError(f"Invalid assignment '{assignment}'. Expected 'key=value'")
    key, raw = assignment.split("=", 1)
    key = key.strip()
    if not key:
        raise ConfigError(f"Invalid assignment '{assignment}'. Expected 'key=value'")
    try:
        value = _yaml.load(raw) if raw.strip() else ""
    except YAMLError:
        value = raw
    return key, value


def build_context(
        defaults: Dict[str, Any],
        data: Dict[str, Any],
        assignments: Iterable[str] = (),
) -> Dict[str, Any]:
    """
    Builds a render context: defaults, then file data, then assignments.

    Assignment keys may be dotted (``user.name=Ann``) to set nested values.
    """
    context = copy.deepcopy({**defaults, **data})
    for assignment in assignments:
        key, value = parse_assignment(assignment)
        target = context
        *parents, last = key.split(".")
        for part in parents:
            child = target.get(part)
            if not isinstance(child, dict):
                child = {}
                target[part] = child
            target = child
        target[last] = value
    return context


def setup_logging(level_name: Optional[str] = None, verbose: bool = False) -> None:
    """
    Configures the ``stache`` logger once: stderr handler, short format.

    ``verbose`` or the STACHE_DEBUG environment variable force DEBUG.
    """
    log = logging.getLogger("stache")
    if verbose or os.environ.get(DEBUG_ENV):
        level = logging.DEBUG
    else:
        level = logging.getLevelName((level_name or "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


__all__ = [
    "CONFIG_FILE",
    "DEBUG_ENV",
    "StacheConfig",
    "read_yaml_map",
    "parse_yaml_map",
    "load_config",
    "parse_assignment",
    "build_context",
    "setup_logging",
]

"""Settings for doctag and the YAML files they can be loaded from.

Settings files are looked up in priority order:
1. An explicit path (``doctag --config PATH``)
2. Project config: ``.doctag.yaml`` in the current directory
3. User config: ``~/.config/doctag/config.yaml``
4. Built-in defaults

Only the first file found is read.  Example::

    tag-prefix: "{{"
    tag-suffix: "}}"
    hierarchical: true
    trim: true
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .hierarchy import DEFAULT_SEPARATOR
from .scanner import DEFAULT_TAG_PREFIX, DEFAULT_TAG_SUFFIX

logger = logging.getLogger(__name__)

APP_NAME = "doctag"
PROJECT_CONFIG_NAME = f".{APP_NAME}.yaml"

# Lazy import yaml to avoid startup cost
_yaml = None


def _get_yaml():
    """Lazy-load PyYAML."""
    global _yaml
    if _yaml is None:
        import yaml

        _yaml = yaml
    return _yaml


@dataclass(frozen=True)
class DoctagSettings:
    """Everything that controls one extraction run."""

    tag_prefix: str = DEFAULT_TAG_PREFIX
    tag_suffix: str = DEFAULT_TAG_SUFFIX
    separator: str = DEFAULT_SEPARATOR
    hierarchical: bool = False
    sanitize_keys: bool = True
    trim: bool = False
    pretty: bool = False
    warn: bool = False

    def __post_init__(self) -> None:
        if len(self.separator) != 1:
            raise ConfigError(
                f"separator must be a single character, got {self.separator!r}"
            )

    def with_overrides(self, **overrides: Any) -> DoctagSettings:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - _field_names()
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> DoctagSettings:
        """Build settings from a mapping; dashed keys are accepted."""
        normalized = {str(k).replace("-", "_"): v for k, v in data.items()}
        unknown = set(normalized) - _field_names()
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        for key, value in normalized.items():
            expected = type(getattr(cls, key))
            if not isinstance(value, expected):
                raise ConfigError(
                    f"setting {key!r} must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
        return cls(**normalized)


def _field_names() -> set[str]:
    return {f.name for f in dataclasses.fields(DoctagSettings)}


def config_locations() -> list[Path]:
    """Candidate settings files, highest priority first."""
    return [
        Path.cwd() / PROJECT_CONFIG_NAME,
        Path.home() / ".config" / APP_NAME / "config.yaml",
    ]


def find_config_file() -> Path | None:
    for candidate in config_locations():
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: str | Path | None = None) -> DoctagSettings:
    """Load settings from *path*, or from the first config file found.

    Falls back to the defaults when no file exists.  An explicit *path* that
    cannot be read is an error.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            return DoctagSettings()
    path = Path(path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read settings file '{path}': {exc}") from exc

    yaml = _get_yaml()
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in '{path}': {exc}") from exc

    logger.debug("loaded settings from %s", path)
    if not data:
        return DoctagSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"settings file '{path}' must contain a mapping")
    return DoctagSettings.from_mapping(data)

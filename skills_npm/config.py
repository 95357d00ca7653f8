"""Configuration for a sync run.

Options come from three layers, later layers winning: built-in defaults,
an optional ``skills-npm.config.{yaml,yml,json}`` in the project root, and
explicit overrides (typically command-line flags).
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from skills_npm.constants import CONFIG_FILES, SOURCE_NODE_MODULES, SOURCES
from skills_npm.exceptions import ConfigError
from skills_npm.models import FilterRule


@dataclass
class SyncOptions:
    """Explicit configuration passed to every sync operation."""
    cwd: Path | None = None
    agents: list[str] = field(default_factory=list)
    dry_run: bool = False
    gitignore: bool = True
    recursive: bool = False
    source: str = SOURCE_NODE_MODULES
    cache: bool = True
    include: list[FilterRule] = field(default_factory=list)
    exclude: list[FilterRule] = field(default_factory=list)
    ignore_paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "cwd": str(self.cwd) if self.cwd is not None else None,
            "agents": list(self.agents),
            "dry_run": self.dry_run,
            "gitignore": self.gitignore,
            "recursive": self.recursive,
            "source": self.source,
            "cache": self.cache,
            "include": [rule.to_dict() for rule in self.include],
            "exclude": [rule.to_dict() for rule in self.exclude],
            "ignore_paths": list(self.ignore_paths),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SyncOptions":
        """Deserialize from dict, validating every value.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

        defaults = cls()
        options = cls(
            cwd=Path(data["cwd"]) if data.get("cwd") else None,
            agents=_string_list(data, "agents", defaults.agents),
            dry_run=_bool(data, "dry_run", defaults.dry_run),
            gitignore=_bool(data, "gitignore", defaults.gitignore),
            recursive=_bool(data, "recursive", defaults.recursive),
            source=data.get("source", defaults.source),
            cache=_bool(data, "cache", defaults.cache),
            include=_rules(data, "include"),
            exclude=_rules(data, "exclude"),
            ignore_paths=_string_list(data, "ignore_paths", defaults.ignore_paths),
        )

        if options.source not in SOURCES:
            raise ConfigError(
                f"Invalid source {options.source!r}, expected one of: {', '.join(SOURCES)}"
            )
        return options


def _bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _string_list(data: dict, key: str, default: list[str]) -> list[str]:
    value = data.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        value = [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return value


def _rules(data: dict, key: str) -> list[FilterRule]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list, got {value!r}")
    try:
        return [FilterRule.coerce(item) for item in value]
    except ValueError as e:
        raise ConfigError(f"Invalid '{key}' rule: {e}")


def find_config_file(cwd: Path) -> Path | None:
    """Return the first configuration file present in ``cwd``."""
    for name in CONFIG_FILES:
        path = Path(cwd) / name
        if path.is_file():
            return path
    return None


def load_config(cwd: Path) -> dict[str, Any]:
    """Read the project's configuration file.

    Returns:
        The raw option mapping, empty if there is no configuration file

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = find_config_file(cwd)
    if path is None:
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}")
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def resolve_config(overrides: dict[str, Any] | None = None, cwd: Path | None = None) -> SyncOptions:
    """Merge defaults, the project's configuration file and ``overrides``.

    Keys whose override value is None are not applied.

    Args:
        overrides: Explicit option values
        cwd: Directory to load the configuration file from; defaults to the
             ``cwd`` override or the process working directory

    Raises:
        ConfigError: If the file or any value is invalid
    """
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    base = Path(cwd or overrides.get("cwd") or Path.cwd())
    if not base.is_dir():
        raise ConfigError(f"Working directory does not exist: {base}")

    merged = dict(load_config(base))
    merged.update(overrides)
    options = SyncOptions.from_dict(merged)
    if options.cwd is None:
        options.cwd = base
    return options

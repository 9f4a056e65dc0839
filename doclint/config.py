"""Configuration loading for doclint (.doclint.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import Severity
from .registry import SchemaRegistry
from .reporter import FORMATS

CONFIG_FILENAME = ".doclint.yml"
DEFAULT_EXTENSIONS = (".md", ".markdown", ".mdx")


@dataclass
class RuleConfig:
    """Rule enablement and severity overrides."""

    disable: List[str] = field(default_factory=list)
    severity: Dict[str, str] = field(default_factory=dict)


@dataclass
class DoclintConfig:
    """Represents the settings defined in .doclint.yml."""

    root: Path
    strict: bool = False
    format: str = "text"
    jobs: int = 1
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    categories: Dict[str, str] = field(default_factory=dict)
    rules: RuleConfig = field(default_factory=RuleConfig)

    def category_for(self, path: Path) -> Optional[str]:
        """Return the configured category override for ``path``, if any."""
        if not self.categories:
            return None
        candidates = [path.as_posix()]
        try:
            candidates.insert(0, path.resolve().relative_to(self.root).as_posix())
        except ValueError:
            pass
        for pattern, category in self.categories.items():
            if any(fnmatchcase(candidate, pattern) for candidate in candidates):
                return category
        return None

    def apply_rules(self, registry: SchemaRegistry) -> SchemaRegistry:
        """Return ``registry`` narrowed by the configured rule settings."""
        configured = registry
        if self.rules.disable:
            configured = configured.without(self.rules.disable)
        if self.rules.severity:
            configured = configured.with_severity(self.rules.severity)
        return configured


def load_config(config_path: Path, *, required: bool = False) -> DoclintConfig:
    """Load configuration from disk; a missing file yields defaults unless ``required``."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        return DoclintConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    output_format = _as_str(data.get("format")) or "text"
    if output_format not in FORMATS:
        raise ConfigError(f"Unsupported format {output_format!r}; expected one of {', '.join(FORMATS)}")

    jobs = _as_int(data.get("jobs"))
    if jobs is not None and jobs < 1:
        raise ConfigError("jobs must be a positive integer")

    extensions = _as_str_list(data.get("extensions")) or list(DEFAULT_EXTENSIONS)
    extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    rules_data = _as_dict(data.get("rules"))
    severity: Dict[str, str] = {}
    for rule_id, value in _as_dict(rules_data.get("severity")).items():
        normalized = str(value).strip().lower()
        if normalized not in {member.value for member in Severity}:
            raise ConfigError(f"Invalid severity {value!r} for rule {rule_id}")
        severity[str(rule_id)] = normalized

    categories = {
        str(pattern): str(category).strip().lower()
        for pattern, category in _as_dict(data.get("categories")).items()
        if category is not None
    }

    return DoclintConfig(
        root=root,
        strict=bool(_as_bool(data.get("strict"))),
        format=output_format,
        jobs=jobs or 1,
        extensions=extensions,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        categories=categories,
        rules=RuleConfig(
            disable=_as_str_list(rules_data.get("disable")),
            severity=severity,
        ),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[Any, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "DEFAULT_EXTENSIONS", "DoclintConfig", "RuleConfig", "load_config"]

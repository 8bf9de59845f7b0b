"""Configuration loading for boilergen (.boilergen.yml and the overrides document)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .context import ContextOverrides, RepoOverride
from .value import Value

CONFIG_FILENAME = ".boilergen.yml"
DEFAULT_OVERRIDES_PATH = Path(__file__).with_name("overrides.yml")

_IDENTITY_PATTERN = re.compile(r"^[^/\s]+/[^/\s]+$")
_OVERRIDE_FIELDS = {"excluded_actions", "context"}


class ConfigError(RuntimeError):
    """Raised when a configuration document cannot be parsed or has the wrong shape."""


@dataclass
class CapabilityConfig:
    """Per-kind enablement adjustments."""

    excluded: List[str] = field(default_factory=list)


@dataclass
class BoilergenConfig:
    """Represents the repository-level settings defined in .boilergen.yml."""

    root: Path
    detectors: CapabilityConfig = field(default_factory=CapabilityConfig)
    actions: CapabilityConfig = field(default_factory=CapabilityConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> BoilergenConfig:
    """Load repository configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BoilergenConfig(root=root)

    data = _read_yaml(config_file)
    if data is None:
        return BoilergenConfig(root=root)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    unknown = set(data) - {"detectors", "actions", "exclude_paths"}
    if unknown:
        raise ConfigError(
            f"Unknown keys in {CONFIG_FILENAME}: {', '.join(sorted(map(str, unknown)))}"
        )

    return BoilergenConfig(
        root=root,
        detectors=_capability_config(data.get("detectors"), "detectors"),
        actions=_capability_config(data.get("actions"), "actions"),
        exclude_paths=_as_str_list(data.get("exclude_paths"), "exclude_paths"),
    )


def load_overrides(path: Path | None = None) -> ContextOverrides:
    """Load the ``owner/name`` keyed override document."""
    overrides_file = Path(path) if path is not None else DEFAULT_OVERRIDES_PATH
    if not overrides_file.exists():
        raise ConfigError(f"Overrides file not found: {overrides_file}")

    data = _read_yaml(overrides_file)
    return parse_overrides(data, source=overrides_file.name)


def parse_overrides(data: Any, *, source: str = "overrides") -> ContextOverrides:
    """Validate an already-loaded override document."""
    if data is None:
        return ContextOverrides()
    if not isinstance(data, dict):
        raise ConfigError(f"{source} must contain a mapping at the root")

    entries: Dict[str, RepoOverride] = {}
    for identity, raw_entry in data.items():
        if not isinstance(identity, str) or not _IDENTITY_PATTERN.match(identity):
            raise ConfigError(f"{source}: override keys must look like 'owner/name', got {identity!r}")
        if raw_entry is None:
            entries[identity] = RepoOverride()
            continue
        if not isinstance(raw_entry, dict):
            raise ConfigError(f"{source}: entry for {identity} must be a mapping")
        unknown = set(raw_entry) - _OVERRIDE_FIELDS
        if unknown:
            raise ConfigError(
                f"{source}: unknown fields for {identity}: {', '.join(sorted(map(str, unknown)))}"
            )

        context_data = raw_entry.get("context")
        if context_data is None:
            context = Value.empty_object()
        elif isinstance(context_data, dict):
            try:
                context = Value.from_python(context_data)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{source}: invalid context for {identity}: {exc}") from exc
        else:
            raise ConfigError(f"{source}: context for {identity} must be a mapping")

        entries[identity] = RepoOverride(
            excluded_actions=_as_str_list(
                raw_entry.get("excluded_actions"), f"{identity}.excluded_actions"
            ),
            context=context,
        )
    return ContextOverrides(entries=entries)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return None
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


def _capability_config(value: Any, section: str) -> CapabilityConfig:
    if value is None:
        return CapabilityConfig()
    if not isinstance(value, dict):
        raise ConfigError(f"'{section}' in {CONFIG_FILENAME} must be a mapping")
    unknown = set(value) - {"excluded"}
    if unknown:
        raise ConfigError(
            f"Unknown keys under '{section}': {', '.join(sorted(map(str, unknown)))}"
        )
    return CapabilityConfig(excluded=_as_str_list(value.get("excluded"), f"{section}.excluded"))


def _as_str_list(value: Any, label: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{label}' must be a list of strings")
    result: List[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"'{label}' must be a list of strings, got {item!r}")
        result.append(item)
    return result


__all__ = [
    "BoilergenConfig",
    "CONFIG_FILENAME",
    "CapabilityConfig",
    "ConfigError",
    "DEFAULT_OVERRIDES_PATH",
    "load_config",
    "load_overrides",
    "parse_overrides",
]

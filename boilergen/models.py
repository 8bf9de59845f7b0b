"""Core data models shared across boilergen components."""

from __future__ import annotations

import re
from abc import ABC
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


@dataclass(frozen=True)
class Repo:
    """Read-only handle to the repository being processed."""

    path: Path

    @classmethod
    def at(cls, path: str | Path) -> "Repo":
        return cls(Path(path).expanduser().resolve())


@dataclass(frozen=True)
class CapabilityInfo:
    """Descriptor shared by detectors and actions for listing and enablement."""

    name: str
    description: str
    default_enabled: bool


class Capability(ABC):
    """Named, describable unit of work that can be enabled or disabled."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    default_enabled: ClassVar[bool] = True

    def info(self) -> CapabilityInfo:
        return CapabilityInfo(
            name=self.name,
            description=self.description,
            default_enabled=self.default_enabled,
        )


def validate_capability_name(name: object) -> str:
    """Return ``name`` unchanged or raise ``ValueError`` when it is unusable."""
    if not isinstance(name, str) or not name:
        raise ValueError("Capability name must be a non-empty string")
    if not _NAME_PATTERN.match(name):
        raise ValueError(
            f"Capability name {name!r} must contain only lowercase letters, digits and underscores"
        )
    return name


__all__ = ["Capability", "CapabilityInfo", "Repo", "validate_capability_name"]

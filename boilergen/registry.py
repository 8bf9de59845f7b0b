"""Capability registry and run-scoped enablement tables."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Sequence, Set

from .actions import Action, builtin_actions
from .detectors import Detector, builtin_detectors
from .models import Capability, CapabilityInfo, validate_capability_name
from .renderer import TemplateRenderer


class UnknownCapabilityName(RuntimeError):
    """Raised when configuration names a detector or action that does not exist."""

    def __init__(self, kind: str, names: Iterable[str]) -> None:
        self.kind = kind
        self.names = sorted(set(names))
        super().__init__(f"Unknown {kind} name(s): {', '.join(self.names)}")


class EnablementMap:
    """Name to enabled-flag table built from capability defaults."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._enabled: Dict[str, bool] = {}

    @classmethod
    def from_capabilities(cls, kind: str, capabilities: Iterable[Capability]) -> "EnablementMap":
        table = cls(kind)
        for capability in capabilities:
            table.add(capability.name, capability.default_enabled)
        return table

    def add(self, name: str, enabled: bool) -> None:
        self._enabled[name] = enabled

    def exclude(self, names: Iterable[str]) -> None:
        """Disable every name in ``names``; nothing changes if any name is unknown."""
        requested = list(names)
        unknown = [name for name in requested if name not in self._enabled]
        if unknown:
            raise UnknownCapabilityName(self.kind, unknown)
        for name in requested:
            self._enabled[name] = False

    def is_enabled(self, name: str) -> bool:
        try:
            return self._enabled[name]
        except KeyError:
            raise UnknownCapabilityName(self.kind, [name]) from None

    def names(self) -> List[str]:
        return sorted(self._enabled)

    def enabled_names(self) -> List[str]:
        return sorted(name for name, enabled in self._enabled.items() if enabled)

    def __contains__(self, name: object) -> bool:
        return name in self._enabled


class CapabilityRegistry:
    """Ordered set of detectors and actions available to one process."""

    def __init__(self, detectors: Sequence[Detector], actions: Sequence[Action]) -> None:
        self.detectors: List[Detector] = list(detectors)
        self.actions: List[Action] = list(actions)
        _validate_names("detector", self.detectors)
        _validate_names("action", self.actions)

    def detector_enablement(self) -> EnablementMap:
        return EnablementMap.from_capabilities("detector", self.detectors)

    def action_enablement(self) -> EnablementMap:
        return EnablementMap.from_capabilities("action", self.actions)

    def detector_infos(self) -> List[CapabilityInfo]:
        return [detector.info() for detector in self.detectors]

    def action_infos(self) -> List[CapabilityInfo]:
        return [action.info() for action in self.actions]


def default_registry(
    *,
    git_runner: Callable[..., str] | None = None,
    clock: Callable[[], datetime] | None = None,
    renderer: TemplateRenderer | None = None,
) -> CapabilityRegistry:
    """Return the built-in detectors and actions in declaration order."""
    return CapabilityRegistry(
        builtin_detectors(git_runner=git_runner, clock=clock),
        builtin_actions(renderer=renderer),
    )


def _validate_names(kind: str, capabilities: Sequence[Capability]) -> None:
    seen: Set[str] = set()
    for capability in capabilities:
        if not isinstance(capability, Capability):
            raise TypeError(f"{kind} {capability!r} does not implement the capability contract")
        name = validate_capability_name(capability.name)
        if not capability.description:
            raise ValueError(f"{kind} {name!r} is missing a description")
        if name in seen:
            raise ValueError(f"Duplicate {kind} name: {name!r}")
        seen.add(name)


__all__ = [
    "CapabilityRegistry",
    "EnablementMap",
    "UnknownCapabilityName",
    "default_registry",
]

"""Pipeline orchestration for the detect and update flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from . import context as keys
from .actions import ActionData
from .config import BoilergenConfig, load_config, load_overrides
from .context import ContextOverrides, default_context
from .logging import get_logger, log_context
from .models import Repo
from .registry import CapabilityRegistry, default_registry
from .value import MergeConflict, Value


class CapabilityExecutionError(RuntimeError):
    """Wraps a detector or action failure with the phase and capability name."""

    def __init__(self, phase: str, capability: str, cause: BaseException) -> None:
        self.phase = phase
        self.capability = capability
        kind = "detector" if phase == "detection" else "action"
        super().__init__(f"{phase} phase failed in {kind} {capability!r}: {cause}")


class MissingRepositoryIdentity(RuntimeError):
    """Raised when the detected context carries no usable ``owner/name`` pair."""


@dataclass
class RunOutcome:
    """Result of a full update run."""

    repo: Repo
    identity: str
    context: Value
    excluded_actions: List[str] = field(default_factory=list)


class Orchestrator:
    """Runs the detection, override and action phases against one repository."""

    def __init__(
        self,
        registry: CapabilityRegistry | None = None,
        overrides: ContextOverrides | None = None,
    ) -> None:
        self.registry = registry or default_registry()
        self.overrides = overrides if overrides is not None else load_overrides()
        self.logger = get_logger("orchestrator")

    def run_update(self, path: str | Path) -> RunOutcome:
        """Detect, apply overrides and run every enabled action for ``path``."""
        repo = Repo.at(path)
        self.logger.info("Starting update run for %s", repo.path)
        config = load_config(repo.path)

        # Both exclusion lists are checked before anything runs.
        self.registry.action_enablement().exclude(config.actions.excluded)

        detected = self.detect(repo, config)
        log_context(self.logger, "Detected context", detected)

        identity = self.repository_identity(detected)
        final, excluded = self.apply_overrides(detected, identity, config.actions.excluded)
        log_context(self.logger, "Final context", final)

        self.run_actions(repo, final, excluded)
        self.logger.info("Update finished for %s", identity)
        return RunOutcome(repo=repo, identity=identity, context=final, excluded_actions=excluded)

    def detect(self, repo: Repo, config: BoilergenConfig | None = None) -> Value:
        """Run enabled detectors in order and layer their union onto the defaults."""
        enablement = self.registry.detector_enablement()
        if config is not None:
            enablement.exclude(config.detectors.excluded)

        detected = Value.empty_object()
        for detector in self.registry.detectors:
            name = detector.name
            if not enablement.is_enabled(name):
                self.logger.debug("Detector %s disabled", name)
                continue
            self.logger.debug("Running detector %s", name)
            try:
                fragment = detector.detect(repo)
            except Exception as exc:
                raise CapabilityExecutionError("detection", name, exc) from exc
            if not isinstance(fragment, Value) or not fragment.is_object():
                raise CapabilityExecutionError(
                    "detection", name, TypeError(f"expected an object fragment, got {fragment!r}")
                )
            try:
                detected.union(fragment)
            except MergeConflict as exc:
                exc.capability = name
                raise

        context = default_context()
        context.override_with(detected)
        return context

    @staticmethod
    def repository_identity(context: Value) -> str:
        owner = context.get(keys.REPO_OWNER)
        name = context.get(keys.REPO_NAME)
        owner_text = owner.as_str() if owner is not None else None
        name_text = name.as_str() if name is not None else None
        if not owner_text or not name_text:
            raise MissingRepositoryIdentity(
                "Could not determine the repository owner/name; "
                "configure a GitHub remote for the repository"
            )
        return f"{owner_text}/{name_text}"

    def apply_overrides(
        self,
        context: Value,
        identity: str,
        excluded_actions: Iterable[str] = (),
    ) -> Tuple[Value, List[str]]:
        """Return the overridden context and the combined action exclusions."""
        merged = context.copy()
        excluded = list(dict.fromkeys(excluded_actions))

        entry = self.overrides.get(identity)
        if entry is None:
            self.logger.debug("No overrides for %s", identity)
            return merged, excluded

        self.logger.info("Applying overrides for %s", identity)
        for name in entry.excluded_actions:
            if name not in excluded:
                excluded.append(name)
        merged.override_with(entry.context)
        return merged, excluded

    def run_actions(self, repo: Repo, context: Value, excluded: Iterable[str] = ()) -> None:
        """Run enabled actions in order, stopping at the first failure."""
        enablement = self.registry.action_enablement()
        enablement.exclude(excluded)

        for action in self.registry.actions:
            name = action.name
            if not enablement.is_enabled(name):
                self.logger.debug("Action %s disabled", name)
                continue
            self.logger.debug("Running action %s", name)
            # each action gets its own copy of the final context
            data = ActionData(repo=repo, context=context.copy())
            try:
                action.run(data)
            except Exception as exc:
                raise CapabilityExecutionError("action", name, exc) from exc


__all__ = [
    "CapabilityExecutionError",
    "MissingRepositoryIdentity",
    "Orchestrator",
    "RunOutcome",
]

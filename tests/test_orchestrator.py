"""Tests for boilergen.orchestrator."""

from __future__ import annotations

from typing import Callable, List

import pytest

from boilergen.actions import Action, ActionData
from boilergen.context import ContextOverrides, RepoOverride, default_context
from boilergen.detectors import Detector
from boilergen.models import Repo
from boilergen.orchestrator import (
    CapabilityExecutionError,
    MissingRepositoryIdentity,
    Orchestrator,
)
from boilergen.registry import CapabilityRegistry, UnknownCapabilityName
from boilergen.value import MergeConflict, Value, object_of
from tests._fixtures.repo_builder import RepoBuilder

IDENTITY = object_of(repo_owner="m4tx", repo_name="boiler")


class StubDetector(Detector):
    """Detector returning a fixed fragment and recording the call order."""

    description = "Stub detector."

    def __init__(self, name: str, result: object, log: List[str]) -> None:
        self.name = name  # type: ignore[misc]
        self.result = result
        self.log = log

    def detect(self, repo: Repo) -> Value:
        self.log.append(self.name)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result  # type: ignore[return-value]


class StubAction(Action):
    """Action recording the context it was handed."""

    description = "Stub action."

    def __init__(
        self,
        name: str,
        log: List[str],
        effect: Callable[[ActionData], None] | None = None,
    ) -> None:
        super().__init__()
        self.name = name  # type: ignore[misc]
        self.log = log
        self.effect = effect
        self.seen: List[Value] = []

    def run(self, data: ActionData) -> None:
        self.log.append(self.name)
        self.seen.append(data.context)
        if self.effect is not None:
            self.effect(data)


def _orchestrator(detectors, actions, overrides: ContextOverrides | None = None) -> Orchestrator:
    return Orchestrator(
        registry=CapabilityRegistry(detectors, actions),
        overrides=overrides or ContextOverrides(),
    )


def test_detect_layers_fragments_onto_defaults(repo_builder: RepoBuilder) -> None:
    log: List[str] = []
    orchestrator = _orchestrator(
        [
            StubDetector("first", object_of(langs=["rust"], license="MIT"), log),
            StubDetector("second", object_of(langs=["python"]), log),
        ],
        [],
    )

    context = orchestrator.detect(repo_builder.repo())

    assert log == ["first", "second"]
    assert context.get("langs") == Value(["rust", "python"])
    assert context.get("license") == Value("MIT")
    assert context.get("coverage_enabled") == Value(True)


def test_detect_on_empty_repo_matches_defaults(repo_builder: RepoBuilder) -> None:
    orchestrator = _orchestrator([StubDetector("noop", Value.empty_object(), [])], [])

    assert orchestrator.detect(repo_builder.repo()) == default_context()


def test_detector_failure_names_capability(repo_builder: RepoBuilder) -> None:
    log: List[str] = []
    orchestrator = _orchestrator(
        [
            StubDetector("broken", OSError("disk on fire"), log),
            StubDetector("later", Value.empty_object(), log),
        ],
        [],
    )

    with pytest.raises(CapabilityExecutionError) as excinfo:
        orchestrator.detect(repo_builder.repo())

    assert excinfo.value.phase == "detection"
    assert excinfo.value.capability == "broken"
    assert "detector 'broken'" in str(excinfo.value)
    assert log == ["broken"]


def test_detector_returning_non_object_is_rejected(repo_builder: RepoBuilder) -> None:
    orchestrator = _orchestrator([StubDetector("scalar", Value("oops"), [])], [])

    with pytest.raises(CapabilityExecutionError, match="expected an object fragment"):
        orchestrator.detect(repo_builder.repo())


def test_merge_conflict_is_tagged_with_detector(repo_builder: RepoBuilder) -> None:
    orchestrator = _orchestrator(
        [
            StubDetector("one", object_of(full_name="John Doe"), []),
            StubDetector("two", object_of(full_name="Jane Roe"), []),
        ],
        [],
    )

    with pytest.raises(MergeConflict) as excinfo:
        orchestrator.detect(repo_builder.repo())

    assert excinfo.value.capability == "two"
    assert excinfo.value.path == ["full_name"]
    assert "detector 'two'" in str(excinfo.value)


def test_run_update_runs_actions_in_order(repo_builder: RepoBuilder) -> None:
    log: List[str] = []
    orchestrator = _orchestrator(
        [StubDetector("identity", IDENTITY, log)],
        [StubAction("alpha", log), StubAction("beta", log)],
    )

    outcome = orchestrator.run_update(repo_builder.path())

    assert log == ["identity", "alpha", "beta"]
    assert outcome.identity == "m4tx/boiler"
    assert outcome.repo.path == repo_builder.path().resolve()
    assert outcome.excluded_actions == []


def test_action_failure_stops_the_run(repo_builder: RepoBuilder) -> None:
    log: List[str] = []

    def explode(data: ActionData) -> None:
        raise RuntimeError("boom")

    orchestrator = _orchestrator(
        [StubDetector("identity", IDENTITY, log)],
        [StubAction("first", log, explode), StubAction("second", log)],
    )

    with pytest.raises(CapabilityExecutionError) as excinfo:
        orchestrator.run_update(repo_builder.path())

    assert excinfo.value.phase == "action"
    assert excinfo.value.capability == "first"
    assert log == ["identity", "first"]


def test_missing_identity_aborts_before_actions(repo_builder: RepoBuilder) -> None:
    log: List[str] = []
    orchestrator = _orchestrator(
        [StubDetector("nothing", Value.empty_object(), log)],
        [StubAction("alpha", log)],
    )

    with pytest.raises(MissingRepositoryIdentity):
        orchestrator.run_update(repo_builder.path())

    assert log == ["nothing"]


def test_config_exclusions_are_honoured(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".boilergen.yml": """
            detectors:
              excluded: [skipped]
            actions:
              excluded: [beta]
            """,
        }
    )
    log: List[str] = []
    orchestrator = _orchestrator(
        [StubDetector("identity", IDENTITY, log), StubDetector("skipped", IDENTITY, log)],
        [StubAction("alpha", log), StubAction("beta", log)],
    )

    outcome = orchestrator.run_update(repo_builder.path())

    assert log == ["identity", "alpha"]
    assert outcome.excluded_actions == ["beta"]


def test_unknown_exclusion_fails_before_any_side_effect(repo_builder: RepoBuilder) -> None:
    repo_builder.write({".boilergen.yml": "actions:\n  excluded: [nope]\n"})
    log: List[str] = []
    orchestrator = _orchestrator(
        [StubDetector("identity", IDENTITY, log)],
        [StubAction("alpha", log)],
    )

    with pytest.raises(UnknownCapabilityName):
        orchestrator.run_update(repo_builder.path())

    assert log == []


def test_overrides_win_and_exclude_actions(repo_builder: RepoBuilder) -> None:
    log: List[str] = []
    alpha = StubAction("alpha", log)
    overrides = ContextOverrides(
        entries={
            "m4tx/boiler": RepoOverride(
                excluded_actions=["beta"],
                context=object_of(license="MIT", gh_actions_rust_os=["ubuntu-latest"]),
            )
        }
    )
    orchestrator = _orchestrator(
        [StubDetector("identity", IDENTITY, log)],
        [alpha, StubAction("beta", log)],
        overrides,
    )

    outcome = orchestrator.run_update(repo_builder.path())

    assert log == ["identity", "alpha"]
    assert outcome.excluded_actions == ["beta"]
    seen = alpha.seen[0]
    assert seen.get("license") == Value("MIT")
    assert seen.get("gh_actions_rust_os") == Value(["ubuntu-latest"])


def test_apply_overrides_leaves_input_untouched() -> None:
    orchestrator = Orchestrator(
        registry=CapabilityRegistry([], []),
        overrides=ContextOverrides(
            entries={"m4tx/boiler": RepoOverride(context=object_of(name="Renamed"))}
        ),
    )
    detected = object_of(name="Original")

    merged, excluded = orchestrator.apply_overrides(detected, "m4tx/boiler", ["x", "x"])

    assert detected.get("name") == Value("Original")
    assert merged.get("name") == Value("Renamed")
    assert excluded == ["x"]


@pytest.mark.parametrize(
    "context",
    [
        object_of(repo_owner="m4tx"),
        object_of(repo_name="boiler"),
        object_of(repo_owner="", repo_name="boiler"),
        object_of(repo_owner=1, repo_name="boiler"),
    ],
)
def test_repository_identity_requires_owner_and_name(context: Value) -> None:
    with pytest.raises(MissingRepositoryIdentity):
        Orchestrator.repository_identity(context)


def test_action_mutations_do_not_leak(repo_builder: RepoBuilder) -> None:
    log: List[str] = []

    def tamper(data: ActionData) -> None:
        data.context.insert("license", "Tampered")

    second = StubAction("second", log)
    orchestrator = _orchestrator(
        [StubDetector("identity", IDENTITY, log)],
        [StubAction("first", log, tamper), second],
    )

    outcome = orchestrator.run_update(repo_builder.path())

    assert second.seen[0].get("license") == Value("LicenseRef-proprietary")
    assert outcome.context.get("license") == Value("LicenseRef-proprietary")

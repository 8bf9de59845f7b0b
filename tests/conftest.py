from __future__ import annotations

import logging
from pathlib import Path

import pytest

from boilergen.context import ContextOverrides
from boilergen.orchestrator import Orchestrator
from boilergen.registry import default_registry
from boilergen.renderer import TemplateRenderer
from tests._fixtures.fake_git import FakeGitRunner, fixed_clock
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def github_git() -> FakeGitRunner:
    """Git runner for a repository cloned from github.com/m4tx/boiler."""
    return FakeGitRunner(
        commit_times=[1667390400],  # 2022-11-02
        remote_url="git@github.com:m4tx/boiler.git",
        remote_head="origin/master",
    )


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def make_orchestrator(renderer: TemplateRenderer):
    """Build an orchestrator over the built-in capabilities with a scripted git."""

    def _make(git: FakeGitRunner | None = None, overrides: ContextOverrides | None = None) -> Orchestrator:
        registry = default_registry(
            git_runner=git or FakeGitRunner(),
            clock=fixed_clock,
            renderer=renderer,
        )
        return Orchestrator(registry=registry, overrides=overrides or ContextOverrides())

    return _make


@pytest.fixture(autouse=True)
def _reset_boilergen_logger():
    """Undo CLI logging setup so caplog sees records in every test."""
    yield
    logger = logging.getLogger("boilergen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

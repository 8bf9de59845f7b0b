"""Shared context key namespace, default values and per-repository overrides."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .value import Value

# Root name under which templates see the context.
CONTEXT_ROOT = "boilergen"

LANGS = "langs"
FRAMEWORKS = "frameworks"
LICENSE = "license"
FULL_NAME = "full_name"
NAME = "name"
VCS = "vcs"
REPO_OWNER = "repo_owner"
REPO_NAME = "repo_name"
REPO_DEFAULT_BRANCH = "repo_default_branch"
FIRST_ACTIVITY_YEAR = "first_activity_year"
LAST_ACTIVITY_YEAR = "last_activity_year"
GIT_HAS_SUBMODULES = "git_has_submodules"
PYTHON_PACKAGE_MANAGERS = "python_package_managers"
DOCKERFILES = "dockerfiles"
CRATE_NAME = "crate_name"
CRATE_PUBLISHED = "crate_published"
COVERAGE_ENABLED = "coverage_enabled"
TRUNK_CONFIGS = "trunk_configs"
GH_ACTIONS_RUST_VERSIONS = "gh_actions_rust_versions"
GH_ACTIONS_RUST_OS = "gh_actions_rust_os"
GH_ACTIONS_RUST_FEATURES = "gh_actions_rust_features"
GH_ACTIONS_PYTHON_VERSIONS = "gh_actions_python_versions"
GH_ACTIONS_PYTHON_OS = "gh_actions_python_os"

PROPRIETARY_LICENSE = "LicenseRef-proprietary"


def default_context() -> Value:
    """Return the baseline context that detected facts are layered onto."""
    data = Value.empty_object()
    data.insert(CRATE_PUBLISHED, True)
    data.insert(COVERAGE_ENABLED, True)
    data.insert(LICENSE, PROPRIETARY_LICENSE)
    data.insert(LANGS, [])
    data.insert(FRAMEWORKS, [])
    data.insert(GH_ACTIONS_RUST_VERSIONS, ["stable", "nightly"])
    data.insert(GH_ACTIONS_RUST_OS, ["ubuntu-latest", "macos-latest", "windows-latest"])
    data.insert(GH_ACTIONS_RUST_FEATURES, [])
    data.insert(GH_ACTIONS_PYTHON_VERSIONS, ["3.10", "3.11", "3.12", "3.13"])
    data.insert(GH_ACTIONS_PYTHON_OS, ["ubuntu-latest"])
    return data


@dataclass
class RepoOverride:
    """Operator-supplied adjustments for a single ``owner/name`` repository."""

    excluded_actions: List[str] = field(default_factory=list)
    context: Value = field(default_factory=Value.empty_object)


@dataclass
class ContextOverrides:
    """Override entries keyed by ``owner/name``."""

    entries: Dict[str, RepoOverride] = field(default_factory=dict)

    def get(self, identity: str) -> Optional[RepoOverride]:
        return self.entries.get(identity)

    def __len__(self) -> int:
        return len(self.entries)


__all__ = [
    "CONTEXT_ROOT",
    "ContextOverrides",
    "PROPRIETARY_LICENSE",
    "RepoOverride",
    "default_context",
]

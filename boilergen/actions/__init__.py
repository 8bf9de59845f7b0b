"""Built-in actions in their fixed declaration order."""

from __future__ import annotations

from typing import List

from ..renderer import TemplateRenderer
from .base import Action, ActionData, ActionError
from .license import LicenseAction
from .readme import ReadmeAction
from .templated import (
    DependabotConfigAction,
    DockerCiAction,
    PreCommitCiAction,
    PreCommitConfigAction,
    PythonCiAction,
    RustCiAction,
    RustfmtTomlAction,
    TemplateAction,
)


def builtin_actions(*, renderer: TemplateRenderer | None = None) -> List[Action]:
    """Return every built-in action sharing one renderer, in declaration order."""
    shared = renderer or TemplateRenderer()
    return [
        DependabotConfigAction(shared),
        DockerCiAction(shared),
        LicenseAction(shared),
        PreCommitCiAction(shared),
        PreCommitConfigAction(shared),
        PythonCiAction(shared),
        ReadmeAction(shared),
        RustCiAction(shared),
        RustfmtTomlAction(shared),
    ]


__all__ = [
    "Action",
    "ActionData",
    "ActionError",
    "DependabotConfigAction",
    "DockerCiAction",
    "LicenseAction",
    "PreCommitCiAction",
    "PreCommitConfigAction",
    "PythonCiAction",
    "ReadmeAction",
    "RustCiAction",
    "RustfmtTomlAction",
    "TemplateAction",
    "builtin_actions",
]

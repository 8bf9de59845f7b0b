"""Actions that render a single bundled template to a fixed path."""

from __future__ import annotations

from typing import ClassVar, Optional

from .base import Action, ActionData
from .utils import has_lang, render_template


class TemplateAction(Action):
    """Renders ``<file_name>.j2`` to ``file_name``, optionally gated on a language."""

    file_name: ClassVar[str] = ""
    required_lang: ClassVar[Optional[str]] = None

    def should_run(self, data: ActionData) -> bool:
        if self.required_lang is None:
            return True
        return has_lang(data, self.required_lang)

    def run(self, data: ActionData) -> None:
        if self.should_run(data):
            render_template(data, self.renderer, self.file_name)


class DependabotConfigAction(TemplateAction):
    name = "dependabot_config"
    description = "Generates a Dependabot configuration file."
    file_name = ".github/dependabot.yml"


class DockerCiAction(TemplateAction):
    name = "docker_ci"
    description = "Generates a Docker CI configuration file for GitHub Actions."
    file_name = ".github/workflows/docker-publish.yml"
    required_lang = "docker"


class PreCommitCiAction(TemplateAction):
    name = "pre_commit_ci"
    description = "Generates a pre-commit CI configuration file for GitHub Actions."
    file_name = ".github/workflows/pre-commit.yml"


class PreCommitConfigAction(TemplateAction):
    name = "pre_commit_config"
    description = "Generates a pre-commit configuration file."
    file_name = ".pre-commit-config.yaml"


class PythonCiAction(TemplateAction):
    name = "python_ci"
    description = "Generates a Python CI configuration file for GitHub Actions."
    file_name = ".github/workflows/python.yml"
    required_lang = "python"


class RustCiAction(TemplateAction):
    name = "rust_ci"
    description = "Generates a Rust CI configuration file for GitHub Actions."
    file_name = ".github/workflows/rust.yml"
    required_lang = "rust"


class RustfmtTomlAction(TemplateAction):
    name = "rustfmt_toml"
    description = "Generates a rustfmt configuration file."
    file_name = "rustfmt.toml"
    required_lang = "rust"


__all__ = [
    "DependabotConfigAction",
    "DockerCiAction",
    "PreCommitCiAction",
    "PreCommitConfigAction",
    "PythonCiAction",
    "RustCiAction",
    "RustfmtTomlAction",
    "TemplateAction",
]

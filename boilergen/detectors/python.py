"""Python project detector."""

from __future__ import annotations

from typing import List

from .. import context as keys
from ..models import Repo
from ..value import Value
from .base import Detector
from .utils import read_toml

_PROJECT_MARKERS = ("pyproject.toml", "setup.py", "requirements.txt", "Pipfile")


class PythonDetector(Detector):
    """Detects Python projects, their package managers and Django usage."""

    name = "python"
    description = "Detects if the project is a Python project and which package manager it uses."

    def detect(self, repo: Repo) -> Value:
        data = Value.empty_object()
        root = repo.path

        if any((root / marker).is_file() for marker in _PROJECT_MARKERS):
            data.insert(keys.LANGS, ["python"])
            data.insert(keys.PYTHON_PACKAGE_MANAGERS, self._package_managers(repo))

        if (root / "manage.py").is_file():
            data.insert(keys.FRAMEWORKS, ["django"])

        return data

    def _package_managers(self, repo: Repo) -> List[str]:
        root = repo.path
        managers: List[str] = []
        if self._uses_poetry(repo):
            managers.append("poetry")
        if (root / "Pipfile").is_file():
            managers.append("pipenv")
        if not managers:
            managers.append("pip")
        return managers

    @staticmethod
    def _uses_poetry(repo: Repo) -> bool:
        if (repo.path / "poetry.lock").is_file():
            return True
        pyproject = repo.path / "pyproject.toml"
        if not pyproject.is_file():
            return False
        tool = read_toml(pyproject).get("tool")
        return isinstance(tool, dict) and "poetry" in tool

"""Dockerfile detector implementation."""

from __future__ import annotations

from typing import List, Tuple

from .. import context as keys
from ..models import Repo
from ..value import Value
from .base import DetectionError, Detector


def _dockerfile_sort_key(file_name: str) -> Tuple[int, str]:
    lowered = file_name.lower()
    if lowered == "dockerfile":
        return (0, "")
    return (1, lowered.replace(".dockerfile", ""))


class DockerDetector(Detector):
    """Detects Dockerfiles at the repository root."""

    name = "docker"
    description = "Detects the existence of Dockerfiles."

    def detect(self, repo: Repo) -> Value:
        try:
            entries = list(repo.path.iterdir())
        except OSError as exc:
            raise DetectionError(f"Failed to list {repo.path}: {exc}") from exc

        dockerfiles: List[str] = []
        for entry in entries:
            lowered = entry.name.lower()
            if lowered == "dockerfile" or lowered.endswith(".dockerfile"):
                if entry.is_file():
                    dockerfiles.append(entry.name)
        dockerfiles.sort(key=_dockerfile_sort_key)

        data = Value.empty_object()
        if dockerfiles:
            data.insert(keys.LANGS, ["docker"])
            data.insert(keys.DOCKERFILES, dockerfiles)
        return data

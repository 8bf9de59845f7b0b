"""Built-in detectors in their fixed declaration order."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List

from .base import DetectionError, Detector
from .docker import DockerDetector
from .extensions import (
    JavascriptDetector,
    JsonDetector,
    ShellScriptDetector,
    TomlDetector,
    YamlDetector,
)
from .git import GitDetector
from .license import LicenseDetector
from .python import PythonDetector
from .readme import ReadmeDetector
from .rust import RustDetector


def builtin_detectors(
    *,
    git_runner: Callable[..., str] | None = None,
    clock: Callable[[], datetime] | None = None,
) -> List[Detector]:
    """Return fresh instances of every built-in detector.

    The order is part of the contract: detectors run, and are listed, in the
    sequence returned here.
    """
    return [
        DockerDetector(),
        GitDetector(runner=git_runner, clock=clock),
        JavascriptDetector(),
        JsonDetector(),
        LicenseDetector(),
        PythonDetector(),
        ReadmeDetector(),
        RustDetector(),
        ShellScriptDetector(),
        TomlDetector(),
        YamlDetector(),
    ]


__all__ = [
    "DetectionError",
    "Detector",
    "DockerDetector",
    "GitDetector",
    "JavascriptDetector",
    "JsonDetector",
    "LicenseDetector",
    "PythonDetector",
    "ReadmeDetector",
    "RustDetector",
    "ShellScriptDetector",
    "TomlDetector",
    "YamlDetector",
    "builtin_detectors",
]

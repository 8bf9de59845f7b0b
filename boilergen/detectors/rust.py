"""Rust crate and Trunk detector."""

from __future__ import annotations

from typing import Any, Dict, List

from .. import context as keys
from ..models import Repo
from ..value import Value
from .base import Detector
from .utils import iter_repo_files, read_toml, relative_posix


def _author_name(author: str) -> str:
    """Strip the ``<email>`` part of a Cargo author entry."""
    index = author.find("<")
    if index != -1:
        author = author[:index]
    return author.strip()


class RustDetector(Detector):
    """Detects Rust crates and retrieves basic metadata from Cargo.toml.

    Trunk configurations found anywhere in the tree are reported as the
    ``trunk`` framework together with their repository-relative paths.
    """

    name = "rust"
    description = (
        "Detects if the project contains Rust files, and retrieves basic metadata "
        "from Cargo.toml, such as authors or the crate name."
    )

    def detect(self, repo: Repo) -> Value:
        data = Value.empty_object()

        cargo_toml = repo.path / "Cargo.toml"
        if cargo_toml.is_file():
            data.insert(keys.LANGS, ["rust"])
            manifest = read_toml(cargo_toml)
            package = manifest.get("package")
            if isinstance(package, dict):
                self._apply_package(data, package)

        data.union(self._detect_trunk(repo))
        return data

    @staticmethod
    def _apply_package(data: Value, package: Dict[str, Any]) -> None:
        name = package.get("name")
        if isinstance(name, str):
            data.insert(keys.CRATE_NAME, name)

        authors = package.get("authors")
        if isinstance(authors, list) and authors and isinstance(authors[0], str):
            full_name = _author_name(authors[0])
            if full_name:
                data.insert(keys.FULL_NAME, full_name)

        if package.get("publish") is False:
            data.insert(keys.CRATE_PUBLISHED, False)

    @staticmethod
    def _detect_trunk(repo: Repo) -> Value:
        configs: List[str] = [
            relative_posix(repo, path)
            for path in iter_repo_files(repo)
            if path.name == "Trunk.toml"
        ]
        data = Value.empty_object()
        if configs:
            data.insert(keys.FRAMEWORKS, ["trunk"])
            data.insert(keys.TRUNK_CONFIGS, configs)
        return data

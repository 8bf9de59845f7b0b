"""Repository walking helpers shared by detectors."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Sequence

from .. import context as keys
from ..config import ConfigError, load_config
from ..logging import get_logger
from ..models import Repo
from ..value import Value
from .base import DetectionError

_EXCLUDED_DIRS = {
    "node_modules",
    "__pycache__",
}

_HEADER_BUFFER_SIZE = 256

logger = get_logger("detectors")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .boilergen.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.is_file():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _parse_config_excludes(root: Path) -> List[IgnoreRule]:
    try:
        config = load_config(root)
    except ConfigError:
        return []
    rules = (_build_ignore_rule(pattern) for pattern in config.exclude_paths)
    return [rule for rule in rules if rule is not None]


def load_ignore_rules(root: Path) -> List[IgnoreRule]:
    rules = _parse_gitignore(root / ".gitignore")
    rules.extend(_parse_config_excludes(root))
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def iter_repo_files(repo: Repo) -> Iterator[Path]:
    """Yield non-hidden, non-ignored files below the repository root in a stable order."""
    root = repo.path
    rules = load_ignore_rules(root)
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            if name.startswith(".") or name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            if filename.startswith("."):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


def lang_fragment(lang: str) -> Value:
    data = Value.empty_object()
    data.insert(keys.LANGS, [lang])
    return data


def detect_by_extension(repo: Repo, extensions: Iterable[str], lang: str) -> Value:
    """Report ``lang`` when any file carries one of ``extensions`` (case-insensitive)."""
    wanted = {f".{ext.lower().lstrip('.')}" for ext in extensions}
    return _detect_by_predicate(repo, lang, lambda path: path.suffix.lower() in wanted)


def detect_by_header(repo: Repo, headers: Sequence[bytes], lang: str) -> Value:
    """Report ``lang`` when any file starts with one of ``headers``."""
    prefixes = tuple(headers)

    def _matches(path: Path) -> bool:
        try:
            with path.open("rb") as handle:
                head = handle.read(_HEADER_BUFFER_SIZE)
        except OSError as exc:
            logger.debug("Skipping unreadable file %s: %s", path, exc)
            return False
        return head.startswith(prefixes)

    return _detect_by_predicate(repo, lang, _matches)


def _detect_by_predicate(repo: Repo, lang: str, predicate: Callable[[Path], bool]) -> Value:
    for path in iter_repo_files(repo):
        if path.is_file() and predicate(path):
            return lang_fragment(lang)
    return Value.empty_object()


def relative_posix(repo: Repo, path: Path) -> str:
    return path.relative_to(repo.path).as_posix()


def read_toml(path: Path) -> Dict[str, Any]:
    """Parse a TOML manifest, raising ``DetectionError`` when it is unusable."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise DetectionError(f"Could not parse {path.name}: {exc}") from exc


__all__ = [
    "IgnoreRule",
    "detect_by_extension",
    "detect_by_header",
    "iter_repo_files",
    "lang_fragment",
    "load_ignore_rules",
    "read_toml",
    "relative_posix",
]

"""Git metadata detector."""

from __future__ import annotations

import re
import subprocess
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .. import context as keys
from ..logging import get_logger
from ..models import Repo
from ..value import Value
from .base import DetectionError, Detector

_REMOTE_PATTERNS = (
    re.compile(r"^git@github\.com:(?P<owner>[^/\s]+)/(?P<name>[^/\s]+?)(?:\.git)?$"),
    re.compile(r"^ssh://git@github\.com/(?P<owner>[^/\s]+)/(?P<name>[^/\s]+?)(?:\.git)?/?$"),
    re.compile(r"^https://github\.com/(?P<owner>[^/\s]+)/(?P<name>[^/\s]+?)(?:\.git)?/?$"),
)


def parse_remote_url(url: str) -> Optional[Tuple[str, str]]:
    """Return ``(owner, name)`` for a GitHub remote URL, ``None`` otherwise."""
    candidate = url.strip()
    for pattern in _REMOTE_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return match.group("owner"), match.group("name")
    return None


def _utc_now() -> datetime:
    return datetime.now(UTC)


class GitDetector(Detector):
    """Detects git usage together with owner/name, activity years and branch."""

    name = "git"
    description = (
        "Detects if the project is using git as the VCS and retrieves basic metadata, "
        "such as repository owner/name and the activity period."
    )

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self._clock = clock or _utc_now
        self.logger = get_logger("detectors.git")

    def detect(self, repo: Repo) -> Value:
        data = Value.empty_object()
        if not (repo.path / ".git").exists():
            return data

        data.insert(keys.VCS, ["git"])

        first, last = self._activity_timespan(repo.path)
        data.insert(keys.FIRST_ACTIVITY_YEAR, first.year)
        data.insert(keys.LAST_ACTIVITY_YEAR, last.year)

        owner_name = self._owner_and_name(repo.path)
        if owner_name is not None:
            owner, name = owner_name
            data.insert(keys.REPO_OWNER, owner)
            data.insert(keys.REPO_NAME, name)

        branch = self._default_branch(repo.path)
        if branch:
            data.insert(keys.REPO_DEFAULT_BRANCH, branch)

        data.insert(keys.GIT_HAS_SUBMODULES, (repo.path / ".gitmodules").exists())
        return data

    # ------------------------------------------------------------------
    # Internals

    def _activity_timespan(self, root: Path) -> Tuple[datetime, datetime]:
        now = self._clock()
        output = self._try_run(["git", "log", "--format=%ct"], cwd=root)
        commit_times: List[datetime] = []
        for line in (output or "").splitlines():
            stamp = line.strip()
            if not stamp:
                continue
            try:
                commit_times.append(datetime.fromtimestamp(int(stamp), tz=UTC))
            except ValueError as exc:
                raise DetectionError(f"Unexpected commit timestamp {stamp!r}") from exc

        if not commit_times:
            self.logger.warning("Could not read commit history, using current time as fallback")
            return now, now
        return min(min(commit_times), now), max(commit_times)

    def _owner_and_name(self, root: Path) -> Optional[Tuple[str, str]]:
        url = self._try_run(["git", "config", "--get", "remote.origin.url"], cwd=root)
        if not url or not url.strip():
            self.logger.warning("No default remote set; could not retrieve owner and repo name")
            return None
        parsed = parse_remote_url(url)
        if parsed is None:
            self.logger.warning("Could not parse remote URL: %s", url.strip())
        return parsed

    def _default_branch(self, root: Path) -> Optional[str]:
        remote_head = self._try_run(
            ["git", "symbolic-ref", "--short", "refs/remotes/origin/HEAD"], cwd=root
        )
        if remote_head and remote_head.strip():
            return remote_head.strip().split("/", 1)[-1]
        local_head = self._try_run(["git", "symbolic-ref", "--short", "HEAD"], cwd=root)
        if local_head and local_head.strip():
            return local_head.strip()
        return None

    def _try_run(self, args: List[str], *, cwd: Path) -> Optional[str]:
        """Run a git query, mapping a non-zero exit status to ``None``."""
        try:
            return self._run(args, cwd=cwd, capture_output=True)
        except subprocess.CalledProcessError as exc:
            self.logger.debug("%s exited with status %s", " ".join(args), exc.returncode)
            return None
        except OSError as exc:
            raise DetectionError(f"Could not run git: {exc}") from exc

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        return self._runner(args, cwd=cwd, capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


__all__ = ["GitDetector", "parse_remote_url"]

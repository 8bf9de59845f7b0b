"""README title detector."""

from __future__ import annotations

import re

from .. import context as keys
from ..models import Repo
from ..value import Value
from .base import DetectionError, Detector

README_FILENAME = "README.md"

_SETEXT_TITLE = re.compile(r"^(.+)\n=+[ \t]*$", re.MULTILINE)
_ATX_TITLE = re.compile(r"^# (.+?)[ \t]*$", re.MULTILINE)


class ReadmeDetector(Detector):
    name = "readme"
    description = "Retrieves the project name from the README.md file."

    def detect(self, repo: Repo) -> Value:
        data = Value.empty_object()
        readme = repo.path / README_FILENAME
        if not readme.is_file():
            return data

        try:
            text = readme.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DetectionError(f"Could not read {README_FILENAME}: {exc}") from exc

        match = _SETEXT_TITLE.search(text) or _ATX_TITLE.search(text)
        if match:
            data.insert(keys.NAME, match.group(1).strip())
        return data

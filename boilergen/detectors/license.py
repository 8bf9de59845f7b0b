"""License detector implementation."""

from __future__ import annotations

import re
from typing import Optional

from .. import context as keys
from ..models import Repo
from ..value import Value
from .base import DetectionError, Detector

LICENSE_FILENAME = "LICENSE"

# GPL family names are only trusted near the top of the file; the body of
# many licenses quotes them.
_HEADER_LENGTH = 1024

_HOLDER_LICENSES = ("MIT", "ISC")

_COPYRIGHT_PATTERN = re.compile(
    r"^\s*copyright\s+\(c\)\s+[0-9][0-9, -]*\s+(\S.*?)\s*$",
    re.IGNORECASE | re.MULTILINE,
)


class LicenseDetector(Detector):
    """Detects the license identifier and copyright holder from the LICENSE file."""

    name = "license"
    description = "Detects the license of the project using the LICENSE file."

    def detect(self, repo: Repo) -> Value:
        data = Value.empty_object()
        license_file = repo.path / LICENSE_FILENAME
        if not license_file.is_file():
            return data

        try:
            text = license_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DetectionError(f"Could not read {LICENSE_FILENAME}: {exc}") from exc

        license_id = self.detect_license(text)
        if license_id is not None:
            data.insert(keys.LICENSE, license_id)
        # GPL-family texts quote the FSF copyright, not the project holder
        holder = self.detect_holder(text) if license_id in _HOLDER_LICENSES else None
        if holder is not None:
            data.insert(keys.FULL_NAME, holder)
        return data

    @staticmethod
    def detect_license(text: str) -> Optional[str]:
        lowered = text.lower()
        header = lowered[:_HEADER_LENGTH]
        if "mit license" in lowered:
            return "MIT"
        if "isc license" in header:
            return "ISC"
        if "apache license" in header and "version 2.0" in header:
            return "Apache-2.0"
        if "gnu affero general public license" in header and "version 3" in lowered:
            return "GNU AGPL v3"
        if "gnu general public license" in header and "version 3" in lowered:
            return "GNU GPL v3"
        return None

    @staticmethod
    def detect_holder(text: str) -> Optional[str]:
        match = _COPYRIGHT_PATTERN.search(text)
        if match is None:
            return None
        return match.group(1)

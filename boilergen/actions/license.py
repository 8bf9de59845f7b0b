"""LICENSE generation."""

from __future__ import annotations

from .. import context as keys
from ..logging import get_logger
from .base import Action, ActionData
from .utils import get_string, write_file

LICENSE_FILENAME = "LICENSE"

logger = get_logger("actions.license")


def license_template_name(license_id: str) -> str:
    return f"licenses/{license_id}.j2"


class LicenseAction(Action):
    """Writes the LICENSE text for the detected license, refreshing year and holder."""

    name = "license"
    description = "Generates the LICENSE file, updating year or author if necessary."

    def run(self, data: ActionData) -> None:
        license_id = get_string(data.context, keys.LICENSE)
        if license_id is None or license_id == keys.PROPRIETARY_LICENSE:
            return

        template_name = license_template_name(license_id)
        if not self.renderer.has_template(template_name):
            logger.debug("No bundled text for license %s; leaving LICENSE untouched", license_id)
            return

        output = self.renderer.render(template_name, data.context)
        write_file(data.repo, LICENSE_FILENAME, output)

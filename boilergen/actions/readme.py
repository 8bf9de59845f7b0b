"""README header refresh."""

from __future__ import annotations

import re

from ..logging import get_logger
from .base import Action, ActionData, ActionError
from .utils import resolve_repo_path, write_file

README_FILENAME = "README.md"
README_HEADER_TEMPLATE = "README.header.md.j2"

logger = get_logger("actions.readme")

# Title (setext or ATX), blank lines and badge lines at the top of the file.
_HEADER_PATTERN = re.compile(r"(?:^.+\n=+\n|^# .+\n|^\s*\n|^\[!.+\)\n)*", re.MULTILINE)


def strip_header(readme: str) -> str:
    """Return ``readme`` without its leading title, blank lines and badges."""
    if readme and not readme.endswith("\n"):
        readme += "\n"
    match = _HEADER_PATTERN.match(readme)
    if match is None:
        return readme
    return readme[match.end():]


class ReadmeAction(Action):
    """Regenerates the README title and badges while keeping the body."""

    name = "readme"
    description = "Updates the README.md file header with badges."

    def run(self, data: ActionData) -> None:
        readme_path = resolve_repo_path(data.repo, README_FILENAME)
        if readme_path.is_file():
            try:
                readme = readme_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ActionError(f"Could not read {README_FILENAME}: {exc}") from exc
        else:
            logger.warning("%s does not exist; generating a new one", README_FILENAME)
            readme = ""

        header = self.renderer.render(README_HEADER_TEMPLATE, data.context).rstrip("\n")
        body = strip_header(readme)
        content = f"{header}\n\n{body}".strip() + "\n"
        write_file(data.repo, README_FILENAME, content)

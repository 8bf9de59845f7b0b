"""File writing and context lookup helpers shared by actions."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import List, Optional

from .. import context as keys
from ..logging import get_logger
from ..models import Repo
from ..renderer import TemplateRenderer
from ..value import Value
from .base import ActionData, ActionError

logger = get_logger("actions")


def resolve_repo_path(repo: Repo, relative_path: str) -> Path:
    """Join ``relative_path`` onto the repository root, refusing escapes."""
    candidate = PurePosixPath(relative_path)
    if not relative_path or candidate.is_absolute() or ".." in candidate.parts:
        raise ActionError(f"Refusing to write outside the repository: {relative_path!r}")
    root = repo.path.resolve()
    full_path = (root / Path(*candidate.parts)).resolve()
    if full_path != root and root not in full_path.parents:
        raise ActionError(f"Refusing to write outside the repository: {relative_path!r}")
    return full_path


def write_file(repo: Repo, relative_path: str, content: str) -> bool:
    """Write ``content`` to ``relative_path``; return ``False`` when it was already current."""
    full_path = resolve_repo_path(repo, relative_path)
    try:
        full_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ActionError(f"Could not create directory {full_path.parent}: {exc}") from exc

    if full_path.is_file():
        try:
            if full_path.read_text(encoding="utf-8") == content:
                logger.debug("File %s unchanged", full_path)
                return False
        except UnicodeDecodeError:
            pass
        except OSError as exc:
            raise ActionError(f"Could not read {full_path}: {exc}") from exc

    logger.debug("Writing %d bytes to %s", len(content), full_path)
    try:
        # newline="" keeps LF endings on every platform
        with full_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise ActionError(f"Could not write file {full_path}: {exc}") from exc
    return True


def render_template(data: ActionData, renderer: TemplateRenderer, file_name: str) -> bool:
    """Render ``<file_name>.j2`` with the action context and write it to ``file_name``."""
    output = renderer.render(f"{file_name}.j2", data.context)
    return write_file(data.repo, file_name, output)


def get_string(context: Value, key: str) -> Optional[str]:
    """Return the string under ``key``; a value of another type is an error."""
    value = context.get(key)
    if value is None or value.is_null():
        return None
    text = value.as_str()
    if text is None:
        raise ActionError(f"Context key {key!r} must be a string, got {value!r}")
    return text


def get_string_list(context: Value, key: str) -> List[str]:
    """Return the strings under ``key``; a missing key is the empty list."""
    value = context.get(key)
    if value is None or value.is_null():
        return []
    items = value.as_list()
    if items is None:
        raise ActionError(f"Context key {key!r} must be an array, got {value!r}")
    strings: List[str] = []
    for item in items:
        text = item.as_str()
        if text is None:
            raise ActionError(f"Context key {key!r} must only hold strings, got {item!r}")
        strings.append(text)
    return strings


def has_lang(data: ActionData, lang: str) -> bool:
    return lang in get_string_list(data.context, keys.LANGS)


__all__ = [
    "get_string",
    "get_string_list",
    "has_lang",
    "render_template",
    "resolve_repo_path",
    "write_file",
]

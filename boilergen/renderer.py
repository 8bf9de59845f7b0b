"""Jinja2 rendering of the bundled boilerplate templates."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Any, Iterable, List

from jinja2 import Environment, FileSystemLoader, TemplateError

from .context import CONTEXT_ROOT
from .value import Value

TEMPLATES_DIR = Path(__file__).with_name("templates")

_YAML_QUOTE_TRIGGERS = (".", '"', ",")


class RenderError(RuntimeError):
    """Raised when a template is missing or fails to render."""


def to_yaml_array(items: Iterable[Any]) -> str:
    """Render a list of strings as a YAML flow sequence, quoting where needed."""
    if isinstance(items, str) or not isinstance(items, (list, tuple)):
        raise TemplateError("to_yaml_array expects a list of strings")
    rendered: List[str] = []
    for item in items:
        if not isinstance(item, str):
            raise TemplateError(f"to_yaml_array item is not a string: {item!r}")
        if not item or any(trigger in item for trigger in _YAML_QUOTE_TRIGGERS):
            escaped = item.replace('"', '\\"')
            rendered.append(f'"{escaped}"')
        else:
            rendered.append(item)
    return "[" + ", ".join(rendered) + "]"


def path_parent(path: Any) -> str:
    """Return the parent directory of a repository-relative POSIX path."""
    if not isinstance(path, str):
        raise TemplateError(f"path_parent expects a string, got {type(path).__name__}")
    return posixpath.dirname(path)


class TemplateRenderer:
    """Renders templates with the context exposed under the ``boilergen`` root."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = []
        if templates_dir is not None:
            directories.append(str(templates_dir))
        directories.append(str(TEMPLATES_DIR))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["to_yaml_array"] = to_yaml_array
        self._env.filters["path_parent"] = path_parent

    def has_template(self, template_name: str) -> bool:
        return template_name in self._env.list_templates()

    def render(self, template_name: str, context: Value) -> str:
        try:
            template = self._env.get_template(template_name)
            return template.render({CONTEXT_ROOT: context.to_python()})
        except TemplateError as exc:
            raise RenderError(f"Could not render template {template_name!r}: {exc}") from exc


__all__ = ["RenderError", "TEMPLATES_DIR", "TemplateRenderer", "path_parent", "to_yaml_array"]

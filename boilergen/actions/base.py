"""Base classes for action plugins."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass

from ..models import Capability, Repo
from ..renderer import TemplateRenderer
from ..value import Value


class ActionError(RuntimeError):
    """Raised by an action when it cannot safely produce its output."""


@dataclass(frozen=True)
class ActionData:
    """Input handed to every action: the repository and the final context."""

    repo: Repo
    context: Value


class Action(Capability):
    """Contract for actions that write boilerplate files from the final context."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    @abstractmethod
    def run(self, data: ActionData) -> None:
        """Write the action's files, or do nothing when its precondition is false."""

"""Base classes for detector plugins."""

from abc import abstractmethod

from ..models import Capability, Repo
from ..value import Value


class DetectionError(RuntimeError):
    """Raised by a detector when a file it owns cannot be read or understood."""


class Detector(Capability):
    """Contract for detectors that turn repository contents into a context fragment."""

    @abstractmethod
    def detect(self, repo: Repo) -> Value:
        """Return an object fragment; the empty object when nothing relevant is found."""

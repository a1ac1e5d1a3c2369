"""Base formatter interface for arch-insight output rendering."""

from abc import ABC, abstractmethod

from ..analysis.models import ArchitectureAnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: ArchitectureAnalysisResult) -> None:
        """Render the result to the terminal."""

    @abstractmethod
    def format(self, result: ArchitectureAnalysisResult) -> str:
        """Return formatted string representation of the result."""

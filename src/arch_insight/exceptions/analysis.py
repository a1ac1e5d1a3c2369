"""Analysis-related exceptions: unreadable declarations and input files."""

from pathlib import Path

from .base import ArchInsightError


class AnalysisError(ArchInsightError):
    """Base class for analysis-related errors."""
    pass


class DeclarationExtractionError(AnalysisError):
    """Raised when part of a declaration cannot be read.

    Caught at the per-declaration boundary: the declaration is kept with
    whatever members could be read and the run continues.
    """

    def __init__(self, declaration: str, part: str, reason: str):
        super().__init__(
            f"Cannot read {part} of declaration: {declaration}",
            details={"declaration": declaration, "part": part, "reason": reason},
        )
        self.declaration = declaration
        self.part = part
        self.reason = reason


class InputFileError(AnalysisError):
    """Raised when a declarations file cannot be read or decoded."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot load declarations from: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason

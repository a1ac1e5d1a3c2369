"""JSON formatter for arch-insight."""

import json
from dataclasses import asdict
from enum import Enum
from typing import Any

from ..analysis.models import ArchitectureAnalysisResult
from .base import BaseFormatter


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def result_to_dict(result: ArchitectureAnalysisResult) -> dict:
    """Plain-data form of a result; enums become their values."""
    return json.loads(json.dumps(asdict(result), default=_encode))


class JsonFormatter(BaseFormatter):
    """Render the analysis result as JSON."""

    def render(self, result: ArchitectureAnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: ArchitectureAnalysisResult) -> str:
        return json.dumps(asdict(result), indent=2, default=_encode)

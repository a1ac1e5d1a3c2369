"""Public API for arch-insight.

Example:
    >>> from arch_insight import analyze
    >>> from arch_insight.declarations import DeclarationRef, FieldDecl
    >>>
    >>> result = analyze([
    ...     DeclarationRef("com.shop.service.ServiceA", fields=(FieldDecl("b", "ServiceB"),)),
    ...     DeclarationRef("com.shop.service.ServiceB", fields=(FieldDecl("a", "ServiceA"),)),
    ... ])
    >>> len(result.dependency_graph.cycles)
    1
    >>>
    >>> # From a parser's JSON output, with config discovery
    >>> result = analyze_file("declarations.json", role_threshold=0.5)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .analysis.engine import AnalysisEngine, analyze
from .analysis.models import ArchitectureAnalysisResult
from .config import load_config
from .declarations.loader import load_declarations_file
from .logging_config import get_logger

logger = get_logger(__name__)

__all__ = ["analyze", "analyze_file"]


def analyze_file(
    path: Union[str, Path],
    config_file: Optional[Path] = None,
    **overrides,
) -> ArchitectureAnalysisResult:
    """Load declarations from a JSON file and analyze them.

    Configuration is discovered and merged by :func:`~arch_insight.config.load_config`.

    Args:
        path: JSON file with a list of declaration records
        config_file: Optional explicit config file
        **overrides: Config overrides (e.g. role_threshold=0.5,
            collect_diagnostics=True)

    Returns:
        ArchitectureAnalysisResult

    Raises:
        ConfigurationError: If configuration is invalid
        InputFileError: If the file cannot be read
    """
    config = load_config(config_file=config_file, **overrides)
    declarations, diagnostics = load_declarations_file(Path(path))
    logger.debug(f"Loaded {len(declarations)} declarations from {path}")
    return AnalysisEngine(config).run(declarations, upstream_diagnostics=diagnostics)

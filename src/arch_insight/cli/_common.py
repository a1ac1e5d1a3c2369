"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    threshold: Optional[float] = None,
    raw_scores: bool = False,
    diagnostics: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if threshold is not None:
        overrides["role_threshold"] = threshold
    if raw_scores:
        overrides["include_raw_scores"] = True
    if diagnostics:
        overrides["collect_diagnostics"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)

"""Output formatters for arch-insight."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter, result_to_dict
from .rich_formatter import RichFormatter


def get_formatter(name: str, verbose: bool = False) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json"
        verbose: Include suggestions, packages and diagnostics (rich only)

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    if name == "rich":
        return RichFormatter(verbose=verbose)
    if name == "json":
        return JsonFormatter()
    raise ValueError(f"Unknown formatter: {name!r}. Choose from: json, rich")


__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "RichFormatter",
    "get_formatter",
    "result_to_dict",
]

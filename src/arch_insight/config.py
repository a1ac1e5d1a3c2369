"""Configuration loading and management for arch-insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.arch-insight.toml)
    3. Project config (./arch-insight.toml)
    4. Explicit config file
    5. Environment variables (ARCH_INSIGHT_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(verbose=True, role_threshold=0.5)
    >>> config.verbosity
    'verbose'
    >>> config.thresholds.role_threshold
    0.5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "ARCH_INSIGHT_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Scoring thresholds and classifier tuning parameters.

    Attributes:
        DDD roles:
            role_threshold: A role is reported when its confidence is
                strictly greater than this value
            aggregate_root_threshold: Minimum entity confidence (exclusive)
                for an entity to be considered as an aggregate root
            aggregate_confidence_factor: Aggregate confidence is the root
                entity's confidence times this factor

        Cycles:
            cycle_low_max_length: Cycles up to this length are LOW
            cycle_medium_max_length: Cycles up to this length are MEDIUM,
                longer ones are HIGH

        Architecture patterns:
            onion_inward_ratio: Share of cross-layer edges that must point
                from an outer layer inward for ONION
            hexagonal_max_domain_dependencies: Maximum number of distinct
                layers the domain layer may depend on for HEXAGONAL
            layered_min_layers: Minimum distinct layers for LAYERED
    """

    # === DDD roles ===
    role_threshold: float = 0.3
    aggregate_root_threshold: float = 0.7
    aggregate_confidence_factor: float = 0.8

    # === Cycles ===
    cycle_low_max_length: int = 3
    cycle_medium_max_length: int = 6

    # === Architecture patterns ===
    onion_inward_ratio: float = 0.7
    hexagonal_max_domain_dependencies: int = 2
    layered_min_layers: int = 3

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        unit_fields = [
            "role_threshold",
            "aggregate_root_threshold",
            "aggregate_confidence_factor",
            "onion_inward_ratio",
        ]
        for field_name in unit_fields:
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(field_name, value, "must be between 0.0 and 1.0")

        if self.cycle_low_max_length < 2:
            raise InvalidConfigError(
                "cycle_low_max_length", self.cycle_low_max_length, "must be at least 2"
            )
        if self.cycle_medium_max_length < self.cycle_low_max_length:
            raise InvalidConfigError(
                "cycle_medium_max_length",
                self.cycle_medium_max_length,
                "must not be below cycle_low_max_length",
            )
        if self.hexagonal_max_domain_dependencies < 0:
            raise InvalidConfigError(
                "hexagonal_max_domain_dependencies",
                self.hexagonal_max_domain_dependencies,
                "must be non-negative",
            )
        if self.layered_min_layers < 1:
            raise InvalidConfigError(
                "layered_min_layers", self.layered_min_layers, "must be at least 1"
            )


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        detect_dependency_inversion: Flag application -> data edges that
            target concrete classes
        include_raw_scores: Attach per-declaration role scores to the result
        collect_diagnostics: Attach extraction/ambiguity diagnostics to the
            result
        verbosity: Logging verbosity used by the CLI
        thresholds: Nested scoring thresholds
    """

    detect_dependency_inversion: bool = True
    include_raw_scores: bool = False
    collect_diagnostics: bool = False
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )


_THRESHOLD_FIELDS = frozenset(f.name for f in fields(ThresholdConfig))


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Threshold fields may be given either inside a ``[thresholds]`` TOML
    table or flat (as keyword overrides or environment variables); flat
    values win over the table.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".arch-insight.toml"
    if global_config.exists():
        _merge_file(merged, global_config, "global config")

    project_config = Path.cwd() / "arch-insight.toml"
    if project_config.exists():
        _merge_file(merged, project_config, "project config")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge_file(merged, config_file, "config file")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds_dict = merged.pop("thresholds", None)
    threshold_values: dict[str, Any] = {}
    if isinstance(thresholds_dict, dict):
        threshold_values.update(thresholds_dict)
    elif isinstance(thresholds_dict, ThresholdConfig):
        threshold_values.update(
            {name: getattr(thresholds_dict, name) for name in _THRESHOLD_FIELDS}
        )
    for name in list(merged):
        if name in _THRESHOLD_FIELDS:
            threshold_values[name] = merged.pop(name)

    try:
        merged["thresholds"] = ThresholdConfig(**threshold_values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_file(merged: dict[str, Any], path: Path, label: str) -> None:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")

    # Nested tables merge key by key so a project file can tune one threshold
    for key, value in data.items():
        if key == "thresholds" and isinstance(value, dict):
            merged.setdefault("thresholds", {}).update(value)
        else:
            merged[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ARCH_INSIGHT_* environment variables.

    Every field of AnalysisConfig and ThresholdConfig (except the nested
    ``thresholds`` field itself) can be set, for example
    ARCH_INSIGHT_ROLE_THRESHOLD=0.5 or ARCH_INSIGHT_COLLECT_DIAGNOSTICS=true.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = {
        **get_type_hints(ThresholdConfig),
        **get_type_hints(AnalysisConfig),
    }
    type_hints.pop("thresholds", None)

    result: dict[str, Any] = {}

    for field_name, type_hint in type_hints.items():
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # tomli is the same parser, packaged for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)

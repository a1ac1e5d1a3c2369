"""Tests for configuration loading and validation."""

import os

import pytest

from arch_insight.config import AnalysisConfig, ThresholdConfig, load_config
from arch_insight.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No global or project config files, no ARCH_INSIGHT_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for key in list(os.environ):
        if key.startswith("ARCH_INSIGHT_"):
            monkeypatch.delenv(key)
    return project


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config == AnalysisConfig()
        assert config.thresholds.role_threshold == 0.3
        assert config.thresholds.cycle_low_max_length == 3
        assert config.thresholds.cycle_medium_max_length == 6
        assert config.detect_dependency_inversion
        assert not config.include_raw_scores
        assert config.verbosity == "normal"


class TestValidation:
    """Test __post_init__ validation."""

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("role_threshold", 1.5),
            ("role_threshold", -0.1),
            ("onion_inward_ratio", 2.0),
            ("cycle_low_max_length", 1),
            ("layered_min_layers", 0),
            ("hexagonal_max_domain_dependencies", -1),
        ],
    )
    def test_invalid_thresholds(self, field_name, value):
        with pytest.raises(InvalidConfigError) as exc_info:
            ThresholdConfig(**{field_name: value})
        assert exc_info.value.key == field_name

    def test_medium_below_low(self):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(cycle_low_max_length=4, cycle_medium_max_length=3)

    def test_invalid_verbosity(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(verbosity="loud")


class TestOverrides:
    """Test keyword overrides."""

    def test_flat_threshold_override(self):
        config = load_config(role_threshold=0.5)
        assert config.thresholds.role_threshold == 0.5
        assert config.thresholds.aggregate_root_threshold == 0.7

    def test_verbose_and_quiet(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_none_values_are_ignored(self):
        assert load_config(role_threshold=None).thresholds.role_threshold == 0.3

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            load_config(no_such_option=True)


class TestFiles:
    """Test TOML discovery and merging."""

    def test_project_config(self, isolated):
        (isolated / "arch-insight.toml").write_text(
            "include_raw_scores = true\n\n[thresholds]\nrole_threshold = 0.4\n"
        )
        config = load_config()
        assert config.include_raw_scores
        assert config.thresholds.role_threshold == 0.4

    def test_explicit_file_merges_threshold_table(self, isolated, tmp_path):
        (isolated / "arch-insight.toml").write_text("[thresholds]\nrole_threshold = 0.4\n")
        explicit = tmp_path / "custom.toml"
        explicit.write_text("[thresholds]\nlayered_min_layers = 2\n")
        config = load_config(config_file=explicit)
        assert config.thresholds.role_threshold == 0.4
        assert config.thresholds.layered_min_layers == 2

    def test_flat_override_beats_file(self, isolated):
        (isolated / "arch-insight.toml").write_text("[thresholds]\nrole_threshold = 0.4\n")
        assert load_config(role_threshold=0.6).thresholds.role_threshold == 0.6

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, isolated):
        (isolated / "arch-insight.toml").write_text("this is = = not toml")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_unknown_threshold_in_file(self, isolated):
        (isolated / "arch-insight.toml").write_text("[thresholds]\nbogus = 1\n")
        with pytest.raises(ConfigurationError):
            load_config()


class TestEnvironment:
    """Test ARCH_INSIGHT_* variables."""

    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("ARCH_INSIGHT_ROLE_THRESHOLD", "0.45")
        monkeypatch.setenv("ARCH_INSIGHT_COLLECT_DIAGNOSTICS", "yes")
        monkeypatch.setenv("ARCH_INSIGHT_CYCLE_MEDIUM_MAX_LENGTH", "8")
        config = load_config()
        assert config.thresholds.role_threshold == 0.45
        assert config.thresholds.cycle_medium_max_length == 8
        assert config.collect_diagnostics

    def test_env_beats_file_and_override_beats_env(self, isolated, monkeypatch):
        (isolated / "arch-insight.toml").write_text("[thresholds]\nrole_threshold = 0.4\n")
        monkeypatch.setenv("ARCH_INSIGHT_ROLE_THRESHOLD", "0.5")
        assert load_config().thresholds.role_threshold == 0.5
        assert load_config(role_threshold=0.6).thresholds.role_threshold == 0.6

    def test_bad_bool(self, monkeypatch):
        monkeypatch.setenv("ARCH_INSIGHT_INCLUDE_RAW_SCORES", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_bad_number(self, monkeypatch):
        monkeypatch.setenv("ARCH_INSIGHT_LAYERED_MIN_LAYERS", "three")
        with pytest.raises(InvalidConfigError):
            load_config()

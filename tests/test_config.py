"""
Tests for zemguidance configuration.
"""

import math
import pytest
import yaml

from zemguidance.core.config import GuidanceConfig, ConfigurationError, load_config
from zemguidance.core.types import GuidanceGains


class TestGuidanceConfig:
    """Tests for GuidanceConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = GuidanceConfig()

        assert config.zem_gain == 6.0
        assert config.zev_gain == -2.0
        assert config.time_to_go is None
        assert config.log_level == "INFO"
        assert config.environment == "development"
        assert config.gains == GuidanceGains()

    def test_custom_config(self):
        """Test custom configuration values."""
        config = GuidanceConfig(zem_gain=4, zev_gain=-1.0, time_to_go=10, log_level="debug")

        assert config.zem_gain == 4.0
        assert isinstance(config.zem_gain, float)
        assert config.time_to_go == 10.0
        assert config.log_level == "DEBUG"
        assert config.gains == GuidanceGains(4.0, -1.0)

    def test_environment_defaults(self, monkeypatch):
        """Test environment-backed defaults."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("ENVIRONMENT", "production")

        config = GuidanceConfig()

        assert config.log_level == "WARNING"
        assert config.environment == "production"

    @pytest.mark.parametrize("kwargs", [
        {"zem_gain": math.nan},
        {"zev_gain": math.inf},
        {"time_to_go": 0.0},
        {"time_to_go": -1.0},
        {"log_level": "LOUD"},
    ])
    def test_invalid_config(self, kwargs):
        """Test invalid values are rejected."""
        with pytest.raises(ConfigurationError):
            GuidanceConfig(**kwargs)

    @pytest.mark.parametrize("kwargs", [
        {"zem_gain": "six"},
        {"zev_gain": None},
        {"time_to_go": [1.0, 2.0]},
    ])
    def test_non_numeric_config(self, kwargs):
        """Test values that cannot be converted to numbers are rejected."""
        with pytest.raises(ConfigurationError):
            GuidanceConfig(**kwargs)

    def test_configuration_error_is_value_error(self):
        """Test ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            GuidanceConfig(time_to_go=0.0)

    def test_non_optimal_gains_warn(self, caplog):
        """Test non-optimal gains are logged."""
        with caplog.at_level("WARNING", logger="zemguidance.core.config"):
            GuidanceConfig(zem_gain=3.0)

        assert "Non-optimal guidance gains" in caplog.text


class TestConfigFiles:
    """Tests for YAML configuration files."""

    def test_from_file(self, tmp_path):
        """Test loading a flat configuration file."""
        path = tmp_path / "zemguidance.yaml"
        path.write_text(yaml.safe_dump({"zem_gain": 5.0, "zev_gain": -1.5, "time_to_go": 8.0}))

        config = GuidanceConfig.from_file(path)

        assert config.gains == GuidanceGains(5.0, -1.5)
        assert config.time_to_go == 8.0

    def test_from_file_nested_gains(self, tmp_path):
        """Test gains may be nested under a gains key."""
        path = tmp_path / "zemguidance.yaml"
        path.write_text("gains:\n  zem_gain: 4.0\n  zev_gain: -3.0\nlog_level: debug\n")

        config = GuidanceConfig.from_file(path)

        assert config.gains == GuidanceGains(4.0, -3.0)
        assert config.log_level == "DEBUG"

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        """Test unknown keys are ignored with a warning."""
        path = tmp_path / "zemguidance.yaml"
        path.write_text("zem_gain: 6.0\nnavigation_constant: 3.0\n")

        with caplog.at_level("WARNING", logger="zemguidance.core.config"):
            config = GuidanceConfig.from_file(path)

        assert config.zem_gain == 6.0
        assert "navigation_constant" in caplog.text

    def test_missing_file(self, tmp_path):
        """Test missing file falls back to defaults."""
        config = GuidanceConfig.from_file(tmp_path / "missing.yaml")

        assert config.gains == GuidanceGains()

    def test_empty_file(self, tmp_path):
        """Test empty file falls back to defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert GuidanceConfig.from_file(path).gains == GuidanceGains()

    def test_malformed_file(self, tmp_path):
        """Test malformed YAML falls back to defaults."""
        path = tmp_path / "bad.yaml"
        path.write_text("zem_gain: [1, 2\n")

        assert GuidanceConfig.from_file(path).gains == GuidanceGains()

    def test_non_mapping_file(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationError):
            GuidanceConfig.from_file(path)

    def test_invalid_values_in_file(self, tmp_path):
        """Test invalid values in a file raise."""
        path = tmp_path / "invalid.yaml"
        path.write_text("time_to_go: 0\n")

        with pytest.raises(ConfigurationError):
            GuidanceConfig.from_file(path)

    def test_non_numeric_value_in_file(self, tmp_path):
        """Test a non-numeric gain raises ConfigurationError."""
        path = tmp_path / "invalid.yaml"
        path.write_text("zem_gain: six\n")

        with pytest.raises(ConfigurationError, match="six"):
            GuidanceConfig.from_file(path)

    @pytest.mark.parametrize("gains", ["[6.0, -2.0]", "5.0", "fast"])
    def test_non_mapping_gains(self, tmp_path, gains):
        """Test a gains entry that is not a mapping is rejected."""
        path = tmp_path / "invalid.yaml"
        path.write_text(f"gains: {gains}\n")

        with pytest.raises(ConfigurationError, match="gains"):
            GuidanceConfig.from_file(path)

    def test_save_and_load(self, tmp_path):
        """Test saving configuration and loading it back."""
        config = GuidanceConfig(zem_gain=5.5, zev_gain=-2.5, time_to_go=3.0)
        path = tmp_path / "nested" / "config.yaml"

        config.to_file(path)
        loaded = GuidanceConfig.from_file(path)

        assert loaded.to_dict() == config.to_dict()


class TestEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_update_from_env(self, monkeypatch):
        """Test gains and time-to-go read from the environment."""
        monkeypatch.setenv("ZEMGUIDANCE_ZEM_GAIN", "5.0")
        monkeypatch.setenv("ZEMGUIDANCE_ZEV_GAIN", "-1.0")
        monkeypatch.setenv("ZEMGUIDANCE_TIME_TO_GO", "12.5")
        monkeypatch.setenv("ZEMGUIDANCE_LOG_LEVEL", "debug")

        config = GuidanceConfig()
        config.update_from_env()

        assert config.gains == GuidanceGains(5.0, -1.0)
        assert config.time_to_go == 12.5
        assert config.log_level == "DEBUG"

    def test_unparseable_value_ignored(self, monkeypatch):
        """Test values that fail conversion are skipped."""
        monkeypatch.setenv("ZEMGUIDANCE_ZEM_GAIN", "six")

        config = GuidanceConfig()
        config.update_from_env()

        assert config.zem_gain == 6.0

    def test_invalid_value_reverted(self, monkeypatch):
        """Test values that fail validation are skipped."""
        monkeypatch.setenv("ZEMGUIDANCE_TIME_TO_GO", "0")
        monkeypatch.setenv("ZEMGUIDANCE_ZEV_GAIN", "-3.0")

        config = GuidanceConfig()
        config.update_from_env()

        assert config.time_to_go is None
        assert config.zev_gain == -3.0


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_path(self, tmp_path, monkeypatch):
        """Test explicit path then environment overrides."""
        path = tmp_path / "custom.yaml"
        path.write_text("zem_gain: 4.0\n")
        monkeypatch.setenv("ZEMGUIDANCE_ZEV_GAIN", "-1.0")

        config = load_config(path)

        assert config.gains == GuidanceGains(4.0, -1.0)

    def test_standard_location(self, tmp_path, monkeypatch):
        """Test a config file in the working directory is found."""
        (tmp_path / "zemguidance.yaml").write_text("time_to_go: 9.0\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().time_to_go == 9.0

    def test_defaults(self, tmp_path, monkeypatch):
        """Test defaults when no file exists."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))

        config = load_config()

        assert config.gains == GuidanceGains()
        assert config.time_to_go is None

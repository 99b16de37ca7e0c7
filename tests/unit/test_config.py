"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from tradeguard_app.config.defaults import DefaultConfig, get_default_config
from tradeguard_app.config.loader import ConfigLoader
from tradeguard_app.config.validation import ConfigValidator
from tradeguard_app.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration carries the documented limits."""
        config = get_default_config()
        assert config.sizing.min_lot_size == 0.01
        assert config.sizing.max_lot_size == 100.0
        assert config.sizing.max_risk_percent == 10.0
        assert config.exposure.max_currency_exposure == 2.0
        assert config.prop_firm.limit_warning_ratio == 0.8
        assert config.validation.min_reward_risk == 1.0

    def test_default_config_is_frozen(self) -> None:
        """Test that configuration sections cannot be mutated."""
        config = get_default_config()
        with pytest.raises(AttributeError):
            config.sizing.max_lot_size = 5.0  # type: ignore[misc]


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader defaults to the repository config directory."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_merge_config_defaults_only(self, config_dir: Path) -> None:
        """Test config merging for an account without overrides."""
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config("unknown-account")

        assert config["exposure"]["max_currency_exposure"] == 2.0
        assert config["validation"]["high_risk_percent"] == 2.0

    def test_merge_config_account_overrides(self, config_dir: Path) -> None:
        """Test that accounts.yaml overrides win over defaults."""
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config("tight-account")

        assert config["exposure"]["max_currency_exposure"] == 1.0
        assert config["validation"]["high_risk_percent"] == 0.5
        # Other defaults should remain
        assert config["exposure"]["warning_ratio"] == 0.7

    def test_merge_config_call_overrides_win(self, config_dir: Path) -> None:
        """Test that per-call overrides win over account overrides."""
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config(
            "tight-account",
            {"exposure": {"max_currency_exposure": 2.5}}
        )

        assert config["exposure"]["max_currency_exposure"] == 2.5
        assert config["validation"]["high_risk_percent"] == 0.5

    def test_missing_accounts_file(self, tmp_path: Path) -> None:
        """Test that a config directory without accounts.yaml yields defaults."""
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_account_config("anything") == {}

    def test_build_config(self, config_dir: Path) -> None:
        """Test materializing a merged config into dataclasses."""
        loader = ConfigLoader.create(config_dir)
        config = loader.build_config("tight-account")

        assert isinstance(config, DefaultConfig)
        assert config.exposure.max_currency_exposure == 1.0
        assert config.sizing.max_lot_size == 100.0

    def test_build_config_ignores_unknown_keys(self, config_dir: Path) -> None:
        """Test that unknown keys in a section are dropped."""
        loader = ConfigLoader.create(config_dir)
        config = loader.build_config("unknown-account", {"sizing": {"leverage": 30}})

        assert not hasattr(config.sizing, "leverage")

    def test_build_config_rejects_invalid_values(self, config_dir: Path) -> None:
        """Test that invalid merged values raise ConfigurationError."""
        loader = ConfigLoader.create(config_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config("broken-account")

        assert exc_info.value.errors[0].field == "warning_ratio"
        assert exc_info.value.source == str(config_dir)

    def test_repository_accounts_are_valid(self) -> None:
        """Test that the shipped accounts.yaml passes validation."""
        loader = ConfigLoader.create()
        config = loader.build_config("ftmo-challenge-100k")
        assert config.exposure.max_currency_exposure == 1.5


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_sizing_params(self) -> None:
        """Test validation of valid sizing parameters."""
        params = {
            "min_lot_size": 0.01,
            "max_lot_size": 50.0,
            "max_risk_percent": 5.0,
            "default_pip_digits": 5,
        }

        errors = ConfigValidator.validate_sizing_params(params)
        assert len(errors) == 0

    def test_invalid_max_risk_percent(self) -> None:
        """Test that a risk cap above 10% is rejected."""
        errors = ConfigValidator.validate_sizing_params({"max_risk_percent": 15.0})

        assert len(errors) == 1
        assert errors[0].field == "max_risk_percent"

    def test_min_lot_above_max_lot(self) -> None:
        """Test that min_lot_size must be smaller than max_lot_size."""
        errors = ConfigValidator.validate_sizing_params({"min_lot_size": 5.0, "max_lot_size": 1.0})

        assert [e.field for e in errors] == ["min_lot_size"]
        assert errors[0].message == "Must be smaller than max_lot_size"

    def test_invalid_pip_digits_type(self) -> None:
        """Test that pip digits must be an integer."""
        errors = ConfigValidator.validate_sizing_params({"default_pip_digits": 4.5})

        assert len(errors) == 1
        assert errors[0].message == "Must be a positive integer"

    def test_invalid_warning_ratio(self) -> None:
        """Test that ratios must lie in (0, 1]."""
        errors = ConfigValidator.validate_exposure_params({"warning_ratio": 0.0})

        assert len(errors) == 1
        assert errors[0].field == "warning_ratio"

    def test_boolean_is_not_a_number(self) -> None:
        """Test that booleans are not accepted as numbers."""
        errors = ConfigValidator.validate_validation_params({"min_reward_risk": True})

        assert len(errors) == 1
        assert errors[0].field == "min_reward_risk"

    def test_validate_config_collects_all_sections(self) -> None:
        """Test that errors from every section are reported together."""
        config = {
            "sizing": {"max_lot_size": -1},
            "exposure": {"max_positions_per_currency": 0},
            "prop_firm": {"safety_buffer": 2.0},
            "validation": {"wide_stop_pips": "wide"},
        }

        errors = ConfigValidator.validate_config(config)
        fields = {e.field for e in errors}

        assert fields == {"max_lot_size", "max_positions_per_currency", "safety_buffer", "wide_stop_pips"}

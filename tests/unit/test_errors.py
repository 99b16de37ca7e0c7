"""Unit tests for the error classification hierarchy."""

import pytest

from tradeguard_app.errors import (
    ConfigurationError,
    InputQualityError,
    MissingInputError,
    NonFiniteInputError,
    SymbolSpecLookupError,
    SystemFailureError,
    UnknownPresetError,
)
from tradeguard_app.propfirm import get_preset


class TestErrorClassification:
    """Test error classification system."""

    def test_input_quality_error_hierarchy(self):
        """Test that input quality errors are recoverable."""
        base_error = InputQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        non_finite = NonFiniteInputError("nan", field="entry_price", value=float("nan"))
        assert isinstance(non_finite, InputQualityError)
        assert non_finite.field == "entry_price"

        missing = MissingInputError("missing", field="account_id")
        assert isinstance(missing, InputQualityError)
        assert missing.field == "account_id"

    def test_system_failure_hierarchy(self):
        """Test that system failures are not recoverable by default."""
        config_error = ConfigurationError("bad", errors=["x"], source="/tmp")
        assert isinstance(config_error, SystemFailureError)
        assert config_error.recoverable is False
        assert config_error.errors == ["x"]

        preset_error = UnknownPresetError("nope", provider="ACME", phase="Phase 1")
        assert isinstance(preset_error, KeyError)
        assert str(preset_error) == "nope"

    def test_spec_lookup_error_is_recoverable(self):
        """Test that spec lookup failures allow a fallback."""
        error = SymbolSpecLookupError("timeout", symbol="EURUSD", account_id="acc-1")
        assert error.recoverable is True
        assert error.symbol == "EURUSD"

    def test_context_is_preserved(self):
        """Test that error context is kept."""
        error = ConfigurationError("bad", context={"account_id": "acc-1"})
        assert error.context == {"account_id": "acc-1"}

    def test_unknown_preset_caught_as_key_error(self):
        """Test that callers catching KeyError also catch unknown presets."""
        with pytest.raises(KeyError):
            get_preset("ACME Funding", "Phase 1")

"""Tests for prop-firm presets, trade validation and challenge health."""

from dataclasses import replace

import pytest

from tradeguard_app.errors import UnknownPresetError
from tradeguard_app.models import HealthStatus, PropFirmRules
from tradeguard_app.propfirm import (
    PROP_FIRM_PRESETS,
    assess_challenge_health,
    calculate_limits,
    calculate_remaining_trades,
    get_preset,
    list_presets,
    presets_for_provider,
    suggest_max_risk,
    validate_prop_firm_trade,
)


def ftmo(**counters) -> PropFirmRules:
    return PropFirmRules.from_preset("FTMO", "Phase 1", start_balance=10000.0, **counters)


class TestPresets:
    """Test suite for the preset table."""

    def test_ftmo_phases(self):
        """Test FTMO limits per phase."""
        assert get_preset("FTMO", "Phase 1").profit_target_percent == 10.0
        assert get_preset("FTMO", "Phase 2").profit_target_percent == 5.0
        assert get_preset("FTMO", "Funded").profit_target_percent == 0.0
        assert get_preset("FTMO", "Phase 1").max_daily_loss_percent == 5.0

    def test_lookup_is_case_insensitive(self):
        """Test keys and display names resolve regardless of case."""
        assert get_preset("ftmo", "phase 1") == get_preset("FTMO", "Phase 1")
        assert get_preset("The 5%ers", "funded").max_total_loss_percent == 6.0
        assert get_preset("MyForexFunds", "PHASE 2").max_daily_loss_percent == 4.0

    def test_unknown_provider(self):
        """Test an unknown provider raises."""
        with pytest.raises(UnknownPresetError) as exc_info:
            get_preset("ACME Funding", "Phase 1")
        assert exc_info.value.provider == "ACME Funding"

    def test_unknown_phase(self):
        """Test a phase the provider does not offer raises."""
        with pytest.raises(UnknownPresetError) as exc_info:
            get_preset("FIVEPERCENTERS", "Phase 2")
        assert str(exc_info.value) == "Unknown phase 'Phase 2' for provider FIVEPERCENTERS"

    def test_listing(self):
        """Test preset listings."""
        assert len(list_presets()) == 11
        assert [p.phase for p in presets_for_provider("FUNDEDNEXT")] == ["Phase 1", "Phase 2", "Funded"]
        assert presets_for_provider("unknown") == []

    def test_presets_are_read_only(self):
        """Test the preset table cannot be modified."""
        with pytest.raises(TypeError):
            PROP_FIRM_PRESETS["FTMO"]["Phase 1"] = None  # type: ignore[index]


class TestValidatePropFirmTrade:
    """Test suite for per-trade challenge checks."""

    def test_daily_limit_exceeded(self):
        """Test 4.8% used plus 1% risk breaks a 5% daily limit."""
        result = validate_prop_firm_trade(ftmo(current_daily_loss=480.0), 1.0)

        assert not result.is_valid
        assert result.violations == ("Daily loss would exceed limit: 5.8% > 5%",)
        assert result.limits.daily_loss_used == pytest.approx(4.8)
        assert result.limits.daily_loss_remaining == pytest.approx(0.2)

    def test_loss_sign_is_ignored(self):
        """Test negative loss counters count the same as positive ones."""
        result = validate_prop_firm_trade(ftmo(current_daily_loss=-480.0), 1.0)
        assert result.violations == ("Daily loss would exceed limit: 5.8% > 5%",)

    def test_total_limit_exceeded(self):
        """Test the total drawdown limit."""
        result = validate_prop_firm_trade(ftmo(current_total_drawdown=950.0), 1.0)

        assert result.violations == ("Total drawdown would exceed limit: 10.5% > 10%",)

    def test_exactly_at_limit_is_allowed(self):
        """Test used + risk equal to the limit is not a violation."""
        result = validate_prop_firm_trade(ftmo(current_daily_loss=400.0), 1.0)

        assert result.is_valid
        assert "Daily loss approaching limit: 5% of 5%" in result.warnings

    def test_daily_warning_above_eighty_percent(self):
        """Test the approaching-limit warning."""
        result = validate_prop_firm_trade(ftmo(current_daily_loss=350.0, trading_days_completed=4), 1.0)

        assert result.is_valid
        assert result.warnings == ("Daily loss approaching limit: 4.5% of 5%",)

    def test_violation_iff_limit_crossed(self):
        """Test the violation condition across a grid of usage and risk."""
        for daily_loss in (0.0, 100.0, 250.0, 399.0, 401.0, 480.0):
            for risk in (0.5, 1.0, 2.0):
                rules = ftmo(current_daily_loss=daily_loss)
                result = validate_prop_firm_trade(rules, risk)
                limits = calculate_limits(rules)

                expected = (limits.daily_loss_used + risk > 5.0
                            or limits.total_drawdown_used + risk > 10.0)
                assert result.is_valid is not expected

    def test_profit_target_reached(self):
        """Test the target reached warning."""
        result = validate_prop_firm_trade(ftmo(current_profit=1000.0, trading_days_completed=4), 0.5)

        assert result.is_valid
        assert result.warnings == ("Profit target reached! (10% of 10%) - Consider slowing down",)

    def test_close_to_profit_target(self):
        """Test the near-target warning."""
        result = validate_prop_firm_trade(ftmo(current_profit=900.0, trading_days_completed=4), 0.5)
        assert result.warnings == ("Close to profit target! Only 1.00% remaining",)

    def test_min_trading_days(self):
        """Test the remaining trading days warning."""
        result = validate_prop_firm_trade(ftmo(trading_days_completed=1), 0.5)

        assert result.warnings == ("3 more trading day(s) required to complete challenge",)
        assert result.limits.days_progress == pytest.approx(25.0)

    def test_funded_account_has_no_target_warnings(self):
        """Test funded phases without target or day requirements."""
        rules = PropFirmRules.from_preset("FTMO", "Funded", start_balance=10000.0, current_profit=2500.0)
        result = validate_prop_firm_trade(rules, 1.0)

        assert result.is_valid
        assert result.warnings == ()
        assert result.limits.days_progress == 100.0

    def test_non_positive_start_balance(self):
        """Test a zero starting balance is a violation, not a crash."""
        rules = replace(ftmo(), start_balance=0.0)
        result = validate_prop_firm_trade(rules, 1.0)

        assert not result.is_valid
        assert result.violations == ("Challenge starting balance must be positive",)

    def test_non_finite_risk(self):
        """Test a NaN risk is a violation."""
        result = validate_prop_firm_trade(ftmo(), float("nan"))
        assert not result.is_valid


class TestBudgetHelpers:
    """Test remaining trade and max risk helpers."""

    @pytest.mark.parametrize("daily_loss,avg_risk,expected", [
        (200.0, 1.0, 3),
        (200.0, 0.7, 4),
        (200.0, 0.0, 0),
        (600.0, 1.0, 0),
        (500.0, 1.0, 0),
    ])
    def test_remaining_trades(self, daily_loss, avg_risk, expected):
        """Test how many average trades fit in the daily budget."""
        assert calculate_remaining_trades(ftmo(current_daily_loss=daily_loss), avg_risk) == expected

    @pytest.mark.parametrize("counters,expected", [
        ({}, 4.0),
        ({"current_daily_loss": 200.0}, 2.0),
        ({"current_total_drawdown": 900.0}, 0.5),
        ({"current_daily_loss": 600.0}, 0.0),
    ])
    def test_suggest_max_risk(self, counters, expected):
        """Test the buffered, stepped risk suggestion."""
        assert suggest_max_risk(ftmo(**counters)) == expected


class TestChallengeHealth:
    """Test challenge health tiers."""

    def test_healthy(self):
        """Test a fresh challenge is healthy."""
        health = assess_challenge_health(ftmo())

        assert health.status is HealthStatus.HEALTHY
        assert health.message == "Challenge progressing well"
        assert health.recommendations == (
            "Stick to your trading plan",
            "Risk 1-2% per trade maximum",
            "Focus on consistency",
        )

    @pytest.mark.parametrize("counters,status,message", [
        ({"current_daily_loss": 460.0}, HealthStatus.CRITICAL,
         "STOP TRADING! You are close to failing the challenge"),
        ({"current_total_drawdown": 950.0}, HealthStatus.CRITICAL,
         "STOP TRADING! You are close to failing the challenge"),
        ({"current_daily_loss": 360.0}, HealthStatus.DANGER,
         "High risk of failing challenge - trade carefully"),
        ({"current_daily_loss": 260.0}, HealthStatus.WARNING,
         "Moderate risk level - trade cautiously"),
        ({"current_profit": 1000.0}, HealthStatus.WARNING,
         "Target reached - protect your progress"),
    ])
    def test_tiers(self, counters, status, message):
        """Test each health tier."""
        health = assess_challenge_health(ftmo(**counters))

        assert health.status is status
        assert health.message == message

    @pytest.mark.parametrize("start_balance", [0.0, -5000.0])
    def test_non_positive_start_balance_is_critical(self, start_balance):
        """Test a challenge without a positive starting balance is never healthy."""
        rules = replace(ftmo(), start_balance=start_balance)

        health = assess_challenge_health(rules)

        assert health.status is HealthStatus.CRITICAL
        assert health.message == "Challenge starting balance must be positive"
        assert health.recommendations[0] == "Do not trade until the challenge account is configured"

    def test_danger_outranks_target_reached(self):
        """Test loss usage wins over a reached target."""
        health = assess_challenge_health(ftmo(current_profit=1200.0, current_daily_loss=400.0))
        assert health.status is HealthStatus.DANGER

    def test_target_reached_recommendations(self):
        """Test the protect-gains recommendation list."""
        health = assess_challenge_health(ftmo(current_profit=1000.0))
        assert health.recommendations[0] == "Profit target reached! Slow down and protect gains"

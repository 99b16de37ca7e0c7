"""Tests for the daily discipline score."""

import pytest

from tradeguard_app.discipline import (
    DISCIPLINE_MESSAGES,
    calculate_discipline_score,
    grade_for_score,
    render_message,
)
from tradeguard_app.models import DisciplineScoreInput, Grade


class TestDisciplineScore:
    """Test suite for score calculation."""

    def test_perfect_day(self):
        """Test a flawless day scores 100 with grade S."""
        result = calculate_discipline_score(DisciplineScoreInput(
            total_trades=5,
            winning_trades=5,
            trades_within_risk=5,
            daily_drawdown=0.0,
            max_daily_drawdown=1000.0,
        ))

        assert result.total_score == 100
        assert result.grade is Grade.S
        assert result.recommendations == ()
        assert result.feedback == (
            "Perfect discipline - no violations!",
            "All trades within risk limits",
            "Drawdown well controlled",
            "Excellent win rate: 100%",
            "Good trading frequency (3-5 trades)",
            "Outstanding discipline! Keep it up!",
        )

    def test_day_without_trades(self):
        """Test a quiet day gets neutral quality and full risk marks."""
        result = calculate_discipline_score(DisciplineScoreInput())

        assert result.breakdown.risk_management_score == 30
        assert result.breakdown.drawdown_control_score == 20
        assert result.breakdown.trading_quality_score == 10
        assert result.total_score == 90
        assert result.grade is Grade.A
        assert "No trades today" in result.feedback

    def test_poor_day(self):
        """Test violations, over-risk trades and drawdown combine."""
        result = calculate_discipline_score(DisciplineScoreInput(
            critical_violations=2,
            warning_violations=1,
            total_trades=4,
            winning_trades=1,
            losing_trades=3,
            trades_within_risk=3,
            trades_over_risk=1,
            daily_drawdown=-800.0,
            max_daily_drawdown=1000.0,
        ))

        assert result.breakdown.violations_score == 5
        assert result.breakdown.risk_management_score == 23
        assert result.breakdown.drawdown_control_score == 10
        assert result.breakdown.trading_quality_score == 5
        assert result.total_score == 43
        assert result.grade is Grade.D
        assert result.feedback == (
            "2 critical violation(s) detected",
            "1 warning violation(s) detected",
            "1 trades exceeded risk - CRITICAL",
            "70%+ of daily limit used",
            "Low win rate: 25% - REVIEW NEEDED",
            "Good trading frequency (3-5 trades)",
            "Discipline CRITICAL - immediate action required",
        )
        assert result.recommendations == (
            "Avoid FOMO and respect order locks",
            "URGENT: Reduce position sizes immediately",
            "Be cautious - approaching limit",
            "URGENT: Review trading strategy",
            "STOP TRADING until discipline improves",
        )

    def test_violation_penalty_floor(self):
        """Test the violations score never goes negative."""
        result = calculate_discipline_score(DisciplineScoreInput(critical_violations=5))
        assert result.breakdown.violations_score == 0

    @pytest.mark.parametrize("drawdown,breached,score,code", [
        (-950.0, True, 0, "drawdown.breached"),
        (-900.0, False, 5, "drawdown.danger"),
        (-700.0, False, 10, "drawdown.high"),
        (500.0, False, 15, "drawdown.elevated"),
        (-499.0, False, 20, "drawdown.controlled"),
    ])
    def test_drawdown_tiers(self, drawdown, breached, score, code):
        """Test each drawdown tier and its message code."""
        result = calculate_discipline_score(DisciplineScoreInput(
            daily_drawdown=drawdown,
            max_daily_drawdown=1000.0,
            challenge_limit_breached=breached,
        ))

        assert result.breakdown.drawdown_control_score == score
        assert code in result.feedback_codes

    def test_breach_without_budget(self):
        """Test a breach scores zero even without a daily budget."""
        result = calculate_discipline_score(DisciplineScoreInput(challenge_limit_breached=True))

        assert result.breakdown.drawdown_control_score == 0
        assert "STOP TRADING - Limit exceeded" in result.recommendations

    def test_no_budget_no_breach(self):
        """Test a missing daily budget scores full drawdown marks."""
        result = calculate_discipline_score(DisciplineScoreInput(daily_drawdown=-300.0))
        assert result.breakdown.drawdown_control_score == 20

    @pytest.mark.parametrize("wins,total,score,message", [
        (3, 5, 20, "Excellent win rate: 60%"),
        (1, 2, 15, "Good win rate: 50%"),
        (2, 5, 10, "Win rate: 40% - Room for improvement"),
        (1, 5, 5, "Low win rate: 20% - REVIEW NEEDED"),
    ])
    def test_quality_tiers(self, wins, total, score, message):
        """Test trading quality by win rate."""
        result = calculate_discipline_score(DisciplineScoreInput(
            total_trades=total,
            winning_trades=wins,
            trades_within_risk=total,
        ))

        assert result.breakdown.trading_quality_score == score
        assert message in result.feedback

    def test_some_trades_over_risk(self):
        """Test the mild over-risk tier."""
        result = calculate_discipline_score(DisciplineScoreInput(
            total_trades=5,
            winning_trades=3,
            trades_within_risk=4,
            trades_over_risk=1,
        ))

        assert result.breakdown.risk_management_score == 24
        assert "1 trade(s) exceeded risk limits" in result.feedback
        assert "Review position sizing before entry" in result.recommendations

    def test_overtrading(self):
        """Test more than ten trades flags overtrading."""
        result = calculate_discipline_score(DisciplineScoreInput(
            total_trades=12,
            winning_trades=7,
            trades_within_risk=12,
        ))

        assert "Good win rate: 58%" in result.feedback
        assert "frequency.high" in result.feedback_codes
        assert "Consider reducing trade count" in result.recommendations
        assert "frequency.high" in result.recommendation_codes

    def test_to_dict(self):
        """Test JSON-ready output."""
        data = calculate_discipline_score(DisciplineScoreInput()).to_dict()

        assert data["grade"] == "A"
        assert data["breakdown"]["violations_score"] == 30
        assert isinstance(data["feedback"], list)


class TestGrades:
    """Test grade thresholds."""

    @pytest.mark.parametrize("score,grade", [
        (100, Grade.S), (95, Grade.S), (94, Grade.A), (85, Grade.A),
        (84, Grade.B), (75, Grade.B), (74, Grade.C), (60, Grade.C),
        (59, Grade.D), (40, Grade.D), (39, Grade.F), (0, Grade.F),
    ])
    def test_grade_for_score(self, score, grade):
        """Test every grade boundary."""
        assert grade_for_score(score) is grade

    @pytest.mark.parametrize("total,grade,code", [
        ({"critical_violations": 2}, Grade.C, "grade.attention"),
        ({"warning_violations": 2}, Grade.B, "grade.good"),
    ])
    def test_grade_messages(self, total, grade, code):
        """Test grade-level feedback."""
        result = calculate_discipline_score(DisciplineScoreInput(**total))

        assert result.grade is grade
        assert result.feedback_codes[-1] == code


class TestMessages:
    """Test the message table."""

    def test_render_message(self):
        """Test placeholders are filled."""
        message = render_message("violations.critical", count=3)

        assert message.feedback == "3 critical violation(s) detected"
        assert message.recommendation == "Avoid FOMO and respect order locks"

    def test_unknown_code(self):
        """Test unknown codes raise KeyError."""
        with pytest.raises(KeyError):
            render_message("nope")

    def test_table_is_read_only(self):
        """Test the message table cannot be modified."""
        with pytest.raises(TypeError):
            DISCIPLINE_MESSAGES["nope"] = None  # type: ignore[index]

"""
Daily discipline score.

Four sub-scores add up to 0-100:
- violations (0-30): rule-violation attempts logged during the day
- risk management (0-30): share of trades opened within the risk limit
- drawdown control (0-20): daily drawdown against the daily budget
- trading quality (0-20): win rate
"""

import structlog

from ..models.discipline import DisciplineScoreInput, DisciplineScoreResult, Grade, ScoreBreakdown
from ..utils.numeric import round_half_up
from .messages import render_message

logger = structlog.get_logger(__name__)

# Lower bound of each grade, checked in order
GRADE_THRESHOLDS = (
    (95, Grade.S),
    (85, Grade.A),
    (75, Grade.B),
    (60, Grade.C),
    (40, Grade.D),
)


class _Messages:
    """Collects rendered feedback and recommendations with their codes."""

    def __init__(self):
        self.feedback = []
        self.recommendations = []
        self.feedback_codes = []
        self.recommendation_codes = []

    def add(self, code: str, **values) -> None:
        message = render_message(code, **values)
        self.feedback.append(message.feedback)
        self.feedback_codes.append(code)
        if message.recommendation:
            self.recommendations.append(message.recommendation)
            self.recommendation_codes.append(code)


def _violations_score(data: DisciplineScoreInput, messages: _Messages) -> int:
    if data.total_violations == 0:
        messages.add("violations.none")
        return 30

    if data.critical_violations > 0:
        messages.add("violations.critical", count=data.critical_violations)
    if data.warning_violations > 0:
        messages.add("violations.warning", count=data.warning_violations)

    penalty = data.critical_violations * 10 + data.warning_violations * 5
    return max(0, 30 - penalty)


def _risk_management_score(data: DisciplineScoreInput, messages: _Messages) -> int:
    rated_trades = data.trades_within_risk + data.trades_over_risk
    if data.total_trades == 0 or rated_trades == 0:
        messages.add("risk.no_trades")
        return 30

    compliance = data.trades_within_risk / rated_trades
    if compliance >= 1.0:
        messages.add("risk.all_within")
    elif compliance >= 0.8:
        messages.add("risk.some_over", count=data.trades_over_risk)
    else:
        messages.add("risk.critical", count=data.trades_over_risk)

    return int(round_half_up(compliance * 30))


def _drawdown_score(data: DisciplineScoreInput, messages: _Messages) -> int:
    if data.challenge_limit_breached:
        messages.add("drawdown.breached")
        return 0

    # No daily budget configured: nothing to measure against
    if data.max_daily_drawdown <= 0:
        return 20

    ratio = abs(data.daily_drawdown / data.max_daily_drawdown)
    if ratio >= 0.9:
        messages.add("drawdown.danger")
        return 5
    if ratio >= 0.7:
        messages.add("drawdown.high")
        return 10
    if ratio >= 0.5:
        messages.add("drawdown.elevated")
        return 15

    messages.add("drawdown.controlled")
    return 20


def _trading_quality_score(data: DisciplineScoreInput, messages: _Messages) -> int:
    if data.total_trades == 0:
        return 10

    win_rate = data.winning_trades / data.total_trades
    win_rate_pct = int(round_half_up(win_rate * 100))

    if win_rate >= 0.6:
        messages.add("quality.excellent", win_rate=win_rate_pct)
        score = 20
    elif win_rate >= 0.5:
        messages.add("quality.good", win_rate=win_rate_pct)
        score = 15
    elif win_rate >= 0.4:
        messages.add("quality.fair", win_rate=win_rate_pct)
        score = 10
    else:
        messages.add("quality.low", win_rate=win_rate_pct)
        score = 5

    # Frequency is feedback only, it does not change the score
    if 3 <= data.total_trades <= 5:
        messages.add("frequency.good")
    elif data.total_trades > 10:
        messages.add("frequency.high")

    return score


def grade_for_score(total_score: int) -> Grade:
    """Letter grade for a 0-100 total."""
    for threshold, grade in GRADE_THRESHOLDS:
        if total_score >= threshold:
            return grade
    return Grade.F


def _grade_message(grade: Grade, messages: _Messages) -> None:
    if grade in (Grade.S, Grade.A):
        messages.add("grade.outstanding")
    elif grade is Grade.B:
        messages.add("grade.good")
    elif grade is Grade.C:
        messages.add("grade.attention")
    else:
        messages.add("grade.critical")


def calculate_discipline_score(data: DisciplineScoreInput) -> DisciplineScoreResult:
    """
    Score one trading day.

    Args:
        data: Daily violation, trade, risk and drawdown counts

    Returns:
        DisciplineScoreResult with sub-scores, grade and tiered messages
    """
    messages = _Messages()

    breakdown = ScoreBreakdown(
        violations_score=_violations_score(data, messages),
        risk_management_score=_risk_management_score(data, messages),
        drawdown_control_score=_drawdown_score(data, messages),
        trading_quality_score=_trading_quality_score(data, messages),
    )
    total_score = breakdown.total
    grade = grade_for_score(total_score)
    _grade_message(grade, messages)

    logger.debug(
        "Discipline score calculated",
        total_score=total_score,
        grade=grade.value,
        violations_score=breakdown.violations_score,
        risk_management_score=breakdown.risk_management_score,
        drawdown_control_score=breakdown.drawdown_control_score,
        trading_quality_score=breakdown.trading_quality_score
    )

    return DisciplineScoreResult(
        total_score=total_score,
        breakdown=breakdown,
        grade=grade,
        feedback=tuple(messages.feedback),
        recommendations=tuple(messages.recommendations),
        feedback_codes=tuple(messages.feedback_codes),
        recommendation_codes=tuple(messages.recommendation_codes),
    )

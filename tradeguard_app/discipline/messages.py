"""
Feedback and recommendation table for the discipline score.

Each tier a sub-score can land in has a stable code. Callers that localize
or restyle messages key on the code; the English text here is the default
rendering.
"""

from types import MappingProxyType
from typing import NamedTuple, Optional


class TierMessage(NamedTuple):
    """Feedback line for a tier, with an optional recommendation."""
    feedback: str
    recommendation: Optional[str] = None


DISCIPLINE_MESSAGES = MappingProxyType({
    # Violations
    "violations.none": TierMessage("Perfect discipline - no violations!"),
    "violations.critical": TierMessage(
        "{count} critical violation(s) detected",
        "Avoid FOMO and respect order locks",
    ),
    "violations.warning": TierMessage("{count} warning violation(s) detected"),

    # Risk management
    "risk.no_trades": TierMessage("No trades today"),
    "risk.all_within": TierMessage("All trades within risk limits"),
    "risk.some_over": TierMessage(
        "{count} trade(s) exceeded risk limits",
        "Review position sizing before entry",
    ),
    "risk.critical": TierMessage(
        "{count} trades exceeded risk - CRITICAL",
        "URGENT: Reduce position sizes immediately",
    ),

    # Drawdown control
    "drawdown.breached": TierMessage(
        "CRITICAL: Challenge limit breached!",
        "STOP TRADING - Limit exceeded",
    ),
    "drawdown.danger": TierMessage(
        "DANGER: 90%+ of daily limit used",
        "STOP TRADING - Too close to limit",
    ),
    "drawdown.high": TierMessage(
        "70%+ of daily limit used",
        "Be cautious - approaching limit",
    ),
    "drawdown.elevated": TierMessage("50%+ of daily limit used"),
    "drawdown.controlled": TierMessage("Drawdown well controlled"),

    # Trading quality
    "quality.excellent": TierMessage("Excellent win rate: {win_rate}%"),
    "quality.good": TierMessage("Good win rate: {win_rate}%"),
    "quality.fair": TierMessage(
        "Win rate: {win_rate}% - Room for improvement",
        "Review entry criteria and setups",
    ),
    "quality.low": TierMessage(
        "Low win rate: {win_rate}% - REVIEW NEEDED",
        "URGENT: Review trading strategy",
    ),

    # Trading frequency
    "frequency.good": TierMessage("Good trading frequency (3-5 trades)"),
    "frequency.high": TierMessage(
        "High trading frequency - watch for overtrading",
        "Consider reducing trade count",
    ),

    # Overall grade
    "grade.outstanding": TierMessage("Outstanding discipline! Keep it up!"),
    "grade.good": TierMessage("Good discipline with room for improvement"),
    "grade.attention": TierMessage(
        "Discipline needs attention",
        "Focus on reducing violations and controlling risk",
    ),
    "grade.critical": TierMessage(
        "Discipline CRITICAL - immediate action required",
        "STOP TRADING until discipline improves",
    ),
})


def render_message(code: str, **values) -> TierMessage:
    """
    Render the message of a tier code with its placeholders filled.

    Raises:
        KeyError: If the code is not in the table
    """
    template = DISCIPLINE_MESSAGES[code]
    return TierMessage(template.feedback.format(**values), template.recommendation)

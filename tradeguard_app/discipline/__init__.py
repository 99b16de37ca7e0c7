"""Daily discipline scoring and end-of-day reports"""

from .calculator import GRADE_THRESHOLDS, calculate_discipline_score, grade_for_score
from .messages import DISCIPLINE_MESSAGES, TierMessage, render_message
from .report import DisciplineHistoryProvider, build_score_input, generate_daily_report

__all__ = [
    "DISCIPLINE_MESSAGES",
    "GRADE_THRESHOLDS",
    "DisciplineHistoryProvider",
    "TierMessage",
    "build_score_input",
    "calculate_discipline_score",
    "generate_daily_report",
    "grade_for_score",
    "render_message",
]

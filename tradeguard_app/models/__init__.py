"""
Data models and contracts module.

Immutable data structures for trade proposals, account state, prop-firm
rules and the result records returned by every component.
"""

from .discipline import (
    AccountRiskLimits,
    DailyReport,
    DisciplineScoreInput,
    DisciplineScoreResult,
    DrawdownSnapshot,
    Grade,
    ScoreBreakdown,
    TradeRecord,
    ViolationRecord,
    ViolationSeverity,
)
from .results import (
    CurrencyExposure,
    ExposureAnalysis,
    HealthAssessment,
    HealthStatus,
    PropFirmLimits,
    PropFirmResult,
    RiskReduction,
    SizingResult,
    ValidationResult,
)
from .rules import PropFirmPreset, PropFirmRules
from .severity import Severity
from .trade import AccountState, Direction, TradeExposure, TradeProposal, TradeValidationInput

__all__ = [
    "AccountRiskLimits",
    "AccountState",
    "CurrencyExposure",
    "DailyReport",
    "Direction",
    "DisciplineScoreInput",
    "DisciplineScoreResult",
    "DrawdownSnapshot",
    "ExposureAnalysis",
    "Grade",
    "HealthAssessment",
    "HealthStatus",
    "PropFirmLimits",
    "PropFirmPreset",
    "PropFirmResult",
    "PropFirmRules",
    "RiskReduction",
    "ScoreBreakdown",
    "Severity",
    "SizingResult",
    "TradeExposure",
    "TradeProposal",
    "TradeRecord",
    "TradeValidationInput",
    "ValidationResult",
    "ViolationRecord",
    "ViolationSeverity",
]

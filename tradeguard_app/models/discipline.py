"""
Discipline scoring data models.

Inputs are per-day counts; history records are what a storage layer
returns for one account and day.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from ..utils.serialization import to_serializable


class Grade(str, Enum):
    """Letter grade for a daily discipline score."""
    S = "S"     # Perfect
    A = "A"     # Excellent
    B = "B"     # Good
    C = "C"     # Acceptable
    D = "D"     # Poor
    F = "F"     # Failing


class ViolationSeverity(str, Enum):
    """Severity of a logged rule violation attempt."""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class DisciplineScoreInput:
    """Daily counts feeding the discipline score."""
    critical_violations: int = 0
    warning_violations: int = 0
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    trades_within_risk: int = 0
    trades_over_risk: int = 0
    daily_drawdown: float = 0.0
    max_daily_drawdown: float = 0.0
    challenge_limit_breached: bool = False

    @property
    def total_violations(self) -> int:
        return self.critical_violations + self.warning_violations


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-scores of the daily discipline score."""
    violations_score: int                         # 0-30
    risk_management_score: int                    # 0-30
    drawdown_control_score: int                   # 0-20
    trading_quality_score: int                    # 0-20

    @property
    def total(self) -> int:
        return (self.violations_score + self.risk_management_score
                + self.drawdown_control_score + self.trading_quality_score)


@dataclass(frozen=True)
class DisciplineScoreResult:
    """Daily discipline score with grade and tiered messages."""
    total_score: int
    breakdown: ScoreBreakdown
    grade: Grade
    feedback: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    feedback_codes: tuple[str, ...] = ()
    recommendation_codes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return to_serializable(self)


@dataclass(frozen=True)
class ViolationRecord:
    """A logged violation attempt (FOMO entry, manual modification...)."""
    timestamp: datetime
    severity: ViolationSeverity
    kind: str = ""


@dataclass(frozen=True)
class TradeRecord:
    """A trade opened during the reporting day."""
    opened_at: datetime
    risk_amount: float                            # Account currency
    final_pnl: Optional[float] = None             # None while still open


@dataclass(frozen=True)
class DrawdownSnapshot:
    """Point-in-time daily drawdown reading."""
    timestamp: datetime
    daily_drawdown: float                         # Account currency


@dataclass(frozen=True)
class AccountRiskLimits:
    """Per-account limits configured in the challenge setup."""
    max_trade_risk: Optional[float] = None        # Account currency, None = unlimited
    daily_budget: Optional[float] = None          # Account currency


@dataclass(frozen=True)
class DailyReport:
    """End-of-day discipline report with the records it was built from."""
    account_id: str
    report_date: date
    score: DisciplineScoreResult
    score_input: DisciplineScoreInput
    violations: tuple[ViolationRecord, ...] = field(default_factory=tuple)
    trades: tuple[TradeRecord, ...] = field(default_factory=tuple)
    latest_snapshot: Optional[DrawdownSnapshot] = None

    def to_dict(self) -> dict[str, Any]:
        return to_serializable(self)

"""
End-of-day discipline report.

Records come from a DisciplineHistoryProvider, the storage boundary; the
report derives the daily counts from them and scores the day.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, tzinfo
from typing import Optional, Sequence, Union

import structlog

from ..errors import MissingInputError
from ..models.discipline import (
    AccountRiskLimits,
    DailyReport,
    DisciplineScoreInput,
    DrawdownSnapshot,
    TradeRecord,
    ViolationRecord,
    ViolationSeverity,
)
from ..utils.time import format_report_date, trading_day_bounds
from .calculator import calculate_discipline_score

logger = structlog.get_logger(__name__)

DEFAULT_DAILY_BUDGET = 1000.0
BREACH_RATIO = 0.95


class DisciplineHistoryProvider(ABC):
    """
    Historical records for one account, scoped to a time window.

    Windows are closed intervals [day_start, day_end] of aware datetimes.
    """

    @abstractmethod
    def get_violations(self, account_id: str, day_start: datetime,
                       day_end: datetime) -> Sequence[ViolationRecord]:
        """Violation attempts logged in the window."""

    @abstractmethod
    def get_trades(self, account_id: str, day_start: datetime,
                   day_end: datetime) -> Sequence[TradeRecord]:
        """Trades opened in the window."""

    @abstractmethod
    def get_latest_drawdown_snapshot(self, account_id: str, day_start: datetime,
                                     day_end: datetime) -> Optional[DrawdownSnapshot]:
        """Most recent drawdown snapshot in the window, if any."""

    @abstractmethod
    def get_risk_limits(self, account_id: str) -> Optional[AccountRiskLimits]:
        """Configured risk limits of the account, None when not set up."""


def build_score_input(
    violations: Sequence[ViolationRecord],
    trades: Sequence[TradeRecord],
    latest_snapshot: Optional[DrawdownSnapshot],
    limits: Optional[AccountRiskLimits]
) -> DisciplineScoreInput:
    """
    Derive daily counts from raw records.

    A trade is within risk when its risk amount does not exceed the
    account's max trade risk (no limit means every trade is within). The
    challenge limit counts as breached at 95% of the daily budget.
    """
    limits = limits or AccountRiskLimits()

    critical = sum(1 for v in violations if ViolationSeverity(v.severity) is ViolationSeverity.CRITICAL)
    warning = sum(1 for v in violations if ViolationSeverity(v.severity) is ViolationSeverity.WARNING)

    winning = sum(1 for t in trades if t.final_pnl is not None and t.final_pnl > 0)
    losing = sum(1 for t in trades if t.final_pnl is not None and t.final_pnl < 0)

    if limits.max_trade_risk is None:
        within_risk = len(trades)
    else:
        within_risk = sum(1 for t in trades if t.risk_amount <= limits.max_trade_risk)

    daily_drawdown = latest_snapshot.daily_drawdown if latest_snapshot else 0.0
    daily_budget = limits.daily_budget or DEFAULT_DAILY_BUDGET

    return DisciplineScoreInput(
        critical_violations=critical,
        warning_violations=warning,
        total_trades=len(trades),
        winning_trades=winning,
        losing_trades=losing,
        trades_within_risk=within_risk,
        trades_over_risk=len(trades) - within_risk,
        daily_drawdown=daily_drawdown,
        max_daily_drawdown=daily_budget,
        challenge_limit_breached=abs(daily_drawdown) >= daily_budget * BREACH_RATIO,
    )


def generate_daily_report(
    provider: DisciplineHistoryProvider,
    account_id: str,
    report_date: Union[date, datetime],
    tz: Optional[tzinfo] = None
) -> DailyReport:
    """
    Build the discipline report of one account for one trading day.

    Args:
        provider: Source of violation, trade, drawdown and limit records
        account_id: Account to report on
        report_date: Day to report on
        tz: Timezone the trading day is expressed in (UTC when omitted)

    Returns:
        DailyReport with the score and the records it was built from

    Raises:
        MissingInputError: If account_id is empty
    """
    if not account_id:
        raise MissingInputError("Account id is required for a daily report", field="account_id")

    day_start, day_end = trading_day_bounds(report_date, tz)

    violations = tuple(provider.get_violations(account_id, day_start, day_end))
    trades = tuple(provider.get_trades(account_id, day_start, day_end))
    latest_snapshot = provider.get_latest_drawdown_snapshot(account_id, day_start, day_end)
    limits = provider.get_risk_limits(account_id)

    score_input = build_score_input(violations, trades, latest_snapshot, limits)
    score = calculate_discipline_score(score_input)

    logger.info(
        "Daily discipline report generated",
        account_id=account_id,
        report_date=format_report_date(day_start),
        total_score=score.total_score,
        grade=score.grade.value,
        violations=len(violations),
        trades=len(trades)
    )

    return DailyReport(
        account_id=account_id,
        report_date=day_start.date(),
        score=score,
        score_input=score_input,
        violations=violations,
        trades=trades,
        latest_snapshot=latest_snapshot,
    )

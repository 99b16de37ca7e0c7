"""
Prop-firm challenge rule checks.

All usage figures are percentages of the challenge starting balance; loss
counters are taken as absolute values regardless of sign.
"""

import math
from types import MappingProxyType
from typing import Optional

import structlog

from ..config.defaults import PropFirmParams
from ..models.results import HealthAssessment, HealthStatus, PropFirmLimits, PropFirmResult
from ..models.rules import PropFirmRules
from ..utils.numeric import floor_to_step, format_percent, is_finite_number

logger = structlog.get_logger(__name__)

_HEALTH_MESSAGES = MappingProxyType({
    "INVALID_BALANCE": (
        HealthStatus.CRITICAL,
        "Challenge starting balance must be positive",
        (
            "Do not trade until the challenge account is configured",
            "Check the starting balance of the challenge",
        ),
    ),
    "CRITICAL": (
        HealthStatus.CRITICAL,
        "STOP TRADING! You are close to failing the challenge",
        (
            "Do not take any more trades today",
            "Review what went wrong",
            "Consider resetting if funded account",
        ),
    ),
    "DANGER": (
        HealthStatus.DANGER,
        "High risk of failing challenge - trade carefully",
        (
            "Reduce risk to 0.5% per trade maximum",
            "Avoid trading during high volatility",
            "Take a break and review your strategy",
        ),
    ),
    "TARGET_REACHED": (
        HealthStatus.WARNING,
        "Target reached - protect your progress",
        (
            "Profit target reached! Slow down and protect gains",
            "Risk max 0.5% per trade",
            "Consider completing min trading days only",
        ),
    ),
    "WARNING": (
        HealthStatus.WARNING,
        "Moderate risk level - trade cautiously",
        (
            "Risk max 1% per trade",
            "Focus on high-probability setups only",
        ),
    ),
    "HEALTHY": (
        HealthStatus.HEALTHY,
        "Challenge progressing well",
        (
            "Stick to your trading plan",
            "Risk 1-2% per trade maximum",
            "Focus on consistency",
        ),
    ),
})


def calculate_limits(rules: PropFirmRules) -> PropFirmLimits:
    """Current budget usage of a challenge."""
    if rules.start_balance <= 0:
        return PropFirmLimits(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    daily_loss_used = abs(rules.current_daily_loss) / rules.start_balance * 100
    total_drawdown_used = abs(rules.current_total_drawdown) / rules.start_balance * 100
    profit_progress = rules.current_profit / rules.start_balance * 100

    if rules.min_trading_days:
        days_progress = rules.trading_days_completed / rules.min_trading_days * 100
    else:
        days_progress = 100.0

    return PropFirmLimits(
        daily_loss_used=daily_loss_used,
        daily_loss_remaining=rules.max_daily_loss_percent - daily_loss_used,
        total_drawdown_used=total_drawdown_used,
        total_drawdown_remaining=rules.max_total_loss_percent - total_drawdown_used,
        profit_progress=profit_progress,
        days_progress=days_progress,
    )


def _target_reached(rules: PropFirmRules, limits: PropFirmLimits) -> bool:
    return rules.profit_target_percent > 0 and limits.profit_progress >= rules.profit_target_percent


def validate_prop_firm_trade(
    rules: PropFirmRules,
    new_trade_risk: float,
    params: Optional[PropFirmParams] = None
) -> PropFirmResult:
    """
    Check whether a new trade could break the challenge loss limits.

    The trade is assumed to lose its full risk: it is a violation when
    used + risk exceeds the daily or total limit.

    Args:
        rules: Challenge rules with live counters
        new_trade_risk: Risk of the new trade in percent
        params: Warning thresholds (defaults when omitted)

    Returns:
        PropFirmResult with violations, warnings and budget usage
    """
    params = params or PropFirmParams()
    limits = calculate_limits(rules)
    violations = []
    warnings = []

    if rules.start_balance <= 0:
        violations.append("Challenge starting balance must be positive")
        return PropFirmResult(is_valid=False, limits=limits, violations=tuple(violations))

    if not is_finite_number(new_trade_risk):
        violations.append("Invalid numeric input: new trade risk must be finite")
        return PropFirmResult(is_valid=False, limits=limits, violations=tuple(violations))

    # 1. Daily loss limit
    potential_daily_loss = limits.daily_loss_used + new_trade_risk
    if potential_daily_loss > rules.max_daily_loss_percent:
        violations.append(
            f"Daily loss would exceed limit: {format_percent(potential_daily_loss)}% "
            f"> {format_percent(rules.max_daily_loss_percent)}%"
        )
    elif potential_daily_loss > rules.max_daily_loss_percent * params.limit_warning_ratio:
        warnings.append(
            f"Daily loss approaching limit: {format_percent(potential_daily_loss)}% "
            f"of {format_percent(rules.max_daily_loss_percent)}%"
        )

    # 2. Total drawdown limit
    potential_total_drawdown = limits.total_drawdown_used + new_trade_risk
    if potential_total_drawdown > rules.max_total_loss_percent:
        violations.append(
            f"Total drawdown would exceed limit: {format_percent(potential_total_drawdown)}% "
            f"> {format_percent(rules.max_total_loss_percent)}%"
        )
    elif potential_total_drawdown > rules.max_total_loss_percent * params.limit_warning_ratio:
        warnings.append(
            f"Total drawdown approaching limit: {format_percent(potential_total_drawdown)}% "
            f"of {format_percent(rules.max_total_loss_percent)}%"
        )

    # 3. Profit target, advisory only
    profit_remaining = rules.profit_target_percent - limits.profit_progress
    if _target_reached(rules, limits):
        warnings.append(
            f"Profit target reached! ({format_percent(limits.profit_progress)}% "
            f"of {format_percent(rules.profit_target_percent)}%) - Consider slowing down"
        )
    elif 0 < profit_remaining < params.profit_target_proximity:
        warnings.append(f"Close to profit target! Only {profit_remaining:.2f}% remaining")

    # 4. Minimum trading days
    if rules.min_trading_days and rules.trading_days_completed < rules.min_trading_days:
        days_remaining = rules.min_trading_days - rules.trading_days_completed
        warnings.append(f"{days_remaining} more trading day(s) required to complete challenge")

    if violations:
        logger.info(
            "Prop firm limit would be exceeded",
            provider=rules.provider,
            phase=rules.phase,
            new_trade_risk=new_trade_risk,
            violations=violations
        )

    return PropFirmResult(
        is_valid=not violations,
        limits=limits,
        violations=tuple(violations),
        warnings=tuple(warnings),
    )


def calculate_remaining_trades(rules: PropFirmRules, average_trade_risk: float = 1.0) -> int:
    """How many more average-risk trades fit in today's loss budget."""
    if average_trade_risk <= 0:
        return 0

    remaining = calculate_limits(rules).daily_loss_remaining
    if remaining <= 0:
        return 0

    return math.floor(remaining / average_trade_risk)


def suggest_max_risk(rules: PropFirmRules, params: Optional[PropFirmParams] = None) -> float:
    """
    Largest risk to take on the next trade.

    The tighter of the two remaining budgets, with a safety buffer, floored
    to the risk step (0.5% by default).
    """
    params = params or PropFirmParams()
    limits = calculate_limits(rules)

    max_risk = min(limits.daily_loss_remaining, limits.total_drawdown_remaining)
    safe_max_risk = max_risk * params.safety_buffer

    return max(0.0, floor_to_step(safe_max_risk, params.risk_step))


def assess_challenge_health(rules: PropFirmRules) -> HealthAssessment:
    """
    Classify how close a challenge is to failing.

    CRITICAL at 90% of either loss limit, DANGER at 70%, WARNING at 50% or
    once the profit target is reached, HEALTHY otherwise. A challenge
    without a positive starting balance cannot be measured and is CRITICAL.
    """
    limits = calculate_limits(rules)

    def usage_at_least(ratio: float) -> bool:
        return (limits.daily_loss_used >= rules.max_daily_loss_percent * ratio
                or limits.total_drawdown_used >= rules.max_total_loss_percent * ratio)

    target_reached = _target_reached(rules, limits)

    if rules.start_balance <= 0:
        tier = "INVALID_BALANCE"
    elif usage_at_least(0.9):
        tier = "CRITICAL"
    elif usage_at_least(0.7):
        tier = "DANGER"
    elif target_reached:
        tier = "TARGET_REACHED"
    elif usage_at_least(0.5):
        tier = "WARNING"
    else:
        tier = "HEALTHY"

    status, message, recommendations = _HEALTH_MESSAGES[tier]

    logger.debug(
        "Challenge health assessed",
        provider=rules.provider,
        phase=rules.phase,
        status=status.value,
        daily_loss_used=limits.daily_loss_used,
        total_drawdown_used=limits.total_drawdown_used
    )

    return HealthAssessment(status=status, message=message, recommendations=recommendations)

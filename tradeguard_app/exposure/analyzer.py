"""Exposure limit analysis and risk reduction suggestions."""

import math
from typing import Optional, Sequence

import structlog

from ..config.defaults import ExposureParams
from ..models.results import ExposureAnalysis, RiskReduction
from ..models.trade import TradeExposure
from ..utils.numeric import format_percent, round_half_up
from .currency import calculate_currency_exposure

logger = structlog.get_logger(__name__)


def analyze_exposure(
    existing_trades: Sequence[TradeExposure],
    new_trade: Optional[TradeExposure] = None,
    max_currency_exposure: Optional[float] = None,
    params: Optional[ExposureParams] = None
) -> ExposureAnalysis:
    """
    Check per-currency net exposure of open positions plus a proposed one.

    Args:
        existing_trades: Open positions
        new_trade: Proposed position, or None to analyze open positions only
        max_currency_exposure: Hard |net| limit per currency in percent
        params: Warning thresholds (defaults when omitted)

    Returns:
        ExposureAnalysis with violations (hard limit) and warnings
    """
    params = params or ExposureParams()
    limit = params.max_currency_exposure if max_currency_exposure is None else max_currency_exposure

    all_trades = list(existing_trades)
    if new_trade is not None:
        all_trades.append(new_trade)

    exposures = calculate_currency_exposure(all_trades)

    violations = []
    warnings = []
    max_exposure_currency = None
    max_exposure_value = 0.0

    for currency, exposure in exposures.items():
        abs_exposure = abs(exposure.net_exposure)

        if abs_exposure > max_exposure_value:
            max_exposure_value = abs_exposure
            max_exposure_currency = currency

        if abs_exposure > limit:
            violations.append(
                f"{currency}: {abs_exposure:.2f}% exposure exceeds limit of {format_percent(limit)}%"
            )
        elif abs_exposure >= limit * params.warning_ratio:
            warnings.append(
                f"{currency}: {abs_exposure:.2f}% exposure is approaching limit ({format_percent(limit)}%)"
            )

        if exposure.open_positions >= params.max_positions_per_currency:
            warnings.append(
                f"{currency}: {exposure.open_positions} open positions (consider reducing)"
            )

    total_risk = math.fsum(exposure.total_risk for exposure in exposures.values())
    if total_risk > params.max_combined_risk:
        warnings.append(f"Total combined risk is {total_risk:.2f}% (consider reducing)")

    if violations:
        logger.info(
            "Currency exposure limit exceeded",
            violations=violations,
            max_exposure_currency=max_exposure_currency,
            max_exposure_value=max_exposure_value
        )

    return ExposureAnalysis(
        exposures=exposures,
        violations=tuple(violations),
        warnings=tuple(warnings),
        max_exposure_currency=max_exposure_currency,
        max_exposure_value=max_exposure_value,
        total_risk=total_risk,
    )


def suggest_reduced_risk(
    new_trade: TradeExposure,
    existing_trades: Sequence[TradeExposure],
    max_currency_exposure: Optional[float] = None,
    params: Optional[ExposureParams] = None,
    analysis: Optional[ExposureAnalysis] = None
) -> Optional[RiskReduction]:
    """
    Suggest a smaller risk for a trade that breaks an exposure limit.

    The trade currency with the larger |net| exposure drives the cut; the
    suggestion never goes below 0.5%.

    Returns:
        RiskReduction, or None when the trade breaks no limit
    """
    params = params or ExposureParams()
    limit = params.max_currency_exposure if max_currency_exposure is None else max_currency_exposure

    if analysis is None:
        analysis = analyze_exposure(existing_trades, new_trade, limit, params)

    if not analysis.violations:
        return None

    base = analysis.exposures.get(new_trade.base_currency)
    quote = analysis.exposures.get(new_trade.quote_currency)
    base_exposure = abs(base.net_exposure) if base else 0.0
    quote_exposure = abs(quote.net_exposure) if quote else 0.0

    worst_exposure = max(base_exposure, quote_exposure)
    currency = new_trade.base_currency if base_exposure > quote_exposure else new_trade.quote_currency

    excess = max(0.0, worst_exposure - limit)
    suggested = max(0.5, new_trade.risk_percent - excess)

    return RiskReduction(
        suggested_risk=round_half_up(suggested, 1),
        reason=f"{currency} exposure too high ({worst_exposure:.1f}% > {format_percent(limit)}%)",
        currency=currency,
    )

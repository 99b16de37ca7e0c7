"""
Static FX correlation matrix and correlation-adjusted risk.

Coefficients are twelve-month historical averages, from -1 (perfect
negative) to +1 (perfect positive). Pairs not listed are treated as
uncorrelated.
"""

import math
from types import MappingProxyType
from typing import Sequence

from ..models.trade import Direction, TradeExposure
from ..utils.numeric import is_finite_number
from ..utils.symbols import clean_symbol

# Each unordered pair appears once; the matrix below mirrors it
_PAIR_CORRELATIONS = {
    ("EURUSD", "GBPUSD"): 0.89,
    ("EURUSD", "AUDUSD"): 0.76,
    ("EURUSD", "NZDUSD"): 0.72,
    ("EURUSD", "USDCAD"): -0.85,
    ("EURUSD", "USDCHF"): -0.91,
    ("EURUSD", "USDJPY"): -0.68,
    ("EURUSD", "EURGBP"): 0.45,
    ("EURUSD", "EURJPY"): 0.82,
    ("GBPUSD", "AUDUSD"): 0.71,
    ("GBPUSD", "NZDUSD"): 0.68,
    ("GBPUSD", "USDCAD"): -0.80,
    ("GBPUSD", "USDCHF"): -0.85,
    ("GBPUSD", "USDJPY"): -0.61,
    ("GBPUSD", "EURGBP"): 0.52,
    ("GBPUSD", "GBPJPY"): 0.79,
    ("AUDUSD", "NZDUSD"): 0.94,
    ("AUDUSD", "USDCAD"): -0.88,
    ("AUDUSD", "USDCHF"): -0.74,
    ("AUDUSD", "USDJPY"): -0.55,
    ("NZDUSD", "USDCAD"): -0.84,
    ("NZDUSD", "USDCHF"): -0.70,
    ("NZDUSD", "USDJPY"): -0.52,
    ("USDCAD", "USDCHF"): 0.78,
    ("USDCAD", "USDJPY"): 0.61,
    ("USDCHF", "USDJPY"): 0.71,
    ("USDJPY", "EURJPY"): 0.84,
    ("USDJPY", "GBPJPY"): 0.86,
}


def _build_matrix(pairs: dict) -> MappingProxyType:
    rows: dict[str, dict[str, float]] = {}
    for (first, second), value in pairs.items():
        rows.setdefault(first, {first: 1.0})[second] = value
        rows.setdefault(second, {second: 1.0})[first] = value
    return MappingProxyType({symbol: MappingProxyType(row) for symbol, row in rows.items()})


CORRELATION_MATRIX = _build_matrix(_PAIR_CORRELATIONS)


def get_correlation(symbol1: str, symbol2: str) -> float:
    """
    Correlation coefficient between two symbols.

    Identical symbols are perfectly correlated; unknown pairs return 0.
    """
    clean1 = clean_symbol(symbol1, keep_digits=False)
    clean2 = clean_symbol(symbol2, keep_digits=False)

    if clean1 == clean2:
        return 1.0

    correlation = CORRELATION_MATRIX.get(clean1, {}).get(clean2)
    if correlation is not None:
        return correlation

    reverse = CORRELATION_MATRIX.get(clean2, {}).get(clean1)
    if reverse is not None:
        return reverse

    return 0.0


def calculate_effective_risk(trades: Sequence[TradeExposure]) -> float:
    """
    Correlation-adjusted combined risk of a set of positions.

    Sums sqrt(risk_i * risk_j) * corr(i, j) * sign(i, j) over every ordered
    pair including i == j, where sign is -1 for opposite directions, and
    returns sqrt(|sum|). Heuristic diversification estimate, not a
    covariance model.

    Positions whose risk is not a positive number carry no risk and are
    left out.
    """
    positions = [t for t in trades if is_finite_number(t.risk_percent) and t.risk_percent > 0]
    if not positions:
        return 0.0
    if len(positions) == 1:
        return positions[0].risk_percent

    total = 0.0
    for first in positions:
        for second in positions:
            correlation = get_correlation(first.symbol, second.symbol)
            same_side = Direction(first.direction) is Direction(second.direction)
            direction_sign = 1 if same_side else -1
            total += math.sqrt(first.risk_percent * second.risk_percent) * correlation * direction_sign

    return math.sqrt(abs(total))

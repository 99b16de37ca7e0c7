"""Currency exposure and correlation engine"""

from .analyzer import analyze_exposure, suggest_reduced_risk
from .correlation import CORRELATION_MATRIX, calculate_effective_risk, get_correlation
from .currency import CurrencyPair, calculate_currency_exposure, parse_currency_pair

__all__ = [
    "CORRELATION_MATRIX",
    "CurrencyPair",
    "analyze_exposure",
    "calculate_currency_exposure",
    "calculate_effective_risk",
    "get_correlation",
    "parse_currency_pair",
    "suggest_reduced_risk",
]

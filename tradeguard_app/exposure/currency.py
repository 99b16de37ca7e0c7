"""Currency decomposition of symbols and per-currency exposure aggregation."""

import math
from collections import defaultdict
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from ..models.results import CurrencyExposure
from ..models.trade import Direction, TradeExposure
from ..utils.symbols import clean_symbol

INDEX_MARKERS = ("US30", "NAS", "SPX")


class CurrencyPair(NamedTuple):
    """Base and quote legs of an instrument."""
    base: str
    quote: str


def parse_currency_pair(symbol: str) -> CurrencyPair:
    """
    Split a symbol into base and quote currency.

    Metals and indices are mapped to pseudo-currencies quoted in USD so
    they still count towards USD exposure.

    Args:
        symbol: Raw instrument symbol ("EURUSD", "eur/usd", "XAUUSD", "US30")

    Returns:
        CurrencyPair(base, quote)
    """
    letters = clean_symbol(symbol, keep_digits=False)
    alnum = clean_symbol(symbol, keep_digits=True)

    if letters.startswith("XAU"):
        return CurrencyPair("GOLD", "USD")
    if letters.startswith("XAG"):
        return CurrencyPair("SILVER", "USD")
    if any(marker in alnum for marker in INDEX_MARKERS):
        return CurrencyPair("INDEX", "USD")

    if len(letters) >= 6:
        return CurrencyPair(letters[:3], letters[3:6])

    return CurrencyPair(letters, "USD")


def calculate_currency_exposure(trades: Iterable[TradeExposure]) -> Mapping[str, CurrencyExposure]:
    """
    Aggregate long/short risk per currency.

    BUY EURUSD is long EUR and short USD; SELL is the mirror. Every leg
    adds to the currency's total risk and open position count.

    Sums use math.fsum so the result does not depend on trade order.

    Returns:
        Read-only mapping of currency code to CurrencyExposure, sorted by code
    """
    long_legs: dict[str, list[float]] = defaultdict(list)
    short_legs: dict[str, list[float]] = defaultdict(list)
    positions: dict[str, int] = defaultdict(int)

    for trade in trades:
        if Direction(trade.direction) is Direction.BUY:
            long_ccy, short_ccy = trade.base_currency, trade.quote_currency
        else:
            long_ccy, short_ccy = trade.quote_currency, trade.base_currency

        long_legs[long_ccy].append(trade.risk_percent)
        short_legs[short_ccy].append(trade.risk_percent)
        positions[long_ccy] += 1
        positions[short_ccy] += 1

    exposures = {}
    for currency in sorted(positions):
        long_exposure = math.fsum(long_legs[currency])
        short_exposure = math.fsum(short_legs[currency])
        exposures[currency] = CurrencyExposure(
            currency=currency,
            long_exposure=long_exposure,
            short_exposure=short_exposure,
            net_exposure=long_exposure - short_exposure,
            open_positions=positions[currency],
            total_risk=math.fsum(long_legs[currency] + short_legs[currency]),
        )

    return MappingProxyType(exposures)

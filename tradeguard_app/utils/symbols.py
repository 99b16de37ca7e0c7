"""Instrument symbol normalization helpers."""

import re

_NON_ALPHA = re.compile(r"[^A-Z]")
_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def clean_symbol(symbol: str, keep_digits: bool = True) -> str:
    """
    Uppercase a broker symbol and strip decoration.

    Broker symbols often carry separators or lowercase letters ("eur/usd",
    "US-30"). Pip tables are keyed on letters and digits,
    currency parsing and correlation on letters only.

    Args:
        symbol: Raw instrument symbol
        keep_digits: Keep digits (index tickers like US30) when True

    Returns:
        Normalized symbol
    """
    pattern = _NON_ALNUM if keep_digits else _NON_ALPHA
    return pattern.sub("", (symbol or "").upper())

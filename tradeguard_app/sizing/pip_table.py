"""Static pip value and digit table for common instruments."""

from types import MappingProxyType
from typing import NamedTuple, Optional

from ..utils.symbols import clean_symbol


class PipSpec(NamedTuple):
    """Pip value per standard lot (account currency) and price digits."""
    pip_value: float
    pip_digits: int


# Approximate values for a USD account; USD/XXX and crosses drift with rates
PIP_TABLE = MappingProxyType({
    # Majors (XXX/USD)
    "EURUSD": PipSpec(10.0, 5),
    "GBPUSD": PipSpec(10.0, 5),
    "AUDUSD": PipSpec(10.0, 5),
    "NZDUSD": PipSpec(10.0, 5),

    # USD/XXX
    "USDCAD": PipSpec(7.5, 5),
    "USDCHF": PipSpec(11.0, 5),
    "USDJPY": PipSpec(9.0, 3),

    # Crosses
    "EURGBP": PipSpec(13.0, 5),
    "EURJPY": PipSpec(9.0, 3),
    "GBPJPY": PipSpec(9.0, 3),

    # Metals
    "XAUUSD": PipSpec(10.0, 2),
    "XAGUSD": PipSpec(50.0, 3),

    # Indices, contract size varies by broker
    "US30": PipSpec(1.0, 1),
    "NAS100": PipSpec(1.0, 1),
    "SPX500": PipSpec(1.0, 1),
})


def lookup_pip_spec(symbol: str) -> Optional[PipSpec]:
    """
    Look up a symbol in the static table.

    Args:
        symbol: Raw broker symbol ("EURUSD", "eur/usd", "US-30")

    Returns:
        PipSpec or None when the symbol is not tabled
    """
    return PIP_TABLE.get(clean_symbol(symbol))

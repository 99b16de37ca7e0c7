"""
Error classification for the trade validation engine.

Expected domain failures (a trade that breaks a rule) are never raised; they
come back inside result objects. The exceptions below cover malformed input
caught at the public boundary, configuration mistakes and failures of the
optional broker-spec lookup.
"""

from .input_quality import (
    InputQualityError,
    NonFiniteInputError,
    MissingInputError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    UnknownPresetError,
    SymbolSpecLookupError,
)

__all__ = [
    # Input Quality Errors
    "InputQualityError",
    "NonFiniteInputError",
    "MissingInputError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "UnknownPresetError",
    "SymbolSpecLookupError",
]

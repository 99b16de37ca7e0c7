"""
System failure error classifications.

These represent programmer or deployment mistakes (bad configuration,
unknown preset names) and failures of external collaborators.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for failures that are not trade-rule outcomes."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Configuration file or overrides failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.source = source


class UnknownPresetError(SystemFailureError, KeyError):
    """Requested prop-firm preset does not exist."""

    def __init__(self, message: str, provider: Optional[str] = None,
                 phase: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.provider = provider
        self.phase = phase

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class SymbolSpecLookupError(SystemFailureError):
    """Broker symbol specification lookup failed or timed out."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 account_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.account_id = account_id
        self.recoverable = True

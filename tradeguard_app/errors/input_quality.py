"""
Input quality error classifications.

Raised by internal guards and converted into validation errors by the
public functions, so callers never see them propagate.
"""

from typing import Optional, Dict, Any


class InputQualityError(Exception):
    """Base class for input problems that are reported as validation errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class NonFiniteInputError(InputQualityError):
    """A numeric input is NaN or infinite."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class MissingInputError(InputQualityError):
    """A required input is absent."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field

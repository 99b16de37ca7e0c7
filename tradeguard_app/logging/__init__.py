"""
Logging configuration and utilities for the TradeGuard validation engine.
"""
from .config import configure_logging, get_logger, get_validation_logger, log_check_result

__all__ = ["configure_logging", "get_logger", "get_validation_logger", "log_check_result"]

"""
TradeGuard App - Trade Risk & Compliance Validation Engine

Decides whether a proposed trade may be executed by combining position
sizing, currency exposure and correlation analysis, prop-firm challenge
rules and an end-of-day discipline score.
"""

__version__ = "0.1.0"
__author__ = "TradeGuard Team"

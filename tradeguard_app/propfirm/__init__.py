"""Prop-firm challenge presets and rule validation"""

from .presets import PROP_FIRM_PRESETS, get_preset, list_presets, presets_for_provider
from .validator import (
    assess_challenge_health,
    calculate_limits,
    calculate_remaining_trades,
    suggest_max_risk,
    validate_prop_firm_trade,
)

__all__ = [
    "PROP_FIRM_PRESETS",
    "assess_challenge_health",
    "calculate_limits",
    "calculate_remaining_trades",
    "get_preset",
    "list_presets",
    "presets_for_provider",
    "suggest_max_risk",
    "validate_prop_firm_trade",
]

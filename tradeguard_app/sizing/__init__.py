"""Position sizing calculator and pip specification providers"""

from .calculator import (
    SizingInput,
    calculate_lot_size,
    calculate_lot_size_with_broker_spec,
    calculate_pip_distance,
    calculate_risk_reward_ratio,
    quick_validate_lot_size,
    suggest_take_profit,
    validate_trade_risk,
)
from .pip_table import PIP_TABLE, PipSpec, lookup_pip_spec
from .providers import (
    AsyncSymbolSpecSource,
    BrokerSpecProvider,
    PipSpecProvider,
    StaticPipTable,
    SymbolSpec,
    resolve_pip_provider,
)

__all__ = [
    "PIP_TABLE",
    "AsyncSymbolSpecSource",
    "BrokerSpecProvider",
    "PipSpec",
    "PipSpecProvider",
    "SizingInput",
    "StaticPipTable",
    "SymbolSpec",
    "calculate_lot_size",
    "calculate_lot_size_with_broker_spec",
    "calculate_pip_distance",
    "calculate_risk_reward_ratio",
    "lookup_pip_spec",
    "quick_validate_lot_size",
    "resolve_pip_provider",
    "suggest_take_profit",
    "validate_trade_risk",
]

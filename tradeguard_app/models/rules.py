"""Prop-firm challenge rule models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PropFirmPreset:
    """Fixed rules of one challenge phase."""
    provider: str
    phase: str
    max_daily_loss_percent: float
    max_total_loss_percent: float
    profit_target_percent: float                  # 0 for funded accounts
    min_trading_days: Optional[int] = None
    max_lot_size: Optional[float] = None
    max_open_trades: Optional[int] = None


@dataclass(frozen=True)
class PropFirmRules:
    """Challenge rules plus live usage counters for one account."""
    provider: str
    phase: str
    max_daily_loss_percent: float
    max_total_loss_percent: float
    profit_target_percent: float
    start_balance: float
    current_balance: float
    current_daily_loss: float = 0.0               # Account currency, sign ignored
    current_total_drawdown: float = 0.0           # Account currency, sign ignored
    current_profit: float = 0.0                   # Account currency
    trading_days_completed: int = 0
    min_trading_days: Optional[int] = None
    max_lot_size: Optional[float] = None
    max_open_trades: Optional[int] = None

    @classmethod
    def from_preset(
        cls,
        provider: str,
        phase: str,
        start_balance: float,
        current_balance: Optional[float] = None,
        current_daily_loss: float = 0.0,
        current_total_drawdown: float = 0.0,
        current_profit: float = 0.0,
        trading_days_completed: int = 0,
    ) -> "PropFirmRules":
        """
        Build live rules from a named preset.

        Raises:
            UnknownPresetError: If the provider/phase combination is unknown
        """
        from ..propfirm.presets import get_preset

        preset = get_preset(provider, phase)
        return cls.from_rules(
            preset,
            start_balance=start_balance,
            current_balance=start_balance if current_balance is None else current_balance,
            current_daily_loss=current_daily_loss,
            current_total_drawdown=current_total_drawdown,
            current_profit=current_profit,
            trading_days_completed=trading_days_completed,
        )

    @classmethod
    def from_rules(cls, preset: PropFirmPreset, **counters) -> "PropFirmRules":
        """Attach live counters to a preset."""
        return cls(
            provider=preset.provider,
            phase=preset.phase,
            max_daily_loss_percent=preset.max_daily_loss_percent,
            max_total_loss_percent=preset.max_total_loss_percent,
            profit_target_percent=preset.profit_target_percent,
            min_trading_days=preset.min_trading_days,
            max_lot_size=preset.max_lot_size,
            max_open_trades=preset.max_open_trades,
            **counters,
        )

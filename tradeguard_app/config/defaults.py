"""Default configuration parameters for the trade validation engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SizingParams:
    """Position sizing limits and table fallbacks."""
    min_lot_size: float = 0.01                 # Broker minimum volume
    max_lot_size: float = 100.0                # Broker maximum volume
    max_risk_percent: float = 10.0             # Upper bound for risk per trade
    default_pip_value: float = 10.0            # $ per pip per standard lot
    default_pip_digits: int = 5                # Price digits for unknown symbols
    standard_lot_units: int = 100_000          # Units in 1.0 lot
    spec_lookup_timeout: float = 2.0           # Seconds before broker spec fallback


@dataclass(frozen=True)
class ExposureParams:
    """Currency exposure limits."""
    max_currency_exposure: float = 2.0         # Max |net| % per currency
    warning_ratio: float = 0.7                 # Warn at this fraction of the limit
    max_positions_per_currency: int = 4        # Warn at this many legs per currency
    max_combined_risk: float = 5.0             # Warn above this combined risk %


@dataclass(frozen=True)
class PropFirmParams:
    """Prop-firm challenge thresholds."""
    limit_warning_ratio: float = 0.8           # Warn at this fraction of daily/total limit
    profit_target_proximity: float = 2.0       # Warn when this close to target (%)
    safety_buffer: float = 0.8                 # Applied to suggested max risk
    risk_step: float = 0.5                     # Suggested risk rounding step (%)


@dataclass(frozen=True)
class ValidationParams:
    """Orchestrator advisory thresholds."""
    min_reward_risk: float = 1.0               # Warn below this R:R
    high_risk_percent: float = 2.0             # Recommend reducing above this
    wide_stop_pips: float = 100.0              # Recommend tighter stop above this
    portfolio_risk_advisory: float = 3.0       # Recommend reducing combined risk above this
    daily_loss_remaining_advisory: float = 2.0
    total_drawdown_remaining_advisory: float = 3.0


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    sizing: SizingParams
    exposure: ExposureParams
    prop_firm: PropFirmParams
    validation: ValidationParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        sizing=SizingParams(),
        exposure=ExposureParams(),
        prop_firm=PropFirmParams(),
        validation=ValidationParams(),
    )

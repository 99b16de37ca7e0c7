"""
Result records returned by the validation components.

Every public operation returns one of these instead of raising for
expected failures. All are frozen; lists of messages are tuples.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from ..utils.serialization import to_serializable
from .severity import Severity


@dataclass(frozen=True)
class SizingResult:
    """Outcome of a lot size calculation."""
    lot_size: float
    risk_amount: float                            # Account currency
    pip_distance: float
    pip_value: float                              # Per pip per standard lot
    position_value: float                         # Units (lot_size * standard lot)
    is_valid: bool
    errors: tuple[str, ...] = ()
    spec_source: str = "table"                    # 'table' or 'broker'

    @classmethod
    def failed(cls, errors: list[str], risk_amount: float = 0.0) -> "SizingResult":
        """Create an invalid result carrying only the errors."""
        return cls(
            lot_size=0.0,
            risk_amount=risk_amount,
            pip_distance=0.0,
            pip_value=0.0,
            position_value=0.0,
            is_valid=False,
            errors=tuple(errors),
        )


@dataclass(frozen=True)
class CurrencyExposure:
    """Aggregated exposure of one currency across positions."""
    currency: str
    long_exposure: float = 0.0                    # % in long legs
    short_exposure: float = 0.0                   # % in short legs
    net_exposure: float = 0.0                     # long - short
    open_positions: int = 0
    total_risk: float = 0.0                       # long + short


@dataclass(frozen=True)
class ExposureAnalysis:
    """Exposure breakdown with limit violations and warnings."""
    exposures: Mapping[str, CurrencyExposure]
    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    max_exposure_currency: Optional[str] = None
    max_exposure_value: float = 0.0
    total_risk: float = 0.0

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)


@dataclass(frozen=True)
class RiskReduction:
    """Suggested smaller risk for a trade that breaks an exposure limit."""
    suggested_risk: float
    reason: str
    currency: str


@dataclass(frozen=True)
class PropFirmLimits:
    """Challenge budget usage, all in percent of starting balance."""
    daily_loss_used: float
    daily_loss_remaining: float
    total_drawdown_used: float
    total_drawdown_remaining: float
    profit_progress: float
    days_progress: float


@dataclass(frozen=True)
class PropFirmResult:
    """Outcome of a prop-firm rule check for a new trade."""
    is_valid: bool
    limits: PropFirmLimits
    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class HealthStatus(str, Enum):
    """Challenge health tiers."""
    HEALTHY = "HEALTHY"
    WARNING = "WARNING"
    DANGER = "DANGER"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class HealthAssessment:
    """Challenge health tier with its fixed recommendations."""
    status: HealthStatus
    message: str
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Complete pre-trade decision with every sub-analysis retained."""
    is_valid: bool
    can_execute: bool
    severity: Severity
    lot_size: float
    risk_amount: float
    pip_distance: float
    sizing: SizingResult
    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    exposure: Optional[ExposureAnalysis] = None
    prop_firm: Optional[PropFirmResult] = None
    effective_risk: Optional[float] = None
    risk_reduction: Optional[RiskReduction] = None
    reward_risk_ratio: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation for HTTP handlers."""
        return to_serializable(self)


@dataclass
class ValidationAccumulator:
    """
    Mutable collector used while the orchestrator runs its checks.

    Severity only ever escalates; messages are only ever appended.
    """
    severity: Severity = Severity.OK
    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def block(self, *messages: str) -> None:
        self.violations.extend(messages)
        self.raise_to(Severity.BLOCKED)

    def warn(self, *messages: str) -> None:
        self.warnings.extend(messages)
        self.raise_to(Severity.WARNING)

    def recommend(self, message: str) -> None:
        if message not in self.recommendations:
            self.recommendations.append(message)

    def raise_to(self, severity: Severity) -> None:
        self.severity = self.severity.escalate(severity)

"""
Trade and account data models.

Immutable records describing a proposed trade, the open positions it joins
and the account state it is validated against. Constructed per call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .rules import PropFirmRules


class Direction(str, Enum):
    """Trade direction."""
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def _missing_(cls, value):
        # accept "buy", " Sell " and the like
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


@dataclass(frozen=True)
class TradeProposal:
    """A trade the caller wants to place."""
    symbol: str
    direction: Direction
    entry_price: float
    stop_loss: float
    risk_percent: float                           # e.g. 1.0 for 1% of balance
    take_profits: tuple[float, ...] = ()          # TP1, TP2, ... in order

    @property
    def take_profit(self) -> Optional[float]:
        """First take-profit level, used for the reward:risk check."""
        return self.take_profits[0] if self.take_profits else None

    @property
    def stop_distance(self) -> float:
        return abs(self.entry_price - self.stop_loss)


@dataclass(frozen=True)
class TradeExposure:
    """An open or proposed position as seen by the exposure engine."""
    symbol: str
    direction: Direction
    risk_percent: float
    base_currency: str                            # EUR in EURUSD
    quote_currency: str                           # USD in EURUSD

    @classmethod
    def from_symbol(cls, symbol: str, direction: Direction, risk_percent: float) -> "TradeExposure":
        """Create an exposure record, deriving currencies from the symbol."""
        from ..exposure.currency import parse_currency_pair

        base, quote = parse_currency_pair(symbol)
        return cls(
            symbol=symbol,
            direction=Direction(direction),
            risk_percent=risk_percent,
            base_currency=base,
            quote_currency=quote,
        )

    @classmethod
    def from_proposal(cls, proposal: TradeProposal) -> "TradeExposure":
        """Exposure record for a proposal that has not been placed yet."""
        return cls.from_symbol(proposal.symbol, proposal.direction, proposal.risk_percent)


@dataclass(frozen=True)
class AccountState:
    """Account snapshot supplied by the caller for one validation."""
    balance: float
    currency: str = "USD"
    open_trades: tuple[TradeExposure, ...] = field(default_factory=tuple)
    prop_firm_rules: Optional["PropFirmRules"] = None
    account_id: Optional[str] = None


@dataclass(frozen=True)
class TradeValidationInput:
    """Everything the orchestrator needs to decide on one proposal."""
    proposal: TradeProposal
    account: AccountState
    max_currency_exposure: Optional[float] = None  # Falls back to config default

"""
Pip specification providers for position sizing.

The lot size formula is the same whatever the pip data source; providers
only decide where pip value and price digits come from. Broker
specifications are fetched through an async source that fails soft to the
static table.
"""

import asyncio
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import structlog

from ..config.defaults import SizingParams
from ..errors import SymbolSpecLookupError
from ..utils.numeric import round_half_up
from .pip_table import PipSpec, lookup_pip_spec

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SymbolSpec:
    """Broker contract specification for one symbol."""
    symbol: str
    digits: int
    point: float
    contract_size: float
    min_lot: float = 0.01
    max_lot: float = 100.0
    lot_step: float = 0.01


class PipSpecProvider(ABC):
    """Source of pip value and digits for a symbol."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Short name recorded on sizing results."""

    @abstractmethod
    def pip_spec(self, symbol: str) -> PipSpec:
        """Return pip value per standard lot and price digits."""

    def round_lot(self, raw_lot_size: float) -> float:
        """Round a raw lot size to a tradable volume."""
        # 2 decimals, the MT5 volume precision
        return round_half_up(raw_lot_size, 2)

    def lot_bounds(self, params: SizingParams) -> tuple[float, float]:
        """Smallest and largest tradable lot size."""
        return params.min_lot_size, params.max_lot_size


class StaticPipTable(PipSpecProvider):
    """Static table lookup with configurable fallbacks for unknown symbols."""

    def __init__(self, params: Optional[SizingParams] = None):
        self.params = params or SizingParams()

    @property
    def source(self) -> str:
        return "table"

    def pip_spec(self, symbol: str) -> PipSpec:
        tabled = lookup_pip_spec(symbol)
        if tabled is None:
            return PipSpec(self.params.default_pip_value, self.params.default_pip_digits)
        return tabled


class BrokerSpecProvider(PipSpecProvider):
    """Pip data derived from a broker SymbolSpec."""

    def __init__(self, spec: SymbolSpec, fallback: Optional[PipSpecProvider] = None):
        self.spec = spec
        self.fallback = fallback or StaticPipTable()

    @property
    def source(self) -> str:
        return "broker"

    def pip_spec(self, symbol: str) -> PipSpec:
        # pip = point * 10; value per standard lot scales with contract size
        pip_value = self.spec.point * 10 * self.spec.contract_size / 100_000
        if pip_value <= 0:
            pip_value = self.fallback.pip_spec(symbol).pip_value
        return PipSpec(pip_value, self.spec.digits)

    def round_lot(self, raw_lot_size: float) -> float:
        step = self.spec.lot_step
        if step <= 0:
            return super().round_lot(raw_lot_size)
        steps = math.floor(raw_lot_size / step + 0.5)
        return round_half_up(steps * step, 8)

    def lot_bounds(self, params: SizingParams) -> tuple[float, float]:
        # broker limits only narrow the configured range
        return (
            max(params.min_lot_size, self.spec.min_lot),
            min(params.max_lot_size, self.spec.max_lot),
        )


class AsyncSymbolSpecSource(ABC):
    """Async lookup of broker symbol specifications (database, broker API)."""

    @abstractmethod
    async def get_symbol_spec(self, symbol: str, account_id: Optional[str] = None) -> Optional[SymbolSpec]:
        """Return the spec for a symbol, or None when the broker has none."""


async def fetch_symbol_spec(
    source: AsyncSymbolSpecSource,
    symbol: str,
    account_id: Optional[str] = None,
    timeout: float = 2.0
) -> Optional[SymbolSpec]:
    """
    Await a spec lookup with a timeout.

    Raises:
        SymbolSpecLookupError: If the source fails or does not answer in time
    """
    try:
        return await asyncio.wait_for(source.get_symbol_spec(symbol, account_id), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise SymbolSpecLookupError(
            f"Symbol spec lookup timed out after {timeout}s",
            symbol=symbol,
            account_id=account_id
        ) from e
    except Exception as e:
        raise SymbolSpecLookupError(
            f"Symbol spec lookup failed: {str(e)}",
            symbol=symbol,
            account_id=account_id
        ) from e


async def resolve_pip_provider(
    source: Optional[AsyncSymbolSpecSource],
    symbol: str,
    account_id: Optional[str] = None,
    params: Optional[SizingParams] = None
) -> PipSpecProvider:
    """
    Pick the pip provider for a symbol, preferring broker specifications.

    Never raises: lookup failures and missing specs fall back to the
    static table so validation is not blocked by the broker side.
    """
    params = params or SizingParams()
    table = StaticPipTable(params)

    if source is None:
        return table

    try:
        spec = await fetch_symbol_spec(source, symbol, account_id, timeout=params.spec_lookup_timeout)
    except SymbolSpecLookupError as e:
        logger.warning(
            "Broker spec unavailable, using static pip table",
            symbol=symbol,
            account_id=account_id,
            error=str(e)
        )
        return table

    if spec is None:
        logger.debug("No broker spec for symbol, using static pip table", symbol=symbol)
        return table

    return BrokerSpecProvider(spec, fallback=table)

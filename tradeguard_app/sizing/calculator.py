"""
Position sizing: risk percent and stop distance to lot size.

Lot Size = Risk Amount / (Pip Distance x Pip Value)

The pip value and price digits come from a PipSpecProvider; the formula
and its bounds are identical for every provider.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import SizingParams
from ..errors import NonFiniteInputError
from ..models.results import SizingResult
from ..models.trade import Direction
from ..utils.numeric import is_finite_number, round_half_up
from .providers import AsyncSymbolSpecSource, PipSpecProvider, StaticPipTable, resolve_pip_provider


@dataclass(frozen=True)
class SizingInput:
    """Inputs of a lot size calculation."""
    account_balance: float
    risk_percent: float                           # e.g. 1.0 for 1%
    entry_price: float
    stop_loss: float
    symbol: str
    account_currency: str = "USD"


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not is_finite_number(value):
            raise NonFiniteInputError(
                f"Invalid numeric input: {name} must be finite",
                field=name,
                value=value
            )


def _input_errors(data: SizingInput, params: SizingParams) -> list[str]:
    errors = []

    if data.account_balance <= 0:
        errors.append("Account balance must be positive")

    if data.risk_percent <= 0 or data.risk_percent > params.max_risk_percent:
        errors.append(f"Risk percent must be greater than 0% and at most {params.max_risk_percent:g}%")

    if data.entry_price <= 0 or data.stop_loss <= 0:
        errors.append("Entry price and stop loss must be positive")

    if data.entry_price == data.stop_loss:
        errors.append("Entry price and stop loss cannot be the same")

    return errors


def calculate_pip_distance(entry_price: float, stop_loss: float, pip_digits: int) -> float:
    """
    Distance between two prices in pips.

    pip_digits is the quote precision; one pip is ten points, so a
    5-digit EURUSD move of 0.00300 is 30 pips.
    """
    return abs(entry_price - stop_loss) * 10 ** (pip_digits - 1)


def calculate_lot_size(
    data: SizingInput,
    provider: Optional[PipSpecProvider] = None,
    params: Optional[SizingParams] = None
) -> SizingResult:
    """
    Calculate the lot size that risks the requested share of the balance.

    Args:
        data: Balance, risk percent, prices and symbol
        provider: Pip data source (static table when omitted)
        params: Sizing limits (defaults when omitted)

    Returns:
        SizingResult; invalid results carry one error string per problem
    """
    params = params or SizingParams()
    provider = provider or StaticPipTable(params)

    try:
        _require_finite(
            account_balance=data.account_balance,
            risk_percent=data.risk_percent,
            entry_price=data.entry_price,
            stop_loss=data.stop_loss,
        )
    except NonFiniteInputError as e:
        return SizingResult.failed([str(e)])

    errors = _input_errors(data, params)
    if errors:
        return SizingResult.failed(errors)

    risk_amount = data.account_balance * data.risk_percent / 100

    pip_value, pip_digits = provider.pip_spec(data.symbol)
    pip_distance = calculate_pip_distance(data.entry_price, data.stop_loss, pip_digits)

    if pip_distance == 0 or not is_finite_number(pip_distance):
        return SizingResult.failed(["Invalid pip distance (too small)"], risk_amount=risk_amount)

    raw_lot_size = risk_amount / (pip_distance * pip_value)
    if not is_finite_number(raw_lot_size):
        return SizingResult.failed(["Invalid numeric input: lot size is not finite"], risk_amount=risk_amount)

    lot_size = provider.round_lot(raw_lot_size)
    min_lot, max_lot = provider.lot_bounds(params)

    if lot_size < min_lot:
        errors.append(f"Calculated lot size is too small (min {min_lot:g})")

    if lot_size > max_lot:
        errors.append(f"Calculated lot size is too large (max {max_lot:g})")

    return SizingResult(
        lot_size=lot_size,
        risk_amount=risk_amount,
        pip_distance=pip_distance,
        pip_value=pip_value,
        position_value=lot_size * params.standard_lot_units,
        is_valid=not errors,
        errors=tuple(errors),
        spec_source=provider.source,
    )


async def calculate_lot_size_with_broker_spec(
    data: SizingInput,
    spec_source: Optional[AsyncSymbolSpecSource],
    account_id: Optional[str] = None,
    params: Optional[SizingParams] = None
) -> SizingResult:
    """
    Calculate lot size using broker specifications when they are available.

    Lookup failures fall back to the static pip table.
    """
    params = params or SizingParams()
    provider = await resolve_pip_provider(spec_source, data.symbol, account_id, params)
    return calculate_lot_size(data, provider=provider, params=params)


def validate_trade_risk(
    lot_size: float,
    account_balance: float,
    max_risk_percent: float,
    pip_distance: float,
    pip_value: float,
    params: Optional[SizingParams] = None
) -> tuple[bool, float, list[str]]:
    """
    Check an already chosen lot size against a maximum risk percent.

    Returns:
        Tuple of (is_valid, actual_risk_percent, errors)
    """
    params = params or SizingParams()
    errors = []

    if account_balance <= 0:
        return False, 0.0, ["Account balance must be positive"]

    actual_risk_amount = lot_size * pip_distance * pip_value
    actual_risk_percent = actual_risk_amount / account_balance * 100

    if actual_risk_percent > max_risk_percent:
        errors.append(f"Risk too high: {actual_risk_percent:.2f}% (max {max_risk_percent:g}%)")

    if lot_size < params.min_lot_size:
        errors.append(f"Lot size too small (min {params.min_lot_size:g})")

    if lot_size > params.max_lot_size:
        errors.append(f"Lot size too large (max {params.max_lot_size:g})")

    return not errors, actual_risk_percent, errors


def quick_validate_lot_size(
    lot_size: float,
    account_balance: float,
    max_risk_percent: float,
    pip_distance: float,
    pip_value: float,
    params: Optional[SizingParams] = None
) -> tuple[bool, Optional[str]]:
    """Fast lot size check returning the first problem found."""
    is_valid, _, errors = validate_trade_risk(
        lot_size, account_balance, max_risk_percent, pip_distance, pip_value, params
    )
    return is_valid, (errors[0] if errors else None)


def calculate_risk_reward_ratio(entry_price: float, stop_loss: float, take_profit: float) -> float:
    """Reward:risk ratio of a trade, 0 when there is no risk distance."""
    risk = abs(entry_price - stop_loss)
    reward = abs(take_profit - entry_price)

    if risk == 0:
        return 0.0

    return reward / risk


def suggest_take_profit(
    entry_price: float,
    stop_loss: float,
    direction: Direction,
    desired_rr_ratio: float = 2.0
) -> float:
    """Take-profit price giving the desired reward:risk ratio."""
    reward = abs(entry_price - stop_loss) * desired_rr_ratio

    if Direction(direction) is Direction.BUY:
        return entry_price + reward
    return entry_price - reward

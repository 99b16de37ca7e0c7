"""
Pre-trade validation engine.

Orchestrates the validation pipeline for one trade proposal, combining
position sizing, order sanity checks, currency exposure and prop-firm rules
into one severity-graded decision:

Sizing -> Sides & R:R -> Lot Bounds -> Exposure -> Prop Firm -> Advisories
"""

from pathlib import Path
from typing import Any, Optional

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .exposure import analyze_exposure, calculate_effective_risk, suggest_reduced_risk
from .logging.config import get_validation_logger, log_check_result
from .models.results import SizingResult, ValidationAccumulator, ValidationResult
from .models.severity import Severity
from .models.trade import Direction, TradeExposure, TradeValidationInput
from .propfirm import validate_prop_firm_trade
from .sizing import (
    AsyncSymbolSpecSource,
    PipSpecProvider,
    SizingInput,
    calculate_lot_size,
    calculate_lot_size_with_broker_spec,
    calculate_risk_reward_ratio,
)
from .utils.numeric import is_finite_number

logger = structlog.get_logger(__name__)
validation_logger = get_validation_logger(__name__)


class TradeValidationEngine:
    """
    Decides whether a proposed trade may be executed.

    Holds only configuration; every call works on its own inputs, so one
    engine can serve concurrent validations.
    """

    def __init__(self, config: Optional[DefaultConfig] = None) -> None:
        """Initialize the engine with a configuration (defaults when omitted)."""
        self.config = config or get_default_config()
        self.logger = logger
        self.validation_logger = validation_logger

    @classmethod
    def for_account(
        cls,
        account_id: str,
        config_dir: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> "TradeValidationEngine":
        """
        Create an engine with account overrides from accounts.yaml applied.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        loader = ConfigLoader.create(config_dir)
        return cls(loader.build_config(account_id, overrides))

    def validate_trade(
        self,
        data: TradeValidationInput,
        provider: Optional[PipSpecProvider] = None
    ) -> ValidationResult:
        """
        Validate a trade proposal against every rule.

        Args:
            data: Proposal, account state and optional exposure limit
            provider: Pip data source for sizing (static table when omitted)

        Returns:
            ValidationResult; BLOCKED results must not be executed
        """
        sizing = calculate_lot_size(self._sizing_input(data), provider=provider, params=self.config.sizing)
        return self._evaluate(data, sizing)

    async def validate_trade_async(
        self,
        data: TradeValidationInput,
        spec_source: Optional[AsyncSymbolSpecSource],
        account_id: Optional[str] = None
    ) -> ValidationResult:
        """
        Validate a trade proposal, sizing it with the broker's symbol spec.

        The spec lookup is the only awaited step; when it fails the static
        pip table is used and the rest of the pipeline is unchanged.
        """
        sizing = await calculate_lot_size_with_broker_spec(
            self._sizing_input(data),
            spec_source,
            account_id=account_id or data.account.account_id,
            params=self.config.sizing
        )
        return self._evaluate(data, sizing)

    def _sizing_input(self, data: TradeValidationInput) -> SizingInput:
        proposal = data.proposal
        return SizingInput(
            account_balance=data.account.balance,
            risk_percent=proposal.risk_percent,
            entry_price=proposal.entry_price,
            stop_loss=proposal.stop_loss,
            symbol=proposal.symbol,
            account_currency=data.account.currency,
        )

    def _evaluate(self, data: TradeValidationInput, sizing: SizingResult) -> ValidationResult:
        proposal = data.proposal
        acc = ValidationAccumulator()

        direction = self._check_direction(proposal.symbol, proposal.direction, acc)
        self._check_sizing(proposal.symbol, sizing, acc)
        reward_risk_ratio = self._check_sides(data, direction, acc)
        self._check_lot_bounds(proposal.symbol, sizing, acc)
        exposure, effective_risk, risk_reduction = self._check_exposure(data, direction, acc)
        prop_firm = self._check_prop_firm(data, sizing, acc)
        self._add_advisories(data, sizing, acc)

        result = ValidationResult(
            is_valid=not acc.violations,
            can_execute=not acc.violations,
            severity=acc.severity,
            lot_size=sizing.lot_size,
            risk_amount=sizing.risk_amount,
            pip_distance=sizing.pip_distance,
            sizing=sizing,
            violations=tuple(acc.violations),
            warnings=tuple(acc.warnings),
            recommendations=tuple(acc.recommendations),
            exposure=exposure,
            prop_firm=prop_firm,
            effective_risk=effective_risk,
            risk_reduction=risk_reduction,
            reward_risk_ratio=reward_risk_ratio,
        )

        self.logger.info(
            "Trade validation completed",
            symbol=proposal.symbol,
            direction=direction.value if direction else str(proposal.direction),
            severity=result.severity.value,
            can_execute=result.can_execute,
            lot_size=result.lot_size,
            violations=len(result.violations),
            warnings=len(result.warnings)
        )

        return result

    def _check_direction(self, symbol: str, value: Any, acc: ValidationAccumulator) -> Optional[Direction]:
        try:
            return Direction(value)
        except ValueError:
            problem = f"Invalid direction: {value!r} (expected BUY or SELL)"
            acc.block(problem)
            log_check_result(self.validation_logger, "direction", False, symbol, problem)
            return None

    def _check_sizing(self, symbol: str, sizing: SizingResult, acc: ValidationAccumulator) -> None:
        if not sizing.is_valid:
            acc.block(*sizing.errors)

        log_check_result(
            self.validation_logger,
            "sizing",
            sizing.is_valid,
            symbol,
            "; ".join(sizing.errors) or f"lot size {sizing.lot_size:.2f}",
            {"spec_source": sizing.spec_source, "pip_distance": sizing.pip_distance}
        )

    def _check_sides(self, data: TradeValidationInput, direction: Optional[Direction],
                     acc: ValidationAccumulator) -> Optional[float]:
        if direction is None:
            return None

        proposal = data.proposal
        entry = proposal.entry_price
        problems = []

        for level in proposal.take_profits:
            if not is_finite_number(level):
                problems.append("Invalid numeric input: take_profit must be finite")
                break

        if direction is Direction.BUY:
            if proposal.stop_loss >= entry:
                problems.append("Stop Loss must be below Entry for BUY orders")
            if any(level <= entry for level in proposal.take_profits):
                problems.append("Take Profit must be above Entry for BUY orders")
        else:
            if proposal.stop_loss <= entry:
                problems.append("Stop Loss must be above Entry for SELL orders")
            if any(level >= entry for level in proposal.take_profits):
                problems.append("Take Profit must be below Entry for SELL orders")

        if problems:
            acc.block(*problems)

        log_check_result(
            self.validation_logger,
            "order_sides",
            not problems,
            proposal.symbol,
            "; ".join(problems) or f"{direction.value} levels on the correct side",
        )

        reward_risk_ratio = None
        take_profit = proposal.take_profit
        if take_profit is not None and proposal.stop_distance > 0 and is_finite_number(take_profit):
            reward_risk_ratio = calculate_risk_reward_ratio(entry, proposal.stop_loss, take_profit)
            if reward_risk_ratio < self.config.validation.min_reward_risk:
                acc.warn(f"Low R:R ratio ({reward_risk_ratio:.2f}:1). Consider 2:1 minimum")

        return reward_risk_ratio

    def _check_lot_bounds(self, symbol: str, sizing: SizingResult, acc: ValidationAccumulator) -> None:
        # Only meaningful once sizing got as far as computing a lot size
        if sizing.pip_distance <= 0:
            return

        params = self.config.sizing
        problem = None
        if sizing.lot_size < params.min_lot_size:
            problem = f"Lot size too small (minimum {params.min_lot_size:g})"
        elif sizing.lot_size > params.max_lot_size:
            problem = f"Lot size too large (maximum {params.max_lot_size:g})"

        if problem is None:
            return

        # Sizing already reports its own bound errors
        if sizing.is_valid:
            acc.block(problem)
        else:
            acc.raise_to(Severity.BLOCKED)

        log_check_result(self.validation_logger, "lot_bounds", False, symbol, problem)

    def _check_exposure(self, data: TradeValidationInput, direction: Optional[Direction],
                        acc: ValidationAccumulator):
        account = data.account
        risk_percent = data.proposal.risk_percent
        if not account.open_trades or direction is None:
            return None, None, None

        # Sizing has already blocked a risk that is not a positive number
        if not is_finite_number(risk_percent) or risk_percent <= 0:
            return None, None, None

        new_trade = TradeExposure.from_proposal(data.proposal)
        limit = data.max_currency_exposure
        params = self.config.exposure

        analysis = analyze_exposure(account.open_trades, new_trade, limit, params)
        risk_reduction = None

        if analysis.has_violations:
            acc.block(*analysis.violations)
            acc.recommend("Reduce position size or close correlated positions first")
            risk_reduction = suggest_reduced_risk(
                new_trade, account.open_trades, limit, params, analysis=analysis
            )

        if analysis.warnings:
            acc.warn(*analysis.warnings)

        if analysis.total_risk > self.config.validation.portfolio_risk_advisory:
            acc.recommend(f"Total portfolio risk is {analysis.total_risk:.1f}% - consider reducing")

        effective_risk = calculate_effective_risk([*account.open_trades, new_trade])

        log_check_result(
            self.validation_logger,
            "exposure",
            not analysis.violations,
            data.proposal.symbol,
            "; ".join(analysis.violations) or "currency exposure within limits",
            {
                "max_exposure_currency": analysis.max_exposure_currency,
                "max_exposure_value": analysis.max_exposure_value,
                "effective_risk": effective_risk,
            }
        )

        return analysis, effective_risk, risk_reduction

    def _check_prop_firm(self, data: TradeValidationInput, sizing: SizingResult, acc: ValidationAccumulator):
        rules = data.account.prop_firm_rules
        if rules is None:
            return None

        result = validate_prop_firm_trade(rules, data.proposal.risk_percent, self.config.prop_firm)
        problems = list(result.violations)

        if rules.max_lot_size is not None and sizing.lot_size > rules.max_lot_size:
            problems.append(
                f"Lot size {sizing.lot_size:.2f} exceeds {rules.provider} maximum of {rules.max_lot_size:g} lots"
            )

        if rules.max_open_trades is not None and len(data.account.open_trades) >= rules.max_open_trades:
            problems.append(
                f"Maximum open trades reached ({len(data.account.open_trades)}/{rules.max_open_trades})"
            )

        if problems:
            acc.block(*problems)

        if result.warnings:
            acc.warn(*result.warnings)

        limits = result.limits
        validation = self.config.validation
        if limits.daily_loss_remaining < validation.daily_loss_remaining_advisory:
            acc.recommend(
                f"Only {limits.daily_loss_remaining:.1f}% daily loss remaining - consider stopping for today"
            )
        if limits.total_drawdown_remaining < validation.total_drawdown_remaining_advisory:
            acc.recommend(
                f"Only {limits.total_drawdown_remaining:.1f}% total drawdown remaining - trade carefully"
            )

        log_check_result(
            self.validation_logger,
            "prop_firm",
            not problems,
            data.proposal.symbol,
            "; ".join(problems) or f"{rules.provider} {rules.phase} limits respected",
            {
                "daily_loss_used": limits.daily_loss_used,
                "total_drawdown_used": limits.total_drawdown_used,
            }
        )

        return result

    def _add_advisories(self, data: TradeValidationInput, sizing: SizingResult,
                        acc: ValidationAccumulator) -> None:
        validation = self.config.validation

        if data.proposal.risk_percent > validation.high_risk_percent:
            acc.recommend("Consider reducing risk to 1-2% per trade")

        if sizing.pip_distance > validation.wide_stop_pips:
            acc.recommend(f"Wide stop loss ({sizing.pip_distance:.0f} pips) - consider tighter SL")


_default_engine = TradeValidationEngine()


def validate_trade(data: TradeValidationInput, config: Optional[DefaultConfig] = None) -> ValidationResult:
    """Validate a trade proposal with the given or default configuration."""
    engine = _default_engine if config is None else TradeValidationEngine(config)
    return engine.validate_trade(data)


async def validate_trade_async(
    data: TradeValidationInput,
    spec_source: Optional[AsyncSymbolSpecSource],
    account_id: Optional[str] = None,
    config: Optional[DefaultConfig] = None
) -> ValidationResult:
    """Validate a trade proposal using broker symbol specs when available."""
    engine = _default_engine if config is None else TradeValidationEngine(config)
    return await engine.validate_trade_async(data, spec_source, account_id)

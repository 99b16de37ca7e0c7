#!/usr/bin/env python3
"""
Basic Usage Example - TradeGuard Trade Validation Engine

This script demonstrates the basic usage of the trade validation engine
with a few typical proposals. It shows how to:
- Initialize the engine
- Validate a clean trade and a malformed one
- Check currency exposure against open positions
- Apply prop-firm challenge rules
- Score a trading day for discipline

Run: python examples/basic_usage.py
"""

import json

from tradeguard_app.discipline import calculate_discipline_score
from tradeguard_app.engine import TradeValidationEngine
from tradeguard_app.logging.config import configure_logging
from tradeguard_app.models import (
    AccountState,
    Direction,
    DisciplineScoreInput,
    PropFirmRules,
    TradeExposure,
    TradeProposal,
    TradeValidationInput,
)
from tradeguard_app.propfirm import assess_challenge_health, suggest_max_risk
from tradeguard_app.report import format_validation_report


def print_result(title: str, result) -> None:
    """Print a validation result as an indented report."""
    print(f"   {title}")
    for line in format_validation_report(result).splitlines():
        print(f"      {line}")
    print()


def main():
    """Run the basic usage demonstration."""
    configure_logging(level="WARNING")

    print("🚀 TradeGuard Validation Engine - Basic Usage Demo")
    print("=" * 60)
    print()

    print("1. Initializing validation engine...")
    engine = TradeValidationEngine()
    print("   Engine initialized with default configuration")
    print()

    account = AccountState(balance=10000.0, account_id="demo-account")

    print("2. Validating a clean EURUSD long (30 pip stop, 2:1 target)...")
    clean = TradeProposal("EURUSD", Direction.BUY, 1.10000, 1.09700, 1.0, take_profits=(1.10600,))
    print_result("Clean trade:", engine.validate_trade(TradeValidationInput(clean, account)))

    print("3. Validating a long with its stop above entry...")
    broken = TradeProposal("EURUSD", Direction.BUY, 1.10000, 1.10300, 1.0, take_profits=(1.10600,))
    print_result("Malformed trade:", engine.validate_trade(TradeValidationInput(broken, account)))

    print("4. Checking USD exposure against an open EURUSD short...")
    exposed_account = AccountState(
        balance=10000.0,
        open_trades=(TradeExposure.from_symbol("EURUSD", Direction.SELL, 1.8),),
        account_id="demo-account",
    )
    gbpusd = TradeProposal("GBPUSD", Direction.SELL, 1.25000, 1.25300, 0.5)
    print_result(
        "Correlated trade:",
        engine.validate_trade(TradeValidationInput(gbpusd, exposed_account, max_currency_exposure=2.0)),
    )

    print("5. Applying FTMO Phase 1 rules after a 4.8% losing day...")
    rules = PropFirmRules.from_preset("FTMO", "Phase 1", start_balance=10000.0, current_daily_loss=480.0)
    challenge_account = AccountState(balance=9520.0, prop_firm_rules=rules, account_id="demo-account")
    print_result("Challenge trade:", engine.validate_trade(TradeValidationInput(clean, challenge_account)))

    health = assess_challenge_health(rules)
    print(f"   Challenge health: {health.status.value} - {health.message}")
    print(f"   Suggested max risk: {suggest_max_risk(rules):g}%")
    print()

    print("6. Scoring the trading day...")
    score = calculate_discipline_score(DisciplineScoreInput(
        warning_violations=1,
        total_trades=4,
        winning_trades=2,
        losing_trades=2,
        trades_within_risk=4,
        daily_drawdown=-480.0,
        max_daily_drawdown=500.0,
    ))
    print(f"   Score: {score.total_score}/100 (grade {score.grade.value})")
    print(json.dumps(score.to_dict()["breakdown"], indent=6))
    print()

    print("✅ Demo completed successfully!")
    print("   This example showed sizing, order checks, exposure limits,")
    print("   prop-firm rules and the daily discipline score.")


if __name__ == "__main__":
    main()

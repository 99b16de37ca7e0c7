"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from tradeguard_app.models import (
    AccountState,
    Direction,
    PropFirmRules,
    TradeExposure,
    TradeProposal,
    TradeValidationInput,
)
from tradeguard_app.sizing import SizingInput


@pytest.fixture
def eurusd_sizing_input() -> SizingInput:
    """1% risk on a 10k account with a 30 pip EURUSD stop."""
    return SizingInput(
        account_balance=10000.0,
        risk_percent=1.0,
        entry_price=1.10000,
        stop_loss=1.09700,
        symbol="EURUSD",
    )


@pytest.fixture
def buy_proposal() -> TradeProposal:
    """Well-formed EURUSD long with a 2:1 target."""
    return TradeProposal(
        symbol="EURUSD",
        direction=Direction.BUY,
        entry_price=1.10000,
        stop_loss=1.09700,
        risk_percent=1.0,
        take_profits=(1.10600,),
    )


@pytest.fixture
def plain_account() -> AccountState:
    """10k USD account with no open trades and no prop-firm rules."""
    return AccountState(balance=10000.0, account_id="test-account")


@pytest.fixture
def ftmo_phase1_rules() -> PropFirmRules:
    """Fresh FTMO Phase 1 challenge on a 10k account."""
    return PropFirmRules.from_preset("FTMO", "Phase 1", start_balance=10000.0)


@pytest.fixture
def short_usd_trade() -> TradeExposure:
    """Open SELL EURUSD at 1.8% risk: long 1.8% USD."""
    return TradeExposure.from_symbol("EURUSD", Direction.SELL, 1.8)


@pytest.fixture
def make_input():
    """Factory for TradeValidationInput with sensible defaults."""
    def _make(proposal: TradeProposal, account: AccountState = None, **kwargs) -> TradeValidationInput:
        account = account or AccountState(balance=10000.0, account_id="test-account")
        return TradeValidationInput(proposal=proposal, account=account, **kwargs)
    return _make


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Temporary config directory with one account override."""
    (tmp_path / "accounts.yaml").write_text(
        "accounts:\n"
        "  tight-account:\n"
        "    exposure:\n"
        "      max_currency_exposure: 1.0\n"
        "    validation:\n"
        "      high_risk_percent: 0.5\n"
        "  broken-account:\n"
        "    exposure:\n"
        "      warning_ratio: 1.5\n"
    )
    return tmp_path

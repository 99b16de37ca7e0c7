#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import Optional

import yaml

from tradeguard_app.config.loader import ConfigLoader
from tradeguard_app.config.validation import ConfigValidator, ValidationError


def configured_accounts(config_dir: Path) -> list[str]:
    """Account ids listed in accounts.yaml."""
    accounts_file = config_dir / "accounts.yaml"
    if not accounts_file.exists():
        return []

    with open(accounts_file) as f:
        data = yaml.safe_load(f) or {}

    return list((data.get("accounts") or {}).keys())


def validate_account_config(loader: ConfigLoader, account_id: str) -> list[ValidationError]:
    """Validate the merged configuration of one account."""
    config = loader.merge_config(account_id)
    return ConfigValidator.validate_config(config)


def main(config_dir: Optional[str] = None) -> int:
    """Validate every configured account plus the defaults."""
    loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
    print(f"🔍 Validating TradeGuard configuration in {loader.config_dir}...")

    # An unknown account exercises the defaults alone
    account_ids = configured_accounts(loader.config_dir) + ["unknown-account"]
    all_valid = True

    for account_id in account_ids:
        print(f"\n📊 Validating {account_id}...")
        errors = validate_account_config(loader, account_id)

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {account_id} configuration is valid")

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        return 0

    print("\n❌ Configuration validation failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))

"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import (
    DefaultConfig,
    ExposureParams,
    PropFirmParams,
    SizingParams,
    ValidationParams,
    get_default_config,
)
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

_SECTION_TYPES = {
    "sizing": SizingParams,
    "exposure": ExposureParams,
    "prop_firm": PropFirmParams,
    "validation": ValidationParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_account_config(self, account_id: str) -> dict[str, Any]:
        """Load account-specific configuration overrides."""
        accounts_file = self.config_dir / "accounts.yaml"

        if not accounts_file.exists():
            return {}

        with open(accounts_file) as f:
            accounts_config = yaml.safe_load(f) or {}

        return accounts_config.get("accounts", {}).get(account_id, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        account_id: str,
        call_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Account-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        account_config = self.load_account_config(account_id)
        config = self._deep_merge(config, account_config)

        if call_overrides:
            config = self._deep_merge(config, call_overrides)

        return config

    def build_config(
        self,
        account_id: str,
        call_overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge, validate and materialize a DefaultConfig for an account.

        Raises:
            ConfigurationError: If the merged values fail validation
        """
        merged = self.merge_config(account_id, call_overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            messages = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            logger.error(
                "Configuration validation failed",
                account_id=account_id,
                errors=messages
            )
            raise ConfigurationError(
                f"Invalid configuration for account {account_id}",
                errors=errors,
                source=str(self.config_dir)
            )

        sections = {}
        for name, section_type in _SECTION_TYPES.items():
            known = {f.name for f in fields(section_type)}
            values = {k: v for k, v in merged.get(name, {}).items() if k in known}
            sections[name] = section_type(**values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

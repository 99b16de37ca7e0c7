"""Challenge rule presets of popular prop firms, keyed by provider and phase."""

from types import MappingProxyType

from ..errors import UnknownPresetError
from ..models.rules import PropFirmPreset
from ..utils.symbols import clean_symbol

PROP_FIRM_PRESETS = MappingProxyType({
    "FTMO": MappingProxyType({
        "Phase 1": PropFirmPreset("FTMO", "Phase 1", 5.0, 10.0, 10.0, min_trading_days=4),
        "Phase 2": PropFirmPreset("FTMO", "Phase 2", 5.0, 10.0, 5.0, min_trading_days=4),
        "Funded": PropFirmPreset("FTMO", "Funded", 5.0, 10.0, 0.0),
    }),
    "MYFXFUNDS": MappingProxyType({
        "Phase 1": PropFirmPreset("MyForexFunds", "Phase 1", 4.0, 8.0, 8.0, min_trading_days=5),
        "Phase 2": PropFirmPreset("MyForexFunds", "Phase 2", 4.0, 8.0, 5.0, min_trading_days=5),
        "Funded": PropFirmPreset("MyForexFunds", "Funded", 4.0, 8.0, 0.0),
    }),
    "FIVEPERCENTERS": MappingProxyType({
        "Phase 1": PropFirmPreset("The 5%ers", "Phase 1", 5.0, 6.0, 6.0, min_trading_days=5),
        "Funded": PropFirmPreset("The 5%ers", "Funded", 5.0, 6.0, 0.0),
    }),
    "FUNDEDNEXT": MappingProxyType({
        "Phase 1": PropFirmPreset("FundedNext", "Phase 1", 5.0, 10.0, 10.0, min_trading_days=5),
        "Phase 2": PropFirmPreset("FundedNext", "Phase 2", 5.0, 10.0, 5.0, min_trading_days=5),
        "Funded": PropFirmPreset("FundedNext", "Funded", 5.0, 10.0, 0.0),
    }),
})

# Display names ("MyForexFunds", "The 5%ers") resolve to their table key
_PROVIDER_ALIASES = MappingProxyType({
    clean_symbol(preset.provider): key
    for key, phases in PROP_FIRM_PRESETS.items()
    for preset in phases.values()
})


def _provider_key(provider: str) -> str:
    cleaned = clean_symbol(provider)
    if cleaned in PROP_FIRM_PRESETS:
        return cleaned
    return _PROVIDER_ALIASES.get(cleaned, cleaned)


def get_preset(provider: str, phase: str) -> PropFirmPreset:
    """
    Look up a preset by provider key or display name and phase.

    Matching ignores case and punctuation: "ftmo"/"Phase 1",
    "The 5%ers"/"funded" and "MYFXFUNDS"/"PHASE 2" all resolve.

    Raises:
        UnknownPresetError: If the provider or phase is unknown
    """
    phases = PROP_FIRM_PRESETS.get(_provider_key(provider))
    if phases is None:
        raise UnknownPresetError(f"Unknown prop firm provider: {provider}", provider=provider, phase=phase)

    for name, preset in phases.items():
        if name.lower() == phase.strip().lower():
            return preset

    raise UnknownPresetError(
        f"Unknown phase '{phase}' for provider {provider}",
        provider=provider,
        phase=phase
    )


def presets_for_provider(provider: str) -> list[PropFirmPreset]:
    """All phases of one provider, empty when the provider is unknown."""
    phases = PROP_FIRM_PRESETS.get(_provider_key(provider), {})
    return list(phases.values())


def list_presets() -> list[PropFirmPreset]:
    """Every preset, grouped by provider."""
    return [preset for phases in PROP_FIRM_PRESETS.values() for preset in phases.values()]

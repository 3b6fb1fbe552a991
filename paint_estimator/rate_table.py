"""
Rate table: (substrate type, description) → RateEntry, plus lookup.

Built-in rates come from the contractor price sheet (v4.1). Every base rate
is quoted at the prime+2coats / Commercial reference tier; lighter coatings
and other quality tiers are reached through modifiers (see modifiers.py).

A lookup for an unconfigured (substrate, description) pair never raises:
it prices at 0 and records a "missing pricing" diagnostic so the rest of
the estimate can still be produced.
"""

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional

from .models import (
    SubstrateType, CoatingTier, QualityTier, StainTier, Unit,
    WindowType, WindowSize, DoorType, CabinetFrontSize,
)
from .modifiers import ModifierSet, effective_rate
from .schemas import RateEntry, PricingSnapshot

logger = logging.getLogger(__name__)


class RateKey(NamedTuple):
    substrate_type: SubstrateType
    description: str

    @property
    def label(self) -> str:
        """Human-readable key, e.g. 'Wood / exterior fascia board'."""
        return f"{self.substrate_type.value} / {self.description}"


# --- Description builders for counted components ---

def window_description(window_type: WindowType, size: WindowSize) -> str:
    return f"{window_type.value} window, {size.value}"


def door_description(door_type: DoorType) -> str:
    return door_type.value


def cabinet_description(size: CabinetFrontSize) -> str:
    if size == CabinetFrontSize.DRAWER:
        return "cabinet drawer fronts"
    return f"cabinet fronts, {size.value}"


def _entry(substrate_type, description, unit, base_rate) -> RateEntry:
    return RateEntry(substrate_type=substrate_type, description=description,
                     unit=unit, base_rate=base_rate)


# --- Built-in rates ---

_GYP = SubstrateType.GYPSUM_BOARD
_WOOD = SubstrateType.WOOD
_METAL = SubstrateType.METAL
_MASONRY = SubstrateType.MASONRY

DEFAULT_SURFACE_RATES = [
    # Interior
    _entry(_GYP, "interior walls under 10' high", Unit.SQ_FT, 2.00),
    _entry(_GYP, "interior wall over 10' high", Unit.SQ_FT, 2.25),
    _entry(_GYP, "interior ceilings", Unit.SQ_FT, 2.20),
    _entry(_WOOD, "interior baseboards", Unit.LN_FT, 4.00),
    _entry(_WOOD, "interior trim", Unit.LN_FT, 4.00),
    _entry(_WOOD, "interior trim, stain", Unit.LN_FT, 5.00),
    _entry(_METAL, "interior HVAC ducting & fasteners", Unit.LN_FT, 10.00),
    # Exterior
    _entry(_WOOD, "Siding T111 or Board & Batten", Unit.SQ_FT, 4.00),
    _entry(_WOOD, "exterior fascia board", Unit.LN_FT, 5.00),
    _entry(_WOOD, "exterior trim", Unit.LN_FT, 4.00),
    _entry(_WOOD, "exterior siding", Unit.SQ_FT, 3.50),
    _entry(_WOOD, "exterior eaves", Unit.SQ_FT, 4.00),
    _entry(_WOOD, "shutters", Unit.EACH, 195.00),
    _entry(_METAL, "exterior steel or wrought iron handrails", Unit.LN_FT, 15.00),
    _entry(_METAL, "exterior gutters & downspouts", Unit.LN_FT, 10.00),
    _entry(_METAL, "utility doors", Unit.EACH, 325.00),
    _entry(_MASONRY, "exterior stucco or CMU wall under 10'", Unit.SQ_FT, 3.00),
    _entry(_MASONRY, "exterior stucco or CMU wall over 10'", Unit.SQ_FT, 3.50),
    _entry(_MASONRY, "exterior stucco soffit ceilings", Unit.SQ_FT, 3.25),
]

# Medium sizes follow the per-window sheet rates; small/large scale around them.
DEFAULT_WINDOW_RATES = {
    (WindowType.WOOD_DIVIDED_LIGHT, WindowSize.SMALL): 340.00,
    (WindowType.WOOD_DIVIDED_LIGHT, WindowSize.MEDIUM): 450.00,
    (WindowType.WOOD_DIVIDED_LIGHT, WindowSize.LARGE): 560.00,
    (WindowType.WOOD_SINGLE_FRAME, WindowSize.SMALL): 310.00,
    (WindowType.WOOD_SINGLE_FRAME, WindowSize.MEDIUM): 410.00,
    (WindowType.WOOD_SINGLE_FRAME, WindowSize.LARGE): 510.00,
    (WindowType.METAL_SINGLE_FRAME, WindowSize.SMALL): 245.00,
    (WindowType.METAL_SINGLE_FRAME, WindowSize.MEDIUM): 325.00,
    (WindowType.METAL_SINGLE_FRAME, WindowSize.LARGE): 405.00,
    (WindowType.METAL_DIVIDED_LIGHT, WindowSize.SMALL): 300.00,
    (WindowType.METAL_DIVIDED_LIGHT, WindowSize.MEDIUM): 400.00,
    (WindowType.METAL_DIVIDED_LIGHT, WindowSize.LARGE): 500.00,
}

DEFAULT_DOOR_RATES = {
    DoorType.WOOD_SLAB_NO_FRAME: 175.00,
    DoorType.WOOD_SLAB_WITH_FRAME: 250.00,
    DoorType.HOLLOW_METAL_WITH_FRAME: 325.00,
    DoorType.WOOD_DIVIDED_LIGHT_WITH_FRAME: 400.00,
}

DEFAULT_CABINET_RATES = {
    CabinetFrontSize.SMALL: 85.00,
    CabinetFrontSize.MEDIUM: 110.00,
    CabinetFrontSize.LARGE: 140.00,
    CabinetFrontSize.DRAWER: 60.00,
}


def default_window_entries() -> List[RateEntry]:
    return [
        _entry(SubstrateType.WINDOWS, window_description(wt, size), Unit.EACH, rate)
        for (wt, size), rate in DEFAULT_WINDOW_RATES.items()
    ]


def default_door_entries() -> List[RateEntry]:
    return [
        _entry(SubstrateType.DOORS, door_description(dt), Unit.EACH, rate)
        for dt, rate in DEFAULT_DOOR_RATES.items()
    ]


def default_cabinet_entries() -> List[RateEntry]:
    return [
        _entry(_WOOD, cabinet_description(size), Unit.EACH, rate)
        for size, rate in DEFAULT_CABINET_RATES.items()
    ]


def default_rate_entries() -> List[RateEntry]:
    return (
        list(DEFAULT_SURFACE_RATES)
        + default_window_entries()
        + default_door_entries()
        + default_cabinet_entries()
    )


class PricingDiagnostics:
    """Collects missing-pricing keys for one calculation, once per key, in order seen."""

    def __init__(self):
        self._missing: List[str] = []

    def record_missing(self, key: RateKey) -> None:
        label = key.label
        if label in self._missing:
            return
        logger.warning("Pricing not found for %s", label)
        self._missing.append(label)

    @property
    def missing(self) -> List[str]:
        return list(self._missing)


class RateTable:
    """
    Immutable pricing configuration for one engine.

    Build it once (from defaults or from stored overrides) and hand it to a
    PricingEngine. Several tables can live side by side.
    """

    def __init__(self, entries: Iterable[RateEntry] = (), modifiers: Optional[ModifierSet] = None):
        self._entries: Dict[RateKey, RateEntry] = {}
        for entry in entries:
            self._entries[RateKey(entry.substrate_type, entry.description)] = entry
        self.modifiers = modifiers or ModifierSet()

    @classmethod
    def default(cls) -> "RateTable":
        return cls(default_rate_entries())

    def __contains__(self, key) -> bool:
        return RateKey(*key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, substrate_type: SubstrateType, description: str) -> Optional[RateEntry]:
        return self._entries.get(RateKey(substrate_type, description))

    def entries(self) -> List[RateEntry]:
        return list(self._entries.values())

    def descriptions(self, substrate_type: SubstrateType) -> List[str]:
        return [k.description for k in self._entries if k.substrate_type == substrate_type]

    def lookup(self, substrate_type: SubstrateType, description: str,
               coating_tier: CoatingTier, quality_tier: QualityTier,
               stain_tier: Optional[StainTier] = None,
               diagnostics: Optional[PricingDiagnostics] = None) -> float:
        """
        Effective unit price for an item, unrounded.

        Unconfigured items price at 0.0 and are recorded on `diagnostics`
        (or just logged when no collector is passed).
        """
        key = RateKey(substrate_type, description)
        entry = self._entries.get(key)
        if entry is None:
            if diagnostics is not None:
                diagnostics.record_missing(key)
            else:
                logger.warning("Pricing not found for %s", key.label)
            return 0.0
        return effective_rate(
            entry.base_rate, coating_tier, quality_tier, stain_tier,
            entry_coating=entry.coating_modifiers,
            entry_quality=entry.quality_modifiers,
            defaults=self.modifiers,
        )

    def snapshot(self) -> PricingSnapshot:
        return PricingSnapshot(
            entries=self.entries(),
            coating_modifiers=dict(self.modifiers.coating),
            quality_modifiers=dict(self.modifiers.quality),
            stain_modifiers=dict(self.modifiers.stain),
        )

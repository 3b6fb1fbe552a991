"""
User pricing overrides held in the key-value store.

Resolution happens once, when a RateTable is built:
  - customPricing replaces the built-in surface rates wholesale
  - customWindowPricing / customDoorPricing / customCabinetPricing each
    replace their own category wholesale
  - customPricingItems adds (or replaces, by key) entries on top
  - modifier tables are merged tier by tier over the built-in modifiers

Unreadable override data is logged and ignored; defaults are used instead.
"""

import json
import logging
from typing import Dict, List, Optional

from pydantic import PositiveFloat, TypeAdapter, ValidationError

from .models import CoatingTier, QualityTier, StainTier, SubstrateType, Unit
from .modifiers import ModifierSet
from .rate_table import (
    RateTable, DEFAULT_SURFACE_RATES, default_window_entries, default_door_entries,
    default_cabinet_entries, window_description, door_description, cabinet_description,
)
from .schemas import RateEntry, WindowRate, DoorRate, CabinetRate
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

CUSTOM_PRICING = "customPricing"
CUSTOM_PRICING_ITEMS = "customPricingItems"
CUSTOM_QUALITY_MODIFIERS = "customQualityModifiers"
CUSTOM_COATING_MODIFIERS = "customCoatingModifiers"
CUSTOM_STAIN_MODIFIERS = "customStainModifiers"
CUSTOM_WINDOW_PRICING = "customWindowPricing"
CUSTOM_DOOR_PRICING = "customDoorPricing"
CUSTOM_CABINET_PRICING = "customCabinetPricing"

OVERRIDE_ADAPTERS: Dict[str, TypeAdapter] = {
    CUSTOM_PRICING: TypeAdapter(List[RateEntry]),
    CUSTOM_PRICING_ITEMS: TypeAdapter(List[RateEntry]),
    CUSTOM_QUALITY_MODIFIERS: TypeAdapter(Dict[QualityTier, PositiveFloat]),
    CUSTOM_COATING_MODIFIERS: TypeAdapter(Dict[CoatingTier, PositiveFloat]),
    CUSTOM_STAIN_MODIFIERS: TypeAdapter(Dict[StainTier, PositiveFloat]),
    CUSTOM_WINDOW_PRICING: TypeAdapter(List[WindowRate]),
    CUSTOM_DOOR_PRICING: TypeAdapter(List[DoorRate]),
    CUSTOM_CABINET_PRICING: TypeAdapter(List[CabinetRate]),
}

OVERRIDE_KEYS = list(OVERRIDE_ADAPTERS.keys())


def _check_key(key: str) -> TypeAdapter:
    if key not in OVERRIDE_ADAPTERS:
        raise ValueError(f"Unknown pricing override: {key}. Available: {OVERRIDE_KEYS}")
    return OVERRIDE_ADAPTERS[key]


def read_override(store: KeyValueStore, key: str):
    """Parsed override value, or None when absent or malformed."""
    adapter = _check_key(key)
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning("Ignoring malformed %s override (%d errors), using defaults",
                       key, e.error_count())
        return None


def save_override(store: KeyValueStore, key: str, payload) -> None:
    """Validate and store an override. Raises ValidationError on bad payloads."""
    adapter = _check_key(key)
    value = adapter.validate_python(payload)
    store.set(key, adapter.dump_json(value).decode())
    logger.info("Saved %s override", key)


def clear_override(store: KeyValueStore, key: str) -> None:
    _check_key(key)
    store.delete(key)
    logger.info("Cleared %s override", key)


def clear_all_overrides(store: KeyValueStore) -> None:
    for key in OVERRIDE_KEYS:
        store.delete(key)
    logger.info("Cleared all pricing overrides")


def override_as_json(store: KeyValueStore, key: str):
    """Override in JSON-ready form, or None."""
    value = read_override(store, key)
    if value is None:
        return None
    return json.loads(OVERRIDE_ADAPTERS[key].dump_json(value))


# --- Category records → rate entries ---

def window_entry(rate: WindowRate) -> RateEntry:
    return RateEntry(
        substrate_type=SubstrateType.WINDOWS,
        description=window_description(rate.window_type, rate.size),
        unit=Unit.EACH,
        base_rate=rate.base_rate,
        coating_modifiers=rate.coating_modifiers,
        quality_modifiers=rate.quality_modifiers,
    )


def door_entry(rate: DoorRate) -> RateEntry:
    return RateEntry(
        substrate_type=SubstrateType.DOORS,
        description=door_description(rate.door_type),
        unit=Unit.EACH,
        base_rate=rate.base_rate,
        coating_modifiers=rate.coating_modifiers,
        quality_modifiers=rate.quality_modifiers,
    )


def cabinet_entry(rate: CabinetRate) -> RateEntry:
    return RateEntry(
        substrate_type=SubstrateType.WOOD,
        description=cabinet_description(rate.size),
        unit=Unit.EACH,
        base_rate=rate.base_rate,
        coating_modifiers=rate.coating_modifiers,
        quality_modifiers=rate.quality_modifiers,
    )


def _category(store, key, converter, defaults) -> List[RateEntry]:
    custom = read_override(store, key)
    if custom is None:
        return defaults
    return [converter(r) for r in custom]


def load_rate_table(store: Optional[KeyValueStore]) -> RateTable:
    """Build the effective RateTable: stored overrides where present, defaults elsewhere."""
    if store is None:
        return RateTable.default()

    surface = read_override(store, CUSTOM_PRICING)
    entries = list(surface) if surface is not None else list(DEFAULT_SURFACE_RATES)
    entries += _category(store, CUSTOM_WINDOW_PRICING, window_entry, default_window_entries())
    entries += _category(store, CUSTOM_DOOR_PRICING, door_entry, default_door_entries())
    entries += _category(store, CUSTOM_CABINET_PRICING, cabinet_entry, default_cabinet_entries())
    entries += read_override(store, CUSTOM_PRICING_ITEMS) or []

    modifiers = ModifierSet().merged(
        coating=read_override(store, CUSTOM_COATING_MODIFIERS),
        quality=read_override(store, CUSTOM_QUALITY_MODIFIERS),
        stain=read_override(store, CUSTOM_STAIN_MODIFIERS),
    )
    return RateTable(entries, modifiers)

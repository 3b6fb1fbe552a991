import json
from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from typing import Any, List

from .. import rate_overrides
from ..dependencies import get_engine, get_store
from ..models import CoatingTier, QualityTier, StainTier, SubstrateType
from ..pricing_engine import PricingEngine
from ..schemas import PricingSnapshot, RatePreview
from ..storage import KeyValueStore

router = APIRouter(prefix="/pricing", tags=["pricing"])


def _check_key(key: str):
    if key not in rate_overrides.OVERRIDE_KEYS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown pricing override: {key}. Available: {rate_overrides.OVERRIDE_KEYS}",
        )


@router.get("/", response_model=PricingSnapshot)
def get_pricing(engine: PricingEngine = Depends(get_engine)):
    """Every effective rate entry plus the modifier tables."""
    return engine.rate_table.snapshot()


@router.get("/rate", response_model=RatePreview)
def preview_rate(
    substrate_type: SubstrateType,
    description: str,
    coating_tier: CoatingTier = CoatingTier.PRIME_2COATS,
    quality_tier: QualityTier = QualityTier.COMMERCIAL,
    stain_tier: StainTier = StainTier.NONE,
    engine: PricingEngine = Depends(get_engine),
):
    return engine.lookup_rate(substrate_type, description, coating_tier, quality_tier, stain_tier)


@router.get("/descriptions", response_model=List[str])
def list_descriptions(substrate_type: SubstrateType, engine: PricingEngine = Depends(get_engine)):
    return engine.rate_table.descriptions(substrate_type)


@router.get("/overrides")
def list_overrides(store: KeyValueStore = Depends(get_store)):
    """Which override tables are currently stored."""
    return {key: store.get(key) is not None for key in rate_overrides.OVERRIDE_KEYS}


@router.get("/overrides/{key}")
def get_override(key: str, store: KeyValueStore = Depends(get_store)):
    _check_key(key)
    value = rate_overrides.override_as_json(store, key)
    if value is None:
        raise HTTPException(status_code=404, detail=f"No {key} override stored")
    return value


@router.put("/overrides/{key}")
def put_override(key: str, payload: Any = Body(...), store: KeyValueStore = Depends(get_store)):
    _check_key(key)
    try:
        rate_overrides.save_override(store, key, payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json()))
    return {"ok": True, "key": key}


@router.delete("/overrides/{key}")
def delete_override(key: str, store: KeyValueStore = Depends(get_store)):
    _check_key(key)
    rate_overrides.clear_override(store, key)
    return {"ok": True}


@router.delete("/overrides")
def reset_overrides(store: KeyValueStore = Depends(get_store)):
    """Back to built-in rates and modifiers."""
    rate_overrides.clear_all_overrides(store)
    return {"ok": True}

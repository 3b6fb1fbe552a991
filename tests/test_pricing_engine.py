"""
Pricing engine tests: full estimates, rollup, previews, estimate records.

No I/O except where a memory store is passed in explicitly.
"""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from paint_estimator.config import Settings
from paint_estimator.estimate_store import EstimateRepository
from paint_estimator.models import (
    CoatingTier, ComponentType, LineGroup, ProjectCategory, QualityTier, StainTier,
    SubstrateType, Unit,
)
from paint_estimator.pricing_engine import (
    MarkupPolicy, PricingEngine, calculate_estimate, recalculate,
)
from paint_estimator.rate_overrides import CUSTOM_PRICING_ITEMS, save_override
from paint_estimator.rate_table import RateTable
from paint_estimator.schemas import (
    CabinetryItem, Elevation, EstimateInput, ExteriorMeasurement, ExtraItem, LineItem, RateEntry,
    Room, RoomComponent,
)


def _line(total, group=LineGroup.INTERIOR):
    return LineItem(name="x", description="x", group=group, quantity=1, unit=Unit.EACH,
                    unit_price=total, total=total)


def _sample_input(**overrides):
    data = dict(
        client_name="Jane Homeowner",
        project_address="12 Elm St",
        project_category=ProjectCategory.BOTH,
        interior_rooms=[Room(name="Living", length=10, width=12, height=9,
                             components=[RoomComponent(type=ComponentType.WALLS)])],
        exterior_measurement=ExteriorMeasurement(elevations=[
            Elevation(name="Front", width=30, height=10),
            Elevation(name="Back", width=30, height=10),
        ]),
        cabinetry_items=[CabinetryItem(name="Kitchen", small_fronts=4)],
    )
    data.update(overrides)
    return EstimateInput(**data)


# ============================================================
# Rollup
# ============================================================

def test_aggregate_1000_split():
    breakdown = PricingEngine().aggregate([_line(1000.0)], additional_costs=50)
    assert breakdown.materials_cost == 300.00
    assert breakdown.labor_cost == 700.00
    assert breakdown.overhead_cost == 210.00
    assert breakdown.profit_cost == 280.00
    assert breakdown.additional_costs == 50.00
    assert breakdown.subtotal == 1260.00
    assert breakdown.tax_amount == 0.0
    assert breakdown.total == 1540.00


def test_aggregate_split_per_group():
    breakdown = PricingEngine().aggregate([
        _line(100.0, LineGroup.INTERIOR),
        _line(200.0, LineGroup.EXTERIOR),
        _line(50.0, LineGroup.INTERIOR),
    ])
    assert breakdown.group_totals == {LineGroup.INTERIOR: 150.0, LineGroup.EXTERIOR: 200.0}
    assert breakdown.materials_cost == pytest.approx(105.0)
    assert breakdown.labor_cost == pytest.approx(245.0)


def test_aggregate_with_tax():
    engine = PricingEngine(policy=MarkupPolicy(tax_rate=0.10))
    breakdown = engine.aggregate([_line(1000.0)], additional_costs=50)
    assert breakdown.tax_rate == 0.10
    assert breakdown.tax_amount == pytest.approx(154.00)
    assert breakdown.total == pytest.approx(1694.00)


def test_markup_policy_from_settings_is_frozen():
    policy = MarkupPolicy.from_settings(Settings(TAX_RATE=0.08, PROFIT_RATE=0.35))
    assert policy == MarkupPolicy(profit_rate=0.35, tax_rate=0.08)
    with pytest.raises(ValidationError):
        policy.tax_rate = 0.2


def test_aggregate_empty_is_all_zero():
    breakdown = PricingEngine().aggregate([])
    assert breakdown.total == 0.0
    assert breakdown.subtotal == 0.0
    assert breakdown.group_totals == {}


def test_markup_policy_from_settings_defaults():
    policy = MarkupPolicy.from_settings()
    assert (policy.materials_ratio, policy.overhead_rate, policy.profit_rate, policy.tax_rate) == \
        (0.30, 0.30, 0.40, 0.0)


# ============================================================
# Full estimates
# ============================================================

def test_single_room_estimate():
    estimate_input = _sample_input(project_category=ProjectCategory.INTERIOR, cabinetry_items=[])
    result = PricingEngine().calculate_estimate(estimate_input)
    assert [i.name for i in result.line_items] == ["Living - Walls"]
    assert result.line_items[0].total == 792.00
    b = result.breakdown
    assert b.materials_cost == pytest.approx(237.60)
    assert b.labor_cost == pytest.approx(554.40)
    assert b.subtotal == pytest.approx(958.32)
    assert b.total == pytest.approx(1180.08)
    assert result.missing_pricing == []


def test_groups_come_out_interior_exterior_cabinetry():
    result = PricingEngine().calculate_estimate(_sample_input())
    assert [i.group for i in result.line_items] == [
        LineGroup.INTERIOR, LineGroup.EXTERIOR, LineGroup.CABINETRY,
    ]
    assert result.breakdown.group_totals[LineGroup.EXTERIOR] == 2100.00


def test_category_excludes_other_groups():
    interior_only = PricingEngine().calculate_estimate(
        _sample_input(project_category=ProjectCategory.INTERIOR))
    assert LineGroup.EXTERIOR not in {i.group for i in interior_only.line_items}
    exterior_only = PricingEngine().calculate_estimate(
        _sample_input(project_category=ProjectCategory.EXTERIOR))
    groups = {i.group for i in exterior_only.line_items}
    assert groups == {LineGroup.EXTERIOR, LineGroup.CABINETRY}


def test_calculation_is_idempotent():
    engine = PricingEngine()
    estimate_input = _sample_input(quality_tier=QualityTier.RESIDENTIAL,
                                   coating_tier=CoatingTier.SPOT_2COATS)
    assert engine.calculate_estimate(estimate_input) == engine.calculate_estimate(estimate_input)


def test_missing_pricing_still_produces_total():
    room = Room(name="Garage", length=20, width=20, height=9,
                components=[RoomComponent(type=ComponentType.WALLS)],
                extra_items=[ExtraItem(substrate_type=SubstrateType.METAL, description="roll-up door",
                                       quantity=2),
                             ExtraItem(substrate_type=SubstrateType.METAL, description="roll-up door",
                                       quantity=1)])
    result = PricingEngine().calculate_estimate(
        EstimateInput(project_category=ProjectCategory.INTERIOR, interior_rooms=[room]))
    assert result.missing_pricing == ["Metal / roll-up door"]
    assert [i.total for i in result.line_items] == [1440.00, 0.0, 0.0]
    assert result.breakdown.total > 0


def test_engine_with_synthetic_table():
    table = RateTable([RateEntry(substrate_type=SubstrateType.GYPSUM_BOARD,
                                 description="interior walls under 10' high",
                                 unit=Unit.SQ_FT, base_rate=1.00)])
    estimate_input = _sample_input(project_category=ProjectCategory.INTERIOR, cabinetry_items=[])
    cheap = PricingEngine(table).calculate_estimate(estimate_input)
    default = calculate_estimate(estimate_input)
    assert cheap.line_items[0].total == 396.00
    assert default.line_items[0].total == 792.00


def test_engine_from_store_uses_overrides(memory_store):
    save_override(memory_store, CUSTOM_PRICING_ITEMS, [
        {"substrate_type": "Gypsum board", "description": "interior walls under 10' high",
         "unit": "sq ft", "base_rate": 2.50},
    ])
    engine = PricingEngine.from_store(memory_store)
    result = engine.calculate_estimate(
        _sample_input(project_category=ProjectCategory.INTERIOR, cabinetry_items=[]))
    assert result.line_items[0].total == 990.00


def test_recalculate_accepts_plain_dict():
    result = recalculate({
        "project_category": "Interior",
        "interior_rooms": [{"name": "Living", "length": 10, "width": 12, "height": 9,
                            "components": [{"type": "Walls"}]}],
    })
    assert result.line_items[0].total == 792.00


# ============================================================
# Previews
# ============================================================

def test_lookup_rate_preview():
    preview = PricingEngine().lookup_rate(SubstrateType.WOOD, "exterior trim",
                                          CoatingTier.SPOT_1COAT, QualityTier.HIGH_END,
                                          StainTier.STANDARD)
    assert preview.missing is False
    assert preview.unit == Unit.LN_FT
    assert preview.base_rate == 4.00
    assert preview.unit_price == pytest.approx(3.90)


def test_lookup_rate_preview_missing():
    preview = PricingEngine().lookup_rate(SubstrateType.MASONRY, "chimney")
    assert preview.missing is True
    assert preview.unit_price == 0.0
    assert preview.unit is None


def test_effective_rate_is_unrounded():
    rate = PricingEngine().effective_rate(SubstrateType.GYPSUM_BOARD, "interior wall over 10' high",
                                          CoatingTier.SPOT_2COATS, QualityTier.RESIDENTIAL)
    assert rate == pytest.approx(2.109375)


# ============================================================
# Estimate records
# ============================================================

def test_create_estimate_stamps_validity_once():
    now = datetime(2024, 3, 1, 9, 30)
    record = PricingEngine().create_estimate(_sample_input(), now=now)
    assert record.created_at == now
    assert record.valid_until == now + timedelta(days=30)
    assert record.client_name == "Jane Homeowner"
    assert record.breakdown.total > 0
    assert len(record.line_items) == 3


def test_create_estimate_ids_are_unique():
    engine = PricingEngine()
    ids = {engine.create_estimate(_sample_input()).id for _ in range(5)}
    assert len(ids) == 5


def test_saved_estimate_is_not_repriced_by_later_rate_changes(memory_store):
    repo = EstimateRepository(memory_store)
    estimate_input = _sample_input(project_category=ProjectCategory.INTERIOR, cabinetry_items=[])
    record = repo.add(PricingEngine.from_store(memory_store).create_estimate(estimate_input))

    save_override(memory_store, CUSTOM_PRICING_ITEMS, [
        {"substrate_type": "Gypsum board", "description": "interior walls under 10' high",
         "unit": "sq ft", "base_rate": 9.00},
    ])
    repriced = PricingEngine.from_store(memory_store).calculate_estimate(estimate_input)

    saved = repo.get(record.id)
    assert saved.line_items[0].unit_price == 2.00
    assert saved.breakdown == record.breakdown
    assert repriced.line_items[0].unit_price == 9.00

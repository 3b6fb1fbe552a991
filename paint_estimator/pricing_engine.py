"""
Pricing Engine: line items → cost breakdown → Estimate record.

Pure math. Quantity × rate per line, then the group rollup:
    materials = group total × materials ratio, labor = the rest
    overhead  = labor × overhead rate
    profit    = labor × profit rate
    subtotal  = labor + materials + overhead + additional costs
    total     = subtotal + profit + tax

Input: EstimateInput + a RateTable
Output: EstimateResult (line items, breakdown, missing pricing keys)
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .calculators.base import PricingContext
from .calculators.registry import get_calculator, list_calculators
from .config import Settings, settings as default_settings
from .models import CoatingTier, LineGroup, QualityTier, StainTier, SubstrateType
from .rate_overrides import load_rate_table
from .rate_table import PricingDiagnostics, RateTable
from .schemas import (
    CostBreakdown, EstimateInput, EstimateRecord, EstimateResult, LineItem, RatePreview,
)
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class MarkupPolicy(BaseModel):
    """Fixed rollup ratios. Never derived from the estimate itself."""
    model_config = ConfigDict(frozen=True)

    materials_ratio: float = 0.30
    overhead_rate: float = 0.30
    profit_rate: float = 0.40
    tax_rate: float = 0.0

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "MarkupPolicy":
        return cls(
            materials_ratio=settings.MATERIALS_RATIO,
            overhead_rate=settings.OVERHEAD_RATE,
            profit_rate=settings.PROFIT_RATE,
            tax_rate=settings.TAX_RATE,
        )


class PricingEngine:
    """
    Stateless estimate calculator bound to one RateTable.

    The table is resolved once, at construction. Engines with different
    tables can be used side by side.
    """

    def __init__(self, rate_table: Optional[RateTable] = None,
                 policy: Optional[MarkupPolicy] = None,
                 settings: Settings = default_settings):
        self.rate_table = rate_table or RateTable.default()
        self.policy = policy or MarkupPolicy.from_settings(settings)
        self.valid_days = settings.ESTIMATE_VALID_DAYS
        self.eave_width_ft = settings.EAVE_WIDTH_FT
        self.high_wall_threshold_ft = settings.HIGH_WALL_THRESHOLD_FT
        self.cabinet_conversion_surcharge = settings.CABINET_CONVERSION_SURCHARGE

    @classmethod
    def from_store(cls, store: Optional[KeyValueStore],
                   policy: Optional[MarkupPolicy] = None,
                   settings: Settings = default_settings) -> "PricingEngine":
        """Engine over stored overrides, falling back to built-in rates."""
        return cls(load_rate_table(store), policy=policy, settings=settings)

    # --- Full estimate ---

    def calculate_estimate(self, estimate_input: EstimateInput) -> EstimateResult:
        """Recompute every line item and the breakdown from scratch."""
        diagnostics = PricingDiagnostics()
        context = PricingContext(
            rate_table=self.rate_table,
            quality_tier=estimate_input.quality_tier,
            coating_tier=estimate_input.coating_tier,
            diagnostics=diagnostics,
            eave_width_ft=self.eave_width_ft,
            high_wall_threshold_ft=self.high_wall_threshold_ft,
            cabinet_conversion_surcharge=self.cabinet_conversion_surcharge,
        )

        line_items: List[LineItem] = []
        for group in list_calculators():
            calculator = get_calculator(group)
            if not calculator.applies_to(estimate_input):
                continue
            line_items.extend(calculator.calculate(calculator.section(estimate_input), context))

        breakdown = self.aggregate(line_items, estimate_input.additional_costs)
        return EstimateResult(
            line_items=line_items,
            breakdown=breakdown,
            missing_pricing=diagnostics.missing,
        )

    def aggregate(self, line_items: List[LineItem], additional_costs: float = 0.0) -> CostBreakdown:
        """
        Roll line items into the cost breakdown.

        The materials/labor split is applied per group before combining.
        Empty groups contribute zero; this never fails on well-typed input.
        """
        group_totals: Dict[LineGroup, float] = {}
        for item in line_items:
            group_totals[item.group] = group_totals.get(item.group, 0.0) + item.total

        materials = 0.0
        labor = 0.0
        for group_total in group_totals.values():
            group_materials = group_total * self.policy.materials_ratio
            materials += group_materials
            labor += group_total - group_materials

        additional_costs = additional_costs or 0.0
        overhead = labor * self.policy.overhead_rate
        profit = labor * self.policy.profit_rate
        subtotal = labor + materials + overhead + additional_costs
        tax = (subtotal + profit) * self.policy.tax_rate

        return CostBreakdown(
            materials_cost=round(materials, 2),
            labor_cost=round(labor, 2),
            overhead_cost=round(overhead, 2),
            profit_cost=round(profit, 2),
            additional_costs=round(additional_costs, 2),
            subtotal=round(subtotal, 2),
            tax_rate=self.policy.tax_rate,
            tax_amount=round(tax, 2),
            total=round(subtotal + profit + tax, 2),
            group_totals={g: round(t, 2) for g, t in group_totals.items()},
        )

    # --- Live previews ---

    def effective_rate(self, substrate_type: SubstrateType, description: str,
                       coating_tier: CoatingTier, quality_tier: QualityTier,
                       stain_tier: StainTier = StainTier.NONE) -> float:
        """Unrounded unit rate; 0.0 for unconfigured items."""
        return self.rate_table.lookup(substrate_type, description, coating_tier,
                                      quality_tier, stain_tier)

    def lookup_rate(self, substrate_type: SubstrateType, description: str,
                    coating_tier: CoatingTier = CoatingTier.PRIME_2COATS,
                    quality_tier: QualityTier = QualityTier.COMMERCIAL,
                    stain_tier: StainTier = StainTier.NONE) -> RatePreview:
        """Price preview for a single form field."""
        entry = self.rate_table.get(substrate_type, description)
        preview = RatePreview(
            substrate_type=substrate_type,
            description=description,
            coating_tier=coating_tier,
            quality_tier=quality_tier,
            stain_tier=stain_tier,
        )
        if entry is None:
            return preview.model_copy(update={"missing": True})
        rate = self.effective_rate(substrate_type, description, coating_tier,
                                   quality_tier, stain_tier)
        return preview.model_copy(update={
            "unit": entry.unit,
            "base_rate": entry.base_rate,
            "unit_price": round(rate, 2),
        })

    # --- Estimate records ---

    def create_estimate(self, estimate_input: EstimateInput,
                        now: Optional[datetime] = None) -> EstimateRecord:
        """
        Price the input and stamp it as a saved Estimate.

        created_at / valid_until are set here once and never recomputed.
        """
        result = self.calculate_estimate(estimate_input)
        created_at = now or datetime.utcnow()
        record = EstimateRecord(
            **estimate_input.model_dump(),
            id=str(uuid.uuid4()),
            created_at=created_at,
            valid_until=created_at + timedelta(days=self.valid_days),
            line_items=result.line_items,
            breakdown=result.breakdown,
            missing_pricing=result.missing_pricing,
        )
        logger.info("Created estimate %s for %r: total $%.2f",
                    record.id, record.client_name, record.breakdown.total)
        return record


def recalculate(state: Union[EstimateInput, dict],
                engine: Optional[PricingEngine] = None) -> EstimateResult:
    """
    Full recalculation of the current estimate state.

    Call on every relevant input change; nothing is cached between calls.
    """
    if not isinstance(state, EstimateInput):
        state = EstimateInput.model_validate(state)
    return (engine or PricingEngine()).calculate_estimate(state)


def calculate_estimate(estimate_input: EstimateInput,
                       rate_table: Optional[RateTable] = None) -> EstimateResult:
    """Shortcut: price with the given table (built-in rates by default)."""
    return PricingEngine(rate_table).calculate_estimate(estimate_input)

"""
Abstract base class for the line item builders.

Input: one section of an EstimateInput (rooms, exterior, cabinetry)
Output: list of LineItem, in input order, zero-quantity components skipped
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..config import settings
from ..models import (
    CoatingTier, DoorType, LineGroup, QualityTier, StainTier, SubstrateType, Unit,
    WindowSize, WindowType,
)
from ..rate_table import PricingDiagnostics, RateTable
from ..schemas import EstimateInput, ExtraItem, LineItem
from .quantities import EAVE_WIDTH_FT

logger = logging.getLogger(__name__)


@dataclass
class PricingContext:
    """Everything a builder needs to price one estimate."""
    rate_table: RateTable
    quality_tier: QualityTier
    coating_tier: CoatingTier
    diagnostics: PricingDiagnostics
    eave_width_ft: float = EAVE_WIDTH_FT
    high_wall_threshold_ft: float = settings.HIGH_WALL_THRESHOLD_FT
    cabinet_conversion_surcharge: float = settings.CABINET_CONVERSION_SURCHARGE


def title_case(value: str) -> str:
    return " ".join(w.capitalize() for w in value.split())


def finish_label(stain_tier: StainTier) -> str:
    if stain_tier == StainTier.CUSTOM:
        return "Custom Stain"
    if stain_tier == StainTier.STANDARD:
        return "Stained"
    return "Painted"


def window_label(window_type: WindowType, size: WindowSize, stain_tier: StainTier) -> str:
    """'Wood Divided Light Window (Medium, Painted)'"""
    return (f"{title_case(window_type.value)} Window "
            f"({size.value.capitalize()}, {finish_label(stain_tier)})")


def door_label(door_type: DoorType, stain_tier: StainTier) -> str:
    """'Wood Slab With Frame Door (Stained)'"""
    return f"{title_case(door_type.value)} Door ({finish_label(stain_tier)})"


class BaseCalculator(ABC):
    """All line item builders inherit from this."""

    GROUP: LineGroup = None

    @abstractmethod
    def applies_to(self, estimate_input: EstimateInput) -> bool:
        """Whether this group is priced for the project at all."""
        pass

    @abstractmethod
    def section(self, estimate_input: EstimateInput):
        """The part of the input this builder prices."""
        pass

    @abstractmethod
    def calculate(self, section, context: PricingContext) -> List[LineItem]:
        pass

    # --- Helper methods for all builders ---

    def coating_for(self, tier: Optional[CoatingTier], context: PricingContext) -> CoatingTier:
        """Component-level coating choice, else the project default."""
        return tier or context.coating_tier

    def make_line_item(self, name: str, description: str, quantity: float, unit: Unit,
                       unit_price: float, substrate_type: SubstrateType = None,
                       coating_tier: CoatingTier = None) -> LineItem:
        """Build a LineItem. Quantity and unit price are rounded to cents here and only here."""
        quantity = round(quantity, 2)
        unit_price = round(unit_price, 2)
        return LineItem(
            name=name,
            description=description,
            group=self.GROUP,
            substrate_type=substrate_type,
            coating_tier=coating_tier,
            quantity=quantity,
            unit=unit,
            unit_price=unit_price,
            total=round(quantity * unit_price, 2),
        )

    def price_line(self, context: PricingContext, name: str,
                   substrate_type: SubstrateType, description: str,
                   quantity: float, fallback_unit: Unit,
                   coating_tier: Optional[CoatingTier] = None,
                   stain_tier: StainTier = StainTier.NONE) -> Optional[LineItem]:
        """
        Look up the rate for an item and build its line.
        Returns None for zero quantity. Missing rates price at 0 and are
        recorded on context.diagnostics by the rate table.
        """
        if not quantity or quantity <= 0:
            return None
        coating = self.coating_for(coating_tier, context)
        unit_price = context.rate_table.lookup(
            substrate_type, description, coating, context.quality_tier,
            stain_tier, diagnostics=context.diagnostics,
        )
        entry = context.rate_table.get(substrate_type, description)
        unit = entry.unit if entry else fallback_unit
        return self.make_line_item(
            name=name,
            description=description,
            quantity=quantity,
            unit=unit,
            unit_price=unit_price,
            substrate_type=substrate_type,
            coating_tier=coating,
        )

    def extra_lines(self, items: List[ExtraItem], context: PricingContext,
                    prefix: str) -> List[LineItem]:
        """Lines for free-form rate table items (trim, gutters, shutters...)."""
        lines = []
        for item in items:
            line = self.price_line(
                context,
                name=f"{prefix} - {item.label or title_case(item.description)}",
                substrate_type=item.substrate_type,
                description=item.description,
                quantity=item.quantity,
                fallback_unit=Unit.EACH,
                coating_tier=item.coating_tier,
                stain_tier=item.stain_tier,
            )
            if line:
                lines.append(line)
        return lines

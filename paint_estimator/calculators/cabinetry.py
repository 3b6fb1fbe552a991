"""
Cabinetry: fronts by size, drawer fronts, optional stain-to-paint
conversion surcharge. Cabinetry is priced for every project category.
"""

from typing import List

from ..models import CabinetFrontSize, LineGroup, SubstrateType, Unit
from ..rate_table import cabinet_description
from ..schemas import CabinetryItem, EstimateInput, LineItem
from . import quantities
from .base import BaseCalculator, PricingContext

FRONT_COUNTS = [
    (CabinetFrontSize.SMALL, "small_fronts", "Small Fronts"),
    (CabinetFrontSize.MEDIUM, "medium_fronts", "Medium Fronts"),
    (CabinetFrontSize.LARGE, "large_fronts", "Large Fronts"),
    (CabinetFrontSize.DRAWER, "drawer_fronts", "Drawer Fronts"),
]


class CabinetryCalculator(BaseCalculator):

    GROUP = LineGroup.CABINETRY

    def applies_to(self, estimate_input: EstimateInput) -> bool:
        return True

    def section(self, estimate_input: EstimateInput) -> List[CabinetryItem]:
        return estimate_input.cabinetry_items

    def calculate(self, items: List[CabinetryItem], context: PricingContext) -> List[LineItem]:
        lines = []
        for item in items:
            lines.extend(self._item_lines(item, context))
        return lines

    def _item_lines(self, item: CabinetryItem, context: PricingContext) -> List[LineItem]:
        lines = []
        for size, field_name, label in FRONT_COUNTS:
            line = self.price_line(
                context,
                name=f"{item.name} - {label}",
                substrate_type=SubstrateType.WOOD,
                description=cabinet_description(size),
                quantity=quantities.counted_quantity(getattr(item, field_name)),
                fallback_unit=Unit.EACH,
                coating_tier=item.coating_tier,
            )
            if line:
                lines.append(line)

        # Converting stained cabinets to paint costs a share of the fronts on top
        fronts_total = sum(line.total for line in lines)
        if item.stain_to_paint_conversion and fronts_total > 0:
            surcharge = fronts_total * context.cabinet_conversion_surcharge
            lines.append(self.make_line_item(
                name=f"{item.name} - Stain-to-Paint Conversion",
                description="conversion surcharge",
                quantity=1,
                unit=Unit.EACH,
                unit_price=surcharge,
                substrate_type=SubstrateType.WOOD,
                coating_tier=self.coating_for(item.coating_tier, context),
            ))
        return lines

"""
Exterior: body (siding / T111 / stucco), eaves, fascia, windows, doors,
extra items. Eaves and fascia both come from the eave length.
"""

from typing import List, Optional

from ..models import ExteriorSurface, LineGroup, ProjectCategory, SubstrateType, Unit
from ..rate_table import door_description, window_description
from ..schemas import EstimateInput, ExteriorMeasurement, LineItem
from . import quantities
from .base import BaseCalculator, PricingContext, door_label, window_label

PREFIX = "Exterior"

EAVES = "exterior eaves"
FASCIA = "exterior fascia board"
STUCCO_UNDER_10 = "exterior stucco or CMU wall under 10'"
STUCCO_OVER_10 = "exterior stucco or CMU wall over 10'"

# body surface → (label, substrate, description); stucco description depends on height
BODY_RATES = {
    ExteriorSurface.SIDING: ("Siding", SubstrateType.WOOD, "exterior siding"),
    ExteriorSurface.T111_BOARD_BATTEN: ("Siding (T111 / Board & Batten)", SubstrateType.WOOD,
                                        "Siding T111 or Board & Batten"),
    ExteriorSurface.STUCCO_CMU: ("Stucco / CMU Body", SubstrateType.MASONRY, STUCCO_UNDER_10),
}


class ExteriorCalculator(BaseCalculator):

    GROUP = LineGroup.EXTERIOR

    def applies_to(self, estimate_input: EstimateInput) -> bool:
        return estimate_input.project_category in (ProjectCategory.EXTERIOR, ProjectCategory.BOTH)

    def section(self, estimate_input: EstimateInput) -> Optional[ExteriorMeasurement]:
        return estimate_input.exterior_measurement

    def calculate(self, measurement: Optional[ExteriorMeasurement],
                  context: PricingContext) -> List[LineItem]:
        if measurement is None:
            return []

        lines = []
        if measurement.include_body:
            lines.append(self._body_line(measurement, context))

        if measurement.include_eaves and measurement.eave_length:
            lines.append(self.price_line(
                context,
                name=f"{PREFIX} - Eaves",
                substrate_type=SubstrateType.WOOD,
                description=EAVES,
                quantity=quantities.eave_area(measurement.eave_length, context.eave_width_ft),
                fallback_unit=Unit.SQ_FT,
                coating_tier=measurement.eaves_coating_tier,
            ))

        if measurement.include_fascia and measurement.eave_length:
            lines.append(self.price_line(
                context,
                name=f"{PREFIX} - Fascia",
                substrate_type=SubstrateType.WOOD,
                description=FASCIA,
                quantity=quantities.fascia_length(measurement.eave_length),
                fallback_unit=Unit.LN_FT,
                coating_tier=measurement.fascia_coating_tier,
            ))

        for window in measurement.windows:
            lines.append(self.price_line(
                context,
                name=f"{PREFIX} - {window_label(window.window_type, window.size, window.stain_tier)}",
                substrate_type=SubstrateType.WINDOWS,
                description=window_description(window.window_type, window.size),
                quantity=quantities.counted_quantity(window.count),
                fallback_unit=Unit.EACH,
                coating_tier=window.coating_tier,
                stain_tier=window.stain_tier,
            ))

        for door in measurement.doors:
            lines.append(self.price_line(
                context,
                name=f"{PREFIX} - {door_label(door.door_type, door.stain_tier)}",
                substrate_type=SubstrateType.DOORS,
                description=door_description(door.door_type),
                quantity=quantities.counted_quantity(door.count),
                fallback_unit=Unit.EACH,
                coating_tier=door.coating_tier,
                stain_tier=door.stain_tier,
            ))

        lines = [line for line in lines if line is not None]
        lines.extend(self.extra_lines(measurement.extra_items, context, prefix=PREFIX))
        return lines

    def _body_line(self, measurement: ExteriorMeasurement, context: PricingContext):
        label, substrate, description = BODY_RATES[measurement.body_surface]
        if measurement.body_surface == ExteriorSurface.STUCCO_CMU:
            if quantities.body_height(measurement) > context.high_wall_threshold_ft:
                description = STUCCO_OVER_10
        return self.price_line(
            context,
            name=f"{PREFIX} - {label}",
            substrate_type=substrate,
            description=description,
            quantity=quantities.body_area(measurement),
            fallback_unit=Unit.SQ_FT,
            coating_tier=measurement.body_coating_tier,
        )

"""
Interior rooms: walls, ceiling, baseboards, windows, doors, extra items.

A room missing any of length/width/height is skipped entirely.
"""

import logging
from typing import List

from ..models import (
    ComponentType, LineGroup, ProjectCategory, SubstrateType, SurfaceType, Unit,
)
from ..rate_table import door_description, window_description
from ..schemas import EstimateInput, LineItem, Room, RoomComponent
from . import quantities
from .base import BaseCalculator, PricingContext, door_label, window_label

logger = logging.getLogger(__name__)

# Surface the customer sees → substrate the price sheet lists it under
SURFACE_SUBSTRATES = {
    SurfaceType.DRYWALL: SubstrateType.GYPSUM_BOARD,
    SurfaceType.PLASTER: SubstrateType.GYPSUM_BOARD,
    SurfaceType.WOOD: SubstrateType.WOOD,
    SurfaceType.BRICK: SubstrateType.MASONRY,
    SurfaceType.CONCRETE: SubstrateType.MASONRY,
    SurfaceType.METAL: SubstrateType.METAL,
}

WALLS_UNDER_10 = "interior walls under 10' high"
WALLS_OVER_10 = "interior wall over 10' high"
CEILINGS = "interior ceilings"
BASEBOARDS = "interior baseboards"


def wall_description(height: float, threshold: float) -> str:
    return WALLS_OVER_10 if height > threshold else WALLS_UNDER_10


class InteriorRoomCalculator(BaseCalculator):

    GROUP = LineGroup.INTERIOR

    def applies_to(self, estimate_input: EstimateInput) -> bool:
        return estimate_input.project_category in (ProjectCategory.INTERIOR, ProjectCategory.BOTH)

    def section(self, estimate_input: EstimateInput) -> List[Room]:
        return estimate_input.interior_rooms

    def calculate(self, rooms: List[Room], context: PricingContext) -> List[LineItem]:
        items = []
        for room in rooms:
            if not quantities.has_dimensions(room.length, room.width, room.height):
                logger.debug("Skipping room %r: missing dimensions", room.name)
                continue
            for component in room.components:
                line = self._component_line(room, component, context)
                if line:
                    items.append(line)
            items.extend(self.extra_lines(room.extra_items, context, prefix=room.name))
        return items

    def _component_line(self, room: Room, component: RoomComponent, context: PricingContext):
        kind = component.type

        if kind == ComponentType.WALLS:
            return self.price_line(
                context,
                name=f"{room.name} - Walls",
                substrate_type=SURFACE_SUBSTRATES[room.surface_type],
                description=wall_description(room.height, context.high_wall_threshold_ft),
                quantity=quantities.wall_area(room.length, room.width, room.height),
                fallback_unit=Unit.SQ_FT,
                coating_tier=component.coating_tier,
            )

        if kind == ComponentType.CEILING:
            return self.price_line(
                context,
                name=f"{room.name} - Ceiling",
                substrate_type=SubstrateType.GYPSUM_BOARD,
                description=CEILINGS,
                quantity=quantities.ceiling_area(room.length, room.width),
                fallback_unit=Unit.SQ_FT,
                coating_tier=component.coating_tier,
            )

        if kind == ComponentType.BASEBOARDS:
            return self.price_line(
                context,
                name=f"{room.name} - Baseboards",
                substrate_type=SubstrateType.WOOD,
                description=BASEBOARDS,
                quantity=quantities.baseboard_length(room.length, room.width),
                fallback_unit=Unit.LN_FT,
                coating_tier=component.coating_tier,
            )

        if kind == ComponentType.WINDOW:
            label = window_label(component.window_type, component.window_size, component.stain_tier)
            return self.price_line(
                context,
                name=f"{room.name} - {label}",
                substrate_type=SubstrateType.WINDOWS,
                description=window_description(component.window_type, component.window_size),
                quantity=quantities.counted_quantity(component.count),
                fallback_unit=Unit.EACH,
                coating_tier=component.coating_tier,
                stain_tier=component.stain_tier,
            )

        if kind == ComponentType.DOOR:
            return self.price_line(
                context,
                name=f"{room.name} - {door_label(component.door_type, component.stain_tier)}",
                substrate_type=SubstrateType.DOORS,
                description=door_description(component.door_type),
                quantity=quantities.counted_quantity(component.count),
                fallback_unit=Unit.EACH,
                coating_tier=component.coating_tier,
                stain_tier=component.stain_tier,
            )

        raise ValueError(f"Unsupported room component: {kind}")

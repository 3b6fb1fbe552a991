"""
Calculator registry: maps line item groups to calculator classes.

Pricing walks the registry in order, so line items come out
interior, then exterior, then cabinetry.
"""

from .base import BaseCalculator
from .cabinetry import CabinetryCalculator
from .exterior import ExteriorCalculator
from .interior import InteriorRoomCalculator
from ..models import LineGroup

CALCULATOR_REGISTRY: dict[LineGroup, type] = {
    LineGroup.INTERIOR: InteriorRoomCalculator,
    LineGroup.EXTERIOR: ExteriorCalculator,
    LineGroup.CABINETRY: CabinetryCalculator,
}


def get_calculator(group: LineGroup) -> BaseCalculator:
    """Returns an instance of the calculator for a group, or raises ValueError."""
    if group not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for group: {group}. "
            f"Available: {[g.value for g in CALCULATOR_REGISTRY]}"
        )
    return CALCULATOR_REGISTRY[group]()


def has_calculator(group: LineGroup) -> bool:
    """Check if a calculator exists for a group."""
    return group in CALCULATOR_REGISTRY


def list_calculators() -> list[LineGroup]:
    """List all registered groups, in pricing order."""
    return list(CALCULATOR_REGISTRY.keys())

"""
Billable quantities from room and elevation dimensions (feet).

Pure functions. A missing or zero dimension yields zero quantity, never an
error and never an assumed size.

Openings are NOT deducted from wall or body area.
"""

from typing import Iterable, Optional

from ..models import MeasurementType

EAVE_WIDTH_FT = 2.0  # assumed average eave depth, not measured


def has_dimensions(*dims) -> bool:
    """True when every dimension is present and non-zero."""
    return all(bool(d) for d in dims)


def wall_area(length: Optional[float], width: Optional[float], height: Optional[float]) -> float:
    """Four walls: 2 × height × (length + width)."""
    if not has_dimensions(length, width, height):
        return 0.0
    return 2.0 * height * (length + width)


def ceiling_area(length: Optional[float], width: Optional[float]) -> float:
    if not has_dimensions(length, width):
        return 0.0
    return length * width


def baseboard_length(length: Optional[float], width: Optional[float]) -> float:
    """Room perimeter in linear feet."""
    if not has_dimensions(length, width):
        return 0.0
    return 2.0 * (length + width)


def perimeter_body_area(perimeter: Optional[float], average_height: Optional[float]) -> float:
    if not has_dimensions(perimeter, average_height):
        return 0.0
    return perimeter * average_height


def elevation_body_area(elevations: Iterable) -> float:
    """Sum of width × height over the measured elevations."""
    return sum(
        e.width * e.height
        for e in elevations
        if has_dimensions(e.width, e.height)
    )


def body_area(measurement) -> float:
    """
    Exterior body area for either measuring method.

    The two methods are independent: elevations that don't cover the whole
    building will not agree with a perimeter × height measurement.
    """
    if measurement.measurement_type == MeasurementType.PERIMETER:
        return perimeter_body_area(measurement.perimeter, measurement.average_height)
    return elevation_body_area(measurement.elevations)


def body_height(measurement) -> float:
    """Wall height used to pick under/over 10' rates for the body."""
    if measurement.measurement_type == MeasurementType.PERIMETER:
        return measurement.average_height or 0.0
    heights = [e.height for e in measurement.elevations if has_dimensions(e.width, e.height)]
    return max(heights) if heights else 0.0


def eave_area(eave_length: Optional[float], eave_width: float = EAVE_WIDTH_FT) -> float:
    if not eave_length:
        return 0.0
    return eave_length * eave_width


def fascia_length(eave_length: Optional[float]) -> float:
    """Fascia runs the full eave length."""
    return eave_length or 0.0


def counted_quantity(count: Optional[int]) -> int:
    return int(count or 0)

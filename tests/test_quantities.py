"""
Quantity calculator tests: areas, lengths and counts from dimensions.

No pricing here; every function is pure geometry.
"""

import pytest

from paint_estimator.calculators import quantities
from paint_estimator.models import MeasurementType
from paint_estimator.schemas import Elevation, ExteriorMeasurement


def _elevations(*dims):
    return [Elevation(name=f"E{i}", width=w, height=h) for i, (w, h) in enumerate(dims)]


# ============================================================
# Rooms
# ============================================================

def test_room_10x12x9():
    assert quantities.wall_area(10, 12, 9) == 396
    assert quantities.ceiling_area(10, 12) == 120
    assert quantities.baseboard_length(10, 12) == 44


def test_wall_area_has_no_opening_deduction():
    # Same room, same area no matter how many windows/doors it has
    assert quantities.wall_area(15, 15, 8) == 2 * 8 * 30


@pytest.mark.parametrize("length,width,height", [
    (10, 12, 0),
    (0, 12, 9),
    (10, None, 9),
    (None, None, None),
])
def test_missing_dimension_gives_zero_wall_area(length, width, height):
    assert quantities.wall_area(length, width, height) == 0.0


def test_missing_dimension_gives_zero_ceiling_and_baseboard():
    assert quantities.ceiling_area(10, 0) == 0.0
    assert quantities.baseboard_length(None, 12) == 0.0


def test_has_dimensions():
    assert quantities.has_dimensions(10, 12, 9)
    assert not quantities.has_dimensions(10, 12, 0)
    assert not quantities.has_dimensions(10, None)


# ============================================================
# Exterior body
# ============================================================

def test_elevation_body_area_sums_width_times_height():
    assert quantities.elevation_body_area(_elevations((30, 10), (30, 10))) == 600


def test_elevation_with_missing_dimension_is_skipped():
    assert quantities.elevation_body_area(_elevations((30, 10), (40, None), (0, 12))) == 300


def test_perimeter_body_area():
    assert quantities.perimeter_body_area(120, 10) == 1200
    assert quantities.perimeter_body_area(120, None) == 0.0


def test_measurement_methods_are_independent():
    by_elevation = ExteriorMeasurement(
        measurement_type=MeasurementType.ELEVATION,
        elevations=_elevations((30, 10), (30, 10)),
        perimeter=120, average_height=10,
    )
    by_perimeter = by_elevation.model_copy(update={"measurement_type": MeasurementType.PERIMETER})
    assert quantities.body_area(by_elevation) == 600
    assert quantities.body_area(by_perimeter) == 1200


def test_body_height():
    elev = ExteriorMeasurement(elevations=_elevations((30, 9), (20, 14)))
    assert quantities.body_height(elev) == 14
    perim = ExteriorMeasurement(measurement_type=MeasurementType.PERIMETER,
                                perimeter=100, average_height=11.5)
    assert quantities.body_height(perim) == 11.5
    assert quantities.body_height(ExteriorMeasurement()) == 0.0


# ============================================================
# Eaves, fascia, counts
# ============================================================

def test_eave_area_uses_fixed_width():
    assert quantities.EAVE_WIDTH_FT == 2.0
    assert quantities.eave_area(50) == 100
    assert quantities.eave_area(50, eave_width=3) == 150
    assert quantities.eave_area(0) == 0.0


def test_fascia_length_equals_eave_length():
    assert quantities.fascia_length(50) == 50
    assert quantities.fascia_length(None) == 0.0


def test_counted_quantity():
    assert quantities.counted_quantity(4) == 4
    assert quantities.counted_quantity(0) == 0
    assert quantities.counted_quantity(None) == 0

"""Tests for unit parsing and gram conversion."""

import pytest

from recipe_manager.domain.errors import ValidationFailedError
from recipe_manager.domain.units import Unit
from recipe_manager.services.units import UnitConverter, parse_unit


@pytest.mark.parametrize(
    ("unit", "grams"),
    [
        (Unit.G, 1.0),
        (Unit.KG, 1000.0),
        (Unit.OZ, 28.35),
        (Unit.LB, 453.6),
        (Unit.ML, 1.0),
        (Unit.CUP, 240.0),
        (Unit.TBSP, 15.0),
        (Unit.TSP, 5.0),
        (Unit.FL_OZ, 29.57),
        (Unit.GAL, 3785.0),
    ],
)
def test_fixed_units_convert_to_grams(unit: Unit, grams: float) -> None:
    assert UnitConverter().to_grams(1, unit) == pytest.approx(grams)


def test_conversion_is_linear_in_quantity() -> None:
    converter = UnitConverter()
    for unit in Unit:
        single = converter.to_grams(1.5, unit, 80.0)
        assert converter.to_grams(3.0, unit, 80.0) == pytest.approx(2 * single)


def test_piece_uses_serving_size_or_default() -> None:
    converter = UnitConverter()

    assert converter.to_grams(2, Unit.PIECE, 50.0) == 100.0
    assert converter.to_grams(2, Unit.PIECES) == 200.0
    assert converter.to_grams(1, Unit.CAN, 400.0) == 400.0


def test_slice_is_a_tenth_of_serving_or_default() -> None:
    converter = UnitConverter()

    assert converter.to_grams(1, Unit.SLICE, 250.0) == 25.0
    assert converter.to_grams(2, Unit.SLICES) == 60.0


def test_non_positive_quantity_is_rejected() -> None:
    with pytest.raises(ValidationFailedError):
        UnitConverter().to_grams(0, Unit.G)


def test_parse_unit_is_case_insensitive() -> None:
    assert parse_unit(" Cups ") is Unit.CUPS


def test_parse_unit_rejects_unknown_in_strict_mode() -> None:
    with pytest.raises(ValidationFailedError) as excinfo:
        parse_unit("bushel")

    assert excinfo.value.details


def test_parse_unit_lenient_mode_returns_none() -> None:
    assert parse_unit("bushel", strict=False) is None
    assert UnitConverter().to_grams(3, None) == 3.0

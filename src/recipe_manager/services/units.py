"""Conversion of ingredient quantities into grams."""

import logging
from dataclasses import dataclass

from recipe_manager.domain.errors import ValidationFailedError
from recipe_manager.domain.units import COUNT_UNITS, SLICE_UNITS, Unit

_logger = logging.getLogger(__name__)

# Volumes assume a density of 1 g/ml. This is an approximation for
# water-like ingredients, not a physical conversion.
_FIXED_GRAMS: dict[Unit, float] = {
    Unit.G: 1.0,
    Unit.KG: 1000.0,
    Unit.OZ: 28.35,
    Unit.LB: 453.6,
    Unit.ML: 1.0,
    Unit.L: 1000.0,
    Unit.CUP: 240.0,
    Unit.CUPS: 240.0,
    Unit.TBSP: 15.0,
    Unit.TSP: 5.0,
    Unit.FL_OZ: 29.57,
    Unit.PT: 473.0,
    Unit.QT: 946.0,
    Unit.GAL: 3785.0,
}

DEFAULT_PIECE_GRAMS = 100.0
DEFAULT_SLICE_GRAMS = 30.0
SLICES_PER_SERVING = 10.0


def parse_unit(raw: object, *, strict: bool = True) -> Unit | None:
    """Parse a unit string.

    Unknown units raise ``ValidationFailedError`` in strict mode. In lenient
    mode they are logged and ``None`` is returned, which ``to_grams`` treats
    as a multiplier of 1.
    """
    if isinstance(raw, Unit):
        return raw
    value = str(raw or "").strip().lower()
    try:
        return Unit(value)
    except ValueError:
        if strict:
            raise ValidationFailedError(
                f"Unknown unit: {value!r}",
                details=[f"unit must be one of {', '.join(u.value for u in Unit)}"],
            ) from None
        _logger.warning("Unknown unit %r treated as a multiplier of 1", value)
        return None


@dataclass(frozen=True)
class UnitConverter:
    """Maps a quantity in any supported unit to grams."""

    default_piece_grams: float = DEFAULT_PIECE_GRAMS
    default_slice_grams: float = DEFAULT_SLICE_GRAMS

    def to_grams(
        self,
        quantity: float,
        unit: Unit | None,
        reference_serving_grams: float | None = None,
    ) -> float:
        """Return the mass in grams for quantity of unit."""
        if quantity <= 0:
            raise ValidationFailedError("Quantity must be greater than 0")
        return quantity * self.grams_per_unit(unit, reference_serving_grams)

    def grams_per_unit(
        self, unit: Unit | None, reference_serving_grams: float | None = None
    ) -> float:
        """Return how many grams one unit weighs."""
        if unit is None:
            return 1.0
        if unit in COUNT_UNITS:
            serving = (
                reference_serving_grams
                if reference_serving_grams and reference_serving_grams > 0
                else None
            )
            if unit in SLICE_UNITS:
                if serving is None:
                    return self.default_slice_grams
                return serving / SLICES_PER_SERVING
            return serving if serving is not None else self.default_piece_grams
        return _FIXED_GRAMS[unit]

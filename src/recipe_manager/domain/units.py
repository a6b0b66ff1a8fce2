"""Measurement units accepted on recipe ingredient lines."""

from enum import StrEnum


class Unit(StrEnum):
    """Units an ingredient quantity may be expressed in."""

    G = "g"
    KG = "kg"
    OZ = "oz"
    LB = "lb"
    ML = "ml"
    L = "l"
    CUP = "cup"
    CUPS = "cups"
    TBSP = "tbsp"
    TSP = "tsp"
    FL_OZ = "fl_oz"
    PT = "pt"
    QT = "qt"
    GAL = "gal"
    PIECE = "piece"
    PIECES = "pieces"
    SLICE = "slice"
    SLICES = "slices"
    CAN = "can"
    CANS = "cans"
    PACKAGE = "package"
    PACKAGES = "packages"
    HANDFUL = "handful"
    PINCH = "pinch"
    DASH = "dash"


MASS_UNITS = frozenset({Unit.G, Unit.KG, Unit.OZ, Unit.LB})

VOLUME_UNITS = frozenset(
    {
        Unit.ML,
        Unit.L,
        Unit.CUP,
        Unit.CUPS,
        Unit.TBSP,
        Unit.TSP,
        Unit.FL_OZ,
        Unit.PT,
        Unit.QT,
        Unit.GAL,
    }
)

SLICE_UNITS = frozenset({Unit.SLICE, Unit.SLICES})

COUNT_UNITS = frozenset(set(Unit) - MASS_UNITS - VOLUME_UNITS)

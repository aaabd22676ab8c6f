"""
Color family lookup.

Each of the six named families owns fifteen representative quantized codes.
The 90 codes cover part of the 216-code space; every other code resolves to
``ColorFamily.UNKNOWN`` and is never assigned to a nearest family.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

import numpy as np

from .quantize import LEVELS


class ColorFamily(str, Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    CYAN = "cyan"
    BLUE = "blue"
    MAGENTA = "magenta"
    UNKNOWN = "unknown"

    @classmethod
    def named(cls) -> Iterator["ColorFamily"]:
        """Named families in declaration order (excludes UNKNOWN)."""
        return (family for family in cls if family is not cls.UNKNOWN)


class UnknownFamilyError(ValueError):
    """Raised when a family name is not one of the six named families."""


FAMILY_CODES: Mapping[ColorFamily, Tuple[str, ...]] = MappingProxyType({
    ColorFamily.RED: (
        'FFCCCC', 'FF9999', 'CC9999', 'FF6666', 'CC6666', '996666', 'FF3333', 'CC3333',
        '993333', '663333', 'FF0000', 'CC0000', '990000', '660000', '330000',
    ),
    ColorFamily.YELLOW: (
        'FFFFCC', 'FFFF99', 'CCCC99', 'FFFF66', 'CCCC66', '999966', 'FFFF33', 'CCCC33',
        '999933', '666633', 'FFFF00', 'CCCC00', '999900', '666600', '333300',
    ),
    ColorFamily.GREEN: (
        'CCFFCC', '99FF99', '99CC99', '66FF66', '66CC66', '669966', '33FF33', '33CC33',
        '339933', '336633', '00FF00', '00CC00', '009900', '006600', '003300',
    ),
    ColorFamily.CYAN: (
        'CCFFFF', '99FFFF', '99CCCC', '66FFFF', '66CCCC', '669999', '33FFFF', '33CCCC',
        '339999', '336666', '00FFFF', '00CCCC', '009999', '006666', '003333',
    ),
    ColorFamily.BLUE: (
        'CCCCFF', '9999FF', '9999CC', '6666FF', '6666CC', '666699', '3333FF', '3333CC',
        '333399', '333366', '0000FF', '0000CC', '000099', '000066', '000033',
    ),
    ColorFamily.MAGENTA: (
        'FFCCFF', 'FF99FF', 'CC99CC', 'FF66FF', 'CC66CC', '996699', 'FF33FF', 'CC33CC',
        '993399', '663366', 'FF00FF', 'CC00CC', '990099', '660066', '330033',
    ),
})

NAMED_FAMILIES: Tuple[ColorFamily, ...] = tuple(ColorFamily.named())


def resolve_family(code: str) -> ColorFamily:
    """
    Map a quantized code to its color family.

    Args:
        code: Six hex digits, any case

    Returns:
        First family in declaration order whose table holds the code,
        or ``ColorFamily.UNKNOWN``
    """
    normalized = code.upper()
    for family in NAMED_FAMILIES:
        if normalized in FAMILY_CODES[family]:
            return family
    return ColorFamily.UNKNOWN


def resolve_family_name(code: str) -> str:
    """Same as ``resolve_family`` but returns the plain family name."""
    return resolve_family(code).value


def family_from_name(name: str) -> ColorFamily:
    """
    Look up a named family by its name (case-insensitive).

    Raises:
        UnknownFamilyError: If the name is not one of the six families
    """
    normalized = (name or "").strip().lower()
    for family in NAMED_FAMILIES:
        if family.value == normalized:
            return family
    valid = ", ".join(family.value for family in NAMED_FAMILIES)
    raise UnknownFamilyError(f"Unknown color family '{name}'. Supported: {valid}")


def _build_family_lookup() -> np.ndarray:
    lookup = np.full((len(LEVELS),) * 3, -1, dtype=np.intp)
    for r_index, red in enumerate(LEVELS):
        for g_index, green in enumerate(LEVELS):
            for b_index, blue in enumerate(LEVELS):
                family = resolve_family("%02X%02X%02X" % (red, green, blue))
                if family is not ColorFamily.UNKNOWN:
                    lookup[r_index, g_index, b_index] = NAMED_FAMILIES.index(family)
    lookup.setflags(write=False)
    return lookup


# Level-index triple -> position in NAMED_FAMILIES, -1 for unknown
FAMILY_LOOKUP: np.ndarray = _build_family_lookup()

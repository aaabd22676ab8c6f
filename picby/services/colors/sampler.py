"""
Dominant color family sampling.

Walks an image on a coarse pixel grid, tallies the family of every sampled
pixel and picks the family with the highest count.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Protocol, Tuple

import numpy as np

from .families import ColorFamily, FAMILY_LOOKUP, NAMED_FAMILIES, resolve_family
from .quantize import quantize, quantize_levels


class ImageHandle(Protocol):
    width: int
    height: int

    def pixel_at(self, x: int, y: int) -> Tuple[int, int, int]:
        ...


FrequencyTally = Dict[ColorFamily, int]


@dataclass
class SampleReport:
    """Outcome of one sampling pass."""
    family: ColorFamily
    tally: FrequencyTally
    sampled_points: int
    granularity: int

    @property
    def resolved_points(self) -> int:
        return sum(self.tally.values())


def normalize_granularity(granularity) -> int:
    """Coerce any integer-like stride to ``max(1, abs(value))``."""
    return max(1, abs(int(granularity)))


def new_tally() -> FrequencyTally:
    """Fresh tally with every named family at zero, in declaration order."""
    return OrderedDict((family, 0) for family in NAMED_FAMILIES)


def dominant_family(tally: FrequencyTally) -> ColorFamily:
    """
    Return the family with the highest count.

    Ties go to the earliest family in declaration order
    (red, yellow, green, cyan, blue, magenta). An all-zero tally is a tie
    across all six families, so it returns RED.
    """
    max_count = max(tally.values())
    if max_count == 0:
        return NAMED_FAMILIES[0]
    return next(family for family in NAMED_FAMILIES if tally[family] == max_count)


def _tally_grid(grid: np.ndarray, tally: FrequencyTally) -> int:
    levels = quantize_levels(grid)
    family_indices = FAMILY_LOOKUP[levels[..., 0], levels[..., 1], levels[..., 2]]
    resolved = family_indices[family_indices >= 0]
    counts = np.bincount(resolved, minlength=len(NAMED_FAMILIES))
    for index, family in enumerate(NAMED_FAMILIES):
        tally[family] += int(counts[index])
    return int(family_indices.size)


def _tally_pixels(image: ImageHandle, step: int, tally: FrequencyTally) -> int:
    sampled = 0
    for x in range(0, image.width, step):
        for y in range(0, image.height, step):
            family = resolve_family(quantize(*image.pixel_at(x, y)))
            sampled += 1
            if family is not ColorFamily.UNKNOWN:
                tally[family] += 1
    return sampled


def tally_families(image: ImageHandle, granularity: int) -> SampleReport:
    """
    Sample an image every ``granularity`` pixels along both axes.

    Handles exposing ``grid(step)`` (such as ``PixelImage``) are scanned
    with numpy; any other handle is read through ``pixel_at``. Both visit
    the same points and produce the same tally.

    Args:
        image: Decoded image handle
        granularity: Pixel stride, normalized with ``normalize_granularity``

    Returns:
        SampleReport with the dominant family and the full tally
    """
    step = normalize_granularity(granularity)
    tally = new_tally()
    sampled = 0

    if image.width > 0 and image.height > 0:
        if hasattr(image, "grid"):
            sampled = _tally_grid(image.grid(step), tally)
        else:
            sampled = _tally_pixels(image, step, tally)

    return SampleReport(
        family=dominant_family(tally),
        tally=tally,
        sampled_points=sampled,
        granularity=step,
    )


def sample(image: ImageHandle, granularity: int) -> ColorFamily:
    """Dominant family of an image at the given stride."""
    return tally_families(image, granularity).family

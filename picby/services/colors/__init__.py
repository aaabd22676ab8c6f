"""
PicBy Colors Module

Quantizes pixel colors into six-level codes, maps codes onto six named
color families, finds the dominant family of an image and filters image
folders by family.
"""

from .families import (
    ColorFamily,
    FAMILY_CODES,
    UnknownFamilyError,
    family_from_name,
    resolve_family,
    resolve_family_name,
)
from .indexer import (
    classify,
    classify_report,
    find_by_family,
    match_example,
    search_by_example,
    search_by_family,
    set_default_images_folder,
)
from .quantize import quantize, to_hex
from .sampler import SampleReport, dominant_family, sample, tally_families

__version__ = "1.0.0"

__all__ = [
    'ColorFamily',
    'FAMILY_CODES',
    'UnknownFamilyError',
    'SampleReport',
    'classify',
    'classify_report',
    'dominant_family',
    'family_from_name',
    'find_by_family',
    'match_example',
    'quantize',
    'resolve_family',
    'resolve_family_name',
    'sample',
    'search_by_example',
    'search_by_family',
    'set_default_images_folder',
    'tally_families',
    'to_hex',
]

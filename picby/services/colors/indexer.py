"""
Folder search by dominant color family.

Classifies every decodable image in a folder and keeps the ones whose
dominant family matches a target family, given by name or taken from an
example image. Entries that cannot be decoded are skipped.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from picby.config import config
from picby.services.imaging import (
    Decoded,
    FolderAccessError,
    FolderEntry,
    decoded_image,
    list_folder,
    try_decode,
)
from picby.utils.ids import generate_request_id
from picby.utils.logging import get_logger
from picby.utils.metrics import get_metrics_instance

from .families import ColorFamily, family_from_name
from .sampler import SampleReport, normalize_granularity, tally_families


def _resolve_granularity(granularity: Optional[int]) -> int:
    if granularity is None:
        granularity = config.DEFAULT_GRANULARITY
    return normalize_granularity(granularity)


def _resolve_folder(folder_path: Optional[str]) -> str:
    return folder_path if folder_path else config.IMAGES_FOLDER


def _record_classification(report: SampleReport, started: float) -> None:
    if not config.METRICS_ENABLED:
        return
    metrics = get_metrics_instance()
    metrics.increment_classification(report.family.value)
    metrics.record_timing("classify", (time.time() - started) * 1000)


def _classify_entry(entry: FolderEntry, granularity: int) -> Optional[ColorFamily]:
    """Dominant family of a folder entry, or None when it is not a decodable image."""
    started = time.time()
    result = try_decode(entry.path)
    if not isinstance(result, Decoded):
        get_logger().debug(
            "Skipping entry",
            extra={"entry": entry.identifier, "reason": result.reason}
        )
        if config.METRICS_ENABLED:
            get_metrics_instance().increment_skipped_count()
        return None

    image = result.image
    try:
        report = tally_families(image, granularity)
    finally:
        image.close()

    _record_classification(report, started)
    return report.family


def find_by_family(target: ColorFamily,
                   entries: Sequence[FolderEntry],
                   granularity: int,
                   workers: Optional[int] = None) -> List[str]:
    """
    Filter folder entries down to images whose dominant family is ``target``.

    Args:
        target: Family to keep
        entries: Folder entries in enumeration order
        granularity: Sampling stride for every image
        workers: Thread count; None uses ``config.SCAN_WORKERS``

    Returns:
        Matching identifiers in the same order as ``entries``
    """
    step = normalize_granularity(granularity)
    if workers is None:
        workers = config.SCAN_WORKERS
    workers = max(1, int(workers))

    if workers > 1 and len(entries) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, not completion order
            families = list(executor.map(lambda entry: _classify_entry(entry, step), entries))
    else:
        families = [_classify_entry(entry, step) for entry in entries]

    return [
        entry.identifier
        for entry, family in zip(entries, families)
        if family is target
    ]


def _scan_folder(target: ColorFamily, folder_path: str, granularity: int) -> List[str]:
    log = get_logger().bind(request_id=generate_request_id(), folder=folder_path)
    started = time.time()

    try:
        entries = list_folder(folder_path)
    except FolderAccessError as e:
        log.warning(
            "Folder not accessible, returning no matches",
            extra={"reason": e.reason}
        )
        if config.METRICS_ENABLED:
            get_metrics_instance().increment_folder_error_count()
        return []

    log.info(
        "Scanning folder",
        extra={
            "family": target.value,
            "entries": len(entries),
            "granularity": granularity,
        }
    )

    matches = find_by_family(target, entries, granularity)

    duration_ms = (time.time() - started) * 1000
    if config.METRICS_ENABLED:
        metrics = get_metrics_instance()
        metrics.increment_scan_count()
        metrics.record_timing("scan", duration_ms)
    log.info(
        f"Scan complete: {len(matches)}/{len(entries)} entries matched",
        extra={"duration_ms": round(duration_ms, 2)}
    )
    return matches


def search_by_family(family_name: str,
                     folder_path: Optional[str] = None,
                     granularity: Optional[int] = None) -> List[str]:
    """
    Find images in a folder whose dominant family is ``family_name``.

    Raises:
        UnknownFamilyError: If ``family_name`` is not a named family
    """
    target = family_from_name(family_name)
    return _scan_folder(target, _resolve_folder(folder_path), _resolve_granularity(granularity))


def classify_report(image_path: str, granularity: Optional[int] = None) -> SampleReport:
    """
    Classify a single image and return the full sampling report.

    Raises:
        ImageDecodeError: If the image cannot be decoded
    """
    step = _resolve_granularity(granularity)
    started = time.time()
    with decoded_image(image_path) as image:
        report = tally_families(image, step)
    _record_classification(report, started)
    return report


def classify(image_path: str, granularity: Optional[int] = None) -> str:
    """Dominant family name of a single image."""
    return classify_report(image_path, granularity).family.value


def match_example(example_path: str,
                  folder_path: Optional[str] = None,
                  granularity: Optional[int] = None) -> Tuple[ColorFamily, List[str]]:
    """
    Classify an example image, then scan a folder for its family.

    The example and the folder are sampled with the same granularity.

    Returns:
        Tuple of (example family, matching identifiers)

    Raises:
        ImageDecodeError: If the example image cannot be decoded
    """
    step = _resolve_granularity(granularity)
    target = classify_report(example_path, step).family
    get_logger().info(
        "Example classified",
        extra={"example": example_path, "family": target.value, "granularity": step}
    )
    return target, _scan_folder(target, _resolve_folder(folder_path), step)


def search_by_example(example_path: str,
                      folder_path: Optional[str] = None,
                      granularity: Optional[int] = None) -> List[str]:
    """Find images sharing the dominant family of an example image."""
    return match_example(example_path, folder_path, granularity)[1]


def set_default_images_folder(folder_path: str) -> None:
    """Folder used by searches that do not pass one."""
    config.set_default_images_folder(folder_path)

"""
PicBy v1 API Routes
Classification, folder search and color code endpoints.
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Path, Query

from picby.config import config
from picby.schemas import (
    ClassifyRequest,
    ClassifyResponse,
    ExampleSearchRequest,
    FamiliesResponse,
    FamilyInfo,
    FamilySearchRequest,
    HexResponse,
    QuantizeResponse,
    ResolveResponse,
    SearchResponse,
)
from picby.services.colors import (
    FAMILY_CODES,
    UnknownFamilyError,
    classify_report,
    family_from_name,
    match_example,
    quantize,
    resolve_family_name,
    search_by_family,
    to_hex,
)
from picby.services.colors.sampler import normalize_granularity
from picby.services.imaging import ImageDecodeError
from picby.utils.logging import get_logger
from picby.utils.metrics import get_metrics_instance

router = APIRouter(prefix="/v1", tags=["Color Search"])


def _granularity(value: Optional[int]) -> int:
    return normalize_granularity(config.DEFAULT_GRANULARITY if value is None else value)


@router.get("/families", response_model=FamiliesResponse)
def list_families():
    """Named families and their representative codes, in declaration order."""
    return FamiliesResponse(
        families=[
            FamilyInfo(name=family.value, codes=list(codes))
            for family, codes in FAMILY_CODES.items()
        ]
    )


@router.get("/quantize", response_model=QuantizeResponse)
def quantize_color(
    r: int = Query(..., ge=0, le=255, description="Red channel"),
    g: int = Query(..., ge=0, le=255, description="Green channel"),
    b: int = Query(..., ge=0, le=255, description="Blue channel")
):
    """Quantize an RGB triple and resolve its family."""
    code = quantize(r, g, b)
    return QuantizeResponse(code=code, family=resolve_family_name(code))


@router.get("/hex", response_model=HexResponse)
def hex_color(
    r: int = Query(..., ge=0, le=255, description="Red channel"),
    g: int = Query(..., ge=0, le=255, description="Green channel"),
    b: int = Query(..., ge=0, le=255, description="Blue channel"),
    alpha: Optional[int] = Query(None, ge=0, le=127, description="Alpha (0 opaque, 127 transparent)")
):
    """Hex string for an RGB(A) value."""
    return HexResponse(hex=to_hex(r, g, b, alpha))


@router.get("/resolve/{code}", response_model=ResolveResponse)
def resolve_code(
    code: str = Path(..., pattern=r"^[0-9A-Fa-f]{6}$", description="Quantized color code")
):
    """Family of a quantized code, or 'unknown'."""
    return ResolveResponse(code=code.upper(), family=resolve_family_name(code))


@router.post("/classify", response_model=ClassifyResponse)
def classify_image(body: ClassifyRequest):
    """Dominant color family of one image."""
    try:
        report = classify_report(body.image_path, _granularity(body.granularity))
    except ImageDecodeError as e:
        get_logger().warning("Classification failed", extra={"path": e.path, "reason": e.reason})
        raise HTTPException(status_code=422, detail=str(e))

    return ClassifyResponse(
        family=report.family.value,
        tally={family.value: count for family, count in report.tally.items()},
        sampled_points=report.sampled_points,
        granularity=report.granularity
    )


@router.post("/search/family", response_model=SearchResponse)
def search_family(body: FamilySearchRequest):
    """Images in a folder whose dominant family is the requested one."""
    try:
        family = family_from_name(body.family)
    except UnknownFamilyError as e:
        raise HTTPException(status_code=400, detail=str(e))

    step = _granularity(body.granularity)
    folder = body.folder_path or config.IMAGES_FOLDER
    matches = search_by_family(family.value, folder, step)
    return SearchResponse(family=family.value, folder_path=folder, granularity=step, matches=matches)


@router.post("/search/example", response_model=SearchResponse)
def search_example(body: ExampleSearchRequest):
    """Images in a folder sharing the dominant family of an example image."""
    step = _granularity(body.granularity)
    folder = body.folder_path or config.IMAGES_FOLDER
    try:
        family, matches = match_example(body.example_path, folder, step)
    except ImageDecodeError as e:
        get_logger().warning("Example image rejected", extra={"path": e.path, "reason": e.reason})
        raise HTTPException(status_code=422, detail=str(e))

    return SearchResponse(family=family.value, folder_path=folder, granularity=step, matches=matches)


@router.get("/metrics")
def get_metrics():
    """In-process classification and scan metrics."""
    return get_metrics_instance().get_summary()

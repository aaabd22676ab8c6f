"""
PicBy API Schemas
Pydantic models for classification and color search request/response validation.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("picby", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# COLOR CODE SCHEMAS
# ============================================================================

class QuantizeResponse(BaseModel):
    """Quantized code of an RGB triple and the family it resolves to."""
    code: str = Field(
        ...,
        pattern=r"^[0-9A-F]{6}$",
        description="Quantized color code, two uppercase hex digits per channel"
    )
    family: str = Field(..., description="Color family name or 'unknown'")


class HexResponse(BaseModel):
    """Hex color string for an RGB(A) value."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9a-f]{6}([0-9a-f]{2})?$",
        description="Hex color in format #rrggbb or #rrggbbaa"
    )


class ResolveResponse(BaseModel):
    """Family lookup result for a quantized code."""
    code: str = Field(..., description="Normalized (uppercase) code")
    family: str = Field(..., description="Color family name or 'unknown'")


class FamilyInfo(BaseModel):
    """One named color family and its representative codes."""
    name: str = Field(..., description="Family name")
    codes: List[str] = Field(..., min_length=15, max_length=15, description="Representative codes")


class FamiliesResponse(BaseModel):
    """All named families in declaration order."""
    families: List[FamilyInfo]


# ============================================================================
# CLASSIFICATION & SEARCH SCHEMAS
# ============================================================================

class ClassifyRequest(BaseModel):
    """Classify a single image file."""
    image_path: str = Field(..., min_length=1, description="Path of the image to classify")
    granularity: Optional[int] = Field(
        None,
        description="Sampling stride in pixels (normalized to max(1, |value|)); default from config"
    )


class ClassifyResponse(BaseModel):
    """Dominant family with the tally behind it."""
    family: str = Field(..., description="Dominant color family")
    tally: Dict[str, int] = Field(..., description="Samples per family, in declaration order")
    sampled_points: int = Field(..., ge=0, description="Grid points visited")
    granularity: int = Field(..., ge=1, description="Stride actually used")


class FamilySearchRequest(BaseModel):
    """Search a folder for images of a named family."""
    family: str = Field(..., description="red, yellow, green, cyan, blue or magenta")
    folder_path: Optional[str] = Field(None, description="Folder to scan; default from config")
    granularity: Optional[int] = Field(None, description="Sampling stride in pixels")


class ExampleSearchRequest(BaseModel):
    """Search a folder for images sharing the dominant family of an example."""
    example_path: str = Field(..., min_length=1, description="Path of the example image")
    folder_path: Optional[str] = Field(None, description="Folder to scan; default from config")
    granularity: Optional[int] = Field(
        None,
        description="Sampling stride applied to both the example and the folder"
    )


class SearchResponse(BaseModel):
    """Folder search result."""
    family: str = Field(..., description="Family searched for")
    folder_path: str = Field(..., description="Folder that was scanned")
    granularity: int = Field(..., ge=1, description="Stride actually used")
    matches: List[str] = Field(..., description="Matching entries in folder enumeration order")

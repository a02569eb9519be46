"""
Color.io API Schemas
Pydantic models for palette extraction and color tooling request/response validation.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from colorio.config import config

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"

Quality = Literal["low", "medium", "high"]


# ============================================================================
# COLOR VALUES
# ============================================================================

class RGBModel(BaseModel):
    """sRGB channels, each 0-255."""
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class HSLModel(BaseModel):
    """Hue in degrees, saturation and lightness in percent."""
    h: float = Field(..., ge=0, lt=360)
    s: float = Field(..., ge=0, le=100)
    l: float = Field(..., ge=0, le=100)


class ColorModel(BaseModel):
    """A palette color."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Uppercase hex code #RRGGBB")
    rgb: RGBModel
    hsl: HSLModel
    name: Optional[str] = Field(None, description="Nearest human-readable color name")
    percentage: Optional[float] = Field(
        None,
        gt=0,
        le=100,
        description="Share of sampled pixels (extraction results only)"
    )


# ============================================================================
# EXTRACTION
# ============================================================================

class ExtractRequest(BaseModel):
    """Extract a palette from an encoded image."""
    image_base64: str = Field(
        ...,
        min_length=1,
        description="Base64-encoded PNG, JPEG or WebP; a data: URL is accepted"
    )
    color_count: int = Field(
        config.DEFAULT_COLOR_COUNT,
        ge=config.MIN_COLOR_COUNT,
        le=config.MAX_COLOR_COUNT,
        description="Maximum number of colors to return"
    )
    include_transparent: bool = Field(False, description="Sample pixels with alpha < 128 too")
    quality: Quality = Field(
        config.DEFAULT_QUALITY,
        description="Downsizing preset: low=100px, medium=150px, high=200px longest edge"
    )


class PixelExtractRequest(BaseModel):
    """Extract a palette from an already decoded RGBA buffer."""
    pixels: str = Field(..., description="Base64-encoded raw RGBA bytes, row-major")
    width: int = Field(..., ge=1, description="Image width in pixels")
    height: int = Field(..., ge=1, description="Image height in pixels")
    color_count: int = Field(
        config.DEFAULT_COLOR_COUNT,
        ge=config.MIN_COLOR_COUNT,
        le=config.MAX_COLOR_COUNT
    )
    include_transparent: bool = False


class ExtractResponse(BaseModel):
    """Ranked extraction result."""
    request_id: str
    width: int = Field(..., description="Width of the sampled image")
    height: int = Field(..., description="Height of the sampled image")
    colors: List[ColorModel]
    dominant_color: ColorModel
    processing_time: float = Field(..., description="Engine time in milliseconds")


# ============================================================================
# SINGLE COLOR TOOLS
# ============================================================================

class LabModel(BaseModel):
    l: float
    a: float
    b: float


class ConvertResponse(BaseModel):
    """Everything the engine knows about one color."""
    hex: str
    rgb: RGBModel
    hsl: HSLModel
    lab: LabModel
    name: str
    is_light: bool
    text_color: str = Field(..., description="Readable ink (#000000 or #FFFFFF)")
    contrast_on_white: float
    contrast_on_black: float


class NamedColorModel(BaseModel):
    name: str
    hex: str
    family: str


class NameResponse(BaseModel):
    hex: str
    name: str
    nearest: NamedColorModel


# ============================================================================
# PALETTE TOOLS
# ============================================================================

class HarmonyRequest(BaseModel):
    hex: str = Field(..., description="Base color")


class HarmonySchemeModel(BaseModel):
    type: str
    name: str
    description: str
    colors: List[ColorModel]


class HarmonyResponse(BaseModel):
    base: ColorModel
    suggestions: List[HarmonySchemeModel]


class PaletteRequest(BaseModel):
    """A palette given as hex codes, dominant color first."""
    colors: List[str] = Field(..., max_length=64)


class SuggestionsRequest(PaletteRequest):
    max_suggestions: int = Field(6, ge=0, le=20)


class CompletionSuggestionModel(BaseModel):
    type: str
    name: str
    color: ColorModel
    reason: str


class SuggestionsResponse(BaseModel):
    suggestions: List[CompletionSuggestionModel]


class GradientStopModel(BaseModel):
    color: ColorModel
    position: float = Field(..., ge=0, le=100)


class GradientModel(BaseModel):
    name: str
    kind: Literal["linear", "radial", "conic"]
    stops: List[GradientStopModel]
    css: str


class GradientsResponse(BaseModel):
    gradients: List[GradientModel]


class SimilarityRequest(BaseModel):
    colors: List[str] = Field(..., max_length=64)
    other_colors: List[str] = Field(..., max_length=64)


class SimilarityResponse(BaseModel):
    similarity: float = Field(..., description="How well other_colors cover colors (0-100)")
    reverse_similarity: float = Field(..., description="How well colors cover other_colors (0-100)")


class CandidatePalette(BaseModel):
    id: str
    colors: List[str] = Field(..., max_length=64)


class SimilarPalettesRequest(PaletteRequest):
    candidates: List[CandidatePalette] = Field(..., max_length=500)
    min_similarity: float = Field(config.SIMILARITY_THRESHOLD, ge=0, le=100)
    limit: int = Field(config.SIMILAR_PALETTES_LIMIT, ge=1, le=100)


class SimilarPaletteModel(BaseModel):
    palette_id: str
    similarity: float
    colors: List[ColorModel]


class SimilarPalettesResponse(BaseModel):
    matches: List[SimilarPaletteModel]


# ============================================================================
# SERVICE
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("colorio-palette", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
    code: str = Field(..., description="Machine-readable error code")
    request_id: Optional[str] = None

"""
Color.io Palette API Routes
Exposes the color engine: extraction, conversion, naming, harmony,
completion advice, gradients and palette similarity.

Handlers are plain ``def`` functions so FastAPI runs the CPU-bound engine
calls in its threadpool. Engine errors propagate to the exception handlers
registered in ``main.py``.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Query, Request

from colorio.config import config
from colorio.schemas import (
    ConvertResponse,
    ErrorResponse,
    ExtractRequest,
    ExtractResponse,
    GradientsResponse,
    HarmonyRequest,
    HarmonyResponse,
    NameResponse,
    PaletteRequest,
    PixelExtractRequest,
    SimilarityRequest,
    SimilarityResponse,
    SimilarPalettesRequest,
    SimilarPalettesResponse,
    SuggestionsRequest,
    SuggestionsResponse,
)
from colorio.services.colors import (
    BLACK,
    WHITE,
    Color,
    ExtractionOptions,
    ExtractionResult,
    contrast_ratio,
    create_color_from_hex,
    extract_colors,
    find_best_similarity,
    get_color_name,
    get_gradient_suggestions,
    get_harmony_suggestions,
    get_palette_completion_suggestions,
    get_text_color,
    is_light_color,
    rank_similar_palettes,
    rgb_to_lab,
)
from colorio.services.colors.names import find_nearest_named_color
from colorio.services.imaging import decode_base64_payload, decode_image_to_rgba
from colorio.utils.logging import get_logger
from colorio.utils.metrics import get_metrics, performance_monitor

router = APIRouter(
    prefix="/colors",
    tags=["Colors"],
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)


def _start(request: Request, endpoint: str):
    """Count the request and return a logger bound to its request id."""
    get_metrics().increment_request_count(endpoint)
    return get_logger().for_request(request.state.request_id, endpoint)


def _parse_palette(hex_colors: List[str]) -> List[Color]:
    return [create_color_from_hex(value) for value in hex_colors]


def _extraction_response(request: Request, result: ExtractionResult,
                         width: int, height: int) -> Dict[str, Any]:
    get_metrics().record_palette_size(len(result.colors))
    return {
        "request_id": request.state.request_id,
        "width": width,
        "height": height,
        **result.to_dict(),
    }


@router.post("/extract",
             response_model=ExtractResponse,
             summary="Extract Palette",
             description="Extract the dominant colors of a base64-encoded image")
def extract_palette(request: Request, body: ExtractRequest) -> Dict[str, Any]:
    log = _start(request, "extract")

    max_dimension = config.max_dimension_for(body.quality)
    with performance_monitor("image_decoding", quality=body.quality):
        rgba, width, height = decode_image_to_rgba(body.image_base64, max_dimension)

    log.info("Decoded image for extraction", extra={"width": width, "height": height})

    options = ExtractionOptions(color_count=body.color_count,
                                include_transparent=body.include_transparent)
    result = extract_colors(rgba, width, height, options)

    log.info("Extraction complete", extra={
        "color_count": len(result.colors),
        "dominant": result.dominant_color.hex,
        "processing_time_ms": round(result.processing_time, 2),
    })
    return _extraction_response(request, result, width, height)


@router.post("/extract/pixels",
             response_model=ExtractResponse,
             summary="Extract Palette From Pixels",
             description="Extract the dominant colors of a raw RGBA buffer")
def extract_palette_from_pixels(request: Request, body: PixelExtractRequest) -> Dict[str, Any]:
    log = _start(request, "extract_pixels")

    pixels = decode_base64_payload(body.pixels)
    expected = body.width * body.height * 4
    if len(pixels) < expected:
        raise HTTPException(
            status_code=400,
            detail=f"Pixel buffer holds {len(pixels)} bytes, expected {expected} "
                   f"for a {body.width}x{body.height} RGBA image"
        )

    options = ExtractionOptions(color_count=body.color_count,
                                include_transparent=body.include_transparent)
    result = extract_colors(pixels, body.width, body.height, options)

    log.info("Pixel extraction complete", extra={"color_count": len(result.colors)})
    return _extraction_response(request, result, body.width, body.height)


@router.get("/convert",
            response_model=ConvertResponse,
            summary="Convert Color",
            description="Hex to RGB, HSL, Lab, name and contrast information")
def convert_color(request: Request,
                  hex: str = Query(..., description="Hex color, with or without #")) -> Dict[str, Any]:
    _start(request, "convert")
    color = create_color_from_hex(hex)
    l, a, b = rgb_to_lab(color.rgb)
    return {
        "hex": color.hex,
        "rgb": color.rgb.to_dict(),
        "hsl": color.hsl.to_dict(),
        "lab": {"l": l, "a": a, "b": b},
        "name": get_color_name(color.rgb),
        "is_light": is_light_color(color.rgb),
        "text_color": get_text_color(color.rgb).to_hex(),
        "contrast_on_white": contrast_ratio(color.rgb, WHITE),
        "contrast_on_black": contrast_ratio(color.rgb, BLACK),
    }


@router.get("/name",
            response_model=NameResponse,
            summary="Name Color",
            description="Nearest human-readable name for a color")
def name_color(request: Request,
               hex: str = Query(..., description="Hex color, with or without #")) -> Dict[str, Any]:
    _start(request, "name")
    color = create_color_from_hex(hex)
    nearest = find_nearest_named_color(color.rgb)
    return {
        "hex": color.hex,
        "name": get_color_name(color.rgb),
        "nearest": {"name": nearest.name, "hex": nearest.rgb.to_hex(), "family": nearest.family},
    }


@router.post("/harmony",
             response_model=HarmonyResponse,
             summary="Harmony Schemes",
             description="Six classic harmony schemes around a base color")
def harmony(request: Request, body: HarmonyRequest) -> Dict[str, Any]:
    _start(request, "harmony")
    base = create_color_from_hex(body.hex)
    return {
        "base": base.to_dict(),
        "suggestions": [suggestion.to_dict() for suggestion in get_harmony_suggestions(base)],
    }


@router.post("/suggestions",
             response_model=SuggestionsResponse,
             summary="Palette Completion",
             description="Colors that would round out an existing palette")
def completion_suggestions(request: Request, body: SuggestionsRequest) -> Dict[str, Any]:
    _start(request, "suggestions")
    colors = _parse_palette(body.colors)
    suggestions = get_palette_completion_suggestions(colors, max_suggestions=body.max_suggestions)
    return {"suggestions": [suggestion.to_dict() for suggestion in suggestions]}


@router.post("/gradients",
             response_model=GradientsResponse,
             summary="Gradient Suggestions",
             description="CSS gradients built from palette colors")
def gradients(request: Request, body: PaletteRequest) -> Dict[str, Any]:
    _start(request, "gradients")
    colors = _parse_palette(body.colors)
    return {"gradients": [gradient.to_dict() for gradient in get_gradient_suggestions(colors)]}


@router.post("/similarity",
             response_model=SimilarityResponse,
             summary="Palette Similarity",
             description="Directional best-match similarity between two palettes")
def similarity(request: Request, body: SimilarityRequest) -> Dict[str, float]:
    _start(request, "similarity")
    colors = _parse_palette(body.colors)
    others = _parse_palette(body.other_colors)
    return {
        "similarity": find_best_similarity(colors, others),
        "reverse_similarity": find_best_similarity(others, colors),
    }


@router.post("/similar-palettes",
             response_model=SimilarPalettesResponse,
             summary="Similar Palettes",
             description="Rank candidate palettes by similarity to a query palette")
def similar_palettes(request: Request, body: SimilarPalettesRequest) -> Dict[str, Any]:
    log = _start(request, "similar_palettes")
    colors = _parse_palette(body.colors)
    candidates = {candidate.id: _parse_palette(candidate.colors) for candidate in body.candidates}

    matches = rank_similar_palettes(colors, candidates,
                                    min_similarity=body.min_similarity, limit=body.limit)

    log.info("Ranked similar palettes", extra={
        "candidate_count": len(candidates),
        "match_count": len(matches),
    })
    return {"matches": [match.to_dict() for match in matches]}


@router.get("/metrics",
            summary="Service Metrics",
            description="In-process request counters and timing statistics")
def metrics_summary() -> Dict[str, Any]:
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return get_metrics().get_summary()

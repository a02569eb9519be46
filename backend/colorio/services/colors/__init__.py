"""
Color.io Colors Module

Palette extraction (median cut + k-means + Delta-E merging), color space
math, color naming, harmony schemes, palette advice, gradients and palette
similarity. Everything exported here is a pure function or value type.
"""

from .advisor import CompletionSuggestion, generate_palette_from_color, get_palette_completion_suggestions
from .errors import ColorEngineError, EmptyImageError, ImageDecodeError, InvalidColorFormat
from .extraction import extract_colors
from .gradients import GradientStop, GradientSuggestion, get_gradient_suggestions
from .harmony import HarmonySuggestion, get_harmony_suggestions
from .models import HSL, RGB, Color, ExtractionOptions, ExtractionResult, NamedColor
from .names import (
    get_all_named_colors,
    get_color_name,
    get_colors_by_family,
    search_colors_by_name,
)
from .similarity import SimilarPalette, find_best_similarity, rank_similar_palettes
from .space import (
    BLACK,
    WHITE,
    analogous,
    complementary,
    contrast_ratio,
    create_color_from_hex,
    create_color_from_hsl,
    create_color_from_rgb,
    darken,
    delta_e,
    desaturate,
    get_text_color,
    hex_to_rgb,
    hsl_to_rgb,
    is_light_color,
    lighten,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_lab,
    saturate,
    split_complementary,
    square,
    tetradic,
    triadic,
)


__all__ = [
    "BLACK", "WHITE", "HSL", "RGB", "Color", "NamedColor", "ExtractionOptions", "ExtractionResult",
    "ColorEngineError", "InvalidColorFormat", "EmptyImageError", "ImageDecodeError",
    "extract_colors",
    "hex_to_rgb", "rgb_to_hex", "rgb_to_hsl", "hsl_to_rgb", "rgb_to_lab",
    "delta_e", "relative_luminance", "contrast_ratio", "is_light_color", "get_text_color",
    "complementary", "analogous", "triadic", "split_complementary", "tetradic", "square",
    "lighten", "darken", "saturate", "desaturate",
    "create_color_from_hex", "create_color_from_rgb", "create_color_from_hsl",
    "get_color_name", "get_colors_by_family", "search_colors_by_name", "get_all_named_colors",
    "HarmonySuggestion", "get_harmony_suggestions",
    "CompletionSuggestion", "get_palette_completion_suggestions", "generate_palette_from_color",
    "GradientStop", "GradientSuggestion", "get_gradient_suggestions",
    "SimilarPalette", "find_best_similarity", "rank_similar_palettes",
]

"""
Color space conversions and perceptual metrics.

Provides sRGB <-> hex/HSL conversion, an approximate CIE Lab transform with
CIE76 Delta-E, WCAG contrast, and the hue-rotation helpers the harmony and
advisor modules build on. Everything here is a pure function.
"""

import math
import re
from typing import Optional, Sequence, Tuple, Union

from .errors import InvalidColorFormat
from .models import HSL, RGB, Color, round_half_up

RGBLike = Union[RGB, Sequence[float]]

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")

# Linear sRGB -> XYZ (D65)
_XYZ_MATRIX = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)
_REFERENCE_WHITE = (0.95047, 1.0, 1.08883)

_LAB_EPSILON = 0.008856

BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


def as_rgb(rgb: RGBLike) -> RGB:
    return rgb if isinstance(rgb, RGB) else RGB.from_sequence(rgb)


def rgb_to_hex(rgb: RGBLike) -> str:
    """Convert RGB to an uppercase ``#RRGGBB`` string."""
    return as_rgb(rgb).to_hex()


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse a hex color string.

    Accepts an optional leading ``#`` followed by exactly six hex digits,
    case-insensitive. Surrounding whitespace is rejected.

    Raises:
        InvalidColorFormat: for any other input
    """
    if not isinstance(hex_color, str):
        raise InvalidColorFormat(hex_color)
    match = _HEX_PATTERN.fullmatch(hex_color)
    if match is None:
        raise InvalidColorFormat(hex_color)
    return RGB(*(int(part, 16) for part in match.groups()))


def rgb_to_hsl(rgb: RGBLike) -> HSL:
    """
    Convert RGB to HSL with integer components.

    Grayscale inputs map to hue 0.
    """
    r, g, b = (channel / 255 for channel in as_rgb(rgb))
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    hue = 0.0
    saturation = 0.0

    if high != low:
        delta = high - low
        if lightness > 0.5:
            saturation = delta / (2 - high - low)
        else:
            saturation = delta / (high + low)

        if high == r:
            hue = ((g - b) / delta + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / delta + 2) / 6
        else:
            hue = ((r - g) / delta + 4) / 6

    return HSL(
        h=round_half_up(hue * 360) % 360,
        s=round_half_up(saturation * 100),
        l=round_half_up(lightness * 100),
    )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hsl: HSL) -> RGB:
    """Convert HSL to RGB; zero saturation yields a gray of the same lightness."""
    h = hsl.h / 360
    s = hsl.s / 100
    l = hsl.l / 100

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return RGB(r * 255, g * 255, b * 255)


def _srgb_to_linear(channel: float) -> float:
    c = channel / 255
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def _lab_f(t: float) -> float:
    return t ** (1 / 3) if t > _LAB_EPSILON else 7.787 * t + 16 / 116


def rgb_to_lab(rgb: RGBLike) -> Tuple[float, float, float]:
    """Approximate CIE Lab coordinates of an sRGB color (D65 white)."""
    linear = [_srgb_to_linear(channel) for channel in as_rgb(rgb)]
    x, y, z = (
        sum(weight * value for weight, value in zip(row, linear)) / white
        for row, white in zip(_XYZ_MATRIX, _REFERENCE_WHITE)
    )
    fx, fy, fz = _lab_f(x), _lab_f(y), _lab_f(z)
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def delta_e(rgb1: RGBLike, rgb2: RGBLike) -> float:
    """
    CIE76 perceptual distance between two sRGB colors.

    Symmetric, and exactly 0.0 for identical inputs.
    """
    lab1 = rgb_to_lab(rgb1)
    lab2 = rgb_to_lab(rgb2)
    return math.sqrt(sum((b - a) ** 2 for a, b in zip(lab1, lab2)))


def relative_luminance(rgb: RGBLike) -> float:
    """WCAG 2.x relative luminance in [0, 1]."""
    def linearize(channel: int) -> float:
        c = channel / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linearize(channel) for channel in as_rgb(rgb))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(rgb1: RGBLike, rgb2: RGBLike) -> float:
    """WCAG contrast ratio: 21 for black on white, 1 for identical colors."""
    l1 = relative_luminance(rgb1)
    l2 = relative_luminance(rgb2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def is_light_color(rgb: RGBLike) -> bool:
    """Perceived brightness above one half, used to pick readable ink."""
    r, g, b = as_rgb(rgb)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255 > 0.5


def get_text_color(background: RGBLike) -> RGB:
    """Black ink on light backgrounds, white ink on dark ones."""
    return BLACK if is_light_color(background) else WHITE


# ---------------------------------------------------------------------------
# Hue rotation helpers
# ---------------------------------------------------------------------------

def rotate_hue(hsl: HSL, degrees: float) -> HSL:
    """Rotate hue by ``degrees`` holding saturation and lightness."""
    return HSL(h=(hsl.h + degrees) % 360, s=hsl.s, l=hsl.l)


def complementary(hsl: HSL) -> HSL:
    return rotate_hue(hsl, 180)


def analogous(hsl: HSL) -> Tuple[HSL, HSL]:
    """Neighbors at +30 and -30 degrees."""
    return rotate_hue(hsl, 30), rotate_hue(hsl, -30)


def triadic(hsl: HSL) -> Tuple[HSL, HSL]:
    return rotate_hue(hsl, 120), rotate_hue(hsl, 240)


def split_complementary(hsl: HSL) -> Tuple[HSL, HSL]:
    return rotate_hue(hsl, 150), rotate_hue(hsl, 210)


def tetradic(hsl: HSL) -> Tuple[HSL, HSL, HSL, HSL]:
    """Rectangle scheme: base, +60, +180, +240."""
    return hsl, rotate_hue(hsl, 60), rotate_hue(hsl, 180), rotate_hue(hsl, 240)


def square(hsl: HSL) -> Tuple[HSL, HSL, HSL, HSL]:
    return hsl, rotate_hue(hsl, 90), rotate_hue(hsl, 180), rotate_hue(hsl, 270)


def lighten(hsl: HSL, amount: float) -> HSL:
    return HSL(h=hsl.h, s=hsl.s, l=min(100, hsl.l + amount))


def darken(hsl: HSL, amount: float) -> HSL:
    return HSL(h=hsl.h, s=hsl.s, l=max(0, hsl.l - amount))


def saturate(hsl: HSL, amount: float) -> HSL:
    return HSL(h=hsl.h, s=min(100, hsl.s + amount), l=hsl.l)


def desaturate(hsl: HSL, amount: float) -> HSL:
    return HSL(h=hsl.h, s=max(0, hsl.s - amount), l=hsl.l)


def hue_distance(h1: float, h2: float) -> float:
    """Shortest angular distance between two hues, in degrees [0, 180]."""
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff)


# ---------------------------------------------------------------------------
# Color constructors
# ---------------------------------------------------------------------------

def create_color_from_rgb(rgb: RGBLike, name: Optional[str] = None) -> Color:
    rgb = as_rgb(rgb)
    return Color(rgb=rgb, hsl=rgb_to_hsl(rgb), name=name)


def create_color_from_hex(hex_color: str, name: Optional[str] = None) -> Color:
    return create_color_from_rgb(hex_to_rgb(hex_color), name=name)


def create_color_from_hsl(hsl: HSL, name: Optional[str] = None) -> Color:
    """Build a Color keeping the given HSL as-is alongside its RGB rendering."""
    return Color(rgb=hsl_to_rgb(hsl), hsl=hsl, name=name)

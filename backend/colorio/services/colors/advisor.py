"""
Palette completion advice.

Looks at the lightness, saturation and hue coverage of an existing palette and
proposes colors that would round it out.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from loguru import logger

from .models import HSL, Color, round_half_up
from .space import (
    RGBLike,
    as_rgb,
    create_color_from_hsl,
    create_color_from_rgb,
    darken,
    desaturate,
    lighten,
    rgb_to_hsl,
    rotate_hue,
    saturate,
)

MAX_SUGGESTIONS = 6
LIGHTER_CEILING = 85
DARKER_FLOOR = 20
SHADE_STEP = 20
MUTED_ABOVE = 30
MUTED_STEP = 30
VIBRANT_BELOW = 80
VIBRANT_STEP = 20
MIN_HUE_GAP = 60
COMPLEMENT_TOLERANCE = 30


@dataclass(frozen=True)
class CompletionSuggestion:
    type: str
    name: str
    color: Color
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "color": self.color.to_dict(),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class HueGap:
    start: float
    end: float
    size: float

    @property
    def midpoint(self) -> float:
        return (self.start + self.size / 2) % 360


def find_hue_gaps(hues: Sequence[float]) -> List[HueGap]:
    """
    Circular gaps between consecutive distinct hues, largest first.

    Repeated hues are collapsed before measuring. A single distinct hue leaves
    one full 360 degree gap.
    """
    ordered = sorted(set(hues))
    gaps = []
    for index, current in enumerate(ordered):
        following = ordered[(index + 1) % len(ordered)]
        size = following - current if following > current else 360 - current + following
        gaps.append(HueGap(start=current, end=following, size=size))
    return sorted(gaps, key=lambda gap: gap.size, reverse=True)


def _has_complement(hues: Sequence[float], complement: float) -> bool:
    return any(
        abs(h - complement) < COMPLEMENT_TOLERANCE or abs(h - complement) > 360 - COMPLEMENT_TOLERANCE
        for h in hues
    )


def get_palette_completion_suggestions(colors: Sequence[Color],
                                       max_suggestions: int = MAX_SUGGESTIONS) -> List[CompletionSuggestion]:
    """
    Suggest colors that complete an existing palette.

    The first color is treated as dominant. Candidates are produced in a fixed
    order (lighter, darker, muted, vibrant, up to two hue-gap fills,
    complementary accent) and the list is cut to ``max_suggestions``.

    Args:
        colors: existing palette, dominant color first
        max_suggestions: upper bound on returned suggestions

    Returns:
        Suggestions in priority order; empty for an empty palette
    """
    if not colors:
        return []

    dominant = colors[0].hsl
    hues = [c.hsl.h for c in colors]
    lightnesses = [c.hsl.l for c in colors]
    saturations = [c.hsl.s for c in colors]
    avg_lightness = sum(lightnesses) / len(lightnesses)
    avg_saturation = sum(saturations) / len(saturations)

    suggestions: List[CompletionSuggestion] = []

    if max(lightnesses) < LIGHTER_CEILING:
        suggestions.append(CompletionSuggestion(
            type="lighter",
            name="Lighter Variant",
            color=create_color_from_hsl(lighten(dominant, SHADE_STEP)),
            reason="Add a lighter shade for highlights and backgrounds",
        ))

    if min(lightnesses) > DARKER_FLOOR:
        suggestions.append(CompletionSuggestion(
            type="darker",
            name="Darker Variant",
            color=create_color_from_hsl(darken(dominant, SHADE_STEP)),
            reason="Add a darker shade for text and emphasis",
        ))

    if avg_saturation > MUTED_ABOVE:
        suggestions.append(CompletionSuggestion(
            type="desaturated",
            name="Muted Variant",
            color=create_color_from_hsl(desaturate(dominant, MUTED_STEP)),
            reason="Add a muted tone for subtle elements",
        ))

    if avg_saturation < VIBRANT_BELOW:
        suggestions.append(CompletionSuggestion(
            type="saturated",
            name="Vibrant Variant",
            color=create_color_from_hsl(saturate(dominant, VIBRANT_STEP)),
            reason="Add a vibrant accent color",
        ))

    for gap in find_hue_gaps(hues)[:2]:
        if gap.size <= MIN_HUE_GAP:
            continue
        hue = round_half_up(gap.midpoint)
        fill = HSL(h=hue, s=round_half_up(avg_saturation), l=round_half_up(avg_lightness))
        suggestions.append(CompletionSuggestion(
            type="gap-fill",
            name="Gap Fill",
            color=create_color_from_hsl(fill),
            reason=f"Fill the gap in the color wheel (around {hue}°)",
        ))

    complement = rotate_hue(dominant, 180)
    if not _has_complement(hues, complement.h):
        suggestions.append(CompletionSuggestion(
            type="harmony",
            name="Complementary Accent",
            color=create_color_from_hsl(complement),
            reason="Add contrast with a complementary color",
        ))

    logger.debug(f"Completion advice: {len(suggestions)} candidates for {len(colors)} colors")
    return suggestions[:max_suggestions]


def generate_palette_from_color(base: RGBLike, count: int = 5) -> List[Color]:
    """
    Derive a small palette from one color using color theory.

    Order: base, complementary, analogous +30, analogous -30, triadic +120.
    At most five colors are produced; ``count`` truncates the list.
    """
    base_color = create_color_from_rgb(as_rgb(base))
    base_hsl = rgb_to_hsl(base_color.rgb)
    related = [
        create_color_from_hsl(rotate_hue(base_hsl, degrees))
        for degrees in (180, 30, 330, 120)
    ]
    return ([base_color] + related)[:max(1, count)]

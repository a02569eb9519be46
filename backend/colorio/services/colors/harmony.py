"""
Color harmony schemes generated from a single base color.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import Color
from . import space


@dataclass(frozen=True)
class HarmonySuggestion:
    type: str
    name: str
    description: str
    colors: List[Color]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "colors": [color.to_dict() for color in self.colors],
        }


def get_harmony_suggestions(base_color: Optional[Color]) -> List[HarmonySuggestion]:
    """
    Build the six classic harmony schemes around ``base_color``.

    Every scheme keeps the base's saturation and lightness, only rotating hue,
    and includes the base color itself (unchanged) in its color list.

    Returns:
        Complementary, analogous, triadic, split-complementary, tetradic
        (rectangle) and square suggestions, in that order; empty when no
        base color is given
    """
    if base_color is None:
        return []

    base = base_color.hsl
    from_hsl = space.create_color_from_hsl

    analogous_plus, analogous_minus = space.analogous(base)
    triadic_1, triadic_2 = space.triadic(base)
    split_1, split_2 = space.split_complementary(base)
    _, rect_60, rect_180, rect_240 = space.tetradic(base)
    _, square_90, square_180, square_270 = space.square(base)

    return [
        HarmonySuggestion(
            type="complementary",
            name="Complementary",
            description="Colors opposite on the color wheel. High contrast, vibrant.",
            colors=[base_color, from_hsl(space.complementary(base))],
        ),
        HarmonySuggestion(
            type="analogous",
            name="Analogous",
            description="Colors next to each other. Harmonious and pleasing.",
            colors=[from_hsl(analogous_minus), base_color, from_hsl(analogous_plus)],
        ),
        HarmonySuggestion(
            type="triadic",
            name="Triadic",
            description="Three colors evenly spaced. Balanced and vibrant.",
            colors=[base_color, from_hsl(triadic_1), from_hsl(triadic_2)],
        ),
        HarmonySuggestion(
            type="split-complementary",
            name="Split-Complementary",
            description="Base color + two adjacent to its complement. Vibrant yet balanced.",
            colors=[base_color, from_hsl(split_1), from_hsl(split_2)],
        ),
        HarmonySuggestion(
            type="tetradic",
            name="Tetradic (Rectangle)",
            description="Four colors forming a rectangle. Rich and complex.",
            colors=[base_color, from_hsl(rect_60), from_hsl(rect_180), from_hsl(rect_240)],
        ),
        HarmonySuggestion(
            type="square",
            name="Square",
            description="Four colors evenly spaced. Dynamic and bold.",
            colors=[base_color, from_hsl(square_90), from_hsl(square_180), from_hsl(square_270)],
        ),
    ]

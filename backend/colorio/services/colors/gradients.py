"""
CSS gradient suggestions built from palette colors.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Any, Dict, List, Sequence

from .models import RGB, Color, round_half_up
from .space import create_color_from_rgb, delta_e

SMOOTH_STEPS = 5


@dataclass(frozen=True)
class GradientStop:
    color: Color
    position: float  # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return {"color": self.color.to_dict(), "position": self.position}


@dataclass(frozen=True)
class GradientSuggestion:
    name: str
    kind: str
    stops: List[GradientStop]
    css: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "stops": [stop.to_dict() for stop in self.stops],
            "css": self.css,
        }


def _evenly_spaced(colors: Sequence[Color]) -> List[GradientStop]:
    last = len(colors) - 1
    return [GradientStop(color=color, position=index / last * 100) for index, color in enumerate(colors)]


def _stop_list(stops: Sequence[GradientStop]) -> str:
    return ", ".join(f"{stop.color.hex} {round_half_up(stop.position)}%" for stop in stops)


def interpolate_stops(start: Color, end: Color, steps: int = SMOOTH_STEPS) -> List[GradientStop]:
    """Evenly spaced stops blending linearly in RGB from ``start`` to ``end``."""
    stops = []
    for index in range(steps):
        t = index / (steps - 1)
        blended = RGB(*(
            round_half_up(a + (b - a) * t) for a, b in zip(start.rgb, end.rgb)
        ))
        stops.append(GradientStop(color=create_color_from_rgb(blended), position=t * 100))
    return stops


def most_contrasting_pair(colors: Sequence[Color]) -> List[Color]:
    """
    The pair with the largest Delta-E, in palette order.

    Defaults to the first two colors; a later pair replaces the current one
    only when strictly more distant.
    """
    best = [colors[0], colors[1]]
    best_distance = 0.0
    for first, second in combinations(colors, 2):
        distance = delta_e(first.rgb, second.rgb)
        if distance > best_distance:
            best_distance = distance
            best = [first, second]
    return best


def get_gradient_suggestions(colors: Sequence[Color]) -> List[GradientSuggestion]:
    """
    Gradient suggestions for a palette.

    Two or more colors give a full-palette linear gradient, a five-stop smooth
    transition from first to last color, a high-contrast duotone and a radial
    variant. Three or more colors add a conic gradient.

    Returns:
        Suggestions in that order; empty for fewer than two colors
    """
    if len(colors) < 2:
        return []

    palette_stops = _evenly_spaced(colors)
    smooth_stops = interpolate_stops(colors[0], colors[-1])
    pair = most_contrasting_pair(colors)
    duotone_stops = [GradientStop(color=pair[0], position=0), GradientStop(color=pair[1], position=100)]

    suggestions = [
        GradientSuggestion(
            name="Full Palette Gradient",
            kind="linear",
            stops=palette_stops,
            css=f"linear-gradient(90deg, {_stop_list(palette_stops)})",
        ),
        GradientSuggestion(
            name="Smooth Transition",
            kind="linear",
            stops=smooth_stops,
            css=f"linear-gradient(90deg, {_stop_list(smooth_stops)})",
        ),
        GradientSuggestion(
            name="High Contrast Duotone",
            kind="linear",
            stops=duotone_stops,
            css=f"linear-gradient(90deg, {pair[0].hex} 0%, {pair[1].hex} 100%)",
        ),
        GradientSuggestion(
            name="Radial Gradient",
            kind="radial",
            stops=palette_stops,
            css=f"radial-gradient(circle, {_stop_list(palette_stops)})",
        ),
    ]

    if len(colors) >= 3:
        angles = ", ".join(
            f"{color.hex} {round_half_up(index / len(colors) * 360)}deg"
            for index, color in enumerate(colors)
        )
        suggestions.append(GradientSuggestion(
            name="Conic Gradient",
            kind="conic",
            stops=palette_stops,
            css=f"conic-gradient(from 0deg, {angles}, {colors[0].hex} 360deg)",
        ))

    return suggestions

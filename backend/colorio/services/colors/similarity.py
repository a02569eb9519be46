"""
Palette similarity scoring.

Scores are directional: ``find_best_similarity(a, b)`` asks how well every
color of ``a`` is covered by some color of ``b``, so swapping the arguments
can change the result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Sequence

from .models import Color
from .space import delta_e

MIN_SIMILARITY = 30.0
SIMILAR_PALETTES_LIMIT = 10


def color_similarity(first: Color, second: Color) -> float:
    """0-100 similarity of two colors; Delta-E of 100 or more scores 0."""
    return max(0.0, 100.0 - delta_e(first.rgb, second.rgb))


def find_best_similarity(colors: Sequence[Color], others: Sequence[Color]) -> float:
    """
    Average best-match similarity of ``colors`` against ``others`` (0-100).

    Returns 0.0 when either palette is empty.
    """
    if not colors or not others:
        return 0.0
    best_matches = [max(color_similarity(color, other) for other in others) for color in colors]
    return sum(best_matches) / len(colors)


@dataclass(frozen=True)
class SimilarPalette:
    palette_id: Hashable
    similarity: float
    colors: List[Color] = field(compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "palette_id": self.palette_id,
            "similarity": self.similarity,
            "colors": [color.to_dict() for color in self.colors],
        }


def rank_similar_palettes(colors: Sequence[Color],
                          candidates: Mapping[Hashable, Sequence[Color]],
                          min_similarity: float = MIN_SIMILARITY,
                          limit: int = SIMILAR_PALETTES_LIMIT) -> List[SimilarPalette]:
    """
    Rank candidate palettes by similarity to ``colors``.

    Empty candidates are skipped and only scores strictly above
    ``min_similarity`` are kept. Ties keep candidate order.

    Args:
        colors: query palette
        candidates: palette id -> palette colors
        min_similarity: exclusive lower bound on the score
        limit: maximum number of results

    Returns:
        Matches sorted by descending similarity
    """
    matches = []
    for palette_id, palette_colors in candidates.items():
        if not palette_colors:
            continue
        score = find_best_similarity(colors, palette_colors)
        if score > min_similarity:
            matches.append(SimilarPalette(palette_id=palette_id, similarity=score,
                                          colors=list(palette_colors)))

    matches.sort(key=lambda match: match.similarity, reverse=True)
    return matches[:limit]

"""
Tests for palette similarity scoring and ranking.
"""

import pytest

from colorio.services.colors.similarity import (
    color_similarity,
    find_best_similarity,
    rank_similar_palettes,
)
from colorio.services.colors.space import create_color_from_hex

RED = create_color_from_hex("#FF0000")
BLUE = create_color_from_hex("#0000FF")
NEAR_RED = create_color_from_hex("#FE0000")


class TestSimilarity:
    """Test directional palette similarity"""

    def test_identical_palettes(self):
        assert find_best_similarity([RED, BLUE], [RED, BLUE]) == 100.0

    def test_empty_palettes_score_zero(self):
        assert find_best_similarity([], [RED]) == 0.0
        assert find_best_similarity([RED], []) == 0.0

    def test_direction_matters(self):
        """Every query color is covered one way but not the other"""
        assert find_best_similarity([RED], [RED, BLUE]) == 100.0
        assert find_best_similarity([RED, BLUE], [RED]) == pytest.approx(50.0)

    def test_distant_colors_floor_at_zero(self):
        assert color_similarity(RED, BLUE) == 0.0
        assert color_similarity(RED, NEAR_RED) > 95.0


class TestRanking:
    """Test candidate ranking"""

    candidates = {
        "a": [BLUE],
        "b": [RED, BLUE],
        "c": [],
        "d": [NEAR_RED],
    }

    def test_ranked_above_threshold(self):
        matches = rank_similar_palettes([RED], self.candidates)
        assert [m.palette_id for m in matches] == ["b", "d"]
        assert matches[0].similarity == 100.0

    def test_limit(self):
        matches = rank_similar_palettes([RED], self.candidates, limit=1)
        assert [m.palette_id for m in matches] == ["b"]

    def test_threshold_is_exclusive(self):
        matches = rank_similar_palettes([RED], {"b": [RED]}, min_similarity=100.0)
        assert matches == []

    def test_serializes(self):
        data = rank_similar_palettes([RED], {"b": [RED]})[0].to_dict()
        assert data["palette_id"] == "b"
        assert data["colors"][0]["hex"] == "#FF0000"

"""
Unit tests for the palette extraction pipeline.

Tests the core extraction components:
- strided pixel sampling with the alpha policy
- median cut seeding
- deterministic k-means refinement
- Delta-E de-duplication
- end-to-end extraction scenarios
"""

import itertools

import numpy as np
import pytest

from colorio.services.colors.dedup import deduplicate_clusters
from colorio.services.colors.errors import EmptyImageError
from colorio.services.colors.extraction import extract_colors
from colorio.services.colors.kmeans import assign_to_centroids, refine_centroids, refine_step
from colorio.services.colors.median_cut import initial_centroids, median_cut, partition_depth
from colorio.services.colors.models import RGB, ColorBucket, ColorCluster, ExtractionOptions
from colorio.services.colors.sampling import sample_pixels, sampling_step
from colorio.services.colors.space import delta_e


def cluster(rgb, weight, members=1):
    return ColorCluster(centroid=RGB(*rgb), members=np.zeros((members, 3), dtype=np.uint8), weight=weight)


class TestPixelSampling:
    """Test strided sampling and alpha filtering"""

    def test_sampling_step(self):
        """Step keeps roughly 40000 visited pixels"""
        assert sampling_step(100) == 1
        assert sampling_step(40000) == 1
        assert sampling_step(159999) == 1
        assert sampling_step(160000) == 2
        assert sampling_step(1_000_000) == 5

    def test_opaque_image_fully_sampled(self, make_rgba):
        samples = sample_pixels(make_rgba(10, 10, (12, 34, 56)), 10, 10)
        assert samples.shape == (100, 3)
        assert samples.dtype == np.uint8
        assert np.all(samples == [12, 34, 56])

    def test_large_image_is_strided(self, make_rgba):
        """400x400 gives step 2 on both axes, 200x200 visited pixels"""
        samples = sample_pixels(make_rgba(400, 400, (1, 2, 3)), 400, 400)
        assert len(samples) == 40000

    def test_transparent_pixels_skipped_by_default(self, make_rgba):
        buffer = make_rgba(4, 4, (255, 0, 0), alpha=0)
        assert len(sample_pixels(buffer, 4, 4)) == 0
        assert len(sample_pixels(buffer, 4, 4, include_transparent=True)) == 16

    def test_alpha_threshold_is_128(self):
        """Alpha 128 is kept, alpha 127 is not"""
        buffer = bytes([10, 10, 10, 128, 20, 20, 20, 127])
        samples = sample_pixels(buffer, 2, 1)
        assert samples.tolist() == [[10, 10, 10]]

    def test_zero_sized_image_yields_nothing(self):
        assert sample_pixels(b"", 0, 0).shape == (0, 3)

    def test_short_buffer_rejected(self):
        with pytest.raises(ValueError):
            sample_pixels(bytes(10), 2, 2)

    def test_accepts_numpy_buffers(self, make_rgba):
        array = np.frombuffer(make_rgba(3, 3, (9, 8, 7)), dtype=np.uint8)
        assert len(sample_pixels(array, 3, 3)) == 9


class TestMedianCut:
    """Test median cut partitioning"""

    def test_partition_depth(self):
        assert partition_depth(1) == 0
        assert partition_depth(2) == 1
        assert partition_depth(3) == 2
        assert partition_depth(12) == 4

    def test_distinct_colors_split_into_singletons(self):
        colors = np.array(list(itertools.product([0, 255], repeat=3)), dtype=np.uint8)
        buckets = median_cut(colors, 3)
        assert len(buckets) == 8
        assert all(len(bucket.colors) == 1 for bucket in buckets)

    def test_small_sets_become_leaves(self):
        colors = np.array([[1, 2, 3]], dtype=np.uint8)
        assert len(median_cut(colors, 5)) == 1
        assert median_cut(np.empty((0, 3), dtype=np.uint8), 3) == []

    def test_widest_channel_ties_prefer_red_then_green(self):
        bucket = ColorBucket.from_colors(np.array([[0, 0, 0], [10, 10, 10]], dtype=np.uint8))
        assert bucket.widest_channel() == 0
        bucket = ColorBucket.from_colors(np.array([[0, 0, 0], [5, 10, 10]], dtype=np.uint8))
        assert bucket.widest_channel() == 1

    def test_split_follows_widest_channel(self):
        """Blue spread dominates, so halves separate on blue"""
        colors = np.array([[10, 10, 0], [12, 10, 200], [11, 10, 10], [10, 10, 250]], dtype=np.uint8)
        left, right = median_cut(colors, 1)
        assert left.colors[:, 2].max() < right.colors[:, 2].min()

    def test_centroid_rounds_half_up(self):
        bucket = ColorBucket.from_colors(np.array([[0, 0, 0], [1, 1, 1]], dtype=np.uint8))
        assert bucket.centroid == RGB(1, 1, 1)

    def test_initial_centroids_one_per_bucket(self):
        colors = np.array([[0, 0, 0]] * 5 + [[255, 255, 255]] * 5, dtype=np.uint8)
        seeds = initial_centroids(colors, 2)
        assert seeds == [RGB(0, 0, 0), RGB(255, 255, 255)]


class TestKMeans:
    """Test deterministic k-means refinement"""

    def test_ties_go_to_lowest_index(self):
        samples = np.array([[5, 5, 5]], dtype=np.uint8)
        centroids = np.array([[0, 0, 0], [10, 10, 10]], dtype=np.float64)
        assert assign_to_centroids(samples, centroids).tolist() == [0]

    def test_empty_cluster_keeps_position(self):
        samples = np.zeros((4, 3), dtype=np.uint8)
        centroids = np.array([[0, 0, 0], [200, 200, 200]], dtype=np.float64)
        updated = refine_step(samples, centroids)
        assert updated.tolist() == [[0, 0, 0], [200, 200, 200]]

    def test_step_does_not_mutate_input(self):
        samples = np.array([[10, 10, 10], [20, 20, 20]], dtype=np.uint8)
        centroids = np.array([[0, 0, 0]], dtype=np.float64)
        refine_step(samples, centroids)
        assert centroids.tolist() == [[0, 0, 0]]

    def test_converges_on_two_groups(self):
        samples = np.array([[0, 0, 0]] * 30 + [[250, 250, 250]] * 10, dtype=np.uint8)
        clusters = refine_centroids(samples, [RGB(10, 10, 10), RGB(200, 200, 200)])
        assert [c.centroid for c in clusters] == [RGB(0, 0, 0), RGB(250, 250, 250)]
        assert [len(c.members) for c in clusters] == [30, 10]
        assert clusters[0].weight == pytest.approx(0.75)

    def test_unpopulated_clusters_are_dropped(self):
        samples = np.array([[0, 0, 0]] * 5, dtype=np.uint8)
        clusters = refine_centroids(samples, [RGB(0, 0, 0), RGB(0, 0, 0), RGB(255, 255, 255)])
        assert len(clusters) == 1
        assert clusters[0].weight == 1.0

    def test_deterministic(self):
        rng = np.random.default_rng(7)
        samples = rng.integers(0, 256, size=(500, 3), dtype=np.uint8)
        seeds = initial_centroids(samples, 6)
        first = refine_centroids(samples, seeds)
        second = refine_centroids(samples, seeds)
        assert [c.centroid for c in first] == [c.centroid for c in second]
        assert [c.weight for c in first] == [c.weight for c in second]


class TestDeduplication:
    """Test Delta-E merging of clusters"""

    def test_small_clusters_dropped(self):
        """Exactly 0.5% is not enough to survive"""
        result = deduplicate_clusters([cluster((255, 0, 0), 0.995), cluster((0, 0, 255), 0.005)])
        assert [c.centroid for c in result] == [RGB(255, 0, 0)]

    def test_sorted_by_percentage(self):
        result = deduplicate_clusters([
            cluster((0, 0, 255), 0.2),
            cluster((255, 0, 0), 0.5),
            cluster((0, 255, 0), 0.3),
        ])
        assert [c.centroid for c in result] == [RGB(255, 0, 0), RGB(0, 255, 0), RGB(0, 0, 255)]

    def test_near_duplicates_merge_into_stronger(self):
        """The merged cluster keeps the stronger centroid and sums the share"""
        result = deduplicate_clusters([
            cluster((250, 2, 2), 0.3, members=3),
            cluster((255, 0, 0), 0.5, members=5),
            cluster((0, 0, 255), 0.2, members=2),
        ])
        assert [c.centroid for c in result] == [RGB(255, 0, 0), RGB(0, 0, 255)]
        assert result[0].percentage == pytest.approx(80.0)
        assert len(result[0].members) == 8

    def test_merge_reorders_by_combined_share(self):
        """A merge that lifts a weaker cluster above a stronger one keeps output descending"""
        result = deduplicate_clusters([
            cluster((0, 0, 255), 0.30),
            cluster((255, 0, 0), 0.25),
            cluster((250, 5, 5), 0.20),
        ])
        assert [c.centroid for c in result] == [RGB(255, 0, 0), RGB(0, 0, 255)]
        assert [c.percentage for c in result] == pytest.approx([45.0, 30.0])

    def test_limit_applied_after_merging(self):
        result = deduplicate_clusters([
            cluster((255, 0, 0), 0.4),
            cluster((0, 255, 0), 0.35),
            cluster((0, 0, 255), 0.25),
        ], limit=2)
        assert len(result) == 2

    def test_empty_input(self):
        assert deduplicate_clusters([]) == []


class TestExtractColors:
    """End-to-end extraction scenarios"""

    def test_solid_color_gives_single_full_share(self, make_rgba):
        result = extract_colors(make_rgba(5, 5, (255, 0, 0)), 5, 5)
        assert len(result.colors) == 1
        color = result.colors[0]
        assert color.hex == "#FF0000"
        assert color.percentage == 100.0
        assert color.name == "Red"
        assert result.dominant_color == color
        assert result.processing_time >= 0

    def test_fully_transparent_image_raises(self, make_rgba):
        with pytest.raises(EmptyImageError) as exc_info:
            extract_colors(make_rgba(4, 4, (0, 255, 0), alpha=0), 4, 4)
        assert exc_info.value.pixel_count == 16
        assert "No valid colors found" in str(exc_info.value)

    def test_transparent_image_included_on_request(self, make_rgba):
        options = ExtractionOptions(include_transparent=True)
        result = extract_colors(make_rgba(4, 4, (0, 255, 0), alpha=0), 4, 4, options)
        assert result.dominant_color.hex == "#00FF00"

    def test_zero_sized_image_raises(self):
        with pytest.raises(EmptyImageError):
            extract_colors(b"", 0, 0)

    def test_equal_thirds(self, make_bands):
        """25 red, 25 green and 25 blue pixels give three ~33% colors"""
        buffer = make_bands(5, [((255, 0, 0), 5), ((0, 255, 0), 5), ((0, 0, 255), 5)])
        result = extract_colors(buffer, 5, 15, ExtractionOptions(color_count=3))
        assert {c.hex for c in result.colors} == {"#FF0000", "#00FF00", "#0000FF"}
        assert all(c.percentage == pytest.approx(33.3, abs=0.1) for c in result.colors)

    def test_merged_color_becomes_dominant(self, make_bands):
        """Red and near-red bands merge into the largest share, ranked first"""
        buffer = make_bands(10, [
            ((0, 0, 255), 30), ((255, 0, 0), 25), ((250, 5, 5), 20), ((0, 255, 0), 25),
        ])
        result = extract_colors(buffer, 10, 100, ExtractionOptions(color_count=3))

        percentages = [c.percentage for c in result.colors]
        assert percentages == sorted(percentages, reverse=True)
        assert result.dominant_color == result.colors[0]
        assert result.dominant_color.hex == "#FF0000"
        assert result.dominant_color.percentage == 45.0

    def test_output_is_bounded_and_distinct(self):
        """Never more than color_count colors, none within the merge threshold"""
        rng = np.random.default_rng(42)
        image = rng.integers(0, 256, size=(60, 60, 4), dtype=np.uint8)
        image[:, :, 3] = 255
        result = extract_colors(image.tobytes(), 60, 60, ExtractionOptions(color_count=4))

        assert 1 <= len(result.colors) <= 4
        for first, second in itertools.combinations(result.colors, 2):
            assert delta_e(first.rgb, second.rgb) >= 10
        assert sum(c.percentage for c in result.colors) <= 100.0 + 0.05 * len(result.colors)

    def test_same_input_same_output(self, make_bands):
        buffer = make_bands(8, [((200, 30, 30), 3), ((30, 30, 200), 5)])
        first = extract_colors(buffer, 8, 8).to_dict()
        second = extract_colors(buffer, 8, 8).to_dict()
        first.pop("processing_time")
        second.pop("processing_time")
        assert first == second

    def test_invalid_color_count(self):
        with pytest.raises(ValueError):
            ExtractionOptions(color_count=0)

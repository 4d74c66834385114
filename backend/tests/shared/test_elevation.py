"""
Tests for shared elevation functions.

Tests smoothing and the segment-threshold gain/loss statistics.
"""

import pytest

from app.shared.elevation import (
    ElevationStats,
    smooth_elevations,
    compute_elevation_stats,
    ELEVATION_THRESHOLD_M,
)


# =============================================================================
# Test Smoothing
# =============================================================================

class TestSmoothElevations:
    """Tests for smooth_elevations function."""

    def test_short_series_unchanged(self):
        assert smooth_elevations([100, 110, 105]) == [100, 110, 105]

    def test_constant_series(self):
        assert smooth_elevations([50.0] * 8) == [50.0] * 8

    def test_truncated_edge_windows(self):
        """Edges average over 3 and 4 samples instead of padding."""
        values = [0, 10, 20, 30, 40, 50]
        smoothed = smooth_elevations(values)
        assert smoothed[0] == pytest.approx(10.0)   # (0+10+20)/3
        assert smoothed[1] == pytest.approx(15.0)   # (0+10+20+30)/4
        assert smoothed[2] == pytest.approx(20.0)   # full window
        assert smoothed[-1] == pytest.approx(40.0)  # (30+40+50)/3

    def test_same_length(self):
        values = list(range(37))
        assert len(smooth_elevations(values)) == 37


# =============================================================================
# Test Elevation Stats
# =============================================================================

class TestComputeElevationStats:
    """Tests for compute_elevation_stats function."""

    def test_empty(self):
        assert compute_elevation_stats([]) == ElevationStats(0, 0, 0, 0)

    def test_all_zero(self):
        """All zeros means no data (e.g. every API batch failed)."""
        assert compute_elevation_stats([0] * 100) == ElevationStats(0, 0, 0, 0)

    def test_threshold_constant(self):
        assert ELEVATION_THRESHOLD_M == 3.0

    def test_monotonic_ramp(self):
        """0 -> 100 m over 50 samples: gain close to 100, no loss."""
        ramp = [i * 100 / 49 for i in range(50)]
        stats = compute_elevation_stats(ramp)
        assert 95 <= stats.total_elevation_gain_m <= 100
        assert stats.total_elevation_loss_m == 0

    def test_small_oscillation_suppressed(self):
        """Alternating ±2 m never forms a segment of 3 m."""
        values = [100 if i % 2 == 0 else 102 for i in range(60)]
        stats = compute_elevation_stats(values)
        assert stats.total_elevation_gain_m == 0
        assert stats.total_elevation_loss_m == 0

    def test_small_steps_not_accumulated(self):
        """Plateaus 2 m apart: each segment is below threshold, no partial credit."""
        values = ([100] * 10 + [102] * 10) * 5
        stats = compute_elevation_stats(values)
        assert stats.total_elevation_gain_m == 0
        assert stats.total_elevation_loss_m == 0
        assert stats.min_elevation_m == 100
        assert stats.max_elevation_m == 102

    def test_segment_at_threshold_counts(self):
        stats = compute_elevation_stats([100] * 10 + [103] * 10)
        assert stats.total_elevation_gain_m == 3

    def test_descent_then_climb(self):
        values = [200] * 10 + [150] * 10 + [180] * 10
        stats = compute_elevation_stats(values)
        assert stats.total_elevation_loss_m == 50
        assert stats.total_elevation_gain_m == 30
        assert stats.min_elevation_m == 150
        assert stats.max_elevation_m == 200

    def test_flat_stretch_keeps_direction(self):
        """A flat section inside a climb does not split it into two short segments."""
        values = [100] * 5 + [102] * 10 + [104] * 10
        stats = compute_elevation_stats(values)
        assert stats.total_elevation_gain_m == 4
        assert stats.total_elevation_loss_m == 0

    def test_min_max_from_smoothed_series(self):
        """A single raw spike is flattened before min/max."""
        values = [100] * 10
        values[5] = 120
        stats = compute_elevation_stats(values)
        assert stats.max_elevation_m == 104
        assert stats.min_elevation_m == 100
        assert stats.total_elevation_gain_m == 4
        assert stats.total_elevation_loss_m == 4

    def test_short_series_not_smoothed(self):
        stats = compute_elevation_stats([100, 110, 105])
        assert stats == ElevationStats(
            total_elevation_gain_m=10,
            total_elevation_loss_m=5,
            min_elevation_m=100,
            max_elevation_m=110,
        )

    def test_negative_elevations(self):
        """Below sea level is valid data, min may be negative."""
        values = [-30] * 10 + [-10] * 10
        stats = compute_elevation_stats(values)
        assert stats.min_elevation_m == -30
        assert stats.max_elevation_m == -10
        assert stats.total_elevation_gain_m == 20

    def test_values_are_ints(self):
        stats = compute_elevation_stats([i * 1.37 for i in range(40)])
        for value in stats.to_dict().values():
            assert isinstance(value, int)

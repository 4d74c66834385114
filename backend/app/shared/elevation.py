"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from dataclasses import dataclass, asdict
from typing import List, Sequence

from .resampling import round_half_up

# Minimum net change (meters) for a climbing/descending segment to count
ELEVATION_THRESHOLD_M = 3.0

# Window size for moving average smoothing
SMOOTHING_WINDOW = 5


@dataclass(frozen=True)
class ElevationStats:
    """Derived elevation statistics, whole meters."""
    total_elevation_gain_m: int = 0
    total_elevation_loss_m: int = 0
    min_elevation_m: int = 0
    max_elevation_m: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def smooth_elevations(
    elevations: Sequence[float],
    window_size: int = SMOOTHING_WINDOW
) -> List[float]:
    """
    Smooth elevation data using centered moving average.

    Edge samples average over a truncated window instead of padding.

    Args:
        elevations: Raw elevation values
        window_size: Size of smoothing window (odd number recommended)

    Returns:
        Smoothed elevation values (input copied unchanged if shorter than window)
    """
    if len(elevations) < window_size:
        return list(elevations)

    smoothed = []
    half_window = window_size // 2

    for i in range(len(elevations)):
        start = max(0, i - half_window)
        end = min(len(elevations), i + half_window + 1)
        window = elevations[start:end]
        smoothed.append(sum(window) / len(window))

    return smoothed


def compute_elevation_stats(
    elevations: Sequence[float],
    threshold_m: float = ELEVATION_THRESHOLD_M
) -> ElevationStats:
    """
    Calculate gain, loss, min and max from an elevation series.

    The series is smoothed first, then split into contiguous climbing and
    descending segments at sign changes of consecutive differences. A flat
    step (zero difference) keeps the current direction. Each segment's net
    change counts only if it reaches threshold_m; smaller wiggles are
    dropped entirely. Min/max are taken from the smoothed series.

    Empty or all-zero input means "no data" and yields all-zero stats.

    Args:
        elevations: Elevation values in meters
        threshold_m: Minimum segment change to accumulate

    Returns:
        ElevationStats rounded to whole meters
    """
    if not elevations or all(e == 0 for e in elevations):
        return ElevationStats()

    smoothed = smooth_elevations(elevations)

    total_gain = 0.0
    total_loss = 0.0
    min_elevation = smoothed[0]
    max_elevation = smoothed[0]

    segment_start = 0
    climbing = False
    descending = False

    for i in range(1, len(smoothed)):
        diff = smoothed[i] - smoothed[i - 1]

        min_elevation = min(min_elevation, smoothed[i])
        max_elevation = max(max_elevation, smoothed[i])

        if diff > 0 and not climbing:
            if descending:
                segment_loss = smoothed[segment_start] - smoothed[i - 1]
                if segment_loss >= threshold_m:
                    total_loss += segment_loss
            segment_start = i - 1
            climbing = True
            descending = False
        elif diff < 0 and not descending:
            if climbing:
                segment_gain = smoothed[i - 1] - smoothed[segment_start]
                if segment_gain >= threshold_m:
                    total_gain += segment_gain
            segment_start = i - 1
            descending = True
            climbing = False

    # Flush the open segment
    if climbing:
        segment_gain = smoothed[-1] - smoothed[segment_start]
        if segment_gain >= threshold_m:
            total_gain += segment_gain
    elif descending:
        segment_loss = smoothed[segment_start] - smoothed[-1]
        if segment_loss >= threshold_m:
            total_loss += segment_loss

    return ElevationStats(
        total_elevation_gain_m=round_half_up(total_gain),
        total_elevation_loss_m=round_half_up(total_loss),
        min_elevation_m=round_half_up(min_elevation),
        max_elevation_m=round_half_up(max_elevation),
    )

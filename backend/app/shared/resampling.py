"""
Downsampling and interpolation of route series.

The elevation API limits how many locations it accepts per request, so long
routes are reduced with downsample(), looked up, and the resulting values are
stretched back to the original length with interpolate(). The round trip is
lossy: lengths and endpoints survive, intermediate values are approximated.
"""
import math
from typing import Sequence, TypeVar

T = TypeVar("T")

# Default number of points sent to the elevation API per route
DEFAULT_TARGET_COUNT = 500


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 always towards +infinity."""
    return math.floor(value + 0.5)


def downsample(sequence: Sequence[T], target_count: int = DEFAULT_TARGET_COUNT) -> Sequence[T]:
    """
    Reduce a sequence by strided selection.

    Keeps every `len // target_count`-th element starting at index 0 and
    always keeps the last element. Sequences that already fit are
    returned unchanged (same object).

    Args:
        sequence: Ordered items (usually (lon, lat) coordinates)
        target_count: Desired maximum size

    Returns:
        Downsampled list. May exceed target_count by a few elements
        because of the integer stride and the appended endpoint.
    """
    if target_count < 1:
        raise ValueError(f"target_count must be >= 1, got {target_count}")

    if len(sequence) <= target_count:
        return sequence

    step = len(sequence) // target_count
    sampled = [sequence[i] for i in range(0, len(sequence), step)]

    last_index = len(sequence) - 1
    if last_index % step != 0:
        sampled.append(sequence[last_index])

    return sampled


def interpolate(values: Sequence[float], original_count: int) -> Sequence[float]:
    """
    Linearly stretch a reduced series back to original_count values.

    Output values are rounded to whole numbers (meters). A series that
    already has original_count values is returned unchanged.
    """
    if len(values) == original_count:
        return values
    if original_count <= 0:
        return []
    if not values:
        return [0] * original_count
    if original_count == 1:
        return [round_half_up(values[0])]

    ratio = (len(values) - 1) / (original_count - 1)
    result = []

    for i in range(original_count):
        index = i * ratio
        lower = math.floor(index)
        upper = math.ceil(index)
        fraction = index - lower

        if upper >= len(values):
            result.append(round_half_up(values[-1]))
        else:
            blended = values[lower] * (1 - fraction) + values[upper] * fraction
            result.append(round_half_up(blended))

    return result

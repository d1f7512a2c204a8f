# /basefee/core/stats.py
# Small numeric building blocks shared by the fee suggestion and trend estimators.
import math
from typing import List, Sequence

from pydantic import BaseModel, ConfigDict


class InsufficientDataError(ValueError):
    pass


class SubsetStats(BaseModel):
    """Min, median and max of one group of consecutive base fees."""
    model_config = ConfigDict(frozen=True)

    min: float
    median: float
    max: float


class WindowSummary(BaseModel):
    """
    Statistics of a grouped window of base fees.

    min, median and max are taken from the most recent group; medians holds
    the median of every group in chronological order.
    """
    model_config = ConfigDict(frozen=True)

    min: float
    median: float
    max: float
    medians: List[float]

    def median_slope(self) -> float:
        return linear_regression(self.medians)


def sampling_curve(sum_weight: float, sample_min: float, sample_max: float) -> float:
    """
    Half-period cosine ease between sample_min and sample_max, clamped to [0, 1].

    Replaces a hard percentile cutoff with a smooth ramp so neighbouring
    samples share the weight around the target percentile.
    """
    if sum_weight <= sample_min:
        return 0.0
    if sum_weight >= sample_max:
        return 1.0
    return (1 - math.cos((sum_weight - sample_min) * math.pi / (sample_max - sample_min))) / 2


def linear_regression(y: Sequence[float]) -> float:
    """Least-squares slope of y against its positions 0..n-1."""
    n = len(y)
    if n < 2:
        raise InsufficientDataError(f"Need at least 2 points for a slope, got {n}")
    sum_x = sum_y = sum_xy = sum_xx = 0.0
    for x, value in enumerate(y):
        value = float(value)
        sum_x += x
        sum_y += value
        sum_xy += x * value
        sum_xx += x * x
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def create_subsets(values: Sequence[float], size: int) -> List[List[float]]:
    if size < 1:
        raise ValueError(f"Subset size must be positive, got {size}")
    return [list(values[i:i + size]) for i in range(0, len(values), size)]


def subset_stats(values: Sequence[float]) -> SubsetStats:
    # sorted() works on a copy; callers keep their chronological order
    ordered = sorted(values)
    if not ordered:
        raise InsufficientDataError("Cannot summarize an empty group")
    return SubsetStats(min=ordered[0], median=ordered[len(ordered) // 2], max=ordered[-1])


def summarize_window(values: Sequence[float], size: int) -> WindowSummary:
    groups = [subset_stats(subset) for subset in create_subsets(values, size)]
    if not groups:
        raise InsufficientDataError(f"Window is empty (group size {size})")
    last = groups[-1]
    return WindowSummary(
        min=last.min,
        median=last.median,
        max=last.max,
        medians=[group.median for group in groups],
    )

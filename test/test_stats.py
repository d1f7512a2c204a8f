import pytest

from basefee.core.stats import (
    InsufficientDataError, create_subsets, linear_regression, sampling_curve, subset_stats, summarize_window,
)


def test_sampling_curve_endpoints_and_midpoint():
    assert sampling_curve(0.1, 0.1, 0.3) == 0
    assert sampling_curve(0.0, 0.1, 0.3) == 0
    assert sampling_curve(0.3, 0.1, 0.3) == 1
    assert sampling_curve(0.9, 0.1, 0.3) == 1
    assert sampling_curve(0.2, 0.1, 0.3) == pytest.approx(0.5)


def test_sampling_curve_is_monotonic_and_bounded():
    points = [i / 1000 for i in range(1001)]
    values = [sampling_curve(w, 0.1, 0.3) for w in points]
    assert all(0 <= v <= 1 for v in values)
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_linear_regression_recovers_slope():
    assert linear_regression([3, 5, 7, 9, 11]) == pytest.approx(2)
    assert linear_regression([10.0, 7.5, 5.0]) == pytest.approx(-2.5)
    assert linear_regression([5, 5, 5]) == pytest.approx(0)


def test_linear_regression_needs_two_points():
    with pytest.raises(InsufficientDataError):
        linear_regression([42])
    with pytest.raises(InsufficientDataError):
        linear_regression([])


def test_create_subsets_keeps_short_tail():
    assert create_subsets(list(range(7)), 3) == [[0, 1, 2], [3, 4, 5], [6]]
    assert create_subsets([], 3) == []
    with pytest.raises(ValueError):
        create_subsets([1, 2], 0)


def test_subset_stats_uses_floor_index_median_without_mutating():
    values = [5, 1, 4, 2]
    stats = subset_stats(values)
    assert (stats.min, stats.median, stats.max) == (1, 4, 5)
    assert values == [5, 1, 4, 2]
    assert subset_stats([9, 3, 6]).median == 6


def test_summarize_window_reports_last_group():
    summary = summarize_window([1, 2, 3, 4, 5], 2)
    assert summary.medians == [2, 4, 5]
    assert (summary.min, summary.median, summary.max) == (5, 5, 5)
    assert summary.median_slope() == pytest.approx(1.5)


def test_summarize_window_rejects_empty_window():
    with pytest.raises(InsufficientDataError):
        summarize_window([], 5)

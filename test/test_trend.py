import pytest

from basefee.core.config import settings
from basefee.core.logger import TREND_CLASSIFICATIONS, TREND_FALLBACKS
from basefee.estimators.trend import BaseFeeTrend, calculate_base_fee_trend, classify_trend
from basefee.core.stats import InsufficientDataError

GWEI = 10**9


def flat(value=100.0, length=101):
    return [value] * length


def test_flat_history_is_stable():
    assert calculate_base_fee_trend(flat(), str(100 * GWEI)) == BaseFeeTrend.STABLE


def test_final_spike_is_surging():
    base_fees = [100.0 + 0.1 * i for i in range(100)] + [300.0]
    assert calculate_base_fee_trend(base_fees, str(300 * GWEI)) == 2


def test_moderate_peak_is_raising():
    assert calculate_base_fee_trend(flat(length=100) + [140.0], str(140 * GWEI)) == BaseFeeTrend.RAISING


def test_low_dip_is_falling():
    assert calculate_base_fee_trend(flat(length=100) + [50.0], str(50 * GWEI)) == BaseFeeTrend.FALLING


def test_steady_decline_is_falling_by_median_slope():
    # Short-window group medians drop by 10 gwei per group of 5 blocks
    base_fees = [1000.0 - 2 * i for i in range(101)]
    assert calculate_base_fee_trend(base_fees, str(800 * GWEI)) == BaseFeeTrend.FALLING


@pytest.mark.parametrize(
    "current_gwei, expected",
    [(150, BaseFeeTrend.RAISING), (90, BaseFeeTrend.FALLING), (100, BaseFeeTrend.FALLING)],
)
def test_ambiguous_window_defers_to_current_fee(current_gwei, expected):
    base_fees = flat(length=99) + [50.0, 140.0]
    assert calculate_base_fee_trend(base_fees, str(current_gwei * GWEI)) == expected


def test_current_fee_accepts_numbers():
    base_fees = flat(length=99) + [50.0, 140.0]
    assert calculate_base_fee_trend(base_fees, 150 * GWEI) == BaseFeeTrend.RAISING


def test_short_history_decided_by_ratios_alone():
    assert calculate_base_fee_trend(flat(length=20) + [200.0], str(200 * GWEI)) == BaseFeeTrend.SURGING


@pytest.mark.parametrize(
    "base_fees, current",
    [
        ([], "0"),
        (flat(length=10), str(100 * GWEI)),
        (flat(0.0), "0"),
        (flat(length=99) + [50.0, 140.0], "not-a-number"),
    ],
)
def test_failures_fall_back_to_stable(base_fees, current):
    before = TREND_FALLBACKS._value.get()
    assert calculate_base_fee_trend(base_fees, current) == BaseFeeTrend.STABLE
    assert TREND_FALLBACKS._value.get() == before + 1


def test_classify_trend_raises_on_insufficient_history():
    with pytest.raises(InsufficientDataError):
        classify_trend(flat(length=10), "0")


def test_caller_history_is_not_reordered():
    base_fees = flat(length=99) + [50.0, 140.0]
    snapshot = list(base_fees)
    calculate_base_fee_trend(base_fees, str(150 * GWEI))
    assert base_fees == snapshot


def test_thresholds_come_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "TREND_SURGING_THRESHOLD", 1.3)
    assert calculate_base_fee_trend(flat(length=100) + [140.0], str(140 * GWEI)) == BaseFeeTrend.SURGING


def test_classifications_are_counted():
    counter = TREND_CLASSIFICATIONS.labels("stable")
    before = counter._value.get()
    calculate_base_fee_trend(flat(), str(100 * GWEI))
    assert counter._value.get() == before + 1

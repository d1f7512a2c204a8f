# /basefee/estimators/trend.py
# Buckets recent base fee history and classifies where fees are heading.
# The signal is advisory: any failure degrades to STABLE instead of raising.
import math
from enum import IntEnum
from typing import Sequence

import sentry_sdk

from basefee.core.config import settings
from basefee.core.logger import get_logger, TREND_CLASSIFICATIONS, TREND_FALLBACKS
from basefee.core.stats import InsufficientDataError, summarize_window
from basefee.core.units import Numberish, wei_to_gwei_number

log = get_logger(__name__)


class BaseFeeTrend(IntEnum):
    FALLING = -1
    STABLE = 0
    RAISING = 1
    SURGING = 2


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        raise InsufficientDataError("Window median is zero")
    ratio = numerator / denominator
    if not math.isfinite(ratio):
        raise InsufficientDataError(f"Non-finite ratio {numerator}/{denominator}")
    return ratio


def classify_trend(base_fees: Sequence[float], current_base_fee: Numberish) -> BaseFeeTrend:
    """
    Classifies base fee movement, raising when the history can't support a verdict.

    Args:
        base_fees: Base fees in gwei, oldest first.
        current_base_fee: The latest base fee in wei, only consulted when the
            window statistics sit between thresholds.
    """
    long_window = summarize_window(
        base_fees[settings.TREND_LONG_WINDOW_OFFSET:], settings.TREND_LONG_GROUP_SIZE
    )
    max_by_median = _ratio(long_window.max, long_window.median)
    min_by_median = _ratio(long_window.min, long_window.median)

    falling = settings.TREND_FALLING_THRESHOLD
    raising = settings.TREND_RAISING_THRESHOLD

    if max_by_median > settings.TREND_SURGING_THRESHOLD:
        return BaseFeeTrend.SURGING
    if max_by_median > raising and min_by_median > falling:
        return BaseFeeTrend.RAISING
    if max_by_median < raising and min_by_median > falling:
        short_window = summarize_window(
            base_fees[settings.TREND_SHORT_WINDOW_OFFSET:], settings.TREND_SHORT_GROUP_SIZE
        )
        if short_window.median_slope() < settings.TREND_MEDIAN_SLOPE_THRESHOLD:
            return BaseFeeTrend.FALLING
        return BaseFeeTrend.STABLE
    if max_by_median < raising and min_by_median < falling:
        return BaseFeeTrend.FALLING

    # Ratios sit on a threshold: let the current fee break the tie
    if wei_to_gwei_number(current_base_fee) > long_window.median:
        return BaseFeeTrend.RAISING
    return BaseFeeTrend.FALLING


def calculate_base_fee_trend(base_fees: Sequence[float], current_base_fee: Numberish) -> BaseFeeTrend:
    """Fail-safe wrapper around classify_trend; any error yields BaseFeeTrend.STABLE."""
    try:
        trend = classify_trend(base_fees, current_base_fee)
    except Exception as e:
        log.warning("BASE_FEE_TREND_FALLBACK", error=str(e), error_type=type(e).__name__, exc_info=True)
        sentry_sdk.capture_exception(e)
        TREND_FALLBACKS.inc()
        trend = BaseFeeTrend.STABLE
    TREND_CLASSIFICATIONS.labels(trend.name.lower()).inc()
    log.debug("BASE_FEE_TREND_CLASSIFIED", trend=trend.name, code=int(trend))
    return trend

# /basefee/estimators/base_fee.py
# Recency-weighted percentile pick over a base fee history, in the style of
# the EIP-1559 gas price oracles: recent blocks weigh more, and the sampling
# curve blends the samples around the target percentile instead of cutting hard.
import math
from typing import List, Sequence

from basefee.core.config import settings
from basefee.core.logger import get_logger, BASE_FEE_SUGGESTIONS
from basefee.core.stats import sampling_curve

log = get_logger(__name__)

# Below this, smoothing is disabled and the latest base fee is used as-is
MIN_TIME_FACTOR = 1e-6


class InvalidFeeHistoryError(ValueError):
    pass


def fee_order(history: Sequence[float]) -> List[int]:
    """Indices of history sorted by ascending fee; ties keep chronological order."""
    return sorted(range(len(history)), key=lambda i: history[i])


def suggest_base_fee(
    history: Sequence[float],
    order: Sequence[int],
    time_factor: float,
    sample_min: float,
    sample_max: float,
) -> float:
    """
    Reduces a chronological base fee history to a single suggested fee.

    Args:
        history: Base fees, oldest first.
        order: Permutation of indices into history giving the order in which
            entries are weighed (usually ascending by fee, see fee_order).
        time_factor: Decay horizon in blocks for the exponential recency weight.
        sample_min: Cumulative weight where the sampling curve starts to rise.
        sample_max: Cumulative weight where the sampling curve saturates.

    Returns:
        The weighted fee, in the same unit as history.
    """
    if not history:
        raise InvalidFeeHistoryError("Base fee history is empty")
    if time_factor < MIN_TIME_FACTOR:
        BASE_FEE_SUGGESTIONS.inc()
        return history[-1]

    length = len(history)
    for idx in order:
        if not 0 <= idx < length:
            raise InvalidFeeHistoryError(f"Order index {idx} is outside a history of {length} blocks")
    BASE_FEE_SUGGESTIONS.inc()

    # Normalizes the geometric weights so they sum to 1 over the whole history
    pending_weight = (1 - math.exp(-1 / time_factor)) / (1 - math.exp(-length / time_factor))
    sum_weight = 0.0
    result = 0.0
    curve_last = 0.0
    for idx in order:
        sum_weight += pending_weight * math.exp((idx - length + 1) / time_factor)
        curve_value = sampling_curve(sum_weight, sample_min, sample_max)
        result += (curve_value - curve_last) * history[idx]
        if curve_value >= 1:
            return result
        curve_last = curve_value

    log.debug("BASE_FEE_CURVE_NOT_SATURATED", sum_weight=sum_weight, orders=len(order))
    return result


def suggest_base_fees(history: Sequence[float], max_time_factor: int | None = None) -> List[float]:
    """
    Suggestions for every time factor from max_time_factor down to 0.

    result[tf] is the suggestion for time factor tf. Shorter horizons are
    raised to at least the suggestion of any longer one, so the list never
    increases with the time factor.
    """
    if max_time_factor is None:
        max_time_factor = settings.SUGGESTION_MAX_TIME_FACTOR
    if max_time_factor < 0:
        raise ValueError(f"max_time_factor must not be negative, got {max_time_factor}")

    order = fee_order(history)
    suggestions = [0.0] * (max_time_factor + 1)
    highest = -math.inf
    for time_factor in range(max_time_factor, -1, -1):
        fee = suggest_base_fee(
            history, order, time_factor, settings.SUGGESTION_SAMPLE_MIN, settings.SUGGESTION_SAMPLE_MAX
        )
        highest = max(highest, fee)
        suggestions[time_factor] = highest
    log.debug("BASE_FEE_SUGGESTIONS_COMPUTED", max_time_factor=max_time_factor, fastest=suggestions[0])
    return suggestions

# /basefee/estimators/gas.py
# Combines the base fee, trend and tip estimators into one EIP-1559 fee suggestion.
from pydantic import BaseModel, ConfigDict

from basefee.core.config import settings
from basefee.core.fee_history import FeeHistory
from basefee.core.logger import get_logger, block_context
from basefee.core.units import gwei_to_wei, wei_to_gwei_number
from basefee.estimators.base_fee import fee_order, suggest_base_fee
from basefee.estimators.rewards import suggest_priority_fee
from basefee.estimators.trend import BaseFeeTrend, calculate_base_fee_trend

log = get_logger(__name__)


class GasFeeEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fee_gwei: float
    suggested_base_fee_gwei: float
    priority_fee_gwei: float
    # Wei amounts as integer strings, ready for a transaction payload
    max_priority_fee_per_gas: str
    max_fee_per_gas: str
    trend: BaseFeeTrend


def estimate_gas_fees(
    fee_history: FeeHistory,
    reward_index: int | None = None,
    time_factor: float | None = None,
) -> GasFeeEstimate:
    """
    Provides a complete EIP-1559 fee structure from an already fetched fee history.

    Args:
        fee_history: Parsed eth_feeHistory result, including the pending block's base fee.
        reward_index: Which reward percentile column to sample tips from.
        time_factor: Recency horizon for the base fee suggestion, in blocks.
    """
    if reward_index is None:
        reward_index = settings.REWARD_PERCENTILE_INDEX
    if time_factor is None:
        time_factor = settings.SUGGESTION_TIME_FACTOR

    with block_context(fee_history.oldest_block):
        base_fees = fee_history.base_fees_gwei()
        pending_base_fee = fee_history.pending_base_fee

        suggested = suggest_base_fee(
            base_fees,
            fee_order(base_fees),
            time_factor,
            settings.SUGGESTION_SAMPLE_MIN,
            settings.SUGGESTION_SAMPLE_MAX,
        )
        trend = calculate_base_fee_trend(base_fees, pending_base_fee)
        priority_fee = suggest_priority_fee(fee_history.reward, reward_index) if fee_history.reward else 0.0

        estimate = GasFeeEstimate(
            base_fee_gwei=wei_to_gwei_number(pending_base_fee),
            suggested_base_fee_gwei=suggested,
            priority_fee_gwei=priority_fee,
            max_priority_fee_per_gas=gwei_to_wei(priority_fee),
            max_fee_per_gas=gwei_to_wei(suggested + priority_fee),
            trend=trend,
        )
        log.info(
            "GAS_FEES_ESTIMATED",
            blocks=len(base_fees),
            suggested_base_fee_gwei=suggested,
            priority_fee_gwei=priority_fee,
            trend=trend.name,
        )
    return estimate

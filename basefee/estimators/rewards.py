# /basefee/estimators/rewards.py
# Priority fee (tip) sampling from the per-block reward arrays of eth_feeHistory.
from typing import List, Sequence

from basefee.core.config import settings
from basefee.core.logger import get_logger, OUTLIER_BLOCKS
from basefee.core.units import Numberish, wei_to_gwei_number

log = get_logger(__name__)

# One entry per requested reward percentile, values in wei
Reward = Sequence[Numberish]


def get_outlier_blocks_to_remove(blocks_rewards: Sequence[Reward], index: int) -> List[int]:
    """Positions of the blocks whose tip at index exceeds the outlier ceiling in gwei."""
    ceiling = settings.OUTLIER_REWARD_CEILING_GWEI
    blocks = [
        position
        for position, reward in enumerate(blocks_rewards)
        if wei_to_gwei_number(reward[index]) > ceiling
    ]
    if blocks:
        OUTLIER_BLOCKS.inc(len(blocks))
        log.info("OUTLIER_BLOCKS_DETECTED", blocks=blocks, ceiling_gwei=ceiling, reward_index=index)
    return blocks


def rewards_filter_outliers(
    blocks_rewards: Sequence[Reward], outlier_blocks: Sequence[int], reward_index: int
) -> List[float]:
    excluded = set(outlier_blocks)
    return [
        wei_to_gwei_number(reward[reward_index])
        for position, reward in enumerate(blocks_rewards)
        if position not in excluded
    ]


def suggest_priority_fee(blocks_rewards: Sequence[Reward], index: int) -> float:
    """
    Median tip in gwei at the given percentile index, with outlier blocks removed.

    Picks the element at len // 2 after sorting, the same floor-index rule
    the base fee group statistics use. Returns 0.0 when every block was an outlier.
    """
    outliers = get_outlier_blocks_to_remove(blocks_rewards, index)
    tips = sorted(rewards_filter_outliers(blocks_rewards, outliers, index))
    if not tips:
        log.warning("NO_PRIORITY_FEE_SAMPLES", blocks=len(blocks_rewards), outliers=len(outliers))
        return 0.0
    return tips[len(tips) // 2]

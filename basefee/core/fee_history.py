# /basefee/core/fee_history.py
# Typed view over an eth_feeHistory result that the caller has already fetched.
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3

from basefee.core.units import wei_to_gwei_number


def to_int_hexsafe(value: Any) -> int:
    """Decodes the quantities JSON-RPC nodes return: hex strings, decimal strings or ints."""
    if isinstance(value, bool):
        raise TypeError("Booleans are not quantities")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return Web3.to_int(hexstr=text)
        return int(text)
    raise TypeError(f"Unsupported quantity type: {type(value).__name__}")


class FeeHistory(BaseModel):
    """
    Fee history as returned by eth_feeHistory.

    base_fee_per_gas carries one more entry than the number of blocks
    requested: the final value is the base fee of the next (pending) block.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    oldest_block: int = Field(alias="oldestBlock")
    base_fee_per_gas: List[int] = Field(alias="baseFeePerGas")
    gas_used_ratio: List[float] = Field(default_factory=list, alias="gasUsedRatio")
    reward: List[List[int]] = Field(default_factory=list)

    @field_validator("oldest_block", mode="before")
    @classmethod
    def _parse_block(cls, value):
        return to_int_hexsafe(value)

    @field_validator("base_fee_per_gas", mode="before")
    @classmethod
    def _parse_base_fees(cls, value):
        return [to_int_hexsafe(v) for v in value]

    @field_validator("reward", mode="before")
    @classmethod
    def _parse_rewards(cls, value):
        if value is None:
            return []
        return [[to_int_hexsafe(v) for v in block] for block in value]

    @property
    def pending_base_fee(self) -> int:
        if not self.base_fee_per_gas:
            raise ValueError("Fee history has no base fees")
        return self.base_fee_per_gas[-1]

    def base_fees_gwei(self) -> List[float]:
        return [wei_to_gwei_number(fee) for fee in self.base_fee_per_gas]

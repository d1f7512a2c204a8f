import pytest
from pydantic import ValidationError

from basefee.core.fee_history import FeeHistory, to_int_hexsafe

RPC_RESULT = {
    "oldestBlock": "0x10",
    "baseFeePerGas": ["0x3b9aca00", "0x77359400"],
    "gasUsedRatio": [0.5],
    "reward": [["0x3b9aca00", "0x0"]],
}


def test_parses_hex_quantities():
    history = FeeHistory.model_validate(RPC_RESULT)
    assert history.oldest_block == 16
    assert history.base_fee_per_gas == [10**9, 2 * 10**9]
    assert history.reward == [[10**9, 0]]
    assert history.gas_used_ratio == [0.5]


def test_pending_base_fee_and_gwei_view():
    history = FeeHistory.model_validate(RPC_RESULT)
    assert history.pending_base_fee == 2 * 10**9
    assert history.base_fees_gwei() == [1.0, 2.0]


def test_accepts_field_names_and_plain_integers():
    history = FeeHistory(oldest_block=7, base_fee_per_gas=[100, "200"])
    assert history.base_fee_per_gas == [100, 200]
    assert history.reward == []


def test_missing_base_fees_are_rejected():
    with pytest.raises(ValidationError):
        FeeHistory.model_validate({"oldestBlock": "0x1"})


def test_empty_history_has_no_pending_fee():
    history = FeeHistory(oldest_block=1, base_fee_per_gas=[])
    with pytest.raises(ValueError):
        history.pending_base_fee


def test_to_int_hexsafe():
    assert to_int_hexsafe("0xff") == 255
    assert to_int_hexsafe(" 42 ") == 42
    assert to_int_hexsafe(7) == 7
    with pytest.raises(TypeError):
        to_int_hexsafe(1.5)

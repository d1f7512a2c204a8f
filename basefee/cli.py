# /basefee/cli.py
# Offline entry point: reads an eth_feeHistory result from a file or stdin and
# prints the fee estimate. Fetching the history is left to the caller.
import json
from typing import IO, Any

import click

from basefee.core.config_validator import validate as validate_config
from basefee.core.fee_history import FeeHistory
from basefee.core.logger import get_logger
from basefee.estimators.gas import estimate_gas_fees

log = get_logger("basefee.cli")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def parse_fee_history(payload: Any) -> FeeHistory:
    """Accepts either the bare result object or a full JSON-RPC response."""
    if isinstance(payload, dict) and "result" in payload:
        payload = payload["result"]
    return FeeHistory.model_validate(payload)


@click.command(
    help="Estimate EIP-1559 fees from an eth_feeHistory result read from PATH (or stdin).",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("fee_history_file", metavar="PATH", type=click.File("r"), default="-")
@click.option("--reward-index", type=click.IntRange(min=0), default=None, help="Reward percentile column for tips")
@click.option("--time-factor", type=click.FloatRange(min=0), default=None, help="Recency horizon in blocks")
@click.pass_context
def main(ctx: click.Context, fee_history_file: IO[str], reward_index: int | None, time_factor: float | None) -> None:
    validate_config()

    try:
        fee_history = parse_fee_history(json.load(fee_history_file))
    except ValueError as e:
        log.error("FEE_HISTORY_LOAD_FAILED", path=fee_history_file.name, error=str(e))
        ctx.exit(1)

    try:
        estimate = estimate_gas_fees(fee_history, reward_index=reward_index, time_factor=time_factor)
    except (ValueError, IndexError) as e:
        log.error("FEE_HISTORY_ESTIMATE_FAILED", path=fee_history_file.name, error=str(e))
        ctx.exit(1)

    click.echo(estimate.model_dump_json(indent=2))


if __name__ == "__main__":
    main()

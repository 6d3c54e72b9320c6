#!/usr/bin/env python3
"""
Unified CLI for the Vote Boost Toolkit.

Examples:
  - Voting power
    vote-boost weights --chain-id 42161 --gauge 0x... --addresses 0x...,0x... --samples 2 --days 7 --blocks-per-day 345600
    vote-boost weights --chain-id 42161 --gauge 0x... --addresses 0x... --block 250000000 --whitelist 0x...

  - Sample schedule (offline)
    vote-boost blocks --reference 1000000 --samples 2 --days 7 --blocks-per-day 7200
"""

import argparse
import asyncio
from typing import List, Optional

from rich.panel import Panel

from vote_boost_toolkit.boost.models import SamplingOptions
from vote_boost_toolkit.boost.scheduler import get_previous_blocks
from vote_boost_toolkit.boost.strategy import BoostStrategy
from vote_boost_toolkit.commands.validation import (
    validate_address_list,
    validate_chain_id,
    validate_eth_address,
    validate_snapshot,
)
from vote_boost_toolkit.shared.constants import BoostConstants
from vote_boost_toolkit.shared.logging import set_log_level
from vote_boost_toolkit.shared.services.http_client import aclose_async_client
from vote_boost_toolkit.shared.services.web3_service import Web3Service
from vote_boost_toolkit.utils.formatters import (
    console,
    create_weights_table,
    generate_timestamped_filename,
    save_json_output,
    weights_to_dict,
)


def cmd_weights(args: argparse.Namespace) -> None:
    validate_chain_id(args.chain_id)
    gauge = validate_eth_address(args.gauge, "gauge")
    addresses = validate_address_list(args.addresses)
    if not addresses:
        raise ValueError("At least one address is required")
    snapshot = validate_snapshot(args.block)

    options = SamplingOptions(
        number_of_samples=args.samples,
        days_interval=args.days,
        destination_blocks_per_day=args.blocks_per_day,
        gauge_address=gauge,
        whitelisted_addresses=tuple(
            validate_address_list(args.whitelist, "whitelist")
        ),
        home_blocks_per_day=args.home_blocks_per_day,
    )

    async def run():
        destination = Web3Service.get_instance(args.chain_id)
        try:
            return await BoostStrategy().evaluate(
                args.chain_id, destination, addresses, options, snapshot
            )
        finally:
            await aclose_async_client()

    console.print(Panel("Computing voting power", style="bold magenta"))
    weights = asyncio.run(run())

    console.print(create_weights_table(weights))

    out = {
        "chain_id": args.chain_id,
        "gauge": gauge,
        "snapshot": snapshot,
        "samples": args.samples,
        "days_interval": args.days,
        "weights": weights_to_dict(weights),
    }
    filename = args.output or generate_timestamped_filename("voting_power")
    save_json_output(out, filename)


def cmd_blocks(args: argparse.Namespace) -> None:
    if args.samples > BoostConstants.MAX_SAMPLES:
        console.print(
            f"[yellow]Warning:[/yellow] the strategy accepts at most "
            f"{BoostConstants.MAX_SAMPLES} samples"
        )
    blocks = get_previous_blocks(
        args.reference, args.samples, args.days, args.blocks_per_day
    )
    console.print("[cyan]Sample blocks:[/cyan]")
    for i, block in enumerate(blocks):
        console.print(f"Sample {i}: Block {block}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vote-boost",
        description="Unified CLI for the Vote Boost Toolkit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="DEBUG, INFO, WARNING or ERROR (default: VB_LOG_LEVEL or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # weights
    p_w = sub.add_parser(
        "weights", help="Compute boosted voting power for addresses"
    )
    p_w.add_argument("--chain-id", type=int, required=True)
    p_w.add_argument("--gauge", type=str, required=True)
    p_w.add_argument(
        "--addresses", type=str, required=True, help="Comma-separated"
    )
    p_w.add_argument("--samples", type=int, default=2)
    p_w.add_argument("--days", type=float, default=7)
    p_w.add_argument("--blocks-per-day", type=int, required=True)
    p_w.add_argument(
        "--home-blocks-per-day",
        type=int,
        default=BoostConstants.HOME_BLOCKS_PER_DAY,
    )
    p_w.add_argument(
        "--whitelist", type=str, default="", help="Comma-separated"
    )
    p_w.add_argument("--block", type=str, default="latest")
    p_w.add_argument("--output", type=str, help="Output filename")
    p_w.set_defaults(func=cmd_weights)

    # blocks
    p_b = sub.add_parser("blocks", help="Show the sample block schedule")
    p_b.add_argument("--reference", type=int, required=True)
    p_b.add_argument("--samples", type=int, default=2)
    p_b.add_argument("--days", type=float, default=7)
    p_b.add_argument("--blocks-per-day", type=int, required=True)
    p_b.set_defaults(func=cmd_blocks)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)
    try:
        args.func(args)
    except Exception as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Offline demo: deploy a registry, two assets and a pair on an in-memory chain,
seed liquidity, swap, and print the resulting reserves.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pairswap.core.assets import FungibleAsset
from pairswap.core.cpmm import get_amount_out
from pairswap.integration.chain import ChainConfig
from pairswap.integration.deployment import DeploymentConfig, deploy_from_config, load_deployment_config


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--config", type=Path, default=None, help="deployment YAML (default: in-memory defaults)")
    p.add_argument("--amount0", type=int, default=10_000)
    p.add_argument("--amount1", type=int, default=40_000)
    p.add_argument("--swap-in", type=int, default=1_000, help="asset0 amount to sell")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    if args.config is not None:
        config = load_deployment_config(args.config)
    else:
        config = DeploymentConfig(fee_to_setter="0x" + "fe" * 20, chain=ChainConfig())
    chain, factory = deploy_from_config(config)

    trader = chain.new_address("trader")
    supply = 10 * (args.amount0 + args.amount1 + args.swap_in)
    asset_a = chain.deploy(FungibleAsset("Asset A", "A", supply, trader))
    asset_b = chain.deploy(FungibleAsset("Asset B", "B", supply, trader))

    pair_address = chain.transact(trader, factory.address, "create_pair", asset_a.address, asset_b.address)
    pair = chain.at(pair_address)
    asset0, asset1 = pair.asset0, pair.asset1
    print(f"[pair-demo] pair={pair_address}")

    chain.transact(trader, asset0, "transfer", pair_address, args.amount0)
    chain.transact(trader, asset1, "transfer", pair_address, args.amount1)
    shares = chain.transact(trader, pair_address, "mint", trader)
    reserve0, reserve1, _ = pair.get_reserves()
    print(f"[pair-demo] minted shares={shares} total_supply={pair.total_supply}")
    print(f"[pair-demo] reserves after deposit: reserve0={reserve0} reserve1={reserve1}")

    chain.advance_time(60)
    amount_out = get_amount_out(args.swap_in, reserve0, reserve1)
    chain.transact(trader, asset0, "transfer", pair_address, args.swap_in)
    chain.transact(trader, pair_address, "swap", 0, amount_out, trader, b"")
    reserve0, reserve1, _ = pair.get_reserves()
    print(f"[pair-demo] swapped {args.swap_in} asset0 for {amount_out} asset1")
    print(f"[pair-demo] reserves after swap: reserve0={reserve0} reserve1={reserve1}")
    print(f"[pair-demo] price0_cumulative_last={pair.price0_cumulative_last}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

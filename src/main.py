from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, Field, ValidationError

from config import config
from domain.assets import AssetRegistry, default_registry
from domain.convert import ConversionEngine, OrderingPolicy
from domain.crate_selector import pick_crates
from domain.crates import DepositCrate, PendingWithdrawal
from domain.errors import SiloError
from domain.plant import make_plant_crate, with_plant_crate
from domain.pricing import FixedRateQuoter
from domain.silo_balance import build_silo_balance
from utils.plan_summary import render_balance, render_conversion, render_selection


class SiloSnapshot(BaseModel):
    """Depositor state for one asset as exported by the caller."""

    asset: str
    current_epoch: int
    deposits: list[DepositCrate] = Field(default_factory=list)
    # Keyed by the epoch the withdrawal unlocks at.
    withdrawals: dict[int, PendingWithdrawal] = Field(default_factory=dict)
    bdv_per_unit: dict[str, Decimal] = Field(default_factory=dict)


def load_snapshot(path: Path) -> SiloSnapshot:
    return SiloSnapshot.model_validate_json(path.read_text(encoding="utf-8"))


def run_balance(snapshot: SiloSnapshot, registry: AssetRegistry) -> str:
    balance = build_silo_balance(
        registry.get(snapshot.asset),
        deposits=snapshot.deposits,
        withdrawals=snapshot.withdrawals,
        current_epoch=snapshot.current_epoch,
    )
    return render_balance(balance)


def run_pick(
    snapshot: SiloSnapshot,
    registry: AssetRegistry,
    *,
    amount: Decimal,
    plant_amount: Decimal | None = None,
) -> str:
    asset = registry.get(snapshot.asset)
    plant = make_plant_crate(asset, plant_amount, snapshot.current_epoch) if plant_amount else None
    selection = pick_crates(
        with_plant_crate(snapshot.deposits, plant),
        amount,
        asset,
        snapshot.current_epoch,
    )
    return render_selection(selection)


def run_convert(
    snapshot: SiloSnapshot,
    registry: AssetRegistry,
    *,
    amount: Decimal,
    to_asset: str,
    policy: OrderingPolicy,
) -> str:
    engine = ConversionEngine(quoter=FixedRateQuoter(snapshot.bdv_per_unit), registry=registry)
    result = engine.convert(
        snapshot.asset,
        to_asset,
        amount,
        snapshot.deposits,
        snapshot.current_epoch,
        policy=policy,
    )
    return render_conversion(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan silo withdrawals and converts from a deposit snapshot.")
    parser.add_argument("--snapshot", type=Path, required=True, help="JSON snapshot of one asset's silo state")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("balance", help="Show deposited, locked and claimable totals")

    pick = subparsers.add_parser("pick", help="Select crates covering an amount")
    pick.add_argument("amount", type=Decimal)
    pick.add_argument("--plant", type=Decimal, default=None, help="Earned beans planted before selecting")

    convert = subparsers.add_parser("convert", help="Compute the effect of a convert")
    convert.add_argument("amount", type=Decimal)
    convert.add_argument("--to", dest="to_asset", required=True)
    convert.add_argument(
        "--policy",
        type=OrderingPolicy,
        choices=list(OrderingPolicy),
        default=OrderingPolicy.AUTO,
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=config().log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    args = build_parser().parse_args(argv)
    registry = default_registry()

    try:
        snapshot = load_snapshot(args.snapshot)
    except (OSError, ValidationError) as err:
        print(f"error: cannot load snapshot {args.snapshot}: {err}", file=sys.stderr)
        return 1

    try:
        if args.command == "balance":
            output = run_balance(snapshot, registry)
        elif args.command == "pick":
            output = run_pick(snapshot, registry, amount=args.amount, plant_amount=args.plant)
        else:
            output = run_convert(
                snapshot,
                registry,
                amount=args.amount,
                to_asset=args.to_asset,
                policy=args.policy,
            )
    except SiloError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

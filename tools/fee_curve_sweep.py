#!/usr/bin/env python3
"""
Print the sigmoid fee curve over a sweep of volatility readings.

Readings are given in whole percent and scaled by ``10**decimals`` before
evaluation, exactly as a feed with that many decimals would report them.

Examples:
  python tools/fee_curve_sweep.py --readings 0,1,5,10,20,100
  python tools/fee_curve_sweep.py --config fee_engine.yaml --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from volfee.core.errors import ConfigurationError
from volfee.core.fee_curve import CurveParameters, curve_points, saturation_threshold
from volfee.integration.config import FeeEngineConfig, load_config


logger = logging.getLogger("volfee.tools.fee_curve_sweep")


def _parse_int_list(text: str) -> list[int]:
    out: list[int] = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        out.append(int(item))
    return out


def _params_from_args(args: argparse.Namespace) -> CurveParameters:
    if args.config:
        return load_config(args.config).curve_parameters()
    return FeeEngineConfig(
        lower_fee=args.lower,
        upper_fee=args.upper,
        steepness=args.steepness,
        midpoint=args.midpoint,
    ).curve_parameters()


def sweep(params: CurveParameters, percents: Sequence[int], decimals: int) -> list[dict[str, int]]:
    scale = 10**decimals
    rows = []
    for raw, fee in curve_points(params, (p * scale for p in percents), decimals):
        rows.append({"percent": raw // scale, "reading": raw, "fee": fee})
    return rows


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Evaluate the volatility fee curve over a sweep of readings.")
    ap.add_argument("--config", type=str, default="", help="YAML config (overrides curve flags)")
    ap.add_argument("--lower", type=int, default=3000)
    ap.add_argument("--upper", type=int, default=10000)
    ap.add_argument("--steepness", type=int, default=2)
    ap.add_argument("--midpoint", type=int, default=5)
    ap.add_argument("--decimals", type=int, default=5)
    ap.add_argument("--readings", type=str, default="0,1,2,3,4,5,6,7,8,10,20,50,100")
    ap.add_argument("--json", action="store_true", help="emit JSON instead of a table")
    ap.add_argument("--log-level", type=str, default="WARNING")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        params = _params_from_args(args)
        percents = _parse_int_list(args.readings)
        if args.decimals < 0:
            raise ValueError(f"--decimals must be non-negative: {args.decimals}")
    except (ConfigurationError, ValueError, OSError) as exc:
        print(f"invalid arguments: {exc}", file=sys.stderr)
        return 2

    logger.info(
        "curve lower=%d upper=%d steepness=%d midpoint=%d saturation=%d",
        params.lower_fee,
        params.upper_fee,
        params.steepness,
        params.midpoint,
        saturation_threshold(args.decimals),
    )
    rows = sweep(params, percents, args.decimals)

    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    print(f"{'vol %':>8} {'reading':>14} {'fee':>8}")
    for row in rows:
        print(f"{row['percent']:>8} {row['reading']:>14} {row['fee']:>8}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Quote a trade against a YAML curve definition.

Examples:
  python3 tools/curve_quote.py src/curves/three_range_v1.yaml buy-exact-out --amount 20000000000000000000
  python3 tools/curve_quote.py src/curves/three_range_v1.yaml buy-exact-in --amount 50000000000000000000 -v
  python3 tools/curve_quote.py src/curves/three_range_v1.yaml sell-exact-in --supply 80000000000000000000 \\
      --amount 20000000000000000000

`--supply` defaults to the curve's max supply (nothing sold yet); amounts are raw
WAD-scaled integers. Prints the quote as JSON; exits 2 on a rejected quote.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core import CurveError, load_curve_config
from src.state import CurveState, apply_buy_exact_in, apply_buy_exact_out, apply_sell_exact_in, state_at

_ACTIONS = {
    "buy-exact-in": apply_buy_exact_in,
    "buy-exact-out": apply_buy_exact_out,
    "sell-exact-in": apply_sell_exact_in,
}


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Quote a trade against a piecewise bonding curve.")
    ap.add_argument("config", type=Path, help="curve YAML file")
    ap.add_argument("action", choices=sorted(_ACTIONS))
    ap.add_argument("--amount", type=int, required=True, help="native payment or token amount (WAD)")
    ap.add_argument("--supply", type=int, default=None, help="remaining total supply (WAD)")
    ap.add_argument(
        "--native-supply",
        type=int,
        default=None,
        help="remaining native supply (WAD); derived from the curve when omitted",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_curve_config(args.config)
        supply = config.max_supply if args.supply is None else args.supply
        state = state_at(config, supply)
        if args.native_supply is not None:
            state = CurveState(remaining_total_supply=supply, remaining_native_supply=args.native_supply)
        quote, next_state = _ACTIONS[args.action](config, state, args.amount)
    except CurveError as exc:
        print(f"[curve-quote] REJECTED: {exc}", file=sys.stderr)
        return 2

    out = {
        "action": args.action,
        "quote": asdict(quote),
        "state_before": asdict(state),
        "state_after": asdict(next_state),
    }
    print(json.dumps(out, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line front end: reads door codes, reports the weighted press total for one or more robot-chain depths, and exposes the literal encode/decode helpers for shallow chains."""

# keypad_cli.py
# - Takes codes as arguments or from a file (one per line)
# - Solves each requested depth (near = 2, far = 25 when no depth is given)
# - Optionally prints literal minimal command strings, or decodes one
#
# Usage:
#   python -m apps.cli.keypad_cli --codes codes.txt
#   python -m apps.cli.keypad_cli 029A 980A --depth 25 --json
#   python -m apps.cli.keypad_cli --decode "<vA<AA>>^AvA<^A>AvA^A..." --depth 2

import argparse
import json
import logging
import sys
from pathlib import Path

from solver.config import load_config
from solver.keypad_core import KeypadError, build_keypads
from solver.keypad_tools import decode, encode_minimal, solve_tool

NEAR_DEPTH = 2
FAR_DEPTH = 25


def read_codes(path):
    """Non-blank, stripped lines of `path`."""
    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def build_parser():
    ap = argparse.ArgumentParser(description="Minimal keypad presses through a chain of robots.")
    ap.add_argument("codes", nargs="*", help="Codes such as 029A")
    ap.add_argument("--codes", dest="codes_file", type=Path, help="File with one code per line")
    ap.add_argument("--depth", type=int, default=None, help="Directional robots in the chain (default: 2 and 25)")
    ap.add_argument("--strategy", choices=["optimal", "horizontal"], default=None)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--config", type=Path, default=None, help="YAML settings file")
    ap.add_argument("--json", action="store_true", help="Print a JSON payload instead of plain totals")
    ap.add_argument("--encode", action="store_true", help="Print literal minimal command strings")
    ap.add_argument("--decode", metavar="COMMANDS", default=None, help="Decode a human command string")
    ap.add_argument("--verbose", "-v", action="store_true")
    return ap


def main(args):
    cfg = load_config(args.config, depth=args.depth, strategy=args.strategy, workers=args.workers)
    keypads = build_keypads()

    if args.decode is not None:
        print(decode(args.decode, cfg.depth, keypads))
        return 0

    codes = list(args.codes)
    if args.codes_file is not None:
        codes += read_codes(args.codes_file)
    if not codes:
        print("[keypad] no codes given", file=sys.stderr)
        return 2

    if args.encode:
        for code in codes:
            seq = encode_minimal(code, cfg.depth, keypads, cfg.strategy, cfg.max_literal_depth)
            print(f"{code}: {seq} ({len(seq)})")
        return 0

    if args.depth is None and args.config is None:
        depths = [NEAR_DEPTH, FAR_DEPTH]
    else:
        depths = [cfg.depth]

    results = []
    for depth in depths:
        res = solve_tool(codes, depth, keypads, cfg.strategy, cfg.workers)
        for row in res["codes"]:
            print(f"[keypad] depth {depth} {row['code']}: {row['length']} * {row['value']} = {row['complexity']}",
                  file=sys.stderr)
        results.append(res)

    if args.json:
        print(json.dumps({"codes": codes, "results": results}, indent=2))
    else:
        for res in results:
            print(f"depth {res['depth']}: {res['total']}")
    return 0


def cli(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return main(args)
    except (KeypadError, ValueError, OSError) as e:
        print(f"[keypad] error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(cli())

#!/usr/bin/env python3
"""
Sample Checker for the keypad chain solver

Usage:
  python tools/sample_check.py samples/manifest.txt

Manifest lines look like:
  samples/sample.txt = 126384, 154115708116294
  samples/other.txt  = 1234
A single expected value is checked at depth 2 (near); a second one at depth 25 (far).
Relative paths are resolved against the parent of the manifest's directory (the repo root for samples/).
Blank lines and lines starting with '#' are skipped.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from solver.keypad_core import build_keypads  # noqa: E402
from solver.keypad_tools import solve  # noqa: E402

DEPTHS = (2, 25)


def parse_manifest(path: str):
    samples = []
    with open(path, "r", encoding="utf-8") as f:
        for i, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name, sep, rest = line.partition("=")
            if not sep:
                raise ValueError(f"{path}:{i}: expected 'path = value[, value]'")
            expected = [int(v) for v in rest.split(",") if v.strip()]
            if not 1 <= len(expected) <= len(DEPTHS):
                raise ValueError(f"{path}:{i}: expected one or two values")
            samples.append((name.strip(), expected))
    return samples


def read_codes(path: Path):
    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def check(manifest: str) -> bool:
    base = Path(manifest).resolve().parent.parent
    keypads = build_keypads()
    ok_all = True
    for name, expected in parse_manifest(manifest):
        path = Path(name)
        if not path.is_absolute():
            path = base / path
        codes = read_codes(path)
        for depth, want in zip(DEPTHS, expected):
            got = solve(codes, depth, keypads)
            if got == want:
                print(f"[OK]   {name} depth={depth}: {got}")
            else:
                ok_all = False
                print(f"[FAIL] {name} depth={depth}: got {got}, expected {want}")
    return ok_all


def main():
    if len(sys.argv) < 2:
        print("Usage: python tools/sample_check.py manifest.txt")
        sys.exit(2)
    try:
        ok = check(sys.argv[1])
    except (ValueError, OSError) as e:
        print(f"[sample_check] {e}", file=sys.stderr)
        sys.exit(1)
    print("\n== RESULT ==")
    print("all samples match" if ok else "some samples FAILED, see above")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()

from __future__ import annotations
from typing import Dict, List, Optional
"""Code-level helpers on top of keypad_core: code validation, per-code minimal press counts, the weighted total over a batch, and literal encode/decode for shallow chains. Dict-returning *_tool variants feed the CLI and API."""


# keypad_tools.py
import logging
import re
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

from types_keypad import CodeResult, LevelCounts, TransitionKey

from .keypad_core import (
    ACTIVATE, InvalidCode, Keypads, build_keypads, cheapest, decompose,
    expansion_costs, level_choices, pairs, press_sequence, propagate_n,
)

logger = logging.getLogger(__name__)

CODE_ALPHABET = set("0123456789A")
MAX_LITERAL_DEPTH = 4
_LEADING_DIGITS = re.compile(r"\d*")


class Plan:
    """Candidate choices for one (keypads, depth, strategy) run.

    `numeric` picks the numeric-pad sequence per digit pair, `steps[i]` the
    directional sequence used by propagation pass i + 1.
    """

    def __init__(self, keypads: Keypads, depth: int, strategy: str = "optimal"):
        if depth < 0:
            raise ValueError(f"depth must be >= 0, got {depth}")
        self.keypads = keypads
        self.depth = depth
        self.strategy = strategy
        costs = expansion_costs(keypads.directional_table, depth) if strategy == "optimal" else None
        self.steps = level_choices(keypads.directional_table, depth, strategy, costs)
        top = costs[depth] if costs is not None else None
        self.numeric = {
            key: cheapest(cands, top) for key, cands in keypads.numeric_table.items()
        }


def _plan(depth: int, keypads: Optional[Keypads], strategy: str) -> Plan:
    return Plan(keypads or build_keypads(), depth, strategy)


def check_code(code: str) -> None:
    if not code:
        raise InvalidCode("empty code")
    bad = sorted(set(code) - CODE_ALPHABET)
    if bad:
        raise InvalidCode(f"code {code!r} contains invalid characters {''.join(bad)!r} (allowed: 0-9 and 'A')")


def code_value(code: str) -> int:
    """Leading digits as an unsigned integer ('029A' -> 29, 'A' -> 0)."""
    check_code(code)
    digits = _LEADING_DIGITS.match(code).group(0)
    return int(digits) if digits else 0


def validate_codes(codes: List[str]) -> Dict:
    issues = []
    for i, code in enumerate(codes):
        if not code:
            issues.append({"type": "empty", "index": i, "code": code})
            continue
        bad = sorted(set(code) - CODE_ALPHABET)
        if bad:
            issues.append({"type": "invalid_characters", "index": i, "code": code, "characters": bad})
    return {"ok": len(issues) == 0, "issues": issues}


def _check_on_layout(code: str, plan: Plan) -> None:
    check_code(code)
    for ch in code:
        plan.keypads.numeric.position(ch)


def initial_counts(code: str, plan: Plan) -> LevelCounts:
    """Level-0 directional transitions for a code typed from rest on 'A'."""
    _check_on_layout(code, plan)
    counts: Counter = Counter()
    for key in pairs(code):
        counts.update(decompose(plan.numeric[key]))
    return counts


def _length(code: str, plan: Plan) -> int:
    counts = propagate_n(initial_counts(code, plan), plan.keypads.directional_table, plan.steps)
    return sum(counts.values())


def code_length(code: str, depth: int = 2, keypads: Optional[Keypads] = None, strategy: str = "optimal") -> int:
    """Minimal human presses to get `code` typed through `depth` directional robots."""
    return _length(code, _plan(depth, keypads, strategy))


def code_complexity(code: str, depth: int = 2, keypads: Optional[Keypads] = None, strategy: str = "optimal") -> CodeResult:
    return _row(0, code, _plan(depth, keypads, strategy))


def _row(index: int, code: str, plan: Plan) -> CodeResult:
    value = code_value(code)
    length = _length(code, plan)
    logger.debug("code %s depth %d -> length %d", code, plan.depth, length)
    return {"index": index, "code": code, "value": value, "length": length, "complexity": value * length}


def solve_tool(
    codes: List[str],
    depth: int = 2,
    keypads: Optional[Keypads] = None,
    strategy: str = "optimal",
    workers: int = 1,
) -> Dict:
    """Sum of value * length over all codes, with the per-code rows.

    The first invalid code aborts the run. With workers > 1 the codes are
    spread over a thread pool; the plan is shared read-only.
    """
    for code in codes:
        check_code(code)
    plan = _plan(depth, keypads, strategy)
    if workers > 1 and len(codes) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            rows = list(pool.map(lambda item: _row(item[0], item[1], plan), enumerate(codes)))
    else:
        rows = [_row(i, code, plan) for i, code in enumerate(codes)]
    total = sum(r["complexity"] for r in rows)
    logger.debug("depth %d total %d over %d codes", depth, total, len(rows))
    return {"total": total, "depth": depth, "strategy": strategy, "codes": rows}


def solve(codes: List[str], depth: int = 2, keypads: Optional[Keypads] = None, strategy: str = "optimal", workers: int = 1) -> int:
    return solve_tool(codes, depth, keypads, strategy, workers)["total"]


def encode_minimal(
    code: str,
    depth: int = 2,
    keypads: Optional[Keypads] = None,
    strategy: str = "optimal",
    max_depth: int = MAX_LITERAL_DEPTH,
) -> str:
    """Literal human command string; only for shallow chains since it grows geometrically."""
    if depth > max_depth:
        raise ValueError(f"literal encoding is limited to depth <= {max_depth}, got {depth}")
    plan = _plan(depth, keypads, strategy)
    _check_on_layout(code, plan)
    level = "".join(plan.numeric[key] for key in pairs(code))
    for choice in plan.steps:
        level = "".join(choice[key] for key in pairs(level))
    return level


def decode(commands: str, depth: int = 2, keypads: Optional[Keypads] = None) -> str:
    """Recover what the numeric pad receives: `depth` directional replays, then one numeric."""
    keypads = keypads or build_keypads()
    level = commands
    for _ in range(depth):
        level = press_sequence(keypads.directional, level, ACTIVATE)
    return press_sequence(keypads.numeric, level, ACTIVATE)


def transition_lengths(depth: int = 2, keypads: Optional[Keypads] = None, strategy: str = "optimal") -> Dict[TransitionKey, int]:
    """Diagnostic: presses per numeric-pad transition at this depth."""
    plan = _plan(depth, keypads, strategy)
    dir_table = plan.keypads.directional_table
    return {
        key: sum(propagate_n(decompose(seq), dir_table, plan.steps).values())
        for key, seq in plan.numeric.items()
    }

"""Keypad geometry and the transition-count engine: layouts, shortest arm paths, per-pair transition tables, and level-by-level propagation of transition counts."""

# keypad_core.py
# Robot-chain keypad utilities:
# - keypad layouts (numeric + directional) with one forbidden gap cell
# - minimal arm paths between two buttons (horizontal-first / vertical-first)
# - transition tables over every ordered button pair
# - propagation of (from, to) transition counts one indirection level deeper
# - replaying a command string on a layout (decoding)
# Sequences are plain strings over '^v<>' ending in 'A'; rows grow downwards.
from __future__ import annotations

import logging
from collections import Counter, deque
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, NamedTuple

from types_keypad import LevelCounts, Position, Sequence, TransitionKey, TransitionTable

logger = logging.getLogger(__name__)

UP, DOWN, LEFT, RIGHT, ACTIVATE = "^", "v", "<", ">", "A"
DELTAS = {UP: (0, -1), DOWN: (0, 1), LEFT: (-1, 0), RIGHT: (1, 0)}
GAP = " "


class KeypadError(ValueError):
    """Base class for every keypad / code failure."""


class UnknownButton(KeypadError):
    pass


class Unreachable(KeypadError):
    pass


class InvalidCode(KeypadError):
    pass


class InvalidCommand(KeypadError):
    pass


class KeypadLayout:
    """Static keypad geometry: button -> Position, plus the single forbidden cell.

    Built from rows of characters, top row first, with a blank (' ') marking
    the gap. Exactly one gap is required and the remaining buttons must be
    4-connected.
    """

    def __init__(self, name: str, rows: Iterable[str]):
        rows = list(rows)
        width = max((len(r) for r in rows), default=0)
        if width == 0:
            raise ValueError(f"{name}: layout has no rows")
        buttons: dict[str, Position] = {}
        gaps = []
        for y, line in enumerate(rows):
            for x, ch in enumerate(line.ljust(width, GAP)):
                if ch == GAP:
                    gaps.append(Position(x, y))
                elif ch in buttons:
                    raise ValueError(f"{name}: button {ch!r} appears twice")
                else:
                    buttons[ch] = Position(x, y)
        if len(gaps) != 1:
            raise ValueError(f"{name}: expected exactly one gap cell, found {len(gaps)}")
        if not buttons:
            raise ValueError(f"{name}: layout has no buttons")
        self.name = name
        self.bounds = (width, len(rows))
        self.forbidden = gaps[0]
        self._positions = MappingProxyType(buttons)
        self._buttons = MappingProxyType({p: b for b, p in buttons.items()})
        if not self._connected():
            raise ValueError(f"{name}: buttons are not 4-connected around the gap")

    def __repr__(self) -> str:
        return f"KeypadLayout({self.name!r}, buttons={''.join(self.buttons)!r})"

    @property
    def buttons(self) -> tuple[str, ...]:
        """Alphabet in row-major order."""
        return tuple(self._positions)

    def position(self, button: str) -> Position:
        try:
            return self._positions[button]
        except KeyError:
            raise UnknownButton(f"{button!r} is not a button on the {self.name} keypad") from None

    def button_at(self, pos: Position) -> str | None:
        return self._buttons.get(pos)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.col < self.bounds[0] and 0 <= pos.row < self.bounds[1]

    def neighbours(self, pos: Position) -> Iterator[Position]:
        """4-neighbours of `pos` that hold a button."""
        for dx, dy in DELTAS.values():
            nxt = Position(pos.col + dx, pos.row + dy)
            if nxt in self._buttons:
                yield nxt

    def _connected(self) -> bool:
        start = next(iter(self._buttons))
        seen = {start}
        queue = deque([start])
        while queue:
            for nxt in self.neighbours(queue.popleft()):
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return len(seen) == len(self._buttons)


NUMERIC = KeypadLayout("numeric", ["789", "456", "123", " 0A"])
DIRECTIONAL = KeypadLayout("directional", [" ^A", "<v>"])


def step(pos: Position, move: str) -> Position:
    dx, dy = DELTAS[move]
    return Position(pos.col + dx, pos.row + dy)


def avoids_forbidden(layout: KeypadLayout, start: Position, moves: str) -> bool:
    """True if no prefix of `moves` leaves the arm on the gap or off the grid."""
    pos = start
    for move in moves:
        pos = step(pos, move)
        if pos == layout.forbidden or not layout.in_bounds(pos):
            return False
    return True


def enumerate_paths(layout: KeypadLayout, start: str, end: str) -> tuple[Sequence, ...]:
    """Minimal press-and-activate sequences moving the arm start -> end.

    Candidates are the two monotone orderings, horizontal-first then
    vertical-first; they coincide when the buttons share a row or column.
    """
    a = layout.position(start)
    b = layout.position(end)
    dx = b.col - a.col
    dy = b.row - a.row
    horizontal = (RIGHT if dx > 0 else LEFT) * abs(dx)
    vertical = (DOWN if dy > 0 else UP) * abs(dy)
    out = []
    for moves in (horizontal + vertical, vertical + horizontal):
        if moves + ACTIVATE in out:
            continue
        if avoids_forbidden(layout, a, moves):
            out.append(moves + ACTIVATE)
    if not out:
        raise Unreachable(f"{layout.name}: no monotone path from {start!r} to {end!r} avoids the gap")
    return tuple(out)


def build_transition_table(layout: KeypadLayout) -> TransitionTable:
    """Candidate sequences for every ordered button pair, (x, x) included."""
    table = {
        (a, b): enumerate_paths(layout, a, b)
        for a in layout.buttons
        for b in layout.buttons
    }
    logger.debug("built %s transition table: %d pairs", layout.name, len(table))
    return MappingProxyType(table)


class Keypads(NamedTuple):
    """The two layouts in play and their precomputed tables."""

    numeric: KeypadLayout
    directional: KeypadLayout
    numeric_table: TransitionTable
    directional_table: TransitionTable


def build_keypads(numeric: KeypadLayout = NUMERIC, directional: KeypadLayout = DIRECTIONAL) -> Keypads:
    if ACTIVATE not in directional.buttons or any(m not in directional.buttons for m in DELTAS):
        raise ValueError(f"{directional.name}: a directional layout needs '^', 'v', '<', '>' and 'A'")
    if ACTIVATE not in numeric.buttons:
        raise ValueError(f"{numeric.name}: the target layout needs an 'A' button")
    return Keypads(numeric, directional, build_transition_table(numeric), build_transition_table(directional))


def pairs(buttons: str, start: str = ACTIVATE) -> Iterator[TransitionKey]:
    """Consecutive (prev, next) presses, the arm resting on `start` first."""
    prev = start
    for b in buttons:
        yield prev, b
        prev = b


def decompose(sequence: Sequence) -> LevelCounts:
    """Split one sequence, typed from rest on 'A', into directional transitions."""
    return Counter(pairs(sequence))


def sequence_cost(sequence: Sequence, cost: Mapping[TransitionKey, int] | None) -> int:
    if cost is None:
        return len(sequence)
    return sum(cost[p] for p in pairs(sequence))


def cheapest(candidates: tuple[Sequence, ...], cost: Mapping[TransitionKey, int] | None = None) -> Sequence:
    """Candidate with the lowest downstream cost; ties keep enumeration order."""
    if cost is None:
        return candidates[0]
    return min(candidates, key=lambda s: sequence_cost(s, cost))


def expansion_costs(dir_table: TransitionTable, depth: int) -> list[dict[TransitionKey, int]]:
    """costs[k][pair]: presses needed for `pair` once k more levels expand it.

    costs[0] is 1 everywhere; each level keeps the cheaper candidate, so the
    minimum is taken over both orderings at every depth.
    """
    costs = [{key: 1 for key in dir_table}]
    for _ in range(depth):
        prev = costs[-1]
        costs.append({
            key: min(sequence_cost(s, prev) for s in cands)
            for key, cands in dir_table.items()
        })
    return costs


def level_choices(
    dir_table: TransitionTable,
    depth: int,
    strategy: str = "optimal",
    costs: list[dict[TransitionKey, int]] | None = None,
) -> list[dict[TransitionKey, Sequence]]:
    """Canonical sequence per pair for each of the `depth` propagation steps.

    Step i (1-based) expands pairs whose output still has depth - i levels to
    go, so it picks against costs[depth - i]. The 'horizontal' strategy keeps
    the first enumerated candidate everywhere. Pass `costs` to reuse tables
    already built by expansion_costs.
    """
    if strategy == "horizontal":
        fixed = {key: cands[0] for key, cands in dir_table.items()}
        return [fixed] * depth
    if strategy != "optimal":
        raise ValueError(f"unknown strategy {strategy!r} (expected 'optimal' or 'horizontal')")
    if costs is None:
        costs = expansion_costs(dir_table, depth)
    return [
        {key: cheapest(cands, costs[depth - i]) for key, cands in dir_table.items()}
        for i in range(1, depth + 1)
    ]


def propagate(
    counts: Mapping[TransitionKey, int],
    dir_table: TransitionTable,
    choice: Mapping[TransitionKey, Sequence] | None = None,
) -> LevelCounts:
    """Transition counts one level deeper.

    Each (from, to) -> n expands through its canonical sequence; the pairs of
    'A' + sequence each gain n. Work is bounded by the alphabet, not by n.
    """
    out: Counter = Counter()
    for key, n in counts.items():
        if n == 0:
            continue
        if choice is not None:
            seq = choice[key]
        else:
            seq = cheapest(dir_table[key])
        for pair in pairs(seq):
            out[pair] += n
    return out


def propagate_n(
    counts: Mapping[TransitionKey, int],
    dir_table: TransitionTable,
    choices: list[Mapping[TransitionKey, Sequence]],
) -> LevelCounts:
    """Run one propagation pass per entry of `choices`, in order."""
    current = Counter(counts)
    for choice in choices:
        current = propagate(current, dir_table, choice)
    return current


def press_sequence(layout: KeypadLayout, commands: str, start: str = ACTIVATE) -> str:
    """Replay directional commands on `layout`; return the buttons activated."""
    pos = layout.position(start)
    pressed = []
    for i, cmd in enumerate(commands):
        if cmd == ACTIVATE:
            pressed.append(layout.button_at(pos))
            continue
        if cmd not in DELTAS:
            raise InvalidCommand(f"{cmd!r} at offset {i} is not a directional button")
        pos = step(pos, cmd)
        if not layout.in_bounds(pos):
            raise InvalidCommand(f"{layout.name}: move {cmd!r} at offset {i} leaves the keypad")
        if pos == layout.forbidden:
            raise InvalidCommand(f"{layout.name}: move {cmd!r} at offset {i} rests on the gap")
    return "".join(pressed)

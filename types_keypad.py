# types_keypad.py
from __future__ import annotations

from typing import Mapping, NamedTuple, TypedDict


class Position(NamedTuple):
    """A (col, row) cell on a small keypad grid, row 0 at the top."""

    col: int
    row: int


Sequence = str
"""Directional buttons ('^', 'v', '<', '>') ending in exactly one 'A'."""

TransitionKey = tuple[str, str]
"""An ordered (from_button, to_button) pair over one layout's alphabet."""

TransitionTable = Mapping[TransitionKey, tuple[Sequence, ...]]
"""Candidate minimal sequences per ordered button pair."""

LevelCounts = dict[TransitionKey, int]
"""Occurrence count of each directional transition at one indirection level."""


class CodeResult(TypedDict, total=False):
    """Per-code row returned by the tool layer and rendered by the CLI / API."""

    index: int  # 0-based position in the input list
    code: str  # e.g. '029A'
    value: int  # numeric part, e.g. 29
    length: int  # minimal human press count
    complexity: int  # value * length

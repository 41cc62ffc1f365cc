# tests/test_keypad_tools.py
import pytest

from solver.keypad_core import InvalidCode, InvalidCommand, KeypadLayout, UnknownButton, build_keypads
from solver.keypad_tools import (
    code_complexity, code_length, code_value, decode, encode_minimal, solve,
    solve_tool, transition_lengths, validate_codes,
)

NEAR_256 = "<vA<AA>>^AvA<^A>AvA^A<v<A>>^AvA^A<vA>^A<A>A<v<A>A>^AAvA<^A>A"
NEAR_512 = "<vA<AA>>^AvA<^A>AAvA^A<vA<AA>>^AvA^AvA<^A>A<vA>^A<A>A<v<A>A>^AvA^A<A>A"
NEAR_42 = "<v<A>>^AA<vA<A>>^AAvAA<^A>A<v<A>A>^AvA^A<A>A"


def test_sample_lengths_near(sample_codes, keypads):
    lengths = [code_length(c, 2, keypads) for c in sample_codes]
    assert lengths == [68, 60, 68, 64, 64]


def test_sample_total_near(sample_codes, keypads):
    assert solve(sample_codes, 2, keypads) == 126384


def test_sample_total_far(sample_codes, keypads):
    assert solve(sample_codes, 25, keypads) == 154115708116294


def test_shallow_lengths(keypads):
    # robot on the numeric pad driven directly, then through one more robot
    assert code_length("029A", 0, keypads) == 12
    assert code_length("029A", 1, keypads) == 28


def test_length_grows_with_depth(sample_codes, keypads):
    for code in sample_codes:
        lengths = [code_length(code, d, keypads) for d in range(26)]
        assert lengths == sorted(lengths)


@pytest.mark.parametrize("commands,expected", [(NEAR_256, "256A"), (NEAR_512, "512A"), (NEAR_42, "42")])
def test_decode_known_strings(commands, expected):
    assert decode(commands, 2) == expected


def test_decode_rejects_gap():
    with pytest.raises(InvalidCommand):
        decode("<<A", 0)


@pytest.mark.parametrize("depth", [0, 1, 2, 3])
def test_encode_decodes_back(sample_codes, keypads, depth):
    for code in sample_codes + ["256A", "512A", "7A"]:
        seq = encode_minimal(code, depth, keypads)
        assert decode(seq, depth, keypads) == code
        assert len(seq) == code_length(code, depth, keypads)


def test_encode_depth_zero_prefers_horizontal_on_ties(keypads):
    assert encode_minimal("029A", 0, keypads) == "<A^A>^^AvvvA"


def test_encode_refuses_deep_chains():
    with pytest.raises(ValueError):
        encode_minimal("029A", 25)
    assert len(encode_minimal("029A", 5, max_depth=5)) == code_length("029A", 5)


def test_fixed_tie_break_never_beats_optimal(sample_codes, keypads):
    for depth in (2, 5, 25):
        assert solve(sample_codes, depth, keypads, strategy="horizontal") >= solve(sample_codes, depth, keypads)


def test_batch_is_sum_of_codes(keypads):
    a = code_complexity("179A", 25, keypads)
    b = code_complexity("456A", 25, keypads)
    assert solve(["179A", "456A"], 25, keypads) == a["complexity"] + b["complexity"]
    assert a["complexity"] == a["value"] * a["length"] and a["value"] == 179


def test_workers_give_same_rows(sample_codes, keypads):
    serial = solve_tool(sample_codes, 25, keypads)
    pooled = solve_tool(sample_codes, 25, keypads, workers=4)
    assert pooled == serial
    assert [r["code"] for r in pooled["codes"]] == sample_codes


def test_code_value():
    assert code_value("029A") == 29
    assert code_value("980A") == 980
    assert code_value("A") == 0
    with pytest.raises(InvalidCode):
        code_value("")


def test_invalid_code_aborts_run(keypads):
    with pytest.raises(InvalidCode, match="12B"):
        solve(["029A", "12B"], 2, keypads)
    with pytest.raises(InvalidCode):
        code_length("", 2, keypads)


def test_validate_codes():
    res = validate_codes(["029A", "", "9x9A"])
    assert res["ok"] is False
    assert [i["type"] for i in res["issues"]] == ["empty", "invalid_characters"]
    assert res["issues"][1]["characters"] == ["x"]
    assert validate_codes(["029A"]) == {"ok": True, "issues": []}


def test_negative_depth_rejected(keypads):
    with pytest.raises(ValueError):
        code_length("029A", -1, keypads)


def test_alternate_target_layout():
    mini = KeypadLayout("mini", ["12", " A"])
    pads = build_keypads(numeric=mini)
    # '^<A' '>A' 'vA'
    assert code_length("12A", 0, pads) == 7
    assert decode(encode_minimal("12A", 2, pads), 2, pads) == "12A"
    with pytest.raises(UnknownButton):
        code_length("13A", 2, pads)


def test_transition_lengths(keypads):
    lengths = transition_lengths(2, keypads)
    assert len(lengths) == 121
    assert lengths[("A", "A")] == 1
    assert lengths[("A", "0")] == len(encode_minimal("0", 2, keypads))


def test_plan_builds_cost_tables_once(monkeypatch, keypads):
    import solver.keypad_core as core
    import solver.keypad_tools as tools

    calls = []
    real = core.expansion_costs

    def counting(table, depth):
        calls.append(depth)
        return real(table, depth)

    monkeypatch.setattr(core, "expansion_costs", counting)
    monkeypatch.setattr(tools, "expansion_costs", counting)
    plan = tools.Plan(keypads, 25)
    assert calls == [25]
    assert len(plan.steps) == 25

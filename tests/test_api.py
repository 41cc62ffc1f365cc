# tests/test_api.py
from fastapi.testclient import TestClient

from apps.api.keypad_tool_api import app

client = TestClient(app)


def test_solve(sample_codes):
    r = client.post("/solve", json={"codes": sample_codes, "depth": 25})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 154115708116294
    assert body["strategy"] == "optimal"
    assert len(body["codes"]) == 5


def test_solve_invalid_code():
    r = client.post("/solve", json={"codes": ["029A", "x"]})
    assert r.status_code == 422
    assert "'x'" in r.json()["detail"]


def test_validate_and_length():
    r = client.post("/validate_codes", json={"codes": ["029A", ""]})
    assert r.json()["ok"] is False
    r = client.post("/code_length", json={"code": "029A"})
    assert r.json()["length"] == 68 and r.json()["complexity"] == 68 * 29


def test_encode_decode_round_trip():
    seq = client.post("/encode", json={"code": "512A", "depth": 2}).json()["commands"]
    r = client.post("/decode", json={"commands": seq, "depth": 2})
    assert r.json()["code"] == "512A"
    assert client.post("/decode", json={"commands": "<<A", "depth": 0}).status_code == 422
    assert client.post("/encode", json={"code": "512A", "depth": 25}).status_code == 422

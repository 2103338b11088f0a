"""Tests for the FastAPI evaluation endpoints."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

import api
from app import create_app
from models import BinaryRequest, UnaryRequest

BIG = "9223372036854775806"
BIG_SQUARED = "85070591730234615828950163710522949636"


def _evaluate(client, op: str, a: str, b: str):
    return client.post("/bigint/evaluate", json={"op": op, "a": a, "b": b})


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TestModels:

    def test_binary_request_accepts_decimal(self):
        req = BinaryRequest(op="add", a="-12", b="0034")
        assert req.a == "-12"
        assert req.b == "0034"

    @pytest.mark.parametrize("literal", ["", "  ", "12x", "+1", "1e3"])
    def test_binary_request_rejects_invalid_literal(self, literal):
        with pytest.raises(ValidationError):
            BinaryRequest(op="add", a=literal, b="1")

    def test_binary_request_rejects_unknown_op(self):
        with pytest.raises(ValidationError):
            BinaryRequest(op="xor", a="1", b="1")

    def test_unary_request_rejects_invalid_literal(self):
        with pytest.raises(ValidationError):
            UnaryRequest(op="neg", a="-")


# ---------------------------------------------------------------------------
# POST /bigint/evaluate
# ---------------------------------------------------------------------------

class TestEvaluateEndpoint:

    def test_add(self, client):
        resp = _evaluate(client, "add", "987654321", "123456789")
        assert resp.status_code == 200
        data = resp.json()
        assert data["result"] == "1111111110"
        assert data["op"] == "add"
        assert data["remainder"] is None

    def test_sub(self, client):
        resp = _evaluate(client, "sub", "-20", "-34")
        assert resp.json()["result"] == "14"

    def test_mul_large(self, client):
        resp = _evaluate(client, "mul", BIG, BIG)
        assert resp.json()["result"] == BIG_SQUARED

    def test_div_smaller_divisor(self, client):
        resp = _evaluate(client, "div", "582039", "4802580293")
        assert resp.json()["result"] == "0"

    def test_mod(self, client):
        resp = _evaluate(client, "mod", "7", "-2")
        assert resp.json()["result"] == "-1"

    def test_divmod(self, client):
        resp = _evaluate(client, "divmod", BIG_SQUARED, BIG)
        data = resp.json()
        assert data["result"] == BIG
        assert data["remainder"] == "0"

    def test_pow(self, client):
        resp = _evaluate(client, "pow", "-5", "0")
        assert resp.json()["result"] == "-1"

    def test_bitwise_and_shift(self, client):
        assert _evaluate(client, "and", "12", "10").json()["result"] == "10"
        assert _evaluate(client, "or", "7", "8").json()["result"] == "15"
        assert _evaluate(client, "lshift", "3", "4").json()["result"] == "48"
        assert _evaluate(client, "rshift", "100", "3").json()["result"] == "12"

    @pytest.mark.parametrize(
        "a, b, expected", [("1", "2", "-1"), ("-5", "-5", "0"), ("10", "-99", "1")]
    )
    def test_compare(self, client, a, b, expected):
        assert _evaluate(client, "compare", a, b).json()["result"] == expected

    def test_operands_are_echoed_canonically(self, client):
        data = _evaluate(client, "add", "-000", "007").json()
        assert data["a"] == "0"
        assert data["b"] == "7"
        assert data["result"] == "7"

    def test_division_by_zero_400(self, client):
        resp = _evaluate(client, "div", "5", "0")
        assert resp.status_code == 400
        assert "division by zero" in resp.json()["detail"]

    def test_negative_exponent_400(self, client):
        resp = _evaluate(client, "pow", "2", "-1")
        assert resp.status_code == 400

    def test_invalid_literal_422(self, client):
        resp = _evaluate(client, "add", "12a", "1")
        assert resp.status_code == 422

    def test_unknown_op_422(self, client):
        resp = _evaluate(client, "xor", "1", "1")
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# POST /bigint/unary
# ---------------------------------------------------------------------------

class TestUnaryEndpoint:

    @pytest.mark.parametrize(
        "op, a, expected",
        [
            ("neg", "5", "-5"),
            ("neg", "0", "0"),
            ("inc", "999", "1000"),
            ("dec", "0", "-1"),
            ("abs", "-42", "42"),
        ],
    )
    def test_unary(self, client, op, a, expected):
        resp = client.post("/bigint/unary", json={"op": op, "a": a})
        assert resp.status_code == 200
        assert resp.json()["result"] == expected

    def test_unary_invalid_literal_422(self, client):
        resp = client.post("/bigint/unary", json={"op": "neg", "a": "abc"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /bigint/normalize/{literal}
# ---------------------------------------------------------------------------

class TestNormalizeEndpoint:

    def test_normalize(self, client):
        resp = client.get("/bigint/normalize/-00120")
        assert resp.status_code == 200
        assert resp.json() == {
            "literal": "-00120",
            "value": "-120",
            "digits": 3,
            "negative": True,
        }

    def test_normalize_negative_zero(self, client):
        data = client.get("/bigint/normalize/-0").json()
        assert data["value"] == "0"
        assert data["negative"] is False

    def test_normalize_invalid_422(self, client):
        resp = client.get("/bigint/normalize/12x")
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Size limits
# ---------------------------------------------------------------------------

class TestLimits:

    def test_create_app_sets_limit(self):
        create_app(max_digits=42)
        assert api.get_max_digits() == 42
        create_app()
        assert api.get_max_digits() == api.DEFAULT_MAX_DIGITS

    def test_invalid_limit_rejected(self):
        with pytest.raises(ValueError):
            create_app(max_digits=0)

    def test_operand_too_long_422(self, small_client):
        resp = _evaluate(small_client, "add", "1" * 21, "1")
        assert resp.status_code == 422

    def test_operand_at_limit_accepted(self, small_client):
        resp = _evaluate(small_client, "add", "9" * 20, "1")
        assert resp.status_code == 200
        assert resp.json()["result"] == "1" + "0" * 20

    def test_pow_result_too_large_422(self, small_client):
        resp = _evaluate(small_client, "pow", "12", "11")
        assert resp.status_code == 422

    def test_pow_within_limit(self, small_client):
        resp = _evaluate(small_client, "pow", "12", "10")
        assert resp.status_code == 200
        assert resp.json()["result"] == str(12 ** 10)

    def test_pow_of_one_is_not_limited(self, small_client):
        resp = _evaluate(small_client, "pow", "-1", "79")
        assert resp.status_code == 200
        assert resp.json()["result"] == "-1"

    def test_shift_amount_too_large_422(self, small_client):
        resp = _evaluate(small_client, "lshift", "1", "81")
        assert resp.status_code == 422

    def test_normalize_too_long_422(self, small_client):
        resp = small_client.get("/bigint/normalize/" + "1" * 21)
        assert resp.status_code == 422

    def test_lshift_result_too_large_422(self, small_client):
        resp = _evaluate(small_client, "lshift", "9" * 20, "80")
        assert resp.status_code == 422
        assert "would exceed 20 digits" in resp.json()["detail"]

    def test_lshift_within_limit(self, small_client):
        resp = _evaluate(small_client, "lshift", "1", "40")
        assert resp.status_code == 200
        assert resp.json()["result"] == str(2 ** 40)

    def test_lshift_of_zero_is_not_limited(self, small_client):
        resp = _evaluate(small_client, "lshift", "0", "80")
        assert resp.status_code == 200
        assert resp.json()["result"] == "0"

    def test_rshift_is_not_limited_by_result_size(self, small_client):
        resp = _evaluate(small_client, "rshift", "9" * 20, "80")
        assert resp.status_code == 200
        assert resp.json()["result"] == "0"

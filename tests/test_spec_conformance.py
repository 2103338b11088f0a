"""Contract conformance tests.

These tests are *driven by* ``spec.py``: they iterate over every
postcondition, error condition, and algebraic property defined in
``spec.build_spec`` and verify the engine satisfies them.

If the contract changes (e.g. a new postcondition is added), these tests
automatically cover it, with no manual test authoring required for the
new predicate.
"""
from __future__ import annotations

import pytest
from hypothesis import given, settings, assume
from hypothesis.strategies import integers

import test_whitebox
from bigint import BigInt
from spec import TINY, Domain, build_spec, digitwise, engine_divmod, engine_pow
from validation.counterexample_search import run_search

# ---------------------------------------------------------------------------
# Configuration: small domain so exhaustive checks are fast
# ---------------------------------------------------------------------------

SPEC = build_spec(TINY)
bounded = integers(min_value=TINY.lo, max_value=TINY.hi)
wide = integers(min_value=-10 ** 12, max_value=10 ** 12)
EXPECTED_ERRORS = (ZeroDivisionError, OverflowError, ValueError)

NON_EXPONENTIAL = [
    name for name in SPEC.operations if name not in ("pow", "lshift", "rshift")
]


def _triggers_error(op_name: str, a: int, b: int) -> bool:
    return any(ec.trigger(a, b) for ec in SPEC.operations[op_name].error_conditions)


# ===================================================================
# ORACLES
# ===================================================================

class TestOracles:
    """The oracles themselves encode the documented conventions."""

    def test_engine_divmod_sign_convention(self):
        assert engine_divmod(-7, 2) == (-3, -1)
        assert engine_divmod(7, -2) == (-3, -1)
        assert engine_divmod(-7, -2) == (3, 1)
        assert engine_divmod(-7, 10) == (0, -7)

    def test_engine_pow_zero_exponent(self):
        assert engine_pow(-5, 0) == -1
        assert engine_pow(0, 0) == 1
        assert engine_pow(-2, 3) == -8

    def test_digitwise(self):
        assert digitwise(12, 10, lambda x, y: x & y) == 10
        assert digitwise(78, 87, lambda x, y: x | y) == 165
        assert digitwise(-12, 10, lambda x, y: x | y) == -12


# ===================================================================
# POSTCONDITIONS: property-based
# ===================================================================

class TestPostconditions:
    """Every postcondition in the contract holds for random inputs."""

    @pytest.mark.parametrize("op_name", NON_EXPONENTIAL)
    @given(a=wide, b=wide)
    @settings(max_examples=100)
    def test_postconditions(self, op_name, a, b):
        assume(not _triggers_error(op_name, a, b))
        op_spec = SPEC.operations[op_name]
        result = op_spec.apply(a, b)
        for post in op_spec.postconditions:
            assert post.check(a, b, result), (
                f"Postcondition '{post.name}' failed: {op_name}({a}, {b}) = {result}"
            )

    @pytest.mark.parametrize("op_name", ["pow", "lshift", "rshift"])
    @given(a=wide, b=integers(min_value=0, max_value=30))
    @settings(max_examples=100)
    def test_exponential_postconditions(self, op_name, a, b):
        op_spec = SPEC.operations[op_name]
        result = op_spec.apply(a, b)
        for post in op_spec.postconditions:
            assert post.check(a, b, result), (
                f"Postcondition '{post.name}' failed: {op_name}({a}, {b}) = {result}"
            )


# ===================================================================
# ERROR CONDITIONS
# ===================================================================

class TestErrorConditions:
    """Every error condition in the contract triggers correctly."""

    @pytest.mark.parametrize("op_name", ["div", "mod"])
    def test_div_by_zero_triggers(self, op_name):
        op_spec = SPEC.operations[op_name]
        for a in TINY.all_values():
            for ec in op_spec.error_conditions:
                assert ec.trigger(a, 0)
                with pytest.raises(ec.exception):
                    op_spec.apply(a, 0)

    @pytest.mark.parametrize("op_name", ["pow", "lshift", "rshift"])
    def test_negative_exponent_triggers(self, op_name):
        op_spec = SPEC.operations[op_name]
        for a in TINY.all_values():
            for b in range(TINY.lo, 0):
                for ec in op_spec.error_conditions:
                    assert ec.trigger(a, b)
                    with pytest.raises(ec.exception):
                        op_spec.apply(a, b)


# ===================================================================
# ALGEBRAIC PROPERTIES: property-based
# ===================================================================

class TestAlgebraicProperties:
    """Every algebraic property in the contract holds for random inputs."""

    @given(a=bounded, b=bounded)
    @settings(max_examples=300)
    def test_binary_properties(self, a, b):
        for op_name, prop in SPEC.all_properties:
            if prop.arity != 2:
                continue
            try:
                ok = prop.check(BigInt(a), BigInt(b))
            except EXPECTED_ERRORS:
                continue
            assert ok, f"Property '{prop.name}' failed for {op_name}({a}, {b})"

    @given(a=wide)
    @settings(max_examples=300)
    def test_unary_properties(self, a):
        for op_name, prop in SPEC.all_properties:
            if prop.arity != 1:
                continue
            try:
                ok = prop.check(BigInt(a))
            except EXPECTED_ERRORS:
                continue
            assert ok, f"Property '{prop.name}' failed for {op_name}({a})"


# ===================================================================
# EXHAUSTIVE VERIFICATION: small domain
# ===================================================================

class TestExhaustive:
    """For a small domain, check *every* input pair against the contract."""

    @pytest.mark.parametrize("op_name", list(SPEC.operations))
    def test_all_pairs(self, op_name):
        op_spec = SPEC.operations[op_name]
        checked = 0
        for a in TINY.all_values():
            for b in TINY.all_values():
                if _triggers_error(op_name, a, b):
                    continue
                result = op_spec.apply(a, b)
                for post in op_spec.postconditions:
                    assert post.check(a, b, result), (
                        f"{op_name}({a}, {b}) = {result} violates '{post.name}'"
                    )
                checked += 1
        assert checked > 0

    def test_exhaustive_pair_count(self):
        """Sanity: confirm the expected number of pairs."""
        assert TINY.width == 16
        assert TINY.width ** 2 == 256

    def test_counterexample_search_is_clean(self):
        report = run_search(TINY)
        assert report.passed, report.summary()
        assert report.checks_run > 0

    def test_counterexample_search_unsigned_domain(self):
        report = run_search(Domain(0, 15))
        assert report.passed, report.summary()


# ===================================================================
# BRANCH COVERAGE
# ===================================================================

class TestBranchCoverage:

    def test_every_branch_has_a_test(self):
        assert set(test_whitebox.BRANCH_COVERAGE) == SPEC.branch_ids()

    def test_coverage_matrix_names_real_tests(self):
        for branch_id, tests in test_whitebox.BRANCH_COVERAGE.items():
            assert tests, f"No test listed for {branch_id}"
            for ref in tests:
                cls_name, test_name = ref.split("::")
                cls = getattr(test_whitebox, cls_name)
                assert callable(getattr(cls, test_name)), ref

    def test_domain_rejects_inverted_bounds(self):
        with pytest.raises(ValueError):
            Domain(lo=5, hi=-5)

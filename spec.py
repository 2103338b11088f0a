"""Formal contract for the BigInt engine.

Each binary operation is specified as a collection of:
- postconditions: what the result must satisfy, checked against Python's
  native ``int`` as an oracle (adjusted to the engine's conventions)
- error conditions: what inputs must cause specific exceptions
- algebraic properties: relationships between BigInt results

The contract is machine-readable.  Validation tools iterate over it to
auto-generate conformance tests and search for counterexamples.

Layers
------
Domain          small inclusive integer range used for exhaustive checks
OperationSpec   per-operation contract (post/error/properties)
BranchSpec      every decision point that white-box tests must cover
BigIntSpec      the full contract over one domain
build_spec()    constructs a BigIntSpec for a given domain
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Callable

from bigint import (
    BigInt,
    BigIntZeroDivisionError,
    UnsupportedOperationError,
)


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Domain:
    """Inclusive integer interval [lo, hi]."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        return self.hi - self.lo + 1

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)


TINY = Domain(lo=-8, hi=7)


# ---------------------------------------------------------------------------
# Spec building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free BigInt values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    method: str         # BigInt method implementing the operation
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]

    def apply(self, a: int, b: int) -> BigInt:
        return getattr(BigInt(a), self.method)(b)


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class BigIntSpec:
    """Complete contract over one input domain."""

    domain: Domain
    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}


# ---------------------------------------------------------------------------
# Oracles used inside the contract predicates
# ---------------------------------------------------------------------------

def engine_divmod(a: int, b: int) -> tuple[int, int]:
    """Quotient and remainder under the engine's sign convention.

    Magnitudes are those of truncating division.  Quotient and remainder
    are both negative iff exactly one operand is negative, except when
    ``|b| > |a|``: then the quotient is 0 and the remainder is ``a``.
    """
    if abs(b) > abs(a):
        return 0, a
    q, r = divmod(abs(a), abs(b))
    sign = -1 if (a < 0) != (b < 0) else 1
    return sign * q, sign * r


def engine_pow(a: int, b: int) -> int:
    """``a ** b``, except that a zero exponent keeps the sign of ``a``."""
    if b == 0:
        return -1 if a < 0 else 1
    return a ** b


def digitwise(a: int, b: int, combine: Callable[[int, int], int]) -> int:
    """Apply ``combine`` to matching decimal digits of ``|a|`` and ``|b|``.

    The sign is ``combine`` applied to the two sign flags.
    """
    da, db = str(abs(a))[::-1], str(abs(b))[::-1]
    total = 0
    for i in range(max(len(da), len(db))):
        x = int(da[i]) if i < len(da) else 0
        y = int(db[i]) if i < len(db) else 0
        total += combine(x, y) * 10 ** i
    return -total if combine(a < 0, b < 0) else total


def is_canonical(value: BigInt) -> bool:
    """Digits in range, no redundant leading zero, zero not negative."""
    if not value.digits or any(not 0 <= d <= 9 for d in value.digits):
        return False
    if value.digits == (0,):
        return not value.negative
    return value.digits[-1] != 0


# ---------------------------------------------------------------------------
# Spec builder
# ---------------------------------------------------------------------------

def _correct(description: str, oracle: Callable[[int, int], int]) -> Postcondition:
    return Postcondition(
        "result_correct",
        description,
        lambda a, b, result: int(result) == oracle(a, b),
    )


_CANONICAL = Postcondition(
    "result_canonical",
    "Result is in canonical form",
    lambda a, b, result: is_canonical(result),
)

_DIV_BY_ZERO = ErrorCondition(
    "div_by_zero_error",
    "BigIntZeroDivisionError when divisor is zero",
    lambda a, b: b == 0,
    BigIntZeroDivisionError,
)


def _negative_exponent(name: str) -> ErrorCondition:
    return ErrorCondition(
        "negative_exponent_error",
        f"UnsupportedOperationError when the {name} is negative",
        lambda a, b: b < 0,
        UnsupportedOperationError,
    )


def build_spec(domain: Domain = TINY) -> BigIntSpec:
    """Construct the full BigInt contract over a domain."""

    # ------------------------------------------------------------------ add
    add_spec = OperationSpec(
        name="add",
        method="add",
        postconditions=[_correct("Result equals a + b", operator.add), _CANONICAL],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a + b == b + a", 2,
                lambda a, b: a.add(b) == b.add(a),
            ),
            AlgebraicProperty(
                "identity", "a + 0 == a", 1,
                lambda a: a.add(BigInt(0)) == a,
            ),
            AlgebraicProperty(
                "inverse", "a + (-a) == 0", 1,
                lambda a: a.add(a.negate()) == BigInt(0),
            ),
        ],
    )

    # ------------------------------------------------------------------ sub
    sub_spec = OperationSpec(
        name="sub",
        method="subtract",
        postconditions=[_correct("Result equals a - b", operator.sub), _CANONICAL],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "anticommutativity", "a - b == -(b - a)", 2,
                lambda a, b: a.subtract(b) == b.subtract(a).negate(),
            ),
            AlgebraicProperty(
                "self_inverse", "a - a == 0", 1,
                lambda a: a.subtract(a) == BigInt(0),
            ),
            AlgebraicProperty(
                "increment_decrement", "(a + 1) - 1 == a", 1,
                lambda a: a.increment().decrement() == a,
            ),
        ],
    )

    # ------------------------------------------------------------------ mul
    mul_spec = OperationSpec(
        name="mul",
        method="multiply",
        postconditions=[_correct("Result equals a * b", operator.mul), _CANONICAL],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a * b == b * a", 2,
                lambda a, b: a.multiply(b) == b.multiply(a),
            ),
            AlgebraicProperty(
                "distributivity", "a * (b + 1) == a * b + a", 2,
                lambda a, b: (
                    a.multiply(b.increment()) == a.multiply(b).add(a)
                ),
            ),
            AlgebraicProperty(
                "identity", "a * 1 == a", 1,
                lambda a: a.multiply(BigInt(1)) == a,
            ),
            AlgebraicProperty(
                "zero", "a * 0 == 0", 1,
                lambda a: a.multiply(BigInt(0)) == BigInt(0),
            ),
        ],
    )

    # ------------------------------------------------------------------ div
    div_spec = OperationSpec(
        name="div",
        method="divide",
        postconditions=[
            _correct(
                "Quotient matches the engine's sign convention",
                lambda a, b: engine_divmod(a, b)[0],
            ),
            _CANONICAL,
        ],
        error_conditions=[_DIV_BY_ZERO],
        properties=[
            AlgebraicProperty(
                "division_identity",
                "q * b + r == a when b > 0 or |b| > |a|", 2,
                lambda a, b: (
                    a.divmod(b).quotient.multiply(b).add(a.divmod(b).remainder) == a
                    if not b.negative or abs(b) > abs(a) else True
                ),
            ),
            AlgebraicProperty(
                "identity", "a / 1 == a", 1,
                lambda a: a.divide(BigInt(1)) == a,
            ),
            AlgebraicProperty(
                "self", "a / a == 1 for a != 0", 1,
                lambda a: a.is_zero or a.divide(a) == BigInt(1),
            ),
        ],
    )

    # ------------------------------------------------------------------ mod
    mod_spec = OperationSpec(
        name="mod",
        method="modulus",
        postconditions=[
            _correct(
                "Remainder matches the engine's sign convention",
                lambda a, b: engine_divmod(a, b)[1],
            ),
            _CANONICAL,
        ],
        error_conditions=[_DIV_BY_ZERO],
        properties=[
            AlgebraicProperty(
                "bounded", "|a % b| < |b| unless |b| > |a|", 2,
                lambda a, b: (
                    abs(a.modulus(b)) < abs(b) or a.modulus(b) == a
                ),
            ),
            AlgebraicProperty(
                "self", "a % a == 0 for a != 0", 1,
                lambda a: a.is_zero or a.modulus(a) == BigInt(0),
            ),
        ],
    )

    # ------------------------------------------------------------------ pow
    pow_spec = OperationSpec(
        name="pow",
        method="power",
        postconditions=[_correct("Result equals a ** b", engine_pow), _CANONICAL],
        error_conditions=[_negative_exponent("exponent")],
        properties=[
            AlgebraicProperty(
                "first_power", "a ** 1 == a", 1,
                lambda a: a.power(1) == a,
            ),
            AlgebraicProperty(
                "square", "a ** 2 == a * a", 1,
                lambda a: a.power(2) == a.multiply(a),
            ),
            AlgebraicProperty(
                "successor", "a ** (b + 1) == a ** b * a for b > 0", 2,
                lambda a, b: (
                    a.power(b.increment()) == a.power(b).multiply(a)
                    if b > 0 else True
                ),
            ),
        ],
    )

    # ------------------------------------------------------------- and / or
    and_spec = OperationSpec(
        name="and_",
        method="bitwise_and",
        postconditions=[
            _correct(
                "Result is the digit-wise AND",
                lambda a, b: digitwise(a, b, operator.and_),
            ),
            _CANONICAL,
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a & b == b & a", 2,
                lambda a, b: a.bitwise_and(b) == b.bitwise_and(a),
            ),
            AlgebraicProperty(
                "idempotence", "a & a == a", 1,
                lambda a: a.bitwise_and(a) == a,
            ),
        ],
    )

    or_spec = OperationSpec(
        name="or_",
        method="bitwise_or",
        postconditions=[
            _correct(
                "Result is the digit-wise OR",
                lambda a, b: digitwise(a, b, operator.or_),
            ),
            _CANONICAL,
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a | b == b | a", 2,
                lambda a, b: a.bitwise_or(b) == b.bitwise_or(a),
            ),
            AlgebraicProperty(
                "idempotence", "a | a == a", 1,
                lambda a: a.bitwise_or(a) == a,
            ),
        ],
    )

    # --------------------------------------------------------------- shifts
    lshift_spec = OperationSpec(
        name="lshift",
        method="shift_left",
        postconditions=[
            _correct("Result equals a * 2 ** b", lambda a, b: a * 2 ** b),
            _CANONICAL,
        ],
        error_conditions=[_negative_exponent("shift amount")],
        properties=[
            AlgebraicProperty(
                "round_trip", "(a << b) >> b == a", 2,
                lambda a, b: a.shift_left(b).shift_right(b) == a,
            ),
        ],
    )

    rshift_spec = OperationSpec(
        name="rshift",
        method="shift_right",
        postconditions=[
            _correct(
                "Result equals the quotient of a / 2 ** b",
                lambda a, b: engine_divmod(a, 2 ** b)[0],
            ),
            _CANONICAL,
        ],
        error_conditions=[_negative_exponent("shift amount")],
        properties=[
            AlgebraicProperty(
                "zero_shift", "a >> 0 == a", 1,
                lambda a: a.shift_right(0) == a,
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Construction
        BranchSpec("INT-ZERO", "Zero built directly", "value == 0", "from_int"),
        BranchSpec(
            "INT-DIGITS", "Digits peeled off with % 10 and // 10",
            "value != 0", "from_int",
        ),
        BranchSpec(
            "STR-BLANK", "Empty or whitespace literal rejected",
            "not literal or literal.isspace()", "from_string",
        ),
        BranchSpec(
            "STR-SIGN", "Leading '-' recorded and stripped",
            "literal[0] == '-'", "from_string",
        ),
        BranchSpec(
            "STR-INVALID", "Non-digit character rejected",
            "body contains a character outside 0-9", "from_string",
        ),
        BranchSpec(
            "CANON-TRIM", "Most-significant zeros trimmed",
            "digits[-1] == 0 and len(digits) > 1", "canonicalize",
        ),
        BranchSpec(
            "CANON-ZERO-SIGN", "Zero forced non-negative",
            "digits == [0]", "canonicalize",
        ),
        # Ordering
        BranchSpec(
            "CMP-SIGN", "Differing signs decide the order",
            "a.negative != b.negative", "compare",
        ),
        BranchSpec(
            "CMP-LENGTH", "Differing lengths decide the order",
            "len(a.digits) != len(b.digits)", "compare",
        ),
        BranchSpec(
            "CMP-DIGIT", "First differing digit decides the order",
            "a.digits[i] != b.digits[i]", "compare",
        ),
        BranchSpec(
            "CMP-EQUAL", "Identical magnitudes", "a.digits == b.digits", "compare",
        ),
        # Additive core
        BranchSpec(
            "ADD-SAME-SIGN", "Magnitudes added, common sign kept",
            "a.negative == b.negative", "add",
        ),
        BranchSpec(
            "ADD-MIXED-SIGN", "Magnitudes subtracted",
            "a.negative != b.negative", "add",
        ),
        BranchSpec(
            "ADD-CARRY-OUT", "Final carry appends a digit",
            "carry after the last position", "add",
        ),
        BranchSpec(
            "SUB-SWAP", "Operands swapped and sign flipped",
            "|minuend| < |subtrahend|", "subtract",
        ),
        BranchSpec(
            "SUB-BORROW", "Borrow from the next position",
            "diff < 0 before the last position", "subtract",
        ),
        BranchSpec(
            "SUB-FINAL-NEGATIVE", "Negative top digit negated, sign flipped",
            "diff < 0 at the last position", "subtract",
        ),
        # Division
        BranchSpec("DIV-ZERO", "Division by zero raised", "b == 0", "divmod"),
        BranchSpec(
            "DIV-SMALLER", "Quotient 0, remainder is the dividend",
            "|b| > |a|", "divmod",
        ),
        BranchSpec(
            "DIV-UNIT", "Quotient |a| with output sign", "|b| == 1", "divmod",
        ),
        BranchSpec(
            "DIV-EQUAL", "Quotient 1 with output sign", "|b| == |a|", "divmod",
        ),
        BranchSpec(
            "DIV-LONG", "General long division", "1 < |b| < |a|", "divmod",
        ),
        # Derived
        BranchSpec(
            "POW-NEGATIVE", "Negative exponent rejected", "exponent < 0", "power",
        ),
        BranchSpec(
            "POW-ZERO", "Magnitude one with the base's sign",
            "exponent == 0", "power",
        ),
        BranchSpec(
            "POW-GENERAL", "Square-and-multiply", "exponent > 0", "power",
        ),
        BranchSpec(
            "BIT-CARRY", "Combined digit above 9 carries",
            "combine(x, y) + carry > 9", "bitwise",
        ),
    ]

    return BigIntSpec(
        domain=domain,
        operations={
            "add": add_spec,
            "sub": sub_spec,
            "mul": mul_spec,
            "div": div_spec,
            "mod": mod_spec,
            "pow": pow_spec,
            "and_": and_spec,
            "or_": or_spec,
            "lshift": lshift_spec,
            "rshift": rshift_spec,
        },
        branches=branches,
    )

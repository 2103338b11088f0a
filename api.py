"""FastAPI endpoints that evaluate BigInt operations.

Routes
------
POST   /bigint/evaluate             Apply a binary operation to two operands
POST   /bigint/unary                Apply a unary operation to one operand
GET    /bigint/normalize/{literal}  Canonical form of a decimal literal
"""

from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, HTTPException

from bigint import (
    BigInt,
    BigIntZeroDivisionError,
    InvalidLiteralError,
    UnsupportedOperationError,
)
from models import (
    BinaryOperation,
    BinaryRequest,
    BinaryResult,
    NormalizedLiteral,
    UnaryOperation,
    UnaryRequest,
    UnaryResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bigint", tags=["bigint"])

DEFAULT_MAX_DIGITS = 10_000

# Injected by the app factory (see app.py).
_max_digits: int = DEFAULT_MAX_DIGITS


def set_max_digits(max_digits: int) -> None:
    """Set the operand and result size limit. Called once at app startup."""
    global _max_digits
    if max_digits < 1:
        raise ValueError(f"max_digits must be positive, got {max_digits}")
    _max_digits = max_digits


def get_max_digits() -> int:
    return _max_digits


_BINARY: dict[BinaryOperation, Callable[[BigInt, BigInt], BigInt]] = {
    BinaryOperation.ADD: BigInt.add,
    BinaryOperation.SUB: BigInt.subtract,
    BinaryOperation.MUL: BigInt.multiply,
    BinaryOperation.DIV: BigInt.divide,
    BinaryOperation.MOD: BigInt.modulus,
    BinaryOperation.POW: BigInt.power,
    BinaryOperation.AND: BigInt.bitwise_and,
    BinaryOperation.OR: BigInt.bitwise_or,
    BinaryOperation.LSHIFT: BigInt.shift_left,
    BinaryOperation.RSHIFT: BigInt.shift_right,
}

_UNARY: dict[UnaryOperation, Callable[[BigInt], BigInt]] = {
    UnaryOperation.NEG: BigInt.negate,
    UnaryOperation.INC: BigInt.increment,
    UnaryOperation.DEC: BigInt.decrement,
    UnaryOperation.ABS: abs,
}

# Operations whose right operand is an exponent of 2 or of the base
_EXPONENTIAL = {BinaryOperation.POW, BinaryOperation.LSHIFT, BinaryOperation.RSHIFT}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unprocessable(detail: str) -> HTTPException:
    logger.info("Rejected request: %s", detail)
    return HTTPException(status_code=422, detail=detail)


def _operand(literal: str) -> BigInt:
    value = BigInt.from_string(literal)
    if len(value.digits) > _max_digits:
        raise _unprocessable(f"Operand exceeds {_max_digits} digits")
    return value


def _check_growth(op: BinaryOperation, a: BigInt, b: BigInt) -> None:
    """Reject exponents and shifts whose result could not fit in max_digits."""
    if op not in _EXPONENTIAL or b.negative:
        return
    if b > _max_digits * 4:
        raise _unprocessable(f"Exponent {b} exceeds limit for {op.value}")
    if op is BinaryOperation.POW and abs(a) > 1:
        estimate = len(a.digits) * int(b)
    elif op is BinaryOperation.LSHIFT and not a.is_zero:
        # 302/1000 rounds log10(2) up
        estimate = len(a.digits) + (int(b) * 302 + 999) // 1000
    else:
        return
    if estimate > _max_digits:
        raise _unprocessable(
            f"Result of {op.value} would exceed {_max_digits} digits"
        )


def _bad_request(e: Exception) -> HTTPException:
    logger.info("Rejected request: %s", e)
    return HTTPException(status_code=400, detail=str(e))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/evaluate", response_model=BinaryResult)
def evaluate(payload: BinaryRequest) -> BinaryResult:
    """Apply a binary operation."""
    a = _operand(payload.a)
    b = _operand(payload.b)
    _check_growth(payload.op, a, b)
    logger.debug("evaluate %s(%s, %s)", payload.op.value, a, b)

    remainder: BigInt | None = None
    try:
        if payload.op is BinaryOperation.COMPARE:
            result = BigInt(a.compare_to(b))
        elif payload.op is BinaryOperation.DIVMOD:
            result, remainder = a.divmod(b)
        else:
            result = _BINARY[payload.op](a, b)
    except (BigIntZeroDivisionError, UnsupportedOperationError) as e:
        raise _bad_request(e) from e

    return BinaryResult(
        op=payload.op,
        a=str(a),
        b=str(b),
        result=str(result),
        remainder=None if remainder is None else str(remainder),
    )


@router.post("/unary", response_model=UnaryResult)
def unary(payload: UnaryRequest) -> UnaryResult:
    """Apply a unary operation."""
    a = _operand(payload.a)
    logger.debug("unary %s(%s)", payload.op.value, a)
    return UnaryResult(op=payload.op, a=str(a), result=str(_UNARY[payload.op](a)))


@router.get("/normalize/{literal}", response_model=NormalizedLiteral)
def normalize(literal: str) -> NormalizedLiteral:
    """Parse a literal and return its canonical form."""
    try:
        value = _operand(literal)
    except InvalidLiteralError as e:
        raise _unprocessable(str(e)) from e
    return NormalizedLiteral(
        literal=literal,
        value=str(value),
        digits=len(value.digits),
        negative=value.negative,
    )

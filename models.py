"""Request and response models for the BigInt evaluation API.

Operands travel as decimal strings so that values of any size survive
JSON.  Literals are validated with the engine's own parser, so the API
accepts exactly what ``BigInt.from_string`` accepts.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from bigint import BigInt


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class BinaryOperation(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    DIVMOD = "divmod"
    POW = "pow"
    AND = "and"
    OR = "or"
    LSHIFT = "lshift"
    RSHIFT = "rshift"
    COMPARE = "compare"


class UnaryOperation(str, Enum):
    NEG = "neg"
    INC = "inc"
    DEC = "dec"
    ABS = "abs"


def _check_literal(v: str) -> str:
    # InvalidLiteralError is a ValueError, which pydantic reports as 422
    BigInt.from_string(v)
    return v


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class BinaryRequest(BaseModel):
    """Payload for ``POST /bigint/evaluate``."""

    op: BinaryOperation
    a: str = Field(..., description="Left operand as a decimal string")
    b: str = Field(..., description="Right operand as a decimal string")

    @field_validator("a", "b")
    @classmethod
    def operand_is_decimal(cls, v: str) -> str:
        return _check_literal(v)


class UnaryRequest(BaseModel):
    """Payload for ``POST /bigint/unary``."""

    op: UnaryOperation
    a: str = Field(..., description="Operand as a decimal string")

    @field_validator("a")
    @classmethod
    def operand_is_decimal(cls, v: str) -> str:
        return _check_literal(v)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class BinaryResult(BaseModel):
    op: BinaryOperation
    a: str
    b: str
    result: str
    remainder: str | None = None


class UnaryResult(BaseModel):
    op: UnaryOperation
    a: str
    result: str


class NormalizedLiteral(BaseModel):
    literal: str
    value: str
    digits: int
    negative: bool

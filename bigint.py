"""Immutable arbitrary-precision signed integers.

A ``BigInt`` stores its magnitude as a tuple of decimal digits, least
significant first, and its sign as a separate flag.  Every operation
builds a new value; nothing is mutated after construction.

Decision branches are annotated with their branch-IDs (see spec.py
BranchSpec) so white-box tests can trace coverage back to the contract.

Layers
------
digit helpers    unsigned add / subtract / multiply / long division
BigInt           construction, ordering, signed arithmetic, operators
DivMod           quotient and remainder returned together
ZERO, ONE, TWO   shared constants
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Callable, NamedTuple, Union

_DECIMAL = frozenset("0123456789")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BigIntError(Exception):
    """Base class for every error raised by the engine."""


class InvalidLiteralError(BigIntError, ValueError):
    """Raised when a string is not a decimal integer literal."""

    def __init__(self, literal: str, reason: str) -> None:
        self.literal = literal
        self.reason = reason
        super().__init__(f"Invalid decimal literal {literal!r}: {reason}")


class IncompatibleTypeError(BigIntError, TypeError):
    """Raised when an operand cannot be converted to a BigInt."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Cannot use {type(value).__name__} as a BigInt operand"
        )


class BigIntZeroDivisionError(BigIntError, ZeroDivisionError):
    """Raised when the divisor of a division or modulus is zero."""

    def __init__(self, dividend: BigInt) -> None:
        self.dividend = dividend
        super().__init__(f"division by zero ({dividend} / 0)")


class UnsupportedOperationError(BigIntError, ValueError):
    """Raised for operations the engine does not define, e.g. x ** -1."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")


# ---------------------------------------------------------------------------
# Digit helpers (unsigned, little-endian)
# ---------------------------------------------------------------------------

Digits = Union[tuple[int, ...], list[int]]


def _digit(digits: Digits, index: int) -> int:
    return digits[index] if index < len(digits) else 0


def _trim(digits: Digits) -> list[int]:
    """Drop most-significant zeros, keeping at least one digit."""
    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    return list(digits[:end]) or [0]


def _shift(digits: Digits, places: int) -> list[int]:
    """Multiply a magnitude by 10 ** places."""
    if len(digits) == 1 and digits[0] == 0:
        return [0]
    return [0] * places + list(digits)


def _compare_magnitude(a: Digits, b: Digits) -> int:
    """Compare two canonical magnitudes; returns -1, 0 or 1.

    Branches: CMP-LENGTH, CMP-DIGIT, CMP-EQUAL
    """
    if len(a) != len(b):                                          # CMP-LENGTH
        return 1 if len(a) > len(b) else -1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:                                                # CMP-DIGIT
            return 1 if x > y else -1
    return 0                                                      # CMP-EQUAL


def _add_magnitudes(a: Digits, b: Digits) -> list[int]:
    """Digit-wise add with carry.

    Branches: ADD-CARRY-OUT
    """
    result: list[int] = []
    carry = 0
    for i in range(max(len(a), len(b))):
        total = _digit(a, i) + _digit(b, i) + carry
        result.append(total % 10)
        carry = 1 if total >= 10 else 0
    if carry:                                                     # ADD-CARRY-OUT
        result.append(carry)
    return result


def _flip_final_borrow(lower: list[int], top: int) -> tuple[list[int], bool]:
    """Resolve a negative most-significant difference.

    ``lower`` holds the already-settled digits below the top position and
    ``top`` is the negative top difference, so the true value is
    ``lower + top * 10 ** len(lower)``.  Returns the digits of its
    magnitude and ``True`` to signal that the proposed sign flips.
    """
    if not any(lower):
        return lower + [-top], True
    # magnitude = (-top - 1) * 10**n + (10**n - lower)
    complement: list[int] = []
    borrowed = False
    for d in lower:
        if borrowed:
            complement.append(9 - d)
        elif d:
            complement.append(10 - d)
            borrowed = True
        else:
            complement.append(0)
    return complement + [-top - 1], True


def _subtract_magnitudes(
    minuend: Digits, subtrahend: Digits
) -> tuple[list[int], bool]:
    """Digit-wise subtract with borrow.

    Returns the trimmed difference and whether the sign of the result is
    flipped relative to ``minuend - subtrahend`` being non-negative.

    Branches: SUB-SWAP, SUB-BORROW, SUB-FINAL-NEGATIVE
    """
    flipped = False
    if _compare_magnitude(minuend, subtrahend) < 0:               # SUB-SWAP
        minuend, subtrahend = subtrahend, minuend
        flipped = True

    result: list[int] = []
    borrow = 0
    last = len(minuend) - 1
    for i in range(len(minuend)):
        diff = minuend[i] - _digit(subtrahend, i) - borrow
        borrow = 0
        if diff < 0:
            if i < last:                                          # SUB-BORROW
                diff += 10
                borrow = 1
            else:                                                 # SUB-FINAL-NEGATIVE
                result, flip = _flip_final_borrow(result, diff)
                return _trim(result), flipped != flip
        result.append(diff)
    return _trim(result), flipped


def _multiply_magnitudes(a: Digits, b: Digits) -> list[int]:
    """Schoolbook multiply into a buffer that grows as carries ripple."""
    buffer = [0]
    for i, x in enumerate(a):
        if x == 0:
            continue
        for j, y in enumerate(b):
            position = i + j
            carry = x * y
            while carry:
                while len(buffer) <= position:
                    buffer.append(0)
                total = buffer[position] + carry
                buffer[position] = total % 10
                carry = total // 10
                position += 1
    return _trim(buffer)


def _long_divide(dividend: Digits, divisor: Digits) -> tuple[list[int], list[int]]:
    """Long division of magnitudes, returning (quotient, remainder).

    The ten multiples of the divisor are computed once, largest first.
    At each position, from the most significant down, the first shifted
    multiple that fits in the running remainder gives the quotient digit.
    """
    multiples = [
        (digit, _multiply_magnitudes(divisor, (digit,)))
        for digit in range(9, -1, -1)
    ]
    remainder = _trim(dividend)
    quotient: list[int] = []
    for position in range(len(dividend) - 1, -1, -1):
        for digit, multiple in multiples:
            shifted = _shift(multiple, position)
            if _compare_magnitude(shifted, remainder) <= 0:
                remainder, _ = _subtract_magnitudes(remainder, shifted)
                quotient.append(digit)
                break
    quotient.reverse()
    return _trim(quotient), remainder


def _digitwise(
    a: Digits, b: Digits, combine: Callable[[int, int], int]
) -> list[int]:
    """Combine two digit arrays position by position.

    Combined values above 9 (possible for OR, e.g. 7 | 8 == 15) carry
    into the next position so the result stays a valid digit array.

    Branches: BIT-CARRY
    """
    result: list[int] = []
    carry = 0
    for i in range(max(len(a), len(b))):
        total = combine(_digit(a, i), _digit(b, i)) + carry
        result.append(total % 10)
        carry = total // 10                                       # BIT-CARRY
    if carry:
        result.append(carry)
    return result


# ---------------------------------------------------------------------------
# BigInt
# ---------------------------------------------------------------------------

IntLike = Union["BigInt", int]


class DivMod(NamedTuple):
    """Quotient and remainder of one long division."""

    quotient: BigInt
    remainder: BigInt


def _coerce(value: object) -> BigInt:
    """Implicit conversion of machine integers to BigInt."""
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int):
        return BigInt.from_int(value)
    raise IncompatibleTypeError(value)


def _exponent(value: object, operation: str) -> int:
    if isinstance(value, BigInt):
        value = int(value)
    if not isinstance(value, int):
        raise IncompatibleTypeError(value)
    if value < 0:                                                 # POW-NEGATIVE
        raise UnsupportedOperationError(
            operation, f"negative exponent {value} is not supported"
        )
    return value


@dataclass(frozen=True, init=False, eq=False, repr=False)
class BigInt:
    """An immutable arbitrary-precision signed integer.

    ``BigInt(42)`` and ``BigInt("-1234567890123456789")`` are the public
    constructors.  ``digits`` is little-endian and canonical: no
    redundant most-significant zeros, and zero is never negative.
    """

    digits: tuple[int, ...]
    negative: bool

    def __init__(self, value: IntLike | str = 0) -> None:
        if isinstance(value, BigInt):
            negative, digits = value.negative, list(value.digits)
        elif isinstance(value, str):
            negative, digits = _parse_literal(value)
        elif isinstance(value, int):
            negative, digits = _split_int(value)
        else:
            raise IncompatibleTypeError(value)
        self._assign(negative, digits)

    def _assign(self, negative: bool, digits: Digits) -> None:
        """Canonicalize and store.

        Branches: CANON-TRIM, CANON-ZERO-SIGN
        """
        digits = _trim(digits)                                    # CANON-TRIM
        if digits == [0]:                                         # CANON-ZERO-SIGN
            negative = False
        object.__setattr__(self, "digits", tuple(digits))
        object.__setattr__(self, "negative", bool(negative))

    # -- constructors -------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> BigInt:
        if not isinstance(value, int):
            raise IncompatibleTypeError(value)
        return cls(value)

    @classmethod
    def from_string(cls, literal: str) -> BigInt:
        if not isinstance(literal, str):
            raise IncompatibleTypeError(literal)
        return cls(literal)

    @classmethod
    def _from_digits(cls, negative: bool, digits: Digits) -> BigInt:
        """Internal constructor used by the arithmetic algorithms."""
        instance = cls.__new__(cls)
        instance._assign(negative, digits)
        return instance

    # -- inspection ---------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return self.digits == (0,)

    def to_string(self) -> str:
        text = "".join(chr(d + ord("0")) for d in reversed(self.digits))
        return "-" + text if self.negative else text

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInt({self.to_string()!r})"

    def __int__(self) -> int:
        value = 0
        for d in reversed(self.digits):
            value = value * 10 + d
        return -value if self.negative else value

    def __bool__(self) -> bool:
        return not self.is_zero

    # -- equality, hashing, ordering ----------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return self.negative == other.negative and self.digits == other.digits

    def __hash__(self) -> int:
        return hash(self.to_string())

    def compare_to(self, other: IntLike) -> int:
        """Total order: returns -1, 0 or 1.

        Branches: CMP-SIGN (plus the magnitude branches)
        """
        other = _coerce(other)
        if self.negative != other.negative:                       # CMP-SIGN
            return -1 if self.negative else 1
        order = _compare_magnitude(self.digits, other.digits)
        return -order if self.negative else order

    def _ordered(self, other: object, accept: Callable[[int], bool]) -> bool:
        if not isinstance(other, (BigInt, int)):
            return NotImplemented
        return accept(self.compare_to(other))

    def __lt__(self, other: object) -> bool:
        return self._ordered(other, lambda c: c < 0)

    def __le__(self, other: object) -> bool:
        return self._ordered(other, lambda c: c <= 0)

    def __gt__(self, other: object) -> bool:
        return self._ordered(other, lambda c: c > 0)

    def __ge__(self, other: object) -> bool:
        return self._ordered(other, lambda c: c >= 0)

    # -- additive core ------------------------------------------------------

    def add(self, other: IntLike) -> BigInt:
        """Signed addition.

        Branches: ADD-SAME-SIGN, ADD-MIXED-SIGN
        """
        other = _coerce(other)
        if self.negative == other.negative:                       # ADD-SAME-SIGN
            return BigInt._from_digits(
                self.negative, _add_magnitudes(self.digits, other.digits)
            )
        # ADD-MIXED-SIGN: |self| - |other|, signed by self
        digits, flipped = _subtract_magnitudes(self.digits, other.digits)
        return BigInt._from_digits(self.negative != flipped, digits)

    def subtract(self, other: IntLike) -> BigInt:
        return self.add(_coerce(other).negate())

    def negate(self) -> BigInt:
        return BigInt._from_digits(not self.negative, self.digits)

    def increment(self) -> BigInt:
        return self.add(ONE)

    def decrement(self) -> BigInt:
        return self.subtract(ONE)

    def __abs__(self) -> BigInt:
        return BigInt._from_digits(False, self.digits)

    # -- multiplicative core ------------------------------------------------

    def multiply(self, other: IntLike) -> BigInt:
        other = _coerce(other)
        return BigInt._from_digits(
            self.negative != other.negative,
            _multiply_magnitudes(self.digits, other.digits),
        )

    def divmod(self, other: IntLike) -> DivMod:
        """Quotient and remainder in one pass.

        Both results carry the output sign (negative iff exactly one
        operand is negative), except that a divisor larger in magnitude
        than the dividend returns the dividend itself as the remainder.
        That branch skips the output-sign rule so that the remainder keeps
        the dividend's sign and ``q*b + r == a`` still holds.

        Branches: DIV-ZERO, DIV-SMALLER, DIV-UNIT, DIV-EQUAL, DIV-LONG
        """
        divisor = _coerce(other)
        if divisor.is_zero:                                       # DIV-ZERO
            raise BigIntZeroDivisionError(self)

        order = _compare_magnitude(divisor.digits, self.digits)
        if order > 0:                                             # DIV-SMALLER
            return DivMod(ZERO, self)

        negative = self.negative != divisor.negative
        if divisor.digits == (1,):                                # DIV-UNIT
            return DivMod(BigInt._from_digits(negative, self.digits), ZERO)
        if order == 0:                                            # DIV-EQUAL
            return DivMod(BigInt._from_digits(negative, [1]), ZERO)

        quotient, remainder = _long_divide(self.digits, divisor.digits)  # DIV-LONG
        return DivMod(
            BigInt._from_digits(negative, quotient),
            BigInt._from_digits(negative, remainder),
        )

    def divide(self, other: IntLike) -> BigInt:
        return self.divmod(other).quotient

    def modulus(self, other: IntLike) -> BigInt:
        return self.divmod(other).remainder

    # -- derived operations -------------------------------------------------

    def power(self, exponent: IntLike) -> BigInt:
        """Raise to a non-negative exponent by square-and-multiply.

        A zero exponent yields magnitude one carrying the base's sign,
        so ``BigInt(-5).power(0) == BigInt(-1)``.

        Branches: POW-NEGATIVE, POW-ZERO, POW-GENERAL
        """
        exponent = _exponent(exponent, "power")
        if exponent == 0:                                         # POW-ZERO
            return BigInt._from_digits(self.negative, [1])

        result = ONE                                              # POW-GENERAL
        base = self
        while exponent:
            if exponent & 1:
                result = result.multiply(base)
            exponent >>= 1
            if exponent:
                base = base.multiply(base)
        return result

    def bitwise_and(self, other: IntLike) -> BigInt:
        """AND of the decimal digits, position by position."""
        other = _coerce(other)
        return BigInt._from_digits(
            self.negative and other.negative,
            _digitwise(self.digits, other.digits, operator.and_),
        )

    def bitwise_or(self, other: IntLike) -> BigInt:
        """OR of the decimal digits, position by position."""
        other = _coerce(other)
        return BigInt._from_digits(
            self.negative or other.negative,
            _digitwise(self.digits, other.digits, operator.or_),
        )

    def shift_left(self, places: IntLike) -> BigInt:
        """Multiply by 2 ** places."""
        return self.multiply(TWO.power(_exponent(places, "shift_left")))

    def shift_right(self, places: IntLike) -> BigInt:
        """Divide by 2 ** places."""
        return self.divide(TWO.power(_exponent(places, "shift_right")))

    # -- operators ----------------------------------------------------------

    def _binary(self, other: object, method: Callable) -> BigInt:
        if not isinstance(other, (BigInt, int)):
            return NotImplemented
        return method(self, other)

    def _reflected(self, other: object, method: Callable) -> BigInt:
        if not isinstance(other, int):
            return NotImplemented
        return method(BigInt.from_int(other), self)

    def __add__(self, other):
        return self._binary(other, BigInt.add)

    def __radd__(self, other):
        return self._reflected(other, BigInt.add)

    def __sub__(self, other):
        return self._binary(other, BigInt.subtract)

    def __rsub__(self, other):
        return self._reflected(other, BigInt.subtract)

    def __mul__(self, other):
        return self._binary(other, BigInt.multiply)

    def __rmul__(self, other):
        return self._reflected(other, BigInt.multiply)

    def __floordiv__(self, other):
        return self._binary(other, BigInt.divide)

    def __rfloordiv__(self, other):
        return self._reflected(other, BigInt.divide)

    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self, other):
        return self._binary(other, BigInt.modulus)

    def __rmod__(self, other):
        return self._reflected(other, BigInt.modulus)

    def __divmod__(self, other):
        return self._binary(other, BigInt.divmod)

    def __rdivmod__(self, other):
        return self._reflected(other, BigInt.divmod)

    def __pow__(self, other):
        return self._binary(other, BigInt.power)

    def __rpow__(self, other):
        return self._reflected(other, BigInt.power)

    def __and__(self, other):
        return self._binary(other, BigInt.bitwise_and)

    __rand__ = __and__

    def __or__(self, other):
        return self._binary(other, BigInt.bitwise_or)

    __ror__ = __or__

    def __lshift__(self, other):
        return self._binary(other, BigInt.shift_left)

    def __rshift__(self, other):
        return self._binary(other, BigInt.shift_right)

    def __neg__(self) -> BigInt:
        return self.negate()

    def __pos__(self) -> BigInt:
        return self


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------

def _split_int(value: int) -> tuple[bool, list[int]]:
    """Sign and little-endian digits of a machine integer.

    Branches: INT-ZERO, INT-DIGITS
    """
    if value == 0:                                                # INT-ZERO
        return False, [0]
    negative = value < 0                                          # INT-DIGITS
    value = -value if negative else value
    digits: list[int] = []
    while value > 0:
        digits.append(value % 10)
        value //= 10
    return negative, digits


def _parse_literal(literal: str) -> tuple[bool, list[int]]:
    """Sign and little-endian digits of a decimal string.

    Branches: STR-BLANK, STR-SIGN, STR-INVALID
    """
    if not literal or literal.isspace():                          # STR-BLANK
        raise InvalidLiteralError(literal, "empty or blank input")
    negative = literal[0] == "-"
    body = literal[1:] if negative else literal                   # STR-SIGN
    if not body or not set(body) <= _DECIMAL:                     # STR-INVALID
        raise InvalidLiteralError(literal, "expected digits 0-9 after an optional '-'")
    return negative, [ord(ch) - ord("0") for ch in reversed(body)]


ZERO = BigInt(0)
ONE = BigInt(1)
TWO = BigInt(2)

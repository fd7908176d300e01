# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Error taxonomy for fixed-point operations."""

from enum import StrEnum, auto


class ParseErrorReason(StrEnum):
    """Reasons for rejecting decimal text.

    Attributes:
        EMPTY: The input string is empty.
        MALFORMED_INPUT: Unexpected character or misplaced sign/dot.
        TOO_MANY_FRACTIONAL_DIGITS: More fractional digits than the precision.

    """

    EMPTY = auto()
    MALFORMED_INPUT = auto()
    TOO_MANY_FRACTIONAL_DIGITS = auto()


class FixedPointError(Exception):
    """Base class for all fixed-point errors."""


class ArithmeticOverflow(FixedPointError, OverflowError):
    """Result does not fit the backing integer width."""

    def __init__(self, message: str = "overflow") -> None:
        super().__init__(message)


class DivisionByZero(FixedPointError, ZeroDivisionError):
    """Divisor is zero."""

    def __init__(self, message: str = "division by zero") -> None:
        super().__init__(message)


class DomainViolation(FixedPointError, ValueError):
    """Operand is outside the domain of the function, e.g. sqrt(-1)."""

    def __init__(self, message: str = "domain violation") -> None:
        super().__init__(message)


class ParseError(FixedPointError, ValueError):
    """Decimal text could not be parsed."""

    def __init__(self, reason: ParseErrorReason, text: str = "") -> None:
        self.reason = reason
        self.text = text
        super().__init__(f"cannot parse {text!r}: {reason}")


class ConvertError(FixedPointError, ValueError):
    """Conversion from a foreign representation failed."""

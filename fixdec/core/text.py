# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Lossless decimal text parsing and formatting."""

from fixdec.type import (
    ArithmeticOverflow,
    DecimalFormat,
    ParseError,
    ParseErrorReason,
    keep_width,
)

_ALPHABET = frozenset("-.0123456789")

# 2^127 has 39 decimal digits
_MAX_INTEGRAL_DIGITS = 40


def parse_decimal(text: str, fmt: DecimalFormat) -> int:
    """Parse `["-"] 1*DIGIT ["." 1*P DIGIT]` into a raw scaled integer.

    Parsing never rounds: surplus fractional digits are an error even when
    they are zeros.

    Args:
        text: Decimal text.
        fmt: Target format.

    Returns:
        Raw scaled integer.

    Raises:
        ParseError: If `text` is empty, malformed, or too precise.
        ArithmeticOverflow: If the value does not fit `fmt.bits`.

    """
    # --- 1. Validate alphabet and layout ---

    if not text:
        raise ParseError(ParseErrorReason.EMPTY, text)

    if not _ALPHABET.issuperset(text):
        raise ParseError(ParseErrorReason.MALFORMED_INPUT, text)

    negative = text.startswith("-")
    body = text[1:] if negative else text
    integral_str, dot, fractional_str = body.partition(".")

    # `isdigit` also rejects a second sign or dot, the alphabet is ASCII-only
    if not integral_str.isdigit():
        raise ParseError(ParseErrorReason.MALFORMED_INPUT, text)

    if dot and not fractional_str.isdigit():
        raise ParseError(ParseErrorReason.MALFORMED_INPUT, text)

    if len(fractional_str) > fmt.precision:
        raise ParseError(ParseErrorReason.TOO_MANY_FRACTIONAL_DIGITS, text)

    # --- 2. Assemble the scaled integer ---

    # leading zeros are valid and do not count towards the magnitude
    significant = integral_str.lstrip("0") or "0"
    if len(significant) > _MAX_INTEGRAL_DIGITS:
        raise ArithmeticOverflow(f"{text!r} does not fit {fmt.bits} bits")

    fractional = int(fractional_str.ljust(fmt.precision, "0") or "0")
    magnitude = int(significant) * fmt.coef + fractional

    return keep_width(-magnitude if negative else magnitude, fmt)


def format_decimal(inner: int, fmt: DecimalFormat) -> str:
    """Format a raw scaled integer in canonical decimal text.

    Trailing fractional zeros are trimmed down to a single `0`; zero never
    carries a sign.
    """
    sign = "-" if inner < 0 else ""
    integral, fractional = divmod(abs(inner), fmt.coef)

    if fmt.precision == 0:
        return f"{sign}{integral}"

    digits = f"{fractional:0{fmt.precision}d}".rstrip("0") or "0"
    return f"{sign}{integral}.{digits}"

# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Lossy bridge between raw scaled integers and binary floating point."""

import logging
import math
from fractions import Fraction

from fixdec.type import ConvertError, DecimalFormat, RoundingMode, keep_width, round_quotient

logger = logging.getLogger(__name__)


def bits_to_float(inner: int, fmt: DecimalFormat) -> float:
    """Decode a raw value to the nearest float."""
    # int / int is correctly rounded
    return inner / fmt.coef


def float_to_bits(value: float, fmt: DecimalFormat, mode: RoundingMode) -> int:
    """Encode a float as a raw value of `fmt`.

    The float is read at its shortest round-trip decimal form, so `0.1` is
    taken as one tenth rather than its binary expansion, and then rounded to
    `fmt.precision` digits with `mode`. Directed modes such as `CEIL` and
    `FLOOR` therefore apply to that decimal reading, not to the exact binary
    value: `0.1` at one digit stays `0.1` under `CEIL`.

    Args:
        value: Source float.
        fmt: Target format.
        mode: Rounding mode for digits beyond `fmt.precision`.

    Returns:
        Raw scaled integer.

    Raises:
        ConvertError: If `value` is NaN or infinite.
        ArithmeticOverflow: If the value does not fit `fmt.bits`.

    """
    if not math.isfinite(value):
        raise ConvertError("not finite")

    scaled = Fraction(repr(float(value))) * fmt.coef
    raw = round_quotient(scaled.numerator, scaled.denominator, mode)

    if scaled.denominator != 1:
        logger.debug("float %r rounded to %d digits (%s)", value, fmt.precision, mode)

    return keep_width(raw, fmt)

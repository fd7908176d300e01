# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Checked and rounding arithmetic on raw scaled integers.

Every function takes and returns raw `inner` values of one `DecimalFormat`.
Intermediates are plain Python integers and therefore always fit
`fmt.promoted_bits`; results are narrowed back with `keep_width`.
"""

from math import isqrt

from fixdec.type import (
    ArithmeticOverflow,
    DecimalFormat,
    DivisionByZero,
    DomainViolation,
    RoundingMode,
    keep_width,
    round_quotient,
)

# --- Direct (same scale) operations ---


def checked_add(a: int, b: int, fmt: DecimalFormat) -> int:
    """Add two raw values."""
    return keep_width(a + b, fmt)


def checked_sub(a: int, b: int, fmt: DecimalFormat) -> int:
    """Subtract two raw values."""
    return keep_width(a - b, fmt)


def checked_neg(a: int, fmt: DecimalFormat) -> int:
    """Negate a raw value; `fmt.min_value` has no positive counterpart."""
    return keep_width(-a, fmt)


def checked_abs(a: int, fmt: DecimalFormat) -> int:
    """Absolute value of a raw value."""
    return checked_neg(a, fmt) if a < 0 else a


def checked_mul_int(a: int, n: int, fmt: DecimalFormat) -> int:
    """Multiply a raw value by a plain integer; exact, no rounding."""
    return keep_width(a * n, fmt)


def compare(a: int, b: int) -> int:
    """Three-way comparison of raw values."""
    return (a > b) - (a < b)


def saturate(value: int, fmt: DecimalFormat) -> int:
    """Clamp a promoted intermediate into the representable range."""
    return max(fmt.min_value, min(fmt.max_value, value))


# --- Widening operations ---


def rounding_mul(a: int, b: int, fmt: DecimalFormat, mode: RoundingMode) -> int:
    """Multiply two raw values, rounding the product back to `fmt.precision`.

    Args:
        a: Left raw value.
        b: Right raw value.
        fmt: Shared format of both operands.
        mode: Rounding mode for the `fmt.precision` discarded digits.

    Returns:
        Raw product.

    Raises:
        ArithmeticOverflow: If the narrowed product does not fit.

    """
    # scale 10^(2P), |product| <= 2^(2*bits-2)
    product = a * b
    return keep_width(round_quotient(product, fmt.coef, mode), fmt)


def rounding_div(a: int, b: int, fmt: DecimalFormat, mode: RoundingMode) -> int:
    """Divide two raw values, keeping `fmt.precision` digits of the quotient.

    Args:
        a: Dividend raw value.
        b: Divisor raw value.
        fmt: Shared format of both operands.
        mode: Rounding mode for the remainder.

    Returns:
        Raw quotient.

    Raises:
        DivisionByZero: If `b` is zero.
        ArithmeticOverflow: If the narrowed quotient does not fit.

    """
    if b == 0:
        raise DivisionByZero()

    # widen the dividend so the quotient keeps P fractional digits
    numerator = a * fmt.coef
    return keep_width(round_quotient(numerator, b, mode), fmt)


def rounding_div_int(a: int, n: int, fmt: DecimalFormat, mode: RoundingMode) -> int:
    """Divide a raw value by a plain integer."""
    if n == 0:
        raise DivisionByZero()
    return keep_width(round_quotient(a, n, mode), fmt)


def rescale(a: int, fmt: DecimalFormat, new_precision: int, mode: RoundingMode) -> int:
    """Convert a raw value of `fmt` to `new_precision` digits at the same width.

    Raises:
        ArithmeticOverflow: If scaling up does not fit.

    """
    new_fmt = DecimalFormat(fmt.bits, new_precision)

    if new_precision < fmt.precision:
        divisor = 10 ** (fmt.precision - new_precision)
        return keep_width(round_quotient(a, divisor, mode), new_fmt)

    factor = 10 ** (new_precision - fmt.precision)
    return keep_width(a * factor, new_fmt)


def rounding_sqrt(a: int, fmt: DecimalFormat, mode: RoundingMode) -> int:
    """Square root of a raw value.

    `sqrt(S) * coef == sqrt(S_inner * coef)`, so the root of the widened raw
    value is already at the right scale.

    Raises:
        DomainViolation: If `a` is negative.

    """
    if a < 0:
        raise DomainViolation("square root of a negative value")

    widened = a * fmt.coef
    root = isqrt(widened)
    loss = widened - root * root

    # the true root lies in [root, root + 1) and is never exactly half-way
    match mode:
        case RoundingMode.FLOOR | RoundingMode.TOWARD_ZERO:
            offset = 0
        case RoundingMode.CEIL | RoundingMode.AWAY_FROM_ZERO:
            offset = int(loss != 0)
        case RoundingMode.NEAREST_TIES_TO_EVEN | RoundingMode.NEAREST_TIES_AWAY_FROM_ZERO:
            # (root + 0.5)^2 = root^2 + root + 0.25
            offset = int(loss > root)
        case _:
            raise ValueError(f"Unsupported rounding mode: {mode}")

    return keep_width(root + offset, fmt)


# --- Integral helpers ---


def integral(a: int, fmt: DecimalFormat, mode: RoundingMode) -> int:
    """Rounded integral part of a raw value, as a plain integer."""
    return round_quotient(a, fmt.coef, mode)


def half_sum(a: int, b: int, mode: RoundingMode) -> int:
    """Rounded mean of two raw values; cannot overflow."""
    return round_quotient(a + b, 2, mode)


def round_towards_zero_by(a: int, step: int) -> int:
    """Truncate towards zero to a multiple of `step`; `step == 0` is a no-op."""
    if step == 0:
        return a

    quotient = abs(a) // abs(step)
    if (a < 0) != (step < 0):
        quotient = -quotient
    return quotient * step


def next_power_of_ten(a: int, fmt: DecimalFormat) -> int:
    """Smallest raw `10^k` not less than `|a|`, carrying the sign of `a`.

    Raises:
        ArithmeticOverflow: If no such power of ten fits.

    """
    if a < 0:
        return checked_neg(next_power_of_ten(checked_neg(a, fmt), fmt), fmt)

    power = 1
    while power < a:
        power *= 10

    if power > fmt.max_value:
        raise ArithmeticOverflow(f"no power of ten above {a} fits {fmt.bits} bits")

    return power

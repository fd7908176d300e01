# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Rounding utils."""

from enum import StrEnum, auto

import torch
from torch import Tensor

from .errors import DivisionByZero


class RoundingMode(StrEnum):
    """Rounding modes.

    Attributes:
        TOWARD_ZERO: Round towards zero (Truncate).
        AWAY_FROM_ZERO: Round away from zero.
        FLOOR: Round towards -inf.
        CEIL: Round towards +inf.
        NEAREST_TIES_TO_EVEN: Round to nearest, ties to even.
        NEAREST_TIES_AWAY_FROM_ZERO: Round to nearest, ties away from zero.

    """

    TOWARD_ZERO = auto()
    AWAY_FROM_ZERO = auto()
    FLOOR = auto()
    CEIL = auto()
    NEAREST_TIES_TO_EVEN = auto()
    NEAREST_TIES_AWAY_FROM_ZERO = auto()


def round_offset(
    quotient: int,
    remainder: int,
    divisor: int,
    mode: RoundingMode,
) -> int:
    """Compute the rounding offset for a floored quotient.

    Args:
        quotient: Floored quotient, `numerator // divisor`.
        remainder: Floored remainder, `0 <= remainder < divisor`.
        divisor: Positive divisor.
        mode: Rounding mode.

    Returns:
        `0` or `1`, to be added to `quotient`.

    """
    # truth table, `q` is the floored quotient, `S` the sign of the true value
    #
    # | value  | q   | S | down | ceil | zero | inf | even   | away |
    # | +a.0   | +a  | 0 |  +0  |  +0  |  +0  | +0  |   +0   |  +0  |
    # | +a.3   | +a  | 0 |  +0  |  +1  |  +0  | +1  |   +0   |  +0  |
    # | +a.5   | +a  | 0 |  +0  |  +1  |  +0  | +1  | +lsb/o |  +1  |
    # | +a.7   | +a  | 0 |  +0  |  +1  |  +0  | +1  |   +1   |  +1  |
    # | -a.3   | -a-1| 1 |  +0  |  +1  |  +1  | +0  |   +1   |  +1  |
    # | -a.5   | -a-1| 1 |  +0  |  +1  |  +1  | +0  | +lsb/o |  +0  |
    # | -a.7   | -a-1| 1 |  +0  |  +1  |  +1  | +0  |   +0   |  +0  |

    if remainder == 0:
        return 0

    sign = quotient < 0
    twice = remainder * 2

    match mode:
        case RoundingMode.FLOOR:  # round towards -inf
            return 0

        case RoundingMode.CEIL:  # round towards +inf
            return 1

        case RoundingMode.TOWARD_ZERO:  # round towards zero
            return int(sign)

        case RoundingMode.AWAY_FROM_ZERO:  # round away from zero
            return int(not sign)

        case RoundingMode.NEAREST_TIES_TO_EVEN:  # round to nearest, ties to even
            if twice != divisor:
                return int(twice > divisor)
            return quotient & 1

        case RoundingMode.NEAREST_TIES_AWAY_FROM_ZERO:  # round to nearest, ties away from zero
            if twice != divisor:
                return int(twice > divisor)
            return int(not sign)

        case _:
            raise ValueError(f"Unsupported rounding mode: {mode}")


def round_quotient(numerator: int, divisor: int, mode: RoundingMode) -> int:
    """Divide exactly and fold the remainder back in with `mode`.

    Raises:
        DivisionByZero: If `divisor` is zero.

    """
    if divisor == 0:
        raise DivisionByZero()

    if divisor < 0:
        numerator, divisor = -numerator, -divisor

    quotient, remainder = divmod(numerator, divisor)
    return quotient + round_offset(quotient, remainder, divisor, mode)


def round_offset_tensor(
    quotient: Tensor,
    remainder: Tensor,
    divisor: int,
    mode: RoundingMode,
) -> Tensor:
    """Compute rounding offsets for floored integer tensors.

    Same truth table as `round_offset`; `divisor` must be positive.
    """
    # --- 1. Build boolean predicates ---

    has_drop = remainder != 0
    sign = quotient < 0
    twice = remainder * 2
    above_half = twice > divisor
    is_tie = twice == divisor
    lsb_is_odd = (quotient & 1) != 0

    # --- 2. Resolve mode-specific rounding offset ---

    offset: Tensor

    match mode:
        case RoundingMode.FLOOR:  # round towards -inf
            offset = torch.zeros_like(has_drop)

        case RoundingMode.CEIL:  # round towards +inf
            offset = has_drop

        case RoundingMode.TOWARD_ZERO:  # round towards zero
            offset = has_drop & sign

        case RoundingMode.AWAY_FROM_ZERO:  # round away from zero
            offset = has_drop & ~sign

        case RoundingMode.NEAREST_TIES_TO_EVEN:  # round to nearest, ties to even
            offset = above_half | (is_tie & lsb_is_odd)

        case RoundingMode.NEAREST_TIES_AWAY_FROM_ZERO:  # round to nearest, ties away from zero
            offset = above_half | (is_tie & ~sign)

        case _:
            raise ValueError(f"Unsupported rounding mode: {mode}")

    return offset.to(quotient.dtype)


def round_float_tensor(value: Tensor, mode: RoundingMode) -> Tensor:
    """Round a floating-point tensor to integral values with `mode`."""
    match mode:
        case RoundingMode.FLOOR:
            return torch.floor(value)

        case RoundingMode.CEIL:
            return torch.ceil(value)

        case RoundingMode.TOWARD_ZERO:
            return torch.trunc(value)

        case RoundingMode.AWAY_FROM_ZERO:
            return torch.sign(value) * torch.ceil(value.abs())

        case RoundingMode.NEAREST_TIES_TO_EVEN:
            # torch.round resolves ties to even
            return torch.round(value)

        case RoundingMode.NEAREST_TIES_AWAY_FROM_ZERO:
            # `x + 0.5` may round up in float, so only exact ties are moved
            truncated = torch.trunc(value)
            is_tie = (value - truncated).abs() == 0.5
            return torch.where(is_tie, truncated + torch.sign(value), torch.round(value))

        case _:
            raise ValueError(f"Unsupported rounding mode: {mode}")

# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Core algorithms on raw scaled integers."""

from .arithmetic import (
    checked_abs,
    checked_add,
    checked_mul_int,
    checked_neg,
    checked_sub,
    compare,
    half_sum,
    integral,
    next_power_of_ten,
    rescale,
    round_towards_zero_by,
    rounding_div,
    rounding_div_int,
    rounding_mul,
    rounding_sqrt,
    saturate,
)
from .floating import bits_to_float, float_to_bits
from .text import format_decimal, parse_decimal

__all__ = [
    # arithmetic
    "checked_abs",
    "checked_add",
    "checked_mul_int",
    "checked_neg",
    "checked_sub",
    "compare",
    "half_sum",
    "integral",
    "next_power_of_ten",
    "rescale",
    "round_towards_zero_by",
    "rounding_div",
    "rounding_div_int",
    "rounding_mul",
    "rounding_sqrt",
    "saturate",
    # floating
    "bits_to_float",
    "float_to_bits",
    # text
    "format_decimal",
    "parse_decimal",
]

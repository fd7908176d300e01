# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Formats, rounding, errors and tensor wrappers."""

from .decimal_format import SUPPORTED_BITS, DecimalFormat, check_overflow, keep_width
from .decimal_wrap import DecimalDataWrap
from .dtype import get_bit_width, get_storage_integer_dtype
from .errors import (
    ArithmeticOverflow,
    ConvertError,
    DivisionByZero,
    DomainViolation,
    FixedPointError,
    ParseError,
    ParseErrorReason,
)
from .rounding import (
    RoundingMode,
    round_float_tensor,
    round_offset,
    round_offset_tensor,
    round_quotient,
)

__all__ = [
    # dtype
    "get_bit_width",
    "get_storage_integer_dtype",
    # errors
    "FixedPointError",
    "ArithmeticOverflow",
    "DivisionByZero",
    "DomainViolation",
    "ParseError",
    "ParseErrorReason",
    "ConvertError",
    # data format
    "SUPPORTED_BITS",
    "DecimalFormat",
    # data wrap
    "DecimalDataWrap",
    # rounding
    "RoundingMode",
    "round_offset",
    "round_offset_tensor",
    "round_float_tensor",
    "round_quotient",
    # utils
    "check_overflow",
    "keep_width",
]

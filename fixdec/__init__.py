# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Fixdec package for fixed-point decimal numbers with explicit rounding."""

import logging

from .codec import BinaryCodec, TextCodec
from .config import BinaryCodecConfig, ByteOrder
from .number import FixedPoint, fixed_point
from .type import (
    ArithmeticOverflow,
    ConvertError,
    DecimalDataWrap,
    DecimalFormat,
    DivisionByZero,
    DomainViolation,
    FixedPointError,
    ParseError,
    ParseErrorReason,
    RoundingMode,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # codec config
    "ByteOrder",
    "BinaryCodecConfig",
    # codec
    "BinaryCodec",
    "TextCodec",
    # errors
    "FixedPointError",
    "ArithmeticOverflow",
    "DivisionByZero",
    "DomainViolation",
    "ParseError",
    "ParseErrorReason",
    "ConvertError",
    # rounding
    "RoundingMode",
    # data format
    "DecimalFormat",
    # value type
    "FixedPoint",
    "fixed_point",
    # data wrap
    "DecimalDataWrap",
]

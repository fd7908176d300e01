# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Decimal fixed-point format definition and width helpers."""

from dataclasses import dataclass

import torch

from .dtype import get_storage_integer_dtype
from .errors import ArithmeticOverflow

SUPPORTED_BITS = (16, 32, 64, 128)


@dataclass(frozen=True)
class DecimalFormat:
    """Decimal fixed-point format definition.

    The stored integer is `real_value * 10^precision` in a two's-complement
    integer of `bits` bits.

    Attributes:
        bits: Backing integer width.
        precision: Number of decimal digits after the point.

    """

    bits: int
    precision: int

    def __post_init__(self) -> None:
        if self.bits not in SUPPORTED_BITS:
            raise ValueError(f"Unsupported bit width: {self.bits}, expected one of {SUPPORTED_BITS}")
        if self.precision < 0:
            raise ValueError(f"precision ({self.precision}) < 0")
        if self.coef > self.max_value:
            raise ValueError(f"precision {self.precision} does not fit {self.bits} bits")

    @property
    def max_value(self) -> int:
        """Get maximum raw value."""
        return (1 << (self.bits - 1)) - 1

    @property
    def min_value(self) -> int:
        """Get minimum raw value."""
        return -(1 << (self.bits - 1))

    @property
    def coef(self) -> int:
        """Get decimal scale, `10^precision`."""
        return 10**self.precision

    @property
    def promoted_bits(self) -> int:
        """Get width of the intermediate used by multiplication and division."""
        return self.bits * 2

    @property
    def byte_width(self) -> int:
        """Get number of bytes of the binary layout."""
        return self.bits // 8

    # --- Dtype helpers ---

    @property
    def dtype(self) -> torch.dtype:
        """Get storage dtype for batch payloads."""
        return get_storage_integer_dtype(self.bits)


def check_overflow(value: int, width: int) -> bool:
    """Check whether `value` overflows a signed `width`-bit range."""
    max_value = (1 << (width - 1)) - 1
    min_value = -(1 << (width - 1))
    return value > max_value or value < min_value


def keep_width(value: int, fmt: DecimalFormat) -> int:
    """Narrow a promoted intermediate back to `fmt.bits`.

    Raises:
        ArithmeticOverflow: If `value` does not fit.

    """
    if check_overflow(value, fmt.bits):
        raise ArithmeticOverflow(f"{value} does not fit {fmt.bits} bits")
    return value

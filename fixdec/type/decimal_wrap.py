# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Tensor wrapper for batches of decimal fixed-point values."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

import torch
from torch import Tensor

from .decimal_format import DecimalFormat
from .dtype import get_bit_width
from .errors import ArithmeticOverflow, ConvertError
from .rounding import RoundingMode, round_float_tensor, round_offset_tensor

if TYPE_CHECKING:
    from fixdec.number import FixedPoint


@dataclass
class DecimalDataWrap:
    """Wrapper for scaled-integer decimal values.

    Attributes:
        payload: Integer tensor holding `value * 10^precision`.
        fmt: Decimal format of the payload.

    """

    payload: Tensor
    fmt: DecimalFormat

    def __post_init__(self) -> None:
        if get_bit_width(self.payload.dtype) != self.fmt.bits:
            raise ValueError(f"payload dtype {self.payload.dtype} does not match {self.fmt.bits} bits")

    # --- Tensor-like methods ---

    @property
    def shape(self) -> torch.Size:
        """Forward to `self.payload`."""
        return self.payload.shape

    @property
    def dtype(self) -> torch.dtype:
        """Forward to `self.payload`."""
        return self.payload.dtype

    @property
    def device(self) -> torch.device:
        """Forward to `self.payload`."""
        return self.payload.device

    def clone(self) -> Self:
        """Forward to `self.payload` and wrap the result."""
        payload = self.payload.clone()
        return self.__class__(payload, self.fmt)

    # --- Format conversion ---

    @classmethod
    def from_value(
        cls,
        value: Tensor,
        fmt: DecimalFormat,
        *,
        mode: RoundingMode = RoundingMode.NEAREST_TIES_TO_EVEN,
    ) -> Self:
        """Construct scaled integers from floating-point values.

        This goes through binary floating point and is lossy; use it for
        interop only.

        Args:
            value: Source floating-point tensor.
            fmt: Target decimal format.
            mode: Rounding mode for digits beyond `fmt.precision`.

        Returns:
            Wrapped scaled-integer payload.

        Raises:
            ConvertError: If any element is NaN or infinite.
            ArithmeticOverflow: If any element is out of range.

        """
        value = value.to(torch.float64)
        if not bool(torch.isfinite(value).all()):
            raise ConvertError("not finite")

        scaled = round_float_tensor(value * fmt.coef, mode)

        # powers of two are exact in float64
        limit = float(1 << (fmt.bits - 1))
        if bool(((scaled >= limit) | (scaled < -limit)).any()):
            raise ArithmeticOverflow(f"value out of range for {fmt.bits} bits")

        return cls(scaled.to(fmt.dtype), fmt)

    def to_value(self) -> Tensor:
        """Decode scaled integers to float64 values."""
        return self.payload.to(torch.float64) / self.fmt.coef

    @classmethod
    def from_fixed_points(cls, values: "Sequence[FixedPoint]") -> Self:
        """Pack scalar values of one class into a 1-D payload."""
        if not values:
            raise ValueError("values must not be empty")

        kind = type(values[0])
        if any(type(v) is not kind for v in values):
            raise TypeError("values must share one fixed-point class")

        payload = torch.tensor([v.to_bits() for v in values], dtype=kind.fmt.dtype)
        return cls(payload, kind.fmt)

    def to_fixed_points(self, kind: "type[FixedPoint]") -> "list[FixedPoint]":
        """Unpack the flattened payload into scalar values of `kind`."""
        if kind.fmt != self.fmt:
            raise TypeError(f"{kind.__name__} does not match {self.fmt}")
        return [kind.from_bits(raw) for raw in self.payload.flatten().tolist()]

    # --- Precision conversion ---

    def rescale(self, new_precision: int, mode: RoundingMode) -> Self:
        """Convert to `new_precision` digits, rounding dropped digits with `mode`."""
        new_fmt = DecimalFormat(self.fmt.bits, new_precision)

        if new_precision < self.fmt.precision:
            divisor = 10 ** (self.fmt.precision - new_precision)

            quotient = torch.div(self.payload, divisor, rounding_mode="floor")
            remainder = torch.remainder(self.payload, divisor)
            payload = quotient + round_offset_tensor(quotient, remainder, divisor, mode)

            return self.__class__(payload, new_fmt)

        if new_precision > self.fmt.precision:
            factor = 10 ** (new_precision - self.fmt.precision)

            upper = self.fmt.max_value // factor
            lower = -(-self.fmt.min_value // factor)
            if bool(((self.payload > upper) | (self.payload < lower)).any()):
                raise ArithmeticOverflow(f"rescale to {new_precision} digits overflows {self.fmt.bits} bits")

            return self.__class__(self.payload * factor, new_fmt)

        return self.clone()

    # --- Checked element-wise arithmetic ---

    def checked_add(self, other: Self) -> Self:
        """Element-wise addition; raises if any element overflows."""
        self._check_same_format(other)

        result = self.payload + other.payload
        # two's complement: overflow iff both operands differ in sign from the result
        overflow = ((self.payload ^ result) & (other.payload ^ result)) < 0
        if bool(overflow.any()):
            raise ArithmeticOverflow()

        return self.__class__(result, self.fmt)

    def checked_sub(self, other: Self) -> Self:
        """Element-wise subtraction; raises if any element overflows."""
        self._check_same_format(other)

        result = self.payload - other.payload
        overflow = ((self.payload ^ other.payload) & (self.payload ^ result)) < 0
        if bool(overflow.any()):
            raise ArithmeticOverflow()

        return self.__class__(result, self.fmt)

    def _check_same_format(self, other: Self) -> None:
        if self.fmt != other.fmt:
            raise TypeError(f"format mismatch: {self.fmt} vs {other.fmt}, rescale first")

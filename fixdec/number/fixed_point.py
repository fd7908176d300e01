# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Fixed-point decimal value type.

One concrete class is generated per `(bits, precision)` pair, so values of
different precision never meet in an operator without an explicit `rescale`:

    >>> Amount = fixed_point(64, 2)
    >>> Amount("0.1") + Amount("0.2")
    FixedI64P2('0.3')
    >>> Amount("1").rdiv(Amount("3"), RoundingMode.CEIL)
    FixedI64P2('0.34')

"""

import logging
from functools import cache
from typing import Any, ClassVar, Self

from fixdec import core
from fixdec.type import (
    ArithmeticOverflow,
    ConvertError,
    DecimalFormat,
    RoundingMode,
    keep_width,
)

logger = logging.getLogger(__name__)

# bounds of `from_decimal` exponents above zero
_MAX_DECIMAL_EXPONENT = 10


class FixedPoint:
    """Decimal number stored as `inner = real_value * 10^precision`.

    Do not instantiate this base class; use `fixed_point(bits, precision)` or
    `FixedPoint[bits, precision]` to obtain a concrete class.

    Attributes:
        fmt: Backing width and precision of the concrete class.

    """

    __slots__ = ("_inner",)

    _inner: int

    fmt: ClassVar[DecimalFormat]
    PRECISION: ClassVar[int]

    ZERO: ClassVar["FixedPoint"]
    ONE: ClassVar["FixedPoint"]
    MIN: ClassVar["FixedPoint"]
    MAX: ClassVar["FixedPoint"]
    EPSILON: ClassVar["FixedPoint"]

    def __new__(cls, value: str | int = 0) -> Self:
        if isinstance(value, str):
            return cls.from_decimal_text(value)
        if isinstance(value, int):
            return cls.from_integer(value)
        raise TypeError(f"expected str or int, got {type(value).__name__}; use from_f64 for floats")

    def __class_getitem__(cls, params: tuple[int, int]) -> "type[FixedPoint]":
        bits, precision = params
        return fixed_point(bits, precision)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # --- Construction ---

    @classmethod
    def _concrete_format(cls) -> DecimalFormat:
        fmt = getattr(cls, "fmt", None)
        if fmt is None:
            raise TypeError("use fixed_point(bits, precision) to get a concrete class")
        return fmt

    @classmethod
    def from_bits(cls, raw: int) -> Self:
        """Wrap a pre-scaled integer; only the width is checked.

        Raises:
            ArithmeticOverflow: If `raw` does not fit the backing width.

        """
        fmt = cls._concrete_format()
        if not isinstance(raw, int):
            raise TypeError(f"raw value must be int, got {type(raw).__name__}")

        value = object.__new__(cls)
        object.__setattr__(value, "_inner", keep_width(raw, fmt))
        return value

    @classmethod
    def from_integer(cls, n: int) -> Self:
        """Build `n` exactly.

        Raises:
            ArithmeticOverflow: If `n * 10^precision` does not fit.

        """
        return cls.from_bits(n * cls._concrete_format().coef)

    @classmethod
    def from_decimal_text(cls, text: str) -> Self:
        """Parse canonical decimal text; never rounds.

        Raises:
            ParseError: If `text` is empty, malformed, or too precise.
            ArithmeticOverflow: If the value does not fit.

        """
        return cls.from_bits(core.parse_decimal(text, cls._concrete_format()))

    @classmethod
    def from_f64(cls, value: float, mode: RoundingMode) -> Self:
        """Lossy conversion from a float, for display and interop only.

        The float is read at its shortest decimal form, so `mode` rounds that
        decimal reading rather than the exact binary value.

        Raises:
            ConvertError: If `value` is NaN or infinite.
            ArithmeticOverflow: If the value does not fit.

        """
        return cls.from_bits(core.float_to_bits(value, cls._concrete_format(), mode))

    @classmethod
    def from_decimal(cls, mantissa: int, exponent: int) -> Self:
        """Build `mantissa * 10^exponent` exactly.

        Raises:
            ConvertError: If `exponent` is below `-precision` or above 10, or
                the mantissa is too big.

        """
        precision = cls._concrete_format().precision
        if exponent < -precision or exponent > _MAX_DECIMAL_EXPONENT:
            raise ConvertError("unsupported exponent")

        try:
            return cls.from_bits(mantissa * 10 ** (exponent + precision))
        except ArithmeticOverflow as e:
            raise ConvertError("too big mantissa") from e

    # --- Raw access ---

    def to_bits(self) -> int:
        """Raw scaled integer."""
        return self._inner

    as_bits = to_bits
    cents = to_bits

    # --- Conversion ---

    def to_decimal_text(self) -> str:
        """Canonical decimal text."""
        return core.format_decimal(self._inner, self.fmt)

    def to_f64(self) -> float:
        """Nearest float; lossy."""
        return core.bits_to_float(self._inner, self.fmt)

    def rescale(self, precision: int, mode: RoundingMode) -> "FixedPoint":
        """Convert to the class of the same width with `precision` digits.

        Raises:
            ArithmeticOverflow: If scaling up does not fit.

        """
        target = fixed_point(self.fmt.bits, precision)
        return target.from_bits(core.rescale(self._inner, self.fmt, precision, mode))

    # --- Checked arithmetic ---

    def _operand(self, other: object) -> int:
        if type(other) is not type(self):
            raise TypeError(
                f"expected {type(self).__name__}, got {type(other).__name__}; rescale explicitly to combine precisions"
            )
        return other._inner  # type: ignore[attr-defined]

    def cadd(self, other: Self) -> Self:
        """Checked addition."""
        return self.from_bits(core.checked_add(self._inner, self._operand(other), self.fmt))

    def csub(self, other: Self) -> Self:
        """Checked subtraction."""
        return self.from_bits(core.checked_sub(self._inner, self._operand(other), self.fmt))

    def cneg(self) -> Self:
        """Checked negation; `MIN` cannot be negated."""
        return self.from_bits(core.checked_neg(self._inner, self.fmt))

    def abs(self) -> Self:
        """Checked absolute value."""
        return self.from_bits(core.checked_abs(self._inner, self.fmt))

    def cmul(self, n: int) -> Self:
        """Exact multiplication by an integer."""
        return self.from_bits(core.checked_mul_int(self._inner, n, self.fmt))

    def rmul(self, other: Self, mode: RoundingMode) -> Self:
        """Multiplication rounded with `mode`."""
        return self.from_bits(core.rounding_mul(self._inner, self._operand(other), self.fmt, mode))

    def rdiv(self, other: Self, mode: RoundingMode) -> Self:
        """Division rounded with `mode`.

        Raises:
            DivisionByZero: If `other` is zero.
            ArithmeticOverflow: If the quotient does not fit.

        """
        return self.from_bits(core.rounding_div(self._inner, self._operand(other), self.fmt, mode))

    def rdiv_int(self, n: int, mode: RoundingMode) -> Self:
        """Division by an integer rounded with `mode`."""
        return self.from_bits(core.rounding_div_int(self._inner, n, self.fmt, mode))

    def recip(self, mode: RoundingMode) -> Self:
        """Reciprocal, `ONE / self`."""
        return self.ONE.rdiv(self, mode)

    def rsqrt(self, mode: RoundingMode) -> Self:
        """Square root rounded with `mode`.

        Raises:
            DomainViolation: If `self` is negative.

        """
        return self.from_bits(core.rounding_sqrt(self._inner, self.fmt, mode))

    @classmethod
    def half_sum(cls, a: Self, b: Self, mode: RoundingMode) -> Self:
        """`(a + b) / 2` without intermediate overflow."""
        if type(a) is not cls:
            raise TypeError(f"expected {cls.__name__}, got {type(a).__name__}")
        return cls.from_bits(core.half_sum(a._inner, a._operand(b), mode))

    # --- Saturating arithmetic ---

    def saturating_add(self, other: Self) -> Self:
        return self.from_bits(core.saturate(self._inner + self._operand(other), self.fmt))

    def saturating_sub(self, other: Self) -> Self:
        return self.from_bits(core.saturate(self._inner - self._operand(other), self.fmt))

    def saturating_mul(self, n: int) -> Self:
        return self.from_bits(core.saturate(self._inner * n, self.fmt))

    def saturating_rmul(self, other: Self, mode: RoundingMode) -> Self:
        try:
            return self.rmul(other, mode)
        except ArithmeticOverflow:
            negative = (self._inner < 0) != (other._inner < 0)
            return self.MIN if negative else self.MAX

    # --- Integral parts ---

    def integral(self, mode: RoundingMode) -> int:
        """Rounded integral part as a plain integer."""
        return core.integral(self._inner, self.fmt, mode)

    def rounding_to_int(self) -> int:
        """Integral part rounded to nearest, ties away from zero."""
        return self.integral(RoundingMode.NEAREST_TIES_AWAY_FROM_ZERO)

    def round_towards_zero_by(self, step: Self) -> Self:
        """Truncate to a multiple of `step`; a zero step leaves `self` unchanged."""
        return self.from_bits(core.round_towards_zero_by(self._inner, self._operand(step)))

    def next_power_of_ten(self) -> Self:
        """Smallest power of ten (in units of `EPSILON`) not below `|self|`, signed."""
        return self.from_bits(core.next_power_of_ten(self._inner, self.fmt))

    # --- Comparison ---

    def cmp(self, other: Self) -> int:
        """Three-way comparison, -1/0/1."""
        return core.compare(self._inner, self._operand(other))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedPoint):
            return self._inner == self._operand(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.fmt, self._inner))

    def __lt__(self, other: Self) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner < other._inner

    def __le__(self, other: Self) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner <= other._inner

    def __gt__(self, other: Self) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner > other._inner

    def __ge__(self, other: Self) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner >= other._inner

    # --- Operators ---

    def __add__(self, other: Self) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.cadd(other)

    def __sub__(self, other: Self) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.csub(other)

    def __mul__(self, other: int) -> Self:
        if isinstance(other, FixedPoint):
            raise TypeError("multiplying two fixed-point values needs a rounding mode, use rmul()")
        if isinstance(other, int):
            return self.cmul(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Self:
        if isinstance(other, FixedPoint | int):
            raise TypeError("division needs a rounding mode, use rdiv() or rdiv_int()")
        return NotImplemented

    def __neg__(self) -> Self:
        return self.cneg()

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        return self.abs()

    def __bool__(self) -> bool:
        return self._inner != 0

    def __float__(self) -> float:
        return self.to_f64()

    # --- Representation ---

    def __str__(self) -> str:
        return self.to_decimal_text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.to_decimal_text()}')"

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return _restore, (self.fmt.bits, self.fmt.precision, self._inner)


@cache
def fixed_point(bits: int, precision: int) -> type[FixedPoint]:
    """Return the concrete fixed-point class for `(bits, precision)`.

    Repeated calls return the same class object.

    Raises:
        ValueError: If the format is unsupported.

    """
    fmt = DecimalFormat(bits, precision)
    name = f"FixedI{bits}P{precision}"

    kind = type(
        name,
        (FixedPoint,),
        {"__slots__": (), "__module__": __name__, "__qualname__": name, "fmt": fmt, "PRECISION": precision},
    )

    kind.ZERO = kind.from_bits(0)
    kind.ONE = kind.from_bits(fmt.coef)
    kind.MIN = kind.from_bits(fmt.min_value)
    kind.MAX = kind.from_bits(fmt.max_value)
    kind.EPSILON = kind.from_bits(1)

    logger.debug("generated fixed-point class %s", name)
    return kind


def _restore(bits: int, precision: int, inner: int) -> FixedPoint:
    return fixed_point(bits, precision).from_bits(inner)

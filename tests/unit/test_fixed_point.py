"""
Tests for the FixedPoint value type

Checks:
1. Class generation and constants
2. Constructors and conversions
3. Checked, rounding and saturating arithmetic
4. Precision segregation in operators
5. Immutability, hashing and pickling
"""

import copy
import pickle

import pytest

from fixdec import (
    ArithmeticOverflow,
    ConvertError,
    DivisionByZero,
    DomainViolation,
    FixedPoint,
    ParseError,
    RoundingMode,
    fixed_point,
)

Amount = FixedPoint[64, 9]
Cents = FixedPoint[64, 2]
Small = FixedPoint[16, 2]
Whole = FixedPoint[64, 0]

FLOOR = RoundingMode.FLOOR
CEIL = RoundingMode.CEIL
EVEN = RoundingMode.NEAREST_TIES_TO_EVEN
AWAY = RoundingMode.NEAREST_TIES_AWAY_FROM_ZERO
TZ = RoundingMode.TOWARD_ZERO
AFZ = RoundingMode.AWAY_FROM_ZERO


class TestClassGeneration:
    """Tests for fixed_point class generation"""

    def test_cached(self) -> None:
        assert fixed_point(64, 9) is Amount
        assert FixedPoint[64, 2] is Cents

    def test_distinct_per_precision(self) -> None:
        assert Cents is not Amount
        assert Cents.__name__ == "FixedI64P2"
        assert issubclass(Cents, FixedPoint)

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError):
            fixed_point(16, 5)
        with pytest.raises(ValueError):
            fixed_point(8, 0)

    def test_constants(self) -> None:
        assert Cents.PRECISION == 2
        assert Cents.ZERO.to_bits() == 0
        assert Cents.ONE.to_bits() == 100
        assert Cents.EPSILON.to_bits() == 1
        assert Small.MAX.to_bits() == 32767
        assert Small.MIN.to_bits() == -32768
        assert str(Small.MAX) == "327.67"

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            FixedPoint.from_bits(1)
        with pytest.raises(TypeError, match="concrete class"):
            FixedPoint.from_integer(1)
        with pytest.raises(TypeError, match="concrete class"):
            FixedPoint.from_decimal_text("1")
        with pytest.raises(TypeError, match="concrete class"):
            FixedPoint.from_f64(1.0, FLOOR)
        with pytest.raises(TypeError, match="concrete class"):
            FixedPoint.from_decimal(1, 0)
        with pytest.raises(TypeError, match="concrete class"):
            FixedPoint("1")


class TestConstruction:
    """Tests for constructors"""

    def test_from_text_and_int(self) -> None:
        assert Cents("4.25").to_bits() == 425
        assert Cents(4).to_bits() == 400
        assert Cents().to_bits() == 0

    def test_rejects_float(self) -> None:
        with pytest.raises(TypeError):
            Cents(1.5)  # type: ignore[arg-type]

    def test_parse_error(self) -> None:
        with pytest.raises(ParseError):
            Cents("1.234")

    def test_from_integer_boundary(self) -> None:
        top = Cents.MAX.to_bits() // 100
        assert Cents.from_integer(top).to_bits() == top * 100
        assert Cents.from_integer(top).to_bits() == Cents.MAX.integral(FLOOR) * 100
        with pytest.raises(ArithmeticOverflow):
            Cents.from_integer(top + 1)

    def test_from_bits(self) -> None:
        assert Cents.from_bits(-7) == Cents("-0.07")
        with pytest.raises(ArithmeticOverflow):
            Small.from_bits(32768)
        with pytest.raises(TypeError):
            Cents.from_bits("7")  # type: ignore[arg-type]

    def test_from_decimal(self) -> None:
        assert Cents.from_decimal(123, -2) == Cents("1.23")
        assert Cents.from_decimal(5, 3) == Cents(5000)
        assert Cents.from_decimal(-1, 0) == Cents(-1)

    def test_from_decimal_errors(self) -> None:
        with pytest.raises(ConvertError, match="unsupported exponent"):
            Cents.from_decimal(1, -3)
        with pytest.raises(ConvertError, match="unsupported exponent"):
            Cents.from_decimal(1, 11)
        with pytest.raises(ConvertError, match="too big mantissa"):
            Small.from_decimal(400, 0)

    def test_from_f64(self) -> None:
        assert Amount.from_f64(0.1, FLOOR) == Amount("0.1")
        assert Cents.from_f64(1.005, EVEN) == Cents("1")
        assert Cents.from_f64(1.005, AWAY) == Cents("1.01")

    def test_accessor_aliases(self) -> None:
        value = Cents("12.34")
        assert value.to_bits() == value.as_bits() == value.cents() == 1234


class TestConversion:
    """Tests for text, float and rescale conversion"""

    def test_text(self) -> None:
        assert Cents("1.50").to_decimal_text() == "1.5"
        assert str(Cents(-3)) == "-3.0"
        assert str(Whole(3)) == "3"
        assert repr(Cents("0.3")) == "FixedI64P2('0.3')"

    def test_float(self) -> None:
        assert Cents("1.5").to_f64() == 1.5
        assert float(Cents("-0.25")) == -0.25

    def test_rescale_down(self) -> None:
        value = Amount("1.005")
        assert value.rescale(2, EVEN) == Cents("1")
        assert value.rescale(2, AWAY) == Cents("1.01")
        assert value.rescale(2, FLOOR) == Cents("1")
        assert type(value.rescale(2, EVEN)) is Cents

    def test_rescale_up(self) -> None:
        assert Cents("1.23").rescale(9, FLOOR) == Amount("1.23")

    def test_rescale_up_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            Small.MAX.rescale(4, FLOOR)


class TestArithmetic:
    """Tests for checked and rounding arithmetic"""

    def test_add_sub(self) -> None:
        assert Amount("0.1") + Amount("0.2") == Amount("0.3")
        assert Cents("1") - Cents("2.5") == Cents("-1.5")
        assert Cents("0.1").cadd(Cents("0.2")) == Cents("0.3")
        assert Cents("0.1").csub(Cents("0.2")) == Cents("-0.1")

    def test_add_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            Small.MAX + Small.EPSILON
        with pytest.raises(ArithmeticOverflow):
            Small.MIN - Small.EPSILON

    def test_neg_abs(self) -> None:
        assert -Cents("1.5") == Cents("-1.5")
        assert Cents("-1.5").cneg() == Cents("1.5")
        assert abs(Cents("-1.5")) == Cents("1.5")
        assert +Cents("2") == Cents("2")
        with pytest.raises(ArithmeticOverflow):
            -Small.MIN
        with pytest.raises(ArithmeticOverflow):
            Small.MIN.abs()

    def test_int_multiplication(self) -> None:
        price = Amount("4.25")
        assert price * 4 == Amount(17)
        assert 4 * price == Amount(17)
        assert price.cmul(-2) == Amount("-8.5")
        with pytest.raises(ArithmeticOverflow):
            Small.MAX * 2

    def test_rmul(self) -> None:
        eps = Amount.EPSILON
        assert eps.rmul(eps, FLOOR) == Amount.ZERO
        assert eps.rmul(eps, CEIL) == eps
        assert Cents("1.5").rmul(Cents("1.5"), FLOOR) == Cents("2.25")
        assert Cents("0.15").rmul(Cents("0.15"), EVEN) == Cents("0.02")

    def test_rdiv(self) -> None:
        one, three = Cents("1"), Cents("3")
        assert one.rdiv(three, TZ) == Cents("0.33")
        assert one.rdiv(three, AFZ) == Cents("0.34")
        assert one.rdiv(three, EVEN) == Cents("0.33")
        assert (-one).rdiv(three, FLOOR) == Cents("-0.34")

    def test_rdiv_ties_to_even(self) -> None:
        assert Whole(5).rdiv(Whole(2), EVEN) == Whole(2)
        assert Whole(7).rdiv(Whole(2), EVEN) == Whole(4)
        assert Whole(5).rdiv(Whole(2), AWAY) == Whole(3)

    def test_rdiv_by_zero(self) -> None:
        for mode in RoundingMode:
            with pytest.raises(DivisionByZero):
                Cents("1").rdiv(Cents.ZERO, mode)
        with pytest.raises(ZeroDivisionError):
            Cents("1").rdiv_int(0, FLOOR)

    def test_rdiv_int(self) -> None:
        assert Cents("1").rdiv_int(3, CEIL) == Cents("0.34")
        assert Cents("10").rdiv_int(4, FLOOR) == Cents("2.5")

    def test_recip(self) -> None:
        assert Cents("4").recip(FLOOR) == Cents("0.25")
        assert Cents("3").recip(CEIL) == Cents("0.34")
        with pytest.raises(DivisionByZero):
            Cents.ZERO.recip(FLOOR)

    def test_rsqrt(self) -> None:
        assert Cents("2.25").rsqrt(FLOOR) == Cents("1.5")
        assert Cents("2").rsqrt(FLOOR) == Cents("1.41")
        assert Cents("2").rsqrt(CEIL) == Cents("1.42")
        with pytest.raises(DomainViolation):
            Cents("-1").rsqrt(FLOOR)

    def test_half_sum(self) -> None:
        assert Cents.half_sum(Cents("1"), Cents("3"), FLOOR) == Cents("2")
        assert Cents.half_sum(Cents("0.01"), Cents("0.02"), CEIL) == Cents("0.02")
        assert Small.half_sum(Small.MAX, Small.MAX, FLOOR) == Small.MAX
        with pytest.raises(TypeError):
            Cents.half_sum(Cents("1"), Amount("1"), FLOOR)


class TestSaturating:
    """Tests for saturating arithmetic"""

    def test_add_sub(self) -> None:
        assert Small.MAX.saturating_add(Small.ONE) == Small.MAX
        assert Small.MIN.saturating_sub(Small.ONE) == Small.MIN
        assert Small("1").saturating_add(Small("2")) == Small("3")

    def test_mul(self) -> None:
        assert Small("200").saturating_mul(2) == Small.MAX
        assert Small("200").saturating_mul(-2) == Small.MIN
        assert Small("2").saturating_mul(3) == Small("6")

    def test_rmul(self) -> None:
        big = Small("200")
        assert big.saturating_rmul(big, FLOOR) == Small.MAX
        assert big.saturating_rmul(-big, FLOOR) == Small.MIN
        assert Small("1.5").saturating_rmul(Small("2"), FLOOR) == Small("3")


class TestIntegralParts:
    """Tests for integral, rounding_to_int and friends"""

    def test_integral(self) -> None:
        value = Amount("8273.519")
        assert value.integral(FLOOR) == 8273
        assert value.integral(CEIL) == 8274
        assert (-value).integral(FLOOR) == -8274
        assert (-value).integral(TZ) == -8273

    def test_rounding_to_int(self) -> None:
        assert Cents("2.5").rounding_to_int() == 3
        assert Cents("-2.5").rounding_to_int() == -3
        assert Cents("2.49").rounding_to_int() == 2

    def test_round_towards_zero_by(self) -> None:
        step = Cents("0.5")
        assert Cents("1.74").round_towards_zero_by(step) == Cents("1.5")
        assert Cents("-1.74").round_towards_zero_by(step) == Cents("-1.5")
        assert Cents("1.74").round_towards_zero_by(Cents.ZERO) == Cents("1.74")

    def test_next_power_of_ten(self) -> None:
        assert Cents("0").next_power_of_ten() == Cents.EPSILON
        assert Cents("0.02").next_power_of_ten() == Cents("0.1")
        assert Cents("3").next_power_of_ten() == Cents("10")
        assert Cents("-3").next_power_of_ten() == Cents("-10")
        with pytest.raises(ArithmeticOverflow):
            Small("200").next_power_of_ten()


class TestPrecisionSegregation:
    """Tests that values of different classes never mix implicitly"""

    def test_add(self) -> None:
        with pytest.raises(TypeError):
            Cents("1") + Amount("1")  # type: ignore[operator]

    def test_named_ops(self) -> None:
        with pytest.raises(TypeError, match="rescale"):
            Cents("1").rmul(Amount("1"), FLOOR)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Cents("1").cmp(Amount("1"))  # type: ignore[arg-type]

    def test_same_precision_other_width(self) -> None:
        with pytest.raises(TypeError):
            Cents("1").cadd(Small("1"))  # type: ignore[arg-type]

    def test_eq(self) -> None:
        with pytest.raises(TypeError):
            Cents("1") == Amount("1")  # noqa: B015
        assert Cents("1") != 1
        assert Cents("1") != "1"

    def test_ordering(self) -> None:
        with pytest.raises(TypeError):
            Cents("1") < Amount("1")  # type: ignore[operator]  # noqa: B015

    def test_fixed_by_fixed_operators(self) -> None:
        with pytest.raises(TypeError, match="rmul"):
            Cents("1") * Cents("2")
        with pytest.raises(TypeError, match="rdiv"):
            Cents("1") / Cents("2")
        with pytest.raises(TypeError):
            Cents("1") / 2


class TestValueSemantics:
    """Tests for comparison, immutability and serialization"""

    def test_ordering(self) -> None:
        values = [Cents("1.5"), Cents("-2"), Cents("0.01"), Cents("0")]
        assert sorted(values) == [Cents("-2"), Cents("0"), Cents("0.01"), Cents("1.5")]
        assert Cents("1") <= Cents("1") < Cents("2")
        assert Cents("2") >= Cents("2") > Cents("1")
        assert Cents("1").cmp(Cents("2")) == -1
        assert Cents("2").cmp(Cents("2")) == 0

    def test_bool(self) -> None:
        assert not Cents.ZERO
        assert Cents.EPSILON

    def test_hash(self) -> None:
        assert hash(Cents("1.5")) == hash(Cents("1.50"))
        assert len({Cents("1"), Cents("1.0"), Cents("2")}) == 2

    def test_immutable(self) -> None:
        value = Cents("1")
        with pytest.raises(AttributeError):
            value._inner = 5  # type: ignore[misc]
        with pytest.raises(AttributeError):
            value.other = 5  # type: ignore[attr-defined]

    def test_copy(self) -> None:
        value = Cents("1.5")
        assert copy.copy(value) is value
        assert copy.deepcopy(value) is value

    def test_pickle(self) -> None:
        value = Amount("-123.456789")
        restored = pickle.loads(pickle.dumps(value))
        assert type(restored) is Amount
        assert restored == value

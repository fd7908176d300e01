"""
Tests for text and binary codecs
"""

import sys

import pytest
import torch

from fixdec import (
    ArithmeticOverflow,
    BinaryCodec,
    BinaryCodecConfig,
    ByteOrder,
    ConvertError,
    DecimalDataWrap,
    FixedPoint,
    ParseError,
    TextCodec,
)

Cents = FixedPoint[64, 2]
Small = FixedPoint[16, 2]
Wide = FixedPoint[128, 18]

BIG = BinaryCodecConfig(byteorder=ByteOrder.BIG)


class TestTextCodec:
    """Tests for TextCodec"""

    def test_roundtrip(self) -> None:
        codec = TextCodec(Cents)
        for text in ("0.0", "1.5", "-0.01", "92233720368547758.07"):
            assert codec.encode(codec.decode(text)) == text

    def test_canonical_output(self) -> None:
        codec = TextCodec(Cents)
        assert codec.encode(Cents("1.50")) == "1.5"
        assert codec.encode(Cents(2)) == "2.0"

    def test_wrong_class(self) -> None:
        with pytest.raises(TypeError):
            TextCodec(Cents).encode(Small("1"))

    def test_decode_errors(self) -> None:
        with pytest.raises(ParseError):
            TextCodec(Small).decode("1.001")
        with pytest.raises(ArithmeticOverflow):
            TextCodec(Small).decode("400")


class TestBinaryCodec:
    """Tests for scalar BinaryCodec"""

    def test_default_is_little_endian(self) -> None:
        codec = BinaryCodec(Small)
        assert codec.config.byteorder is ByteOrder.LITTLE
        assert codec.byte_width == 2
        assert codec.encode(Small("1.5")) == b"\x96\x00"
        assert codec.encode(Small("-0.01")) == b"\xff\xff"

    def test_big_endian(self) -> None:
        codec = BinaryCodec(Small, BIG)
        assert codec.encode(Small("1.5")) == b"\x00\x96"
        assert codec.decode(b"\x00\x96") == Small("1.5")

    def test_native(self) -> None:
        codec = BinaryCodec(Small, BinaryCodecConfig(byteorder=ByteOrder.NATIVE))
        assert codec.encode(Small("1.5")) == (150).to_bytes(2, sys.byteorder, signed=True)

    def test_64_bit(self) -> None:
        codec = BinaryCodec(Cents, BIG)
        assert codec.encode(Cents("2.5")).hex() == "00000000000000fa"
        assert codec.decode(codec.encode(Cents.MIN)) == Cents.MIN

    def test_128_bit(self) -> None:
        codec = BinaryCodec(Wide)
        assert codec.byte_width == 16
        for value in (Wide.ONE, Wide.MAX, Wide.MIN, -Wide.EPSILON):
            assert codec.decode(codec.encode(value)) == value

    def test_wrong_length(self) -> None:
        codec = BinaryCodec(Small)
        with pytest.raises(ConvertError):
            codec.decode(b"\x00")
        with pytest.raises(ConvertError):
            codec.decode(b"\x00\x00\x00")

    def test_wrong_class(self) -> None:
        with pytest.raises(TypeError):
            BinaryCodec(Small).encode(Cents("1"))


class TestBinaryCodecBatch:
    """Tests for batch encode/decode"""

    def test_encode_matches_scalar(self) -> None:
        values = [Small("1.5"), Small("-0.01"), Small.MAX, Small.MIN]
        wrap = DecimalDataWrap.from_fixed_points(values)

        for config in (BinaryCodecConfig(), BIG):
            codec = BinaryCodec(Small, config)
            assert codec.encode_batch(wrap) == b"".join(codec.encode(v) for v in values)

    def test_roundtrip(self) -> None:
        values = [Cents("1.5"), Cents("-12345.67"), Cents.ZERO]
        wrap = DecimalDataWrap.from_fixed_points(values)

        for config in (BinaryCodecConfig(), BIG):
            codec = BinaryCodec(Cents, config)
            decoded = codec.decode_batch(codec.encode_batch(wrap))
            assert decoded.fmt == Cents.fmt
            assert decoded.to_fixed_points(Cents) == values

    def test_multi_dimensional_is_flattened(self) -> None:
        payload = torch.tensor([[1, 2], [3, 4]], dtype=torch.int16)
        wrap = DecimalDataWrap(payload, Small.fmt)
        codec = BinaryCodec(Small)
        assert codec.decode_batch(codec.encode_batch(wrap)).payload.tolist() == [1, 2, 3, 4]

    def test_empty(self) -> None:
        decoded = BinaryCodec(Small).decode_batch(b"")
        assert decoded.shape == (0,)
        assert decoded.dtype == torch.int16

    def test_bad_length(self) -> None:
        with pytest.raises(ConvertError):
            BinaryCodec(Small).decode_batch(b"\x00\x00\x00")

    def test_format_mismatch(self) -> None:
        wrap = DecimalDataWrap.from_fixed_points([Cents("1")])
        with pytest.raises(TypeError):
            BinaryCodec(FixedPoint[64, 3]).encode_batch(wrap)

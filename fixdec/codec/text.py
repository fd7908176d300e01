# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Lossless decimal text codec."""

from dataclasses import dataclass

from fixdec.number import FixedPoint


@dataclass(frozen=True)
class TextCodec:
    """Encode values as canonical decimal text.

    Attributes:
        kind: Concrete fixed-point class shared by both ends.

    """

    kind: type[FixedPoint]

    def encode(self, value: FixedPoint) -> str:
        if type(value) is not self.kind:
            raise TypeError(f"expected {self.kind.__name__}, got {type(value).__name__}")
        return value.to_decimal_text()

    def decode(self, text: str) -> FixedPoint:
        return self.kind.from_decimal_text(text)

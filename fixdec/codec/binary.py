# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Fixed-width two's-complement binary codec."""

import logging
import sys
from dataclasses import dataclass

import torch

from fixdec.config import BinaryCodecConfig
from fixdec.number import FixedPoint
from fixdec.type import ConvertError, DecimalDataWrap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinaryCodec:
    """Encode the raw scaled integer at the backing width.

    No precision tag is written: the precision, like the byte order, is a
    contract shared by producer and consumer.

    Attributes:
        kind: Concrete fixed-point class shared by both ends.
        config: Byte order of the layout.

    """

    kind: type[FixedPoint]
    config: BinaryCodecConfig = BinaryCodecConfig()

    @property
    def byte_width(self) -> int:
        """Number of bytes per value."""
        return self.kind.fmt.byte_width

    # --- Scalar values ---

    def encode(self, value: FixedPoint) -> bytes:
        """Encode one value into `byte_width` bytes."""
        if type(value) is not self.kind:
            raise TypeError(f"expected {self.kind.__name__}, got {type(value).__name__}")
        return value.to_bits().to_bytes(self.byte_width, self.config.byteorder.resolved, signed=True)

    def decode(self, data: bytes) -> FixedPoint:
        """Decode exactly `byte_width` bytes.

        Raises:
            ConvertError: If the payload length is wrong.

        """
        if len(data) != self.byte_width:
            raise ConvertError(f"expected {self.byte_width} bytes, got {len(data)}")
        raw = int.from_bytes(data, self.config.byteorder.resolved, signed=True)
        return self.kind.from_bits(raw)

    # --- Batches ---

    def encode_batch(self, wrap: DecimalDataWrap) -> bytes:
        """Encode every element of `wrap`, flattened, back to back."""
        if wrap.fmt != self.kind.fmt:
            raise TypeError(f"expected {self.kind.fmt}, got {wrap.fmt}")

        # --- 1. Reinterpret elements as byte rows in the target order ---

        # shape: [N] -> [N, W]
        raw = wrap.payload.flatten().contiguous().view(torch.uint8).reshape(-1, self.byte_width)
        if self.config.byteorder.resolved != sys.byteorder:
            raw = raw.flip(-1)

        # --- 2. Serialize ---

        logger.debug("encoding %d %s values", raw.size(0), self.kind.__name__)
        return bytes(raw.flatten().tolist())

    def decode_batch(self, data: bytes) -> DecimalDataWrap:
        """Decode a 1-D batch produced by `encode_batch`.

        Raises:
            ConvertError: If the payload length is not a multiple of `byte_width`.

        """
        fmt = self.kind.fmt

        if len(data) % self.byte_width:
            raise ConvertError(f"payload of {len(data)} bytes is not a multiple of {self.byte_width}")

        if not data:
            return DecimalDataWrap(torch.empty(0, dtype=fmt.dtype), fmt)

        # shape: [N * W] -> [N, W]
        raw = torch.frombuffer(bytearray(data), dtype=torch.uint8).clone().reshape(-1, self.byte_width)
        if self.config.byteorder.resolved != sys.byteorder:
            raw = raw.flip(-1)

        payload = raw.contiguous().flatten().view(fmt.dtype)

        logger.debug("decoded %d %s values", payload.numel(), self.kind.__name__)
        return DecimalDataWrap(payload, fmt)

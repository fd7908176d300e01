# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Binary codec configuration."""

import sys
from enum import StrEnum, auto
from typing import Literal, NamedTuple


class ByteOrder(StrEnum):
    """Byte orders of the binary layout.

    Attributes:
        LITTLE: Least significant byte first.
        BIG: Most significant byte first.
        NATIVE: Byte order of the running host.

    """

    LITTLE = auto()
    BIG = auto()
    NATIVE = auto()

    @property
    def resolved(self) -> Literal["little", "big"]:
        """Concrete byte order, with `NATIVE` resolved against the host."""
        if self is ByteOrder.NATIVE:
            return sys.byteorder
        return "little" if self is ByteOrder.LITTLE else "big"


class BinaryCodecConfig(NamedTuple):
    """Configuration for the fixed-width binary codec.

    Attributes:
        byteorder: Byte order of every encoded value. Both ends must agree on
            it, as on the precision; neither is carried in the payload.

    """

    byteorder: ByteOrder = ByteOrder.LITTLE

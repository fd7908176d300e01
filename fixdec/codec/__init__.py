# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Text and binary codecs."""

from .binary import BinaryCodec
from .text import TextCodec

__all__ = [
    "BinaryCodec",
    "TextCodec",
]

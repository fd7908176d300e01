# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Configuration types for codecs."""

from .codec import BinaryCodecConfig, ByteOrder

__all__ = (
    # codec
    "ByteOrder",
    "BinaryCodecConfig",
)

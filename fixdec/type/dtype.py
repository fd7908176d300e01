# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Helpers for mapping bit width to torch dtypes."""

import torch

_WIDTH_TO_DTYPE = {
    16: torch.int16,
    32: torch.int32,
    64: torch.int64,
}


def get_storage_integer_dtype(bit_width: int) -> torch.dtype:
    """Return the signed dtype that stores exactly `bit_width` bits."""
    if bit_width not in _WIDTH_TO_DTYPE:
        raise ValueError(f"Unsupported bit width for tensors: {bit_width}")
    return _WIDTH_TO_DTYPE[bit_width]


def get_bit_width(dtype: torch.dtype) -> int:
    """Return the bit width of a signed integer dtype."""
    for width, candidate in _WIDTH_TO_DTYPE.items():
        if candidate == dtype:
            return width
    raise ValueError(f"Unsupported dtype: {dtype}")

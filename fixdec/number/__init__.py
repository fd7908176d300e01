# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Fixed-point value type."""

from .fixed_point import FixedPoint, fixed_point

__all__ = [
    "FixedPoint",
    "fixed_point",
]

# Copyright (c) 2024 The Fixdec Authors
# SPDX-License-Identifier: MIT

"""Amount and price arithmetic with explicit rounding."""

import torch

from fixdec import (
    BinaryCodec,
    BinaryCodecConfig,
    ByteOrder,
    DecimalDataWrap,
    FixedPoint,
    RoundingMode,
    TextCodec,
)

# --- application specific types ---

# MAX = (2^63 - 1) / 1e9 ~ 9.2e9, ERROR_MAX = 0.5 / 1e9
Amount = FixedPoint[64, 9]
# cents, for display and settlement
Cents = FixedPoint[64, 2]

_settlement_rounding = RoundingMode.NEAREST_TIES_TO_EVEN


def main() -> None:
    a = Amount("0.1")
    b = Amount("0.2")
    assert a + b == Amount("0.3")

    expenses = Amount("0.000000001")
    # 1e-9 * (Floor) 1e-9 = 0
    assert expenses.rmul(expenses, RoundingMode.FLOOR) == Amount.ZERO
    # 1e-9 * (Ceil) 1e-9 = 1e-9
    assert expenses.rmul(expenses, RoundingMode.CEIL) == expenses

    price = Amount("4.25")
    total = price * 4
    assert total == Amount(17)

    share = total.rdiv(Amount(3), RoundingMode.FLOOR)
    print(f"one third of {total} is {share}")

    settled = share.rescale(2, _settlement_rounding)
    print(f"settled as {settled!r}")

    # --- wire formats ---

    text = TextCodec(Cents)
    binary = BinaryCodec(Cents, BinaryCodecConfig(byteorder=ByteOrder.BIG))

    assert text.decode(text.encode(settled)) == settled
    print(f"binary: {binary.encode(settled).hex()}")

    # --- batches ---

    prices = DecimalDataWrap.from_value(torch.tensor([1.005, 2.5, -0.125]), Cents.fmt, mode=_settlement_rounding)
    print(f"batch: {[str(v) for v in prices.to_fixed_points(Cents)]}")


if __name__ == "__main__":
    main()

"""Slippage adjustment of quoted token amounts."""

from __future__ import annotations

import math

_U64_MAX = (1 << 64) - 1


def _saturating_u64(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value) or value >= _U64_MAX:
        return _U64_MAX
    return int(value)


def amount_with_slippage(amount: int, slippage: float, round_up: bool) -> int:
    """Widen ``amount`` by ``slippage``: up and ceiled, or down and floored.

    The result saturates to the unsigned 64-bit range.
    """
    if round_up:
        scaled = float(amount) * (1.0 + slippage)
        return _saturating_u64(math.ceil(scaled) if math.isfinite(scaled) else scaled)
    scaled = float(amount) * (1.0 - slippage)
    return _saturating_u64(math.floor(scaled) if math.isfinite(scaled) else scaled)
"""Shared value types for curve calculations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

U128_MAX = (1 << 128) - 1


def map_zero_to_none(x: int) -> int | None:
    """Return ``None`` for zero, otherwise the value itself."""
    return None if x == 0 else x


class TradeDirection(Enum):
    """Which token goes into the pool and which comes out."""

    ZERO_FOR_ONE = "zero_for_one"
    ONE_FOR_ZERO = "one_for_zero"

    def opposite(self) -> TradeDirection:
        """The reverse direction of this trade."""
        if self is TradeDirection.ZERO_FOR_ONE:
            return TradeDirection.ONE_FOR_ZERO
        return TradeDirection.ZERO_FOR_ONE


class RoundDirection(Enum):
    """Rounding used when converting lp tokens to trading tokens."""

    FLOOR = "floor"
    CEILING = "ceiling"


@dataclass(frozen=True)
class TradingTokenResult:
    """Amounts of both pool tokens matching some amount of lp tokens."""

    token_0_amount: int
    token_1_amount: int


@dataclass(frozen=True)
class SwapResult:
    """Outcome of swapping a source token for a destination token."""

    new_swap_source_amount: int
    new_swap_destination_amount: int
    source_amount_swapped: int
    destination_amount_swapped: int
    trade_fee: int
    protocol_fee: int
    fund_fee: int
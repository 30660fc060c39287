"""Fee arithmetic for swaps, using fee rates expressed in millionths."""

from __future__ import annotations

from .curve_types import U128_MAX

FEE_RATE_DENOMINATOR_VALUE = 1_000_000


def _ceil_div(token_amount: int, fee_numerator: int, fee_denominator: int) -> int | None:
    product = token_amount * fee_numerator
    if product > U128_MAX:
        raise OverflowError("fee product exceeds 128 bits")
    total = product + fee_denominator
    if total > U128_MAX:
        return None
    total -= 1
    if total < 0 or fee_denominator == 0:
        return None
    return total // fee_denominator


def floor_div(token_amount: int, fee_numerator: int, fee_denominator: int) -> int | None:
    """Floor of ``token_amount * fee_numerator / fee_denominator``, or None on failure."""
    product = token_amount * fee_numerator
    if product > U128_MAX or fee_denominator == 0:
        return None
    return product // fee_denominator


def trading_fee(amount: int, trade_fee_rate: int) -> int | None:
    """Trading fee on ``amount``, rounded up."""
    return _ceil_div(amount, trade_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def protocol_fee(amount: int, protocol_fee_rate: int) -> int | None:
    """Protocol share of a trading fee, rounded down."""
    return floor_div(amount, protocol_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def fund_fee(amount: int, fund_fee_rate: int) -> int | None:
    """Fund share of a trading fee, rounded down."""
    return floor_div(amount, fund_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def calculate_pre_fee_amount(post_fee_amount: int, trade_fee_rate: int) -> int | None:
    """Smallest input whose amount after the trading fee covers ``post_fee_amount``."""
    if trade_fee_rate == 0:
        return post_fee_amount
    numerator = post_fee_amount * FEE_RATE_DENOMINATOR_VALUE
    if numerator > U128_MAX:
        return None
    denominator = FEE_RATE_DENOMINATOR_VALUE - trade_fee_rate
    if denominator < 0:
        return None
    total = numerator + denominator
    if total > U128_MAX:
        return None
    total -= 1
    if total < 0 or denominator == 0:
        return None
    return total // denominator
"""The constant product (x * y = k) invariant."""

from __future__ import annotations

from .curve_types import U128_MAX, RoundDirection, TradingTokenResult


def _checked(value: int, what: str) -> int:
    if value > U128_MAX:
        raise OverflowError(f"{what} exceeds 128 bits")
    if value < 0:
        raise OverflowError(f"{what} is negative")
    return value


def swap_base_input_without_fees(
    source_amount: int, swap_source_amount: int, swap_destination_amount: int
) -> int:
    """Destination amount received for ``source_amount`` going into the pool."""
    numerator = _checked(source_amount * swap_destination_amount, "numerator")
    denominator = _checked(swap_source_amount + source_amount, "denominator")
    if denominator == 0:
        raise ZeroDivisionError("empty pool cannot be swapped against")
    return numerator // denominator


def swap_base_output_without_fees(
    destination_amount: int, swap_source_amount: int, swap_destination_amount: int
) -> int:
    """Source amount needed to take ``destination_amount`` out of the pool, rounded up."""
    numerator = _checked(swap_source_amount * destination_amount, "numerator")
    denominator = _checked(swap_destination_amount - destination_amount, "denominator")
    if denominator == 0:
        raise ZeroDivisionError("cannot drain the whole destination vault")
    return -(-numerator // denominator)


def _mul(a: int, b: int) -> int | None:
    product = a * b
    return product if product <= U128_MAX else None


def lp_tokens_to_trading_tokens(
    lp_token_amount: int,
    lp_token_supply: int,
    swap_token_0_amount: int,
    swap_token_1_amount: int,
    round_direction: RoundDirection,
) -> TradingTokenResult | None:
    """Trading tokens matching ``lp_token_amount`` of a supply, or None on overflow."""
    product_0 = _mul(lp_token_amount, swap_token_0_amount)
    if product_0 is None or lp_token_supply == 0:
        return None
    product_1 = _mul(lp_token_amount, swap_token_1_amount)
    if product_1 is None:
        return None
    token_0_amount, remainder_0 = divmod(product_0, lp_token_supply)
    token_1_amount, remainder_1 = divmod(product_1, lp_token_supply)
    if round_direction is RoundDirection.CEILING:
        # Tiny amounts that floor to zero stay zero so they get rejected later.
        if remainder_0 > 0 and token_0_amount > 0:
            token_0_amount += 1
        if remainder_1 > 0 and token_1_amount > 0:
            token_1_amount += 1
    return TradingTokenResult(token_0_amount, token_1_amount)
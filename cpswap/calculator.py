"""Swap and liquidity calculations that apply pool fees on top of the curve."""

from __future__ import annotations

from . import constant_product, fees
from .curve_types import U128_MAX, RoundDirection, SwapResult, TradingTokenResult
from .errors import ErrorCode, SwapError


def validate_supply(token_0_amount: int, token_1_amount: int) -> None:
    """Raise ``SwapError(EMPTY_SUPPLY)`` unless both token amounts are non-zero."""
    if token_0_amount == 0 or token_1_amount == 0:
        raise SwapError(ErrorCode.EMPTY_SUPPLY)


def swap_base_input(
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    trade_fee_rate: int,
    protocol_fee_rate: int,
    fund_fee_rate: int,
) -> SwapResult | None:
    """Take fees from ``source_amount`` and compute the destination amount received.

    Returns None when an intermediate value falls outside the 128-bit range.
    """
    trade_fee = fees.trading_fee(source_amount, trade_fee_rate)
    if trade_fee is None:
        return None
    protocol_fee = fees.protocol_fee(trade_fee, protocol_fee_rate)
    if protocol_fee is None:
        return None
    fund_fee = fees.fund_fee(trade_fee, fund_fee_rate)
    if fund_fee is None:
        return None

    source_amount_less_fees = source_amount - trade_fee
    if source_amount_less_fees < 0:
        return None

    destination_amount_swapped = constant_product.swap_base_input_without_fees(
        source_amount_less_fees, swap_source_amount, swap_destination_amount
    )

    new_swap_source_amount = swap_source_amount + source_amount
    if new_swap_source_amount > U128_MAX:
        return None
    new_swap_destination_amount = swap_destination_amount - destination_amount_swapped
    if new_swap_destination_amount < 0:
        return None

    return SwapResult(
        new_swap_source_amount=new_swap_source_amount,
        new_swap_destination_amount=new_swap_destination_amount,
        source_amount_swapped=source_amount,
        destination_amount_swapped=destination_amount_swapped,
        trade_fee=trade_fee,
        protocol_fee=protocol_fee,
        fund_fee=fund_fee,
    )


def swap_base_output(
    destination_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
    trade_fee_rate: int,
    protocol_fee_rate: int,
    fund_fee_rate: int,
) -> SwapResult | None:
    """Compute the source amount, fees included, needed to receive ``destination_amount``.

    Returns None when an intermediate value falls outside the 128-bit range.
    """
    source_amount_swapped = constant_product.swap_base_output_without_fees(
        destination_amount, swap_source_amount, swap_destination_amount
    )

    source_amount = fees.calculate_pre_fee_amount(source_amount_swapped, trade_fee_rate)
    if source_amount is None:
        raise OverflowError("pre-fee amount could not be calculated")
    trade_fee = fees.trading_fee(source_amount, trade_fee_rate)
    if trade_fee is None:
        return None
    protocol_fee = fees.protocol_fee(trade_fee, protocol_fee_rate)
    if protocol_fee is None:
        return None
    fund_fee = fees.fund_fee(trade_fee, fund_fee_rate)
    if fund_fee is None:
        return None

    new_swap_source_amount = swap_source_amount + source_amount
    if new_swap_source_amount > U128_MAX:
        return None
    new_swap_destination_amount = swap_destination_amount - destination_amount
    if new_swap_destination_amount < 0:
        return None

    return SwapResult(
        new_swap_source_amount=new_swap_source_amount,
        new_swap_destination_amount=new_swap_destination_amount,
        source_amount_swapped=source_amount,
        destination_amount_swapped=destination_amount,
        trade_fee=trade_fee,
        protocol_fee=protocol_fee,
        fund_fee=fund_fee,
    )


def lp_tokens_to_trading_tokens(
    lp_token_amount: int,
    lp_token_supply: int,
    swap_token_0_amount: int,
    swap_token_1_amount: int,
    round_direction: RoundDirection,
) -> TradingTokenResult | None:
    """Trading tokens matching ``lp_token_amount`` given the pool's totals."""
    return constant_product.lp_tokens_to_trading_tokens(
        lp_token_amount,
        lp_token_supply,
        swap_token_0_amount,
        swap_token_1_amount,
        round_direction,
    )
"""Quotes for deposits, withdrawals and swaps, with slippage and transfer fees."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from . import calculator
from .curve_types import RoundDirection, SwapResult
from .errors import ErrorCode, SwapError
from .slippage import amount_with_slippage

U64_MAX = (1 << 64) - 1

Fee = Union[int, Callable[[int], int]]


@dataclass(frozen=True)
class AmmConfig:
    """Fee rates of a pool's configuration, in millionths."""

    trade_fee_rate: int
    protocol_fee_rate: int
    fund_fee_rate: int


@dataclass(frozen=True)
class LiquidityQuote:
    """Token amounts for depositing or withdrawing an amount of lp tokens.

    The limits are the maxima for a deposit and the minima for a withdrawal.
    """

    lp_token_amount: int
    token_0_amount: int
    token_1_amount: int
    transfer_fee_0: int
    transfer_fee_1: int
    amount_0_limit: int
    amount_1_limit: int


@dataclass(frozen=True)
class SwapQuote:
    """Amounts for a swap; ``threshold`` is the minimum out or the maximum in."""

    amount_in: int
    amount_out: int
    threshold: int
    input_transfer_fee: int
    output_transfer_fee: int
    swap: SwapResult


def _fee(fee: Fee, amount: int) -> int:
    return fee(amount) if callable(fee) else fee


def _u64(value: int, what: str) -> int:
    if not 0 <= value <= U64_MAX:
        raise OverflowError(f"{what} does not fit in 64 bits")
    return value


def _trading_tokens(lp_token_amount, lp_supply, total_0, total_1):
    result = calculator.lp_tokens_to_trading_tokens(
        lp_token_amount, lp_supply, total_0, total_1, RoundDirection.CEILING
    )
    if result is None:
        raise SwapError(ErrorCode.ZERO_TRADING_TOKENS)
    return result


def quote_deposit(
    lp_token_amount: int,
    lp_supply: int,
    total_token_0_amount: int,
    total_token_1_amount: int,
    slippage: float,
    transfer_fee_0: Fee = 0,
    transfer_fee_1: Fee = 0,
) -> LiquidityQuote:
    """Maximum token amounts to send for minting ``lp_token_amount``.

    A transfer fee may be a number or a function of the amount after slippage.
    """
    result = _trading_tokens(
        lp_token_amount, lp_supply, total_token_0_amount, total_token_1_amount
    )
    amount_0 = amount_with_slippage(result.token_0_amount & U64_MAX, slippage, True)
    amount_1 = amount_with_slippage(result.token_1_amount & U64_MAX, slippage, True)
    fee_0 = _fee(transfer_fee_0, amount_0)
    fee_1 = _fee(transfer_fee_1, amount_1)
    return LiquidityQuote(
        lp_token_amount=lp_token_amount,
        token_0_amount=result.token_0_amount,
        token_1_amount=result.token_1_amount,
        transfer_fee_0=fee_0,
        transfer_fee_1=fee_1,
        amount_0_limit=_u64(amount_0 + fee_0, "amount_0_max"),
        amount_1_limit=_u64(amount_1 + fee_1, "amount_1_max"),
    )


def quote_withdraw(
    lp_token_amount: int,
    lp_supply: int,
    total_token_0_amount: int,
    total_token_1_amount: int,
    slippage: float,
    transfer_fee_0: Fee = 0,
    transfer_fee_1: Fee = 0,
) -> LiquidityQuote:
    """Minimum token amounts to accept for burning ``lp_token_amount``.

    A transfer fee may be a number or a function of the amount after slippage.
    """
    result = _trading_tokens(
        lp_token_amount, lp_supply, total_token_0_amount, total_token_1_amount
    )
    amount_0 = amount_with_slippage(result.token_0_amount & U64_MAX, slippage, False)
    amount_1 = amount_with_slippage(result.token_1_amount & U64_MAX, slippage, False)
    fee_0 = _fee(transfer_fee_0, amount_0)
    fee_1 = _fee(transfer_fee_1, amount_1)
    return LiquidityQuote(
        lp_token_amount=lp_token_amount,
        token_0_amount=result.token_0_amount,
        token_1_amount=result.token_1_amount,
        transfer_fee_0=fee_0,
        transfer_fee_1=fee_1,
        amount_0_limit=_u64(amount_0 - fee_0, "amount_0_min"),
        amount_1_limit=_u64(amount_1 - fee_1, "amount_1_min"),
    )


def quote_swap_base_input(
    amount_in: int,
    total_input_amount: int,
    total_output_amount: int,
    amm_config: AmmConfig,
    slippage: float,
    input_fee: Fee = 0,
    output_fee: Fee = 0,
) -> SwapQuote:
    """Minimum output to accept for sending exactly ``amount_in``.

    ``input_fee`` is the transfer fee on the amount sent, ``output_fee`` the
    transfer fee on the amount the pool pays out; each may be a function of
    that amount.
    """
    in_fee = _fee(input_fee, amount_in)
    actual_amount_in = max(amount_in - in_fee, 0)
    result = calculator.swap_base_input(
        actual_amount_in,
        total_input_amount,
        total_output_amount,
        amm_config.trade_fee_rate,
        amm_config.protocol_fee_rate,
        amm_config.fund_fee_rate,
    )
    if result is None:
        raise SwapError(ErrorCode.ZERO_TRADING_TOKENS)
    amount_out = _u64(result.destination_amount_swapped, "amount out")
    out_fee = _fee(output_fee, amount_out)
    amount_received = _u64(amount_out - out_fee, "amount received")
    return SwapQuote(
        amount_in=amount_in,
        amount_out=amount_received,
        threshold=amount_with_slippage(amount_received, slippage, False),
        input_transfer_fee=in_fee,
        output_transfer_fee=out_fee,
        swap=result,
    )


def quote_swap_base_output(
    amount_out_less_fee: int,
    total_input_amount: int,
    total_output_amount: int,
    amm_config: AmmConfig,
    slippage: float,
    input_inverse_fee: Fee = 0,
    output_inverse_fee: Fee = 0,
) -> SwapQuote:
    """Maximum input to send for receiving ``amount_out_less_fee`` after fees.

    The inverse fees give the transfer fee to add on top of an amount so that
    the amount itself arrives; each may be a function of that amount.
    """
    out_fee = _fee(output_inverse_fee, amount_out_less_fee)
    actual_amount_out = _u64(amount_out_less_fee + out_fee, "amount out")
    result = calculator.swap_base_output(
        actual_amount_out,
        total_input_amount,
        total_output_amount,
        amm_config.trade_fee_rate,
        amm_config.protocol_fee_rate,
        amm_config.fund_fee_rate,
    )
    if result is None:
        raise SwapError(ErrorCode.ZERO_TRADING_TOKENS)
    source_amount = _u64(result.source_amount_swapped, "source amount")
    in_fee = _fee(input_inverse_fee, source_amount)
    input_transfer_amount = _u64(source_amount + in_fee, "input transfer amount")
    return SwapQuote(
        amount_in=input_transfer_amount,
        amount_out=amount_out_less_fee,
        threshold=amount_with_slippage(input_transfer_amount, slippage, True),
        input_transfer_fee=in_fee,
        output_transfer_fee=out_fee,
        swap=result,
    )
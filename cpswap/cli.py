"""Command line interface for decoding program data and quoting pool operations."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import SwapError
from .instruction_decode import DecodeError, InstructionDecodeType, decode_instruction
from .log_parse import LogParseError, ProgramEvent, handle_program_log, parse_program_events
from .quotes import (
    AmmConfig,
    quote_deposit,
    quote_swap_base_input,
    quote_swap_base_output,
    quote_withdraw,
)

DEFAULT_CONFIG = "client_config.ini"
_U64_MAX = (1 << 64) - 1


def _u64(text: str) -> int:
    try:
        value = int(text, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {text}") from exc
    if not 0 <= value <= _U64_MAX:
        raise argparse.ArgumentTypeError(f"out of the 64-bit range: {text}")
    return value


def _slippage(args: argparse.Namespace) -> float:
    if args.slippage is not None:
        return args.slippage
    return load_config(args.config).slippage


def _program(args: argparse.Namespace) -> str:
    if args.program:
        return args.program
    return load_config(args.config).raydium_cp_program


def _print_event(event: ProgramEvent, line: str) -> None:
    if event.known:
        print(f"{event.name}: {event.data.hex()}")
    else:
        print(f"unknown event: {line}")


def _cmd_decode_instruction(args: argparse.Namespace) -> int:
    decoded = decode_instruction(args.instr_hex_data, InstructionDecodeType.BASE_HEX)
    if decoded is None:
        print(f"unknown instruction: {args.instr_hex_data}")
    else:
        print(decoded)
    return 0


def _cmd_decode_event(args: argparse.Namespace) -> int:
    line = args.log_event
    _, _, event = handle_program_log(args.program or "", line, False)
    if event is not None:
        _print_event(event, line)
    elif not line.startswith("Program log:"):
        print(f"Could not base64 decode log: {line}")
    return 0


def _cmd_decode_logs(args: argparse.Namespace) -> int:
    program = _program(args)
    if args.file == "-":
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
    lines = [line for line in lines if line.strip()]
    if not lines:
        print("log is empty")
        return 0
    for event in parse_program_events(program, lines):
        _print_event(event, event.discriminator.hex())
    return 0


def _print_liquidity(quote, limit_name: str) -> None:
    print(
        f"amount_0:{quote.token_0_amount}, amount_1:{quote.token_1_amount}, "
        f"lp_token_amount:{quote.lp_token_amount}"
    )
    print(f"transfer_fee_0:{quote.transfer_fee_0}, transfer_fee_1:{quote.transfer_fee_1}")
    print(
        f"amount_0_{limit_name}:{quote.amount_0_limit}, "
        f"amount_1_{limit_name}:{quote.amount_1_limit}"
    )


def _cmd_quote_deposit(args: argparse.Namespace) -> int:
    quote = quote_deposit(
        args.lp_token_amount,
        args.lp_supply,
        args.total_token_0_amount,
        args.total_token_1_amount,
        _slippage(args),
        args.transfer_fee_0,
        args.transfer_fee_1,
    )
    _print_liquidity(quote, "max")
    return 0


def _cmd_quote_withdraw(args: argparse.Namespace) -> int:
    quote = quote_withdraw(
        args.lp_token_amount,
        args.lp_supply,
        args.total_token_0_amount,
        args.total_token_1_amount,
        _slippage(args),
        args.transfer_fee_0,
        args.transfer_fee_1,
    )
    _print_liquidity(quote, "min")
    return 0


def _amm_config(args: argparse.Namespace) -> AmmConfig:
    return AmmConfig(args.trade_fee_rate, args.protocol_fee_rate, args.fund_fee_rate)


def _cmd_quote_swap_base_in(args: argparse.Namespace) -> int:
    quote = quote_swap_base_input(
        args.user_input_amount,
        args.total_input_amount,
        args.total_output_amount,
        _amm_config(args),
        _slippage(args),
        args.input_fee,
        args.output_fee,
    )
    print(
        f"amount_in:{quote.amount_in}, amount_out:{quote.amount_out}, "
        f"minimum_amount_out:{quote.threshold}"
    )
    return 0


def _cmd_quote_swap_base_out(args: argparse.Namespace) -> int:
    quote = quote_swap_base_output(
        args.amount_out_less_fee,
        args.total_input_amount,
        args.total_output_amount,
        _amm_config(args),
        _slippage(args),
        args.input_fee,
        args.output_fee,
    )
    print(
        f"amount_in:{quote.amount_in}, amount_out:{quote.amount_out}, "
        f"max_amount_in:{quote.threshold}"
    )
    return 0


def _add_common(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--config", default=DEFAULT_CONFIG, help="client configuration file")


def _add_slippage(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        "--slippage", type=float, default=None, help="overrides the configured slippage"
    )


def _add_liquidity(sub: argparse.ArgumentParser) -> None:
    for name in ("lp_token_amount", "lp_supply", "total_token_0_amount", "total_token_1_amount"):
        sub.add_argument(name, type=_u64)
    sub.add_argument("--transfer-fee-0", dest="transfer_fee_0", type=_u64, default=0)
    sub.add_argument("--transfer-fee-1", dest="transfer_fee_1", type=_u64, default=0)
    _add_slippage(sub)
    _add_common(sub)


def _add_swap(sub: argparse.ArgumentParser, amount_name: str) -> None:
    sub.add_argument(amount_name, type=_u64)
    sub.add_argument("total_input_amount", type=_u64)
    sub.add_argument("total_output_amount", type=_u64)
    sub.add_argument("--trade-fee-rate", dest="trade_fee_rate", type=_u64, default=0)
    sub.add_argument("--protocol-fee-rate", dest="protocol_fee_rate", type=_u64, default=0)
    sub.add_argument("--fund-fee-rate", dest="fund_fee_rate", type=_u64, default=0)
    sub.add_argument("--input-fee", dest="input_fee", type=_u64, default=0)
    sub.add_argument("--output-fee", dest="output_fee", type=_u64, default=0)
    _add_slippage(sub)
    _add_common(sub)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cpswap", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    sub = commands.add_parser("decode-instruction", help="decode hex instruction data")
    sub.add_argument("instr_hex_data")
    sub.set_defaults(handler=_cmd_decode_instruction)

    sub = commands.add_parser("decode-event", help="decode a base64 event log")
    sub.add_argument("log_event")
    sub.add_argument("--program", default=None)
    sub.set_defaults(handler=_cmd_decode_event)

    sub = commands.add_parser("decode-logs", help="decode events from transaction log lines")
    sub.add_argument("file", help="file of log lines, or - for standard input")
    sub.add_argument("--program", default=None, help="program id; defaults to the config")
    _add_common(sub)
    sub.set_defaults(handler=_cmd_decode_logs)

    sub = commands.add_parser("quote-deposit", help="maximum amounts for a deposit")
    _add_liquidity(sub)
    sub.set_defaults(handler=_cmd_quote_deposit)

    sub = commands.add_parser("quote-withdraw", help="minimum amounts for a withdrawal")
    _add_liquidity(sub)
    sub.set_defaults(handler=_cmd_quote_withdraw)

    sub = commands.add_parser("quote-swap-base-in", help="minimum output for a fixed input")
    _add_swap(sub, "user_input_amount")
    sub.set_defaults(handler=_cmd_quote_swap_base_in)

    sub = commands.add_parser("quote-swap-base-out", help="maximum input for a fixed output")
    _add_swap(sub, "amount_out_less_fee")
    sub.set_defaults(handler=_cmd_quote_swap_base_out)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    args = _build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (ConfigError, DecodeError, LogParseError, SwapError, OverflowError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
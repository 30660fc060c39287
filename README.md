# cpswap

Integer math and tooling for a constant-product (x · y = k) automated market
maker: swap and liquidity calculations, client-side quotes with slippage and
token transfer fees, and decoders for the program's instruction data and log
events. It has no dependencies outside the standard library.

## Modules

- `cpswap.calculator`: `swap_base_input`, `swap_base_output`,
  `lp_tokens_to_trading_tokens` and `validate_supply`. Fees are taken from the
  input side, at rates expressed in millionths (`cpswap.fees.FEE_RATE_DENOMINATOR_VALUE`).
  The swap and conversion functions return a `SwapResult` or
  `TradingTokenResult`, or `None` when an intermediate value leaves the
  128-bit range. `validate_supply` raises `SwapError(ErrorCode.EMPTY_SUPPLY)`
  when either amount is zero.
- `cpswap.constant_product`: the fee-free curve functions
  `swap_base_input_without_fees`, `swap_base_output_without_fees` and
  `lp_tokens_to_trading_tokens`. The first two raise `OverflowError` or
  `ZeroDivisionError` on values they cannot handle.
- `cpswap.fees`: `trading_fee` (rounded up), `protocol_fee`, `fund_fee`
  (rounded down), `floor_div` and `calculate_pre_fee_amount`.
- `cpswap.curve_types`: `TradeDirection` (with `opposite()`),
  `RoundDirection`, `TradingTokenResult`, `SwapResult` and `map_zero_to_none`.
- `cpswap.errors`: `ErrorCode`, an enum whose values are the error messages,
  and the `SwapError` exception that carries one.
- `cpswap.slippage`: `amount_with_slippage(amount, slippage, round_up)` widens
  an amount up (ceiled) or down (floored), saturating to the unsigned 64-bit
  range.
- `cpswap.quotes`: `quote_deposit`, `quote_withdraw`, `quote_swap_base_input`
  and `quote_swap_base_output`, taking pool totals, an `AmmConfig` of fee rates
  and a slippage. Transfer fees may be given as a number or as a function of
  the amount. They return a `LiquidityQuote` or `SwapQuote`, and raise
  `SwapError(ErrorCode.ZERO_TRADING_TOKENS)` when the calculation fails and
  `OverflowError` when an amount does not fit in 64 bits.
- `cpswap.instruction_decode`: `decode_instruction(data, decode_type)` decodes
  hex, base64 or base58 instruction data (`InstructionDecodeType`) into records
  such as `Deposit`, `Withdraw`, `SwapBaseInput` or `CreateAmmConfig`, or
  returns `None` for an unknown discriminator. Bad input raises `DecodeError`.
  `discriminator(name)` and `b58decode(text)` are public too.
- `cpswap.log_parse`: `parse_program_events(program_id, logs)` walks the log
  lines of a transaction, tracking program invocations with `Execution`, and
  returns the `ProgramEvent`s the program emitted. `handle_program_log` and
  `handle_system_log` classify single lines; malformed lines raise
  `LogParseError`.
- `cpswap.config`: `load_config(path)` reads an INI file whose `[Global]`
  section holds `http_url`, `ws_url`, `payer_path`, `admin_path`,
  `raydium_cp_program` (a base58 32-byte key) and `slippage`, returning a
  `ClientConfig`; problems raise `ConfigError`.

## Example

```python
from cpswap.calculator import swap_base_input

result = swap_base_input(1_000, 1_000_000, 2_000_000, 2500, 120000, 40000)
print(result.destination_amount_swapped, result.trade_fee)  # 1992 3
```

## Command line

```
pip install .
cpswap --help
cpswap decode-instruction <hex-data>
cpswap decode-event <base64-log> [--program ID]
cpswap decode-logs <file or -> [--program ID] [--config PATH]
cpswap quote-deposit LP_AMOUNT LP_SUPPLY TOTAL_0 TOTAL_1 [--slippage S] [--transfer-fee-0 N] [--transfer-fee-1 N]
cpswap quote-withdraw LP_AMOUNT LP_SUPPLY TOTAL_0 TOTAL_1 [--slippage S] [--transfer-fee-0 N] [--transfer-fee-1 N]
cpswap quote-swap-base-in AMOUNT_IN TOTAL_IN TOTAL_OUT [--trade-fee-rate N] [--protocol-fee-rate N] [--fund-fee-rate N] [--input-fee N] [--output-fee N] [--slippage S]
cpswap quote-swap-base-out AMOUNT_OUT TOTAL_IN TOTAL_OUT [--trade-fee-rate N] [--protocol-fee-rate N] [--fund-fee-rate N] [--input-fee N] [--output-fee N] [--slippage S]
```

When `--slippage` or `--program` is not given, the value is read from the
configuration file (`client_config.ini` by default, changed with `--config`).
Errors are printed to standard error and the command exits with status 1.

## What it does not do

The package computes and decodes; it does not talk to a network. It does not
fetch pool or token accounts, read keypair files, build, sign or send
transactions, or fetch transaction logs by id: pool totals, fee rates and
transfer fees are supplied by the caller, and logs are read from a file or
standard input. The URLs and paths in the configuration are loaded but not
used. Decoded events carry their type name and raw payload bytes; their
fields are not unpacked.

## Tests

```
pip install .[test]
pytest
```
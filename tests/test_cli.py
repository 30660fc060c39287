import base64
import struct

import pytest

from cpswap.cli import main
from cpswap.instruction_decode import discriminator
from cpswap.log_parse import event_discriminator
from cpswap.quotes import AmmConfig, quote_swap_base_input, quote_swap_base_output

PROGRAM = "11111111111111111111111111111111"


def _hex(name, layout, *values):
    return (discriminator(name) + struct.pack(layout, *values)).hex()


def _write_config(tmp_path, slippage="0.1"):
    path = tmp_path / "client_config.ini"
    path.write_text(
        "[Global]\n"
        "http_url = http://localhost:8899\n"
        "ws_url = ws://localhost:8900\n"
        "payer_path = payer.json\n"
        "admin_path = admin.json\n"
        f"raydium_cp_program = {PROGRAM}\n"
        f"slippage = {slippage}\n",
        encoding="utf-8",
    )
    return path


def test_decode_instruction_swap_base_input(capsys):
    data = _hex("swap_base_input", "<QQ", 100, 90)
    assert main(["decode-instruction", data]) == 0
    out = capsys.readouterr().out
    assert "SwapBaseInput(amount_in=100, minimum_amount_out=90)" in out


def test_decode_instruction_unknown(capsys):
    data = "00" * 8
    assert main(["decode-instruction", data]) == 0
    assert capsys.readouterr().out.strip() == f"unknown instruction: {data}"


def test_decode_instruction_too_short(capsys):
    assert main(["decode-instruction", "0011"]) == 1
    assert "too short" in capsys.readouterr().err


def test_decode_instruction_bad_hex(capsys):
    assert main(["decode-instruction", "zz"]) == 1
    assert "error:" in capsys.readouterr().err


def test_decode_event_known(capsys):
    payload = event_discriminator("SwapEvent") + b"\x01\x02"
    line = base64.b64encode(payload).decode()
    assert main(["decode-event", line]) == 0
    assert capsys.readouterr().out.strip() == "SwapEvent: 0102"


def test_decode_event_not_base64(capsys):
    assert main(["decode-event", "not base64!"]) == 0
    assert "Could not base64 decode log" in capsys.readouterr().out


def test_decode_logs_from_file(tmp_path, capsys):
    payload = event_discriminator("LpChangeEvent") + b"\xff"
    logs = tmp_path / "logs.txt"
    logs.write_text(
        f"Program {PROGRAM} invoke [1]\n"
        f"Program data: {base64.b64encode(payload).decode()}\n"
        f"Program {PROGRAM} success\n",
        encoding="utf-8",
    )
    assert main(["decode-logs", str(logs), "--program", PROGRAM]) == 0
    assert capsys.readouterr().out.strip() == "LpChangeEvent: ff"


def test_decode_logs_program_from_config(tmp_path, capsys):
    config = _write_config(tmp_path)
    logs = tmp_path / "logs.txt"
    logs.write_text("", encoding="utf-8")
    assert main(["decode-logs", str(logs), "--config", str(config)]) == 0
    assert capsys.readouterr().out.strip() == "log is empty"


def test_decode_logs_missing_config(tmp_path, capsys):
    logs = tmp_path / "logs.txt"
    logs.write_text("x\n", encoding="utf-8")
    missing = tmp_path / "absent.ini"
    assert main(["decode-logs", str(logs), "--config", str(missing)]) == 1
    assert "error:" in capsys.readouterr().err


def test_quote_deposit_pool_token_rate(capsys):
    assert main(["quote-deposit", "5", "10", "2", "49", "--slippage", "0"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "amount_0:1, amount_1:25, lp_token_amount:5"
    assert lines[2] == "amount_0_max:1, amount_1_max:25"


def test_quote_withdraw_subtracts_transfer_fee(capsys):
    args = ["quote-withdraw", "5", "101", "100", "202", "--slippage", "0",
            "--transfer-fee-0", "1", "--transfer-fee-1", "2"]
    assert main(args) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "amount_0:5, amount_1:10, lp_token_amount:5"
    assert lines[1] == "transfer_fee_0:1, transfer_fee_1:2"
    assert lines[2] == "amount_0_min:4, amount_1_min:8"


def test_quote_deposit_slippage_from_config(tmp_path, capsys):
    config = _write_config(tmp_path, slippage="0")
    assert main(["quote-deposit", "5", "10", "5", "501", "--config", str(config)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("amount_0:3, amount_1:251")


def test_quote_deposit_zero_supply_fails(capsys):
    assert main(["quote-deposit", "5", "0", "2", "49", "--slippage", "0"]) == 1
    assert "zero trading tokens" in capsys.readouterr().err


def test_quote_swap_base_in_matches_quote(capsys):
    args = ["quote-swap-base-in", "1000", "4000000", "70000000", "--trade-fee-rate",
            "2500", "--slippage", "0.01"]
    assert main(args) == 0
    expected = quote_swap_base_input(1000, 4000000, 70000000, AmmConfig(2500, 0, 0), 0.01)
    assert capsys.readouterr().out.strip() == (
        f"amount_in:1000, amount_out:{expected.amount_out}, "
        f"minimum_amount_out:{expected.threshold}"
    )
    assert expected.threshold <= expected.amount_out


def test_quote_swap_base_out_matches_quote(capsys):
    args = ["quote-swap-base-out", "500", "60000", "30000", "--trade-fee-rate",
            "2500", "--slippage", "0.05"]
    assert main(args) == 0
    expected = quote_swap_base_output(500, 60000, 30000, AmmConfig(2500, 0, 0), 0.05)
    assert capsys.readouterr().out.strip() == (
        f"amount_in:{expected.amount_in}, amount_out:500, "
        f"max_amount_in:{expected.threshold}"
    )
    assert expected.threshold >= expected.amount_in


def test_negative_amount_rejected():
    with pytest.raises(SystemExit) as excinfo:
        main(["quote-deposit", "-1", "10", "2", "49", "--slippage", "0"])
    assert excinfo.value.code == 2


def test_missing_command_rejected():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
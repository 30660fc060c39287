import base64
import struct

import pytest

from cpswap.instruction_decode import (
    CollectFundFee,
    CreateAmmConfig,
    DecodeError,
    Deposit,
    Initialize,
    InstructionDecodeType,
    SwapBaseInput,
    SwapBaseOutput,
    UpdateAmmConfig,
    UpdatePoolStatus,
    Withdraw,
    b58decode,
    decode_instruction,
    discriminator,
)

NAMES = [
    "create_amm_config",
    "update_amm_config",
    "initialize",
    "update_pool_status",
    "collect_protocol_fee",
    "collect_fund_fee",
    "deposit",
    "withdraw",
    "swap_base_input",
    "swap_base_output",
]


def test_initialize_discriminator_pinned():
    assert discriminator("initialize").hex() == "afaf6d1f0d989bed"


def test_discriminators_are_eight_bytes_and_distinct():
    discs = [discriminator(name) for name in NAMES]
    assert all(len(d) == 8 for d in discs)
    assert len(set(discs)) == len(NAMES)


def test_b58decode_single_char():
    assert b58decode("2g") == b"a"


def test_b58decode_leading_ones_are_zero_bytes():
    assert b58decode("1") == b"\x00"
    assert b58decode("") == b""
    assert b58decode("11" + "2g") == b"\x00\x00a"


def test_b58decode_rejects_invalid_character():
    with pytest.raises(DecodeError):
        b58decode("0OIl")


@pytest.mark.parametrize(
    "cls, layout, values",
    [
        (CreateAmmConfig, "<HQQQQ", (3, 2500, 120000, 40000, 150000000)),
        (UpdateAmmConfig, "<BQ", (1, 77)),
        (Initialize, "<QQQ", (1000, 2000, 0)),
        (UpdatePoolStatus, "<B", (4,)),
        (CollectFundFee, "<QQ", (5, 6)),
        (Deposit, "<QQQ", (10, 20, 30)),
        (Withdraw, "<QQQ", (11, 21, 31)),
        (SwapBaseInput, "<QQ", (500, 450)),
        (SwapBaseOutput, "<QQ", (600, 300)),
    ],
)
def test_decode_hex_each_instruction(cls, layout, values):
    data = discriminator(cls.instruction_name) + struct.pack(layout, *values)
    result = decode_instruction(data.hex(), InstructionDecodeType.BASE_HEX)
    assert result == cls(*values)


def test_decode_base64():
    data = discriminator("deposit") + struct.pack("<QQQ", 1, 2, 3)
    encoded = base64.b64encode(data).decode()
    assert decode_instruction(encoded, InstructionDecodeType.BASE64) == Deposit(1, 2, 3)


def test_decode_base58_of_hex_equivalent():
    # A base58 string of only ones decodes to zero bytes: unknown discriminator.
    assert decode_instruction("1" * 8, InstructionDecodeType.BASE58) is None


def test_decode_trailing_bytes_ignored():
    data = discriminator("swap_base_input") + struct.pack("<QQ", 9, 8) + b"\xff"
    assert decode_instruction(data.hex(), InstructionDecodeType.BASE_HEX) == SwapBaseInput(9, 8)


def test_unknown_discriminator_returns_none():
    data = b"\x00" * 8 + struct.pack("<Q", 1)
    assert decode_instruction(data.hex(), InstructionDecodeType.BASE_HEX) is None


def test_too_short_data_raises():
    with pytest.raises(DecodeError, match="too short"):
        decode_instruction("0102", InstructionDecodeType.BASE_HEX)


def test_truncated_arguments_raise():
    data = discriminator("deposit") + struct.pack("<QQ", 1, 2)
    with pytest.raises(DecodeError):
        decode_instruction(data.hex(), InstructionDecodeType.BASE_HEX)


def test_invalid_hex_raises():
    with pytest.raises(DecodeError):
        decode_instruction("zz", InstructionDecodeType.BASE_HEX)


def test_invalid_base64_raises():
    with pytest.raises(DecodeError):
        decode_instruction("not base64!!", InstructionDecodeType.BASE64)


def test_invalid_base58_raises():
    with pytest.raises(DecodeError):
        decode_instruction("0000", InstructionDecodeType.BASE58)
"""Decoding of swap program instruction data."""

from __future__ import annotations

import base64
import binascii
import hashlib
import struct
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

DISCRIMINATOR_LEN = 8

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {ch: i for i, ch in enumerate(_B58_ALPHABET)}


class DecodeError(ValueError):
    """Raised when instruction data cannot be decoded."""


class InstructionDecodeType(Enum):
    """Text encoding of the instruction data."""

    BASE_HEX = "hex"
    BASE64 = "base64"
    BASE58 = "base58"


def b58decode(text: str) -> bytes:
    """Decode a base58 string using the Bitcoin alphabet."""
    number = 0
    for ch in text:
        digit = _B58_INDEX.get(ch)
        if digit is None:
            raise DecodeError(f"invalid base58 character {ch!r}")
        number = number * 58 + digit
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * zeros + body


def discriminator(instruction_name: str) -> bytes:
    """The 8-byte tag identifying a program instruction by its snake_case name."""
    return hashlib.sha256(f"global:{instruction_name}".encode()).digest()[:DISCRIMINATOR_LEN]


class _Instruction:
    """Shared decoding for fixed-layout little-endian instruction arguments."""

    instruction_name: ClassVar[str]
    _layout: ClassVar[str]

    @classmethod
    def from_bytes(cls, data: bytes):
        """Decode the arguments that follow the discriminator."""
        try:
            values = struct.unpack_from(cls._layout, data)
        except struct.error as exc:
            raise DecodeError(
                f"instruction {cls.instruction_name} did not deserialize"
            ) from exc
        return cls(*values)


@dataclass(frozen=True)
class CreateAmmConfig(_Instruction):
    instruction_name: ClassVar[str] = "create_amm_config"
    _layout: ClassVar[str] = "<HQQQQ"

    index: int
    trade_fee_rate: int
    protocol_fee_rate: int
    fund_fee_rate: int
    create_pool_fee: int


@dataclass(frozen=True)
class UpdateAmmConfig(_Instruction):
    instruction_name: ClassVar[str] = "update_amm_config"
    _layout: ClassVar[str] = "<BQ"

    param: int
    value: int


@dataclass(frozen=True)
class Initialize(_Instruction):
    instruction_name: ClassVar[str] = "initialize"
    _layout: ClassVar[str] = "<QQQ"

    init_amount_0: int
    init_amount_1: int
    open_time: int


@dataclass(frozen=True)
class UpdatePoolStatus(_Instruction):
    instruction_name: ClassVar[str] = "update_pool_status"
    _layout: ClassVar[str] = "<B"

    status: int


@dataclass(frozen=True)
class CollectProtocolFee(_Instruction):
    instruction_name: ClassVar[str] = "collect_protocol_fee"
    _layout: ClassVar[str] = "<QQ"

    amount_0_requested: int
    amount_1_requested: int


@dataclass(frozen=True)
class CollectFundFee(_Instruction):
    instruction_name: ClassVar[str] = "collect_fund_fee"
    _layout: ClassVar[str] = "<QQ"

    amount_0_requested: int
    amount_1_requested: int


@dataclass(frozen=True)
class Deposit(_Instruction):
    instruction_name: ClassVar[str] = "deposit"
    _layout: ClassVar[str] = "<QQQ"

    lp_token_amount: int
    maximum_token_0_amount: int
    maximum_token_1_amount: int


@dataclass(frozen=True)
class Withdraw(_Instruction):
    instruction_name: ClassVar[str] = "withdraw"
    _layout: ClassVar[str] = "<QQQ"

    lp_token_amount: int
    minimum_token_0_amount: int
    minimum_token_1_amount: int


@dataclass(frozen=True)
class SwapBaseInput(_Instruction):
    instruction_name: ClassVar[str] = "swap_base_input"
    _layout: ClassVar[str] = "<QQ"

    amount_in: int
    minimum_amount_out: int


@dataclass(frozen=True)
class SwapBaseOutput(_Instruction):
    instruction_name: ClassVar[str] = "swap_base_output"
    _layout: ClassVar[str] = "<QQ"

    max_amount_in: int
    amount_out: int


_INSTRUCTIONS = {
    discriminator(cls.instruction_name): cls
    for cls in (
        CreateAmmConfig,
        UpdateAmmConfig,
        Initialize,
        UpdatePoolStatus,
        CollectProtocolFee,
        CollectFundFee,
        Deposit,
        Withdraw,
        SwapBaseInput,
        SwapBaseOutput,
    )
}


def _decode_text(instr_data: str, decode_type: InstructionDecodeType) -> bytes:
    if decode_type is InstructionDecodeType.BASE_HEX:
        try:
            return binascii.unhexlify(instr_data)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Could not hex decode instruction: {instr_data}") from exc
    if decode_type is InstructionDecodeType.BASE64:
        try:
            return base64.b64decode(instr_data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(
                f"Could not base64 decode instruction: {instr_data}"
            ) from exc
    try:
        return b58decode(instr_data)
    except DecodeError as exc:
        raise DecodeError(f"Could not base58 decode instruction: {instr_data}") from exc


def decode_instruction(instr_data: str, decode_type: InstructionDecodeType):
    """Decode encoded instruction data into its instruction object.

    Returns None when the discriminator names no known instruction.
    """
    data = _decode_text(instr_data, decode_type)
    if len(data) < DISCRIMINATOR_LEN:
        raise DecodeError(f"instruction data is too short: {instr_data}")
    cls = _INSTRUCTIONS.get(data[:DISCRIMINATOR_LEN])
    if cls is None:
        return None
    return cls.from_bytes(data[DISCRIMINATOR_LEN:])
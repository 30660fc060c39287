"""Error codes reported by the swap curve and pool logic."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Failure reasons, each carrying its user-facing message."""

    NOT_APPROVED = "Not approved"
    INVALID_OWNER = "Input account owner is not the program address"
    EMPTY_SUPPLY = "Input token account empty"
    INVALID_INPUT = "InvalidInput"
    INCORRECT_LP_MINT = "Address of the provided lp token mint is incorrect"
    EXCEEDED_SLIPPAGE = "Exceeds desired slippage limit"
    ZERO_TRADING_TOKENS = "Given pool token amount results in zero trading tokens"
    NOT_SUPPORT_MINT = "Not support token_2022 mint extension"
    INVALID_VAULT = "invaild vault"
    INIT_LP_AMOUNT_TOO_LESS = (
        "Init lp amount is too less(Because 100 amount lp will be locked)"
    )
    TRANSFER_FEE_CALCULATE_NOT_MATCH = "TransferFee calculate not match"

    @property
    def message(self) -> str:
        """The human readable description of this error."""
        return self.value


class SwapError(Exception):
    """Raised when a pool operation fails with a known error code."""

    def __init__(self, code: ErrorCode) -> None:
        if not isinstance(code, ErrorCode):
            raise TypeError(f"expected an ErrorCode, got {type(code).__name__}")
        super().__init__(code.message)
        self.code = code
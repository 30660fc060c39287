"""Loading of the client configuration file."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass

from .instruction_decode import DecodeError, b58decode

_SECTION = "global"
_PUBKEY_LEN = 32
_MAX_PUBKEY_TEXT_LEN = 44


class ConfigError(ValueError):
    """Raised when the client configuration is missing or invalid."""


@dataclass(frozen=True)
class ClientConfig:
    """Connection and signing settings for the client."""

    http_url: str
    ws_url: str
    payer_path: str
    admin_path: str
    raydium_cp_program: str
    slippage: float


def _parse_pubkey(text: str) -> str:
    if len(text) > _MAX_PUBKEY_TEXT_LEN:
        raise ConfigError(f"invalid public key: {text}")
    try:
        raw = b58decode(text)
    except DecodeError as exc:
        raise ConfigError(f"invalid public key: {text}") from exc
    if len(raw) != _PUBKEY_LEN:
        raise ConfigError(f"invalid public key: {text}")
    return text


def load_config(path: str | os.PathLike) -> ClientConfig:
    """Read the ``Global`` section of an INI file into a :class:`ClientConfig`."""
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, encoding="utf-8") as handle:
            parser.read_file(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    except configparser.Error as exc:
        raise ConfigError(f"malformed config {path}: {exc}") from exc

    section = next((s for s in parser.sections() if s.lower() == _SECTION), None)
    if section is None:
        raise ConfigError("missing [Global] section")
    values = parser[section]

    def required(key: str) -> str:
        value = values.get(key)
        if value is None:
            raise ConfigError(f"{key} is missing")
        value = value.strip()
        if not value:
            raise ConfigError(f"{key} must not be empty")
        return value

    http_url = required("http_url")
    ws_url = required("ws_url")
    payer_path = required("payer_path")
    admin_path = required("admin_path")
    program = _parse_pubkey(required("raydium_cp_program"))
    slippage_text = required("slippage")
    try:
        slippage = float(slippage_text)
    except ValueError as exc:
        raise ConfigError(f"slippage is not a number: {slippage_text}") from exc

    return ClientConfig(
        http_url=http_url,
        ws_url=ws_url,
        payer_path=payer_path,
        admin_path=admin_path,
        raydium_cp_program=program,
        slippage=slippage,
    )
"""
Field validation for persisted configuration and registry entries.

Every validator returns None on success and raises
:class:`~inachus.errors.InvalidConfigError` (or
:class:`~inachus.errors.InvalidAddressError` for addresses) otherwise.
"""

from __future__ import annotations

import re

from .errors import InvalidAddressError, InvalidConfigError
from .utils import parse_duration

_HEX = re.compile(r"[0-9a-fA-F]*")
_CONTRACT_NAME = re.compile(r"[A-Za-z0-9_.\-]+")


def validate_rpc_url(url: str) -> None:
    if not url.startswith(("http://", "https://")):
        raise InvalidConfigError(f"Invalid RPC URL: {url}", field="rpc_url")


def validate_address(address: str) -> None:
    """Structural check only; checksum validation lives in the codec."""
    if not address.startswith("0x"):
        raise InvalidAddressError("Address must start with 0x")
    if len(address) != 42:
        raise InvalidAddressError("Address must be 20 bytes (40 hex characters)")
    if not _HEX.fullmatch(address[2:]):
        raise InvalidAddressError("Address must be hexadecimal")


def validate_private_key(private_key: str) -> None:
    if len(private_key) not in (64, 66):
        raise InvalidConfigError(
            "Private key must be 32 bytes (64 hex characters)", field="private_key"
        )
    body = private_key[2:] if private_key.startswith("0x") else private_key
    if len(body) != 64 or not _HEX.fullmatch(body):
        raise InvalidConfigError("Private key must be hexadecimal", field="private_key")


def validate_chain_id(chain_id: int | str) -> None:
    try:
        value = int(str(chain_id), 10)
    except ValueError:
        raise InvalidConfigError(f"Invalid chain ID: {chain_id}", field="chain_id") from None
    if value <= 0:
        raise InvalidConfigError(f"Invalid chain ID: {chain_id}", field="chain_id")


def validate_wait_time(wait_time: str) -> None:
    try:
        parse_duration(wait_time)
    except ValueError:
        raise InvalidConfigError(f"Invalid wait time: {wait_time}", field="wait_time") from None


def validate_contract_name(contract_name: str) -> None:
    if not contract_name:
        raise InvalidConfigError("Contract name cannot be empty", field="name")
    if not _CONTRACT_NAME.fullmatch(contract_name):
        raise InvalidConfigError(
            "Contract name must be alphanumeric, '_', '-' or '.'", field="name"
        )

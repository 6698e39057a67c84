"""Tests for transaction building and sending."""

from __future__ import annotations

import logging

import pytest
from eth_account import Account

from inachus.errors import ProviderError
from inachus.pneuma.tx import GAS_MULTIPLIER, Wallet

from _fakes import ADDRESS_A, PRIVATE_KEY, TX_HASH, FakeProvider


@pytest.fixture()
def wallet_provider() -> FakeProvider:
    return FakeProvider(chain_id=8453)


def _wallet(provider: FakeProvider, confirmation_wait: float = 0.0) -> Wallet:
    return Wallet(
        account=Account.from_key(PRIVATE_KEY),
        provider=provider,
        chain_id=8453,
        confirmation_wait=confirmation_wait,
    )


def test_build_tx(wallet_provider) -> None:
    tx = _wallet(wallet_provider).build_tx(ADDRESS_A.lower(), b"\xa9\x05\x9c\xbb")

    assert tx["to"] == ADDRESS_A
    assert tx["data"] == "0xa9059cbb"
    assert tx["gas"] == int(50_000 * GAS_MULTIPLIER)
    assert tx["gasPrice"] == 1_000_000_000
    assert tx["nonce"] == 7
    assert tx["chainId"] == 8453
    assert "from" not in tx

    estimate = wallet_provider.calls[0]
    assert estimate[0] == "estimate_gas"
    assert estimate[1]["from"] == Account.from_key(PRIVATE_KEY).address


def test_sign_and_send_without_waiting(wallet_provider) -> None:
    tx_hash = _wallet(wallet_provider).sign_and_send(ADDRESS_A, b"\x00" * 4)

    assert tx_hash == TX_HASH
    assert len(wallet_provider.sent) == 1
    assert "wait_for_receipt" not in wallet_provider.network_calls()


def test_sign_and_send_waits_for_receipt(wallet_provider) -> None:
    _wallet(wallet_provider, confirmation_wait=5).sign_and_send(ADDRESS_A, b"\x00" * 4)
    assert wallet_provider.network_calls()[-1] == "wait_for_receipt"


def test_receipt_timeout_still_returns_hash(wallet_provider, caplog) -> None:
    wallet_provider.receipt = None
    with caplog.at_level(logging.WARNING, logger="inachus.pneuma.tx"):
        tx_hash = _wallet(wallet_provider, confirmation_wait=1).sign_and_send(ADDRESS_A, b"")
    assert tx_hash == TX_HASH
    assert "not confirmed" in caplog.text


def test_reverted_transaction(wallet_provider) -> None:
    wallet_provider.receipt = {"status": "0x0"}
    with pytest.raises(ProviderError, match="reverted"):
        _wallet(wallet_provider, confirmation_wait=1).sign_and_send(ADDRESS_A, b"")

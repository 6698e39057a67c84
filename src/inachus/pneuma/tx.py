"""
Wallet - Build, sign, and send contract transactions.

Uses eth-account for signing and the httpx-based provider for sending.
All gas is paid by the signing EOA.
"""

from __future__ import annotations

import logging
from typing import Any

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address

from ..errors import ProviderError
from .rpc import RpcProvider, _to_hex

logger = logging.getLogger(__name__)

# Headroom applied on top of eth_estimateGas
GAS_MULTIPLIER = 1.2


class Wallet:
    """Signs transactions with a local account and submits them."""

    def __init__(
        self,
        account: LocalAccount,
        provider: RpcProvider,
        chain_id: int,
        confirmation_wait: float = 0.0,
    ) -> None:
        self.account = account
        self.provider = provider
        self.chain_id = chain_id
        self.confirmation_wait = confirmation_wait

    @property
    def address(self) -> str:
        return self.account.address

    def build_tx(self, contract_address: str, payload: bytes, value: int = 0) -> dict[str, Any]:
        """
        Build an unsigned legacy transaction calling ``contract_address``.
        """
        tx: dict[str, Any] = {
            "from": self.address,
            "to": to_checksum_address(contract_address),
            "data": _to_hex(payload),
            "value": value,
        }
        estimate = self.provider.estimate_gas({**tx, "value": hex(value)})

        tx.pop("from")
        tx["gas"] = int(estimate * GAS_MULTIPLIER)
        tx["gasPrice"] = self.provider.get_gas_price()
        tx["nonce"] = self.provider.get_nonce(self.address)
        tx["chainId"] = self.chain_id
        return tx

    def sign_and_send(self, contract_address: str, payload: bytes) -> str:
        """
        Sign a contract call transaction and send it.

        When ``confirmation_wait`` is positive the receipt is awaited for at
        most that many seconds.

        Returns:
            Transaction hash

        Raises:
            ProviderError: If the transaction fails or is reverted
        """
        tx = self.build_tx(contract_address, payload)
        signed = self.account.sign_transaction(tx)
        tx_hash = self.provider.send_raw_transaction(bytes(signed.raw_transaction))
        logger.info("Sent transaction %s (nonce %s, chain %s)", tx_hash, tx["nonce"], self.chain_id)

        if self.confirmation_wait > 0:
            try:
                receipt = self.provider.wait_for_receipt(
                    tx_hash,
                    timeout=self.confirmation_wait,
                    poll_interval=min(2.0, self.confirmation_wait),
                )
            except TimeoutError:
                logger.warning(
                    "Transaction %s not confirmed within %ss", tx_hash, self.confirmation_wait
                )
                return tx_hash

            if int(receipt.get("status", "0x1"), 16) == 0:
                raise ProviderError(f"Transaction reverted: {tx_hash}")
            logger.info("Transaction %s confirmed in block %s", tx_hash, receipt.get("blockNumber"))

        return tx_hash

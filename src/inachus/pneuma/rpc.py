"""
JSON-RPC Provider.

Lightweight alternative to web3.py: uses httpx for HTTP.
Supports chain id queries, read-only contract calls, and the nonce / gas /
raw-send / receipt plumbing the wallet needs.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from ..errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_TIMEOUT = 30.0


def _to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def _from_hex(data: Any, method: str) -> bytes:
    try:
        return bytes.fromhex(data[2:] if data.startswith("0x") else data)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ProviderError(f"RPC returned malformed result ({method}): {data!r}") from exc


def _quantity(result: Any, method: str) -> int:
    """Parse a hex-encoded JSON-RPC quantity."""
    try:
        return int(result, 16)
    except (TypeError, ValueError) as exc:
        raise ProviderError(f"RPC returned malformed result ({method}): {result!r}") from exc


class RpcProvider:
    """JSON-RPC client bound to a single endpoint."""

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self._client = client or httpx.Client(timeout=timeout)
        self._request_id = 0

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RpcProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            ProviderError: On transport failure or a JSON-RPC error object
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": self._request_id,
        }
        logger.debug("RPC -> %s %s", method, params)

        try:
            response = self._client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise ProviderError(f"RPC transport error ({method}): {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"RPC returned invalid JSON ({method}): {exc}") from exc

        if not isinstance(data, dict):
            raise ProviderError(f"RPC returned unexpected payload ({method}): {data!r}")
        if "error" in data:
            raise ProviderError(f"RPC error ({method}): {data['error']}")

        result = data.get("result")
        logger.debug("RPC <- %s %s", method, result)
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_chain_id(self) -> int:
        return _quantity(self.request("eth_chainId", []), "eth_chainId")

    def call(self, address: str, payload: bytes) -> bytes:
        """
        Read from a smart contract (eth_call).

        Args:
            address: 0x-prefixed contract address
            payload: Call data (selector + encoded arguments)

        Returns:
            Raw return data
        """
        result = self.request("eth_call", [{"to": address, "data": _to_hex(payload)}, "latest"])
        if not result:
            return b""
        return _from_hex(result, "eth_call")

    def get_balance(self, address: str) -> int:
        return _quantity(self.request("eth_getBalance", [address, "latest"]), "eth_getBalance")

    def get_nonce(self, address: str) -> int:
        return _quantity(
            self.request("eth_getTransactionCount", [address, "pending"]), "eth_getTransactionCount"
        )

    def get_gas_price(self) -> int:
        return _quantity(self.request("eth_gasPrice", []), "eth_gasPrice")

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        return _quantity(self.request("eth_estimateGas", [tx]), "eth_estimateGas")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def send_raw_transaction(self, raw_tx: bytes) -> str:
        """
        Send a signed raw transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        return self.request("eth_sendRawTransaction", [_to_hex(raw_tx)])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.request("eth_getTransactionReceipt", [tx_hash])

    def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float = 120,
        poll_interval: float = 2.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Raises:
            TimeoutError: If receipt not found within timeout
        """
        start = time.monotonic()
        while True:
            receipt = self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.monotonic() - start >= timeout:
                break
            time.sleep(poll_interval)

        raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")

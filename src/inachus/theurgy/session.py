"""
Session Context - network, signer and contract selection for one run.

The context owns its provider for the lifetime of the session; the
workflow loop is its only user.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..anamnesis.config import SessionConfig
from ..errors import NoContractSelectedError, NoWalletConfiguredError
from ..pneuma.codec import encode_scalar
from ..pneuma.rpc import RpcProvider
from ..pneuma.tx import Wallet
from ..sigil.eth import get_account

logger = logging.getLogger(__name__)


class SessionContext:
    def __init__(
        self,
        rpc_endpoint: str,
        configured_chain_id: int,
        signing_credential: Optional[str] = None,
        confirmation_wait: float = 0.0,
        provider: Optional[RpcProvider] = None,
    ) -> None:
        self.rpc_endpoint = rpc_endpoint
        self.configured_chain_id = configured_chain_id
        self.live_chain_id: Optional[int] = None
        self.signing_credential = signing_credential
        self.confirmation_wait = confirmation_wait
        self.selected_contract_address: Optional[str] = None
        self.provider = provider or RpcProvider(rpc_endpoint)

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        provider: Optional[RpcProvider] = None,
    ) -> "SessionContext":
        return cls(
            rpc_endpoint=config.rpc_url,
            configured_chain_id=config.chain_id,
            signing_credential=config.private_key,
            confirmation_wait=config.confirmation_wait,
            provider=provider,
        )

    def close(self) -> None:
        self.provider.close()

    @property
    def chain_id(self) -> int:
        """Live chain id once reconciled, the configured one before."""
        if self.live_chain_id is not None:
            return self.live_chain_id
        return self.configured_chain_id

    def reconcile_chain_id(self) -> int:
        """
        Ask the endpoint for its chain id and adopt it.

        A mismatch with the configured id is logged, not raised.
        """
        live = self.provider.get_chain_id()
        if live != self.configured_chain_id:
            logger.warning(
                "Chain ID mismatch: configured %s, endpoint %s reports %s; using %s",
                self.configured_chain_id,
                self.rpc_endpoint,
                live,
                live,
            )
        self.live_chain_id = live
        return live

    def select_contract(self, address: str) -> None:
        """
        Make ``address`` the target of subsequent dispatches.

        Raises:
            InvalidAddressError: If the address is malformed or not
                checksummed; the previous selection is kept
        """
        encoded = encode_scalar(address.strip(), "address")
        self.selected_contract_address = encoded.value
        logger.info("Selected contract %s", encoded.value)

    def require_contract(self) -> str:
        if self.selected_contract_address is None:
            raise NoContractSelectedError()
        return self.selected_contract_address

    @property
    def wallet(self) -> Wallet:
        if not self.signing_credential:
            raise NoWalletConfiguredError(
                "No wallet configured: set private_key in config.json or PRIVATE_KEY"
            )
        return Wallet(
            account=get_account(self.signing_credential),
            provider=self.provider,
            chain_id=self.chain_id,
            confirmation_wait=self.confirmation_wait,
        )

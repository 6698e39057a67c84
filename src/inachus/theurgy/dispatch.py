"""
Execution Dispatcher - run one contract method as a call or a transaction.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..pneuma.abi import MethodDescriptor
from ..pneuma.codec import build_calldata, encode_arguments, raw_payload, render_output
from .prompt import Prompter
from .session import SessionContext

logger = logging.getLogger(__name__)

CANCELLED = "Transaction cancelled"

WRITE_WARNING = "Warning: This is a write operation that will modify the blockchain state."


def execute(
    method: MethodDescriptor,
    argument_values: Sequence[str],
    ctx: SessionContext,
    prompter: Prompter,
) -> str:
    """
    Execute ``method`` against the selected contract.

    Read methods go through ``eth_call`` and return the decoded output.
    Write methods require the user's confirmation and a signing key, and
    return the transaction hash.

    Raises:
        InvalidArgumentsError / InvalidAddressError: Bad argument text
        NoContractSelectedError: No contract address selected
        NoWalletConfiguredError: Write without a signing key
        ProviderError: RPC failure
    """
    encoded = encode_arguments(method, argument_values)
    contract_address = ctx.require_contract()
    payload = build_calldata(method, encoded)
    logger.debug("Encoded arguments for %s: 0x%s", method.signature, raw_payload(encoded).hex())

    if method.is_read:
        logger.info("Calling %s on %s", method.signature, contract_address)
        raw = ctx.provider.call(contract_address, payload)
        return render_output(method, raw)

    if not prompter.confirm(f"{WRITE_WARNING}\n{method.signature} on {contract_address}"):
        logger.info("Transaction %s cancelled by user", method.signature)
        return CANCELLED

    wallet = ctx.wallet
    logger.info("Sending %s to %s from %s", method.signature, contract_address, wallet.address)
    tx_hash = wallet.sign_and_send(contract_address, payload)
    return f"Transaction sent: {tx_hash}"

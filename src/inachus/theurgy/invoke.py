"""
Theurgy Invoke - Execute one contract method without the menu loop.

Read methods are called directly; write methods still ask for
confirmation before anything is signed.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from ..errors import ContractNotFoundError, InachusError, MethodNotFoundError, NoContractSelectedError
from ..pneuma.abi import MethodType, get_methods_by_type
from ..pneuma.codec import encode_arguments, encode_scalar
from .common import abort, home_option, load_workspace, network_options
from .dispatch import CANCELLED, execute
from .prompt import ClickPrompter
from .session import SessionContext


@click.command()
@click.argument("contract")
@click.argument("method")
@click.argument("args", nargs=-1)
@click.option("--address", default=None, help="Contract address (default: registered address)")
@home_option
@network_options
def invoke(
    contract: str,
    method: str,
    args: tuple[str, ...],
    address: Optional[str],
    home: Path,
    rpc_url: Optional[str],
    chain_id: Optional[int],
    abi_dir: Optional[Path],
) -> None:
    """
    Execute CONTRACT.METHOD with textual ARGS.

    Arguments use the same syntax as the interactive prompts:
    decimal integers, true/false, 0x-hex bytes, checksummed addresses,
    [a, b] arrays and (a, b) tuples.
    """
    click.echo("=== inachus invoke ===")
    click.echo("")

    try:
        workspace = load_workspace(home, rpc_url=rpc_url, chain_id=chain_id, abi_dir=abi_dir)
        if contract not in workspace.abis:
            raise ContractNotFoundError(f"ABI not found for contract: {contract}")

        methods = get_methods_by_type(workspace.abis[contract], MethodType.ALL)
        if method not in methods:
            raise MethodNotFoundError(f"Method {method} not found in {contract}")

        if address is None:
            try:
                address = workspace.registry.get(contract).address
            except ContractNotFoundError:
                address = None
            if not address:
                raise NoContractSelectedError(
                    f"No address registered for {contract}; pass --address"
                )

        # Argument and address errors are reported before any RPC round-trip
        encode_arguments(methods[method], list(args))
        encode_scalar(address.strip(), "address")
    except InachusError as exc:
        abort(exc)

    descriptor = methods[method]
    click.echo(f"  Target: {contract} @ {address}")
    click.echo(f"  Method: {descriptor.signature} [{descriptor.mutability.value}]")
    click.echo(f"  Args:   {list(args)}")
    click.echo("")

    ctx = SessionContext.from_config(workspace.config)
    try:
        ctx.select_contract(address)
        ctx.reconcile_chain_id()
        result = execute(descriptor, list(args), ctx, ClickPrompter())
    except InachusError as exc:
        abort(exc)
    finally:
        ctx.close()

    if result == CANCELLED:
        click.secho(result, fg="yellow")
        sys.exit(1)

    click.secho("Result:", fg="green")
    click.echo(result)

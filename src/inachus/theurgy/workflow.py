"""
Theurgy Run - the interactive contract workflow.

Each loop iteration asks for one :class:`Step`:

- Change contract:          register an ABI contract name
- Change contract address:  point a registered contract at an address
- Select method:            call or transact against the current contract
- Exit
"""

from __future__ import annotations

import enum
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
from eth_utils import from_wei

from ..anamnesis.registry import ContractRegistry
from ..errors import (
    ContractNotFoundError,
    InachusError,
    MethodNotFoundError,
    NoContractSelectedError,
)
from ..pneuma.abi import MethodDescriptor, MethodType, get_methods_by_type
from ..pneuma.chains import describe_chain, native_symbol
from .common import abort, home_option, load_workspace, network_options
from .dispatch import execute
from .prompt import ClickPrompter, Prompter
from .session import SessionContext

logger = logging.getLogger(__name__)


class Step(enum.Enum):
    CHANGE_CONTRACT = "Change contract"
    CHANGE_CONTRACT_ADDRESS = "Change contract address"
    SELECT_METHOD = "Select method"
    EXIT = "Exit"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def all(cls) -> list["Step"]:
        return list(cls)


class Workflow:
    """Drives the step loop for one session."""

    def __init__(
        self,
        ctx: SessionContext,
        abis: dict[str, list[MethodDescriptor]],
        registry: ContractRegistry,
        prompter: Prompter,
    ) -> None:
        self.ctx = ctx
        self.abis = abis
        self.registry = registry
        self.prompter = prompter

        current = registry.current()
        if current is not None and current.address:
            try:
                ctx.select_contract(current.address)
            except InachusError as exc:
                logger.warning("Ignoring stored address of %s: %s", current.name, exc)

    def run(self) -> int:
        while True:
            step = self.prompter.choose_one("Select an action:", Step.all())
            if step is Step.EXIT:
                return 0
            try:
                self.handle(step)
            except InachusError as exc:
                logger.debug("Step %s failed", step, exc_info=True)
                self.prompter.report_error(exc)

    def handle(self, step: Step) -> None:
        if step is Step.CHANGE_CONTRACT:
            self.change_contract()
        elif step is Step.CHANGE_CONTRACT_ADDRESS:
            self.change_contract_address()
        elif step is Step.SELECT_METHOD:
            self.select_method()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def change_contract(self) -> None:
        if not self.abis:
            raise ContractNotFoundError("No ABI files loaded")
        name = self.prompter.choose_one("Select a contract:", sorted(self.abis))
        self.registry.register(name)
        self.registry.save()
        logger.info("Registered contract %s", name)

    def change_contract_address(self) -> None:
        names = self.registry.names()
        if not names:
            raise ContractNotFoundError("No contract registered; use 'Change contract' first")
        name = self.prompter.choose_one("Select a contract:", names)
        address = self.prompter.read_text("Enter contract address:")

        previous_address = self.ctx.selected_contract_address
        previous_records = [replace(record) for record in self.registry.records]
        self.ctx.select_contract(address)
        try:
            self.registry.set_address(name, self.ctx.selected_contract_address)
            self.registry.save()
        except InachusError:
            # Keep session and registry in step with what is on disk
            self.ctx.selected_contract_address = previous_address
            self.registry.records = previous_records
            raise

    def select_method(self) -> None:
        current = self.registry.current()
        if current is None:
            raise NoContractSelectedError("No contract with an address; set one first")
        if current.name not in self.abis:
            raise ContractNotFoundError(f"ABI not found for contract: {current.name}")
        if self.ctx.selected_contract_address != current.address:
            self.ctx.select_contract(current.address)

        method_type = self.prompter.choose_one("Select method type:", list(MethodType))
        methods = get_methods_by_type(self.abis[current.name], method_type)
        if not methods:
            raise MethodNotFoundError(f"{current.name} has no {method_type} methods")

        name = self.prompter.choose_one("Select a method:", list(methods))
        method = methods.get(name)
        if method is None:
            raise MethodNotFoundError(f"Method {name} not found")

        values = [
            self.prompter.read_text(f"Enter {param.display_name} ({param.abi_type}):")
            for param in method.inputs
        ]
        result = execute(method, values, self.ctx, self.prompter)
        self.prompter.display_result(result)


@click.command()
@home_option
@network_options
def run(home: Path, rpc_url: Optional[str], chain_id: Optional[int], abi_dir: Optional[Path]) -> None:
    """
    Start the interactive contract session.

    Loads ABIs, connects to the RPC endpoint and loops over
    contract / address / method selection until Exit.
    """
    try:
        workspace = load_workspace(home, rpc_url=rpc_url, chain_id=chain_id, abi_dir=abi_dir)
        ctx = SessionContext.from_config(workspace.config)
    except InachusError as exc:
        abort(exc)

    try:
        try:
            live = ctx.reconcile_chain_id()
            wallet = ctx.wallet if ctx.signing_credential else None
            balance = ctx.provider.get_balance(wallet.address) if wallet else 0
        except InachusError as exc:
            abort(exc)

        click.echo(f"  RPC:       {ctx.rpc_endpoint}")
        click.echo(f"  Chain:     {describe_chain(live, workspace.chains)}")
        click.echo(f"  ABIs:      {len(workspace.abis)} loaded from {workspace.config.abi_dir}")
        if wallet is not None:
            symbol = native_symbol(live, workspace.chains)
            click.echo(f"  Wallet:    {wallet.address} ({from_wei(balance, 'ether')} {symbol})")
        else:
            click.echo(click.style("  Wallet:    not configured (read-only)", fg="yellow"))

        workflow = Workflow(ctx, workspace.abis, workspace.registry, ClickPrompter())
        workflow.run()
    except click.Abort:
        click.echo()
    finally:
        ctx.close()

    click.echo("Bye.")

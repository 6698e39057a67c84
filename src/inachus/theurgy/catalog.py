"""
Theurgy Catalog - list loaded contracts and their methods.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..errors import ContractNotFoundError, InachusError
from ..pneuma.abi import MethodMutability, MethodType, get_methods_by_type
from ..utils import pad_right_ansi_aware
from .common import abort, home_option, load_workspace

METHOD_TYPES = {t.value.lower(): t for t in MethodType}


@click.command()
@home_option
@click.option("--abi-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
def contracts(home: Path, abi_dir: Optional[Path]) -> None:
    """List ABI contracts and registered addresses."""
    try:
        workspace = load_workspace(home, abi_dir=abi_dir)
    except InachusError as exc:
        abort(exc)

    current = workspace.registry.current()
    names = sorted(set(workspace.abis) | set(workspace.registry.names()))
    if not names:
        click.echo("No contracts found.")
        return

    width = max(len(name) for name in names) + 2
    for name in names:
        marker = click.style("*", fg="green") if current and current.name == name else " "
        try:
            address = workspace.registry.get(name).address or click.style("(no address)", dim=True)
        except ContractNotFoundError:
            address = click.style("(not registered)", dim=True)
        label = click.style(name, fg="bright_white", bold=True)
        if name not in workspace.abis:
            label = click.style(name, fg="yellow") + click.style(" (ABI missing)", dim=True)
        click.echo(f" {marker} {pad_right_ansi_aware(label, width)} {address}")


@click.command()
@click.argument("contract")
@click.option(
    "--type",
    "method_type",
    type=click.Choice(sorted(METHOD_TYPES)),
    default="all",
    show_default=True,
    help="Filter by effect",
)
@home_option
@click.option("--abi-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
def methods(contract: str, method_type: str, home: Path, abi_dir: Optional[Path]) -> None:
    """List the methods of CONTRACT."""
    try:
        workspace = load_workspace(home, abi_dir=abi_dir)
        if contract not in workspace.abis:
            raise ContractNotFoundError(f"ABI not found for contract: {contract}")
    except InachusError as exc:
        abort(exc)

    selected = get_methods_by_type(workspace.abis[contract], METHOD_TYPES[method_type])
    if not selected:
        click.echo(f"No {method_type} methods.")
        return

    for method in selected.values():
        colour = "cyan" if method.mutability is MethodMutability.READ else "magenta"
        tag = click.style(f"[{method.state_mutability}]", fg=colour)
        outputs = ",".join(p.abi_type for p in method.outputs)
        suffix = click.style(f" -> ({outputs})", dim=True) if outputs else ""
        click.echo(f"  {pad_right_ansi_aware(tag, 14)} {method.signature}{suffix}")

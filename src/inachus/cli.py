"""
inachus CLI

Command-line interface for interacting with deployed contracts through
their ABIs.

Commands:
  init       - Create the session configuration
  run        - Interactive contract session
  invoke     - Execute one contract method
  contracts  - List ABI contracts and registered addresses
  methods    - List the methods of a contract
  info       - Show configuration, wallet and chain
  whoami     - Show the signing address
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from .anamnesis.config import CONFIG_FILENAME, SessionConfig
from .anamnesis.registry import REGISTRY_FILENAME, ContractRegistry
from .errors import InachusError
from .pneuma.chains import describe_chain
from .sigil.eth import ENV_FILENAME, get_address, save_private_key
from .theurgy.common import abort, home_option, load_chains, load_config
from . import validation


# ============ Constants ============

VERSION = "0.3.0"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ============ Banner ============


def _print_banner() -> None:
    border = click.style("  ◆ ═══════════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo(
        click.style("        I N A C H U S", fg="bright_white", bold=True)
        + click.style(f"      v{VERSION}", dim=True)
    )
    click.secho("        ─── ABI contract console ───", fg="cyan")
    click.echo(border)
    click.echo()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(os.environ.get("INACHUS_LOG", "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="inachus")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """inachus: ABI-driven contract console."""
    _setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.workflow import run
from .theurgy.invoke import invoke
from .theurgy.catalog import contracts, methods

cli.add_command(run)
cli.add_command(invoke)
cli.add_command(contracts)
cli.add_command(methods)


# ============ Setup ============


def _validated(check, value):
    try:
        check(value)
    except InachusError as exc:
        raise click.BadParameter(str(exc)) from exc
    return value


@cli.command()
@home_option
@click.option("--force", is_flag=True, help="Overwrite an existing configuration")
def init(home: Path, force: bool) -> None:
    """Create the session configuration interactively."""
    config_path = home / CONFIG_FILENAME
    if config_path.exists() and not force:
        click.echo(f"Configuration already exists: {config_path}")
        click.echo("Use --force to overwrite it.")
        sys.exit(1)

    defaults = SessionConfig()
    config = SessionConfig(
        abi_dir=click.prompt("ABI directory", default=defaults.abi_dir),
        rpc_url=click.prompt(
            "RPC URL",
            default=defaults.rpc_url,
            value_proc=lambda v: _validated(validation.validate_rpc_url, v),
        ),
        chain_id=click.prompt(
            "Chain ID",
            default=defaults.chain_id,
            type=click.IntRange(min=1),
        ),
        wait_time=click.prompt(
            "Transaction wait time",
            default=defaults.wait_time,
            value_proc=lambda v: _validated(validation.validate_wait_time, v),
        ),
    )

    private_key = click.prompt(
        "Private key (leave empty for read-only)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    try:
        if private_key:
            validation.validate_private_key(private_key)
            env_path = save_private_key(private_key, home / ENV_FILENAME)
            click.echo(f"  Key saved:    {env_path}")
        config.save(config_path)
        registry_path = home / REGISTRY_FILENAME
        if not registry_path.exists():
            ContractRegistry(path=registry_path).save()
    except InachusError as exc:
        abort(exc)

    click.echo(f"  Config saved: {config_path}")
    Path(config.abi_dir).mkdir(parents=True, exist_ok=True)
    click.secho("Ready. Drop ABI files into the ABI directory and run 'inachus run'.", fg="green")


# ============ Identity ============


@cli.command()
@home_option
def whoami(home: Path) -> None:
    """Show the signing address."""
    try:
        config = load_config(home)
    except InachusError as exc:
        abort(exc)

    if not config.private_key:
        click.echo("No wallet configured.")
        click.echo("Set PRIVATE_KEY or run 'inachus init'.")
        sys.exit(1)
    click.echo(f"Address: {get_address(config.private_key)}")


# ============ Info ============


@cli.command()
@home_option
def info(home: Path) -> None:
    """Show configuration, wallet and chain."""
    _print_banner()

    try:
        config = load_config(home)
        chains = load_chains(home)
    except InachusError as exc:
        abort(exc)

    click.secho("  Configuration ──────────────────────", fg="cyan")
    click.echo()

    rows = [
        ("Home", str(home)),
        ("ABI dir", config.abi_dir),
        ("RPC URL", config.rpc_url),
        ("Chain", describe_chain(config.chain_id, chains)),
        ("Wait time", config.wait_time),
    ]
    for label, value in rows:
        click.echo(
            click.style(f"  {label + ':':<12}", dim=True)
            + click.style(value, fg="bright_white")
        )

    if config.private_key:
        wallet = click.style(get_address(config.private_key), fg="bright_white")
    else:
        wallet = click.style("not configured", fg="yellow") + click.style(
            "  (run: inachus init)", dim=True
        )
    click.echo(click.style(f"  {'Wallet:':<12}", dim=True) + wallet)
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """inachus CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()

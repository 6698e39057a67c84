"""
Shared startup plumbing for the command implementations.

Every command resolves the same home directory, configuration, ABI
catalog and contract registry; failures here are fatal for the command.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, NoReturn, Optional

import click

from ..anamnesis.config import CONFIG_FILENAME, SessionConfig
from ..anamnesis.registry import REGISTRY_FILENAME, ContractRegistry
from ..errors import InachusError
from ..pneuma.abi import MethodDescriptor, load_abis
from ..pneuma.chains import ChainInfo, parse_chains_json
from ..sigil.eth import ENV_FILENAME, INACHUS_DIR, load_private_key

CHAINS_FILENAME = "chains.json"


def home_option(func: Callable) -> Callable:
    return click.option(
        "--home",
        type=click.Path(file_okay=False, path_type=Path),
        default=INACHUS_DIR,
        envvar="INACHUS_HOME",
        show_default=True,
        help="Directory holding config.json, contracts.json and .env",
    )(func)


def network_options(func: Callable) -> Callable:
    func = click.option(
        "--abi-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        envvar="INACHUS_ABI_DIR",
        help="ABI directory (overrides config)",
    )(func)
    func = click.option(
        "--chain-id",
        type=int,
        default=None,
        envvar="INACHUS_CHAIN_ID",
        help="Expected chain ID (overrides config)",
    )(func)
    func = click.option(
        "--rpc-url",
        default=None,
        envvar="INACHUS_RPC_URL",
        help="JSON-RPC endpoint (overrides config)",
    )(func)
    return func


def abort(exc: InachusError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


@dataclass
class Workspace:
    home: Path
    config: SessionConfig
    abis: dict[str, list[MethodDescriptor]]
    registry: ContractRegistry
    chains: list[ChainInfo]


def load_config(
    home: Path,
    rpc_url: Optional[str] = None,
    chain_id: Optional[int] = None,
    abi_dir: Optional[Path] = None,
) -> SessionConfig:
    """
    Load ``config.json`` with command-line overrides applied and the
    signing key resolved.

    Raises:
        ConfigError: If the file is unreadable or a field is invalid
    """
    config = SessionConfig.load(home / CONFIG_FILENAME)
    if rpc_url:
        config.rpc_url = rpc_url
    if chain_id is not None:
        config.chain_id = chain_id
    if abi_dir is not None:
        config.abi_dir = str(abi_dir)
    if config.private_key is None:
        config.private_key = load_private_key(home / ENV_FILENAME)
    config.validate()
    return config


def load_chains(home: Path) -> list[ChainInfo]:
    path = home / CHAINS_FILENAME
    if not path.exists():
        return []
    return parse_chains_json(path)


def load_workspace(
    home: Path,
    rpc_url: Optional[str] = None,
    chain_id: Optional[int] = None,
    abi_dir: Optional[Path] = None,
) -> Workspace:
    """
    Raises:
        ConfigError: Unreadable config, registry or chains file
        InvalidAbiError: Missing ABI directory or malformed ABI file
    """
    config = load_config(home, rpc_url=rpc_url, chain_id=chain_id, abi_dir=abi_dir)
    return Workspace(
        home=home,
        config=config,
        abis=load_abis(Path(config.abi_dir)),
        registry=ContractRegistry.load(home / REGISTRY_FILENAME),
        chains=load_chains(home),
    )

"""
Chain metadata in the chainid.network ``chains.json`` format.

The file is optional; when present it lets the CLI print a network name
next to a bare chain id.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from ..errors import ChainNotFoundError, ConfigError


@dataclass(frozen=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class ChainInfo:
    name: str
    chain_id: int
    short_name: str
    network_id: int
    native_currency: NativeCurrency
    rpc: list[str] = field(default_factory=list)
    faucets: list[str] = field(default_factory=list)
    info_url: str = ""

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ChainInfo":
        currency = payload["nativeCurrency"]
        return cls(
            name=payload["name"],
            chain_id=int(payload["chainId"]),
            short_name=payload["shortName"],
            network_id=int(payload["networkId"]),
            native_currency=NativeCurrency(
                name=currency["name"],
                symbol=currency["symbol"],
                decimals=int(currency["decimals"]),
            ),
            rpc=list(payload.get("rpc", [])),
            faucets=list(payload.get("faucets", [])),
            info_url=payload.get("infoURL", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "chainId": self.chain_id,
            "shortName": self.short_name,
            "networkId": self.network_id,
            "nativeCurrency": {
                "name": self.native_currency.name,
                "symbol": self.native_currency.symbol,
                "decimals": self.native_currency.decimals,
            },
            "rpc": self.rpc,
            "faucets": self.faucets,
            "infoURL": self.info_url,
        }


def parse_chains_json(path: Path) -> list[ChainInfo]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return [ChainInfo.from_dict(entry) for entry in payload]
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to read chain info file {path}: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Malformed chain info in {path}: {exc}") from exc


def get_by_id(chains: Sequence[ChainInfo], chain_id: int) -> ChainInfo:
    for info in chains:
        if info.chain_id == chain_id:
            return info
    raise ChainNotFoundError(chain_id)


def native_symbol(chain_id: int, chains: Sequence[ChainInfo] = (), default: str = "ETH") -> str:
    try:
        return get_by_id(chains, chain_id).native_currency.symbol
    except ChainNotFoundError:
        return default


def describe_chain(chain_id: int, chains: Sequence[ChainInfo] = ()) -> str:
    try:
        return f"{get_by_id(chains, chain_id).name} ({chain_id})"
    except ChainNotFoundError:
        return str(chain_id)

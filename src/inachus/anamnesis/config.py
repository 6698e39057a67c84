"""
Session configuration persisted as ``<home>/config.json``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

from ..errors import ConfigError, InvalidConfigError
from ..utils import load_json, parse_duration, write_json
from .. import validation

CONFIG_FILENAME = "config.json"

_TEXT_FIELDS = ("abi_dir", "rpc_url", "private_key", "wait_time")
_OPTIONAL_FIELDS = ("private_key",)


@dataclass
class SessionConfig:
    """
    Startup configuration for an interactive session.

    Attributes:
        abi_dir: Directory containing ABI files
        rpc_url: JSON-RPC endpoint
        private_key: Optional signing key (falls back to PRIVATE_KEY)
        chain_id: Expected chain id; reconciled against the endpoint
        wait_time: How long to wait for a transaction receipt ("0s" to skip)
    """

    abi_dir: str = "./abis"
    rpc_url: str = "http://localhost:8545"
    private_key: Optional[str] = None
    chain_id: int = 1
    wait_time: str = "30s"

    @property
    def confirmation_wait(self) -> float:
        return parse_duration(self.wait_time)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SessionConfig":
        if not isinstance(payload, dict):
            raise ConfigError("Configuration must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        for name in _TEXT_FIELDS:
            value = payload.get(name, "")
            if not isinstance(value, str) and not (name in _OPTIONAL_FIELDS and value is None):
                raise InvalidConfigError(
                    f"Configuration field {name} must be a string, got {value!r}", field=name
                )
        config = cls(**payload)
        try:
            config.chain_id = int(config.chain_id)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid chain ID: {config.chain_id}") from exc
        return config

    @classmethod
    def load(cls, path: Path) -> "SessionConfig":
        """
        Load configuration, falling back to defaults when the file is absent.

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        if not path.exists():
            return cls()
        try:
            payload = load_json(path)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read configuration {path}: {exc}") from exc
        return cls.from_dict(payload)

    def save(self, path: Path) -> None:
        payload = asdict(self)
        if payload["private_key"] is None:
            del payload["private_key"]
        try:
            write_json(path, payload)
        except OSError as exc:
            raise ConfigError(f"Failed to write configuration {path}: {exc}") from exc

    def validate(self) -> None:
        validation.validate_rpc_url(self.rpc_url)
        validation.validate_chain_id(self.chain_id)
        validation.validate_wait_time(self.wait_time)
        if self.private_key is not None:
            validation.validate_private_key(self.private_key)

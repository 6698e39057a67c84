"""
Contract Registry - which contracts the user works with, and where.

Persisted as ``<home>/contracts.json``: an ordered list of
``{"name": ..., "address": ...}`` records. The current contract is the
first record that has an address; records touched by the user move to the
front.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..errors import ConfigError, ContractNotFoundError, InachusError
from ..utils import load_json, write_json
from .. import validation

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "contracts.json"


@dataclass
class ContractRecord:
    name: str
    address: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"name": self.name, "address": self.address}


@dataclass
class ContractRegistry:
    path: Path
    records: list[ContractRecord] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "ContractRegistry":
        """
        Load the registry, starting empty when the file is absent.

        Records with an invalid name are dropped with a warning.

        Raises:
            ConfigError: If the file exists but is not a JSON list of records
        """
        if not path.exists():
            return cls(path=path)

        try:
            payload = load_json(path)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read contract registry {path}: {exc}") from exc
        if not isinstance(payload, list):
            raise ConfigError(f"Contract registry {path} must be a JSON list")

        records = []
        for entry in payload:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                raise ConfigError(f"Malformed contract registry entry: {entry!r}")
            try:
                validation.validate_contract_name(entry["name"])
            except InachusError as exc:
                logger.warning("Skipping registry entry %r: %s", entry["name"], exc)
                continue
            address = entry.get("address") or None
            if address is not None:
                try:
                    validation.validate_address(address)
                except InachusError as exc:
                    logger.warning("Dropping stored address of %s: %s", entry["name"], exc)
                    address = None
            records.append(ContractRecord(name=entry["name"], address=address))
        return cls(path=path, records=records)

    def save(self) -> None:
        try:
            write_json(self.path, [record.to_dict() for record in self.records])
        except OSError as exc:
            raise ConfigError(f"Failed to write contract registry {self.path}: {exc}") from exc

    def names(self) -> list[str]:
        return [record.name for record in self.records]

    def get(self, name: str) -> ContractRecord:
        for record in self.records:
            if record.name == name:
                return record
        raise ContractNotFoundError(f"Contract not registered: {name}")

    def current(self) -> Optional[ContractRecord]:
        """First record with an address, if any."""
        for record in self.records:
            if record.address:
                return record
        return None

    def _move_to_front(self, record: ContractRecord) -> None:
        self.records.remove(record)
        self.records.insert(0, record)

    def register(self, name: str) -> ContractRecord:
        """Add ``name`` (or move an existing record) to the front."""
        validation.validate_contract_name(name)
        try:
            record = self.get(name)
        except ContractNotFoundError:
            record = ContractRecord(name=name)
            self.records.insert(0, record)
            return record
        self._move_to_front(record)
        return record

    def set_address(self, name: str, address: str) -> ContractRecord:
        record = self.get(name)
        record.address = address
        self._move_to_front(record)
        return record

"""
ABI Catalog - Loads contract ABIs and models their callable methods.

ABI files live in a single directory (``./abis`` by default). Each
``*.abi`` or ``*.json`` file holds either a bare ABI list or a compiler
artifact with an ``"abi"`` key; the file stem becomes the contract name.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from eth_utils import function_signature_to_4byte_selector

from ..errors import InvalidAbiError

logger = logging.getLogger(__name__)

ABI_SUFFIXES = (".abi", ".json")


class MethodMutability(enum.Enum):
    READ = "read"
    WRITE = "write"

    @classmethod
    def from_state_mutability(cls, state_mutability: str) -> "MethodMutability":
        if state_mutability in ("view", "pure"):
            return cls.READ
        return cls.WRITE


class MethodType(enum.Enum):
    """Filter applied when listing a contract's methods."""

    READ = "Read"
    WRITE = "Write"
    ALL = "All"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParameterSpec:
    type_tag: str
    name: str = ""
    components: tuple["ParameterSpec", ...] = ()

    @property
    def abi_type(self) -> str:
        """Canonical type string, with tuples expanded to ``(t1,t2,...)``."""
        if self.type_tag.startswith("tuple"):
            inner = ",".join(c.abi_type for c in self.components)
            return f"({inner}){self.type_tag[len('tuple'):]}"
        return self.type_tag

    @property
    def display_name(self) -> str:
        return self.name or "unnamed"

    @classmethod
    def from_abi(cls, entry: dict[str, Any]) -> "ParameterSpec":
        if not isinstance(entry, dict) or not isinstance(entry.get("type"), str):
            raise InvalidAbiError(f"Malformed ABI parameter: {entry!r}")
        components = tuple(cls.from_abi(c) for c in entry.get("components") or [])
        return cls(type_tag=entry["type"], name=entry.get("name") or "", components=components)


@dataclass(frozen=True)
class MethodDescriptor:
    name: str
    mutability: MethodMutability
    inputs: tuple[ParameterSpec, ...] = ()
    outputs: tuple[ParameterSpec, ...] = ()
    state_mutability: str = "nonpayable"

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(p.abi_type for p in self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    @property
    def is_read(self) -> bool:
        return self.mutability is MethodMutability.READ

    @classmethod
    def from_abi(cls, entry: dict[str, Any]) -> "MethodDescriptor":
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidAbiError(f"ABI function entry without a name: {entry!r}")

        state_mutability = entry.get("stateMutability")
        if state_mutability is None:
            # Pre-0.4.16 ABIs only carry constant/payable flags
            if entry.get("constant"):
                state_mutability = "view"
            elif entry.get("payable"):
                state_mutability = "payable"
            else:
                state_mutability = "nonpayable"

        return cls(
            name=name,
            mutability=MethodMutability.from_state_mutability(state_mutability),
            inputs=tuple(ParameterSpec.from_abi(p) for p in entry.get("inputs") or []),
            outputs=tuple(ParameterSpec.from_abi(p) for p in entry.get("outputs") or []),
            state_mutability=state_mutability,
        )


def parse_abi(abi: list[dict[str, Any]]) -> list[MethodDescriptor]:
    """
    Extract the callable methods of an ABI, in declaration order.

    Non-function entries (events, errors, constructor, fallback) are skipped.

    Raises:
        InvalidAbiError: If the ABI is not a list of objects or a function
            entry is malformed
    """
    if not isinstance(abi, list):
        raise InvalidAbiError("ABI must be a JSON list")

    methods = []
    for entry in abi:
        if not isinstance(entry, dict):
            raise InvalidAbiError(f"Malformed ABI entry: {entry!r}")
        if entry.get("type", "function") == "function":
            methods.append(MethodDescriptor.from_abi(entry))
    return methods


def load_abi_file(path: Path) -> list[MethodDescriptor]:
    """
    Load one ABI file.

    Args:
        path: ``.abi``/``.json`` file holding an ABI list or an artifact
            object with an ``abi`` key

    Returns:
        Methods declared by the ABI

    Raises:
        InvalidAbiError: If the file cannot be read or parsed
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidAbiError(f"Failed to parse ABI {path.name}: {exc}") from exc

    if isinstance(payload, dict):
        if "abi" not in payload:
            raise InvalidAbiError(f"Failed to parse ABI {path.name}: no 'abi' key")
        payload = payload["abi"]

    try:
        return parse_abi(payload)
    except InvalidAbiError as exc:
        raise InvalidAbiError(f"Failed to parse ABI {path.name}: {exc}") from exc


def load_abis(abi_dir: Path) -> dict[str, list[MethodDescriptor]]:
    """
    Load every ABI file of a directory.

    Args:
        abi_dir: Directory containing ``*.abi`` / ``*.json`` files

    Returns:
        Map of contract name (file stem) to its methods, sorted by name

    Raises:
        InvalidAbiError: If the directory is missing or any file is malformed
    """
    if not abi_dir.is_dir():
        raise InvalidAbiError(f"ABI directory not found: {abi_dir}")

    abis: dict[str, list[MethodDescriptor]] = {}
    for path in sorted(abi_dir.iterdir()):
        if path.is_file() and path.suffix in ABI_SUFFIXES:
            if path.stem in abis:
                logger.warning("Duplicate ABI for %s, using %s", path.stem, path.name)
            abis[path.stem] = load_abi_file(path)
            logger.debug("Loaded %d methods from %s", len(abis[path.stem]), path.name)
    return abis


def get_methods_by_type(
    methods: Iterable[MethodDescriptor], method_type: MethodType
) -> dict[str, MethodDescriptor]:
    """
    Partition methods by effect.

    Read holds view/pure methods, Write everything else and All both.
    Overloaded names collapse to the last declaration.
    """
    read_methods: dict[str, MethodDescriptor] = {}
    write_methods: dict[str, MethodDescriptor] = {}
    all_methods: dict[str, MethodDescriptor] = {}

    for method in methods:
        if method.is_read:
            read_methods[method.name] = method
        else:
            write_methods[method.name] = method
        all_methods[method.name] = method

    if method_type is MethodType.READ:
        return read_methods
    if method_type is MethodType.WRITE:
        return write_methods
    return all_methods

from __future__ import annotations

import json
from pathlib import Path

import pytest

from inachus.pneuma.abi import MethodDescriptor, parse_abi
from inachus.theurgy.session import SessionContext

from _fakes import TOKEN_ABI, FakeProvider


@pytest.fixture()
def token_methods() -> dict[str, MethodDescriptor]:
    return {m.name: m for m in parse_abi(TOKEN_ABI)}


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider(chain_id=1)


@pytest.fixture()
def ctx(provider: FakeProvider) -> SessionContext:
    return SessionContext(
        rpc_endpoint="http://localhost:8545",
        configured_chain_id=1,
        provider=provider,
    )


@pytest.fixture()
def abi_dir(tmp_path: Path) -> Path:
    """A directory with one bare ABI file and one compiler artifact."""
    directory = tmp_path / "abis"
    directory.mkdir()
    (directory / "Token.abi").write_text(json.dumps(TOKEN_ABI), encoding="utf-8")
    (directory / "Vault.json").write_text(
        json.dumps(
            {
                "abi": [
                    {
                        "type": "function",
                        "name": "totalAssets",
                        "inputs": [],
                        "outputs": [{"name": "", "type": "uint256"}],
                        "stateMutability": "view",
                    }
                ],
                "bytecode": {"object": "0x"},
            }
        ),
        encoding="utf-8",
    )
    return directory


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep .env loading and INACHUS_* overrides from leaking between tests."""
    for name in (
        "PRIVATE_KEY",
        "INACHUS_HOME",
        "INACHUS_RPC_URL",
        "INACHUS_CHAIN_ID",
        "INACHUS_ABI_DIR",
        "INACHUS_LOG",
    ):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

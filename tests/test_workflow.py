"""Scripted runs of the interactive workflow."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from eth_abi import encode

from inachus.anamnesis.registry import ContractRecord, ContractRegistry
from inachus.errors import (
    ConfigError,
    ContractNotFoundError,
    InvalidAddressError,
    MethodNotFoundError,
    NoContractSelectedError,
)
from inachus.pneuma.abi import MethodType, load_abis
from inachus.theurgy.dispatch import CANCELLED
from inachus.theurgy.workflow import Step, Workflow

from _fakes import ADDRESS_A, ADDRESS_B, PRIVATE_KEY, TX_HASH, ScriptedPrompter


@pytest.fixture()
def registry(tmp_path: Path) -> ContractRegistry:
    return ContractRegistry(path=tmp_path / "contracts.json")


def _workflow(ctx, abi_dir: Path, registry: ContractRegistry, prompter: ScriptedPrompter) -> Workflow:
    return Workflow(ctx, load_abis(abi_dir), registry, prompter)


def test_steps_are_listed_in_order() -> None:
    assert [str(s) for s in Step.all()] == [
        "Change contract",
        "Change contract address",
        "Select method",
        "Exit",
    ]


def test_exit_immediately(ctx, abi_dir, registry, provider) -> None:
    prompter = ScriptedPrompter(choices=[Step.EXIT])
    assert _workflow(ctx, abi_dir, registry, prompter).run() == 0
    assert provider.calls == []


def test_full_read_session(ctx, abi_dir, registry, provider) -> None:
    provider.call_result = encode(["uint256"], [500])
    prompter = ScriptedPrompter(
        choices=[
            Step.CHANGE_CONTRACT,
            "Token",
            Step.CHANGE_CONTRACT_ADDRESS,
            "Token",
            Step.SELECT_METHOD,
            MethodType.READ,
            "balanceOf",
            Step.EXIT,
        ],
        texts=[ADDRESS_A, ADDRESS_B],
    )

    assert _workflow(ctx, abi_dir, registry, prompter).run() == 0

    assert prompter.results == ["500"]
    assert prompter.errors == []
    assert "Enter account (address):" in prompter.labels
    assert ctx.selected_contract_address == ADDRESS_A
    assert provider.network_calls() == ["call"]

    saved = json.loads(registry.path.read_text(encoding="utf-8"))
    assert saved == [{"name": "Token", "address": ADDRESS_A}]


def test_write_cancelled(ctx, abi_dir, registry, provider) -> None:
    ctx.signing_credential = PRIVATE_KEY
    registry.register("Token")
    registry.set_address("Token", ADDRESS_A)
    prompter = ScriptedPrompter(
        choices=[Step.SELECT_METHOD, MethodType.WRITE, "transfer", Step.EXIT],
        texts=[ADDRESS_B, "1"],
        confirmations=[False],
    )

    _workflow(ctx, abi_dir, registry, prompter).run()

    assert prompter.results == [CANCELLED]
    assert provider.calls == []


def test_write_confirmed(ctx, abi_dir, registry, provider) -> None:
    ctx.signing_credential = PRIVATE_KEY
    registry.register("Token")
    registry.set_address("Token", ADDRESS_A)
    prompter = ScriptedPrompter(
        choices=[Step.SELECT_METHOD, MethodType.ALL, "transfer", Step.EXIT],
        texts=[ADDRESS_B, "1"],
        confirmations=[True],
    )

    _workflow(ctx, abi_dir, registry, prompter).run()

    assert prompter.results == [f"Transaction sent: {TX_HASH}"]
    assert len(provider.sent) == 1


def test_stored_address_is_selected_on_start(ctx, abi_dir, registry) -> None:
    registry.register("Vault")
    registry.set_address("Vault", ADDRESS_B)
    _workflow(ctx, abi_dir, registry, ScriptedPrompter())
    assert ctx.selected_contract_address == ADDRESS_B


def test_errors_are_reported_and_loop_continues(ctx, abi_dir, registry, provider) -> None:
    registry.register("Token")
    prompter = ScriptedPrompter(
        choices=[
            Step.SELECT_METHOD,
            Step.CHANGE_CONTRACT_ADDRESS,
            "Token",
            Step.EXIT,
        ],
        texts=[ADDRESS_A.lower()],
    )

    assert _workflow(ctx, abi_dir, registry, prompter).run() == 0

    assert [type(e) for e in prompter.errors] == [NoContractSelectedError, InvalidAddressError]
    assert registry.get("Token").address is None
    assert ctx.selected_contract_address is None


def test_failed_registry_save_rolls_back_selection(ctx, abi_dir, tmp_path) -> None:
    unwritable = tmp_path / "registry-dir"
    unwritable.mkdir()
    registry = ContractRegistry(path=unwritable)
    registry.register("Token")
    registry.set_address("Token", ADDRESS_A)
    registry.register("Vault")
    prompter = ScriptedPrompter(
        choices=[Step.CHANGE_CONTRACT_ADDRESS, "Vault", Step.EXIT],
        texts=[ADDRESS_B],
    )
    workflow = _workflow(ctx, abi_dir, registry, prompter)
    assert ctx.selected_contract_address == ADDRESS_A

    workflow.run()

    assert [type(e) for e in prompter.errors] == [ConfigError]
    assert ctx.selected_contract_address == ADDRESS_A
    assert registry.records == [ContractRecord("Vault"), ContractRecord("Token", ADDRESS_A)]
    assert registry.current().address == ADDRESS_A


def test_bad_argument_is_reported(ctx, abi_dir, registry, provider) -> None:
    registry.register("Token")
    registry.set_address("Token", ADDRESS_A)
    prompter = ScriptedPrompter(
        choices=[Step.SELECT_METHOD, MethodType.READ, "balanceOf", Step.EXIT],
        texts=["not-an-address"],
    )

    _workflow(ctx, abi_dir, registry, prompter).run()

    assert isinstance(prompter.errors[0], InvalidAddressError)
    assert provider.calls == []


def test_change_address_requires_registered_contract(ctx, abi_dir, registry) -> None:
    workflow = _workflow(ctx, abi_dir, registry, ScriptedPrompter())
    with pytest.raises(ContractNotFoundError):
        workflow.change_contract_address()


def test_contract_without_abi(ctx, abi_dir, registry) -> None:
    registry.register("Gone")
    registry.set_address("Gone", ADDRESS_A)
    workflow = _workflow(ctx, abi_dir, registry, ScriptedPrompter())
    with pytest.raises(ContractNotFoundError, match="Gone"):
        workflow.select_method()


def test_no_methods_of_requested_type(ctx, abi_dir, registry) -> None:
    registry.register("Vault")
    registry.set_address("Vault", ADDRESS_A)
    workflow = _workflow(ctx, abi_dir, registry, ScriptedPrompter(choices=[MethodType.WRITE]))
    with pytest.raises(MethodNotFoundError):
        workflow.select_method()


def test_select_method_follows_current_record(ctx, abi_dir, registry, provider) -> None:
    provider.call_result = encode(["uint256"], [9])
    registry.register("Token")
    registry.set_address("Token", ADDRESS_A)
    workflow = _workflow(ctx, abi_dir, registry, ScriptedPrompter())

    registry.register("Vault")
    registry.set_address("Vault", ADDRESS_B)
    workflow.prompter = ScriptedPrompter(choices=[MethodType.READ, "totalAssets"])
    workflow.select_method()

    assert ctx.selected_contract_address == ADDRESS_B
    assert workflow.prompter.results == ["9"]

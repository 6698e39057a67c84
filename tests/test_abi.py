"""Unit tests for the ABI catalog and method classifier."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from inachus.errors import InvalidAbiError
from inachus.pneuma.abi import (
    MethodDescriptor,
    MethodMutability,
    MethodType,
    ParameterSpec,
    get_methods_by_type,
    load_abi_file,
    load_abis,
    parse_abi,
)

from _fakes import TOKEN_ABI


class TestParseAbi:
    def test_skips_non_function_entries(self) -> None:
        names = [m.name for m in parse_abi(TOKEN_ABI)]
        assert names == ["balanceOf", "name", "transfer", "deposit"]

    def test_mutability_from_state_mutability(self) -> None:
        methods = {m.name: m for m in parse_abi(TOKEN_ABI)}
        assert methods["balanceOf"].mutability is MethodMutability.READ
        assert methods["name"].is_read
        assert methods["transfer"].mutability is MethodMutability.WRITE
        assert methods["deposit"].mutability is MethodMutability.WRITE

    def test_pure_is_read(self) -> None:
        (method,) = parse_abi([{"type": "function", "name": "f", "stateMutability": "pure"}])
        assert method.is_read

    def test_legacy_constant_flag(self) -> None:
        methods = parse_abi(
            [
                {"type": "function", "name": "a", "constant": True, "inputs": [], "outputs": []},
                {"type": "function", "name": "b", "payable": True, "inputs": [], "outputs": []},
                {"type": "function", "name": "c", "inputs": [], "outputs": []},
            ]
        )
        assert [m.state_mutability for m in methods] == ["view", "payable", "nonpayable"]
        assert [m.is_read for m in methods] == [True, False, False]

    def test_signature_and_selector(self) -> None:
        methods = {m.name: m for m in parse_abi(TOKEN_ABI)}
        assert methods["transfer"].signature == "transfer(address,uint256)"
        assert methods["transfer"].selector.hex() == "a9059cbb"
        assert methods["balanceOf"].selector.hex() == "70a08231"

    def test_tuple_components(self) -> None:
        (method,) = parse_abi(
            [
                {
                    "type": "function",
                    "name": "configure",
                    "stateMutability": "nonpayable",
                    "inputs": [
                        {
                            "name": "cfg",
                            "type": "tuple",
                            "components": [
                                {"name": "limit", "type": "uint256"},
                                {"name": "owner", "type": "address"},
                            ],
                        }
                    ],
                    "outputs": [],
                }
            ]
        )
        assert method.signature == "configure((uint256,address))"

    @pytest.mark.parametrize(
        "abi",
        [
            {"type": "function"},
            [42],
            [{"type": "function", "inputs": []}],
            [{"type": "function", "name": "f", "inputs": [{"name": "x"}]}],
        ],
    )
    def test_malformed(self, abi) -> None:
        with pytest.raises(InvalidAbiError):
            parse_abi(abi)


class TestParameterSpec:
    def test_display_name(self) -> None:
        assert ParameterSpec("uint256", "amount").display_name == "amount"
        assert ParameterSpec("uint256").display_name == "unnamed"

    def test_tuple_array_abi_type(self) -> None:
        param = ParameterSpec("tuple[]", components=(ParameterSpec("bool"),))
        assert param.abi_type == "(bool)[]"


class TestLoadAbis:
    def test_loads_bare_lists_and_artifacts(self, abi_dir: Path) -> None:
        abis = load_abis(abi_dir)
        assert list(abis) == ["Token", "Vault"]
        assert [m.name for m in abis["Vault"]] == ["totalAssets"]

    def test_ignores_other_files(self, abi_dir: Path) -> None:
        (abi_dir / "README.md").write_text("# abis\n", encoding="utf-8")
        (abi_dir / "nested").mkdir()
        assert list(load_abis(abi_dir)) == ["Token", "Vault"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidAbiError, match="not found"):
            load_abis(tmp_path / "missing")

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert load_abis(tmp_path) == {}

    def test_invalid_json_names_the_file(self, abi_dir: Path) -> None:
        (abi_dir / "Broken.abi").write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidAbiError, match="Broken.abi"):
            load_abis(abi_dir)

    def test_artifact_without_abi_key(self, tmp_path: Path) -> None:
        path = tmp_path / "Thing.json"
        path.write_text(json.dumps({"bytecode": "0x"}), encoding="utf-8")
        with pytest.raises(InvalidAbiError, match="no 'abi' key"):
            load_abi_file(path)


class TestGetMethodsByType:
    def test_partitions(self, token_methods: dict[str, MethodDescriptor]) -> None:
        methods = list(token_methods.values())
        assert list(get_methods_by_type(methods, MethodType.READ)) == ["balanceOf", "name"]
        assert list(get_methods_by_type(methods, MethodType.WRITE)) == ["transfer", "deposit"]
        assert list(get_methods_by_type(methods, MethodType.ALL)) == [
            "balanceOf",
            "name",
            "transfer",
            "deposit",
        ]

    def test_overloads_keep_last_declaration(self) -> None:
        methods = parse_abi(
            [
                {
                    "type": "function",
                    "name": "mint",
                    "stateMutability": "nonpayable",
                    "inputs": [{"name": "to", "type": "address"}],
                },
                {
                    "type": "function",
                    "name": "mint",
                    "stateMutability": "nonpayable",
                    "inputs": [
                        {"name": "to", "type": "address"},
                        {"name": "amount", "type": "uint256"},
                    ],
                },
            ]
        )
        result = get_methods_by_type(methods, MethodType.ALL)
        assert len(result) == 1
        assert result["mint"].signature == "mint(address,uint256)"

    def test_empty(self) -> None:
        assert get_methods_by_type([], MethodType.READ) == {}

    def test_method_type_str(self) -> None:
        assert [str(t) for t in MethodType] == ["Read", "Write", "All"]

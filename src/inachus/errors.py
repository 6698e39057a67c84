"""Error taxonomy shared by every inachus layer."""

from __future__ import annotations


class InachusError(RuntimeError):
    exit_code: int = 1


class InvalidAddressError(InachusError):
    exit_code = 2


class InvalidArgumentsError(InachusError):
    exit_code = 2


class InvalidAbiError(InachusError):
    exit_code = 3


class NoContractSelectedError(InachusError):
    exit_code = 4

    def __init__(self, message: str = "No contract selected") -> None:
        super().__init__(message)


class NoWalletConfiguredError(InachusError):
    exit_code = 4

    def __init__(self, message: str = "No wallet configured") -> None:
        super().__init__(message)


class MethodNotFoundError(InachusError):
    exit_code = 5


class ContractNotFoundError(InachusError):
    exit_code = 5


class ProviderError(InachusError):
    exit_code = 6


class ChainNotFoundError(InachusError):
    exit_code = 5

    def __init__(self, chain_id: int) -> None:
        super().__init__(f"Chain ID {chain_id} not found")
        self.chain_id = chain_id


class ConfigError(InachusError):
    exit_code = 7


class InvalidConfigError(ConfigError):
    """Raised when a configuration field fails validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


__all__ = [
    "ChainNotFoundError",
    "ConfigError",
    "ContractNotFoundError",
    "InachusError",
    "InvalidAbiError",
    "InvalidAddressError",
    "InvalidArgumentsError",
    "InvalidConfigError",
    "MethodNotFoundError",
    "NoContractSelectedError",
    "NoWalletConfiguredError",
    "ProviderError",
]

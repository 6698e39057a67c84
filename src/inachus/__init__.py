__all__ = [
    # Errors
    "InachusError",
    "InvalidAddressError",
    "InvalidArgumentsError",
    "InvalidAbiError",
    "NoContractSelectedError",
    "NoWalletConfiguredError",
    "MethodNotFoundError",
    "ContractNotFoundError",
    "ProviderError",
    "ConfigError",
    # ABI model
    "MethodMutability",
    "MethodType",
    "ParameterSpec",
    "MethodDescriptor",
    "load_abis",
    "parse_abi",
    "get_methods_by_type",
    # Codec
    "EncodedArgument",
    "encode_scalar",
    "encode_array",
    "encode_tuple",
    "encode_arguments",
    "build_calldata",
    "render_output",
    # Network
    "RpcProvider",
    "Wallet",
    # Persistence
    "SessionConfig",
    "ContractRecord",
    "ContractRegistry",
    # Session
    "SessionContext",
    "Prompter",
    "ClickPrompter",
    "execute",
    "Step",
    "Workflow",
]

from .errors import (
    ConfigError,
    ContractNotFoundError,
    InachusError,
    InvalidAbiError,
    InvalidAddressError,
    InvalidArgumentsError,
    MethodNotFoundError,
    NoContractSelectedError,
    NoWalletConfiguredError,
    ProviderError,
)
from .pneuma.abi import (
    MethodDescriptor,
    MethodMutability,
    MethodType,
    ParameterSpec,
    get_methods_by_type,
    load_abis,
    parse_abi,
)
from .pneuma.codec import (
    EncodedArgument,
    build_calldata,
    encode_arguments,
    encode_array,
    encode_scalar,
    encode_tuple,
    render_output,
)
from .pneuma.rpc import RpcProvider
from .pneuma.tx import Wallet
from .anamnesis.config import SessionConfig
from .anamnesis.registry import ContractRecord, ContractRegistry
from .theurgy.session import SessionContext
from .theurgy.prompt import ClickPrompter, Prompter
from .theurgy.dispatch import execute
from .theurgy.workflow import Step, Workflow

"""
Argument Codec - Turns user-typed text into contract call arguments.

Each parameter value is encoded into an :class:`EncodedArgument`: the raw
byte segment for the value (20-byte address, 32-byte big-endian integer,
one-byte bool, raw string/bytes) together with the Python value it stands
for. The network payload itself is assembled by eth-abi from those values.

Composite syntax is deliberately flat: ``[a, b, c]`` and ``(a, b, c)`` are
split on every comma, so nested arrays or tuples cannot be expressed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import is_checksum_address, is_hex_address, to_canonical_address

from ..errors import InvalidAddressError, InvalidArgumentsError, ProviderError
from .abi import MethodDescriptor, ParameterSpec

UINT256_MAX = 2**256 - 1
INT256_MIN = -(2**255)
INT256_MAX = 2**255 - 1

_DECIMAL = re.compile(r"[+-]?\d+")
_HEX = re.compile(r"[0-9a-fA-F]*")
_ARRAY_SUFFIX = re.compile(r"^(?P<element>.+)\[(?P<size>\d*)\]$")


@dataclass(frozen=True)
class EncodedArgument:
    abi_type: str
    data: bytes
    value: Any

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def _encode_address(value: str) -> EncodedArgument:
    if not is_hex_address(value) or not value.startswith("0x"):
        raise InvalidAddressError(f"Invalid address: {value}")
    if not is_checksum_address(value):
        raise InvalidAddressError(f"Invalid address checksum: {value}")
    return EncodedArgument("address", bytes(to_canonical_address(value)), value)


def _encode_integer(value: str, type_tag: str) -> EncodedArgument:
    if not _DECIMAL.fullmatch(value):
        raise InvalidArgumentsError(f"Invalid number: {value}")
    number = int(value, 10)

    if type_tag == "uint256":
        if not 0 <= number <= UINT256_MAX:
            raise InvalidArgumentsError(f"Number out of range for uint256: {value}")
        data = number.to_bytes(32, "big")
    else:
        if not INT256_MIN <= number <= INT256_MAX:
            raise InvalidArgumentsError(f"Number out of range for int256: {value}")
        data = number.to_bytes(32, "big", signed=True)

    return EncodedArgument(type_tag, data, number)


def _encode_bool(value: str) -> EncodedArgument:
    if value == "true":
        return EncodedArgument("bool", b"\x01", True)
    if value == "false":
        return EncodedArgument("bool", b"\x00", False)
    raise InvalidArgumentsError(f"Invalid boolean: {value}")


def _encode_bytes(value: str) -> EncodedArgument:
    digits = value[2:] if value.startswith("0x") else value
    if len(digits) % 2 or not _HEX.fullmatch(digits):
        raise InvalidArgumentsError(f"Invalid hex: {value}")
    data = bytes.fromhex(digits)
    return EncodedArgument("bytes", data, data)


def encode_scalar(value: str, type_tag: str) -> EncodedArgument:
    """
    Encode one textual value of a primitive type.

    Args:
        value: Text as typed by the user
        type_tag: One of ``address``, ``uint256``, ``int256``, ``bool``,
            ``string``, ``bytes``

    Returns:
        The encoded argument

    Raises:
        InvalidAddressError: Malformed or non-checksummed address
        InvalidArgumentsError: Malformed value or unsupported type
    """
    if type_tag == "address":
        return _encode_address(value)
    if type_tag in ("uint256", "int256"):
        return _encode_integer(value, type_tag)
    if type_tag == "bool":
        return _encode_bool(value)
    if type_tag == "string":
        return EncodedArgument("string", value.encode("utf-8"), value)
    if type_tag == "bytes":
        return _encode_bytes(value)
    raise InvalidArgumentsError(f"Unsupported type: {type_tag}")


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------

def _split_parts(value: str, brackets: str) -> list[str]:
    inner = value.strip().strip(brackets).strip()
    if not inner:
        return []
    return [part.strip() for part in inner.split(",")]


def encode_array(value: str, element_type: str) -> list[EncodedArgument]:
    """Encode ``[a, b, c]`` (brackets optional) element by element."""
    return [encode_scalar(part, element_type) for part in _split_parts(value, "[]")]


def encode_tuple(value: str, element_types: Sequence[str]) -> list[EncodedArgument]:
    """Encode ``(a, b, c)`` positionally against ``element_types``."""
    parts = _split_parts(value, "()")
    if len(parts) != len(element_types):
        raise InvalidArgumentsError(
            f"Tuple input length mismatch: expected {len(element_types)}, got {len(parts)}"
        )
    return [encode_scalar(part, t) for part, t in zip(parts, element_types)]


def _tuple_element_types(param: ParameterSpec) -> list[str]:
    if param.components:
        return [c.abi_type for c in param.components]
    inner = param.type_tag.strip()[1:-1]
    return [t.strip() for t in inner.split(",")] if inner.strip() else []


def _is_tuple(type_tag: str) -> bool:
    return type_tag == "tuple" or (type_tag.startswith("(") and type_tag.endswith(")"))


def encode_parameter(param: ParameterSpec, value: str) -> EncodedArgument:
    """
    Encode the text for one declared parameter.

    Arrays and tuples collapse into a single argument whose data is the
    concatenation of their element segments.
    """
    array = _ARRAY_SUFFIX.match(param.type_tag)
    if array:
        element_type = array.group("element")
        if element_type.endswith("]") or _is_tuple(element_type):
            raise InvalidArgumentsError(f"Unsupported array type: {param.type_tag}")
        elements = encode_array(value, element_type)
        size = array.group("size")
        if size and len(elements) != int(size):
            raise InvalidArgumentsError(
                f"Array length mismatch: expected {size}, got {len(elements)}"
            )
        return EncodedArgument(
            param.abi_type,
            b"".join(e.data for e in elements),
            [e.value for e in elements],
        )

    if _is_tuple(param.type_tag):
        elements = encode_tuple(value, _tuple_element_types(param))
        return EncodedArgument(
            param.abi_type,
            b"".join(e.data for e in elements),
            tuple(e.value for e in elements),
        )

    if param.type_tag == "string":
        return encode_scalar(value, "string")
    return encode_scalar(value.strip(), param.type_tag)


def encode_arguments(method: MethodDescriptor, values: Sequence[str]) -> list[EncodedArgument]:
    """Encode one text value per method input, in declaration order."""
    if len(values) != len(method.inputs):
        raise InvalidArgumentsError(
            f"{method.name} expects {len(method.inputs)} arguments, got {len(values)}"
        )
    return [encode_parameter(param, value) for param, value in zip(method.inputs, values)]


def raw_payload(encoded: Sequence[EncodedArgument]) -> bytes:
    return b"".join(arg.data for arg in encoded)


def build_calldata(method: MethodDescriptor, encoded: Sequence[EncodedArgument]) -> bytes:
    """
    Assemble the call data for a method: selector followed by the
    ABI-encoded argument values.
    """
    types = [arg.abi_type for arg in encoded]
    try:
        body = encode(types, [arg.value for arg in encoded]) if encoded else b""
    except (EncodingError, TypeError, ValueError) as exc:
        raise InvalidArgumentsError(f"Cannot encode arguments for {method.name}: {exc}") from exc
    return method.selector + body


# ---------------------------------------------------------------------------
# Output rendering
# ---------------------------------------------------------------------------

def format_value(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return "(" + ", ".join(format_value(v) for v in value) + ")"
    if isinstance(value, list):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    return str(value)


def render_output(method: MethodDescriptor, data: bytes) -> str:
    """
    Decode raw return data of a read call into display text.

    Raises:
        ProviderError: If the returned bytes do not match the output types
    """
    if not method.outputs:
        return "(no return value)"

    types = [p.abi_type for p in method.outputs]
    try:
        decoded = decode(types, data)
    except (DecodingError, ValueError) as exc:
        raise ProviderError(
            f"Could not decode return data of {method.name} as ({','.join(types)}): {exc}"
        ) from exc

    if len(decoded) == 1:
        return format_value(decoded[0])

    lines = []
    for index, (param, value) in enumerate(zip(method.outputs, decoded)):
        label = param.name or f"[{index}]"
        lines.append(f"{label} ({param.abi_type}): {format_value(value)}")
    return "\n".join(lines)

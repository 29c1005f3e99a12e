"""
Constructor Argument Encoding

ABI-encodes literal constructor arguments for explorer submissions. Only
static head types are supported; explorers receive the encoded words as a hex
string without the ``0x`` prefix.
"""

import re
from typing import Any, Sequence

from ..errors import VerificationError

WORD_SIZE = 32

_UINT = re.compile(r'^uint(\d*)$')
_INT = re.compile(r'^int(\d*)$')
_FIXED_BYTES = re.compile(r'^bytes(\d+)$')
_ADDRESS = re.compile(r'^0x[0-9a-fA-F]{40}$')


def _bits(type_name: str, width: str) -> int:
    bits = int(width) if width else 256
    if bits < 8 or bits > 256 or bits % 8:
        raise VerificationError(f"Invalid ABI type: {type_name}")
    return bits


def _as_int(type_name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise VerificationError(f"Expected integer for {type_name}, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError:
            pass
    raise VerificationError(f"Expected integer for {type_name}, got {value!r}")


def encode_word(type_name: str, value: Any) -> bytes:
    """Encode one static value as a 32-byte word."""
    if type_name == 'address':
        if not isinstance(value, str) or not _ADDRESS.match(value):
            raise VerificationError(f"Expected address, got {value!r}")
        return bytes.fromhex(value[2:]).rjust(WORD_SIZE, b'\x00')

    if type_name == 'bool':
        if not isinstance(value, bool):
            raise VerificationError(f"Expected bool, got {value!r}")
        return int(value).to_bytes(WORD_SIZE, 'big')

    match = _UINT.match(type_name)
    if match:
        bits = _bits(type_name, match.group(1))
        number = _as_int(type_name, value)
        if number < 0 or number >= 2 ** bits:
            raise VerificationError(f"Value {number} out of range for {type_name}")
        return number.to_bytes(WORD_SIZE, 'big')

    match = _INT.match(type_name)
    if match:
        bits = _bits(type_name, match.group(1))
        number = _as_int(type_name, value)
        if number < -(2 ** (bits - 1)) or number >= 2 ** (bits - 1):
            raise VerificationError(f"Value {number} out of range for {type_name}")
        return number.to_bytes(WORD_SIZE, 'big', signed=True)

    match = _FIXED_BYTES.match(type_name)
    if match:
        size = int(match.group(1))
        if size < 1 or size > WORD_SIZE:
            raise VerificationError(f"Invalid ABI type: {type_name}")
        if not isinstance(value, str) or not value.startswith('0x'):
            raise VerificationError(f"Expected 0x-prefixed hex for {type_name}, got {value!r}")
        try:
            raw = bytes.fromhex(value[2:])
        except ValueError as e:
            raise VerificationError(f"Invalid hex for {type_name}: {value!r}") from e
        if len(raw) != size:
            raise VerificationError(f"Expected {size} bytes for {type_name}, got {len(raw)}")
        return raw.ljust(WORD_SIZE, b'\x00')

    raise VerificationError(f"Unsupported constructor argument type: {type_name}")


def encode_constructor_args(types: Sequence[str], values: Sequence[Any]) -> str:
    """
    Encode constructor arguments against the constructor's input types.

    Args:
        types: ABI type names from the constructor definition
        values: Literal argument values, same length and order

    Returns:
        Hex string without ``0x`` prefix (empty for no arguments)
    """
    if len(types) != len(values):
        raise VerificationError(
            f"Constructor expects {len(types)} arguments, {len(values)} given"
        )
    return b''.join(encode_word(t, v) for t, v in zip(types, values)).hex()

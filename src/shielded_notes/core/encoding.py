"""
Byte/field codec: explicit, checked conversions between integers, hex
strings and the fixed-width byte arrays fed into Poseidon and EdDSA.

All hash inputs are 32-byte big-endian arrays. Conversions never wrap or
truncate; an oversized value raises instead.
"""

from __future__ import annotations

import re

from shielded_notes.errors import InvalidAddress, InvalidInput, ValueOutOfRange

WORD_SIZE = 32
ADDRESS_SIZE = 20

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def encode32(value: int, field: str = "value") -> bytes:
    """
    Encode an unsigned integer as a 32-byte big-endian array.

    Raises:
        ValueOutOfRange: If value is negative or >= 2**256.
    """
    if value < 0 or value >= 2**256:
        raise ValueOutOfRange(field, f"{value} does not fit in 32 unsigned bytes")
    return value.to_bytes(WORD_SIZE, "big")


def pad32(data: bytes, field: str = "data") -> bytes:
    """Left-pad a byte array with zero bytes to 32 bytes."""
    if len(data) > WORD_SIZE:
        raise InvalidInput(field, f"expected at most {WORD_SIZE} bytes, got {len(data)}")
    return bytes(data).rjust(WORD_SIZE, b"\x00")


def check_word(data: bytes, field: str = "data") -> bytes:
    """
    Require an already-canonical 32-byte hash input.

    Raises:
        InvalidInput: If data is not exactly 32 bytes.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise InvalidInput(field, f"expected bytes, got {type(data).__name__}")
    if len(data) != WORD_SIZE:
        raise InvalidInput(field, f"expected {WORD_SIZE} bytes, got {len(data)}")
    return bytes(data)


def is_hex_address(address: object) -> bool:
    """True if address is a 0x-prefixed 40-hex-digit string."""
    return isinstance(address, str) and ADDRESS_PATTERN.match(address) is not None


def decode_hex_address(address: str, field: str = "address") -> bytes:
    """
    Decode a 0x-prefixed hex address into its 20 raw bytes.

    Raises:
        InvalidAddress: If the string is not 0x + 40 hex digits.
    """
    if not is_hex_address(address):
        raise InvalidAddress(field, f"{address!r} is not a 0x-prefixed 20-byte hex address")
    return bytes.fromhex(address[2:])


def encode_hex_address(raw: bytes, field: str = "address") -> str:
    """Render 20 raw bytes as a lower-case 0x-prefixed address."""
    if len(raw) != ADDRESS_SIZE:
        raise InvalidAddress(field, f"expected {ADDRESS_SIZE} bytes, got {len(raw)}")
    return "0x" + bytes(raw).hex()


def hex_to_bytes(value: str, field: str = "data") -> bytes:
    """Decode a hex string, with or without 0x prefix."""
    s = value.strip()
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2 != 0:
        raise InvalidInput(field, "hex string length must be even")
    try:
        return bytes.fromhex(s)
    except ValueError:
        raise InvalidInput(field, f"invalid hex string {value!r}") from None


def to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")


def short_hex(data: bytes, prefix_len: int = 8) -> str:
    """Shortened hex for log lines, e.g. 0x1a2b3c4d...9f0a."""
    s = bytes(data).hex()
    if len(s) <= prefix_len * 2:
        return "0x" + s
    return "0x" + s[:prefix_len] + "..." + s[-4:]

"""
Token descriptors: validation and canonical 32-byte token identifiers.

Fungible tokens are identified by their contract address alone, padded to
32 bytes. Non-fungible tokens also bind a sub-id, so their identifier is
Poseidon(pad32(address), encode32(sub_id)). Every identifier has the same
width either way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

from shielded_notes.core.encoding import (
    decode_hex_address,
    encode32,
    is_hex_address,
    pad32,
    short_hex,
)
from shielded_notes.crypto.primitives import CryptoPrimitives, default_primitives
from shielded_notes.errors import InvalidTokenData

logger = logging.getLogger("shielded_notes.token")


class TokenType(IntEnum):
    """Kinds of token a note can carry."""
    FUNGIBLE = 0
    NON_FUNGIBLE_UNIQUE = 1
    NON_FUNGIBLE_SEMI_FUNGIBLE = 2

    # Contract-standard aliases
    ERC20 = 0
    ERC721 = 1
    ERC1155 = 2


@dataclass(frozen=True)
class TokenData:
    """
    Token descriptor carried by a note.

    Attributes:
        token_type: One of TokenType.
        token_address: 0x-prefixed 40-hex-digit contract address.
        token_sub_id: Token instance id in [0, 2**256); 0 for fungible tokens.
    """
    token_type: TokenType
    token_address: str
    token_sub_id: int = 0

    @property
    def is_fungible(self) -> bool:
        return self.token_type == TokenType.FUNGIBLE


def check_token_data(token_data: TokenData) -> None:
    """
    Validate token data, naming the first field that fails.

    Raises:
        InvalidTokenData: If the type, address or sub-id is invalid.
    """
    token_type = token_data.token_type
    if isinstance(token_type, bool) or token_type not in _TOKEN_TYPE_VALUES:
        raise InvalidTokenData("token_type", f"unknown token type {token_type!r}")

    if not is_hex_address(token_data.token_address):
        raise InvalidTokenData(
            "token_address", f"{token_data.token_address!r} is not a 20-byte hex address"
        )

    sub_id = token_data.token_sub_id
    if not isinstance(sub_id, int) or isinstance(sub_id, bool) or sub_id < 0 or sub_id >= 2**256:
        raise InvalidTokenData("token_sub_id", f"{sub_id!r} is not in [0, 2**256)")


def validate_token_data(token_data: TokenData) -> bool:
    """True if token data passes check_token_data."""
    try:
        check_token_data(token_data)
    except InvalidTokenData:
        return False
    return True


def _fungible_id(token_data: TokenData, primitives: CryptoPrimitives) -> bytes:
    return pad32(decode_hex_address(token_data.token_address, field="token_address"))


def _non_fungible_id(token_data: TokenData, primitives: CryptoPrimitives) -> bytes:
    return primitives.poseidon([
        pad32(decode_hex_address(token_data.token_address, field="token_address")),
        encode32(token_data.token_sub_id, field="token_sub_id"),
    ])


_TOKEN_ID_HANDLERS: dict[TokenType, Callable[[TokenData, CryptoPrimitives], bytes]] = {
    TokenType.FUNGIBLE: _fungible_id,
    TokenType.NON_FUNGIBLE_UNIQUE: _non_fungible_id,
    TokenType.NON_FUNGIBLE_SEMI_FUNGIBLE: _non_fungible_id,
}

_TOKEN_TYPE_VALUES = frozenset(int(t) for t in TokenType)


def get_token_id(token_data: TokenData, primitives: CryptoPrimitives | None = None) -> bytes:
    """
    Compute the 32-byte token identifier.

    Args:
        token_data: A validated token descriptor.
        primitives: Hash provider; defaults to the reference implementation.

    Returns:
        pad32(address) for fungible tokens, Poseidon(pad32(address), sub_id) otherwise.
    """
    check_token_data(token_data)
    primitives = primitives or default_primitives()
    handler = _TOKEN_ID_HANDLERS[TokenType(token_data.token_type)]
    token_id = handler(token_data, primitives)
    logger.debug(f"Token id for {token_data.token_address}: {short_hex(token_id)}")
    return token_id

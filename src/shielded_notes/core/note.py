"""
Shielded and withdrawal notes.

A ShieldedNote hides its owner, token and value behind one commitment:

    nullifying_key    = Poseidon(viewing_key)
    spending_pub_key  = EdDSA.derive_public_key(spending_key)          -> (x, y)
    master_public_key = Poseidon(x, y, nullifying_key)
    note_public_key   = Poseidon(master_public_key, pad32(random))
    token_id          = get_token_id(token_data)
    commitment_hash   = Poseidon(note_public_key, token_id, encode32(value))
    nullifier(i)      = Poseidon(nullifying_key, encode32(i))

A WithdrawNote pays out to a public address. Its note public key is the
padded address itself, so its owner is visible, but its commitment has the
same shape as a shielded one and both fit the same commitment tree.

Nothing derived is stored: every value is recomputed from the note's
immutable fields and the primitives provider passed in.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Sequence

from shielded_notes.core.encoding import (
    decode_hex_address,
    encode32,
    pad32,
    short_hex,
)
from shielded_notes.core.sighash import compute_sighash
from shielded_notes.core.token import TokenData, TokenType, check_token_data, get_token_id
from shielded_notes.crypto.poseidon import FIELD_MODULUS
from shielded_notes.crypto.primitives import CryptoPrimitives, default_primitives
from shielded_notes.errors import (
    FieldElementOutOfRange,
    InvalidKeyLength,
    InvalidRandomLength,
    ValueOutOfRange,
)

logger = logging.getLogger("shielded_notes.note")

KEY_LENGTH = 32
RANDOM_LENGTH = 16
MAX_VALUE = 2**128 - 1


# ==============================================================================
# Key material helpers
# ==============================================================================


def generate_spending_key() -> bytes:
    """Fresh 32-byte EdDSA private key."""
    return secrets.token_bytes(KEY_LENGTH)


def generate_viewing_key() -> bytes:
    """Fresh 32-byte viewing key, guaranteed to be a canonical field element."""
    return secrets.randbelow(FIELD_MODULUS).to_bytes(KEY_LENGTH, "big")


def generate_note_random() -> bytes:
    """Fresh 16-byte note randomness."""
    return secrets.token_bytes(RANDOM_LENGTH)


def _as_bytes(value, field: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{field} must be bytes-like, got {type(value)!r}")
    return bytes(value)


def _check_value(value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueOutOfRange("value", f"{value!r} is not an unsigned integer")


def _check_field_token(token_data: TokenData) -> None:
    if token_data.token_type != TokenType.FUNGIBLE and token_data.token_sub_id >= FIELD_MODULUS:
        raise FieldElementOutOfRange(
            "token_sub_id", "non-fungible sub-id must be below the field modulus"
        )


# ==============================================================================
# ShieldedNote
# ==============================================================================


@dataclass(frozen=True)
class ShieldedNote:
    """
    A spendable note owned by a spending/viewing key pair.

    Attributes:
        spending_key: 32-byte EdDSA private key authorizing spends.
        viewing_key: 32-byte key the nullifying key is derived from.
        value: Token amount in [0, 2**128).
        random: 16-byte blinding randomness.
        token_data: Token the value is denominated in.

    Raises (on construction):
        InvalidKeyLength: spending or viewing key not 32 bytes.
        ValueOutOfRange: value negative or above 2**128 - 1.
        InvalidRandomLength: random not 16 bytes.
        InvalidTokenData: token data fails validation.
        FieldElementOutOfRange: viewing key or non-fungible sub-id not in the field.
    """
    spending_key: bytes
    viewing_key: bytes
    value: int
    random: bytes
    token_data: TokenData

    def __post_init__(self):
        for name in ("spending_key", "viewing_key", "random"):
            object.__setattr__(self, name, _as_bytes(getattr(self, name), name))

        if len(self.spending_key) != KEY_LENGTH:
            raise InvalidKeyLength(
                "spending_key", f"expected {KEY_LENGTH} bytes, got {len(self.spending_key)}"
            )
        if len(self.viewing_key) != KEY_LENGTH:
            raise InvalidKeyLength(
                "viewing_key", f"expected {KEY_LENGTH} bytes, got {len(self.viewing_key)}"
            )
        _check_value(self.value)
        if self.value > MAX_VALUE:
            raise ValueOutOfRange("value", f"{self.value} exceeds 2**128 - 1")
        if len(self.random) != RANDOM_LENGTH:
            raise InvalidRandomLength(
                "random", f"expected {RANDOM_LENGTH} bytes, got {len(self.random)}"
            )
        check_token_data(self.token_data)

        if int.from_bytes(self.viewing_key, "big") >= FIELD_MODULUS:
            raise FieldElementOutOfRange("viewing_key", "must be below the field modulus")
        _check_field_token(self.token_data)

    def __repr__(self) -> str:
        return (
            f"ShieldedNote(value={self.value}, token={self.token_data.token_address}, "
            f"type={TokenType(self.token_data.token_type).name})"
        )

    def nullifying_key(self, primitives: CryptoPrimitives | None = None) -> bytes:
        """Poseidon(viewing_key)."""
        primitives = primitives or default_primitives()
        return primitives.poseidon([self.viewing_key])

    def spending_public_key(self, primitives: CryptoPrimitives | None = None) -> tuple[bytes, bytes]:
        """EdDSA public key (x, y) of the spending key."""
        primitives = primitives or default_primitives()
        return primitives.derive_public_key(self.spending_key)

    def master_public_key(self, primitives: CryptoPrimitives | None = None) -> bytes:
        """Poseidon(spending_pub.x, spending_pub.y, nullifying_key)."""
        primitives = primitives or default_primitives()
        x, y = self.spending_public_key(primitives)
        return primitives.poseidon([x, y, self.nullifying_key(primitives)])

    def note_public_key(self, primitives: CryptoPrimitives | None = None) -> bytes:
        """Poseidon(master_public_key, pad32(random))."""
        primitives = primitives or default_primitives()
        return primitives.poseidon([
            self.master_public_key(primitives),
            pad32(self.random, field="random"),
        ])

    def token_id(self, primitives: CryptoPrimitives | None = None) -> bytes:
        return get_token_id(self.token_data, primitives)

    def commitment_hash(self, primitives: CryptoPrimitives | None = None) -> bytes:
        """
        Commitment published into the commitment tree.

        Returns:
            Poseidon(note_public_key, token_id, encode32(value)) as 32 bytes.
        """
        primitives = primitives or default_primitives()
        commitment = primitives.poseidon([
            self.note_public_key(primitives),
            self.token_id(primitives),
            encode32(self.value),
        ])
        logger.debug(f"Shielded commitment {short_hex(commitment)} (value={self.value})")
        return commitment

    def nullifier(self, leaf_index: int, primitives: CryptoPrimitives | None = None) -> bytes:
        """
        Nullifier published when the note at leaf_index is spent.

        Deterministic per (viewing_key, leaf_index); the same leaf always
        yields the same nullifier, so a set of seen nullifiers detects
        double-spends.

        Raises:
            ValueOutOfRange: If leaf_index is negative or does not fit in 32 bytes.
        """
        if not isinstance(leaf_index, int) or isinstance(leaf_index, bool):
            raise ValueOutOfRange("leaf_index", f"{leaf_index!r} is not an integer")
        primitives = primitives or default_primitives()
        nullifier = primitives.poseidon([
            self.nullifying_key(primitives),
            encode32(leaf_index, field="leaf_index"),
        ])
        logger.debug(f"Nullifier for leaf {leaf_index}: {short_hex(nullifier)}")
        return nullifier

    def sign(
        self,
        merkle_root: bytes,
        bound_params_hash: bytes,
        nullifiers: Sequence[bytes],
        commitments_out: Sequence[bytes],
        primitives: CryptoPrimitives | None = None,
    ) -> tuple[bytes, bytes, bytes]:
        """
        Sign a transaction spending this note.

        The signed message is Poseidon(merkle_root, bound_params_hash,
        *nullifiers, *commitments_out) in exactly the order given, so a
        reordered or substituted list invalidates the signature.

        Returns:
            (R8.x, R8.y, S), each 32 bytes.
        """
        primitives = primitives or default_primitives()
        sighash = compute_sighash(
            merkle_root, bound_params_hash, nullifiers, commitments_out, primitives
        )
        logger.debug(
            f"Signing sighash {short_hex(sighash)} over {len(nullifiers)} nullifier(s) "
            f"and {len(commitments_out)} commitment(s)"
        )
        return primitives.sign(self.spending_key, sighash)


# ==============================================================================
# WithdrawNote
# ==============================================================================


@dataclass(frozen=True)
class WithdrawNote:
    """
    An unspendable note paying out to a public address.

    Has no key material: no nullifying key, nullifier or signature.

    Raises (on construction):
        InvalidAddress: withdraw_address is not 0x + 40 hex digits.
        ValueOutOfRange: value negative or >= 2**128.
        InvalidTokenData: token data fails validation.
    """
    withdraw_address: str
    value: int
    token_data: TokenData

    def __post_init__(self):
        decode_hex_address(self.withdraw_address, field="withdraw_address")
        _check_value(self.value)
        if self.value >= 2**128:
            raise ValueOutOfRange("value", f"{self.value} is not below 2**128")
        check_token_data(self.token_data)
        _check_field_token(self.token_data)

    def note_public_key(self) -> bytes:
        """The withdraw address, left-padded to 32 bytes."""
        return pad32(decode_hex_address(self.withdraw_address, field="withdraw_address"))

    def token_id(self, primitives: CryptoPrimitives | None = None) -> bytes:
        return get_token_id(self.token_data, primitives)

    def commitment_hash(self, primitives: CryptoPrimitives | None = None) -> bytes:
        """Poseidon(pad32(withdraw_address), token_id, encode32(value))."""
        primitives = primitives or default_primitives()
        commitment = primitives.poseidon([
            self.note_public_key(),
            self.token_id(primitives),
            encode32(self.value),
        ])
        logger.debug(
            f"Withdrawal commitment {short_hex(commitment)} to {self.withdraw_address}"
        )
        return commitment

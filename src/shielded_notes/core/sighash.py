"""
Transaction signature hash.

A spend signature covers one field element:

    sighash = Poseidon(merkle_root, bound_params_hash, *nullifiers, *commitments_out)

Inputs are absorbed in caller order. The bound parameters hash summarizes
the transaction's non-note parameters and is computed elsewhere.
"""

from __future__ import annotations

from typing import Sequence

from shielded_notes.core.encoding import check_word
from shielded_notes.crypto.poseidon import MAX_INPUTS
from shielded_notes.crypto.primitives import CryptoPrimitives, default_primitives
from shielded_notes.errors import InvalidInput

# merkle_root and bound_params_hash take two of the hash inputs
MAX_TRANSACTION_NOTES = MAX_INPUTS - 2


def compute_sighash(
    merkle_root: bytes,
    bound_params_hash: bytes,
    nullifiers: Sequence[bytes],
    commitments_out: Sequence[bytes],
    primitives: CryptoPrimitives | None = None,
) -> bytes:
    """
    Hash the transaction context a spend signature binds to.

    Raises:
        InvalidInput: If any input is not exactly 32 bytes, or nullifiers and
            commitments together exceed the hash width.
    """
    count = len(nullifiers) + len(commitments_out)
    if count > MAX_TRANSACTION_NOTES:
        raise InvalidInput(
            "nullifiers",
            f"{count} nullifiers and commitments exceed the limit of {MAX_TRANSACTION_NOTES}",
        )
    words = [
        check_word(merkle_root, "merkle_root"),
        check_word(bound_params_hash, "bound_params_hash"),
    ]
    words += [check_word(n, f"nullifiers[{i}]") for i, n in enumerate(nullifiers)]
    words += [check_word(c, f"commitments_out[{i}]") for i, c in enumerate(commitments_out)]

    primitives = primitives or default_primitives()
    return primitives.poseidon(words)


def verify_transaction_signature(
    public_key: tuple[bytes, bytes],
    merkle_root: bytes,
    bound_params_hash: bytes,
    nullifiers: Sequence[bytes],
    commitments_out: Sequence[bytes],
    signature: tuple[bytes, bytes, bytes],
    primitives: CryptoPrimitives | None = None,
) -> bool:
    """
    Check a spend signature against the transaction it claims to authorize.

    Args:
        public_key: Spending public key (x, y) of the note owner.
        signature: (R8.x, R8.y, S) as returned by ShieldedNote.sign.

    Returns:
        True only if the signature covers exactly this root, bound
        parameters hash and ordered nullifier/commitment lists.
    """
    primitives = primitives or default_primitives()
    sighash = compute_sighash(
        merkle_root, bound_params_hash, nullifiers, commitments_out, primitives
    )
    return primitives.verify(public_key, sighash, signature)

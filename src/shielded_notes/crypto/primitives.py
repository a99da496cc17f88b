"""
Primitive provider boundary.

Note derivations never call Poseidon or EdDSA directly; they receive a
CryptoPrimitives object. ReferencePrimitives wires in the pure-Python
implementations from this package; tests and alternative backends can
pass any object with the same four methods.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from shielded_notes.crypto import eddsa
from shielded_notes.crypto.poseidon import poseidon_hash


@runtime_checkable
class CryptoPrimitives(Protocol):
    """Hash and signature operations a note needs."""

    def poseidon(self, inputs: Sequence[bytes]) -> bytes:
        """Hash a sequence of 32-byte field elements to one 32-byte field element."""
        ...

    def derive_public_key(self, private_key: bytes) -> tuple[bytes, bytes]:
        """Derive the EdDSA public key (x, y) from a 32-byte private key."""
        ...

    def sign(self, private_key: bytes, message: bytes) -> tuple[bytes, bytes, bytes]:
        """Deterministically sign a 32-byte field element; returns (R.x, R.y, S)."""
        ...

    def verify(
        self,
        public_key: tuple[bytes, bytes],
        message: bytes,
        signature: tuple[bytes, bytes, bytes],
    ) -> bool:
        """Check a signature produced by sign()."""
        ...


class ReferencePrimitives:
    """Poseidon over BN254 and EdDSA over BabyJubJub, in pure Python.

    Parameters and key handling follow circomlib, so outputs match
    circomlibjs `poseidon` and `eddsa.signPoseidon`.
    """

    def poseidon(self, inputs: Sequence[bytes]) -> bytes:
        return poseidon_hash(inputs)

    def derive_public_key(self, private_key: bytes) -> tuple[bytes, bytes]:
        return eddsa.derive_public_key(private_key)

    def sign(self, private_key: bytes, message: bytes) -> tuple[bytes, bytes, bytes]:
        return eddsa.sign(private_key, message)

    def verify(
        self,
        public_key: tuple[bytes, bytes],
        message: bytes,
        signature: tuple[bytes, bytes, bytes],
    ) -> bool:
        return eddsa.verify(public_key, message, signature)


_DEFAULT = ReferencePrimitives()


def default_primitives() -> CryptoPrimitives:
    """The process-wide reference provider, used when none is passed explicitly."""
    return _DEFAULT

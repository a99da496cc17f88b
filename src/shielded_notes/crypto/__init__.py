"""
shielded_notes.crypto — Hash and signature primitives for note derivation.

Provides:
- Poseidon hash over the BN254 scalar field (circomlib parameters)
- BLAKE-512, used by EdDSA key expansion
- BabyJubJub curve constants and point encoding
- EdDSA (Poseidon challenge) key derivation, signing and verification
- The CryptoPrimitives provider interface and its reference implementation
"""

from shielded_notes.crypto.babyjubjub import (
    BASE8,
    SUBORDER,
    decode_point,
    encode_point,
)
from shielded_notes.crypto.blake512 import blake512
from shielded_notes.crypto.eddsa import derive_public_key, sign, verify
from shielded_notes.crypto.poseidon import (
    FIELD_MODULUS,
    MAX_INPUTS,
    poseidon_hash,
    poseidon_int,
)
from shielded_notes.crypto.primitives import (
    CryptoPrimitives,
    ReferencePrimitives,
    default_primitives,
)

__all__ = [
    # Poseidon
    "FIELD_MODULUS",
    "MAX_INPUTS",
    "poseidon_hash",
    "poseidon_int",
    # BabyJubJub
    "BASE8",
    "SUBORDER",
    "decode_point",
    "encode_point",
    # EdDSA
    "blake512",
    "derive_public_key",
    "sign",
    "verify",
    # Providers
    "CryptoPrimitives",
    "ReferencePrimitives",
    "default_primitives",
]

"""
EdDSA over BabyJubJub with a Poseidon challenge hash.

Key derivation:
    h = BLAKE-512(private_key)
    s = prune(h[0:32]) read little-endian
        (clear the 3 low bits, clear bit 255, set bit 254)
    A = (s >> 3)·Base8

Signing a field element m:
    r  = BLAKE-512(h[32:64] || le32(m)) mod l
    R8 = r·Base8
    hm = Poseidon(R8.x, R8.y, A.x, A.y, m)
    S  = (r + hm·s) mod l

Verification:
    S·Base8 == R8 + (8·hm)·A

Signatures are deterministic: the nonce r depends only on the key and the
message. l is the prime subgroup order of Base8.
"""

from __future__ import annotations

from shielded_notes.crypto.babyjubjub import (
    BASE8,
    SUBORDER,
    affine,
    decode_point,
    encode_point,
    points_equal,
)
from shielded_notes.crypto.blake512 import blake512
from shielded_notes.crypto.poseidon import FIELD_MODULUS, poseidon_int
from shielded_notes.errors import InvalidInput, InvalidKeyLength

Signature = tuple[bytes, bytes, bytes]
PublicKey = tuple[bytes, bytes]


def _expand_key(private_key: bytes) -> tuple[int, bytes]:
    """Return the pruned signing scalar s and the nonce prefix."""
    if len(private_key) != 32:
        raise InvalidKeyLength("private_key", f"expected 32 bytes, got {len(private_key)}")
    h = blake512(private_key)
    scalar_bytes = bytearray(h[:32])
    scalar_bytes[0] &= 0xF8
    scalar_bytes[31] &= 0x7F
    scalar_bytes[31] |= 0x40
    return int.from_bytes(scalar_bytes, "little"), h[32:]


def derive_public_key(private_key: bytes) -> PublicKey:
    """Derive the public key A = (s >> 3)·Base8 as two 32-byte coordinates."""
    s, _ = _expand_key(private_key)
    return encode_point((s >> 3) * BASE8)


def sign(private_key: bytes, message: bytes) -> Signature:
    """
    Sign a 32-byte big-endian field element.

    Returns:
        (R8.x, R8.y, S), each as 32 big-endian bytes.

    Raises:
        InvalidKeyLength: If the private key is not 32 bytes.
        InvalidInput: If the message is not a 32-byte field element.
    """
    msg = _message_to_int(message)
    s, prefix = _expand_key(private_key)
    A = (s >> 3) * BASE8

    nonce_hash = blake512(prefix + msg.to_bytes(32, "little"))
    r = int.from_bytes(nonce_hash, "little") % SUBORDER
    R8 = r * BASE8

    r8x, r8y = affine(R8)
    ax, ay = affine(A)
    hm = poseidon_int([r8x, r8y, ax, ay, msg])
    S = (r + hm * s) % SUBORDER

    r8x_bytes, r8y_bytes = encode_point(R8)
    return r8x_bytes, r8y_bytes, S.to_bytes(32, "big")


def verify(public_key: PublicKey, message: bytes, signature: Signature) -> bool:
    """
    Verify a signature produced by sign().

    Malformed keys, messages or signatures verify as False rather than raising.
    """
    try:
        msg = _message_to_int(message)
        A = decode_point(*public_key)
        r8x_bytes, r8y_bytes, s_bytes = signature
        R8 = decode_point(r8x_bytes, r8y_bytes)
    except (ValueError, TypeError):
        return False

    if len(s_bytes) != 32:
        return False
    S = int.from_bytes(s_bytes, "big")
    if S >= SUBORDER:
        return False

    r8x, r8y = affine(R8)
    ax, ay = affine(A)
    hm = poseidon_int([r8x, r8y, ax, ay, msg])

    left = S * BASE8
    right = R8 + (8 * hm) * A
    return points_equal(left, right)


def _message_to_int(message: bytes) -> int:
    if len(message) != 32:
        raise InvalidInput("message", f"expected 32 bytes, got {len(message)}")
    msg = int.from_bytes(message, "big")
    if msg >= FIELD_MODULUS:
        raise InvalidInput("message", "not in the BN254 scalar field")
    return msg

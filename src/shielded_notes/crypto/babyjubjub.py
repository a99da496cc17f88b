"""
BabyJubJub twisted Edwards curve over the BN254 scalar field.

    a·x² + y² = 1 + d·x²·y²   with a = 168700, d = 168696

The curve's base field is the same field Poseidon operates over, so curve
coordinates are valid Poseidon inputs without any conversion.

Point arithmetic is delegated to the ecdsa library's Edwards curve support
(CurveEdTw / PointEdwards). This module only pins the constants and
provides encode/decode helpers for 32-byte coordinate pairs.

References:
    [EIP-2494] Baby Jubjub Elliptic Curve, https://eips.ethereum.org/EIPS/eip-2494
"""

from __future__ import annotations

import ecdsa.ellipticcurve as ec

from shielded_notes.crypto.poseidon import FIELD_MODULUS
from shielded_notes.errors import InvalidInput

# ==============================================================================
# Curve constants
# ==============================================================================

A = 168700
D = 168696

# Order of the full group (cofactor 8)
ORDER = 21888242871839275222246405745257275088614511777268538073601725287587578984328

# Order of the prime subgroup generated by BASE8
SUBORDER = ORDER >> 3

BASE8_X = 5299619240641551281634865583518297030282874472190772894086521144482721001553
BASE8_Y = 16950150798460657717958625567821834550301663161624707787222815936182638968203

CURVE = ec.CurveEdTw(FIELD_MODULUS, A, D)


def make_point(x: int, y: int) -> ec.PointEdwards:
    """Lift affine coordinates into an extended-coordinate ecdsa point."""
    return ec.PointEdwards(CURVE, x, y, 1, x * y % FIELD_MODULUS)


BASE8 = make_point(BASE8_X, BASE8_Y)


# ==============================================================================
# Point utilities
# ==============================================================================


def affine(pt: ec.AbstractPoint) -> tuple[int, int]:
    """Affine (x, y) of a point; the identity maps to (0, 1)."""
    if pt == ec.INFINITY:
        return 0, 1
    return pt.x(), pt.y()


def points_equal(p1: ec.AbstractPoint, p2: ec.AbstractPoint) -> bool:
    return affine(p1) == affine(p2)


def encode_point(pt: ec.AbstractPoint) -> tuple[bytes, bytes]:
    """Encode a point as two 32-byte big-endian field elements."""
    x, y = affine(pt)
    return x.to_bytes(32, "big"), y.to_bytes(32, "big")


def decode_point(x_bytes: bytes, y_bytes: bytes) -> ec.PointEdwards:
    """
    Decode a (x, y) pair of 32-byte big-endian coordinates.

    Raises:
        InvalidInput: If a coordinate is malformed or the point is not on the curve.
    """
    if len(x_bytes) != 32 or len(y_bytes) != 32:
        raise InvalidInput("point", "coordinates must be 32 bytes each")
    x = int.from_bytes(x_bytes, "big")
    y = int.from_bytes(y_bytes, "big")
    if x >= FIELD_MODULUS or y >= FIELD_MODULUS:
        raise InvalidInput("point", "coordinate not in the base field")
    if not CURVE.contains_point(x, y):
        raise InvalidInput("point", f"({x:#x}, {y:#x}) is not on BabyJubJub")
    return make_point(x, y)

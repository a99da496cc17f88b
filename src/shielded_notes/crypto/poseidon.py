"""
Poseidon hash over the BN254 scalar field.

Parameters:
    - Field: BN254 scalar field (the base field of BabyJubJub)
    - S-box: x^5
    - Full rounds: 8 (4 before and 4 after the partial rounds)
    - Partial rounds: per state width t, from the standard x^5/254-bit table
    - Width: t = len(inputs) + 1, state = [0, *inputs], digest = state[0]

Round constants and the MDS matrix are generated the way the Poseidon
reference scripts generate them, so digests match circomlib:

    - A Grain LFSR is seeded with the instance parameters
      (field type, S-box, field size, t, R_F, R_P) and clocked 160 times.
    - Output bits go through the self-shrinking filter: bits are read in
      pairs and the second bit is kept only when the first one is set.
    - Each round constant is a 254-bit big-endian draw, redrawn until it
      is below the modulus. (R_F + R_P)·t constants are drawn, in order.
    - The stream then yields 2t more draws x_0..x_{t-1}, y_0..y_{t-1}
      (reduced mod p) and the MDS matrix is M[i][j] = 1 / (x_i + y_j).

References:
    [GKRRS21] Grassi, Khovratovich, Rechberger, Roy, Schofnegger,
              "Poseidon: A New Hash Function for Zero-Knowledge Proof
              Systems", USENIX Security '21, §4, Table 2 and Appendix F.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, Union

from shielded_notes.errors import FieldElementOutOfRange, InvalidInput

# BN254 scalar field
FIELD_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
FIELD_BITS = FIELD_MODULUS.bit_length()

FULL_ROUNDS = 8

# Partial rounds for t = 2 .. 17
PARTIAL_ROUNDS = [56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68]

MAX_INPUTS = len(PARTIAL_ROUNDS)

FieldInput = Union[bytes, bytearray, int]


@dataclass(frozen=True)
class PoseidonParams:
    """Round constants and MDS matrix for one state width."""
    t: int
    partial_rounds: int
    round_constants: tuple[tuple[int, ...], ...]
    mds: tuple[tuple[int, ...], ...]


class _GrainLFSR:
    """80-bit Grain LFSR with self-shrinking output, as in the Poseidon paper."""

    def __init__(self, t: int, partial_rounds: int):
        seed = (
            _bits(1, 2)                 # prime field
            + _bits(0, 4)               # x^alpha S-box
            + _bits(FIELD_BITS, 12)
            + _bits(t, 12)
            + _bits(FULL_ROUNDS, 10)
            + _bits(partial_rounds, 10)
            + [1] * 30
        )
        # bit i of the register is b_i; b_0 is the oldest bit
        self._register = sum(bit << i for i, bit in enumerate(seed))
        for _ in range(160):
            self._clock()

    def _clock(self) -> int:
        s = self._register
        new_bit = ((s >> 62) ^ (s >> 51) ^ (s >> 38) ^ (s >> 23) ^ (s >> 13) ^ s) & 1
        self._register = (s >> 1) | (new_bit << 79)
        return new_bit

    def next_bit(self) -> int:
        while True:
            keep = self._clock()
            bit = self._clock()
            if keep:
                return bit

    def next_int(self, n_bits: int) -> int:
        value = 0
        for _ in range(n_bits):
            value = (value << 1) | self.next_bit()
        return value

    def next_field_element(self) -> int:
        """Rejection-sampled element of [0, FIELD_MODULUS)."""
        while True:
            value = self.next_int(FIELD_BITS)
            if value < FIELD_MODULUS:
                return value


def _bits(value: int, width: int) -> list[int]:
    return [int(b) for b in format(value, f"0{width}b")]


@lru_cache(maxsize=None)
def get_params(t: int) -> PoseidonParams:
    """
    Generate (and cache) the permutation parameters for state width t.

    Raises:
        ValueError: If t is outside 2..17.
    """
    if t < 2 or t > MAX_INPUTS + 1:
        raise ValueError(f"Poseidon width must be in [2, {MAX_INPUTS + 1}], got {t}")

    partial_rounds = PARTIAL_ROUNDS[t - 2]
    total_rounds = FULL_ROUNDS + partial_rounds
    grain = _GrainLFSR(t, partial_rounds)

    flat = [grain.next_field_element() for _ in range(total_rounds * t)]
    round_constants = tuple(
        tuple(flat[r * t:(r + 1) * t]) for r in range(total_rounds)
    )

    while True:
        draws = [grain.next_int(FIELD_BITS) % FIELD_MODULUS for _ in range(2 * t)]
        if len(set(draws)) != 2 * t:
            continue
        xs, ys = draws[:t], draws[t:]
        if any((x + y) % FIELD_MODULUS == 0 for x in xs for y in ys):
            continue
        break

    mds = tuple(
        tuple(pow(x + y, FIELD_MODULUS - 2, FIELD_MODULUS) for y in ys)
        for x in xs
    )

    return PoseidonParams(
        t=t,
        partial_rounds=partial_rounds,
        round_constants=round_constants,
        mds=mds,
    )


def to_field_element(value: FieldInput, index: int = 0) -> int:
    """
    Interpret a hash input as a field element.

    Byte inputs must be exactly 32 bytes, read big-endian.
    Values >= FIELD_MODULUS are rejected, never reduced.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 32:
            raise InvalidInput(f"inputs[{index}]", f"expected 32 bytes, got {len(value)}")
        value = int.from_bytes(value, "big")
    elif not isinstance(value, int):
        raise TypeError(f"Poseidon inputs must be bytes or int, got {type(value)!r}")

    if value < 0 or value >= FIELD_MODULUS:
        raise FieldElementOutOfRange(f"inputs[{index}]", "not in the BN254 scalar field")
    return value


def permute(state: list[int]) -> list[int]:
    """Apply the Poseidon permutation to a full state (len == t)."""
    p = FIELD_MODULUS
    params = get_params(len(state))
    half_full = FULL_ROUNDS // 2
    total_rounds = FULL_ROUNDS + params.partial_rounds

    for r in range(total_rounds):
        constants = params.round_constants[r]
        state = [(s + c) % p for s, c in zip(state, constants)]

        if r < half_full or r >= half_full + params.partial_rounds:
            state = [pow(s, 5, p) for s in state]
        else:
            state[0] = pow(state[0], 5, p)

        state = [
            sum(m * s for m, s in zip(row, state)) % p
            for row in params.mds
        ]

    return state


def poseidon_int(inputs: Sequence[FieldInput]) -> int:
    """Hash 1..16 field elements to a single field element."""
    if not 1 <= len(inputs) <= MAX_INPUTS:
        raise ValueError(f"Poseidon takes 1 to {MAX_INPUTS} inputs, got {len(inputs)}")
    state = [0] + [to_field_element(v, i) for i, v in enumerate(inputs)]
    return permute(state)[0]


def poseidon_hash(inputs: Sequence[FieldInput]) -> bytes:
    """Hash 1..16 field elements, returning the digest as 32 big-endian bytes."""
    return poseidon_int(inputs).to_bytes(32, "big")

"""
Shared fixtures.

ArithmeticPrimitives is a stand-in provider whose outputs can be computed
by hand: hash(x_0, ..., x_n) = sum((i + 1) * x_i) mod p. It is position
sensitive, so it still tells reordered inputs apart, and it lets the note
tests pin exact golden values for every step of the derivation chain.
"""

import pytest

from shielded_notes.crypto.poseidon import FIELD_MODULUS
from shielded_notes.crypto.primitives import ReferencePrimitives


def enc(n: int) -> bytes:
    return n.to_bytes(32, "big")


def dec(b: bytes) -> int:
    return int.from_bytes(b, "big")


class ArithmeticPrimitives:
    """Deterministic, hand-checkable primitives for golden-vector tests."""

    def __init__(self):
        self.calls = []

    def poseidon(self, inputs):
        self.calls.append(("poseidon", len(inputs)))
        total = sum((i + 1) * dec(x) for i, x in enumerate(inputs))
        return enc(total % FIELD_MODULUS)

    def derive_public_key(self, private_key):
        self.calls.append(("derive_public_key", 1))
        k = dec(private_key)
        return enc((k + 1) % FIELD_MODULUS), enc((k + 2) % FIELD_MODULUS)

    def sign(self, private_key, message):
        self.calls.append(("sign", 1))
        k = dec(private_key) % FIELD_MODULUS
        m = dec(message)
        return message, enc(k), enc(k * m % FIELD_MODULUS)

    def verify(self, public_key, message, signature):
        k = (dec(public_key[0]) - 1) % FIELD_MODULUS
        m = dec(message)
        return tuple(signature) == (message, enc(k), enc(k * m % FIELD_MODULUS))


@pytest.fixture
def arith():
    return ArithmeticPrimitives()


@pytest.fixture(scope="session")
def reference():
    return ReferencePrimitives()

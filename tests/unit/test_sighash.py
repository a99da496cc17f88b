"""
Unit tests for shielded_notes.core.sighash — the transaction hash a spend
signature binds to, and end-to-end signature verification.
"""

import pytest

from shielded_notes.core.note import (
    ShieldedNote,
    generate_note_random,
    generate_spending_key,
    generate_viewing_key,
)
from shielded_notes.core.sighash import (
    MAX_TRANSACTION_NOTES,
    compute_sighash,
    verify_transaction_signature,
)
from shielded_notes.core.token import TokenData, TokenType
from shielded_notes.errors import InvalidInput

TOKEN = TokenData(TokenType.FUNGIBLE, "0x" + "5a" * 20)


def _enc(n: int) -> bytes:
    return n.to_bytes(32, "big")


@pytest.fixture(scope="module")
def note():
    return ShieldedNote(
        generate_spending_key(), generate_viewing_key(), 1_000, generate_note_random(), TOKEN
    )


@pytest.fixture(scope="module")
def tx():
    """A spend of two notes producing two outputs."""
    return {
        "merkle_root": _enc(0xA1),
        "bound_params_hash": _enc(0xB2),
        "nullifiers": [_enc(0xC3), _enc(0xC4)],
        "commitments_out": [_enc(0xD5), _enc(0xD6)],
    }


class TestComputeSighash:

    def test_golden(self, arith):
        assert compute_sighash(_enc(1), _enc(2), [_enc(3)], [_enc(4)], arith) == _enc(30)

    def test_absorbs_everything_in_one_hash(self, arith):
        compute_sighash(_enc(1), _enc(2), [_enc(3)] * 3, [_enc(4)] * 4, arith)
        assert arith.calls == [("poseidon", 9)]

    def test_order_matters(self, reference):
        a = compute_sighash(_enc(1), _enc(2), [_enc(3), _enc(4)], [], reference)
        b = compute_sighash(_enc(1), _enc(2), [_enc(4), _enc(3)], [], reference)
        assert a != b

    def test_flat_absorption(self, reference):
        """Nullifiers and commitments are absorbed as one flat sequence."""
        a = compute_sighash(_enc(1), _enc(2), [_enc(3)], [_enc(4)], reference)
        b = compute_sighash(_enc(1), _enc(2), [_enc(3), _enc(4)], [], reference)
        assert a == b

    def test_limit(self, reference):
        nullifiers = [_enc(i) for i in range(MAX_TRANSACTION_NOTES)]
        compute_sighash(_enc(1), _enc(2), nullifiers, [], reference)
        with pytest.raises(InvalidInput):
            compute_sighash(_enc(1), _enc(2), nullifiers, [_enc(99)], reference)


    @pytest.mark.parametrize("field, args", [
        ("merkle_root", (b"\x01", _enc(2), [_enc(3)], [_enc(4)])),
        ("bound_params_hash", (_enc(1), b"", [_enc(3)], [_enc(4)])),
        ("nullifiers[1]", (_enc(1), _enc(2), [_enc(3), b"\x03"], [_enc(4)])),
        ("commitments_out[0]", (_enc(1), _enc(2), [_enc(3)], [b"\x00" + _enc(4)])),
    ])
    def test_inputs_must_be_32_bytes(self, arith, field, args):
        with pytest.raises(InvalidInput) as exc_info:
            compute_sighash(*args, arith)
        assert exc_info.value.field == field
        assert arith.calls == []

    def test_empty_nullifier_rejected(self, reference):
        with pytest.raises(InvalidInput):
            compute_sighash(_enc(1), _enc(2), [b""], [_enc(4)], reference)


class TestVerifyTransactionSignature:

    def test_valid(self, note, tx, reference):
        signature = note.sign(**tx, primitives=reference)
        public_key = note.spending_public_key(reference)
        assert verify_transaction_signature(
            public_key, signature=signature, primitives=reference, **tx
        ) is True

    def test_reordered_nullifiers_rejected(self, note, tx, reference):
        signature = note.sign(**tx, primitives=reference)
        replayed = dict(tx, nullifiers=list(reversed(tx["nullifiers"])))
        assert verify_transaction_signature(
            note.spending_public_key(reference), signature=signature,
            primitives=reference, **replayed
        ) is False

    def test_substituted_commitment_rejected(self, note, tx, reference):
        signature = note.sign(**tx, primitives=reference)
        forged = dict(tx, commitments_out=[_enc(0xD5), _enc(0xEE)])
        assert verify_transaction_signature(
            note.spending_public_key(reference), signature=signature,
            primitives=reference, **forged
        ) is False

    def test_different_root_rejected(self, note, tx, reference):
        signature = note.sign(**tx, primitives=reference)
        moved = dict(tx, merkle_root=_enc(0xA2))
        assert verify_transaction_signature(
            note.spending_public_key(reference), signature=signature,
            primitives=reference, **moved
        ) is False

    def test_wrong_key_rejected(self, note, tx, reference):
        other = ShieldedNote(
            generate_spending_key(), generate_viewing_key(), 1, generate_note_random(), TOKEN
        )
        signature = note.sign(**tx, primitives=reference)
        assert verify_transaction_signature(
            other.spending_public_key(reference), signature=signature,
            primitives=reference, **tx
        ) is False

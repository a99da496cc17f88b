#!/usr/bin/env python3
"""
Example 02: Spend a note into a new shielded note plus a withdrawal.

Builds the nullifier of the input note, the commitments of both outputs,
signs the transaction and checks the signature, then shows that swapping
the output order invalidates it.

Usage:
    python examples/02_sign_spend.py
"""

import secrets

from shielded_notes import (
    ShieldedNote,
    TokenData,
    TokenType,
    WithdrawNote,
    verify_transaction_signature,
)
from shielded_notes.core import (
    generate_note_random,
    generate_spending_key,
    generate_viewing_key,
    to_hex,
)
from shielded_notes.crypto import FIELD_MODULUS

token = TokenData(TokenType.FUNGIBLE, "0x" + "11" * 20)
spending_key = generate_spending_key()
viewing_key = generate_viewing_key()

# Input: 100 units sitting at leaf 7 of the commitment tree
note_in = ShieldedNote(spending_key, viewing_key, 100, generate_note_random(), token)
leaf_index = 7

# Outputs: 60 units of change back to ourselves, 40 withdrawn to a public address
change = ShieldedNote(spending_key, viewing_key, 60, generate_note_random(), token)
withdrawal = WithdrawNote("0x" + "22" * 20, 40, token)

# Both would come from the tree / transaction builder in a real wallet
merkle_root = secrets.randbelow(FIELD_MODULUS).to_bytes(32, "big")
bound_params_hash = secrets.randbelow(FIELD_MODULUS).to_bytes(32, "big")

nullifiers = [note_in.nullifier(leaf_index)]
commitments_out = [change.commitment_hash(), withdrawal.commitment_hash()]

signature = note_in.sign(merkle_root, bound_params_hash, nullifiers, commitments_out)
public_key = note_in.spending_public_key()

print("=== Spend ===")
print(f"Nullifier:   {to_hex(nullifiers[0])}")
for i, c in enumerate(commitments_out):
    print(f"Output {i}:    {to_hex(c)}")
print(f"Signature:   ({', '.join(to_hex(p)[:18] + '...' for p in signature)})")

ok = verify_transaction_signature(
    public_key, merkle_root, bound_params_hash, nullifiers, commitments_out, signature
)
print(f"Valid:       {ok}")

swapped = list(reversed(commitments_out))
ok = verify_transaction_signature(
    public_key, merkle_root, bound_params_hash, nullifiers, swapped, signature
)
print(f"Valid with outputs swapped: {ok}")

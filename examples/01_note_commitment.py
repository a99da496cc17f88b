#!/usr/bin/env python3
"""
Example 01: Create a shielded note and derive its public values.

Generates fresh key material, builds a note for 100 units of an ERC20-style
token and prints the values that get published: the commitment hash (tree
leaf) and the nullifier for a given leaf index.

Usage:
    python examples/01_note_commitment.py
    python examples/01_note_commitment.py 0x6b175474e89094c44da98b954eedeac495271d0f 250
"""

import sys

from shielded_notes import ShieldedNote, TokenData, TokenType
from shielded_notes.core import (
    generate_note_random,
    generate_spending_key,
    generate_viewing_key,
    to_hex,
)

DEFAULT_TOKEN = "0x6b175474e89094c44da98b954eedeac495271d0f"
token_address = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_TOKEN
value = int(sys.argv[2]) if len(sys.argv) > 2 else 100

note = ShieldedNote(
    spending_key=generate_spending_key(),
    viewing_key=generate_viewing_key(),
    value=value,
    random=generate_note_random(),
    token_data=TokenData(TokenType.FUNGIBLE, token_address),
)

print("=== Shielded note ===")
print(f"Token:             {token_address}")
print(f"Value:             {value}")
print(f"Token ID:          {to_hex(note.token_id())}")
print(f"Master public key: {to_hex(note.master_public_key())}")
print(f"Note public key:   {to_hex(note.note_public_key())}")
print(f"Commitment:        {to_hex(note.commitment_hash())}")

# The leaf index is assigned once the commitment is inserted into the tree
for leaf_index in (0, 1):
    print(f"Nullifier @ leaf {leaf_index}: {to_hex(note.nullifier(leaf_index))}")

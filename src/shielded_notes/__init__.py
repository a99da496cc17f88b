"""
shielded-notes: note commitments, nullifiers and spend signatures for a
shielded value-transfer pool.

Usage:
    from shielded_notes import ShieldedNote, TokenData, TokenType

    token = TokenData(TokenType.FUNGIBLE, "0x" + "ab" * 20)
    note = ShieldedNote(spending_key, viewing_key, 100, random, token)
    note.commitment_hash()
"""

from shielded_notes.core.note import ShieldedNote, WithdrawNote
from shielded_notes.core.sighash import compute_sighash, verify_transaction_signature
from shielded_notes.core.token import TokenData, TokenType, get_token_id, validate_token_data
from shielded_notes.crypto.primitives import CryptoPrimitives, ReferencePrimitives

__version__ = "0.1.0"
__all__ = [
    "ShieldedNote",
    "WithdrawNote",
    "TokenData",
    "TokenType",
    "get_token_id",
    "validate_token_data",
    "compute_sighash",
    "verify_transaction_signature",
    "CryptoPrimitives",
    "ReferencePrimitives",
]

"""core module init"""
from shielded_notes.core.encoding import (
    bytes_to_int,
    check_word,
    decode_hex_address,
    encode32,
    encode_hex_address,
    hex_to_bytes,
    pad32,
    to_hex,
)
from shielded_notes.core.note import (
    MAX_VALUE,
    ShieldedNote,
    WithdrawNote,
    generate_note_random,
    generate_spending_key,
    generate_viewing_key,
)
from shielded_notes.core.sighash import (
    MAX_TRANSACTION_NOTES,
    compute_sighash,
    verify_transaction_signature,
)
from shielded_notes.core.token import (
    TokenData,
    TokenType,
    check_token_data,
    get_token_id,
    validate_token_data,
)

__all__ = [
    "MAX_TRANSACTION_NOTES",
    "MAX_VALUE",
    "ShieldedNote",
    "TokenData",
    "TokenType",
    "WithdrawNote",
    "bytes_to_int",
    "check_token_data",
    "check_word",
    "compute_sighash",
    "decode_hex_address",
    "encode32",
    "encode_hex_address",
    "generate_note_random",
    "generate_spending_key",
    "generate_viewing_key",
    "get_token_id",
    "hex_to_bytes",
    "pad32",
    "to_hex",
    "validate_token_data",
    "verify_transaction_signature",
]

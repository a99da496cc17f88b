from typing import Annotated

from pydantic import BaseModel, Field

from shielded_notes.core.encoding import hex_to_bytes
from shielded_notes.core.note import ShieldedNote, WithdrawNote
from shielded_notes.core.token import TokenData, TokenType

HEX32 = r"^(0x)?[0-9a-fA-F]{64}$"
HEX16 = r"^(0x)?[0-9a-fA-F]{32}$"

Hex32 = Annotated[str, Field(pattern=HEX32)]


class TokenDataModel(BaseModel):
    """Token descriptor as carried in request bodies."""

    token_type: int = Field(..., description="0 = fungible, 1 = unique NFT, 2 = semi-fungible")
    token_address: str = Field(..., description="0x-prefixed 20-byte contract address")
    token_sub_id: int = Field(0, description="Token instance id (0 for fungible tokens)")

    def to_token_data(self) -> TokenData:
        try:
            token_type = TokenType(self.token_type)
        except ValueError:
            token_type = self.token_type
        return TokenData(token_type, self.token_address, self.token_sub_id)


class ShieldedNoteModel(BaseModel):
    """Full note contents. Contains secrets: only send to a service you run."""

    spending_key: str = Field(..., pattern=HEX32, description="32-byte spending key (hex)")
    viewing_key: str = Field(..., pattern=HEX32, description="32-byte viewing key (hex)")
    value: int = Field(..., ge=0, description="Note value in base units")
    random: str = Field(..., pattern=HEX16, description="16-byte note random (hex)")
    token: TokenDataModel

    def to_note(self) -> ShieldedNote:
        return ShieldedNote(
            spending_key=hex_to_bytes(self.spending_key, "spending_key"),
            viewing_key=hex_to_bytes(self.viewing_key, "viewing_key"),
            value=self.value,
            random=hex_to_bytes(self.random, "random"),
            token_data=self.token.to_token_data(),
        )


class TokenIdResponse(BaseModel):
    token_id: str = Field(..., description="32-byte token identifier (hex)")


class CommitmentRequest(BaseModel):
    note: ShieldedNoteModel


class CommitmentResponse(BaseModel):
    """Public values derived from a shielded note."""

    commitment_hash: str = Field(..., description="Commitment to insert into the tree")
    note_public_key: str
    master_public_key: str
    token_id: str


class NullifierRequest(BaseModel):
    note: ShieldedNoteModel
    leaf_index: int = Field(..., ge=0, description="Position of the note in the commitment tree")


class NullifierResponse(BaseModel):
    nullifier: str
    leaf_index: int


class SignRequest(BaseModel):
    """Transaction context a spend signature binds to."""

    note: ShieldedNoteModel
    merkle_root: str = Field(..., pattern=HEX32)
    bound_params_hash: str = Field(..., pattern=HEX32)
    nullifiers: list[Hex32] = Field(default_factory=list, description="Nullifiers in transaction order")
    commitments_out: list[Hex32] = Field(
        default_factory=list, description="Output commitments in transaction order"
    )


class SignResponse(BaseModel):
    sighash: str
    signature: list[str] = Field(..., description="[R8.x, R8.y, S] (hex)")
    public_key: list[str] = Field(..., description="Spending public key [x, y] (hex)")


class VerifyRequest(BaseModel):
    public_key: list[Hex32] = Field(..., min_length=2, max_length=2)
    signature: list[Hex32] = Field(..., min_length=3, max_length=3)
    merkle_root: str = Field(..., pattern=HEX32)
    bound_params_hash: str = Field(..., pattern=HEX32)
    nullifiers: list[Hex32] = Field(default_factory=list)
    commitments_out: list[Hex32] = Field(default_factory=list)


class VerifyResponse(BaseModel):
    valid: bool


class WithdrawCommitmentRequest(BaseModel):
    withdraw_address: str = Field(..., description="0x-prefixed 20-byte payout address")
    value: int = Field(..., ge=0)
    token: TokenDataModel

    def to_note(self) -> WithdrawNote:
        return WithdrawNote(
            withdraw_address=self.withdraw_address,
            value=self.value,
            token_data=self.token.to_token_data(),
        )


class WithdrawCommitmentResponse(BaseModel):
    commitment_hash: str
    note_public_key: str
    token_id: str

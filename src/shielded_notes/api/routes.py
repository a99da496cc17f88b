import logging

from fastapi import APIRouter, HTTPException, Request

from shielded_notes.api.models import (
    CommitmentRequest,
    CommitmentResponse,
    NullifierRequest,
    NullifierResponse,
    SignRequest,
    SignResponse,
    TokenDataModel,
    TokenIdResponse,
    VerifyRequest,
    VerifyResponse,
    WithdrawCommitmentRequest,
    WithdrawCommitmentResponse,
)
from shielded_notes.core.encoding import hex_to_bytes, to_hex
from shielded_notes.core.sighash import compute_sighash, verify_transaction_signature
from shielded_notes.core.token import get_token_id

logger = logging.getLogger("shielded_notes.api")

router = APIRouter(tags=["Notes"])


def get_primitives(request: Request):
    """Dependency to retrieve the primitives provider from app state."""
    primitives = getattr(request.app.state, "primitives", None)
    if not primitives:
        raise HTTPException(status_code=500, detail="primitives provider not initialized")
    return primitives


def _check_tx_size(request: Request, nullifiers: list[str], commitments_out: list[str]) -> None:
    limit = request.app.state.settings.max_tx_notes
    count = len(nullifiers) + len(commitments_out)
    if count > limit:
        logger.warning(f"Rejected transaction with {count} notes (limit {limit})")
        raise HTTPException(
            status_code=400,
            detail=f"Too many nullifiers and commitments: {count} > {limit}",
        )


def _hex_list(values: list[str], field: str) -> list[bytes]:
    return [hex_to_bytes(v, f"{field}[{i}]") for i, v in enumerate(values)]


@router.post("/token-id", response_model=TokenIdResponse)
def token_id(request: Request, req: TokenDataModel):
    """Compute the 32-byte identifier for a token descriptor."""
    primitives = get_primitives(request)
    return TokenIdResponse(token_id=to_hex(get_token_id(req.to_token_data(), primitives)))


@router.post("/notes/commitment", response_model=CommitmentResponse)
def note_commitment(request: Request, req: CommitmentRequest):
    """
    Derive the public values of a shielded note.

    The commitment hash is what gets inserted into the commitment tree.
    """
    primitives = get_primitives(request)
    note = req.note.to_note()

    return CommitmentResponse(
        commitment_hash=to_hex(note.commitment_hash(primitives)),
        note_public_key=to_hex(note.note_public_key(primitives)),
        master_public_key=to_hex(note.master_public_key(primitives)),
        token_id=to_hex(note.token_id(primitives)),
    )


@router.post("/notes/nullifier", response_model=NullifierResponse)
def note_nullifier(request: Request, req: NullifierRequest):
    """Compute the nullifier for a note sitting at `leaf_index` in the tree."""
    primitives = get_primitives(request)
    note = req.note.to_note()
    return NullifierResponse(
        nullifier=to_hex(note.nullifier(req.leaf_index, primitives)),
        leaf_index=req.leaf_index,
    )


@router.post("/notes/sign", response_model=SignResponse)
def note_sign(request: Request, req: SignRequest):
    """
    Sign a spend of the note.

    Nullifiers and output commitments are signed in the order given.
    """
    primitives = get_primitives(request)
    _check_tx_size(request, req.nullifiers, req.commitments_out)

    note = req.note.to_note()
    merkle_root = hex_to_bytes(req.merkle_root, "merkle_root")
    bound_params_hash = hex_to_bytes(req.bound_params_hash, "bound_params_hash")
    nullifiers = _hex_list(req.nullifiers, "nullifiers")
    commitments_out = _hex_list(req.commitments_out, "commitments_out")

    sighash = compute_sighash(
        merkle_root, bound_params_hash, nullifiers, commitments_out, primitives
    )
    signature = note.sign(
        merkle_root, bound_params_hash, nullifiers, commitments_out, primitives
    )

    return SignResponse(
        sighash=to_hex(sighash),
        signature=[to_hex(part) for part in signature],
        public_key=[to_hex(part) for part in note.spending_public_key(primitives)],
    )


@router.post("/notes/verify", response_model=VerifyResponse)
def note_verify(request: Request, req: VerifyRequest):
    """Check a spend signature against its transaction context."""
    primitives = get_primitives(request)
    _check_tx_size(request, req.nullifiers, req.commitments_out)

    valid = verify_transaction_signature(
        tuple(_hex_list(req.public_key, "public_key")),
        hex_to_bytes(req.merkle_root, "merkle_root"),
        hex_to_bytes(req.bound_params_hash, "bound_params_hash"),
        _hex_list(req.nullifiers, "nullifiers"),
        _hex_list(req.commitments_out, "commitments_out"),
        tuple(_hex_list(req.signature, "signature")),
        primitives,
    )
    return VerifyResponse(valid=valid)


@router.post("/withdrawals/commitment", response_model=WithdrawCommitmentResponse)
def withdraw_commitment(request: Request, req: WithdrawCommitmentRequest):
    """Derive the commitment of a withdrawal note paying out to a public address."""
    primitives = get_primitives(request)
    note = req.to_note()
    return WithdrawCommitmentResponse(
        commitment_hash=to_hex(note.commitment_hash(primitives)),
        note_public_key=to_hex(note.note_public_key()),
        token_id=to_hex(note.token_id(primitives)),
    )

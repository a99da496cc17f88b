"""
API module for shielded-notes.

Provides FastAPI routes and models exposing note derivations as a REST API.
"""

from shielded_notes.api.models import (
    CommitmentRequest,
    CommitmentResponse,
    NullifierRequest,
    NullifierResponse,
    SignRequest,
    SignResponse,
    WithdrawCommitmentRequest,
    WithdrawCommitmentResponse,
)

__all__ = [
    "CommitmentRequest",
    "CommitmentResponse",
    "NullifierRequest",
    "NullifierResponse",
    "SignRequest",
    "SignResponse",
    "WithdrawCommitmentRequest",
    "WithdrawCommitmentResponse",
]

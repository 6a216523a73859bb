"""Schemas for Community Fund vote endpoints."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from poolhq.models import VoteChoice, VoteType


class VoteIntentPayload(BaseModel):
    hash: str = Field(..., min_length=1, max_length=64)
    choice: VoteChoice


class VoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    hash: str
    type: VoteType
    choice: VoteChoice
    committed: bool


class PropagationOutcomeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    address: str
    vote_hash: str
    vote_type: VoteType
    succeeded: bool
    error: str | None = None


class PropagationRead(BaseModel):
    succeeded: bool
    error: str | None = None
    outcomes: list[PropagationOutcomeRead]


class VoteUpdateResponse(BaseModel):
    votes: list[VoteRead]
    propagation: PropagationRead


__all__ = [
    "PropagationOutcomeRead",
    "PropagationRead",
    "VoteIntentPayload",
    "VoteRead",
    "VoteUpdateResponse",
]

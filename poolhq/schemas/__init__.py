"""Pydantic schemas package."""

from .vote import (
    PropagationOutcomeRead,
    PropagationRead,
    VoteIntentPayload,
    VoteRead,
    VoteUpdateResponse,
)

__all__ = [
    "PropagationOutcomeRead",
    "PropagationRead",
    "VoteIntentPayload",
    "VoteRead",
    "VoteUpdateResponse",
]

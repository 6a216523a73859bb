"""Matching of submitted vote intents against stored votes."""
from __future__ import annotations

from collections.abc import Iterable

from poolhq.models import Vote, VoteType


def match_vote(hash: str, vote_type: VoteType, votes: Iterable[Vote]) -> Vote | None:
    """Return the first vote with the given ``hash`` and ``vote_type``, or ``None``."""

    for vote in votes:
        if vote.hash == hash and vote.type == vote_type:
            return vote
    return None


__all__ = ["match_vote"]

"""Persistence of Community Fund votes."""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select, text
from sqlalchemy.orm import Session

from poolhq.models import Vote, VoteChoice, VoteType


class VoteStore:
    """Session-bound access to the ``votes`` table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed batch in one write transaction.

        SQLite takes the write lock up front with ``BEGIN IMMEDIATE``; other
        dialects run the batch on a connection checked out at SERIALIZABLE
        isolation. A transaction left open by earlier work on the session is
        committed first so the batch always starts on a fresh one. The batch
        is committed on exit and rolled back if anything in the block (or the
        commit itself) fails.
        """

        bind = self._session.get_bind()
        if bind is None:
            raise RuntimeError("Session is not bound to an engine")

        try:
            if self._session.in_transaction():
                self._session.commit()
            if bind.dialect.name == "sqlite":
                self._session.execute(text("BEGIN IMMEDIATE"))
            else:
                self._session.connection(execution_options={"isolation_level": "SERIALIZABLE"})
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def list_votes(self, user_id: str, vote_type: VoteType) -> list[Vote]:
        statement = (
            select(Vote)
            .where(Vote.user_id == user_id, Vote.type == vote_type)
            .order_by(Vote.created_at, Vote.id)
        )
        return list(self._session.scalars(statement).all())

    def create(self, *, user_id: str, vote_type: VoteType, hash: str, choice: VoteChoice) -> Vote:
        vote = Vote(user_id=user_id, type=vote_type, hash=hash, choice=choice, committed=False)
        self._session.add(vote)
        self._session.flush()
        return vote

    def update_choice(self, vote: Vote, choice: VoteChoice) -> Vote:
        vote.choice = choice
        vote.committed = False
        self._session.flush()
        return vote

    def save(self, vote: Vote) -> None:
        """Persist a single vote outside of any batch."""

        self._session.add(vote)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise


__all__ = ["VoteStore"]

"""Community Fund vote ORM model."""
from __future__ import annotations

import enum
import uuid

from sqlalchemy import Boolean, Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from poolhq.models.base import Base, TimestampMixin


class VoteType(str, enum.Enum):
    PROPOSAL = "PROPOSAL"
    PAYMENT_REQUEST = "PAYMENT_REQUEST"


class VoteChoice(str, enum.Enum):
    YES = "YES"
    NO = "NO"
    ABSTAIN = "ABSTAIN"


class Vote(TimestampMixin, Base):
    """A user's current choice on a proposal or payment request.

    ``committed`` is only true while the stored choice matches what the pool
    accepted for every address of the user in the last propagation pass.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "type", "hash", name="uq_votes_user_type_hash"),
        Index("ix_votes_user_id_type", "user_id", "type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[VoteType] = mapped_column(Enum(VoteType, name="vote_type"), nullable=False)
    hash: Mapped[str] = mapped_column(String(64), nullable=False)
    choice: Mapped[VoteChoice] = mapped_column(Enum(VoteChoice, name="vote_choice"), nullable=False)
    committed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"Vote(user_id={self.user_id!r}, type={self.type!r}, hash={self.hash!r}, "
            f"choice={self.choice!r}, committed={self.committed!r})"
        )


__all__ = ["Vote", "VoteChoice", "VoteType"]

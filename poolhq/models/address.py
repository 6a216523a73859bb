"""User address ORM model."""
from __future__ import annotations

import uuid

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from poolhq.models.base import Base, TimestampMixin


class UserAddress(TimestampMixin, Base):
    """Blockchain address registered to a user of the pool."""

    __tablename__ = "user_addresses"
    __table_args__ = (
        UniqueConstraint("user_id", "spending_address", name="uq_user_addresses_user_spending"),
        Index("ix_user_addresses_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    spending_address: Mapped[str] = mapped_column(String(64), nullable=False)
    staking_address: Mapped[str | None] = mapped_column(String(64))


__all__ = ["UserAddress"]

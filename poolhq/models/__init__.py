"""ORM models package."""
from .address import UserAddress
from .base import Base, TimestampMixin
from .vote import Vote, VoteChoice, VoteType

__all__ = [
    "Base",
    "TimestampMixin",
    "UserAddress",
    "Vote",
    "VoteChoice",
    "VoteType",
]

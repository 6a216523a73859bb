"""Lookup of the blockchain addresses controlled by a user."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poolhq.models import UserAddress


class AddressLookupError(RuntimeError):
    """Raised when a user's addresses cannot be retrieved."""


@dataclass(slots=True, frozen=True)
class Address:
    spending_address: str
    staking_address: str | None = None


class AddressResolver(Protocol):
    """Protocol describing a source of user addresses."""

    def get_addresses(self, user_id: str) -> list[Address]:
        """Return the addresses of ``user_id`` or raise :class:`AddressLookupError`."""


class DatabaseAddressResolver:
    """Reads addresses registered in the ``user_addresses`` table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_addresses(self, user_id: str) -> list[Address]:
        statement = (
            select(UserAddress)
            .where(UserAddress.user_id == user_id)
            .order_by(UserAddress.created_at, UserAddress.id)
        )
        try:
            rows = self._session.scalars(statement).all()
        except SQLAlchemyError as exc:
            raise AddressLookupError(f"Unable to retrieve addresses for user '{user_id}'") from exc
        return [
            Address(spending_address=row.spending_address, staking_address=row.staking_address)
            for row in rows
        ]


__all__ = ["Address", "AddressLookupError", "AddressResolver", "DatabaseAddressResolver"]

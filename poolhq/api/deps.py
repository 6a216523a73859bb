"""Common dependencies for API routes."""
from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from poolhq.core.config import Settings, get_settings
from poolhq.db.session import SessionLocal
from poolhq.services.addresses import AddressResolver, DatabaseAddressResolver
from poolhq.services.community_fund import CommunityFundService
from poolhq.services.pool_client import PoolApiClient, PoolStatsSource, VoteSubmitter


def get_db_session() -> Iterator[Session]:
    """Yield a database session for FastAPI dependencies."""

    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_address_resolver(session: Session = Depends(get_db_session)) -> AddressResolver:
    return DatabaseAddressResolver(session)


def get_vote_submitter() -> VoteSubmitter | None:
    """Return ``None`` so the service opens a pool client per propagation pass."""

    return None


def get_pool_stats_source(settings: Settings = Depends(get_settings)) -> Iterator[PoolStatsSource]:
    client = PoolApiClient.from_settings(settings)
    try:
        yield client
    finally:
        client.close()


def get_community_fund_service(
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    address_resolver: AddressResolver = Depends(get_address_resolver),
    pool_client: VoteSubmitter | None = Depends(get_vote_submitter),
) -> CommunityFundService:
    return CommunityFundService(
        session,
        settings=settings,
        address_resolver=address_resolver,
        pool_client=pool_client,
    )


__all__ = [
    "get_address_resolver",
    "get_community_fund_service",
    "get_db_session",
    "get_pool_stats_source",
    "get_vote_submitter",
]

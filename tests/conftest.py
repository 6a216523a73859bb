from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

DATABASE_URL = "sqlite+pysqlite:///./test_suite.db"

# Module level engine creation in poolhq.db.session must not need a Postgres driver.
os.environ.setdefault("DATABASE_URL", DATABASE_URL)
os.environ.setdefault("ENABLE_TRACING", "false")

from poolhq.api.deps import get_db_session, get_vote_submitter
from poolhq.core.config import Settings, get_settings
from poolhq.main import app
from poolhq.models import Base, UserAddress
from poolhq.services.pool_client import PoolApiError


engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class RecordingPoolClient:
    """In-memory stand-in for the pool API recording every submission.

    ``fail_addresses`` and ``fail_hashes`` make matching submissions raise
    :class:`PoolApiError`.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, str]] = []
        self.fail_addresses: set[str] = set()
        self.fail_hashes: set[str] = set()
        self.on_submit: Callable[[str, str, str], None] | None = None

    def submit_proposal_vote(self, address: str, hash: str, choice: str) -> None:
        self._record("proposal", address, hash, choice)

    def submit_payment_request_vote(self, address: str, hash: str, choice: str) -> None:
        self._record("payment_request", address, hash, choice)

    def _record(self, endpoint: str, address: str, hash: str, choice: str) -> None:
        self.calls.append((endpoint, address, hash, choice))
        if self.on_submit is not None:
            self.on_submit(address, hash, choice)
        if address in self.fail_addresses or hash in self.fail_hashes:
            raise PoolApiError(f"pool rejected {hash} for {address}")


@pytest.fixture()
def settings() -> Settings:
    return get_settings()


@pytest.fixture()
def db_session() -> Iterator[Session]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session
    session.close()


@pytest.fixture()
def pool_client() -> RecordingPoolClient:
    return RecordingPoolClient()


@pytest.fixture()
def add_address(db_session: Session) -> Callable[..., UserAddress]:
    def _add(user_id: str, spending_address: str, staking_address: str | None = None) -> UserAddress:
        address = UserAddress(
            user_id=user_id,
            spending_address=spending_address,
            staking_address=staking_address,
        )
        db_session.add(address)
        db_session.commit()
        return address

    return _add


@pytest.fixture()
def client(db_session: Session, pool_client: RecordingPoolClient) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[Session]:
        try:
            yield db_session
        finally:
            db_session.rollback()

    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_vote_submitter] = lambda: pool_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db_session, None)
    app.dependency_overrides.pop(get_vote_submitter, None)


@pytest.fixture()
def make_token(settings: Settings) -> Callable[[str], str]:
    def _make(user_id: str) -> str:
        return jwt.encode(
            {settings.jwt_identity_key: user_id},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

    return _make


@pytest.fixture()
def auth_headers(make_token: Callable[[str], str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('user-1')}"}

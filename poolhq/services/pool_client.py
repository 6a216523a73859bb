"""HTTP client for the staking pool's Community Fund voting API."""
from __future__ import annotations

from typing import Any, Protocol

import httpx

from poolhq.core.config import Settings
from poolhq.obs import inject_traceparent

# httpx raises InvalidURL and StreamError outside the HTTPError hierarchy.
_CLIENT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


class PoolApiError(RuntimeError):
    """Raised when a call to the pool API fails."""


class VoteSubmitter(Protocol):
    """Protocol describing the pool's vote submission endpoints."""

    def submit_proposal_vote(self, address: str, hash: str, choice: str) -> None:
        """Register ``choice`` for proposal ``hash`` on behalf of ``address``."""

    def submit_payment_request_vote(self, address: str, hash: str, choice: str) -> None:
        """Register ``choice`` for payment request ``hash`` on behalf of ``address``."""


class PoolStatsSource(Protocol):
    """Protocol describing the pool's network statistics endpoint."""

    def get_pool_stats(self) -> dict[str, Any]:
        """Return the pool statistics for the configured network."""


class PoolApiClient:
    """Synchronous wrapper around the pool voting HTTP API."""

    STATS_PATH = "/network/stats"
    PROPOSAL_VOTE_PATH = "/community-fund/proposal/vote"
    PAYMENT_REQUEST_VOTE_PATH = "/community-fund/payment-request/vote"

    def __init__(
        self,
        base_url: str,
        network: str,
        *,
        timeout: float | None = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._network = network
        self._timeout = timeout
        self._client = client or httpx.Client()
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: Settings, *, client: httpx.Client | None = None) -> "PoolApiClient":
        return cls(
            settings.pool_url,
            settings.selected_network,
            timeout=settings.pool_timeout_seconds,
            client=client,
        )

    @property
    def network(self) -> str:
        return self._network

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "PoolApiClient":
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def get_pool_stats(self) -> dict[str, Any]:
        headers = inject_traceparent({"Network": self._network})
        try:
            response = self._client.get(
                f"{self._base_url}{self.STATS_PATH}", headers=headers, timeout=self._timeout
            )
            response.raise_for_status()
            stats = response.json()
        except httpx.TimeoutException as exc:
            raise PoolApiError(f"Pool did not answer within {self._timeout}s for stats") from exc
        except httpx.HTTPStatusError as exc:
            raise PoolApiError(
                f"Pool stats request failed with status {exc.response.status_code}"
            ) from exc
        except _CLIENT_ERRORS as exc:
            raise PoolApiError("Failed to call pool API for stats") from exc
        except ValueError as exc:
            raise PoolApiError("Pool returned malformed stats") from exc
        if not isinstance(stats, dict):
            raise PoolApiError("Pool returned malformed stats")
        return stats

    def submit_proposal_vote(self, address: str, hash: str, choice: str) -> None:
        self._submit(self.PROPOSAL_VOTE_PATH, address=address, hash=hash, choice=choice)

    def submit_payment_request_vote(self, address: str, hash: str, choice: str) -> None:
        self._submit(self.PAYMENT_REQUEST_VOTE_PATH, address=address, hash=hash, choice=choice)

    def _submit(self, path: str, *, address: str, hash: str, choice: str) -> None:
        payload = {"address": address, "hash": hash, "vote": choice}
        headers = inject_traceparent({"Network": self._network})
        try:
            response = self._client.post(
                f"{self._base_url}{path}",
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise PoolApiError(f"Pool did not answer within {self._timeout}s for {hash}") from exc
        except httpx.HTTPStatusError as exc:
            raise PoolApiError(
                f"Pool rejected vote for {hash} with status {exc.response.status_code}"
            ) from exc
        except _CLIENT_ERRORS as exc:
            raise PoolApiError(f"Failed to call pool API for {hash}") from exc


__all__ = ["PoolApiClient", "PoolApiError", "PoolStatsSource", "VoteSubmitter"]

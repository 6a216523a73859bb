"""Prometheus metrics for the API and the vote propagation pipeline."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_LATENCY_SECONDS = Histogram(
    "http_request_latency_seconds",
    "Latency of HTTP requests in seconds.",
    labelnames=("method", "path"),
)
REQUEST_COUNTER = Counter(
    "http_requests_total",
    "Total number of HTTP requests processed.",
    labelnames=("method", "path", "status"),
)
REQUEST_ERROR_COUNTER = Counter(
    "http_request_errors_total",
    "Total number of HTTP requests that resulted in server errors.",
    labelnames=("method", "path", "status"),
)
VOTES_PERSISTED_COUNTER = Counter(
    "community_fund_votes_persisted_total",
    "Votes created or updated by committed local batches.",
    labelnames=("vote_type",),
)
POOL_SUBMISSION_COUNTER = Counter(
    "community_fund_pool_submissions_total",
    "Vote submissions sent to the pool, one per address and vote.",
    labelnames=("vote_type", "outcome"),
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware that records request metrics for Prometheus scraping."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:  # type: ignore[override]
        method = request.method
        path = request.url.path
        start_time = time.perf_counter()
        status = "500"

        try:
            response = await call_next(request)
            status = str(response.status_code)
            if response.status_code >= 500:
                REQUEST_ERROR_COUNTER.labels(method=method, path=path, status=status).inc()
            return response
        except Exception:
            REQUEST_ERROR_COUNTER.labels(method=method, path=path, status="500").inc()
            raise
        finally:
            latency = time.perf_counter() - start_time
            REQUEST_LATENCY_SECONDS.labels(method=method, path=path).observe(latency)
            REQUEST_COUNTER.labels(method=method, path=path, status=status).inc()


metrics_router = APIRouter(tags=["observability"])


@metrics_router.get("/metrics", include_in_schema=False)
def metrics_endpoint() -> Response:
    """Expose Prometheus metrics for scraping."""
    payload = generate_latest()
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


def record_votes_persisted(vote_type: str, count: int) -> None:
    if count:
        VOTES_PERSISTED_COUNTER.labels(vote_type=vote_type).inc(count)


def record_pool_submission(vote_type: str, *, succeeded: bool) -> None:
    outcome = "accepted" if succeeded else "failed"
    POOL_SUBMISSION_COUNTER.labels(vote_type=vote_type, outcome=outcome).inc()


__all__ = [
    "POOL_SUBMISSION_COUNTER",
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_LATENCY_SECONDS",
    "VOTES_PERSISTED_COUNTER",
    "metrics_endpoint",
    "metrics_router",
    "record_pool_submission",
    "record_votes_persisted",
]

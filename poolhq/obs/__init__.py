"""Observability utilities."""

from .metrics import (
    POOL_SUBMISSION_COUNTER,
    REQUEST_COUNTER,
    REQUEST_ERROR_COUNTER,
    REQUEST_LATENCY_SECONDS,
    VOTES_PERSISTED_COUNTER,
    PrometheusMiddleware,
    metrics_router,
    record_pool_submission,
    record_votes_persisted,
)
from .tracing import (
    initialise_tracing,
    inject_traceparent,
    instrument_fastapi_app,
    instrument_sqlalchemy_engine,
    start_span,
)

__all__ = [
    "POOL_SUBMISSION_COUNTER",
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_LATENCY_SECONDS",
    "VOTES_PERSISTED_COUNTER",
    "initialise_tracing",
    "inject_traceparent",
    "instrument_fastapi_app",
    "instrument_sqlalchemy_engine",
    "metrics_router",
    "record_pool_submission",
    "record_votes_persisted",
    "start_span",
]

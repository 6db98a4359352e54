"""Business metrics for console usage and upstream health."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

from webhook_console.infra.metrics.prometheus import REGISTRY, UPSTREAM_LATENCY_BUCKETS

# ============================================================================
# Error and Exception Metrics
# ============================================================================

errors_total = Counter(
    "errors_total",
    "Total number of errors by type and endpoint",
    ["error_type", "endpoint", "status_code"],
    registry=REGISTRY,
)

exceptions_unhandled_total = Counter(
    "exceptions_unhandled_total",
    "Total number of unhandled exceptions",
    ["exception_type", "endpoint"],
    registry=REGISTRY,
)

validation_errors_total = Counter(
    "validation_errors_total",
    "Total number of validation errors",
    ["endpoint", "field"],
    registry=REGISTRY,
)

# ============================================================================
# Authentication Metrics
# ============================================================================

auth_attempts_total = Counter(
    "auth_attempts_total",
    "Total number of console login attempts",
    ["method", "result"],  # result: success, failure
    registry=REGISTRY,
)

session_validations_total = Counter(
    "session_validations_total",
    "Total number of session cookie validations",
    ["result"],  # result: valid, missing, invalid, expired
    registry=REGISTRY,
)

# ============================================================================
# Upstream API Metrics
# ============================================================================

upstream_calls_total = Counter(
    "upstream_calls_total",
    "Total number of calls to the webhook-delivery API",
    # outcome: ok, not_found, rejected, error, timeout, unreachable
    ["operation", "outcome"],
    registry=REGISTRY,
)

upstream_call_duration_seconds = Histogram(
    "upstream_call_duration_seconds",
    "Webhook-delivery API call duration in seconds",
    ["operation"],
    buckets=UPSTREAM_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# ============================================================================
# Pagination Metrics
# ============================================================================

pagination_pages_fetched_total = Counter(
    "pagination_pages_fetched_total",
    "Total number of upstream listing pages fetched",
    ["resource", "strategy"],  # strategy: drain, passthrough
    registry=REGISTRY,
)

pagination_drain_limit_total = Counter(
    "pagination_drain_limit_total",
    "Total number of full drains stopped by the page cap",
    ["resource"],
    registry=REGISTRY,
)

# ============================================================================
# Console Operations
# ============================================================================

resend_requests_total = Counter(
    "resend_requests_total",
    "Total number of resend requests forwarded upstream",
    ["kind", "result"],  # kind: message, bulk; result: success, not_found, rejected, error
    registry=REGISTRY,
)

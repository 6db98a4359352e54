"""Metrics infrastructure for Prometheus monitoring."""

from __future__ import annotations

from prometheus_client import generate_latest

from webhook_console.infra.metrics import business, tracking
from webhook_console.infra.metrics.prometheus import REGISTRY

__all__ = [
    "REGISTRY",
    "business",
    "generate_latest",
    "tracking",
]

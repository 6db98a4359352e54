"""Clients for the upstream webhook-delivery API."""

from __future__ import annotations

from webhook_console.infra.upstream.client import UpstreamClient
from webhook_console.infra.upstream.webhooks_api import WebhookAPIClient

__all__ = ["UpstreamClient", "WebhookAPIClient"]

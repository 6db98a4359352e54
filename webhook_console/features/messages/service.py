"""Message detail assembly.

The message and its attempts are fetched concurrently. The view degrades
rather than fails:

- both succeed -> message and attempts
- message is missing -> ``notFound`` (404)
- one fails -> the other half plus an ``error`` naming the failed half
- both fail -> both errors joined with ``"; "`` (502)
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import status

from webhook_console.core.exceptions import UpstreamError, UpstreamNotFoundError
from webhook_console.core.pagination import IteratorPage, passthrough
from webhook_console.features.messages.schemas import MessageDetailResponse
from webhook_console.infra.upstream import WebhookAPIClient

logger = logging.getLogger(__name__)

MESSAGE_ERROR = "Failed to fetch message"
ATTEMPTS_ERROR = "Failed to fetch message attempts"


class MessageService:
    """Builds the message detail view for one tenant."""

    def __init__(self, client: WebhookAPIClient, *, attempts_limit: int) -> None:
        self.client = client
        self.attempts_limit = attempts_limit

    async def get_detail(self, app_id: str, message_id: str) -> tuple[MessageDetailResponse, int]:
        """Fetch a message and the first page of its attempts.

        Returns:
            The detail body and the HTTP status to send it with.
        """
        message_result, attempts_result = await asyncio.gather(
            self.client.get_message(app_id, message_id),
            passthrough(
                self.client.message_attempts(app_id, message_id, limit=self.attempts_limit),
                resource="message_attempts",
            ),
            return_exceptions=True,
        )
        # Only upstream failures degrade the view; anything else is a bug.
        for result in (message_result, attempts_result):
            if isinstance(result, BaseException) and not isinstance(result, UpstreamError):
                raise result

        if isinstance(message_result, UpstreamNotFoundError):
            return MessageDetailResponse(data=None, not_found=True), status.HTTP_404_NOT_FOUND

        errors: list[str] = []
        detail = MessageDetailResponse()

        if isinstance(message_result, UpstreamError):
            logger.warning(
                "Message fetch failed",
                extra={"message_id": message_id, "error": message_result.detail},
            )
            errors.append(MESSAGE_ERROR)
        else:
            detail.data = message_result

        if isinstance(attempts_result, UpstreamError):
            logger.warning(
                "Message attempts fetch failed",
                extra={"message_id": message_id, "error": attempts_result.detail},
            )
            errors.append(ATTEMPTS_ERROR)
        else:
            page: IteratorPage = attempts_result
            detail.attempts = page.data
            detail.attempts_iterator = page.iterator
            detail.attempts_done = page.done

        if errors:
            detail.error = "; ".join(errors)
        if len(errors) == 2:
            return detail, status.HTTP_502_BAD_GATEWAY
        return detail, status.HTTP_200_OK


__all__ = ["ATTEMPTS_ERROR", "MESSAGE_ERROR", "MessageService"]

"""Decision webhook client with exponential backoff retry logic"""

import asyncio
import logging
import httpx
from typing import Dict, Any
from credit_gateway.config import settings
from credit_gateway.domain.exceptions import DecisionWebhookError
from credit_gateway.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter


class DecisionWebhookClient:
    """Client for notifying an external workflow of evaluation decisions"""

    def __init__(self, webhook_url: str | None = None, api_key: str | None = None):
        self.webhook_url = webhook_url if webhook_url is not None else settings.decision_webhook_url
        self.api_key = api_key if api_key is not None else settings.decision_webhook_api_key
        self.timeout = settings.http_timeout_seconds
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    async def send_decision_event(self, payload: Dict[str, Any]) -> None:
        """
        Send a decision event with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^(attempt-1))
        - Retries on HTTP errors and network failures

        Raises:
            DecisionWebhookError: after the final failed attempt
        """
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload, headers=headers)
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        raise DecisionWebhookError(
                            f"Decision webhook failed after {attempt} attempts: {e}"
                        ) from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

    async def notify(self, payload: Dict[str, Any]) -> None:
        """Fire-and-forget wrapper for background tasks; delivery failures are logged"""
        try:
            await self.send_decision_event(payload)
        except DecisionWebhookError as e:
            logging.error(
                f"Decision notification dropped: {e}",
                extra={"request_id": payload.get("request_id")},
            )

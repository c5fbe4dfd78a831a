from __future__ import annotations

import json
import logging
import time
from typing import Any

from cherry.core.config import RelayConfig
from cherry.relay.contracts import (
    CompletionClient,
    CompletionSettings,
    RelayErrorBody,
)

LOGGER = logging.getLogger(__name__)

RELAY_ERROR_MESSAGE = "Failed to fetch from upstream completion API"


class MalformedRelayRequestError(ValueError):
    pass


class CompletionRelay:
    """Stateless proxy from a message history to one upstream completion.

    Message entries are forwarded untouched; the upstream provider is the
    only validator of their shape.
    """

    def __init__(self, client: CompletionClient, settings: CompletionSettings) -> None:
        self._client = client
        self._settings = settings

    @property
    def settings(self) -> CompletionSettings:
        return self._settings

    async def complete(self, body: object) -> dict[str, Any]:
        messages = extract_messages(body)
        started_at = time.perf_counter()
        reply = await self._client.create_completion(
            model=self._settings.model,
            messages=messages,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
        )
        LOGGER.info(
            "relay_completion %s",
            json.dumps(
                {
                    "model": self._settings.model,
                    "message_count": len(messages),
                    "latency_ms": max(int((time.perf_counter() - started_at) * 1000), 0),
                },
                sort_keys=True,
            ),
        )
        return reply


def completion_settings_from_config(config: RelayConfig) -> CompletionSettings:
    return CompletionSettings(
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )


def extract_messages(body: object) -> list[Any]:
    if not isinstance(body, dict):
        raise MalformedRelayRequestError("Request body must be a JSON object")
    messages = body.get("messages")
    if not isinstance(messages, list):
        raise MalformedRelayRequestError("Request body must contain a messages list")
    return messages


def build_error_body(exc: BaseException) -> RelayErrorBody:
    details = str(exc).strip()
    return RelayErrorBody(error=RELAY_ERROR_MESSAGE, details=details or "Unknown error")

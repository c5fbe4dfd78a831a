from __future__ import annotations

import json
import logging

import httpx

from cherry.conversation.contracts import FALLBACK_MESSAGE, Message, RelayPayload, Role

LOGGER = logging.getLogger(__name__)


class ConversationStore:
    """Conversation state for one chat session.

    Holds the ordered message history, the pending input text and a busy flag.
    ``submit`` is the only operation that appends to the history: it posts the
    full conversation to the relay and appends exactly one assistant message,
    either the relay's reply or ``FALLBACK_MESSAGE``.
    """

    def __init__(
        self,
        relay_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._relay_url = relay_url
        self._transport = transport
        self._messages: list[Message] = []
        self._input_text = ""
        self._is_loading = False

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_empty(self) -> bool:
        return not self._messages

    def set_input(self, text: str) -> None:
        self._input_text = text

    async def submit(self, text: str | None = None) -> Message | None:
        pending = self._input_text if text is None else text
        trimmed = pending.strip()
        if not trimmed or self._is_loading:
            return None

        # Raised before the first await so a concurrent submit sees it.
        self._is_loading = True
        try:
            self._messages.append(Message(role=Role.USER, content=trimmed))
            self._input_text = ""
            payload = RelayPayload(messages=list(self._messages))
            try:
                reply = await self._request_reply(payload)
            except Exception as exc:
                LOGGER.warning(
                    "relay_request_failed %s",
                    json.dumps(
                        {
                            "relay_url": self._relay_url,
                            "message_count": len(payload.messages),
                            "error": str(exc) or exc.__class__.__name__,
                        },
                        sort_keys=True,
                        ensure_ascii=False,
                    ),
                )
                reply = Message(role=Role.ASSISTANT, content=FALLBACK_MESSAGE)
            self._messages.append(reply)
            return reply
        finally:
            self._is_loading = False

    async def _request_reply(self, payload: RelayPayload) -> Message:
        async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
            response = await client.post(self._relay_url, json=payload.to_json())
        response.raise_for_status()
        return coerce_assistant_message(response.json())


def coerce_assistant_message(body: object) -> Message:
    # The relay forwards whatever role upstream reported; only content is kept.
    if not isinstance(body, dict):
        raise ValueError("relay reply is not a JSON object")
    content = body.get("content")
    if not isinstance(content, str):
        raise ValueError("relay reply has no textual content")
    return Message(role=Role.ASSISTANT, content=content)

from __future__ import annotations

from typing import Any

from openai import AsyncOpenAI

from cherry.core.config import RelayConfig, require_credential


class EmptyCompletionError(Exception):
    pass


class OpenAICompletionClient:
    """Chat-completion client for any OpenAI-compatible provider.

    Retries are disabled: the relay makes exactly one upstream call per request.
    """

    def __init__(self, *, api_key: str, base_url: str) -> None:
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)

    async def create_completion(
        self,
        *,
        model: str,
        messages: list[Any],
        temperature: float,
        max_tokens: int,
    ) -> dict[str, Any]:
        completion = await self._client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not completion.choices:
            raise EmptyCompletionError("Upstream returned no completion choices")
        return completion.choices[0].message.model_dump(mode="json", exclude_none=True)

    async def aclose(self) -> None:
        await self._client.close()


def build_completion_client(config: RelayConfig) -> OpenAICompletionClient:
    return OpenAICompletionClient(
        api_key=require_credential(config),
        base_url=config.base_url,
    )

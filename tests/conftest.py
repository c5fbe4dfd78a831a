from __future__ import annotations

from dataclasses import replace
from typing import Any

import pytest

from cherry.core.config import RelayConfig

CHERRY_ENV_VARS = (
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_BASE_URL",
    "CHERRY_MODEL",
    "CHERRY_TEMPERATURE",
    "CHERRY_MAX_TOKENS",
    "CHERRY_RELAY_URL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clear_cherry_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in CHERRY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(
        api_key="sk-test-key",
        base_url="https://api.deepseek.com/v1",
        model="deepseek-chat",
        temperature=0.7,
        max_tokens=2000,
        relay_url="http://testserver/api/chat",
        log_level="INFO",
    )


@pytest.fixture
def keyless_config(relay_config: RelayConfig) -> RelayConfig:
    return replace(relay_config, api_key=None)


class FakeCompletionClient:
    def __init__(
        self,
        reply: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.reply = reply or {"role": "assistant", "content": "hello"}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create_completion(
        self,
        *,
        model: str,
        messages: list[Any],
        temperature: float,
        max_tokens: int,
    ) -> dict[str, Any]:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply

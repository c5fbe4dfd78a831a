from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import BaseModel


class CompletionClient(Protocol):
    async def create_completion(
        self,
        *,
        model: str,
        messages: list[Any],
        temperature: float,
        max_tokens: int,
    ) -> dict[str, Any]: ...


@dataclass(frozen=True)
class CompletionSettings:
    model: str
    temperature: float
    max_tokens: int


class RelayErrorBody(BaseModel):
    error: str
    details: str | None = None

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

FALLBACK_MESSAGE = "抱歉，我遇到了一些问题。请稍后再试。"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class RelayPayload(BaseModel):
    messages: list[Message]

    def to_json(self) -> dict[str, object]:
        return {"messages": [message.to_payload() for message in self.messages]}

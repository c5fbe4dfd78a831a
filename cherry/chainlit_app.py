from __future__ import annotations

import chainlit as cl

from cherry.conversation.store import ConversationStore
from cherry.core.config import load_config

ASSISTANT_NAME = "Cherry"
THINKING_STEP_NAME = "Cherry 正在思考"
STORE_SESSION_KEY = "conversation_store"


@cl.on_chat_start
async def on_chat_start() -> None:
    _new_session_store()
    await cl.Message(content=_build_welcome_message(), author=ASSISTANT_NAME).send()


@cl.on_message
async def on_message(message: cl.Message) -> None:
    store = _session_store()
    if not _is_submittable(message.content, is_loading=store.is_loading):
        return

    async with cl.Step(name=THINKING_STEP_NAME, type="llm"):
        reply = await store.submit(message.content)

    if reply is None:
        return
    await cl.Message(content=reply.content, author=ASSISTANT_NAME).send()


def _new_session_store() -> ConversationStore:
    store = ConversationStore(load_config().relay_url)
    cl.user_session.set(STORE_SESSION_KEY, store)
    return store


def _session_store() -> ConversationStore:
    store = cl.user_session.get(STORE_SESSION_KEY)
    if isinstance(store, ConversationStore):
        return store
    return _new_session_store()


def _is_submittable(text: object, *, is_loading: bool) -> bool:
    return isinstance(text, str) and bool(text.strip()) and not is_loading


def _build_welcome_message() -> str:
    return (
        "# 你好呀！我是 Cherry~\n\n"
        "✨ 有什么我可以帮你的吗？\n\n"
        "温馨提示：按回车键发送消息，Shift + 回车换行 🌸"
    )

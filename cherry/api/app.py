from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from cherry.core.config import RelayConfig, require_credential
from cherry.relay.contracts import CompletionClient
from cherry.relay.service import (
    CompletionRelay,
    build_error_body,
    completion_settings_from_config,
)
from cherry.relay.upstream import build_completion_client

LOGGER = logging.getLogger(__name__)

CHAT_UI_PATH = "/chainlit"


def create_app(
    config: RelayConfig,
    completion_client: CompletionClient | None = None,
) -> FastAPI:
    # Fails before any route exists when the credential is missing.
    require_credential(config)
    client = completion_client or build_completion_client(config)
    relay = CompletionRelay(client, completion_settings_from_config(config))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        LOGGER.info(
            "Starting Cherry relay (model=%s, base_url=%s)",
            config.model,
            config.base_url,
        )
        try:
            yield
        finally:
            aclose = getattr(client, "aclose", None)
            if callable(aclose):
                await aclose()

    app = FastAPI(title="Cherry Chat", version="0.1.0", lifespan=lifespan)

    @app.get("/")
    async def root() -> RedirectResponse:
        return RedirectResponse(url=CHAT_UI_PATH, status_code=307)

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    @app.post("/api/chat")
    async def chat(request: Request) -> JSONResponse:
        try:
            body = await request.json()
            reply = await relay.complete(body)
        except Exception as exc:
            LOGGER.exception("Upstream completion failed")
            return JSONResponse(
                status_code=500,
                content=build_error_body(exc).model_dump(exclude_none=True),
            )
        return JSONResponse(content=reply)

    return app

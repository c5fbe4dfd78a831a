from __future__ import annotations

import logging

from fastapi import FastAPI

from cherry.api.app import CHAT_UI_PATH, create_app
from cherry.core.config import load_config, load_dotenv_file

load_dotenv_file()
config = load_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app(config)


def mount_chat_interface(application: FastAPI) -> None:
    from chainlit.utils import mount_chainlit

    mount_chainlit(app=application, target="cherry/chainlit_app.py", path=CHAT_UI_PATH)


mount_chat_interface(app)

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_MODEL = "deepseek-chat"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
DEFAULT_RELAY_URL = "http://localhost:8000/api/chat"


class RelayConfigurationError(Exception):
    pass


@dataclass(frozen=True)
class RelayConfig:
    api_key: str | None
    base_url: str
    model: str
    temperature: float
    max_tokens: int
    relay_url: str
    log_level: str


def _read_optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if not value:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _read_int_env(name: str, default: int) -> int:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_float_env(name: str, default: float) -> float:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    if parsed < 0:
        return default
    if parsed > 2:
        return 2.0
    return parsed


def load_config() -> RelayConfig:
    return RelayConfig(
        api_key=_read_optional_env("DEEPSEEK_API_KEY"),
        base_url=(_read_optional_env("DEEPSEEK_BASE_URL") or DEFAULT_BASE_URL).rstrip(
            "/"
        ),
        model=_read_optional_env("CHERRY_MODEL") or DEFAULT_MODEL,
        temperature=_read_float_env("CHERRY_TEMPERATURE", DEFAULT_TEMPERATURE),
        max_tokens=_read_int_env("CHERRY_MAX_TOKENS", DEFAULT_MAX_TOKENS),
        relay_url=_read_optional_env("CHERRY_RELAY_URL") or DEFAULT_RELAY_URL,
        log_level=(_read_optional_env("LOG_LEVEL") or "INFO").upper(),
    )


def require_credential(config: RelayConfig) -> str:
    if config.api_key is None or not config.api_key.strip():
        raise RelayConfigurationError(
            "Missing DEEPSEEK_API_KEY environment variable"
        )
    return config.api_key.strip()


def load_dotenv_file(path: str = ".env") -> bool:
    env_path = Path(path)
    if not env_path.exists() or not env_path.is_file():
        return False

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line.removeprefix("export ").strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        os.environ.setdefault(key, _strip_quotes(value.strip()))

    return True


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value

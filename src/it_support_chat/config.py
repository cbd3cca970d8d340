"""
Runtime configuration.

Settings come from environment variables; API keys are read from a secret file
('/secrets/<NAME>') first and from the environment second. Values are checked
by pydantic when the server starts, so a typo in 'PORT' or 'LLM_BACKEND' fails
fast instead of surfacing on the first request.

    LLM_BACKEND=gemini GEMINI_API_KEY=... python -m it_support_chat.server
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from it_support_chat.uploads import DEFAULT_MAX_UPLOAD_BYTES

SECRETS_DIR = Path("/secrets")


class Settings(BaseModel):
    llm_backend: Literal["gemini", "openai", "fake"] = "fake"
    llm_model: str | None = None
    vision_model: str | None = None
    llm_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    host: str = "0.0.0.0"
    port: int = Field(default=8000, gt=0, lt=65536)
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    upload_dir: Path = Path("uploads")
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)


def get_secret(name: str, env: Mapping[str, str] | None = None) -> str:
    """Load a secret from '/secrets/<name>' or the '<name>' environment variable.

    Raises ValueError if neither is available.
    """
    env = os.environ if env is None else env
    secret_file = SECRETS_DIR / name
    if secret_file.exists():
        return secret_file.read_text().strip()
    key = env.get(name, "")
    if not key:
        raise ValueError(
            f"{name} not found. Either:\n"
            f"  - Provide it as a secret file at {secret_file}, or\n"
            f"  - Set the {name} environment variable."
        )
    return key


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build 'Settings' from the environment. Unset variables keep their defaults."""
    env = os.environ if env is None else env
    fields = {
        "llm_backend": env.get("LLM_BACKEND", "").strip().lower() or None,
        "llm_model": env.get("LLM_MODEL") or None,
        "vision_model": env.get("VISION_MODEL") or None,
        "llm_temperature": env.get("LLM_TEMPERATURE") or None,
        "host": env.get("HOST") or None,
        "port": env.get("PORT") or None,
        "log_level": env.get("LOG_LEVEL") or None,
        "cors_origins": _split_csv(env["CORS_ORIGINS"]) if env.get("CORS_ORIGINS") else None,
        "upload_dir": env.get("UPLOAD_DIR") or None,
        "max_upload_bytes": env.get("MAX_UPLOAD_BYTES") or None,
    }
    try:
        return Settings(**{key: value for key, value in fields.items() if value is not None})
    except PydanticValidationError as exc:
        raise ValueError(f"Invalid configuration:\n{exc}") from exc

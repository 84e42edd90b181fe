# app/config.py
import os
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Request
from pydantic import BaseModel, Field

DEFAULT_ALLOWED_ORIGINS = ["https://reforge-backend-final.onrender.com"]
DEFAULT_ALLOWED_ORIGIN_REGEX = (
    r"^https://[a-z0-9-]+\.replit\.dev$"
    r"|^https://[a-z0-9-]+\.replit\.app$"
    r"|^exp://.+"
)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and passed by reference."""

    openai_api_key: Optional[str] = Field(default=None, repr=False)
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"

    allowed_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    allowed_origin_regex: Optional[str] = DEFAULT_ALLOWED_ORIGIN_REGEX

    chat_rate_limit: int = Field(default=30, ge=1)
    api_rate_limit: int = Field(default=100, ge=1)
    rate_limit_window_seconds: int = Field(default=60 * 60, ge=1)
    # X-Forwarded-For entries appended by proxies we control; 0 means no proxy
    trusted_proxy_hops: int = Field(default=1, ge=0)

    # USD per token, used only for the cost estimate in the logs
    prompt_token_price: float = 0.00000015
    completion_token_price: float = 0.0000006

    log_level: str = "INFO"

    @property
    def chat_completions_url(self) -> str:
        return f"{self.openai_base_url.rstrip('/')}/chat/completions"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            allowed_origins=_env_list("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS),
            allowed_origin_regex=os.getenv("ALLOWED_ORIGIN_REGEX", DEFAULT_ALLOWED_ORIGIN_REGEX) or None,
            chat_rate_limit=_env_int("CHAT_RATE_LIMIT", 30),
            api_rate_limit=_env_int("API_RATE_LIMIT", 100),
            rate_limit_window_seconds=_env_int("RATE_LIMIT_WINDOW_SECONDS", 60 * 60),
            trusted_proxy_hops=_env_int("TRUSTED_PROXY_HOPS", 1),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the Settings the running app was built with."""
    return request.app.state.settings

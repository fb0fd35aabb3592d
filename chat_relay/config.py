from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Respond naturally in plain text without any "
    "JSON formatting, special characters, or metadata. Just provide direct, "
    "conversational responses."
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    OPENROUTER_API_KEY: Optional[str] = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_MODEL: str = "nvidia/nemotron-nano-12b-v2-vl:free"

    # "stream" relays fragments as they arrive, "buffered" returns {"reply": ...}
    CHAT_RESPONSE_MODE: Literal["stream", "buffered"] = "stream"
    SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT

    MAX_BODY_BYTES: int = 10 * 1024 * 1024
    LOG_LEVEL: str = "DEBUG"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.OPENROUTER_API_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()

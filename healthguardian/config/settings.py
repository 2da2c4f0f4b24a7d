"""
Application-wide settings using pydantic-settings.
Only the HTTP adapter reads these; the engine takes an explicit AIServiceConfig.
"""

from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"

_GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class AIServiceConfig(BaseModel):
    """Everything the orchestrator needs to reach the text-generation service."""

    endpoint: str = _GEMINI_DEFAULT_BASE_URL
    api_key: str = ""
    model: str = "gemini-1.5-flash"
    # seconds, per attempt
    timeout: float = 10.0
    # extra attempts after a rate-limited one
    max_retries: int = 2
    backoff_base: float = 1.0
    backoff_jitter: float = 1.0
    # whole AI path incl. retries; on expiry the local answer is used
    total_timeout: float = 45.0
    temperature: float = 0.7


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    LOG_DIR: str = ""
    LOG_FILE_NAME: str = "healthguardian.log"
    LOG_FILE_BACKUP_COUNT: int = 7

    # Gemini
    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = _GEMINI_DEFAULT_BASE_URL
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Retry / timeout policy
    AI_TIMEOUT: float = 10.0
    AI_MAX_RETRIES: int = 2
    AI_BACKOFF_BASE: float = 1.0
    AI_BACKOFF_JITTER: float = 1.0
    AI_TOTAL_TIMEOUT: float = 45.0

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def ai_config(self) -> AIServiceConfig:
        return AIServiceConfig(
            endpoint=self.GEMINI_BASE_URL,
            api_key=self.GEMINI_API_KEY,
            model=self.GEMINI_MODEL,
            timeout=self.AI_TIMEOUT,
            max_retries=self.AI_MAX_RETRIES,
            backoff_base=self.AI_BACKOFF_BASE,
            backoff_jitter=self.AI_BACKOFF_JITTER,
            total_timeout=self.AI_TOTAL_TIMEOUT,
        )


settings = Settings()

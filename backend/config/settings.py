from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    AI_GATEWAY_API_KEY: Optional[str] = None
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_MODEL: str = "google/gemini-2.5-flash"

    HISTORY_STORE_URL: Optional[str] = None
    HISTORY_STORE_KEY: Optional[str] = None
    HISTORY_TABLE: str = "verification_history"

    LOG_LEVEL: str = "INFO"

    @property
    def HISTORY_ENDPOINT(self) -> Optional[str]:
        if not self.HISTORY_STORE_URL:
            return None
        return f"{self.HISTORY_STORE_URL.rstrip('/')}/rest/v1/{self.HISTORY_TABLE}"

settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Settings
    PROJECT_NAME: str = "Pixaris API"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Identity provider - Supabase
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    # AI gateway. The key is optional here so a missing key fails the
    # request that needs it instead of the whole process.
    LOVABLE_API_KEY: Optional[str] = None
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_MODEL: str = "google/gemini-2.5-flash-image-preview"
    AI_GATEWAY_TIMEOUT: float = 120.0

    # Edit request limits
    MAX_IMAGE_DATA_LENGTH: int = 10_000_000  # characters of the data URI, not decoded bytes
    MIN_INSTRUCTION_LENGTH: int = 3
    MAX_INSTRUCTION_LENGTH: int = 2000

    # CORS Settings
    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_HEADERS: List[str] = ["authorization", "x-client-info", "apikey", "content-type"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def cors_headers(self) -> dict:
        return {
            "Access-Control-Allow-Origin": self.CORS_ALLOW_ORIGIN,
            "Access-Control-Allow-Headers": ", ".join(self.CORS_ALLOW_HEADERS),
        }


def get_settings() -> Settings:
    """Resolve settings from the current environment.

    Built on every call so configuration is read at invocation time.
    """
    return Settings()

"""Application configuration settings."""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List, Literal, Optional

# Get the server directory path
SERVER_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # LLM Configuration (OpenAI-compatible API)
    OPENAI_API_KEY: Optional[str] = None
    LLM_ENDPOINT: str = "https://api.openai.com"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_IMAGE_MODEL: str = "dall-e-3"

    # Command analysis must be near-deterministic, responses may vary
    LLM_ANALYSIS_TEMPERATURE: float = 0.1
    LLM_RESPONSE_TEMPERATURE: float = 0.7

    # Per-phase LLM timeouts (seconds)
    LLM_ANALYSIS_TIMEOUT: int = 20
    LLM_RESPONSE_TIMEOUT: int = 15
    LLM_DEFAULT_TIMEOUT: int = 60

    # Retries apply to transient failures only; 0 disables them
    LLM_MAX_RETRIES: int = 0
    LLM_RETRY_BACKOFF_S: float = 0.5

    # Identity
    AUTH_MODE: Literal["static", "jwt"] = "static"
    DEFAULT_USER_ID: str = "default-user"
    DEFAULT_USER_EMAIL: str = "admin@school.com"
    DEFAULT_USER_NAME: str = "Admin User"

    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS: explicit list of allowed origins
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    MAX_COMMAND_LENGTH: int = 2000

    @model_validator(mode="after")
    def _validate_secrets(self) -> "Settings":
        if self.AUTH_MODE == "jwt" and not self.JWT_SECRET_KEY:
            raise ValueError(
                "JWT_SECRET_KEY must be set when AUTH_MODE is 'jwt'. "
                "Use AUTH_MODE=static for local development."
            )
        return self

    class Config:
        env_file = str(SERVER_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()

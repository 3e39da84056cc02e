# pos_api/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./pos.db"

    # Frontend origins allowed by CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # OpenAI (voice ordering)
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_TRANSCRIPTION_MODEL: str = "whisper-1"
    OPENAI_CHAT_MODEL: str = "gpt-4o"

    # Google Translate
    GOOGLE_TRANSLATE_API_KEY: str | None = None
    GOOGLE_TRANSLATE_URL: str = "https://translation.googleapis.com/language/translate/v2"

    # Seconds before an upstream provider call is abandoned
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()

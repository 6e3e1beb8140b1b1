# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore")

    APP_NAME: str = "HealthBridge API"

    # tokens emitidos por el proveedor de auth (sub = user id)
    JWT_SECRET: str = Field(...)
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "healthbridge"
    DB_PASSWORD: str = ""
    DB_NAME: str = "healthbridge"
    DATABASE_URL: str | None = None   # si viene, pisa a DB_*

    # --- Groq (chat + whisper) ---
    GROQ_API_KEY: str | None = None
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_CHAT_MODEL: str = "llama3-8b-8192"
    GROQ_TRANSCRIPTION_MODEL: str = "whisper-large-v3-turbo"
    GROQ_TIMEOUT_SECONDS: float = 30.0

    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None

    MAX_UPLOAD_MB: int = 2
    MAX_SYMPTOM_PHOTOS: int = 5
    MEDIA_FOLDER_SYMPTOM_PHOTOS: str = "healthbridge/symptom-photos"
    IMAGE_FALLBACK_URL: str = "/placeholder.svg"

    CORS_ORIGINS: list[str] = ["http://localhost:8080", "http://127.0.0.1:8080"]

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    UPCOMING_WINDOW_DAYS: int = 7
    NEARBY_DOCTORS_LIMIT: int = 10

    @property
    def async_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4")

settings = Settings()  # type: ignore[call-arg]

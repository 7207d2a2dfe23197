from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "WorkBridge Web"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    CORS_ORIGINS: List[str] = ["*"]

    # ── Marketplace backend ─────────────────────
    API_BASE_URL: str = "http://localhost:8080/api"
    API_TIMEOUT: float = 30.0  # seconds, applied by the transport
    OTP_CHANNEL: Literal["sms", "email"] = "sms"

    # ── Browser sessions ────────────────────────
    SESSION_BACKEND: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_COOKIE_NAME: str = "wb_session"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_TTL_SECONDS: int = 86400

    # ── Uploads ─────────────────────────────────
    MAX_DOCUMENT_SIZE: int = 5 * 1024 * 1024
    MAX_VIDEO_SIZE: int = 50 * 1024 * 1024

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()

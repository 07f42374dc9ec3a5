"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./blog_history.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # SQLite busy timeout (seconds)
    DB_TIMEOUT_SECONDS: float = 30.0

    # Version history
    VERSION_RETENTION_LIMIT: int = Field(50, ge=1)
    VERSION_NUMBER_MAX_RETRIES: int = Field(3, ge=1)
    VERSION_PAGE_SIZE_DEFAULT: int = 10
    VERSION_PAGE_SIZE_MAX: int = 100

    class Config:
        # 실행 cwd와 무관하게 프로젝트 루트의 .env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()

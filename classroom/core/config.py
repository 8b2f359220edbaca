from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    APP_NAME: str = "Classroom LMS"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = f"sqlite:///{BASE_DIR}/classroom.db"

    # DEV ONLY default, override through the environment.
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Local file store
    UPLOAD_DIR: str = str(BASE_DIR / "uploads")
    PUBLIC_FILES_URL: str = "http://localhost:8000/files"

    # Fallback origin for shareable enrollment links
    PUBLIC_BASE_URL: str = "http://localhost:3000"

    TOP_PERFORMERS_LIMIT: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

"""
Application configuration settings
"""
from pydantic_settings import BaseSettings
from pathlib import Path

class Settings(BaseSettings):
    """Application settings"""

    PROJECT_NAME: str = "Visa Case Manager API"
    VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite+aiosqlite:///./casework.db"
    BUCKET_DIR: Path = Path("./bucket")
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    ALLOWED_EXTENSIONS: set = {".pdf", ".png", ".jpg", ".jpeg"}
    LOG_LEVEL: str = "INFO"

    # Days before a validity limit when a document starts showing as expiring
    EXPIRING_SOON_THRESHOLD_DAYS: int = 30
    REFERENCE_PREFIX: str = "PR"

    INITIAL_ADMIN_EMAIL: str = "admin@example.com"
    INITIAL_ADMIN_NAME: str = "Administrator"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
settings.BUCKET_DIR.mkdir(parents=True, exist_ok=True)

"""
Application settings
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from pathlib import Path
from dotenv import load_dotenv


"""env loading priority
1) OS environment variables
2) .env in the project root
"""

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Pre-load .env (OS environment wins, override=False)
_root_env = PROJECT_ROOT / ".env"
if _root_env.exists():
    load_dotenv(dotenv_path=str(_root_env), override=False)


class Settings(BaseSettings):
    """Application settings"""
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Storage
    DATABASE_URL: str = f"sqlite+aiosqlite:///{PROJECT_ROOT / 'data' / 'achievements.db'}"
    SQLITE_BUSY_TIMEOUT: float = 15.0

    # Files
    UPLOAD_DIRECTORY: Optional[str] = None
    STATIC_DIRECTORY: Optional[str] = None
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024

    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = 'ignore'


settings = Settings()


def validate_settings(_settings: Settings) -> bool:
    """Reject settings the server cannot start with."""
    if _settings.MAX_UPLOAD_SIZE <= 0:
        raise ValueError("MAX_UPLOAD_SIZE must be positive")
    if not _settings.API_PREFIX.startswith("/") or _settings.API_PREFIX.endswith("/"):
        raise ValueError("API_PREFIX must start with '/' and must not end with '/'")
    return True

# emargement_api/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # Required: the app refuses to start without a signing secret
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    # 0 disables the exp claim (permanent tokens)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./emargement.db"

    BCRYPT_ROUNDS: int = 10
    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)


@lru_cache
def get_settings() -> Settings:
    return Settings()

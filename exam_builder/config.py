from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./exam_builder.db"
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    ENV: str = "local"  # Environment setting
    LOG_LEVEL: str = "INFO"

    # Builder behaviour
    NAVIGATION_STACK_DEPTH: int = 20
    DEFAULT_LIST_LIMIT: int = 100
    BUILDER_ROLES: List[str] = ["teacher"]

    class Config:
        env_file = ".env"

settings = Settings()

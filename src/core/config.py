from pathlib import Path
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")
    PROJECT_NAME: str = "Task Board API"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # CORS settings
    ALLOWED_ORIGINS: list[str] = ["*"]

    # Board settings
    SEED_DEFAULT_TASKS: bool = os.getenv("SEED_DEFAULT_TASKS", "True").lower() in ("true", "1", "t")

    # Logging settings
    LOG_DIR: str = os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs"))
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "True").lower() in ("true", "1", "t")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


def get_settings() -> Settings:
    return Settings()

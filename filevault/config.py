from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import List

env_path = Path(__file__).parent / ".env"

class Settings(BaseSettings):
    FILEVAULT_HOST: str = "0.0.0.0"
    FILEVAULT_PORT: int = 3000
    MAX_UPLOAD_SIZE_BYTES: int = 10 * 1024 * 1024
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=env_path, extra='ignore')

settings = Settings()

# country_console/core/config.py

import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Country Console"
    VERSION: str = "1.0"

    # Country REST backend
    COUNTRY_API_BASE_URL: str = os.getenv("COUNTRY_API_BASE_URL", "http://localhost:8080/api")
    COUNTRY_API_TIMEOUT: float = float(os.getenv("COUNTRY_API_TIMEOUT", 10.0))

    # Notices auto-dismiss after this many seconds
    NOTICE_TTL_SECONDS: float = float(os.getenv("NOTICE_TTL_SECONDS", 5.0))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


# Initialize
settings = Settings()

import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    EMPLOYEE_API_BASE_URL: str = "http://localhost:8112/api/v1/employee"
    EMPLOYEE_API_TIMEOUT_SECONDS: float = 10.0

    RETRY_MAX_ATTEMPTS: int = 4
    RETRY_INITIAL_BACKOFF_SECONDS: float = 0.2

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()

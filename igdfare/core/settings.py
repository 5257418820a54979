from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings
from pydantic import validator


class Settings(BaseSettings):
    # API Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Billing currency (Rupiah has no minor unit in practice)
    CURRENCY: str = "IDR"
    CURRENCY_MINOR_UNITS: int = 0

    # JSON file with ambulance configurations; built-in defaults when unset
    AMBULANCE_CONFIG_PATH: str | None = None

    # Environment name
    ENVIRONMENT: str = "development"

    @validator("ALLOWED_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @validator("CURRENCY_MINOR_UNITS")
    def minor_units_in_range(cls, v: int) -> int:
        if not 0 <= v <= 4:
            raise ValueError("CURRENCY_MINOR_UNITS must be between 0 and 4")
        return v

    class Config:
        case_sensitive = True  # Variables are case-sensitive
        env_file = ".env"      # Load environment variables from .env file
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()

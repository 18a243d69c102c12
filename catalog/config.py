from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "brewcatalog"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8085

    # Data sources
    DATA_FILE: Path = BASE_DIR / "data.json"
    DOC_DIR: Path = BASE_DIR / "doc"

    # Fault injection
    FAULT_INJECTION_ENABLED: bool = True
    FAULT_RATE: float = 0.1

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("FAULT_RATE")
    @classmethod
    def check_fault_rate(cls, v: float) -> float:
        """Reject probabilities outside [0, 1]."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("FAULT_RATE must be between 0 and 1")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()

from datetime import time
from decimal import Decimal
from typing import List
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


def _hourly(first: int, last: int) -> List[time]:
    return [time(hour=h) for h in range(first, last + 1)]


class Settings(BaseSettings):
    PROJECT_NAME: str = "Studio Booking API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "studiobook"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Booking rules
    SERVICE_FEE_RATE: Decimal = Decimal("0.10")
    SESSION_LENGTHS_HOURS: List[int] = [2, 4, 8]
    OFFERED_START_TIMES: List[time] = _hourly(9, 20)
    STUDIO_TIMEZONE: str = "UTC"

    # Background sweep that marks finished sessions as completed
    COMPLETION_SWEEP_SECONDS: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def studio_tz(self) -> ZoneInfo:
        return ZoneInfo(self.STUDIO_TIMEZONE)

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()

from typing import Literal, Self

from pydantic import computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Bay Scheduler"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # "json" or "console"
    ENABLE_METRICS: bool = True

    # Bay capacity
    DEFAULT_HOURS_PER_PERSON_PER_WEEK: int = 40

    # Weighted peak-load utilization
    PEAK_LOAD_HORIZON_WEEKS: int = 16
    PEAK_LOAD_DECAY_STEP: float = 0.05
    PEAK_LOAD_DECAY_FLOOR: float = 0.25
    UTILIZATION_WEEK_STARTS_ON: int = 0  # Monday
    DEFAULT_UTILIZATION_MODEL: Literal["occupancy", "peak_load"] = "occupancy"

    # Reporting periods
    PERIOD_WEEK_STARTS_ON: int = 6  # Sunday

    # Hours flow capacity line
    HOURS_FLOW_RESOURCE_COUNT: int = 50
    HOURS_FLOW_MANUAL_CAPACITY: float | None = None

    # Default assignment length when a project is dropped on a grid
    DAY_GRID_DEFAULT_DURATION_DAYS: int = 7
    WEEK_GRID_DEFAULT_DURATION_DAYS: int = 14
    MONTH_GRID_DEFAULT_DURATION_DAYS: int = 30

    @computed_field  # type: ignore[prop-decorator]
    @property
    def grid_default_durations(self) -> dict[str, int]:
        return {
            "day": self.DAY_GRID_DEFAULT_DURATION_DAYS,
            "week": self.WEEK_GRID_DEFAULT_DURATION_DAYS,
            "month": self.MONTH_GRID_DEFAULT_DURATION_DAYS,
        }

    @model_validator(mode="after")
    def _check_week_starts(self) -> Self:
        for name in ("UTILIZATION_WEEK_STARTS_ON", "PERIOD_WEEK_STARTS_ON"):
            value = getattr(self, name)
            if not 0 <= value <= 6:
                raise ValueError(f"{name} must be 0-6 (Monday=0, Sunday=6), got {value}")
        if not 0 <= self.PEAK_LOAD_DECAY_FLOOR <= 1:
            raise ValueError("PEAK_LOAD_DECAY_FLOOR must be between 0 and 1")
        return self


settings = Settings()  # type: ignore

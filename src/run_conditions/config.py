"""Command-line configuration.

Settings are loaded from environment variables (prefix ``RUN_CONDITIONS_``)
or a ``.env`` file using pydantic-settings. They only seed the CLI's defaults;
the evaluation functions never read them and always take an explicit
``RunProfile``.

## Environment Variables

- RUN_CONDITIONS_LOG_LEVEL: Logging level (default: WARNING)
- RUN_CONDITIONS_ACTIVITY: Default kind of run (workout, long_run, easy)
- RUN_CONDITIONS_GENDER: Default gender (female, male)
- RUN_CONDITIONS_COLD_HANDS: Default cold-hands flag
- RUN_CONDITIONS_TEMP_SENSITIVITY: Default sensitivity offset (-2 to 2)
- RUN_CONDITIONS_BOLDNESS: Default coaching boldness (-2 cautious to 2 bold)
- RUN_CONDITIONS_RUN_HOURS_START / RUN_CONDITIONS_RUN_HOURS_END: Preferred hours

## Example .env file

```
RUN_CONDITIONS_ACTIVITY=long_run
RUN_CONDITIONS_COLD_HANDS=true
RUN_CONDITIONS_RUN_HOURS_START=6
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from run_conditions.models.profile import ActivityKind, Gender, RunProfile


class Settings(BaseSettings):
    """CLI settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RUN_CONDITIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Default runner profile
    activity: ActivityKind = ActivityKind.EASY
    gender: Gender = Gender.FEMALE
    cold_hands: bool = False
    temp_sensitivity: float = Field(
        default=0.0,
        ge=-2,
        le=2,
        description="Comfort offset; positive runs warm, negative runs cold",
    )
    boldness: int = Field(default=0, ge=-2, le=2)

    # Best-run-time window, end exclusive
    run_hours_start: int = Field(default=4, ge=0, le=23)
    run_hours_end: int = Field(default=20, ge=1, le=24)

    @model_validator(mode="after")
    def check_run_hours(self) -> Settings:
        """Ensure the run-hours window is not empty."""
        if self.run_hours_start >= self.run_hours_end:
            raise ValueError("run_hours_start must be before run_hours_end")
        return self

    def default_profile(self) -> RunProfile:
        """Runner profile built from the configured defaults."""
        return RunProfile(
            activity=self.activity,
            gender=self.gender,
            cold_hands=self.cold_hands,
            temp_sensitivity=self.temp_sensitivity,
            boldness=self.boldness,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()

"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from run_conditions.config import get_settings
from run_conditions.models.profile import ActivityKind, Gender, RunProfile
from run_conditions.models.weather import WeatherSample


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate tests from the developer's environment and cached settings."""
    for name in (
        "RUN_CONDITIONS_LOG_LEVEL",
        "RUN_CONDITIONS_ACTIVITY",
        "RUN_CONDITIONS_GENDER",
        "RUN_CONDITIONS_COLD_HANDS",
        "RUN_CONDITIONS_TEMP_SENSITIVITY",
        "RUN_CONDITIONS_BOLDNESS",
        "RUN_CONDITIONS_RUN_HOURS_START",
        "RUN_CONDITIONS_RUN_HOURS_END",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ideal_sample() -> WeatherSample:
    """Calm, dry 50°F morning; every score penalty is zero for an easy run."""
    return WeatherSample(temp_f=50, apparent_f=50, humidity=40)


@pytest.fixture
def cold_windy_sample() -> WeatherSample:
    """Sub-freezing with a stiff breeze."""
    return WeatherSample(temp_f=22, apparent_f=20, humidity=50, wind_mph=15)


@pytest.fixture
def rainy_sample() -> WeatherSample:
    """Mild and wet."""
    return WeatherSample(
        temp_f=55,
        apparent_f=55,
        humidity=90,
        wind_mph=5,
        precip_prob=80,
        precip_in=0.2,
    )


@pytest.fixture
def hot_sunny_sample() -> WeatherSample:
    """Hot, dry and bright."""
    return WeatherSample(
        temp_f=85,
        apparent_f=88,
        humidity=40,
        wind_mph=5,
        uv_index=9,
    )


@pytest.fixture
def hot_humid_sample() -> WeatherSample:
    """Summer afternoon with oppressive humidity."""
    return WeatherSample(
        temp_f=92,
        apparent_f=105,
        humidity=75,
        wind_mph=4,
        uv_index=8,
    )


@pytest.fixture
def easy_profile() -> RunProfile:
    return RunProfile()


@pytest.fixture
def workout_profile() -> RunProfile:
    return RunProfile(activity=ActivityKind.WORKOUT)


@pytest.fixture
def long_run_profile() -> RunProfile:
    return RunProfile(activity=ActivityKind.LONG_RUN)


@pytest.fixture
def male_profile() -> RunProfile:
    return RunProfile(gender=Gender.MALE)


@pytest.fixture
def hourly_samples() -> list[WeatherSample]:
    """Two days of hourly samples that warm through each afternoon."""
    start = datetime(2024, 6, 15, 0, 0, tzinfo=timezone.utc)
    samples = []
    for hour in range(48):
        local_hour = hour % 24
        # Coolest at 05:00, warmest at 15:00
        temp = 50 + 3 * min(abs(local_hour - 5), 10)
        samples.append(
            WeatherSample(
                temp_f=temp,
                apparent_f=temp,
                humidity=40,
                time=start + timedelta(hours=hour),
            )
        )
    return samples

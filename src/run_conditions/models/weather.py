"""Weather sample and forecast models.

All values are imperial (°F, mph, inches) because every threshold in the
decision engine is expressed in those units. Use ``WeatherSample.from_metric``
when readings come straight from a provider in SI units.

Fields carry no range constraints: out-of-range readings (negative humidity,
NaN wind) are accepted and propagate through the arithmetic downstream.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from run_conditions.physics.units import (
    c_to_f,
    compute_feels_like_f,
    mm_to_inches,
    ms_to_mph,
)


class WeatherSample(BaseModel):
    """A single weather observation or forecast hour."""

    model_config = ConfigDict(frozen=True)

    temp_f: float = Field(..., description="Air temperature in °F")
    apparent_f: float = Field(..., description="Apparent (feels-like) temperature in °F")
    humidity: float = Field(default=50.0, description="Relative humidity (0-100)")
    wind_mph: float = Field(default=0.0, description="Wind speed in mph")
    precip_prob: float = Field(
        default=0.0, description="Precipitation probability (0-100)"
    )
    precip_in: float = Field(default=0.0, description="Precipitation amount in inches")
    uv_index: float = Field(default=0.0, description="UV index")

    cloud_cover: float | None = Field(default=None, description="Cloud cover (0-100)")
    pressure_hpa: float | None = Field(
        default=None, description="Barometric pressure in hPa"
    )
    solar_radiation_wm2: float | None = Field(
        default=None, description="Solar radiation in W/m²"
    )
    is_day: bool = Field(default=True, description="Whether the sun is up")
    time: datetime | None = Field(default=None, description="Valid time of the sample")

    @classmethod
    def from_metric(
        cls,
        temp_c: float,
        humidity: float,
        wind_ms: float = 0.0,
        precip_prob: float = 0.0,
        precip_mm: float = 0.0,
        uv_index: float = 0.0,
        feels_like_c: float | None = None,
        **extra,
    ) -> WeatherSample:
        """Build a sample from SI readings.

        When the provider does not report a feels-like temperature it is
        derived from wind chill or heat index.
        """
        if feels_like_c is None:
            apparent_f = compute_feels_like_f(temp_c, wind_ms, humidity)
        else:
            apparent_f = c_to_f(feels_like_c)

        return cls(
            temp_f=c_to_f(temp_c),
            apparent_f=apparent_f,
            humidity=humidity,
            wind_mph=ms_to_mph(wind_ms),
            precip_prob=precip_prob,
            precip_in=mm_to_inches(precip_mm),
            uv_index=uv_index,
            **extra,
        )


class ForecastPoint(BaseModel):
    """A near-future point used for long-run look-ahead.

    Any field may be missing; missing values are skipped rather than treated
    as zero.
    """

    model_config = ConfigDict(frozen=True)

    apparent_f: float | None = Field(default=None, description="Apparent temperature in °F")
    precip_prob: float | None = Field(
        default=None, description="Precipitation probability (0-100)"
    )
    precip_in: float | None = Field(
        default=None, description="Precipitation amount in inches"
    )
    uv_index: float | None = Field(default=None, description="UV index")
    time: datetime | None = Field(default=None)

    @classmethod
    def from_sample(cls, sample: WeatherSample) -> ForecastPoint:
        """Project a full weather sample down to the look-ahead fields."""
        return cls(
            apparent_f=sample.apparent_f,
            precip_prob=sample.precip_prob,
            precip_in=sample.precip_in,
            uv_index=sample.uv_index,
            time=sample.time,
        )

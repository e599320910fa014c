"""Runtime settings for the WeatherPulse pipeline."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# NOAA GHCN-Daily per-station CSV files
GHCN_ACCESS_URL = "https://www.ncei.noaa.gov/data/global-historical-climatology-network-daily/access"

DEFAULT_SAMPLE_SIZE = 10_000


class PipelineSettings(BaseSettings):
    """Pipeline configuration, overridable via ``WEATHERPULSE_*`` env vars."""

    sample_size: int = Field(
        default=DEFAULT_SAMPLE_SIZE, gt=0, description="Rows drawn from the cleaned set"
    )
    seed: int | None = Field(default=None, description="Seed for the sampling random source")
    unit_divisor: float = Field(
        default=10.0, gt=0, description="Raw values are stored in tenths of native units"
    )

    # Plausible temperature bounds (°C) for the range quality check
    min_temp_c: float = Field(default=-90.0)
    max_temp_c: float = Field(default=60.0)

    ghcn_base_url: str = Field(default=GHCN_ACCESS_URL, description="GHCN-Daily access endpoint")
    http_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="WEATHERPULSE_",
        env_file=".env",
        extra="ignore",
    )

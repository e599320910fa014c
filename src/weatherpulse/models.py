"""Data models for the WeatherPulse pipeline."""

from datetime import date as Date
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Columns every raw table must carry (values in tenths of native units)
RAW_COLUMNS = ("id", "date", "prcp", "snow", "tmax", "tmin")

# Station metadata kept alongside the observations
METADATA_COLUMNS = ("name", "latitude", "longitude", "elevation")

CLEAN_COLUMNS = ("id", "date", "year", "month", "day", "prcp", "snow", "tmax", "tmin")

AGGREGATE_COLUMNS = ("year", "avg_prcp", "decade")


class QualityStatus(str, Enum):
    """Quality check result status."""

    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"


class RawObservation(BaseModel):
    """One station-day record before cleaning.

    Measurements may be missing or unparseable; station metadata is kept as
    extra fields.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    date: Date | str | None = None
    prcp: float | str | None = None
    snow: float | str | None = None
    tmax: float | str | None = None
    tmin: float | str | None = None


class CleanObservation(BaseModel):
    """Station-day record after cleaning, in mm and °C."""

    model_config = ConfigDict(extra="allow")

    id: str
    date: Date
    year: int
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    prcp: float
    snow: float
    tmax: float
    tmin: float

    @model_validator(mode="after")
    def _check_temperatures(self) -> "CleanObservation":
        if self.tmax <= self.tmin:
            raise ValueError(f"tmax ({self.tmax}) must exceed tmin ({self.tmin})")
        return self


class YearlyAggregate(BaseModel):
    """Mean precipitation for one year of the sample."""

    year: int
    avg_prcp: float
    decade: int

    @model_validator(mode="after")
    def _check_decade(self) -> "YearlyAggregate":
        if self.decade != (self.year // 10) * 10:
            raise ValueError(f"decade {self.decade} does not match year {self.year}")
        return self


class StageReport(BaseModel):
    """Row counts before and after one pipeline stage."""

    name: str
    rows_in: int = Field(ge=0)
    rows_out: int = Field(ge=0)

    @property
    def rows_removed(self) -> int:
        return self.rows_in - self.rows_out


class QualityCheckResult(BaseModel):
    """Result of a data quality check."""

    check_name: str
    status: QualityStatus
    metric_value: float | None = None
    threshold: float | None = None
    message: str
    checked_at: datetime = Field(default_factory=datetime.now)


class MetricResult(BaseModel):
    """Computed metric value."""

    metric_name: str
    value: float
    unit: str
    dimensions: dict[str, str] = Field(default_factory=dict)
    computed_at: datetime = Field(default_factory=datetime.now)

"""Cleaning stages for raw station observations.

Each stage is a pure function that takes a DataFrame and returns a new one;
inputs are never modified in place. Stages must run in the order given by
``CLEANING_STAGES``: the consistency filter only drops rows where *both*
temperatures are known, so it has to run before the missing-value drop.
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

import numpy as np
import pandas as pd
import structlog

from weatherpulse.errors import InsufficientDataError, MalformedDateError

log = structlog.get_logger()

NUMERIC_COLUMNS = ("prcp", "tmax", "tmin")
DATE_PART_COLUMNS = ("year", "month", "day")

RandomSource = int | np.random.Generator | None


@dataclass(frozen=True)
class Stage:
    """A named cleaning step."""

    name: str
    func: Callable[[pd.DataFrame], pd.DataFrame]
    description: str

    def __call__(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.func(df)


def _is_blank(values: pd.Series) -> pd.Series:
    return values.isna() | (values.astype("string").str.strip() == "")


def _as_text(value: object) -> object:
    """Render whole numbers without a fractional part (NaN upcasts ints to float)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, np.integer)):
        return str(value)
    return value


def _parse_date(value: object) -> pd.Timestamp:
    # Compact YYYYMMDD numbers are calendar dates, not epoch offsets
    try:
        stamp = pd.Timestamp(_as_text(value))
    except (ValueError, TypeError, OverflowError):
        return pd.NaT
    # Keep the recorded wall-clock date; offsets may differ between rows
    if stamp.tzinfo is not None:
        stamp = stamp.tz_localize(None)
    if stamp is pd.NaT or not pd.Timestamp.min <= stamp <= pd.Timestamp.max:
        return pd.NaT
    return stamp


def derive_date_fields(df: pd.DataFrame) -> pd.DataFrame:
    """Parse ``date`` and add integer ``year``, ``month`` and ``day`` columns.

    Pre: ``date`` column exists; values are date strings (ISO or compact
    ``YYYYMMDD``), dates/datetimes, or ``YYYYMMDD`` integers.
    Post: ``date`` holds naive datetimes in the recorded local time; rows with
    no date get missing date parts and are removed later by ``drop_missing``.

    Raises:
        MalformedDateError: a present date value cannot be parsed.
    """
    raw = df["date"]
    if isinstance(raw.dtype, pd.DatetimeTZDtype):
        parsed = raw.dt.tz_localize(None)
    elif pd.api.types.is_datetime64_any_dtype(raw):
        parsed = raw
    else:
        blank = _is_blank(raw)
        parsed = pd.to_datetime(raw.where(~blank).map(_parse_date, na_action="ignore"))
        bad = parsed.isna() & ~blank
        if bad.any():
            index = bad.idxmax()
            raise MalformedDateError(raw.loc[index], index)

    return df.assign(
        date=parsed,
        year=parsed.dt.year.astype("Int64"),
        month=parsed.dt.month.astype("Int64"),
        day=parsed.dt.day.astype("Int64"),
    )


def coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce ``prcp``, ``tmax`` and ``tmin`` to floats.

    Values that cannot be parsed become missing rather than raising.
    """
    return df.assign(
        **{col: pd.to_numeric(df[col], errors="coerce").astype("float64") for col in NUMERIC_COLUMNS}
    )


def convert_units(df: pd.DataFrame, divisor: float = 10.0) -> pd.DataFrame:
    """Convert tenths of mm / °C into mm / °C.

    ``snow`` is left as recorded. Missing values stay missing.
    """
    return df.assign(**{col: df[col] / divisor for col in NUMERIC_COLUMNS})


def filter_inconsistent_temperatures(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows where both temperatures are known and ``tmax <= tmin``.

    Rows missing either temperature pass through untouched.
    """
    keep = (df["tmax"] > df["tmin"]) | df["tmax"].isna() | df["tmin"].isna()
    return df.loc[keep].copy()


def drop_missing(df: pd.DataFrame) -> pd.DataFrame:
    """Keep only rows where every column is present.

    Post: ``year``, ``month`` and ``day`` are plain ``int64``; ``id`` is ``str``.
    """
    complete = df.dropna(how="any")
    complete = complete.loc[~_is_blank(complete["id"])]
    complete = complete.assign(id=complete["id"].map(_as_text).astype(str))
    return complete.astype({col: "int64" for col in DATE_PART_COLUMNS})


def drop_duplicates(df: pd.DataFrame) -> pd.DataFrame:
    """Keep the first occurrence of each fully identical row."""
    return df.drop_duplicates(keep="first")


def sample_observations(
    df: pd.DataFrame, size: int, rng: RandomSource = None
) -> pd.DataFrame:
    """Draw ``size`` rows uniformly at random without replacement.

    Args:
        df: Cleaned observations
        size: Number of rows to draw
        rng: Seed or numpy Generator; ``None`` draws fresh OS entropy

    Raises:
        InsufficientDataError: fewer than ``size`` rows are available.
    """
    if len(df) < size:
        raise InsufficientDataError(available=len(df), required=size)

    generator = np.random.default_rng(rng)
    sample = df.sample(n=size, replace=False, random_state=generator)
    log.info("sample_drawn", available=len(df), size=size)
    return sample.reset_index(drop=True)


def aggregate_by_year(sample: pd.DataFrame) -> pd.DataFrame:
    """Mean precipitation per year, with its decade bucket."""
    yearly = (
        sample.groupby("year", as_index=False, sort=True)["prcp"]
        .mean()
        .rename(columns={"prcp": "avg_prcp"})
    )
    yearly["year"] = yearly["year"].astype("int64")
    yearly["decade"] = (yearly["year"] // 10) * 10
    log.info("aggregate_built", years=len(yearly))
    return yearly


def cleaning_stages(unit_divisor: float = 10.0) -> tuple[Stage, ...]:
    """Build the ordered cleaning stages."""
    return (
        Stage("derive_date_fields", derive_date_fields, "Parse date into year/month/day"),
        Stage("coerce_numeric", coerce_numeric, "Unparseable measurements become missing"),
        Stage(
            "convert_units",
            partial(convert_units, divisor=unit_divisor),
            f"Divide prcp/tmax/tmin by {unit_divisor:g}",
        ),
        Stage(
            "filter_inconsistent_temperatures",
            filter_inconsistent_temperatures,
            "Drop rows with tmax <= tmin when both are known",
        ),
        Stage("drop_missing", drop_missing, "Drop rows with any missing field"),
        Stage("drop_duplicates", drop_duplicates, "Drop exact duplicate rows"),
    )


CLEANING_STAGES = cleaning_stages()


def clean_observations(
    raw: pd.DataFrame, stages: tuple[Stage, ...] = CLEANING_STAGES
) -> pd.DataFrame:
    """Run every cleaning stage in order and return the cleaned set."""
    df = raw
    for stage in stages:
        df = stage(df)
    return df

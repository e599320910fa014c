"""Load raw station observations from CSV files."""

from pathlib import Path

import pandas as pd
import structlog

from weatherpulse.models import METADATA_COLUMNS, RAW_COLUMNS

log = structlog.get_logger()

# GHCN-Daily access files name the station column "STATION"
COLUMN_ALIASES = {"station": "id"}


def normalize_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """Lower-case headers, map aliases and keep the observation columns.

    Measurement columns that are absent are added as all-missing so that the
    cleaning stages can drop those rows. Attribute/flag columns are discarded.
    """
    renamed = frame.rename(columns=lambda c: str(c).strip().lower()).rename(columns=COLUMN_ALIASES)
    if "id" not in renamed.columns or "date" not in renamed.columns:
        raise ValueError(
            f"Observation table needs 'id' (or 'station') and 'date' columns, got {list(frame.columns)}"
        )

    for col in RAW_COLUMNS:
        if col not in renamed.columns:
            renamed[col] = float("nan")

    keep = list(RAW_COLUMNS) + [c for c in METADATA_COLUMNS if c in renamed.columns]
    normalized = renamed[keep].copy()
    normalized["id"] = normalized["id"].where(normalized["id"].isna(), normalized["id"].astype(str))
    return normalized


def load_observations(path: Path | str) -> pd.DataFrame:
    """Read a raw observation CSV.

    Args:
        path: CSV in GHCN-Daily access format or with lower-case headers

    Returns:
        Raw observation table with ``id``, ``date``, ``prcp``, ``snow``,
        ``tmax``, ``tmin`` and any station metadata columns
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Observation file not found: {path}")

    log.info("loading_observations", path=str(path))
    frame = normalize_columns(pd.read_csv(path, low_memory=False))
    log.info("observations_loaded", path=str(path), record_count=len(frame))
    return frame

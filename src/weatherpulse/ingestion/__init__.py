"""Raw observation sources: CSV files, NOAA GHCN-Daily and simulation."""

from weatherpulse.ingestion.ghcn import GHCNClient
from weatherpulse.ingestion.loader import load_observations, normalize_columns
from weatherpulse.ingestion.simulator import ObservationSimulator

__all__ = ["GHCNClient", "ObservationSimulator", "load_observations", "normalize_columns"]

"""Station observations from NOAA GHCN-Daily (free, no key required)."""

from collections.abc import Iterable
from io import StringIO

import httpx
import pandas as pd
import structlog

from weatherpulse.config import GHCN_ACCESS_URL
from weatherpulse.ingestion.loader import normalize_columns

log = structlog.get_logger()

# A few long-running US stations for demos
STATIONS = {
    "seattle": "USW00024233",
    "new_york": "USW00094728",
    "chicago": "USW00094846",
    "denver": "USW00023062",
    "phoenix": "USW00023183",
}


class GHCNClient:
    """Client for downloading GHCN-Daily per-station CSV files.

    Values come back exactly as NOAA stores them: precipitation in tenths of
    mm, temperatures in tenths of °C, snowfall in mm.
    """

    def __init__(self, base_url: str = GHCN_ACCESS_URL, timeout: float = 30.0,
                 transport: httpx.BaseTransport | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        # Station files can be tens of MB
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    def fetch_station(self, station_id: str) -> pd.DataFrame:
        """Fetch every daily record for one station.

        Args:
            station_id: GHCN station id (e.g. USW00024233) or a name from STATIONS

        Returns:
            Raw observation table for the station
        """
        station_id = STATIONS.get(station_id, station_id)
        url = f"{self._base_url}/{station_id}.csv"
        log.info("fetching_station", station=station_id, url=url)

        response = self._client.get(url)
        response.raise_for_status()

        frame = normalize_columns(pd.read_csv(StringIO(response.text), low_memory=False))
        log.info("station_fetched", station=station_id, record_count=len(frame))
        return frame

    def fetch_stations(self, station_ids: Iterable[str]) -> pd.DataFrame:
        """Fetch and concatenate several stations."""
        frames = [self.fetch_station(s) for s in station_ids]
        if not frames:
            raise ValueError("No station ids given")
        return pd.concat(frames, ignore_index=True)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GHCNClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

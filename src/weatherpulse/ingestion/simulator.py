"""Synthetic GHCN-style station observations for demos and tests."""

import math
import random
from datetime import date, timedelta

import pandas as pd
import structlog

log = structlog.get_logger()

# Station id -> (name, lat, lon, elevation m, mean annual temp °C, seasonal amplitude °C)
SIMULATED_STATIONS = {
    "USW00024233": ("SEATTLE TACOMA AIRPORT, WA US", 47.4444, -122.3139, 112.8, 11.5, 7.0),
    "USW00094728": ("NY CITY CENTRAL PARK, NY US", 40.7789, -73.9692, 42.7, 13.0, 12.0),
    "USW00094846": ("CHICAGO OHARE INTERNATIONAL AIRPORT, IL US", 41.9950, -87.9336, 201.8, 10.0, 14.0),
    "USW00023062": ("DENVER CENTRAL PARK, CO US", 39.7633, -104.8694, 1610.0, 10.5, 11.0),
    "USW00023183": ("PHOENIX AIRPORT, AZ US", 33.4278, -112.0039, 337.4, 24.0, 10.0),
}

MEASUREMENTS = ("prcp", "snow", "tmax", "tmin")


class ObservationSimulator:
    """Generates raw daily observations, encoded the way GHCN-Daily stores them.

    Temperatures and precipitation are in tenths of °C / mm; snowfall in mm.
    Each row can be damaged on purpose (missing values, tmax <= tmin, exact
    duplicates) so that the cleaning stages have something to remove.
    """

    def __init__(
        self,
        seed: int | None = None,
        missing_rate: float = 0.02,
        inconsistent_rate: float = 0.01,
        duplicate_rate: float = 0.01,
    ) -> None:
        self._rng = random.Random(seed)
        self.missing_rate = missing_rate
        self.inconsistent_rate = inconsistent_rate
        self.duplicate_rate = duplicate_rate

    def simulate(
        self,
        start: date = date(2010, 1, 1),
        end: date = date(2017, 12, 31),
        stations: list[str] | None = None,
    ) -> pd.DataFrame:
        """Generate one row per station per day in ``[start, end]``.

        Args:
            start: First day
            end: Last day (inclusive)
            stations: Station ids from SIMULATED_STATIONS (default: all)

        Returns:
            Raw observation table
        """
        station_ids = stations or list(SIMULATED_STATIONS)
        unknown = [s for s in station_ids if s not in SIMULATED_STATIONS]
        if unknown:
            raise ValueError(f"Unknown stations: {unknown}. Valid: {list(SIMULATED_STATIONS)}")

        days = (end - start).days + 1
        rows = []
        for station_id in station_ids:
            for offset in range(days):
                rows.append(self._simulate_day(station_id, start + timedelta(days=offset)))

        # Exact copies of earlier rows
        duplicates = [dict(row) for row in rows if self._rng.random() < self.duplicate_rate]
        rows.extend(duplicates)

        log.info("observations_simulated", stations=len(station_ids), rows=len(rows),
                 duplicates=len(duplicates))
        return pd.DataFrame(rows)

    def _simulate_day(self, station_id: str, day: date) -> dict[str, object]:
        name, lat, lon, elevation, mean_temp, amplitude = SIMULATED_STATIONS[station_id]

        # Coldest around mid-January
        season = math.cos(2 * math.pi * (day.timetuple().tm_yday - 15) / 365.25)
        tavg = mean_temp - amplitude * season + self._rng.gauss(0, 3.0)
        spread = max(1.0, self._rng.gauss(10.0, 3.0))
        tmax = tavg + spread / 2
        tmin = tavg - spread / 2

        # Most days are dry; wet days follow a skewed distribution
        prcp = self._rng.expovariate(1 / 6.0) if self._rng.random() < 0.35 else 0.0
        snow = prcp * 10 if tmax < 2.0 and prcp > 0 else 0.0

        if self._rng.random() < self.inconsistent_rate:
            tmax, tmin = tmin, tmax

        row: dict[str, object] = {
            "id": station_id,
            "date": day.isoformat(),
            "prcp": round(prcp * 10),
            "snow": round(snow),
            "tmax": round(tmax * 10),
            "tmin": round(tmin * 10),
            "name": name,
            "latitude": lat,
            "longitude": lon,
            "elevation": elevation,
        }
        for field in MEASUREMENTS:
            if self._rng.random() < self.missing_rate:
                row[field] = None
        return row

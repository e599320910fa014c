"""Shared fixtures."""

import pandas as pd
import pytest

from weatherpulse.ingestion import ObservationSimulator


@pytest.fixture(scope="session")
def simulated_raw() -> pd.DataFrame:
    """Eight years of five simulated stations (~14.6k rows, some damaged)."""
    return ObservationSimulator(seed=7).simulate()


@pytest.fixture
def small_raw() -> pd.DataFrame:
    """Ten raw rows: five valid, two exact duplicates, three with tmax <= tmin."""
    valid = [
        {"id": "USW00024233", "date": "2014-01-05", "prcp": 123, "snow": 0.0, "tmax": 85, "tmin": 21},
        {"id": "USW00024233", "date": "2015-06-10", "prcp": 0, "snow": 0.0, "tmax": 244, "tmin": 122},
        {"id": "USW00094728", "date": "2009-12-31", "prcp": 56, "snow": 30.0, "tmax": -10, "tmin": -55},
        {"id": "USW00094728", "date": "2015-02-14", "prcp": 10, "snow": 5.0, "tmax": 17, "tmin": -32},
        {"id": "USW00023183", "date": "2016-07-04", "prcp": 0, "snow": 0.0, "tmax": 411, "tmin": 289},
    ]
    duplicates = [dict(valid[0]), dict(valid[1])]
    inconsistent = [
        {"id": "USW00023183", "date": "2016-07-05", "prcp": 0, "snow": 0.0, "tmax": 280, "tmin": 300},
        {"id": "USW00023183", "date": "2016-07-06", "prcp": 0, "snow": 0.0, "tmax": 250, "tmin": 250},
        {"id": "USW00094728", "date": "2015-02-15", "prcp": 3, "snow": 0.0, "tmax": -40, "tmin": -5},
    ]
    return pd.DataFrame(valid + duplicates + inconsistent)

"""Tests for CSV loading and the GHCN-Daily client."""

from pathlib import Path

import httpx
import pandas as pd
import pytest

from weatherpulse.ingestion import GHCNClient, load_observations, normalize_columns

GHCN_CSV = """\
"STATION","DATE","LATITUDE","LONGITUDE","ELEVATION","NAME","PRCP","PRCP_ATTRIBUTES","SNOW","SNOW_ATTRIBUTES","TMAX","TMAX_ATTRIBUTES","TMIN","TMIN_ATTRIBUTES"
"USW00024233","2015-01-01","47.4444","-122.3139","112.8","SEATTLE TACOMA AIRPORT, WA US","0",",,W,2400","0",",,W,","72",",,W,","-21",",,W,"
"USW00024233","2015-01-02","47.4444","-122.3139","112.8","SEATTLE TACOMA AIRPORT, WA US","51",",,W,2400","0",",,W,","94",",,W,","33",",,W,"
"USW00024233","2015-01-03","47.4444","-122.3139","112.8","SEATTLE TACOMA AIRPORT, WA US","",",,W,2400","","","100",",,W,","50",",,W,"
"""


@pytest.fixture
def ghcn_file(tmp_path: Path) -> Path:
    path = tmp_path / "USW00024233.csv"
    path.write_text(GHCN_CSV)
    return path


class TestLoadObservations:
    def test_ghcn_format(self, ghcn_file: Path) -> None:
        raw = load_observations(ghcn_file)
        assert list(raw.columns) == [
            "id", "date", "prcp", "snow", "tmax", "tmin",
            "name", "latitude", "longitude", "elevation",
        ]
        assert len(raw) == 3
        assert raw.loc[1, "prcp"] == 51
        assert pd.isna(raw.loc[2, "prcp"])
        assert raw.loc[0, "id"] == "USW00024233"

    def test_lowercase_headers(self, tmp_path: Path) -> None:
        path = tmp_path / "obs.csv"
        path.write_text("id,date,prcp,snow,tmax,tmin\n123,2015-01-01,5,0,10,2\n")
        raw = load_observations(path)
        assert raw.loc[0, "id"] == "123"
        assert raw.loc[0, "tmax"] == 10

    def test_missing_measurement_column_added(self, tmp_path: Path) -> None:
        path = tmp_path / "obs.csv"
        path.write_text("STATION,DATE,PRCP,SNOW,TMAX\nA,2015-01-01,5,0,10\n")
        raw = load_observations(path)
        assert "tmin" in raw.columns
        assert raw["tmin"].isna().all()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_observations(tmp_path / "nope.csv")

    def test_requires_date_column(self) -> None:
        with pytest.raises(ValueError, match="'date'"):
            normalize_columns(pd.DataFrame({"station": ["A"], "prcp": [1]}))


class TestGHCNClient:
    @pytest.fixture
    def requests(self) -> list[httpx.Request]:
        return []

    @pytest.fixture
    def client(self, requests: list[httpx.Request]) -> GHCNClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path.endswith("/USW00024233.csv"):
                return httpx.Response(200, text=GHCN_CSV)
            return httpx.Response(404, text="not found")

        return GHCNClient("https://example.test/access/", transport=httpx.MockTransport(handler))

    def test_fetch_station(self, client: GHCNClient, requests: list[httpx.Request]) -> None:
        with client:
            raw = client.fetch_station("USW00024233")
        assert len(raw) == 3
        assert str(requests[0].url) == "https://example.test/access/USW00024233.csv"

    def test_station_alias(self, client: GHCNClient, requests: list[httpx.Request]) -> None:
        with client:
            client.fetch_station("seattle")
        assert requests[0].url.path.endswith("/USW00024233.csv")

    def test_http_error_propagates(self, client: GHCNClient) -> None:
        with client, pytest.raises(httpx.HTTPStatusError):
            client.fetch_station("USW00000000")

    def test_fetch_stations_concatenates(self, client: GHCNClient) -> None:
        with client:
            raw = client.fetch_stations(["seattle", "USW00024233"])
        assert len(raw) == 6
        assert list(raw.index) == list(range(6))

    def test_fetch_stations_requires_ids(self, client: GHCNClient) -> None:
        with client, pytest.raises(ValueError):
            client.fetch_stations([])

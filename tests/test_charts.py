"""Tests for chart builders."""

from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import pytest

from weatherpulse.dashboard import (
    build_charts,
    create_bar_chart,
    create_box_chart,
    create_scatter_chart,
    write_charts,
)
from weatherpulse.pipeline import PipelineResult, aggregate_by_year


@pytest.fixture
def result() -> PipelineResult:
    dates = pd.to_datetime(["2008-01-05", "2009-07-01", "2015-03-02", "2015-11-20"])
    sample = pd.DataFrame(
        {
            "id": ["A", "A", "B", "B"],
            "date": dates,
            "year": dates.year.astype("int64"),
            "prcp": [1.0, 0.0, 3.5, 2.0],
            "snow": [20.0, 0.0, 0.0, 5.0],
            "tmax": [2.0, 25.0, 12.0, 6.0],
            "tmin": [-4.0, 14.0, 3.0, 1.0],
        }
    )
    return PipelineResult(sample=sample, aggregate=aggregate_by_year(sample))


class TestCharts:
    def test_scatter(self, result: PipelineResult) -> None:
        fig = create_scatter_chart(result.sample)
        assert isinstance(fig, go.Figure)
        assert len(fig.data[0].x) == 4

    def test_box_has_tmax_and_tmin(self, result: PipelineResult) -> None:
        fig = create_box_chart(result.sample)
        assert {trace.name for trace in fig.data} == {"tmax", "tmin"}

    def test_bar_colours_by_decade(self, result: PipelineResult) -> None:
        fig = create_bar_chart(result.aggregate)
        assert {trace.name for trace in fig.data} == {"2000s", "2010s"}

    def test_missing_columns_rejected(self, result: PipelineResult) -> None:
        with pytest.raises(ValueError, match="snow"):
            create_scatter_chart(result.sample.drop(columns=["snow"]))
        with pytest.raises(ValueError, match="decade"):
            create_bar_chart(result.aggregate.drop(columns=["decade"]))

    def test_build_charts(self, result: PipelineResult) -> None:
        assert set(build_charts(result)) == {
            "precipitation_scatter",
            "temperature_box",
            "yearly_precipitation_bar",
        }

    def test_write_charts(self, result: PipelineResult, tmp_path: Path) -> None:
        paths = write_charts(result, tmp_path / "charts")
        assert len(paths) == 3
        for path in paths:
            assert path.exists()
            assert "plotly" in path.read_text().lower()

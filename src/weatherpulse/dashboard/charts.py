"""Plotly figures for the sampled observations and yearly aggregate."""

from collections.abc import Iterable
from pathlib import Path

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import structlog

from weatherpulse.pipeline import PipelineResult

log = structlog.get_logger()

SCATTER_COLUMNS = ("id", "date", "prcp", "snow")
BOX_COLUMNS = ("year", "tmax", "tmin")
BAR_COLUMNS = ("year", "avg_prcp", "decade")


def _require(df: pd.DataFrame, columns: Iterable[str], chart: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{chart} chart needs columns {missing}")


def create_scatter_chart(sample: pd.DataFrame) -> go.Figure:
    """Daily precipitation over time, coloured by snowfall."""
    _require(sample, SCATTER_COLUMNS, "Scatter")
    fig = px.scatter(
        sample,
        x="date",
        y="prcp",
        color="snow",
        hover_data=["id"],
        opacity=0.6,
        color_continuous_scale="Blues",
    )
    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Precipitation (mm)",
        coloraxis_colorbar_title="Snow (mm)",
        height=400,
    )
    return fig


def create_box_chart(sample: pd.DataFrame) -> go.Figure:
    """Distribution of daily max and min temperature per year."""
    _require(sample, BOX_COLUMNS, "Box")
    long = sample.melt(
        id_vars=["year"],
        value_vars=["tmax", "tmin"],
        var_name="measure",
        value_name="temperature_c",
    )
    fig = px.box(
        long,
        x="year",
        y="temperature_c",
        color="measure",
        color_discrete_map={"tmax": "#d62728", "tmin": "#1f77b4"},
    )
    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Temperature (°C)",
        legend_title="",
        height=400,
    )
    return fig


def create_bar_chart(aggregate: pd.DataFrame) -> go.Figure:
    """Mean daily precipitation per year, coloured by decade."""
    _require(aggregate, BAR_COLUMNS, "Bar")
    fig = px.bar(
        aggregate.assign(decade=aggregate["decade"].astype(str) + "s"),
        x="year",
        y="avg_prcp",
        color="decade",
    )
    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Average Precipitation (mm)",
        legend_title="Decade",
        height=350,
    )
    return fig


def build_charts(result: PipelineResult) -> dict[str, go.Figure]:
    return {
        "precipitation_scatter": create_scatter_chart(result.sample),
        "temperature_box": create_box_chart(result.sample),
        "yearly_precipitation_bar": create_bar_chart(result.aggregate),
    }


def write_charts(result: PipelineResult, out_dir: Path | str) -> list[Path]:
    """Write the three charts as standalone HTML files."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    paths = []
    for name, fig in build_charts(result).items():
        path = out / f"{name}.html"
        fig.write_html(path, include_plotlyjs="cdn")
        paths.append(path)

    log.info("charts_written", out_dir=str(out), count=len(paths))
    return paths

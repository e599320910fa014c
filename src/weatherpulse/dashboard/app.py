"""Streamlit dashboard for WeatherPulse.

Visualizes:
- Daily precipitation and snowfall for the sample
- Yearly temperature distributions
- Mean precipitation per year, by decade
- Quality check status and per-stage row counts
"""

from pathlib import Path

import pandas as pd
import streamlit as st

from weatherpulse.config import PipelineSettings
from weatherpulse.dashboard.charts import create_bar_chart, create_box_chart, create_scatter_chart
from weatherpulse.errors import PipelineError
from weatherpulse.ingestion import ObservationSimulator, load_observations
from weatherpulse.metrics import MetricsEngine
from weatherpulse.models import QualityStatus
from weatherpulse.pipeline import CleaningPipeline, PipelineResult
from weatherpulse.quality import QualityChecker

st.set_page_config(
    page_title="WeatherPulse Dashboard",
    page_icon="🌦️",
    layout="wide",
)


DEFAULT_SEED = 42


@st.cache_data
def load_raw(csv_path: str | None, seed: int) -> pd.DataFrame:
    """Load the raw table (cached per source)."""
    if csv_path:
        return load_observations(Path(csv_path))
    return ObservationSimulator(seed=seed).simulate()


def initial_seed(settings: PipelineSettings) -> int:
    """Sidebar seed: the configured one (0 included), else 42."""
    return DEFAULT_SEED if settings.seed is None else settings.seed


def main() -> None:
    st.title("🌦️ WeatherPulse Dashboard")
    st.markdown("Cleaned station observations, sampled and aggregated by year")

    settings = PipelineSettings()

    st.sidebar.header("Pipeline")
    csv_path = st.sidebar.text_input("Observation CSV (blank = simulated)", value="")
    seed = int(st.sidebar.number_input("Seed", value=initial_seed(settings), step=1))
    sample_size = int(
        st.sidebar.number_input("Sample size", value=settings.sample_size, min_value=1, step=1000)
    )
    settings = settings.model_copy(update={"seed": seed, "sample_size": sample_size})

    raw = load_raw(csv_path or None, seed)
    try:
        result = CleaningPipeline(settings).run(raw)
    except PipelineError as e:
        st.error(str(e))
        return

    st.header("Key Metrics")
    display_key_metrics(result)

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Daily Precipitation")
        st.plotly_chart(create_scatter_chart(result.sample), use_container_width=True)

    with col2:
        st.subheader("Temperature by Year")
        st.plotly_chart(create_box_chart(result.sample), use_container_width=True)

    st.header("Yearly Precipitation")
    st.plotly_chart(create_bar_chart(result.aggregate), use_container_width=True)

    st.header("Data Quality")
    display_quality_checks(result, settings)

    with st.expander("Pipeline Stages"):
        stages_df = pd.DataFrame(
            [
                {"Stage": s.name, "Rows In": s.rows_in, "Rows Out": s.rows_out,
                 "Removed": s.rows_removed}
                for s in result.stages
            ]
        )
        st.dataframe(stages_df, use_container_width=True)

    with st.expander("Raw Data Explorer"):
        tab1, tab2 = st.tabs(["Sample", "Yearly Aggregate"])
        with tab1:
            st.dataframe(result.sample.head(100), use_container_width=True)
        with tab2:
            st.dataframe(result.aggregate, use_container_width=True)


def display_key_metrics(result: PipelineResult) -> None:
    """Display key metrics in columns."""
    metrics = {m.metric_name: m for m in MetricsEngine().compute_all(result.sample, result.aggregate)}
    col1, col2, col3, col4 = st.columns(4)

    col1.metric("Avg Precipitation", f"{metrics['average_precipitation'].value:.2f} mm")
    col2.metric("Avg Temp Spread", f"{metrics['average_temperature_spread'].value:.1f} °C")
    col3.metric("Snow Days", f"{metrics['snow_day_fraction'].value:.1%}")
    col4.metric("Wettest Year", f"{metrics['wettest_year'].value:.0f}")


def display_quality_checks(result: PipelineResult, settings: PipelineSettings) -> None:
    """Display quality check status."""
    checker = QualityChecker(settings)
    results = checker.check_sample(result.sample) + checker.check_aggregate(
        result.sample, result.aggregate
    )

    pass_count = sum(1 for r in results if r.status == QualityStatus.PASS)
    warn_count = sum(1 for r in results if r.status == QualityStatus.WARN)
    fail_count = sum(1 for r in results if r.status == QualityStatus.FAIL)

    col1, col2, col3 = st.columns(3)
    col1.metric("✅ Passed", pass_count)
    col2.metric("⚠️ Warnings", warn_count)
    col3.metric("❌ Failed", fail_count)

    with st.expander("Check Details"):
        check_df = pd.DataFrame(
            [(r.check_name, r.status.value, r.message) for r in results],
            columns=["Check", "Status", "Message"],
        )

        def style_status(val: str) -> str:
            colors = {"pass": "background-color: #90EE90", "warn": "background-color: #FFD700",
                      "fail": "background-color: #FF6B6B"}
            return colors.get(val, "")

        styled = check_df.style.map(style_status, subset=["Status"])
        st.dataframe(styled, use_container_width=True)


if __name__ == "__main__":
    main()

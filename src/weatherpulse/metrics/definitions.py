"""Headline metrics for the sampled observations."""

import pandas as pd
import structlog

from weatherpulse.models import MetricResult

log = structlog.get_logger()


class MetricsEngine:
    """Computes summary metrics from the sample and yearly aggregate."""

    def compute_all(
        self,
        sample: pd.DataFrame,
        aggregate: pd.DataFrame | None = None,
        dimensions: dict[str, str] | None = None,
    ) -> list[MetricResult]:
        """Compute all available metrics.

        Args:
            sample: Cleaned, sampled observations
            aggregate: Optional yearly aggregate for year-level metrics
            dimensions: Optional labels attached to every result (station, seed, ...)

        Returns:
            List of computed metric results
        """
        dims = dimensions or {}
        results = [
            self.average_precipitation(sample, dims),
            self.average_temperature_spread(sample, dims),
            self.snow_day_fraction(sample, dims),
            self.station_count(sample, dims),
            self.year_span(sample, dims),
        ]

        if aggregate is not None:
            results.append(self.wettest_year(aggregate, dims))

        log.info("metrics_computed", count=len(results), dimensions=dims)
        return results

    def average_precipitation(self, sample: pd.DataFrame, dims: dict[str, str]) -> MetricResult:
        value = float(sample["prcp"].mean()) if not sample.empty else 0
        return MetricResult(
            metric_name="average_precipitation",
            value=round(value, 3),
            unit="mm",
            dimensions=dims,
        )

    def average_temperature_spread(
        self, sample: pd.DataFrame, dims: dict[str, str]
    ) -> MetricResult:
        """Mean daily range between maximum and minimum temperature."""
        if sample.empty:
            return MetricResult(
                metric_name="average_temperature_spread", value=0, unit="°C", dimensions=dims
            )

        spread = (sample["tmax"] - sample["tmin"]).mean()
        return MetricResult(
            metric_name="average_temperature_spread",
            value=round(float(spread), 2),
            unit="°C",
            dimensions=dims,
        )

    def snow_day_fraction(self, sample: pd.DataFrame, dims: dict[str, str]) -> MetricResult:
        """Share of sampled days with any recorded snowfall."""
        if sample.empty:
            return MetricResult(
                metric_name="snow_day_fraction", value=0, unit="ratio", dimensions=dims
            )

        fraction = (sample["snow"] > 0).mean()
        return MetricResult(
            metric_name="snow_day_fraction",
            value=round(float(fraction), 4),
            unit="ratio",
            dimensions=dims,
        )

    def station_count(self, sample: pd.DataFrame, dims: dict[str, str]) -> MetricResult:
        count = sample["id"].nunique() if not sample.empty else 0
        return MetricResult(
            metric_name="station_count", value=count, unit="stations", dimensions=dims
        )

    def year_span(self, sample: pd.DataFrame, dims: dict[str, str]) -> MetricResult:
        if sample.empty:
            return MetricResult(metric_name="year_span", value=0, unit="years", dimensions=dims)

        span = int(sample["year"].max() - sample["year"].min()) + 1
        return MetricResult(metric_name="year_span", value=span, unit="years", dimensions=dims)

    def wettest_year(self, aggregate: pd.DataFrame, dims: dict[str, str]) -> MetricResult:
        """Year with the highest mean daily precipitation."""
        if aggregate.empty:
            return MetricResult(metric_name="wettest_year", value=0, unit="year", dimensions=dims)

        row = aggregate.loc[aggregate["avg_prcp"].idxmax()]
        return MetricResult(
            metric_name="wettest_year",
            value=int(row["year"]),
            unit="year",
            dimensions=dims,
        )

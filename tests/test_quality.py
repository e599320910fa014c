"""Tests for data quality checks."""

import pandas as pd
import pytest

from weatherpulse.config import PipelineSettings
from weatherpulse.models import QualityStatus
from weatherpulse.pipeline import aggregate_by_year
from weatherpulse.quality import QualityChecker


@pytest.fixture
def checker() -> QualityChecker:
    return QualityChecker(PipelineSettings(sample_size=40))


@pytest.fixture
def sample() -> pd.DataFrame:
    """Forty clean observations spread over four years."""
    dates = pd.date_range("2008-06-01", periods=40, freq="45D")
    return pd.DataFrame(
        {
            "id": ["USW00024233"] * 40,
            "date": dates,
            "year": dates.year.astype("int64"),
            "month": dates.month.astype("int64"),
            "day": dates.day.astype("int64"),
            "prcp": [float(i % 7) for i in range(40)],
            "snow": [0.0] * 40,
            "tmax": [15.0 + i % 5 for i in range(40)],
            "tmin": [5.0 - i % 3 for i in range(40)],
        }
    )


def _status(results: list, name: str) -> QualityStatus:
    return next(r for r in results if r.check_name == name).status


class TestSampleQualityChecks:
    def test_all_pass(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        results = checker.check_sample(sample)
        assert all(r.status == QualityStatus.PASS for r in results)

    def test_missing_values_fail(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        broken = sample.copy()
        broken.loc[3, "prcp"] = float("nan")
        results = checker.check_sample(broken)
        completeness = next(r for r in results if r.check_name == "sample_completeness")
        assert completeness.status == QualityStatus.FAIL
        assert completeness.metric_value == 1

    def test_missing_column_fails(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        results = checker.check_sample(sample.drop(columns=["snow"]))
        assert _status(results, "sample_completeness") == QualityStatus.FAIL

    def test_inverted_temperatures_fail(
        self, checker: QualityChecker, sample: pd.DataFrame
    ) -> None:
        broken = sample.copy()
        broken.loc[0, "tmin"] = broken.loc[0, "tmax"]
        results = checker.check_sample(broken)
        assert _status(results, "temperature_consistency") == QualityStatus.FAIL

    def test_duplicates_fail(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        duplicated = pd.concat([sample.iloc[:39], sample.iloc[[0]]], ignore_index=True)
        results = checker.check_sample(duplicated)
        uniqueness = next(r for r in results if r.check_name == "uniqueness")
        assert uniqueness.status == QualityStatus.FAIL
        assert uniqueness.metric_value == 1

    def test_small_sample_warns(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        results = checker.check_sample(sample.iloc[:30])
        assert _status(results, "sample_size") == QualityStatus.WARN

    def test_empty_sample_fails(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        results = checker.check_sample(sample.iloc[:0])
        assert all(r.status == QualityStatus.FAIL for r in results)

    def test_out_of_range_temperature(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        broken = sample.copy()
        broken.loc[0, "tmax"] = 75.0
        results = checker.check_sample(broken)
        # 1 of 80 temperatures, under 5%
        assert _status(results, "temperature_range") == QualityStatus.WARN


class TestAggregateQualityChecks:
    def test_all_pass(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        results = checker.check_aggregate(sample, aggregate_by_year(sample))
        assert all(r.status == QualityStatus.PASS for r in results)

    def test_wrong_mean_fails(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        aggregate = aggregate_by_year(sample)
        aggregate.loc[0, "avg_prcp"] += 1e-6
        results = checker.check_aggregate(sample, aggregate)
        assert _status(results, "aggregate_means") == QualityStatus.FAIL

    def test_missing_year_fails(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        aggregate = aggregate_by_year(sample).iloc[1:]
        results = checker.check_aggregate(sample, aggregate)
        assert _status(results, "aggregate_coverage") == QualityStatus.FAIL

    def test_wrong_decade_fails(self, checker: QualityChecker, sample: pd.DataFrame) -> None:
        aggregate = aggregate_by_year(sample)
        aggregate["decade"] = aggregate["year"]
        results = checker.check_aggregate(sample, aggregate)
        assert _status(results, "decade_buckets") == QualityStatus.FAIL

"""Data quality checks for the cleaned sample and yearly aggregate."""

import pandas as pd
import structlog

from weatherpulse.config import PipelineSettings
from weatherpulse.models import CLEAN_COLUMNS, QualityCheckResult, QualityStatus

log = structlog.get_logger()

# Float tolerance when recomputing yearly means
MEAN_TOLERANCE = 1e-9


class QualityChecker:
    """Verifies pipeline outputs against their invariants."""

    def __init__(self, settings: PipelineSettings | None = None) -> None:
        self.settings = settings or PipelineSettings()

    def check_sample(self, sample: pd.DataFrame) -> list[QualityCheckResult]:
        """Run all quality checks on the sampled observations."""
        results = [
            self._check_completeness(sample),
            self._check_temperature_consistency(sample),
            self._check_uniqueness(sample),
            self._check_sample_size(sample),
            self._check_temperature_range(sample),
        ]

        passed = sum(1 for r in results if r.status == QualityStatus.PASS)
        log.info("sample_quality_complete", passed=passed, total=len(results))
        return results

    def check_aggregate(
        self, sample: pd.DataFrame, aggregate: pd.DataFrame
    ) -> list[QualityCheckResult]:
        """Run all quality checks on the yearly aggregate."""
        results = [
            self._check_aggregate_coverage(sample, aggregate),
            self._check_aggregate_means(sample, aggregate),
            self._check_decades(aggregate),
        ]

        passed = sum(1 for r in results if r.status == QualityStatus.PASS)
        log.info("aggregate_quality_complete", passed=passed, total=len(results))
        return results

    def _check_completeness(self, sample: pd.DataFrame) -> QualityCheckResult:
        if sample.empty:
            return QualityCheckResult(
                check_name="sample_completeness",
                status=QualityStatus.FAIL,
                message="No records to check",
            )

        absent = [c for c in CLEAN_COLUMNS if c not in sample.columns]
        if absent:
            return QualityCheckResult(
                check_name="sample_completeness",
                status=QualityStatus.FAIL,
                message=f"Missing columns: {', '.join(absent)}",
            )

        missing = int(sample[list(CLEAN_COLUMNS)].isna().any(axis=1).sum())
        if missing == 0:
            status = QualityStatus.PASS
            message = f"All {len(sample)} records have every field"
        else:
            status = QualityStatus.FAIL
            message = f"{missing} records have missing fields"

        return QualityCheckResult(
            check_name="sample_completeness",
            status=status,
            metric_value=missing,
            threshold=0,
            message=message,
        )

    def _check_temperature_consistency(self, sample: pd.DataFrame) -> QualityCheckResult:
        if sample.empty:
            return QualityCheckResult(
                check_name="temperature_consistency",
                status=QualityStatus.FAIL,
                message="No records to check",
            )

        inverted = int((sample["tmax"] <= sample["tmin"]).sum())
        if inverted == 0:
            status = QualityStatus.PASS
            message = "tmax exceeds tmin in every record"
        else:
            status = QualityStatus.FAIL
            message = f"{inverted} records have tmax <= tmin"

        return QualityCheckResult(
            check_name="temperature_consistency",
            status=status,
            metric_value=inverted,
            threshold=0,
            message=message,
        )

    def _check_uniqueness(self, sample: pd.DataFrame) -> QualityCheckResult:
        if sample.empty:
            return QualityCheckResult(
                check_name="uniqueness",
                status=QualityStatus.FAIL,
                message="No records to check",
            )

        duplicates = int(sample.duplicated().sum())
        if duplicates == 0:
            status = QualityStatus.PASS
            message = f"All {len(sample)} records are unique"
        else:
            status = QualityStatus.FAIL
            message = f"Found {duplicates} duplicate records"

        return QualityCheckResult(
            check_name="uniqueness",
            status=status,
            metric_value=duplicates,
            threshold=0,
            message=message,
        )

    def _check_sample_size(self, sample: pd.DataFrame) -> QualityCheckResult:
        expected = self.settings.sample_size
        count = len(sample)

        if count == expected:
            status = QualityStatus.PASS
            message = f"Sample has {count} records"
        elif 0 < count < expected:
            status = QualityStatus.WARN
            message = f"Sample has {count} records (expected {expected})"
        else:
            status = QualityStatus.FAIL
            message = f"Sample has {count} records (expected {expected})"

        return QualityCheckResult(
            check_name="sample_size",
            status=status,
            metric_value=count,
            threshold=expected,
            message=message,
        )

    def _check_temperature_range(self, sample: pd.DataFrame) -> QualityCheckResult:
        if sample.empty:
            return QualityCheckResult(
                check_name="temperature_range",
                status=QualityStatus.FAIL,
                message="No records to check",
            )

        min_temp, max_temp = self.settings.min_temp_c, self.settings.max_temp_c
        temps = pd.concat([sample["tmax"], sample["tmin"]])
        out_of_range = int((~temps.between(min_temp, max_temp)).sum())

        if out_of_range == 0:
            status = QualityStatus.PASS
            message = f"All {len(temps)} temperatures within range [{min_temp:g}, {max_temp:g}]°C"
        else:
            pct = out_of_range / len(temps) * 100
            status = QualityStatus.FAIL if pct > 5 else QualityStatus.WARN
            message = (
                f"{out_of_range} temps ({pct:.1f}%) outside range [{min_temp:g}, {max_temp:g}]°C"
            )

        return QualityCheckResult(
            check_name="temperature_range",
            status=status,
            metric_value=out_of_range,
            threshold=0,
            message=message,
        )

    def _check_aggregate_coverage(
        self, sample: pd.DataFrame, aggregate: pd.DataFrame
    ) -> QualityCheckResult:
        sample_years = set(sample["year"].unique()) if not sample.empty else set()
        aggregate_years = set(aggregate["year"]) if not aggregate.empty else set()
        counted = int(sample["year"].isin(aggregate_years).sum()) if not sample.empty else 0

        if sample_years == aggregate_years and counted == len(sample):
            status = QualityStatus.PASS
            message = f"{len(aggregate_years)} years cover all {counted} sampled records"
        else:
            status = QualityStatus.FAIL
            missing = sorted(sample_years - aggregate_years)
            extra = sorted(aggregate_years - sample_years)
            message = f"Year mismatch: missing {missing}, unexpected {extra}"

        return QualityCheckResult(
            check_name="aggregate_coverage",
            status=status,
            metric_value=counted,
            threshold=len(sample),
            message=message,
        )

    def _check_aggregate_means(
        self, sample: pd.DataFrame, aggregate: pd.DataFrame
    ) -> QualityCheckResult:
        if aggregate.empty:
            return QualityCheckResult(
                check_name="aggregate_means",
                status=QualityStatus.FAIL,
                message="No aggregate rows to check",
            )

        expected = sample.groupby("year")["prcp"].mean()
        actual = aggregate.set_index("year")["avg_prcp"]
        diff = (actual - expected.reindex(actual.index)).abs()
        mismatched = int((diff.isna() | (diff > MEAN_TOLERANCE)).sum())

        if mismatched == 0:
            status = QualityStatus.PASS
            message = f"avg_prcp matches the sample mean for all {len(actual)} years"
        else:
            status = QualityStatus.FAIL
            message = f"{mismatched} years have avg_prcp differing from the sample mean"

        return QualityCheckResult(
            check_name="aggregate_means",
            status=status,
            metric_value=mismatched,
            threshold=MEAN_TOLERANCE,
            message=message,
        )

    def _check_decades(self, aggregate: pd.DataFrame) -> QualityCheckResult:
        if aggregate.empty:
            return QualityCheckResult(
                check_name="decade_buckets",
                status=QualityStatus.FAIL,
                message="No aggregate rows to check",
            )

        wrong = int((aggregate["decade"] != (aggregate["year"] // 10) * 10).sum())
        if wrong == 0:
            status = QualityStatus.PASS
            message = "Every year falls in its decade bucket"
        else:
            status = QualityStatus.FAIL
            message = f"{wrong} years have the wrong decade"

        return QualityCheckResult(
            check_name="decade_buckets",
            status=status,
            metric_value=wrong,
            threshold=0,
            message=message,
        )

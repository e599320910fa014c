"""End-to-end cleaning, sampling and aggregation."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pandas as pd
import structlog

from weatherpulse.config import PipelineSettings
from weatherpulse.models import (
    RAW_COLUMNS,
    CleanObservation,
    RawObservation,
    StageReport,
    YearlyAggregate,
)
from weatherpulse.pipeline.stages import (
    RandomSource,
    aggregate_by_year,
    cleaning_stages,
    sample_observations,
)

log = structlog.get_logger()


def observations_to_frame(records: Sequence[RawObservation]) -> pd.DataFrame:
    """Build a raw table from validated observation models."""
    frame = pd.DataFrame([r.model_dump() for r in records])
    for col in RAW_COLUMNS:
        if col not in frame.columns:
            frame[col] = None
    return frame


@dataclass
class PipelineResult:
    """The two pipeline outputs plus per-stage row counts."""

    sample: pd.DataFrame
    aggregate: pd.DataFrame
    stages: list[StageReport] = field(default_factory=list)
    clean_rows: int = 0

    def sample_records(self) -> list[CleanObservation]:
        rows = self.sample.assign(date=self.sample["date"].dt.date)
        return [CleanObservation.model_validate(row) for row in rows.to_dict("records")]

    def aggregate_records(self) -> list[YearlyAggregate]:
        return [YearlyAggregate.model_validate(row) for row in self.aggregate.to_dict("records")]


class CleaningPipeline:
    """Cleans raw observations, samples them and aggregates by year."""

    def __init__(self, settings: PipelineSettings | None = None) -> None:
        self.settings = settings or PipelineSettings()
        self.stages = cleaning_stages(self.settings.unit_divisor)

    def clean(self, raw: pd.DataFrame) -> tuple[pd.DataFrame, list[StageReport]]:
        """Run the cleaning stages, recording row counts for each."""
        reports = []
        df = raw
        for stage in self.stages:
            rows_in = len(df)
            df = stage(df)
            reports.append(StageReport(name=stage.name, rows_in=rows_in, rows_out=len(df)))
            log.info("stage_complete", stage=stage.name, rows_in=rows_in, rows_out=len(df))
        return df, reports

    def run(
        self,
        raw: pd.DataFrame | Sequence[RawObservation],
        rng: RandomSource = None,
    ) -> PipelineResult:
        """Clean, sample and aggregate.

        Args:
            raw: Raw observation table (or models)
            rng: Seed or numpy Generator. ``None`` falls back to the configured
                ``seed`` (fresh entropy only when that is unset too); pass
                ``np.random.default_rng()`` for fresh entropy regardless

        Returns:
            Sampled observations and their yearly aggregate

        Raises:
            MalformedDateError: a date cannot be parsed
            InsufficientDataError: fewer clean rows than the sample size
        """
        if not isinstance(raw, pd.DataFrame):
            raw = observations_to_frame(raw)
        if rng is None:
            rng = self.settings.seed

        log.info("pipeline_started", raw_rows=len(raw), sample_size=self.settings.sample_size)
        clean, reports = self.clean(raw)

        sample = sample_observations(clean, self.settings.sample_size, rng)
        reports.append(
            StageReport(name="sample_observations", rows_in=len(clean), rows_out=len(sample))
        )
        aggregate = aggregate_by_year(sample)

        log.info("pipeline_complete", clean_rows=len(clean), years=len(aggregate))
        return PipelineResult(
            sample=sample, aggregate=aggregate, stages=reports, clean_rows=len(clean)
        )

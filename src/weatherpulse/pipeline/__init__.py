"""Cleaning and aggregation pipeline for station observations."""

from weatherpulse.pipeline.runner import CleaningPipeline, PipelineResult, observations_to_frame
from weatherpulse.pipeline.stages import (
    CLEANING_STAGES,
    Stage,
    aggregate_by_year,
    clean_observations,
    sample_observations,
)

__all__ = [
    "CLEANING_STAGES",
    "CleaningPipeline",
    "PipelineResult",
    "Stage",
    "aggregate_by_year",
    "clean_observations",
    "observations_to_frame",
    "sample_observations",
]

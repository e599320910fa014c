"""Command-line interface for the WeatherPulse pipeline."""

from collections.abc import Sequence
from pathlib import Path

import httpx
import pandas as pd
import structlog
import typer
from rich.console import Console
from rich.table import Table

from weatherpulse.config import PipelineSettings
from weatherpulse.dashboard.charts import write_charts
from weatherpulse.errors import PipelineError
from weatherpulse.ingestion import GHCNClient, ObservationSimulator, load_observations
from weatherpulse.metrics import MetricsEngine
from weatherpulse.models import MetricResult, QualityCheckResult, QualityStatus
from weatherpulse.pipeline import CleaningPipeline, PipelineResult
from weatherpulse.quality import QualityChecker

# Configure structured logging
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ]
)

app = typer.Typer(
    name="weatherpulse",
    help="Clean, sample and aggregate daily station weather observations",
    no_args_is_help=True,
)
console = Console()

STATUS_STYLE = {
    "pass": "[green]PASS[/green]",
    "warn": "[yellow]WARN[/yellow]",
    "fail": "[red]FAIL[/red]",
}

InputOption = typer.Option(None, "--input", help="Raw observation CSV")
StationOption = typer.Option(None, "--station", help="GHCN station id or name (repeatable)")
SeedOption = typer.Option(None, help="Seed for sampling (and simulation)")
SampleSizeOption = typer.Option(None, help="Rows to sample from the cleaned set")


def _settings(seed: int | None, sample_size: int | None) -> PipelineSettings:
    overrides: dict[str, int] = {}
    if seed is not None:
        overrides["seed"] = seed
    if sample_size is not None:
        overrides["sample_size"] = sample_size
    return PipelineSettings(**overrides)


def _load_raw(
    input_path: Path | None, stations: Sequence[str] | None, settings: PipelineSettings
) -> pd.DataFrame:
    """Load from CSV, else GHCN stations, else simulate."""
    if input_path is not None:
        console.print(f"[bold blue]Loading {input_path}...[/bold blue]")
        return load_observations(input_path)

    if stations:
        console.print(f"[bold blue]Fetching {', '.join(stations)} from GHCN-Daily...[/bold blue]")
        with GHCNClient(settings.ghcn_base_url, timeout=settings.http_timeout) as client:
            return client.fetch_stations(stations)

    console.print("[bold blue]Simulating observations...[/bold blue]")
    return ObservationSimulator(seed=settings.seed).simulate()


def _execute(
    input_path: Path | None,
    stations: Sequence[str] | None,
    settings: PipelineSettings,
) -> PipelineResult:
    try:
        raw = _load_raw(input_path, stations, settings)
        console.print(f"  Loaded {len(raw):,} raw records")
        result = CleaningPipeline(settings).run(raw)
    except (PipelineError, FileNotFoundError, ValueError, httpx.HTTPError) as e:
        console.print(f"[bold red]Pipeline failed:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(
        f"  Kept {result.clean_rows:,} clean records, sampled {len(result.sample):,} "
        f"across {len(result.aggregate)} years"
    )
    return result


def _print_stages(result: PipelineResult) -> None:
    table = Table(title="Pipeline Stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Rows In", justify="right")
    table.add_column("Rows Out", justify="right")
    table.add_column("Removed", justify="right", style="bold")

    for stage in result.stages:
        table.add_row(
            stage.name, f"{stage.rows_in:,}", f"{stage.rows_out:,}", f"{stage.rows_removed:,}"
        )
    console.print(table)


def _check_quality(result: PipelineResult, settings: PipelineSettings) -> list[QualityCheckResult]:
    checker = QualityChecker(settings)
    all_results = checker.check_sample(result.sample) + checker.check_aggregate(
        result.sample, result.aggregate
    )

    table = Table(title="Quality Check Results")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Message")

    for check in all_results:
        table.add_row(
            check.check_name,
            STATUS_STYLE.get(check.status.value, check.status.value),
            check.message,
        )

    console.print(table)

    passed = sum(1 for r in all_results if r.status == QualityStatus.PASS)
    console.print(f"\n[bold]{passed}/{len(all_results)} checks passed[/bold]")
    return all_results


def _compute_metrics(result: PipelineResult, settings: PipelineSettings) -> list[MetricResult]:
    dims = {"seed": str(settings.seed)} if settings.seed is not None else {}
    results = MetricsEngine().compute_all(result.sample, result.aggregate, dims)

    table = Table(title="Weather Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold")
    table.add_column("Unit")

    for metric in results:
        table.add_row(metric.metric_name, f"{metric.value:,.3f}", metric.unit)

    console.print(table)
    return results


@app.command()
def run(
    input_path: Path | None = InputOption,
    station: list[str] | None = StationOption,
    seed: int | None = SeedOption,
    sample_size: int | None = SampleSizeOption,
    charts_dir: Path | None = typer.Option(None, help="Also write HTML charts here"),
) -> None:
    """Run the full pipeline: load → clean → sample → aggregate → report."""
    console.print("[bold magenta]Running full WeatherPulse pipeline[/bold magenta]\n")
    settings = _settings(seed, sample_size)

    console.rule("[bold]Step 1: Clean, Sample & Aggregate[/bold]")
    result = _execute(input_path, station, settings)
    _print_stages(result)
    console.print()

    console.rule("[bold]Step 2: Quality Checks[/bold]")
    _check_quality(result, settings)
    console.print()

    console.rule("[bold]Step 3: Metrics[/bold]")
    _compute_metrics(result, settings)
    console.print()

    if charts_dir is not None:
        console.rule("[bold]Step 4: Charts[/bold]")
        for path in write_charts(result, charts_dir):
            console.print(f"  Wrote [cyan]{path}[/cyan]")
        console.print()

    console.print("[bold green]Pipeline complete![/bold green]")
    console.print(
        "Dashboard: [cyan]uv run streamlit run src/weatherpulse/dashboard/app.py[/cyan]"
    )


@app.command()
def quality(
    input_path: Path | None = InputOption,
    station: list[str] | None = StationOption,
    seed: int | None = SeedOption,
    sample_size: int | None = SampleSizeOption,
) -> None:
    """Run the pipeline and check its outputs. Exits 1 if any check fails."""
    settings = _settings(seed, sample_size)
    result = _execute(input_path, station, settings)
    checks = _check_quality(result, settings)
    if any(c.status == QualityStatus.FAIL for c in checks):
        raise typer.Exit(code=1)


@app.command()
def metrics(
    input_path: Path | None = InputOption,
    station: list[str] | None = StationOption,
    seed: int | None = SeedOption,
    sample_size: int | None = SampleSizeOption,
) -> None:
    """Run the pipeline and display summary metrics."""
    settings = _settings(seed, sample_size)
    result = _execute(input_path, station, settings)
    _compute_metrics(result, settings)


@app.command()
def charts(
    out_dir: Path = typer.Option(Path("charts"), help="Directory for the HTML charts"),
    input_path: Path | None = InputOption,
    station: list[str] | None = StationOption,
    seed: int | None = SeedOption,
    sample_size: int | None = SampleSizeOption,
) -> None:
    """Run the pipeline and write the scatter, box and bar charts as HTML."""
    settings = _settings(seed, sample_size)
    result = _execute(input_path, station, settings)
    for path in write_charts(result, out_dir):
        console.print(f"  Wrote [cyan]{path}[/cyan]")


if __name__ == "__main__":
    app()

"""Command-line interface for the viral chart."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from viral_chart.config import get_settings
from viral_chart.core.exceptions import FeedError
from viral_chart.core.rewards import category_bonus, compute_reward, platform_multiplier
from viral_chart.core.snapshot import build_snapshot, write_snapshot
from viral_chart.models.dtos import ClassifiedEntry
from viral_chart.services import LeaderboardService, snapshot_worker
from viral_chart.utils.logging_utils import setup_logging

app = typer.Typer(help="Viral Chart - weekly leaderboard of viral AI content with rune rewards")

logger = logging.getLogger(__name__)


@app.callback()
def main(
    log_level: Annotated[str, typer.Option("--log-level", help="Logging level")] = "WARNING",
) -> None:
    setup_logging(log_level=log_level)


def movement_label(entry: ClassifiedEntry) -> str:
    if entry.is_new:
        return "NEW"
    if entry.position_change > 0:
        return f"+{entry.position_change}"
    if entry.position_change < 0:
        return str(entry.position_change)
    return "="


def format_entry_line(entry: ClassifiedEntry) -> str:
    flags = [name for name, on in (("AWARD", entry.is_award), ("TRENDING", entry.is_trending)) if on]
    line = (
        f"{entry.position:>3}  {movement_label(entry):>4}  {entry.title} - {entry.creator}"
        f" [{entry.platform or 'web'}]"
    )
    if entry.formatted_engagement:
        line += f"  {entry.formatted_engagement} engagements"
    line += (
        f"  LW {entry.last_week_position or '-'}"
        f"  PK {entry.peak_position}  WKS {entry.weeks_on_chart}"
    )
    if flags:
        line += f"  ({', '.join(flags)})"
    return line


def _load_service(feed: Optional[Path]) -> LeaderboardService:
    service = LeaderboardService(feed_path=feed)
    try:
        service.refresh()
    except FeedError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)
    return service


@app.command()
def show(
    feed: Annotated[Optional[Path], typer.Option("--feed", help="Chart feed file (JSON or YAML)")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", min=1, help="Number of entries to show")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full view as JSON")] = False,
) -> None:
    """Print the current chart with movement and trending flags."""
    view = _load_service(feed).get_view(limit=limit)

    if as_json:
        typer.echo(view.model_dump_json(indent=2))
        return

    metadata = view.metadata
    typer.echo(f"{metadata.chart} - {(metadata.week or '').upper()}")
    if metadata.description:
        typer.echo(metadata.description)
    if view.featured is not None:
        typer.echo(
            f"#1: {view.featured.title} by {view.featured.creator} "
            f"(weeks at #1: {view.weeks_at_number_one})"
        )
    typer.echo("")
    for entry in view.rankings:
        typer.echo(format_entry_line(entry))
    typer.echo("")
    typer.echo(
        f"{view.stats.total_entries} entries, {view.stats.new_entries} new, "
        f"{view.stats.trending} trending, {view.stats.formatted_engagement} total engagements"
    )


@app.command()
def score(
    platform: Annotated[str, typer.Option("--platform", help="Platform the content was found on")],
    category: Annotated[Optional[str], typer.Option("--category", help="Content category")] = None,
) -> None:
    """Print the runes a submission would earn."""
    runes = compute_reward(platform, category)
    typer.echo(
        f"{runes} runes (platform x{platform_multiplier(platform)}, "
        f"category +{category_bonus(category)})"
    )


@app.command()
def snapshot(
    feed: Annotated[Optional[Path], typer.Option("--feed", help="Chart feed file (JSON or YAML)")] = None,
    output_dir: Annotated[Optional[Path], typer.Option("--output-dir", help="Directory for the snapshot file")] = None,
    schedule: Annotated[bool, typer.Option("--schedule", help="Keep writing snapshots on an interval")] = False,
    interval_hours: Annotated[
        Optional[float], typer.Option("--interval-hours", min=0.0, help="Hours between scheduled snapshots")
    ] = None,
    max_runs: Annotated[
        Optional[int], typer.Option("--max-runs", min=1, help="Stop the schedule after this many runs")
    ] = None,
) -> None:
    """Write a snapshot of the current chart to a JSON file, once or on a schedule."""
    settings = get_settings()
    directory = output_dir or Path(settings.SNAPSHOT_DIR)

    if schedule:
        interval = interval_hours * 3600 if interval_hours is not None else settings.SNAPSHOT_INTERVAL_SECONDS
        typer.echo(f"Writing snapshots to {directory} every {interval:g}s (Ctrl+C to stop)")
        try:
            written = asyncio.run(
                snapshot_worker(
                    LeaderboardService(feed_path=feed),
                    directory,
                    interval,
                    protocol=settings.SNAPSHOT_PROTOCOL,
                    version=settings.SNAPSHOT_VERSION,
                    max_runs=max_runs,
                )
            )
        except KeyboardInterrupt:
            typer.echo("Snapshot schedule stopped")
            return
        typer.echo(f"{written} snapshots written")
        return

    service = _load_service(feed)
    document = build_snapshot(
        service.get_view(),
        protocol=settings.SNAPSHOT_PROTOCOL,
        version=settings.SNAPSHOT_VERSION,
    )
    path = write_snapshot(document, directory)
    typer.echo(f"Snapshot {document.snapshot_metadata.snapshot_id} written to {path}")
    typer.echo(f"Digest: {document.snapshot_metadata.digest}")


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "viral_chart.api.main:app",
        host=host or settings.API_HOST,
        port=port or settings.API_PORT,
    )


if __name__ == "__main__":
    app()

"""CLI for the sector re-rank engine."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from sector_rerank.config import get_settings
from sector_rerank.errors import ConfigurationError
from sector_rerank.ingest.snapshot import SnapshotError, load_snapshot
from sector_rerank.packets.ranking_packets import recompute_rankings
from sector_rerank.score.sector import sector_sentiment_breakdown
from sector_rerank.score.taxonomy import load_taxonomy

app_cli = typer.Typer(name="sector-rerank", help="Sector-weighted country re-ranking")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app_cli.command()
def sectors(taxonomy: Optional[Path] = typer.Option(None, help="Taxonomy JSON (defaults to settings)")):
    """List the configured sectors and their keywords."""
    _configure_logging(verbose=False)

    try:
        tax = load_taxonomy(taxonomy)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2)

    typer.echo(f"Taxonomy {tax.version or '(unversioned)'}: {len(tax)} sectors")
    for sector_id, definition in tax.items():
        typer.echo(f"  {sector_id:<16} {definition.label}")
        typer.echo(f"  {'':<16} {', '.join(definition.keywords)}")


@app_cli.command()
def rerank(
    snapshot: Path,
    sector: list[str] = typer.Option([], "--sector", "-s", help="Sector id to filter by (repeatable)"),
    taxonomy: Optional[Path] = typer.Option(None, help="Taxonomy JSON (defaults to settings)"),
    as_json: bool = typer.Option(False, "--json", help="Print the ranking packet as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Re-rank the entities in a snapshot file by sector-adjusted score."""
    _configure_logging(verbose=verbose)

    try:
        tax = load_taxonomy(taxonomy)
        snap = load_snapshot(snapshot)
        packet = recompute_rankings(
            snap.entities,
            snap.articles_by_entity,
            list(sector),
            tax,
            log_fn=(lambda msg: typer.echo(msg, err=True)) if verbose else (lambda msg: None),
        )
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2)
    except SnapshotError as e:
        typer.echo(f"Snapshot error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(packet.to_dict(), indent=2))
        return

    typer.echo(f"{'#':>3}  {'move':>4}  {'id':<6} {'name':<20} {'adjusted':>8}  {'baseline':>8}  {'trend':<8} status")
    for row in packet.rows:
        baseline = row.entity.baseline_score
        baseline_txt = f"{baseline:.1f}" if baseline is not None else "n/a"
        typer.echo(
            f"{row.rank:>3}  {row.rank_change:>+4d}  {row.entity.id:<6} {row.entity.name[:20]:<20} "
            f"{row.result.adjusted_score:>8.1f}  {baseline_txt:>8}  {row.result.trend.value:<8} "
            f"{row.result.status.value}"
        )


@app_cli.command()
def breakdown(
    snapshot: Path,
    entity: str = typer.Option(..., "--entity", "-e", help="Entity id"),
    taxonomy: Optional[Path] = typer.Option(None, help="Taxonomy JSON (defaults to settings)"),
):
    """Show per-sector sentiment percentages for one entity."""
    _configure_logging(verbose=False)

    try:
        tax = load_taxonomy(taxonomy)
        snap = load_snapshot(snapshot)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2)
    except SnapshotError as e:
        typer.echo(f"Snapshot error: {e}", err=True)
        raise typer.Exit(1)

    if entity not in snap.articles_by_entity:
        typer.echo(f"Unknown entity: {entity}", err=True)
        raise typer.Exit(1)

    rows = sector_sentiment_breakdown(snap.articles_by_entity[entity], tax)
    if not rows:
        typer.echo("Insufficient articles to analyze sector sentiment")
        return

    for row in rows:
        typer.echo(
            f"  {row.label:<36} +{row.positive:>3}%  ={row.neutral:>3}%  -{row.negative:>3}%"
            f"  ({row.article_count} articles)"
        )

"""CLI commands for building the dashboard datasets.

Usage:
    cerberus-pipeline build [all|countries|entities|legislation|focuspoints]
        [--content-root DIR] [--output-dir DIR]
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from .options import content_root_option, output_dir_option, resolve_settings


@click.command(name="build")
@click.argument(
    "target",
    type=click.Choice(["all", "countries", "entities", "legislation", "focuspoints"]),
    default="all",
)
@content_root_option
@output_dir_option
def cli(target: str, content_root: Path | None, output_dir: Path | None):
    """Build dashboard datasets from the content repository.

    Datasets are always built in pipeline order, so building
    legislation alone resolves against the persisted entity dataset.

    Examples:

        # Build everything
        cerberus-pipeline build

        # Rebuild only the entity dataset and graph
        cerberus-pipeline build entities --content-root ./cerberus
    """
    from ..pipeline import BUILD_TARGETS, PipelineContext, run_pipeline

    settings = resolve_settings(content_root, output_dir)
    targets = BUILD_TARGETS if target == "all" else (target,)

    try:
        ctx = PipelineContext.from_settings(settings)
        written = run_pipeline(ctx, targets)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"\nBuild complete ({', '.join(targets)})")
    click.echo("=" * 50)
    if ctx.countries is not None:
        click.echo(f"  Countries: {len(ctx.countries.countries)}")
        click.echo(f"  Cases: {ctx.countries.total_cases}")
    if ctx.entities is not None and "entities" in targets:
        graph = ctx.entities.graph_data
        click.echo(f"  Entities: {ctx.entities.total_entities}")
        click.echo(f"  Graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
    if ctx.legislation is not None:
        click.echo(f"  Legislation entries: {ctx.legislation.total_entries}")
        click.echo(f"  Sectors: {len(ctx.legislation.all_sectors)}")
    if ctx.focuspoints is not None:
        with_bot_data = sum(1 for fp in ctx.focuspoints.focuspoints if fp.has_bot_data)
        click.echo(f"  FocusPoints: {ctx.focuspoints.total_focuspoints} ({with_bot_data} with bot data)")

    for path in written:
        click.echo(f"  Wrote: {path}")

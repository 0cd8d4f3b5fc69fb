"""CLI commands for entity resolution reporting.

Usage:
    cerberus-pipeline resolve report [--dataset FILE] [--min-score N] [--limit N]
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from .options import output_dir_option, resolve_settings


@click.group(name="resolve")
def cli():
    """Entity resolution commands."""
    pass


@cli.command(name="report")
@click.option(
    "--dataset",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Entity dataset to inspect (default: entity-data.json in the output dir)",
)
@output_dir_option
@click.option(
    "--min-score",
    type=click.IntRange(0, 100),
    default=None,
    help="Minimum fuzzy score for suggestions (default: from settings)",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum suggestions per mention (default: from settings)",
)
def report(
    dataset: Path | None,
    output_dir: Path | None,
    min_score: int | None,
    limit: int | None,
):
    """Report unresolved connections with suggested matches.

    Suggestions come from fuzzy name matching and are meant for fixing
    the source markdown; the dataset itself is not changed.

    Examples:

        cerberus-pipeline resolve report

        cerberus-pipeline resolve report --dataset generated/entity-data.json --min-score 80
    """
    from ..models.entities import EntityDataset
    from ..resolution import find_unresolved_mentions
    from ..storage import ENTITY_DATASET_FILENAME, load_dataset

    settings = resolve_settings(output_dir=output_dir)
    path = dataset or Path(settings.output_dir) / ENTITY_DATASET_FILENAME

    try:
        entity_data = load_dataset(path, EntityDataset)
    except (FileNotFoundError, ValidationError) as e:
        click.echo(f"Error loading dataset: {e}", err=True)
        sys.exit(1)

    mentions = find_unresolved_mentions(
        entity_data.entities,
        min_score=settings.suggestion_min_score if min_score is None else min_score,
        limit=settings.suggestion_limit if limit is None else limit,
    )

    total = sum(len(entity.connections) for entity in entity_data.entities)
    click.echo(f"\nUnresolved connections: {len(mentions)} of {total}")
    click.echo("=" * 60)

    for mention in mentions:
        click.echo(f"\n{mention.source_slug}")
        click.echo(f"  {mention.target_name} ({mention.relationship})")
        if not mention.suggestions:
            click.echo("    no suggestions")
        for suggestion in mention.suggestions:
            click.echo(
                f"    -> {suggestion.name} [{suggestion.entity_slug}] {suggestion.score:.0f}"
            )

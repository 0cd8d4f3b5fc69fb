"""CLI commands for FocusPoint leads.

Usage:
    cerberus-pipeline focuspoint new --title TITLE --description TEXT
        [--link URL]... [--attachment NAME]... [--content-root DIR]
    cerberus-pipeline focuspoint show SLUG [--content-root DIR] [--json]
"""

import sys
from pathlib import Path

import click

from .options import content_root_option, resolve_settings


@click.group(name="focuspoint")
def cli():
    """FocusPoint lead commands."""
    pass


@cli.command(name="new")
@click.option("--title", required=True, help="Lead title (5-200 characters)")
@click.option("--description", required=True, help="Lead description (20-10000 characters)")
@click.option("--link", "links", multiple=True, help="Source URL (repeatable, max 20)")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    help="Attachment filename (repeatable, max 5)",
)
@content_root_option
def new(
    title: str,
    description: str,
    links: tuple[str, ...],
    attachments: tuple[str, ...],
    content_root: Path | None,
):
    """Submit a new lead as a plan.md document.

    Examples:

        cerberus-pipeline focuspoint new --title "Port tender" \\
            --description "Irregularities in the 2024 port tender award" \\
            --link https://example.org/tender
    """
    from ..submission import PlanSubmission, SubmissionError, write_submission

    settings = resolve_settings(content_root=content_root)

    try:
        submission = PlanSubmission.create(
            title=title,
            description=description,
            links=list(links),
            attachment_filenames=list(attachments),
        )
        plan_path = write_submission(settings.content_root, submission)
    except SubmissionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created FocusPoint: {plan_path.parent.name}")
    click.echo(f"  Plan: {plan_path}")


@cli.command(name="show")
@click.argument("slug")
@content_root_option
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
def show(slug: str, content_root: Path | None, as_json: bool):
    """Assemble and display one lead.

    Linked entities are resolved against the persisted entity dataset
    when it exists.
    """
    from ..parsing.focuspoint import assemble_focuspoint
    from ..pipeline import PipelineContext

    settings = resolve_settings(content_root=content_root)

    try:
        ctx = PipelineContext.from_settings(settings)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    source = ctx.source
    record = assemble_focuspoint(
        slug,
        source.focuspoint_document(slug, "plan"),
        findings=source.focuspoint_document(slug, "findings"),
        timeline=source.focuspoint_document(slug, "timeline"),
        entities=source.focuspoint_document(slug, "entities"),
        sources=source.focuspoint_document(slug, "sources"),
        attachments=source.focuspoint_attachments(slug),
    )
    if record is None:
        click.echo(f"FocusPoint not found: {slug}", err=True)
        sys.exit(1)

    if record.linked_entities:
        ctx.resolver().resolve_focuspoint_entities([record])

    if as_json:
        click.echo(record.model_dump_json(by_alias=True, indent=2))
        return

    click.echo(f"\n{record.title}")
    click.echo("=" * 60)
    click.echo(f"  Slug: {record.slug}")
    click.echo(f"  Status: {record.status}")
    click.echo(f"  Created: {record.created_at or '-'}")
    click.echo(f"  Submitted by: {record.submitted_by}")
    click.echo(f"  Bot data: {'yes' if record.has_bot_data else 'no'}")

    if record.links:
        click.echo("\nLinks:")
        for link in record.links:
            click.echo(f"  - {link}")

    if record.findings:
        click.echo("\nFindings:")
        for finding in record.findings:
            date = f" ({finding.date})" if finding.date else ""
            click.echo(f"  - {finding.title}{date}")

    if record.timeline:
        click.echo("\nTimeline:")
        for entry in record.timeline:
            click.echo(f"  {entry.date}  {entry.event}")

    if record.linked_entities:
        click.echo("\nLinked entities:")
        for ref in record.linked_entities:
            target = f" -> {ref.entity_slug}" if ref.entity_slug else ""
            click.echo(f"  - {ref.display_name}{target}")

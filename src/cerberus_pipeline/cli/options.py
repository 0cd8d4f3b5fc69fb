"""Options shared by the CLI commands."""

from pathlib import Path

import click

from ..config import Settings, get_settings


def content_root_option(f):
    return click.option(
        "--content-root",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Content tree holding countries/ and focuspoints/ (default: from settings)",
    )(f)


def output_dir_option(f):
    return click.option(
        "--output-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory for the JSON datasets (default: from settings)",
    )(f)


def resolve_settings(
    content_root: Path | None = None, output_dir: Path | None = None
) -> Settings:
    """Settings with command-line overrides applied."""
    overrides = {}
    if content_root is not None:
        overrides["content_root"] = content_root
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    return get_settings().model_copy(update=overrides)

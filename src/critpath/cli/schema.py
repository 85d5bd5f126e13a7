from __future__ import annotations

import click

from critpath import loaders
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers


@cli_decorators.critpath_command("schema")
@click.option(
    "--indent",
    type=int,
    default=2,
    help="JSON indentation (0 for compact)",
)
def schema(indent: int) -> None:
    """Output JSON Schema for graph files."""
    json_schema = loaders.GraphSpec.model_json_schema()
    cli_helpers.echo_json(json_schema, indent=indent if indent > 0 else None)

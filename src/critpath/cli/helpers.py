from __future__ import annotations

import json
import pathlib
from typing import TYPE_CHECKING, Any, cast

import click

from critpath import config, console, loaders

if TYPE_CHECKING:
    from critpath.cli import CliContext

# Key under which the loaded config is cached in the Click context
_CONFIG_CONTEXT_KEY = "_critpath_config"

graph_file_argument = click.argument(
    "graph_file",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)

source_option = click.option(
    "--source",
    "-s",
    type=click.IntRange(min=0),
    default=None,
    help="Source vertex (default: the file's source, then analysis.default_source)",
)

json_option = click.option("--json", "output_json", is_flag=True, help="Output as JSON")


def _context_obj() -> dict[str, Any]:
    ctx = click.get_current_context()
    if ctx.obj is None:
        ctx.obj = {}
    return cast("dict[str, Any]", ctx.obj)


def get_config() -> config.CritpathConfig:
    """Load the effective config once per invocation and cache it in the context."""
    obj = _context_obj()
    cached = obj.get(_CONFIG_CONTEXT_KEY)
    if isinstance(cached, config.CritpathConfig):
        return cached
    cli_ctx = cast("CliContext", obj)
    loaded = config.load_config(cli_ctx.get("config_path"))
    obj[_CONFIG_CONTEXT_KEY] = loaded
    return loaded


def load_graph(
    path: pathlib.Path, source: int | None = None, *, needs_source: bool = True
) -> loaders.LoadedGraph:
    """Load a graph file, choosing the source from --source, the file or config.

    Commands that never use a source pass ``needs_source=False`` so that an
    out-of-range ``analysis.default_source`` does not reject the file.

    Raises:
        GraphLoadError: If the file is invalid or the chosen source is out of range.
    """
    default_source = get_config().analysis.default_source if needs_source else 0
    return loaders.load_graph(path, default_source=default_source, source=source)


def make_console() -> console.Console:
    """Console configured from the display section of the config."""
    display = get_config().display
    return console.Console(color=display.color, precision=display.precision)


def echo_json(data: Any, indent: int | None = 2) -> None:
    """Print data as JSON on stdout."""
    click.echo(json.dumps(data, indent=indent))

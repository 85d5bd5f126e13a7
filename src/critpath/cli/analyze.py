from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from critpath import analysis
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers

if TYPE_CHECKING:
    import pathlib

logger = logging.getLogger(__name__)


@cli_decorators.critpath_command("analyze")
@cli_helpers.graph_file_argument
@cli_helpers.source_option
@cli_helpers.json_option
@click.option(
    "--paths/--no-paths",
    "show_paths",
    default=None,
    help="Print the shortest path to every reached component (default: analysis.show_paths)",
)
def analyze(
    graph_file: pathlib.Path,
    source: int | None,
    output_json: bool,
    show_paths: bool | None,
) -> None:
    """Run the full analysis on GRAPH_FILE.

    Finds SCCs, builds the condensation DAG, orders it topologically, then
    computes shortest and longest (critical) paths from the component that
    contains the source vertex.
    """
    loaded = cli_helpers.load_graph(graph_file, source)
    report = analysis.analyze(loaded.graph, loaded.source)
    logger.debug(f"Critical path {report.critical_path} (length {report.critical_length})")

    if output_json:
        data = report.to_dict()
        data["weight_model"] = loaded.weight_model
        cli_helpers.echo_json(data)
        return

    if show_paths is None:
        show_paths = cli_helpers.get_config().analysis.show_paths
    cli_helpers.make_console().report(report, show_paths=show_paths)

from __future__ import annotations

from typing import TYPE_CHECKING

from critpath import metrics, scc as scc_mod
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers

if TYPE_CHECKING:
    import pathlib


@cli_decorators.critpath_command("scc")
@cli_helpers.graph_file_argument
@cli_helpers.json_option
def scc(graph_file: pathlib.Path, output_json: bool) -> None:
    """List the strongly connected components of GRAPH_FILE."""
    loaded = cli_helpers.load_graph(graph_file, needs_source=False)
    stats = metrics.Metrics()
    result = scc_mod.find_sccs(loaded.graph, stats)

    if output_json:
        cli_helpers.echo_json(
            {
                "components": result.components,
                "comp_id": result.comp_id,
                "metrics": stats.summary(),
            }
        )
        return

    cli_helpers.make_console().components(result, stats)

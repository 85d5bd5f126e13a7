from __future__ import annotations

from typing import TYPE_CHECKING

import click

from critpath import condensation, console, metrics, topo as topo_mod
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers

if TYPE_CHECKING:
    import pathlib


@cli_decorators.critpath_command("topo")
@cli_helpers.graph_file_argument
@click.option(
    "--raw",
    is_flag=True,
    help="Order the original graph instead of its condensation (fails on cycles)",
)
@cli_helpers.json_option
def topo(graph_file: pathlib.Path, raw: bool, output_json: bool) -> None:
    """Print a topological order of GRAPH_FILE's condensation.

    With --raw the original vertices are ordered directly, which only works
    when the graph is already acyclic.
    """
    loaded = cli_helpers.load_graph(graph_file, needs_source=False)
    stats = metrics.Metrics()

    if raw:
        order = topo_mod.topological_sort(loaded.graph, stats)
        if output_json:
            cli_helpers.echo_json({"order": order, "metrics": stats.summary()})
        else:
            click.echo(console.format_vertices(order))
        return

    scc_result, dag = condensation.condense(loaded.graph)
    order = topo_mod.topological_sort(dag, stats)

    if output_json:
        cli_helpers.echo_json(
            {
                "order": order,
                "components": [scc_result.components[c] for c in order],
                "metrics": stats.summary(),
            }
        )
        return

    cli_helpers.make_console().topological_order(order, scc_result.components, stats)

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from critpath import condensation, render as render_mod
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers

if TYPE_CHECKING:
    import pathlib


@cli_decorators.critpath_command("render")
@cli_helpers.graph_file_argument
@click.option("--dot", "output_format", flag_value="dot", help="Output Graphviz DOT format")
@click.option("--mermaid", "output_format", flag_value="mermaid", help="Output Mermaid format")
@click.option("--md", "output_format", flag_value="md", help="Output Mermaid wrapped in markdown")
@click.option("--raw", is_flag=True, help="Draw the original graph instead of its condensation")
def render(graph_file: pathlib.Path, output_format: str | None, raw: bool) -> None:
    """Draw GRAPH_FILE's condensation DAG (ASCII art by default).

    Condensation nodes are labelled with their component index and members,
    e.g. ``C0 {1,2}``. DOT and Mermaid output carry edge weights.
    """
    loaded = cli_helpers.load_graph(graph_file, needs_source=False)
    if raw:
        view = render_mod.extract_graph_view(loaded.graph)
    else:
        scc_result, dag = condensation.condense(loaded.graph)
        view = render_mod.extract_graph_view(dag, render_mod.component_labels(scc_result))

    match output_format:
        case "dot":
            output = render_mod.render_dot(view)
        case "mermaid":
            output = render_mod.render_mermaid(view)
        case "md":
            output = f"```mermaid\n{render_mod.render_mermaid(view)}\n```"
        case _:
            output = render_mod.render_ascii(view)

    click.echo(output)

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from critpath import condensation, console, metrics, paths as paths_mod
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers

if TYPE_CHECKING:
    import pathlib


@cli_decorators.critpath_command("paths")
@cli_helpers.graph_file_argument
@cli_helpers.source_option
@click.option("--longest", is_flag=True, help="Maximize distances (critical path) instead")
@click.option(
    "--target",
    "-t",
    type=click.IntRange(min=0),
    default=None,
    help="Only report the path to this original vertex",
)
@cli_helpers.json_option
def paths(
    graph_file: pathlib.Path,
    source: int | None,
    longest: bool,
    target: int | None,
    output_json: bool,
) -> None:
    """Shortest (or longest) paths over GRAPH_FILE's condensation.

    Distances and paths are expressed in condensation components; the source
    and target are given as original vertices and mapped to their components.
    """
    loaded = cli_helpers.load_graph(graph_file, source)
    if target is not None and target >= loaded.graph.n:
        raise click.BadParameter(
            f"target {target} out of range (n={loaded.graph.n})", param_hint="'--target'"
        )

    scc_result, dag = condensation.condense(loaded.graph)
    source_comp = scc_result.comp_id[loaded.source]
    stats = metrics.Metrics()
    solve = paths_mod.longest_paths if longest else paths_mod.shortest_paths
    result = solve(dag, source_comp, stats)

    if target is not None:
        target_comp = scc_result.comp_id[target]
        reached = result.reached(target_comp)
        path = paths_mod.reconstruct_path(target_comp, result) if reached else None
        if output_json:
            cli_helpers.echo_json(
                {
                    "source_component": source_comp,
                    "target_component": target_comp,
                    "distance": result.dist[target_comp],
                    "path": path,
                }
            )
        elif path is None:
            click.echo(f"Component {target_comp} is unreachable from component {source_comp}")
        else:
            click.echo(
                f"dist = {result.dist[target_comp]}, path = {console.format_vertices(path)}"
            )
        return

    critical = paths_mod.find_critical_target(result) if longest else None

    if output_json:
        data = {
            "source_component": source_comp,
            "longest": longest,
            "dist": result.dist,
            "parent": result.parent,
            "metrics": stats.summary(),
        }
        if critical is not None:
            data["critical"] = {
                "target": critical,
                "length": result.dist[critical],
                "path": paths_mod.reconstruct_path(critical, result),
            }
        cli_helpers.echo_json(data)
        return

    out = cli_helpers.make_console()
    kind = "Longest" if longest else "Shortest"
    out.section(f"{kind} paths on condensation DAG", first=True)
    click.echo(f"Source vertex = {loaded.source}, component = {source_comp}")
    out.distances(result, stats, show_paths=cli_helpers.get_config().analysis.show_paths)
    if critical is not None:
        length = result.dist[critical]
        assert length is not None, "critical target must be reached"
        out.critical(critical, length, paths_mod.reconstruct_path(critical, result))

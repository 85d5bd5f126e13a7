from __future__ import annotations

import importlib
import logging
import pathlib
from typing import TypedDict, override

import click

# Command categories for organized help output
COMMAND_CATEGORIES = {
    "Analysis": ["analyze", "scc", "topo", "paths"],
    "Output": ["render", "schema"],
    "Other": ["config"],
}

# Lazy command registry: command_name -> (module_path, attr_name, help_text)
_LAZY_COMMANDS: dict[str, tuple[str, str, str]] = {
    "analyze": ("critpath.cli.analyze", "analyze", "Run the full SCC / DAG path analysis."),
    "scc": ("critpath.cli.scc", "scc", "List strongly connected components."),
    "topo": ("critpath.cli.topo", "topo", "Print a topological order."),
    "paths": ("critpath.cli.paths", "paths", "Shortest or longest paths on the condensation."),
    "render": ("critpath.cli.render", "render", "Draw the condensation DAG or raw graph."),
    "schema": ("critpath.cli.schema", "schema", "Output JSON Schema for graph files."),
    "config": ("critpath.cli.config", "config_cmd", "Show the effective configuration."),
}


class CliContext(TypedDict):
    """Context object for CLI commands."""

    verbose: bool
    quiet: bool
    config_path: pathlib.Path | None


class CritpathGroup(click.Group):
    """Custom Group with lazy command loading and categorized help."""

    @override
    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return all available command names."""
        return sorted(_LAZY_COMMANDS.keys())

    @override
    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Lazily load and return a command by name."""
        if cmd_name not in _LAZY_COMMANDS:
            return None

        module_path, attr_name, _help = _LAZY_COMMANDS[cmd_name]
        module = importlib.import_module(module_path)
        return getattr(module, attr_name)

    @override
    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Format commands grouped by category using cached help strings."""
        for category, cmd_names in COMMAND_CATEGORIES.items():
            rows = [(name, _LAZY_COMMANDS[name][2]) for name in cmd_names if name in _LAZY_COMMANDS]
            if not rows:
                continue
            with formatter.section(f"{category} Commands"):
                formatter.write_dl(rows)


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging for CLI output."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s", force=True)


@click.group(cls=CritpathGroup)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    default=None,
    help="Configuration file (overrides ~/.config/critpath and ./.critpath.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_path: pathlib.Path | None) -> None:
    """Strongly connected components, condensation and critical paths.

    Reads a JSON graph file, contracts its cycles into a DAG, orders it
    topologically and measures shortest and longest paths from a source.
    """
    if verbose and quiet:
        raise click.UsageError("--verbose and --quiet are mutually exclusive")
    ctx.obj = CliContext(verbose=verbose, quiet=quiet, config_path=config_path)
    _setup_logging(verbose, quiet)


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()

from typing import Any, cast

import click

from critpath import config
from critpath.cli import decorators as cli_decorators
from critpath.cli import helpers as cli_helpers


def _format_value(value: Any) -> str:
    """Format a config value for display."""
    if value is None:
        return "(not set)"
    return str(value)


def _flatten_config(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested config dict to dotted keys."""
    result = dict[str, Any]()
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            nested = cast("dict[str, Any]", value)
            result.update(_flatten_config(nested, full_key))
        else:
            result[full_key] = value
    return result


@cli_decorators.critpath_command("config")
@cli_helpers.json_option
@click.option("--files", "show_files", is_flag=True, help="List the config layers that were merged")
def config_cmd(output_json: bool, show_files: bool) -> None:
    """Show the effective configuration."""
    if show_files:
        ctx_obj = cast("dict[str, Any]", click.get_current_context().obj or {})
        layers = config.config_layers(ctx_obj.get("config_path"))
        click.echo(f"{config.ConfigSource.DEFAULT}: (built-in)")
        for source, path in layers:
            click.echo(f"{source}: {path}")
        return

    data = cli_helpers.get_config().model_dump()
    if output_json:
        cli_helpers.echo_json(data)
        return

    defaults = _flatten_config(config.CritpathConfig.get_default().model_dump())
    for key, value in sorted(_flatten_config(data).items()):
        origin = "default" if defaults.get(key) == value else "config"
        description = config.CONFIG_KEY_DESCRIPTIONS.get(key, "")
        click.echo(f"{key} = {_format_value(value)} ({origin})  # {description}")

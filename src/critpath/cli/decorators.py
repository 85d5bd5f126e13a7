from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

import click

from critpath import exceptions

if TYPE_CHECKING:
    from collections.abc import Callable


def handle_critpath_error(e: exceptions.CritpathError) -> click.ClickException:
    """Turn a CritpathError into a ClickException, appending its suggestion as a tip."""
    parts = [e.format_user_message()]
    suggestion = e.get_suggestion()
    if suggestion:
        parts.append(f"Tip: {suggestion}")
    return click.ClickException("\n\n".join(parts))


def with_error_handling[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Report CritpathError raised by ``func`` as a clean CLI error (exit code 1).

    Click's own exceptions (usage errors, bad parameters) pass through
    untouched so they keep exit code 2.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except exceptions.CritpathError as e:
            raise handle_critpath_error(e) from e

    return wrapper


def critpath_command(
    name: str | None = None,
    **attrs: Any,
) -> Callable[[Callable[..., Any]], click.Command]:
    """``@click.command()`` with ``with_error_handling`` applied to the callback.

    Args:
        name: Command name (defaults to the function name).
        **attrs: Passed through to click.command().
    """

    def decorator(func: Callable[..., Any]) -> click.Command:
        return click.command(name=name, **attrs)(with_error_handling(func))

    return decorator

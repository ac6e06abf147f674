# SPDX-License-Identifier: AGPL-3.0-or-later
"""Implementation of a command line to inspect and modify the search engines
of a profile.  To get an overview of available commands::

    $ python -m engineprefs --help

The profile is stored in the JSON file from ``preferences.store_path`` in
the settings, an alternative file can be given with the ``--store`` option::

    $ python -m engineprefs --store /tmp/prefs.json default DuckDuckGo
    $ python -m engineprefs --store /tmp/prefs.json list
    DuckDuckGo   [default]
    Yahoo        [enabled]
    Amazon.com   [enabled]
    ...

"""
from __future__ import annotations

__all__ = ["CLI"]

import typing as t

import typer
from typing_extensions import Annotated

import engineprefs
from engineprefs import get_setting
from engineprefs.enginelib import load_catalog
from engineprefs.exceptions import EnginePrefsException
from engineprefs.registry import EngineRegistry
from engineprefs.store import JSONFileStore

CLI = typer.Typer(no_args_is_help=True)


class _State:  # pylint: disable=too-few-public-methods
    store_path: str = ""


STATE = _State()


def get_registry() -> EngineRegistry:
    store = JSONFileStore(STATE.store_path or get_setting("preferences.store_path"))
    catalog = load_catalog()
    return EngineRegistry(
        catalog.list_engines(),
        store,
        region_default=get_setting("search.default_engine", None),
    )


def _run(func: t.Callable[[EngineRegistry], None]):
    try:
        func(get_registry())
    except EnginePrefsException as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _print_engines(reg: EngineRegistry):
    width = max(len(name) for name in reg.ordered_names)
    for eng in reg.ordered_engines:
        if reg.is_engine_default(eng):
            state = "default"
        elif reg.is_engine_enabled(eng):
            state = "enabled"
        else:
            state = "disabled"
        print(f"{eng.short_name:<{width}}   [{state}]")
    if reg.should_disable_old_default:
        print(f"old default engine {reg.migration_old_default} has been disabled")


@CLI.callback()
def main(
    store: Annotated[
        str,
        typer.Option(help="JSON file of the profile (default: preferences.store_path from the settings)"),
    ] = "",
):
    """Search engines of a profile: order, default and quick search engines."""
    engineprefs.init_logging()
    STATE.store_path = store


@CLI.command(name="list")
def list_engines():
    """Show the engines in display order."""
    _run(_print_engines)


@CLI.command()
def default(name: Annotated[t.Optional[str], typer.Argument(help="Name of the new default engine")] = None):
    """Show or set the default engine."""

    def _default(reg: EngineRegistry):
        if name is not None:
            reg.default_engine = name
        print(reg.default_engine.short_name)

    _run(_default)


@CLI.command()
def order(names: Annotated[t.List[str], typer.Argument(help="Engines in the new order")]):
    """Set the order of the engines, the first one becomes the default engine.
    Engines not named are appended in alphabetical order."""

    def _order(reg: EngineRegistry):
        reg.ordered_engines = names
        _print_engines(reg)

    _run(_order)


@CLI.command()
def enable(name: str):
    """Enable engine as quick search engine."""
    _run(lambda reg: reg.enable_engine(name))


@CLI.command()
def disable(name: str):
    """Disable engine as quick search engine (the default can't be disabled)."""

    def _disable(reg: EngineRegistry):
        if reg.is_engine_default(name):
            typer.echo(f"{name} is the default engine and can't be disabled", err=True)
        reg.disable_engine(name)

    _run(_disable)


@CLI.command()
def suggestions(
    opt_in: Annotated[
        t.Optional[bool],
        typer.Option("--opt-in/--no-opt-in", help="Show the prompt to opt-in search suggestions"),
    ] = None,
    enabled: Annotated[
        t.Optional[bool],
        typer.Option("--enable/--disable", help="Request search suggestions"),
    ] = None,
):
    """Show or set the search suggestion flags."""

    def _suggestions(reg: EngineRegistry):
        if opt_in is not None:
            reg.should_show_search_suggestions_opt_in = opt_in
        if enabled is not None:
            reg.should_show_search_suggestions = enabled
        print(f"show opt-in: {reg.should_show_search_suggestions_opt_in}")
        print(f"suggestions: {reg.should_show_search_suggestions}")

    _run(_suggestions)

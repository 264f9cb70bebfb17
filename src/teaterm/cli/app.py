"""Typer CLI application."""

from __future__ import annotations

from dataclasses import replace
from typing import Annotated, Optional

import typer
from rich.console import Console

import teaterm
from teaterm.config import MetamorphosisPolicy, get_settings, set_settings
from teaterm.errors import TerminalError


def _version_callback(value: bool) -> None:
    if value:
        print(f"teaterm {teaterm.__version__}")
        raise typer.Exit()


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="teaterm",
        help="Elm-style terminal UI runtime: demo application and key inspector.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console(stderr=True)

    @app.callback()
    def root(
        version: Annotated[
            Optional[bool],
            typer.Option("--version", callback=_version_callback, is_eager=True,
                         help="Show the version and exit"),
        ] = None,
        profile: Annotated[
            Optional[MetamorphosisPolicy],
            typer.Option("--profile", "-p", case_sensitive=False,
                         help="Metamorphosis policy (overrides TEATERM_PROFILE)"),
        ] = None,
    ) -> None:
        """Elm-style terminal UI runtime."""
        if profile is not None:
            set_settings(replace(get_settings(), metamorphosis=profile))

    def launch(model: teaterm.Model) -> None:
        try:
            teaterm.run(model)
        except TerminalError as e:
            console.print(f"[red]Cannot start the TUI:[/] {e}")
            raise typer.Exit(1)

    @app.command()
    def demo() -> None:
        """Launch the example application."""
        from teaterm.cli.demo import MainMenu
        launch(MainMenu())

    @app.command()
    def keys(
        count: Annotated[
            Optional[int],
            typer.Option("--count", "-n", min=1, help="Exit after this many keys"),
        ] = None,
    ) -> None:
        """Show decoded key presses live. Escape quits."""
        from teaterm.cli.demo.keylog import KeyLog
        launch(KeyLog(limit=count))

    return app

"""debloatctl command line: the Typer app, global options and logging setup."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from debloatctl import __version__
from debloatctl.cli.commands import config, listing, lists, remove, restore
from debloatctl.utils.formatting import err_console

app = typer.Typer(
    name="debloatctl",
    help="Inspect and debloat Android devices over adb.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"debloatctl version {__version__}")
    raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route log records to stderr through Rich.

    ``--verbose`` wins over ``--quiet`` when both are given.
    """
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log adb commands and debug details.")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors.")] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Config file to use instead of ~/.config/debloatctl/config.toml.",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """debloatctl - Android package debloater.

    Lists the packages of a connected device, classifies them with a
    curated catalog and removes or restores them for the device user.
    """
    _configure_logging(verbose, quiet)
    ctx.ensure_object(dict)
    ctx.obj.update(verbose=verbose, quiet=quiet, config_path=config_path)


app.command(name="list")(listing.list_packages)
app.command(name="lists")(lists.show_lists)
app.command(name="remove")(remove.remove_packages)
app.command(name="restore")(restore.restore_packages)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

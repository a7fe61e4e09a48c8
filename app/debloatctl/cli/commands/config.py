"""Config commands.

Show, locate and initialize the debloatctl configuration file.
"""

from typing import Annotated

import tomli_w
import typer

from debloatctl.cli.types import get_config
from debloatctl.core.config import ConfigError, DebloatConfig, config_to_dict, save_config
from debloatctl.core.paths import get_config_path
from debloatctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration as TOML."""
    config = get_config(ctx)
    console.print(
        tomli_w.dumps(config_to_dict(config)),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    config_path = ctx.ensure_object(dict).get("config_path") or get_config_path()
    console.print(str(config_path), markup=False, highlight=False, soft_wrap=True)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    config_path = ctx.ensure_object(dict).get("config_path") or get_config_path()

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(DebloatConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")

from __future__ import annotations

import typer

from npmship import __version__
from npmship.cli.commands.publish_cmd import publish, resolve_cmd


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(publish)
app.command("resolve")(resolve_cmd)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Resolve, gate and publish npm releases from CI."""


def main() -> None:
    app()

"""agentmetrics CLI."""

import typer

from agentmetrics.cli._console import console
from agentmetrics.cli.collect import collect

app = typer.Typer(
    name="agentmetrics",
    help="Queue depth and agent capacity metrics for a job fleet.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from agentmetrics import __version__

        console.print(f"[bold]agentmetrics[/bold] [dim]{__version__}[/dim]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """Queue depth and agent capacity metrics."""


# Register commands
app.command()(collect)

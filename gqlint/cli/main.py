"""gqlint CLI - Main entrypoint."""

import typer
from rich.console import Console

from gqlint import __version__
from gqlint.cli.commands import lint_cmd, presets_cmd, rules_cmd
from gqlint.logging import configure_logging

# Create the main Typer app
app = typer.Typer(
    name="gqlint",
    help="gqlint - Rule-based static analysis for GraphQL documents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

# Create console for rich output
console = Console()

for _module in (lint_cmd, presets_cmd, rules_cmd):
    app.command(name=_module._CLI_NAME, help=_module._CLI_HELP)(
        getattr(_module, _module._CLI_FUNC)
    )


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
) -> None:
    """gqlint - Lint GraphQL queries, mutations and subscriptions.

    Logging stays at its environment defaults unless one of the logging
    flags is given.
    """
    if version:
        console.print(f"[bold blue]gqlint[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()

    # Compute effective log level
    effective_level = log_level
    if quiet:
        effective_level = "error"
    elif verbose:
        effective_level = "debug"

    if effective_level:
        configure_logging(level=effective_level.upper(), format="console")  # type: ignore[arg-type]


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()

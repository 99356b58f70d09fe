"""Main CLI application module."""

import typer

from .serve_commands import serve

# Create the main CLI application
app = typer.Typer(
    help="📚 Books API - a REST service over the books table",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)


@app.callback()
def callback() -> None:
    """Books API command line."""


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

"""
Notekeeper CLI.

Command-line client for the local note store.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    notekeeper --help                              # Show help
    notekeeper list                                # All notes, newest first
    notekeeper list --search groc                  # Filter by title
    notekeeper add -t "Groceries" -b "milk, eggs"  # New note
    notekeeper edit 3 -b "milk, eggs, bread"       # Update in place
    notekeeper show 3                              # Print a note
    notekeeper delete 3                            # Delete after confirmation
    notekeeper info                                # Database location and size

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import typer
from rich.console import Console

from notekeeper.cli.commands import notes
from notekeeper.core.config import validate_project_root

app = typer.Typer(
    name="notekeeper",
    help="Notekeeper - local notes with save-on-exit editing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command("list")(notes.list_notes)
app.command("add")(notes.add)
app.command("edit")(notes.edit)
app.command("show")(notes.show)
app.command("delete")(notes.delete)
app.command("info")(notes.info)


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notekeeper CLI.

    Local notes stored in a single SQLite table.
    """
    validate_project_root()

    from notekeeper.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console", enable_console=True)
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console", enable_console=True)
    else:
        setup_logging()


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()

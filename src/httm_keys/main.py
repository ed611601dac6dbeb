"""httm-keys CLI entry point.

Provides the Typer CLI interface: the interactive shell with httm key
bindings, and one-shot lookup/select commands for use from other shells.
"""

import logging
import sys
from typing import Optional

import typer

from httm_keys import __version__
from httm_keys.config import get_log_level, resolve_httm_binary, validate_httm_binary
from httm_keys.shell import run_shell
from httm_keys.widgets import httm_lookup_widget, httm_select_widget

app = typer.Typer(
    name="httm-keys",
    help="Key bindings for browsing and selecting httm snapshot files",
)


class ConsoleEditor:
    """LineEditor for one-shot commands outside a line editor.

    Appended text goes to stdout; there is no prompt to redraw.
    """

    def append_to_lbuffer(self, text: str) -> None:
        sys.stdout.write(text)

    def reset_prompt(self) -> None:
        pass


def version_callback(value: bool) -> None:
    """Display version and the httm binary in use, then exit."""
    if value:
        print(f"httm-keys version {__version__}")
        print(f"httm binary: {resolve_httm_binary() or 'not found'}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Launch the httm-keys interactive shell."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if ctx.invoked_subcommand is not None:
        return

    is_valid, message = validate_httm_binary()
    if not is_valid:
        print(f"\nError: {message}\n", file=sys.stderr)
        raise typer.Exit(1)

    exit_code = run_shell()
    raise typer.Exit(exit_code)


@app.command()
def lookup() -> None:
    """Browse snapshots of the current directory interactively."""
    raise typer.Exit(httm_lookup_widget(ConsoleEditor()))


@app.command()
def select() -> None:
    """Select snapshot files and print them to stdout."""
    status = httm_select_widget(ConsoleEditor())
    print()
    raise typer.Exit(status)


if __name__ == "__main__":
    app()

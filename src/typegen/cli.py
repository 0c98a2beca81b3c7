"""Print the inferred schema of a JSON file.

Examples:
    $ typegen data.json
    $ curl -s https://api.example.com/items | typegen
    $ typegen --indent 2 - < data.json
"""

import contextlib
import importlib.metadata
import logging
import sys
from pathlib import Path
from typing import Annotated, BinaryIO

import typer

from typegen.api import typegen
from typegen.errors import InputIOError, JsonInputError
from typegen.render import RenderConfig

logger = logging.getLogger(__name__)

app = typer.Typer(
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)


def _version_callback(show: bool) -> None:
    if show:
        name = "typegen"
        version = importlib.metadata.version(name)
        print(f"{name} {version}")
        raise typer.Exit()


def open_input(input_path: Path) -> contextlib.AbstractContextManager[BinaryIO]:
    """Open `input_path` for binary reading. If it's '-', use stdin (left open)."""
    if input_path.name == "-":
        return contextlib.nullcontext(sys.stdin.buffer)
    try:
        return input_path.open("rb")
    except OSError as e:
        raise InputIOError(f"cannot open {input_path}: {e.strerror}") from e


@app.command(help=__doc__)
def main(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="Input JSON file. Use '-' for stdin (default).", allow_dash=True
        ),
    ] = Path("-"),
    indent: Annotated[
        int, typer.Option(min=0, help="Spaces per nesting level in records.")
    ] = 4,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print debug logs to stderr.")
    ] = False,
    _: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(message)s",
    )
    config = RenderConfig(indent=indent)

    try:
        with open_input(input_path) as source:
            output = typegen(source, config)
    except JsonInputError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    logger.debug("Rendered schema for %s", input_path)
    print(output)


if __name__ == "__main__":
    app()

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from hunkfmt.cli.format import format_, ranges

app = typer.Typer(
    name="hunkfmt",
    help="hunkfmt — run rustfmt on the lines touched by a diff.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("format")(format_)
app.command("ranges")(ranges)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log formatter invocations.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main() -> None:
    app()

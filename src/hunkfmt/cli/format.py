import shlex
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from unidiff.errors import UnidiffParseError

from hunkfmt.core import RUSTFMT, build_command, format_file, format_hunks, iter_file_groups
from hunkfmt.diff import DEFAULT_SUFFIXES, filter_pairs, parse_diff
from hunkfmt.git import GitError, get_repo_root, git_diff
from hunkfmt.models import HunkPair, RangeDescriptor

console = Console()
err_console = Console(stderr=True)

DiffArg = Annotated[
    str | None,
    typer.Argument(help="Diff file to read, '-' for stdin. Defaults to the output of 'git diff'."),
]
StagedOpt = Annotated[bool, typer.Option("--staged", help="Use staged changes when diffing with git.")]
RevisionOpt = Annotated[str | None, typer.Option(help="Diff the working tree against this revision.")]
AllFilesOpt = Annotated[bool, typer.Option("--all-files", help="Do not restrict hunks to Rust sources.")]


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]{escape(message)}[/red]", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Turn git, diff and formatter failures into a red message and exit status 1."""
    try:
        yield
    except (GitError, OSError, UnidiffParseError) as exc:
        _fail(str(exc))


def _decode(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def _load_pairs(
    diff: str | None, staged: bool, revision: str | None, all_files: bool
) -> tuple[list[HunkPair], Path | None]:
    """Return the hunk pairs to format and the directory their paths are relative to."""
    cwd: Path | None = None
    if diff is None:
        cwd = get_repo_root(Path.cwd())
        if cwd is None:
            _fail("Not inside a git repository; pass a diff file instead.")
        text = git_diff(cwd, staged=staged, revision=revision)
    elif diff == "-":
        text = _decode(sys.stdin.buffer.read())
    else:
        text = _decode(Path(diff).read_bytes())

    pairs = parse_diff(text)
    if not all_files:
        pairs = filter_pairs(pairs, DEFAULT_SUFFIXES)
    return pairs, cwd


def _print_command(
    file: str,
    descriptors: Sequence[RangeDescriptor],
    program: str = RUSTFMT,
    cwd: str | Path | None = None,
) -> None:
    command = shlex.join(build_command(file, descriptors, program))
    if cwd is not None:
        command = f"cd {shlex.quote(str(cwd))} && {command}"
    console.print(command, markup=False, highlight=False, soft_wrap=True)


def format_(
    diff: DiffArg = None,
    staged: StagedOpt = False,
    revision: RevisionOpt = None,
    rustfmt: Annotated[
        str, typer.Option("--rustfmt", envvar="HUNKFMT_RUSTFMT", help="Formatter executable to invoke.")
    ] = RUSTFMT,
    all_files: AllFilesOpt = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the formatter commands instead of running them.")
    ] = False,
) -> None:
    """Format only the lines touched by a diff."""
    with _exit_on_error():
        pairs, cwd = _load_pairs(diff, staged, revision, all_files)
        formatter = _print_command if dry_run else format_file
        count = format_hunks(pairs, formatter=formatter, program=rustfmt, cwd=cwd)

    if not dry_run:
        console.print(f"[green]Formatted[/green] {count} file(s)")


def ranges(
    diff: DiffArg = None,
    staged: StagedOpt = False,
    revision: RevisionOpt = None,
    all_files: AllFilesOpt = False,
) -> None:
    """Show the line ranges that would be formatted, grouped per file."""
    with _exit_on_error():
        pairs, _ = _load_pairs(diff, staged, revision, all_files)

    table = Table(show_lines=False)
    table.add_column("file")
    table.add_column("ranges", justify="right")
    table.add_column("lines")
    groups = list(iter_file_groups(pairs))
    for file, group in groups:
        table.add_row(file, str(len(group)), ", ".join(f"{d.start}-{d.end}" for d in group))
    console.print(table)
    console.print(f"({len(groups)} groups)")

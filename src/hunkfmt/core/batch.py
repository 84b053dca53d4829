from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from hunkfmt.core.ports.formatter import FormatterPort
from hunkfmt.core.ports.hunk import HunkPort
from hunkfmt.core.rustfmt import RUSTFMT, format_file
from hunkfmt.models import RangeDescriptor

logger = logging.getLogger(__name__)


def describe(hunk: HunkPort) -> RangeDescriptor:
    """Return the inclusive ``--file-lines`` range covered by *hunk*."""
    return RangeDescriptor(file=hunk.file, range=(hunk.line, hunk.line + hunk.count))


def iter_file_groups(pairs: Iterable[tuple[Any, HunkPort]]) -> Iterator[tuple[str, list[RangeDescriptor]]]:
    """Group destination hunks into runs of the same file.

    Only adjacent hunks are grouped: a file that shows up again after another
    file starts a new group.
    """
    current: str | None = None
    group: list[RangeDescriptor] = []

    for _, dst in pairs:
        if current is not None and current != dst.file:
            yield current, group
            group = []
        current = dst.file
        group.append(describe(dst))

    if current is not None:
        yield current, group


def format_hunks(
    pairs: Iterable[tuple[Any, HunkPort]],
    formatter: FormatterPort = format_file,
    program: str = RUSTFMT,
    cwd: str | Path | None = None,
) -> int:
    """Format the destination side of every hunk in *pairs*, one file at a time.

    Stops at the first failing file and re-raises its error. Returns the number
    of files formatted.
    """
    formatted = 0
    for file, group in iter_file_groups(pairs):
        logger.debug("Formatting %d range(s) in %s", len(group), file)
        formatter(file, group, program=program, cwd=cwd)
        formatted += 1
    return formatted

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter

from hunkfmt.models import RangeDescriptor

logger = logging.getLogger(__name__)

RUSTFMT = "rustfmt"

_SELECTOR = TypeAdapter(list[RangeDescriptor])


class FormatterError(OSError):
    """The formatter was started but exited with a non-zero status."""

    def __init__(self, program: str, returncode: int, diagnostic: str | None = None) -> None:
        message = f"process '{program}' failed"
        if diagnostic:
            message = f"{message}: {diagnostic}"
        super().__init__(message)
        self.program = program
        self.returncode = returncode
        self.diagnostic = diagnostic


def to_file_lines(descriptors: Sequence[RangeDescriptor]) -> str:
    """Serialize descriptors into rustfmt's ``--file-lines`` JSON selector."""
    return _SELECTOR.dump_json(list(descriptors)).decode()


def build_command(file: str, descriptors: Sequence[RangeDescriptor], program: str = RUSTFMT) -> list[str]:
    return [program, "--unstable-features", file, "--file-lines", to_file_lines(descriptors)]


def _first_line(stderr: bytes | None) -> str | None:
    if not stderr:
        return None
    lines = stderr.decode(errors="replace").splitlines()
    if not lines:
        return None
    return lines[0].strip() or None


def format_file(
    file: str,
    descriptors: Sequence[RangeDescriptor],
    program: str = RUSTFMT,
    cwd: str | Path | None = None,
) -> None:
    """Run *program* on *file*, restricted to the lines in *descriptors*.

    Blocks until the formatter exits. The file is rewritten in place by the
    formatter. A non-zero exit raises ``FormatterError`` carrying the first
    line the formatter wrote to stderr; failing to start the formatter at all
    raises the underlying ``OSError`` unchanged.
    """
    cmd = build_command(file, descriptors, program)
    logger.debug("Running %s", cmd)

    with subprocess.Popen(
        cmd,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    ) as proc:
        try:
            _, stderr = proc.communicate()
        except OSError:
            logger.debug("Could not read stderr of %s", program, exc_info=True)
            proc.wait()
            stderr = None

    if proc.returncode != 0:
        diagnostic = _first_line(stderr)
        logger.warning("%s exited with status %d for %s", program, proc.returncode, file)
        raise FormatterError(program, proc.returncode, diagnostic)

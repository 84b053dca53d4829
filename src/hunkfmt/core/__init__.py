from hunkfmt.core.batch import describe, format_hunks, iter_file_groups
from hunkfmt.core.rustfmt import RUSTFMT, FormatterError, build_command, format_file, to_file_lines

__all__ = [
    "RUSTFMT",
    "FormatterError",
    "build_command",
    "describe",
    "format_file",
    "format_hunks",
    "iter_file_groups",
    "to_file_lines",
]

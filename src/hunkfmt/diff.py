"""Turn unified diffs into the hunk pairs consumed by the batcher."""

from __future__ import annotations

import re
from collections.abc import Iterable

from unidiff import PatchSet

from hunkfmt.models import Hunk, HunkPair

DEFAULT_SUFFIXES: tuple[str, ...] = (".rs",)

_DEV_NULL = "/dev/null"

_C_ESCAPE = re.compile(rb"\\([0-7]{3}|.)", re.DOTALL)
_C_ESCAPES = {b"a": b"\a", b"b": b"\b", b"t": b"\t", b"n": b"\n", b"v": b"\v", b"f": b"\f", b"r": b"\r"}


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of ``"a/\\303\\244.rs"``-like paths."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    def _replace(match: re.Match[bytes]) -> bytes:
        code = match.group(1)
        if len(code) == 3:
            return bytes([int(code, 8)])
        return _C_ESCAPES.get(code, code)

    raw = path[1:-1].encode("utf-8", "surrogateescape")
    return _C_ESCAPE.sub(_replace, raw).decode("utf-8", "surrogateescape")


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix) :] if path.startswith(prefix) else path


def parse_diff(text: str) -> list[HunkPair]:
    """Return one ``(src, dst)`` pair per hunk, in diff order.

    Removed files are skipped: there is nothing left to format.
    """
    pairs: list[HunkPair] = []
    for patched_file in PatchSet(text):
        if patched_file.is_removed_file or patched_file.target_file == _DEV_NULL:
            continue
        src_file = _strip_prefix(_unquote(patched_file.source_file), "a/")
        dst_file = _strip_prefix(_unquote(patched_file.target_file), "b/")
        for hunk in patched_file:
            pairs.append(
                HunkPair(
                    src=Hunk(file=src_file, line=hunk.source_start, count=hunk.source_length),
                    dst=Hunk(file=dst_file, line=hunk.target_start, count=hunk.target_length),
                )
            )
    return pairs


def filter_pairs(pairs: Iterable[HunkPair], suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> list[HunkPair]:
    wanted = tuple(suffixes)
    return [pair for pair in pairs if pair.dst.file.endswith(wanted)]

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from hunkfmt.models import RangeDescriptor


class FormatterPort(Protocol):
    def __call__(
        self,
        file: str,
        descriptors: Sequence[RangeDescriptor],
        program: str = ...,
        cwd: str | Path | None = ...,
    ) -> None: ...

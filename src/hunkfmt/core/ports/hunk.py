from typing import Protocol


class HunkPort(Protocol):
    """Destination side of a hunk as handed over by a diff parser."""

    @property
    def file(self) -> str: ...

    @property
    def line(self) -> int: ...

    @property
    def count(self) -> int: ...

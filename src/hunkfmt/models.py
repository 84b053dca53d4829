from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class Hunk(BaseModel):
    """One side of a diff hunk.

    ``line`` is 1-based, ``count`` is the number of lines covered and may be
    zero for a pure insertion/deletion side.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    count: int = Field(ge=0)


class HunkPair(NamedTuple):
    src: Hunk
    dst: Hunk


class RangeDescriptor(BaseModel):
    """A ``--file-lines`` entry: ``range`` is inclusive on both ends."""

    model_config = ConfigDict(frozen=True)

    file: str
    range: tuple[int, int]

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

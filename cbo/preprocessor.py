"""Detection of preprocessor directives and their backslash continuations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cbo.source import Line


def _continues(line: Line) -> bool:
    return line.text.endswith("\\")


def is_preprocessor_line(lines: Sequence[Line], index: int) -> bool:
    """Whether ``lines[index]`` is a directive or continues one.

    Walks backward through ``\\``-continued lines until a line starting with
    ``#`` or a line that is not continued.
    """
    current = index
    while True:
        if lines[current].head_char == "#":
            return True
        if current == 0 or not _continues(lines[current - 1]):
            return False
        current -= 1


def classify_preprocessor_lines(lines: Sequence[Line]) -> list[bool]:
    """Single forward pass equivalent to :func:`is_preprocessor_line` on every index."""
    flags: list[bool] = []
    for index, line in enumerate(lines):
        if line.head_char == "#":
            flags.append(True)
        elif index > 0 and _continues(lines[index - 1]):
            flags.append(flags[index - 1])
        else:
            flags.append(False)
    return flags

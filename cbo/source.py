"""Source file and line models plus the file loader."""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from cbo.indent import DEFAULT_INDENT_WIDTH, compute_expected_indents
from cbo.preprocessor import classify_preprocessor_lines
from cbo.scanner import BLANKS, is_comment, pos_head

if TYPE_CHECKING:
    from cbo.rules.base import Diagnostic

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_BUFFER = 1024
CASE_LABEL_PREFIXES = ("case ", "default:")


class FileType(Enum):
    """File kinds recognised from the file name suffix."""

    UNKNOWN = "unknown"
    C_HEADER = "header"
    C_BODY = "body"


_SUFFIX_TYPES = {".h": FileType.C_HEADER, ".c": FileType.C_BODY}


class LoadError(Exception):
    """A file could not be read completely."""


def detect_file_type(path: str) -> FileType:
    return _SUFFIX_TYPES.get(PurePath(path).suffix, FileType.UNKNOWN)


@dataclass(frozen=True, slots=True)
class Line:
    """A single physical line, as read, without its newline."""

    index: int
    text: str

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def head(self) -> int:
        return pos_head(self.text)

    @property
    def head_char(self) -> str:
        head = self.head
        return self.text[head] if head < len(self.text) else ""

    @property
    def last_char(self) -> str:
        """Last character that is not a space or a tab, ``""`` for blank lines."""
        stripped = self.text.rstrip(BLANKS)
        return stripped[-1] if stripped else ""

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def is_comment(self) -> bool:
        return is_comment(self.text)

    @property
    def is_comment_body(self) -> bool:
        """Continuation line of a ``/* ... */`` block such as ``* text`` or ``*/``."""
        stripped = self.text.strip(BLANKS)
        return stripped == "*" or stripped.startswith(("* ", "*/"))

    @property
    def is_case_label(self) -> bool:
        return self.starts_with(*CASE_LABEL_PREFIXES)

    def starts_with(self, *prefixes: str) -> bool:
        """Whether the text from the head position starts with one of ``prefixes``."""
        return self.text.startswith(prefixes, self.head)


@dataclass(slots=True)
class SourceFile:
    """A loaded file: its lines in physical order and the diagnostics raised on it."""

    path: str
    lines: list[Line]
    diagnostics: list[Diagnostic] = field(default_factory=list)
    _preprocessor: list[bool] | None = field(default=None, init=False, repr=False, compare=False)
    _indents: dict[int, list[int]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    @classmethod
    def from_text(cls, path: str, text: str) -> SourceFile:
        return cls(path=path, lines=[Line(index, raw) for index, raw in enumerate(split_lines(text))])

    @property
    def file_type(self) -> FileType:
        return detect_file_type(self.path)

    @property
    def is_checkable(self) -> bool:
        return self.file_type is not FileType.UNKNOWN

    @property
    def passed(self) -> bool:
        return not self.diagnostics

    def is_preprocessor(self, index: int) -> bool:
        if self._preprocessor is None:
            self._preprocessor = classify_preprocessor_lines(self.lines)
        return self._preprocessor[index]

    def expected_indent(self, index: int, indent_width: int = DEFAULT_INDENT_WIDTH) -> int:
        indents = self._indents.get(indent_width)
        if indents is None:
            flags = [self.is_preprocessor(position) for position in range(len(self.lines))]
            indents = compute_expected_indents(self.lines, flags, indent_width)
            self._indents[indent_width] = indents
        return indents[index]

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Insert keeping line order; diagnostics on the same line keep insertion order."""
        bisect.insort_right(self.diagnostics, diagnostic, key=lambda item: item.line_number)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping one ``\\r`` per line and the tail after a final newline."""
    if not text:
        return []
    raw_lines = text.split("\n")
    if text.endswith("\n"):
        raw_lines.pop()
    return [raw[:-1] if raw.endswith("\r") else raw for raw in raw_lines]


def load_source_file(
    path: Path | str,
    *,
    max_line_buffer: int = DEFAULT_MAX_LINE_BUFFER,
) -> SourceFile:
    """Read a whole file; any failure discards the file."""
    try:
        text = Path(path).read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(f"Cannot decode {path}: {exc.reason}") from exc
    except OSError as exc:
        raise LoadError(f"Cannot read {path}: {exc.strerror or exc}") from exc

    source = SourceFile.from_text(str(path), text)
    for line in source.lines:
        if line.length > max_line_buffer:
            raise LoadError(
                f"Line {line.number} of {path} exceeds the maximum of {max_line_buffer} characters"
            )

    logger.debug("Loaded %s (%d lines)", path, len(source.lines))
    return source

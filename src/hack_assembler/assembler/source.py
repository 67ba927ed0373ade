"""
Hack Source Preprocessing
=========================

Turns raw assembly text into the sequence of lines the assembler core
works on. Blank lines and comment-only lines are dropped; every
remaining line is trimmed and keeps its original line number so errors
can point back into the source file.

Inline trailing comments are left in place:

    @i      // loop counter     ->  SourceLine("@i      // loop counter", 3)
    // comment-only line         ->  (dropped)
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Union

from hack_assembler.errors import SourceLocation


COMMENT_MARKER = "//"


@dataclass(frozen=True)
class SourceLine:
    """
    One non-blank source line.

    Attributes:
        text: Line text with surrounding whitespace removed
        location: Where the line starts in the source file
    """
    text: str
    location: SourceLocation

    @classmethod
    def from_text(cls, text: str, line: int = 0,
                  filename: str = "<input>") -> "SourceLine":
        """Wrap a bare string, trimming surrounding whitespace."""
        return cls(text.strip(), SourceLocation(filename, line, 1))


def is_blank_or_comment(line: str) -> bool:
    """Return True for lines that carry no instruction."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_MARKER)


def preprocess(source: str, filename: str = "<input>") -> list[SourceLine]:
    """
    Strip blank and comment-only lines from assembly source.

    Args:
        source: Complete source text
        filename: Name used in source locations

    Returns:
        Trimmed lines in original order, tagged with 1-indexed line numbers
    """
    lines = []
    for number, raw in enumerate(source.splitlines(), start=1):
        if is_blank_or_comment(raw):
            continue
        stripped = raw.strip()
        column = len(raw) - len(raw.lstrip()) + 1
        lines.append(SourceLine(stripped, SourceLocation(filename, number, column)))
    return lines


def as_source_lines(
    lines: Iterable[Union[str, SourceLine]],
) -> Sequence[SourceLine]:
    """
    Normalize a mix of strings and SourceLines.

    Bare strings are numbered by their position in the sequence, which
    matches their line number when the caller has already removed
    blank lines.
    """
    return list(_iter_source_lines(lines))


def _iter_source_lines(
    lines: Iterable[Union[str, SourceLine]],
) -> Iterator[SourceLine]:
    for index, line in enumerate(lines, start=1):
        if isinstance(line, SourceLine):
            yield line
        else:
            yield SourceLine.from_text(line, index)

"""
Hack Line Classifier
====================

This module turns one trimmed source line into typed fields. It knows
the three line shapes of Hack assembly:

1. **Address instruction**: ``@`` followed by a decimal literal or symbol
   ```asm
   @100            // literal
   @LOOP           // label or variable
   ```

2. **Compute instruction**: ``dest=comp;jump`` with dest and jump optional
   ```asm
   D=D+M;JMP       // fields: D, D+M, JMP
   D+M             // fields: D+M
   0;JMP           // fields: 0, JMP
   ```

3. **Label pseudo-line**: ``(NAME)``, binds NAME to the next instruction
   address and encodes to nothing

Comment Handling
----------------
Lines reach the classifier with blank and comment-only lines already
removed, but an inline trailing comment may still be present. Everything
from ``//`` onward is dropped before the instruction is split, so
separators inside a comment are never seen:

    @i // counter          -> ["i"]
    D=D+M;JMP // loop      -> ["D", "D+M", "JMP"]
    D+M // a=b            -> ["D+M"]

Whitespace is not allowed around ``=`` or ``;``. ``D = M`` and ``0 ;JMP``
are malformed rather than truncated.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Union
import re

from hack_assembler.errors import MalformedLineError, SourceLocation
from hack_assembler.assembler.source import COMMENT_MARKER, SourceLine


ADDRESS_MARKER = "@"
LABEL_OPEN = "("
LABEL_CLOSE = ")"
DEST_SEPARATOR = "="
JUMP_SEPARATOR = ";"

_COMPUTE_SPLIT = re.compile(r"[=;\s]")


# =============================================================================
# Parsed Line
# =============================================================================

class LineKind(Enum):
    """Instruction forms. Selects the encoding used for a line."""
    ADDRESS = auto()
    COMPUTE = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class ParsedLine:
    """
    A classified instruction line.

    For ADDRESS lines ``fields`` holds the single operand token. For
    COMPUTE lines it holds up to three tokens ordered
    [dest if has_dest] comp [jump if has_jump].

    Attributes:
        kind: Instruction form
        fields: Operand tokens in source order
        has_dest: True if the source had a ``dest=`` part
        has_jump: True if the source had a ``;jump`` part
        location: Source location for error reporting
        source_line: Original text for error reporting
    """
    kind: LineKind
    fields: tuple[str, ...]
    has_dest: bool = False
    has_jump: bool = False
    location: Optional[SourceLocation] = None
    source_line: Optional[str] = None

    @property
    def is_address(self) -> bool:
        return self.kind is LineKind.ADDRESS

    @property
    def operand(self) -> str:
        """Operand token of an address instruction."""
        return self.fields[0]

    @property
    def dest(self) -> Optional[str]:
        return self.fields[0] if self.has_dest else None

    @property
    def comp(self) -> str:
        return self.fields[1] if self.has_dest else self.fields[0]

    @property
    def jump(self) -> Optional[str]:
        return self.fields[-1] if self.has_jump else None

    def with_operand(self, value: int) -> "ParsedLine":
        """Return a copy of an address line with a numeric operand."""
        return replace(self, fields=(str(value),))

    def __str__(self) -> str:
        """Canonical source text, without comments."""
        if self.is_address:
            return f"{ADDRESS_MARKER}{self.operand}"
        text = self.comp
        if self.has_dest:
            text = f"{self.dest}{DEST_SEPARATOR}{text}"
        if self.has_jump:
            text = f"{text}{JUMP_SEPARATOR}{self.jump}"
        return text


# =============================================================================
# Classification
# =============================================================================

def _split_source(line: Union[str, SourceLine]) -> tuple[str, Optional[SourceLocation]]:
    if isinstance(line, SourceLine):
        return line.text, line.location
    return line.strip(), None


def classify(line: Union[str, SourceLine]) -> ParsedLine:
    """
    Classify one non-blank, non-label source line.

    Args:
        line: Source text, or a SourceLine carrying its location

    Returns:
        ParsedLine with kind, fields and dest/jump flags

    Raises:
        MalformedLineError: If the line lacks a token its form requires
    """
    text, location = _split_source(line)
    if not text:
        raise MalformedLineError("empty instruction", location)
    if text.startswith(ADDRESS_MARKER):
        return _classify_address(text, location)
    return _classify_compute(text, location)


def _classify_address(text: str, location: Optional[SourceLocation]) -> ParsedLine:
    rest = text[len(ADDRESS_MARKER):]
    if not rest or rest[0].isspace():
        raise MalformedLineError(
            "address instruction is missing its operand",
            location,
            hint="write the value or symbol directly after '@', e.g. @100",
            source_line=text,
        )
    operand = rest.split()[0]
    return ParsedLine(LineKind.ADDRESS, (operand,), location=location,
                      source_line=text)


def _strip_comment(text: str) -> str:
    return text.split(COMMENT_MARKER, 1)[0].rstrip()


def _classify_compute(text: str, location: Optional[SourceLocation]) -> ParsedLine:
    # Separators are looked for everywhere except a trailing // comment.
    instruction = _strip_comment(text)
    has_dest = DEST_SEPARATOR in instruction
    has_jump = JUMP_SEPARATOR in instruction

    if (instruction.count(DEST_SEPARATOR) > 1
            or instruction.count(JUMP_SEPARATOR) > 1
            or (has_dest and has_jump
                and instruction.index(JUMP_SEPARATOR) < instruction.index(DEST_SEPARATOR))):
        raise MalformedLineError(
            f"cannot parse compute instruction '{instruction}'",
            location,
            hint="expected the form dest=comp;jump",
            source_line=text,
        )

    max_fields = 3 - (0 if has_dest else 1) - (0 if has_jump else 1)
    fields = _COMPUTE_SPLIT.split(instruction)[:max_fields]

    # A separator past the last kept field would otherwise be dropped
    boundaries = list(_COMPUTE_SPLIT.finditer(instruction))
    kept_end = (boundaries[max_fields - 1].start()
                if len(boundaries) >= max_fields else len(instruction))
    trailing = instruction[kept_end:]

    if (len(fields) < max_fields or not all(fields)
            or DEST_SEPARATOR in trailing or JUMP_SEPARATOR in trailing):
        raise MalformedLineError(
            f"compute instruction '{instruction}' is missing a field",
            location,
            hint="expected the form dest=comp;jump with no spaces around '=' or ';'",
            source_line=text,
        )

    return ParsedLine(LineKind.COMPUTE, tuple(fields), has_dest=has_dest,
                      has_jump=has_jump, location=location, source_line=text)


# =============================================================================
# Label Pseudo-lines
# =============================================================================

def is_label_line(line: Union[str, SourceLine]) -> bool:
    """Return True if the trimmed line starts a label definition."""
    text, _ = _split_source(line)
    return text.startswith(LABEL_OPEN)


def label_name(line: Union[str, SourceLine]) -> str:
    """
    Extract the name from a ``(NAME)`` label line.

    Raises:
        MalformedLineError: If the closing marker is missing, the name is
                            empty, or anything but a comment follows it
    """
    text, location = _split_source(line)
    close = text.find(LABEL_CLOSE)
    if close == -1:
        raise MalformedLineError(
            "label definition is missing ')'",
            location,
            source_line=text,
        )
    trailing = _strip_comment(text[close + len(LABEL_CLOSE):])
    if trailing.strip():
        raise MalformedLineError(
            f"unexpected text '{trailing.strip()}' after label definition",
            location,
            hint="put the instruction on its own line",
            source_line=text,
        )
    name = text[len(LABEL_OPEN):close]
    if not name or any(ch.isspace() for ch in name):
        raise MalformedLineError(
            f"invalid label name '{name}'",
            location,
            hint="label names cannot be empty or contain whitespace",
            source_line=text,
        )
    return name

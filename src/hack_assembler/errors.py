"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
├── AssemblerError (source-related)
│   ├── MalformedLineError - line is missing an expected token
│   ├── UnknownMnemonicError - dest/comp/jump mnemonic not in its table
│   ├── OperandOverflowError - address operand does not fit in 15 bits
│   ├── DuplicateLabelError - label defined twice (REJECT policy only)
│   └── PassOrderError - symbol resolution passes run out of order
└── ConfigError (auxiliary data and settings)
    └── TableFormatError - malformed mnemonic table or symbol seed file

Every AssemblerError is fatal for the unit being assembled: no partial
output is produced. Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assembler.assemble_file("Max.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for errors found while assembling source lines.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:7:1: error: unknown comp mnemonic 'D+Q'
                D=D+Q
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MalformedLineError(AssemblerError):
    """
    A source line lacks a token its syntax requires.

    Examples:
        - "@" with no operand
        - "D=" with no comp part
        - "(LOOP" without a closing parenthesis
    """
    pass


class UnknownMnemonicError(AssemblerError):
    """
    A dest, comp or jump mnemonic has no entry in its table.

    There is no default code: a lookup miss always aborts the unit.
    """

    def __init__(
        self,
        kind: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_mnemonics: Optional[list[str]] = None,
    ):
        self.kind = kind
        self.mnemonic = mnemonic
        self.valid_mnemonics = valid_mnemonics or []

        hint = None
        if self.valid_mnemonics:
            hint = f"valid {kind} mnemonics: {', '.join(self.valid_mnemonics)}"

        super().__init__(
            f"unknown {kind} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class OperandOverflowError(AssemblerError):
    """
    Address instruction operand outside the range 0..max_value.

    The address instruction has a single leading 0 bit, so only
    15 bits are left for the value (isa.MAX_ADDRESS). Larger values are
    rejected rather than truncated.
    """

    def __init__(
        self,
        value: int,
        max_value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        self.max_value = max_value
        super().__init__(
            f"address operand {value} out of range (0 to {max_value})",
            location=location,
            hint=f"address instructions carry a {max_value.bit_length()}-bit value",
            source_line=source_line,
        )


class DuplicateLabelError(AssemblerError):
    """
    Label defined more than once.

    Only raised when the assembler runs with the REJECT duplicate label
    policy; the default policy keeps the first definition.
    """

    def __init__(
        self,
        label: str,
        address: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.address = address
        super().__init__(
            f"duplicate label '{label}'",
            location=location,
            hint=f"'{label}' is already bound to {address}",
            source_line=source_line,
        )


class PassOrderError(AssemblerError):
    """
    Symbol resolution passes were called out of order.

    Label collection must run exactly once, and must finish before
    variable resolution starts.
    """
    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(HackError):
    """Base exception for configuration and auxiliary data errors."""
    pass


class TableFormatError(ConfigError):
    """
    Malformed mnemonic table or predefined symbol file.

    Raised when a line does not hold exactly two fields, a code has the
    wrong width or contains characters other than 0/1, or a symbol value
    is not a non-negative decimal integer.
    """

    def __init__(self, message: str, filename: Optional[str] = None,
                 line: Optional[int] = None):
        self.filename = filename
        self.line = line
        if filename is not None and line is not None:
            message = f"{filename}:{line}: {message}"
        elif filename is not None:
            message = f"{filename}: {message}"
        super().__init__(message)

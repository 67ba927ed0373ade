"""
Hack Instruction Set Definition
===============================

This module defines the Hack machine's instruction encoding tables and
predefined symbols. The Hack computer has a 16-bit word, a 15-bit
address space for both ROM (instructions) and RAM (data), and exactly
two instruction forms.

Instruction Forms
-----------------
1. **Address instruction** (``@value``)
   - ``0vvvvvvvvvvvvvvv``
   - Loads a 15-bit value into the A register
   - Example: @100 -> 0000000001100100

2. **Compute instruction** (``dest=comp;jump``)
   - ``111accccccdddjjj``
   - ``a cccccc``: 7-bit computation code (a selects A or M as operand)
   - ``ddd``: destination registers (A, D, M)
   - ``jjj``: jump condition on the ALU output
   - Example: D=D+M;JMP -> 1111000010010111

Tables
------
The three mnemonic tables are bundled in an immutable MnemonicTables
value object. The built-in tables are used unless the caller loads
replacement tables from text files, one ``MNEMONIC CODE`` pair per line:

    // dest table
    M    001
    D    010
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union
import logging
import re

from hack_assembler.errors import TableFormatError

logger = logging.getLogger(__name__)


# =============================================================================
# Field Widths
# =============================================================================

DEST_WIDTH = 3
COMP_WIDTH = 7
JUMP_WIDTH = 3

# Address instructions: one leading 0 bit + 15-bit value
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1

# First RAM address handed out to variables
VARIABLE_BASE_ADDRESS = 16


# =============================================================================
# Built-in Mnemonic Tables
# =============================================================================
# Bit order follows the machine word: comp is "a c1 c2 c3 c4 c5 c6",
# dest is "d1 d2 d3" (A, D, M), jump is "j1 j2 j3" (<0, =0, >0).
# =============================================================================

DEST_CODES: dict[str, str] = {
    "M": "001",
    "D": "010",
    "MD": "011",
    "A": "100",
    "AM": "101",
    "AD": "110",
    "AMD": "111",
}

COMP_CODES: dict[str, str] = {
    # a = 0: operate on A
    "0": "0101010",
    "1": "0111111",
    "-1": "0111010",
    "D": "0001100",
    "A": "0110000",
    "!D": "0001101",
    "!A": "0110001",
    "-D": "0001111",
    "-A": "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a = 1: operate on M
    "M": "1110000",
    "!M": "1110001",
    "-M": "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
}

JUMP_CODES: dict[str, str] = {
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}


# =============================================================================
# Predefined Symbols
# =============================================================================
# These bindings are always present in a fresh symbol table, whatever an
# external seed file contains.
# =============================================================================

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 0x4000,
    "KBD": 0x6000,
}


# =============================================================================
# Mnemonic Tables Value Object
# =============================================================================

def _freeze(codes: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(codes))


@dataclass(frozen=True)
class MnemonicTables:
    """
    Immutable dest/comp/jump mnemonic tables.

    One instance is built up front and shared read-only by every unit an
    assembler processes. The mappings are read-only proxies, so neither
    the encoder nor the caller can modify them after construction.

    Attributes:
        dest: destination mnemonic -> 3-bit code
        comp: computation mnemonic -> 7-bit code
        jump: jump mnemonic -> 3-bit code
    """
    dest: Mapping[str, str] = field(default_factory=lambda: _freeze(DEST_CODES))
    comp: Mapping[str, str] = field(default_factory=lambda: _freeze(COMP_CODES))
    jump: Mapping[str, str] = field(default_factory=lambda: _freeze(JUMP_CODES))

    def __post_init__(self) -> None:
        for name, width in (("dest", DEST_WIDTH), ("comp", COMP_WIDTH),
                            ("jump", JUMP_WIDTH)):
            codes = getattr(self, name)
            for mnemonic, code in codes.items():
                if not _is_code(code, width):
                    raise TableFormatError(
                        f"{name} code for '{mnemonic}' must be {width} "
                        f"binary digits, got '{code}'"
                    )
            # frozen dataclass: bypass __setattr__ to store the proxy
            object.__setattr__(self, name, _freeze(codes))

    @classmethod
    def default(cls) -> "MnemonicTables":
        """Return the built-in Hack tables."""
        return cls()

    @classmethod
    def from_files(
        cls,
        dest: Optional[Union[str, Path]] = None,
        comp: Optional[Union[str, Path]] = None,
        jump: Optional[Union[str, Path]] = None,
    ) -> "MnemonicTables":
        """
        Build tables from auxiliary text files.

        Any table whose path is None keeps its built-in contents.

        Raises:
            TableFormatError: If a file is malformed
            FileNotFoundError: If a file does not exist
        """
        return cls(
            dest=load_mnemonic_table(dest, DEST_WIDTH) if dest else DEST_CODES,
            comp=load_mnemonic_table(comp, COMP_WIDTH) if comp else COMP_CODES,
            jump=load_mnemonic_table(jump, JUMP_WIDTH) if jump else JUMP_CODES,
        )


# =============================================================================
# Table File Loading
# =============================================================================

_CODE_PATTERN = re.compile(r"^[01]+$")
_DECIMAL_PATTERN = re.compile(r"^[0-9]+$")


def _is_code(code: str, width: int) -> bool:
    return len(code) == width and bool(_CODE_PATTERN.match(code))


def _table_entries(path: Path):
    """Yield (line_number, first, second) for each data line of a table file."""
    for number, raw in enumerate(path.read_text().splitlines(), start=1):
        text = raw.split("//", 1)[0].strip()
        if not text:
            continue
        parts = text.split()
        if len(parts) != 2:
            raise TableFormatError(
                f"expected 'NAME VALUE', got '{text}'", str(path), number
            )
        yield number, parts[0], parts[1]


def load_mnemonic_table(path: Union[str, Path], width: int) -> dict[str, str]:
    """
    Load a mnemonic table from a text file.

    Each data line holds a mnemonic and its code separated by whitespace.
    Blank lines and ``//`` comments are ignored.

    Args:
        path: Table file
        width: Required code width in bits

    Returns:
        Dictionary mapping mnemonic to code

    Raises:
        TableFormatError: If a line is malformed or a code has the wrong width
    """
    path = Path(path)
    table: dict[str, str] = {}
    for number, mnemonic, code in _table_entries(path):
        if not _is_code(code, width):
            raise TableFormatError(
                f"code for '{mnemonic}' must be {width} binary digits, got '{code}'",
                str(path), number,
            )
        table[mnemonic] = code
    logger.debug(f"Loaded {len(table)} mnemonics from {path}")
    return table


def load_predefined_symbols(path: Union[str, Path]) -> dict[str, int]:
    """
    Load a predefined symbol seed file.

    Each data line holds a symbol name and a non-negative decimal value.

    Raises:
        TableFormatError: If a line is malformed or a value is invalid
    """
    path = Path(path)
    symbols: dict[str, int] = {}
    for number, name, value in _table_entries(path):
        if not _DECIMAL_PATTERN.match(value):
            raise TableFormatError(
                f"value for '{name}' must be a non-negative integer, got '{value}'",
                str(path), number,
            )
        symbols[name] = int(value)
    logger.debug(f"Loaded {len(symbols)} predefined symbols from {path}")
    return symbols

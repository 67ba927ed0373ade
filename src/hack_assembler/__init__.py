"""
Hack Assembler - Assembler for the Hack 16-bit Computer
=======================================================

This package translates Hack assembly language into Hack machine code:
one 16-character string of 0s and 1s per instruction, the ``.hack``
text format loaded by the Hack CPU emulator.

The Hack computer has two instruction forms:
- **Address instruction** ``@value``: loads a 15-bit value into A
- **Compute instruction** ``dest=comp;jump``: ALU operation with an
  optional destination and an optional jump

Symbolic names are resolved in two passes. Labels ``(NAME)`` may be used
before their definition; any other symbol is a variable, allocated RAM
from address 16 in order of first use.

Main Components
---------------
- **assembler**: classifier, symbol table, encoder and the Assembler driver
- **isa**: mnemonic tables and predefined symbols
- **config**: assembler settings and environment overrides
- **cli**: the ``hackasm`` command-line tool

Quick Start
-----------
    >>> from hack_assembler import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    LineKind,
    ParsedLine,
    classify,
    DuplicateLabelPolicy,
    SymbolTable,
    InstructionEncoder,
)
from hack_assembler.isa import MnemonicTables, PREDEFINED_SYMBOLS
from hack_assembler.errors import (
    HackError,
    AssemblerError,
    MalformedLineError,
    UnknownMnemonicError,
    OperandOverflowError,
    DuplicateLabelError,
    PassOrderError,
    ConfigError,
    TableFormatError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "LineKind",
    "ParsedLine",
    "classify",
    "DuplicateLabelPolicy",
    "SymbolTable",
    "InstructionEncoder",
    # ISA
    "MnemonicTables",
    "PREDEFINED_SYMBOLS",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "MalformedLineError",
    "UnknownMnemonicError",
    "OperandOverflowError",
    "DuplicateLabelError",
    "PassOrderError",
    "ConfigError",
    "TableFormatError",
]

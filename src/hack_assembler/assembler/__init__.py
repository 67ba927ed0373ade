"""
Hack Assembler Core
===================

This package translates Hack assembly source into 16-bit machine words.

Main Components
---------------
- **Assembler**: Main class that orchestrates the assembly process
- **preprocess**: Strips blank and comment-only lines, keeps line numbers
- **classify**: Turns one line into typed fields (address or compute)
- **SymbolTable**: Two-pass label/variable resolution
- **InstructionEncoder**: Encodes resolved lines as 16-character strings

Assembly Process
----------------
1. **Preprocessing**: drop blank and comment-only lines
2. **Pass 1**: bind every ``(LABEL)`` to the next instruction address
3. **Pass 2**: allocate variables from RAM address 16, substitute operands
4. **Encoding**: one ``0``/``1`` string of length 16 per instruction

Example Usage
-------------
>>> from hack_assembler.assembler import assemble
>>> assemble("@100\\nD=D+M;JMP")
['0000000001100100', '1111000010010111']
"""

from hack_assembler.assembler.assembler import Assembler, assemble, assemble_file
from hack_assembler.assembler.source import SourceLine, preprocess
from hack_assembler.assembler.classifier import (
    LineKind,
    ParsedLine,
    classify,
    is_label_line,
    label_name,
)
from hack_assembler.assembler.symbols import (
    DuplicateLabelPolicy,
    Symbol,
    SymbolKind,
    SymbolTable,
)
from hack_assembler.assembler.encoder import InstructionEncoder

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Preprocessing
    "SourceLine",
    "preprocess",
    # Classifier
    "LineKind",
    "ParsedLine",
    "classify",
    "is_label_line",
    "label_name",
    # Symbol table
    "DuplicateLabelPolicy",
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Encoder
    "InstructionEncoder",
]

"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, the primary interface for
assembling Hack source code. It coordinates the preprocessor, the symbol
table passes and the encoder to produce ``.hack`` machine code.

Example Usage
-------------
>>> from hack_assembler.assembler import Assembler
>>>
>>> asm = Assembler()
>>> words = asm.assemble_string('''
... @2
... D=A
... @3
... D=D+A
... @0
... M=D
... ''')
>>> words[0]
'0000000000000010'
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Add.asm Max.asm
    $ hackasm Max.asm -o out/Max.hack --intermediate -s Max.sym
"""

from pathlib import Path
from typing import Mapping, Optional
import logging

from hack_assembler.assembler.classifier import ParsedLine
from hack_assembler.assembler.encoder import InstructionEncoder
from hack_assembler.assembler.source import preprocess
from hack_assembler.assembler.symbols import (
    DuplicateLabelPolicy,
    SymbolKind,
    SymbolTable,
)
from hack_assembler.isa import MnemonicTables

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    One Assembler can assemble any number of units in turn. The mnemonic
    tables are shared by every unit; each unit gets a fresh SymbolTable.
    The results of the most recent unit are available through the get_*
    and write_* methods.

    Attributes:
        tables: Mnemonic tables used for encoding
        predefined: Extra predefined symbols seeded into each symbol table
        duplicate_labels: Policy for labels defined more than once
    """

    def __init__(
        self,
        tables: Optional[MnemonicTables] = None,
        predefined: Optional[Mapping[str, int]] = None,
        duplicate_labels: DuplicateLabelPolicy = DuplicateLabelPolicy.KEEP_FIRST,
    ):
        self.tables = tables if tables is not None else MnemonicTables.default()
        self.predefined = dict(predefined) if predefined else {}
        self.duplicate_labels = duplicate_labels
        self._encoder = InstructionEncoder(self.tables)
        self._reset()

    def _reset(self) -> None:
        self._symbols: Optional[SymbolTable] = None
        self._resolved: list[ParsedLine] = []
        self._words: list[str] = []

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        The pipeline is:
        1. Strip blank and comment-only lines
        2. Pass 1: bind labels
        3. Pass 2: allocate variables and substitute operands
        4. Encode every instruction

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: If assembly fails; nothing is kept from the unit
        """
        self._reset()
        lines = preprocess(source, filename)
        logger.debug(f"{filename}: {len(lines)} source lines after preprocessing")

        symbols = SymbolTable(self.predefined, self.duplicate_labels)
        symbols.collect_labels(lines)
        resolved = symbols.resolve_variables(lines)
        words = self._encoder.encode_all(resolved)

        self._symbols = symbols
        self._resolved = resolved
        self._words = words
        logger.debug(f"{filename}: encoded {len(words)} instructions")
        return list(words)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        logger.debug(f"Assembling {filepath}")
        return self.assemble_string(filepath.read_text(), str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_words(self) -> list[str]:
        """Return the encoded instructions of the last unit."""
        return list(self._words)

    def get_binary(self) -> str:
        """Return the ``.hack`` file contents: one newline-terminated word per line."""
        return "".join(f"{word}\n" for word in self._words)

    def get_resolved_lines(self) -> list[ParsedLine]:
        """Return the classified instructions with numeric address operands."""
        return list(self._resolved)

    def get_intermediate(self) -> str:
        """Return the resolved source: labels removed, operands numeric."""
        return "".join(f"{line}\n" for line in self._resolved)

    def get_symbols(self) -> dict[str, int]:
        """Return the symbol table of the last unit as name -> value."""
        return self._symbols.as_dict() if self._symbols else {}

    def get_symbol_table(self) -> Optional[SymbolTable]:
        return self._symbols

    def write_hack(self, filepath: str | Path) -> None:
        """Write the ``.hack`` binary text file."""
        Path(filepath).write_text(self.get_binary())
        logger.debug(f"Wrote {len(self._words)} instructions to {filepath}")

    def write_intermediate(self, filepath: str | Path) -> None:
        """Write the resolved intermediate source (``.intm``)."""
        Path(filepath).write_text(self.get_intermediate())
        logger.debug(f"Wrote intermediate source to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name value (one per line), labels and variables only. The
        file can be fed back in as a predefined symbol seed.
        """
        with open(filepath, "w") as f:
            f.write("// Symbol table\n")
            f.write("// Generated by hackasm\n")
            if self._symbols:
                for sym in self._symbols.symbols():
                    if sym.kind is SymbolKind.PREDEFINED:
                        continue
                    f.write(f"{sym.name} {sym.value}\n")
        logger.debug(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             tables: Optional[MnemonicTables] = None) -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        One 16-character binary string per instruction

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(tables=tables).assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  tables: Optional[MnemonicTables] = None) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(tables=tables).assemble_file(filepath)

"""
Hack ISA Package
================

This package contains the Hack machine definitions shared by the
assembler stages: field widths, the built-in dest/comp/jump mnemonic
tables, the predefined symbols, and loaders for replacement tables.

Usage:
    from hack_assembler.isa import (
        MnemonicTables,
        PREDEFINED_SYMBOLS,
        load_predefined_symbols,
    )
"""

from hack_assembler.isa.hack import (
    # Field widths and address space
    DEST_WIDTH,
    COMP_WIDTH,
    JUMP_WIDTH,
    ADDRESS_BITS,
    MAX_ADDRESS,
    VARIABLE_BASE_ADDRESS,
    # Built-in tables
    DEST_CODES,
    COMP_CODES,
    JUMP_CODES,
    PREDEFINED_SYMBOLS,
    # Table value object and loaders
    MnemonicTables,
    load_mnemonic_table,
    load_predefined_symbols,
)

__all__ = [
    "DEST_WIDTH",
    "COMP_WIDTH",
    "JUMP_WIDTH",
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "VARIABLE_BASE_ADDRESS",
    "DEST_CODES",
    "COMP_CODES",
    "JUMP_CODES",
    "PREDEFINED_SYMBOLS",
    "MnemonicTables",
    "load_mnemonic_table",
    "load_predefined_symbols",
]

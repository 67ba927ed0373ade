#!/usr/bin/env python3
"""
Hack Assembler Demo
===================

This script demonstrates how to use the hack_assembler package to:
1. Assemble source text with the built-in tables
2. Inspect the resolved symbols and intermediate source
3. Load mnemonic tables and extra predefined symbols from files
4. Write .hack, .intm and symbol files for the example programs

Usage:
    pip install -e .
    python examples/assemble_demo.py
"""

from pathlib import Path

from hack_assembler import Assembler, AssemblerError, MnemonicTables, assemble
from hack_assembler.isa import load_predefined_symbols


EXAMPLES_DIR = Path(__file__).parent
PROGRAMS_DIR = EXAMPLES_DIR / "programs"
TABLES_DIR = EXAMPLES_DIR / "tables"


def main():
    output_dir = Path("build")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Assemble a string
    # ==========================================================================
    # assemble() is the one-call interface: source text in, 16-bit words out.

    print("Assembling Add from a string...")
    words = assemble("@2\nD=A\n@3\nD=D+A\n@0\nM=D\n")
    for word in words:
        print(f"  {word}")

    # ==========================================================================
    # 2. Symbols and intermediate source
    # ==========================================================================
    # Labels are bound in pass 1 (ROM addresses), variables in pass 2
    # (RAM addresses from 16 in order of first use).

    asm = Assembler()
    asm.assemble_file(PROGRAMS_DIR / "Rect.asm")
    table = asm.get_symbol_table()

    print("\nRect.asm symbols:")
    for sym in table.labels():
        print(f"  label     {sym.name:<16} {sym.value}")
    for sym in table.variables():
        print(f"  variable  {sym.name:<16} {sym.value}")

    print("\nRect.asm resolved source (first 6 lines):")
    for line in asm.get_intermediate().splitlines()[:6]:
        print(f"  {line}")

    # ==========================================================================
    # 3. Tables from files
    # ==========================================================================
    # The files in examples/tables hold the standard Hack codes, so the
    # output matches the built-in tables word for word.

    tables = MnemonicTables.from_files(
        dest=TABLES_DIR / "dest.txt",
        comp=TABLES_DIR / "comp.txt",
        jump=TABLES_DIR / "jump.txt",
    )
    predefined = load_predefined_symbols(TABLES_DIR / "predefined_symbols.txt")
    file_asm = Assembler(tables=tables, predefined=predefined)

    same = file_asm.assemble_file(PROGRAMS_DIR / "Rect.asm") == asm.get_words()
    print(f"\nTables loaded from files match built-ins: {same}")

    # ==========================================================================
    # 4. Assemble every example program
    # ==========================================================================
    # Fill.asm takes TEMP and SCREEN_END from predefined_symbols.txt. Without
    # the seed they would be allocated as variables instead.

    print(f"\nWriting output to {output_dir}/")
    for source in sorted(PROGRAMS_DIR.glob("*.asm")):
        try:
            words = file_asm.assemble_file(source)
        except AssemblerError as e:
            print(f"  {source.name}: FAILED\n{e}")
            continue

        stem = output_dir / source.stem
        file_asm.write_hack(stem.with_suffix(".hack"))
        file_asm.write_intermediate(stem.with_suffix(".intm"))
        file_asm.write_symbols(stem.with_suffix(".sym"))
        print(f"  {source.name}: {len(words)} instructions")

    print("\nDone!")


if __name__ == "__main__":
    main()

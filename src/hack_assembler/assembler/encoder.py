"""
Hack Instruction Encoder
========================

Turns resolved, classified instruction lines into 16-character binary
strings. Encoding is selected by the line's kind:

Address (``@value``)
--------------------
```
bit   15   14 ................ 0
      0    value (15-bit, zero-padded)
```

Compute (``dest=comp;jump``)
----------------------------
```
bit   15-13  12-6         5-3    2-0
      111    a c1..c6     d1-d3  j1-j3
```
A missing dest or jump part encodes as ``000``. Every mnemonic must be
present in its table; there is no default code.
"""

from typing import Callable, Optional, Sequence

from hack_assembler.errors import (
    MalformedLineError,
    OperandOverflowError,
    SourceLocation,
    UnknownMnemonicError,
)
from hack_assembler.assembler.classifier import LineKind, ParsedLine
from hack_assembler.isa import ADDRESS_BITS, MAX_ADDRESS, MnemonicTables


COMPUTE_PREFIX = "111"
NO_DEST = "000"
NO_JUMP = "000"


class InstructionEncoder:
    """
    Encoder for both Hack instruction forms.

    The mnemonic tables are shared read-only; one encoder can serve any
    number of assembled units.

    Usage:
        encoder = InstructionEncoder(MnemonicTables.default())
        encoder.encode_address(100)                      # '0000000001100100'
        encoder.encode_compute(["D", "D+M"], True, False)  # '1111000010010000'
    """

    def __init__(self, tables: Optional[MnemonicTables] = None):
        self._tables = tables if tables is not None else MnemonicTables.default()
        self._encoders: dict[LineKind, Callable[[ParsedLine], str]] = {
            LineKind.ADDRESS: self._encode_address_line,
            LineKind.COMPUTE: self._encode_compute_line,
        }

    @property
    def tables(self) -> MnemonicTables:
        return self._tables

    def encode(self, line: ParsedLine) -> str:
        """
        Encode a resolved line.

        Address lines must already carry a numeric operand (see
        SymbolTable.resolve_variables).
        """
        return self._encoders[line.kind](line)

    def encode_all(self, lines: Sequence[ParsedLine]) -> list[str]:
        return [self.encode(line) for line in lines]

    # =========================================================================
    # Address Instructions
    # =========================================================================

    def encode_address(
        self,
        operand: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> str:
        """
        Encode ``@operand`` as ``0`` plus the 15-bit unsigned value.

        Raises:
            OperandOverflowError: If operand is outside 0..32767
        """
        if operand < 0 or operand > MAX_ADDRESS:
            raise OperandOverflowError(operand, MAX_ADDRESS, location, source_line)
        return "0" + format(operand, f"0{ADDRESS_BITS}b")

    def _encode_address_line(self, line: ParsedLine) -> str:
        operand = line.operand
        if not operand.isdecimal():
            raise MalformedLineError(
                f"address operand '{operand}' has not been resolved",
                line.location,
                source_line=line.source_line,
            )
        return self.encode_address(int(operand), line.location, line.source_line)

    # =========================================================================
    # Compute Instructions
    # =========================================================================

    def encode_compute(
        self,
        fields: Sequence[str],
        has_dest: bool,
        has_jump: bool,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> str:
        """
        Encode a compute instruction from its classified fields.

        Args:
            fields: [dest if has_dest] comp [jump if has_jump]
            has_dest: True if fields starts with a dest mnemonic
            has_jump: True if fields ends with a jump mnemonic

        Raises:
            UnknownMnemonicError: If any mnemonic is missing from its table
            MalformedLineError: If fields does not match the flags
        """
        expected = 1 + int(has_dest) + int(has_jump)
        if len(fields) != expected:
            raise MalformedLineError(
                f"compute instruction needs {expected} fields, got {len(fields)}",
                location,
                source_line=source_line,
            )

        comp = self._lookup("comp", self._tables.comp, fields[1] if has_dest else fields[0],
                            location, source_line)
        dest = (self._lookup("dest", self._tables.dest, fields[0], location, source_line)
                if has_dest else NO_DEST)
        jump = (self._lookup("jump", self._tables.jump, fields[-1], location, source_line)
                if has_jump else NO_JUMP)

        return COMPUTE_PREFIX + comp + dest + jump

    def _encode_compute_line(self, line: ParsedLine) -> str:
        return self.encode_compute(
            line.fields, line.has_dest, line.has_jump, line.location, line.source_line
        )

    @staticmethod
    def _lookup(kind, table, mnemonic, location, source_line) -> str:
        code = table.get(mnemonic)
        if code is None:
            raise UnknownMnemonicError(
                kind,
                mnemonic,
                location=location,
                source_line=source_line,
                valid_mnemonics=sorted(table),
            )
        return code

"""
Hack Symbol Table
=================

This module owns the symbol -> address mapping for one assembled unit
and performs the two-pass symbolic resolution.

Pass 1 (Labels)
---------------
- Walk every line in order with a ROM counter starting at 0
- A ``(NAME)`` line binds NAME to the current counter, the address of
  the next real instruction; the label line itself takes no address
- Every other line advances the counter by 1

Pass 2 (Variables)
------------------
- Walk every line again with a RAM allocator starting at 16
- Address instructions with a decimal literal operand are left as-is
- Any other operand is a symbol: bound on first sight to the next free
  RAM address, then replaced by its value
- Label lines are dropped; compute lines pass through unchanged

Pass 1 must finish before pass 2 starts. Forward references such as
``@END`` ahead of ``(END)`` only resolve to the label address because
every label is already bound when pass 2 allocates variables. The table
enforces this order and raises PassOrderError otherwise.

Binding Rules
-------------
A bound symbol never changes value. The predefined symbols (SP, LCL,
ARG, THIS, THAT, R0-R15, SCREEN, KBD) are bound at construction and
cannot be overridden by seed data. A label defined twice is handled by
the table's DuplicateLabelPolicy.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping, Optional, Union
import logging
import re

from hack_assembler.errors import (
    DuplicateLabelError,
    MalformedLineError,
    PassOrderError,
    SourceLocation,
)
from hack_assembler.assembler.classifier import (
    ParsedLine,
    classify,
    is_label_line,
    label_name,
)
from hack_assembler.assembler.source import SourceLine, as_source_lines
from hack_assembler.isa import PREDEFINED_SYMBOLS, VARIABLE_BASE_ADDRESS

logger = logging.getLogger(__name__)

_DECIMAL_LITERAL = re.compile(r"[0-9]+")


# =============================================================================
# Policies and Symbol Records
# =============================================================================

class DuplicateLabelPolicy(Enum):
    """
    What to do when a label name is already bound during pass 1.

    KEEP_FIRST keeps the earliest binding silently, WARN keeps it and logs
    a warning, REJECT raises DuplicateLabelError.
    """
    KEEP_FIRST = "keep-first"
    WARN = "warn"
    REJECT = "reject"


class SymbolKind(Enum):
    """How a symbol got its binding."""
    PREDEFINED = auto()
    LABEL = auto()
    VARIABLE = auto()


@dataclass(frozen=True)
class Symbol:
    """
    A bound symbol.

    Attributes:
        name: Symbol name (case-sensitive)
        value: ROM address for labels, RAM address otherwise
        kind: How the symbol was bound
        location: Where the binding came from (None for predefined symbols)
    """
    name: str
    value: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class _Stage(Enum):
    NEW = auto()
    LABELS_COLLECTED = auto()
    VARIABLES_RESOLVED = auto()


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolTable:
    """
    Symbol table and two-pass resolver for one assembled unit.

    Usage:
        table = SymbolTable()
        table.collect_labels(lines)              # pass 1
        resolved = table.resolve_variables(lines)  # pass 2
    """

    def __init__(
        self,
        predefined: Optional[Mapping[str, int]] = None,
        duplicate_labels: DuplicateLabelPolicy = DuplicateLabelPolicy.KEEP_FIRST,
    ):
        """
        Create a table seeded with the predefined symbols.

        Args:
            predefined: Extra seed bindings; entries that would rebind one of
                        the fixed Hack symbols are ignored
            duplicate_labels: Policy for labels defined more than once
        """
        self._symbols: dict[str, Symbol] = {}
        self._duplicate_labels = duplicate_labels
        self._stage = _Stage.NEW
        self._next_variable = VARIABLE_BASE_ADDRESS
        self._rom_size = 0

        for name, value in PREDEFINED_SYMBOLS.items():
            self._symbols[name] = Symbol(name, value, SymbolKind.PREDEFINED)

        if predefined:
            for name, value in predefined.items():
                existing = self._symbols.get(name)
                if existing is not None:
                    if existing.value != value:
                        logger.warning(
                            f"Ignoring predefined symbol {name}={value}: "
                            f"already bound to {existing.value}"
                        )
                    continue
                self._symbols[name] = Symbol(name, value, SymbolKind.PREDEFINED)

    # =========================================================================
    # Pass 1: Labels
    # =========================================================================

    def collect_labels(self, lines: Iterable[Union[str, SourceLine]]) -> int:
        """
        First pass: bind every label to the address of the next instruction.

        Args:
            lines: Non-blank source lines in original order

        Returns:
            Number of real instructions (the ROM size of the unit)

        Raises:
            PassOrderError: If labels were already collected
            MalformedLineError: If a label line is malformed
            DuplicateLabelError: Under the REJECT policy
        """
        if self._stage is not _Stage.NEW:
            raise PassOrderError("labels have already been collected for this unit")

        rom_counter = 0
        for line in as_source_lines(lines):
            if is_label_line(line):
                self._bind_label(label_name(line), rom_counter, line)
            else:
                rom_counter += 1

        self._rom_size = rom_counter
        self._stage = _Stage.LABELS_COLLECTED
        logger.debug(f"Pass 1: {len(self.labels())} labels, {rom_counter} instructions")
        return rom_counter

    def _bind_label(self, name: str, address: int, line: SourceLine) -> None:
        existing = self._symbols.get(name)
        if existing is None:
            self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, line.location)
            return

        if self._duplicate_labels is DuplicateLabelPolicy.REJECT:
            raise DuplicateLabelError(
                name, existing.value, location=line.location, source_line=line.text
            )
        if self._duplicate_labels is DuplicateLabelPolicy.WARN:
            where = f" at {line.location}" if line.location else ""
            logger.warning(
                f"Duplicate label '{name}'{where} ignored, keeping {existing.value}"
            )

    # =========================================================================
    # Pass 2: Variables
    # =========================================================================

    def resolve_variables(
        self, lines: Iterable[Union[str, SourceLine]]
    ) -> list[ParsedLine]:
        """
        Second pass: allocate variables and substitute address operands.

        Args:
            lines: The same non-blank source lines given to collect_labels

        Returns:
            Classified instructions with every address operand numeric and
            label lines removed

        Raises:
            PassOrderError: If labels were not collected first, or this pass
                            already ran
            MalformedLineError: If an instruction line is malformed
        """
        if self._stage is _Stage.NEW:
            raise PassOrderError(
                "variables cannot be resolved before labels are collected",
                hint="call collect_labels() on the whole unit first",
            )
        if self._stage is _Stage.VARIABLES_RESOLVED:
            raise PassOrderError("variables have already been resolved for this unit")

        resolved = []
        for line in as_source_lines(lines):
            if is_label_line(line):
                continue
            parsed = classify(line)
            if parsed.is_address:
                parsed = parsed.with_operand(self.resolve_operand(parsed))
            resolved.append(parsed)

        self._stage = _Stage.VARIABLES_RESOLVED
        logger.debug(
            f"Pass 2: {len(self.variables())} variables, "
            f"{len(resolved)} instructions resolved"
        )
        return resolved

    def resolve_operand(self, line: ParsedLine) -> int:
        """
        Return the numeric value of an address instruction's operand.

        Decimal literals are returned as-is. Symbols are bound to the next
        free RAM address on first sight; later calls return the same value.
        """
        operand = line.operand
        if not operand:
            raise MalformedLineError(
                "address instruction has an empty operand",
                line.location,
                source_line=line.source_line,
            )
        if _DECIMAL_LITERAL.fullmatch(operand):
            return int(operand)
        return self.resolve(operand, line.location)

    def resolve(self, name: str, location: Optional[SourceLocation] = None) -> int:
        """
        Return the value of a symbol, allocating a variable if it is unbound.

        Raises:
            PassOrderError: If called before labels are collected
        """
        if self._stage is _Stage.NEW:
            raise PassOrderError(
                f"cannot resolve '{name}' before labels are collected",
                location,
            )
        symbol = self._symbols.get(name)
        if symbol is None:
            symbol = Symbol(name, self._next_variable, SymbolKind.VARIABLE, location)
            self._symbols[name] = symbol
            self._next_variable += 1
        return symbol.value

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def rom_size(self) -> int:
        """Instruction count found by pass 1."""
        return self._rom_size

    @property
    def next_variable_address(self) -> int:
        return self._next_variable

    def get(self, name: str) -> Optional[int]:
        """Return a symbol's value, or None if unbound. Never allocates."""
        symbol = self._symbols.get(name)
        return symbol.value if symbol else None

    def get_symbol(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def as_dict(self) -> dict[str, int]:
        """Return all bindings as a plain name -> value dictionary."""
        return {name: sym.value for name, sym in self._symbols.items()}

    def symbols(self, kind: Optional[SymbolKind] = None) -> list[Symbol]:
        """Return bound symbols in binding order, optionally filtered by kind."""
        return [sym for sym in self._symbols.values() if kind is None or sym.kind is kind]

    def labels(self) -> list[Symbol]:
        return self.symbols(SymbolKind.LABEL)

    def variables(self) -> list[Symbol]:
        return self.symbols(SymbolKind.VARIABLE)

"""
Hack Assembler - Configuration
==============================

Assembler settings: auxiliary table files, the predefined symbol seed,
the duplicate label policy and optional outputs. Configuration can come
from:
- Default values (defined here: built-in tables, keep-first policy)
- Environment variables
- Command-line options (applied by the CLI on top of the environment)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os

from hack_assembler.assembler import Assembler, DuplicateLabelPolicy
from hack_assembler.errors import ConfigError
from hack_assembler.isa import MnemonicTables, load_predefined_symbols


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        dest_table: Replacement dest mnemonic table (default: built-in)
        comp_table: Replacement comp mnemonic table (default: built-in)
        jump_table: Replacement jump mnemonic table (default: built-in)
        predefined_symbols: Extra predefined symbol seed file
        duplicate_labels: What to do with labels defined twice
        write_intermediate: Also write the resolved ``.intm`` source
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # AUXILIARY DATA
    # ═══════════════════════════════════════════════════════════════════════════

    dest_table: Optional[Path] = None
    comp_table: Optional[Path] = None
    jump_table: Optional[Path] = None
    predefined_symbols: Optional[Path] = None

    # ═══════════════════════════════════════════════════════════════════════════
    # BEHAVIOUR AND OUTPUTS
    # ═══════════════════════════════════════════════════════════════════════════

    duplicate_labels: DuplicateLabelPolicy = DuplicateLabelPolicy.KEEP_FIRST
    write_intermediate: bool = False

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            HACKASM_DEST_TABLE: dest mnemonic table file
            HACKASM_COMP_TABLE: comp mnemonic table file
            HACKASM_JUMP_TABLE: jump mnemonic table file
            HACKASM_PREDEFINED: predefined symbol seed file
            HACKASM_DUPLICATE_LABELS: keep-first, warn or reject
            HACKASM_INTERMEDIATE: 1/true/yes to write .intm files

        Raises:
            ConfigError: If HACKASM_DUPLICATE_LABELS is not a known policy
        """
        config = cls()

        if path := os.environ.get("HACKASM_DEST_TABLE"):
            config.dest_table = Path(path)
        if path := os.environ.get("HACKASM_COMP_TABLE"):
            config.comp_table = Path(path)
        if path := os.environ.get("HACKASM_JUMP_TABLE"):
            config.jump_table = Path(path)
        if path := os.environ.get("HACKASM_PREDEFINED"):
            config.predefined_symbols = Path(path)

        if policy := os.environ.get("HACKASM_DUPLICATE_LABELS"):
            config.duplicate_labels = parse_policy(policy)

        if flag := os.environ.get("HACKASM_INTERMEDIATE"):
            config.write_intermediate = flag.strip().lower() in ("1", "true", "yes", "on")

        return config

    # ═══════════════════════════════════════════════════════════════════════════
    # BUILDERS
    # ═══════════════════════════════════════════════════════════════════════════

    def build_tables(self) -> MnemonicTables:
        """Load the mnemonic tables, falling back to the built-ins."""
        return MnemonicTables.from_files(self.dest_table, self.comp_table, self.jump_table)

    def build_predefined(self) -> dict[str, int]:
        """Load the extra predefined symbols, or an empty seed."""
        if self.predefined_symbols is None:
            return {}
        return load_predefined_symbols(self.predefined_symbols)

    def build_assembler(self) -> Assembler:
        return Assembler(
            tables=self.build_tables(),
            predefined=self.build_predefined(),
            duplicate_labels=self.duplicate_labels,
        )


def parse_policy(value: str) -> DuplicateLabelPolicy:
    """
    Parse a duplicate label policy name (keep-first, warn, reject).

    Underscores and case are accepted: KEEP_FIRST == keep-first.
    """
    normalized = value.strip().lower().replace("_", "-")
    try:
        return DuplicateLabelPolicy(normalized)
    except ValueError:
        valid = ", ".join(p.value for p in DuplicateLabelPolicy)
        raise ConfigError(
            f"unknown duplicate label policy '{value}' (valid: {valid})"
        ) from None

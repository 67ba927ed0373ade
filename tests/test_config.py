"""
Configuration Tests
===================

Tests for AssemblerConfig: environment variables, policy parsing and
building assemblers from table files.
"""

import pytest

from hack_assembler.assembler import Assembler, DuplicateLabelPolicy
from hack_assembler.config import AssemblerConfig, parse_policy
from hack_assembler.errors import ConfigError, DuplicateLabelError, TableFormatError
from hack_assembler.isa import COMP_CODES, DEST_CODES, JUMP_CODES


ENV_VARS = [
    "HACKASM_DEST_TABLE",
    "HACKASM_COMP_TABLE",
    "HACKASM_JUMP_TABLE",
    "HACKASM_PREDEFINED",
    "HACKASM_DUPLICATE_LABELS",
    "HACKASM_INTERMEDIATE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Environment
# =============================================================================

class TestFromEnv:
    """Tests for AssemblerConfig.from_env()."""

    def test_defaults(self, clean_env):
        config = AssemblerConfig.from_env()
        assert config == AssemblerConfig()
        assert config.duplicate_labels is DuplicateLabelPolicy.KEEP_FIRST
        assert config.write_intermediate is False

    def test_table_paths(self, clean_env, tmp_path):
        clean_env.setenv("HACKASM_COMP_TABLE", str(tmp_path / "comp.txt"))
        clean_env.setenv("HACKASM_PREDEFINED", str(tmp_path / "symbols.txt"))
        config = AssemblerConfig.from_env()
        assert config.comp_table == tmp_path / "comp.txt"
        assert config.predefined_symbols == tmp_path / "symbols.txt"
        assert config.dest_table is None

    @pytest.mark.parametrize("value, expected", [
        ("1", True), ("true", True), ("YES", True), ("on", True),
        ("0", False), ("no", False),
    ])
    def test_intermediate_flag(self, clean_env, value, expected):
        clean_env.setenv("HACKASM_INTERMEDIATE", value)
        assert AssemblerConfig.from_env().write_intermediate is expected

    def test_duplicate_labels(self, clean_env):
        clean_env.setenv("HACKASM_DUPLICATE_LABELS", "warn")
        assert AssemblerConfig.from_env().duplicate_labels is DuplicateLabelPolicy.WARN

    def test_bad_duplicate_labels(self, clean_env):
        clean_env.setenv("HACKASM_DUPLICATE_LABELS", "never")
        with pytest.raises(ConfigError):
            AssemblerConfig.from_env()


# =============================================================================
# Policy Parsing
# =============================================================================

class TestParsePolicy:

    @pytest.mark.parametrize("value, expected", [
        ("keep-first", DuplicateLabelPolicy.KEEP_FIRST),
        ("KEEP_FIRST", DuplicateLabelPolicy.KEEP_FIRST),
        ("Warn", DuplicateLabelPolicy.WARN),
        (" reject ", DuplicateLabelPolicy.REJECT),
    ])
    def test_valid(self, value, expected):
        assert parse_policy(value) is expected

    def test_invalid_lists_choices(self):
        with pytest.raises(ConfigError, match="keep-first, warn, reject"):
            parse_policy("last")


# =============================================================================
# Builders
# =============================================================================

class TestBuilders:
    """Tests for building tables, seeds and assemblers."""

    def test_default_tables(self):
        tables = AssemblerConfig().build_tables()
        assert dict(tables.dest) == DEST_CODES
        assert dict(tables.comp) == COMP_CODES
        assert dict(tables.jump) == JUMP_CODES

    def test_table_file(self, tmp_path):
        path = tmp_path / "jump.txt"
        path.write_text("JMP 111\nJEQ 010\n")
        tables = AssemblerConfig(jump_table=path).build_tables()
        assert dict(tables.jump) == {"JMP": "111", "JEQ": "010"}

    def test_malformed_table_file(self, tmp_path):
        path = tmp_path / "dest.txt"
        path.write_text("D\n")
        with pytest.raises(TableFormatError):
            AssemblerConfig(dest_table=path).build_tables()

    def test_empty_predefined(self):
        assert AssemblerConfig().build_predefined() == {}

    def test_predefined_file(self, tmp_path):
        path = tmp_path / "symbols.txt"
        path.write_text("LED 24577\n")
        assert AssemblerConfig(predefined_symbols=path).build_predefined() == {"LED": 24577}

    def test_build_assembler(self, tmp_path):
        path = tmp_path / "symbols.txt"
        path.write_text("LED 24577\n")
        config = AssemblerConfig(
            predefined_symbols=path,
            duplicate_labels=DuplicateLabelPolicy.REJECT,
        )
        asm = config.build_assembler()
        assert isinstance(asm, Assembler)
        assert asm.assemble_string("@LED\n") == ["0110000000000001"]
        with pytest.raises(DuplicateLabelError):
            asm.assemble_string("(A)\n(A)\n")

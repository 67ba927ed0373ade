"""
Tests for hackasm - Command-Line Interface
==========================================

These tests drive the hackasm command through click's CliRunner and
check the files it writes and the exit codes it returns.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from hack_assembler import __version__
from hack_assembler.cli.errors import ExitCode
from hack_assembler.cli.hackasm import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sources(tmp_path: Path, add_source, max_source) -> dict[str, Path]:
    add = tmp_path / "add" / "Add.asm"
    add.parent.mkdir()
    add.write_text(add_source)
    max_ = tmp_path / "max" / "Max.asm"
    max_.parent.mkdir()
    max_.write_text(max_source)
    return {"add": add, "max": max_}


# =============================================================================
# Basic Assembly
# =============================================================================

class TestBasicAssembly:
    """Tests for the default output behaviour."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Assemble Hack source code" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_default_output_path(self, runner, sources, max_hack):
        """Should write Max.hack next to Max.asm."""
        result = runner.invoke(main, [str(sources["max"])])
        assert result.exit_code == ExitCode.SUCCESS
        hack = sources["max"].with_suffix(".hack")
        assert hack.read_text().splitlines() == max_hack

    def test_output_option(self, runner, sources, tmp_path, add_hack):
        """Should create the output directory if needed."""
        out = tmp_path / "build" / "out.hack"
        result = runner.invoke(main, [str(sources["add"]), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text().splitlines() == add_hack
        assert not sources["add"].with_suffix(".hack").exists()

    def test_multiple_inputs(self, runner, sources, add_hack, max_hack):
        """Each input is assembled as its own unit."""
        result = runner.invoke(main, [str(sources["add"]), str(sources["max"])])
        assert result.exit_code == 0
        assert sources["add"].with_suffix(".hack").read_text().splitlines() == add_hack
        assert sources["max"].with_suffix(".hack").read_text().splitlines() == max_hack

    def test_output_with_multiple_inputs_rejected(self, runner, sources, tmp_path):
        result = runner.invoke(main, [
            str(sources["add"]), str(sources["max"]), "-o", str(tmp_path / "x.hack"),
        ])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert not (tmp_path / "x.hack").exists()

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "Nope.asm")])
        assert result.exit_code == 2

    def test_no_inputs(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 2


# =============================================================================
# Optional Outputs
# =============================================================================

class TestOptionalOutputs:
    """Tests for --intermediate and --symbols."""

    def test_intermediate(self, runner, sources, max_hack):
        result = runner.invoke(main, [str(sources["max"]), "--intermediate"])
        assert result.exit_code == 0
        intm = sources["max"].with_suffix(".intm")
        lines = intm.read_text().splitlines()
        assert lines[:2] == ["@0", "D=M"]
        assert len(lines) == len(max_hack)

    def test_intermediate_follows_output(self, runner, sources, tmp_path):
        out = tmp_path / "out" / "Max.hack"
        result = runner.invoke(main, [str(sources["max"]), "-o", str(out), "--intermediate"])
        assert result.exit_code == 0
        assert (tmp_path / "out" / "Max.intm").exists()

    def test_no_intermediate_by_default(self, runner, sources):
        runner.invoke(main, [str(sources["max"])])
        assert not sources["max"].with_suffix(".intm").exists()

    def test_symbols(self, runner, sources, tmp_path):
        sym = tmp_path / "Max.sym"
        result = runner.invoke(main, [str(sources["max"]), "-s", str(sym)])
        assert result.exit_code == 0
        text = sym.read_text()
        assert "OUTPUT_FIRST 10" in text
        assert "OUTPUT_D 12" in text
        assert "INFINITE_LOOP 14" in text
        assert "SCREEN" not in text

    def test_symbols_feed_back_as_predefined(self, runner, tmp_path):
        """A written symbol file is a valid --predefined seed."""
        first = tmp_path / "First.asm"
        first.write_text("@index\n@counter\nM=0\n(DONE)\n@DONE\n0;JMP\n")
        sym = tmp_path / "First.sym"
        assert runner.invoke(main, [str(first), "-s", str(sym)]).exit_code == 0

        second = tmp_path / "Second.asm"
        second.write_text("@counter\nD=M\n")
        result = runner.invoke(main, [str(second), "--predefined", str(sym)])
        assert result.exit_code == 0
        words = second.with_suffix(".hack").read_text().splitlines()
        assert int(words[0], 2) == 17


# =============================================================================
# Error Handling
# =============================================================================

class TestErrors:
    """Tests for exit codes and error output."""

    def test_assembly_error_exit_code(self, runner, tmp_path):
        bad = tmp_path / "Bad.asm"
        bad.write_text("@0\nD=D*M\n")
        result = runner.invoke(main, [str(bad)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Assembly failed" in result.output
        assert "Bad.asm:2:1" in result.output
        assert "D*M" in result.output

    def test_no_output_on_error(self, runner, tmp_path):
        bad = tmp_path / "Bad.asm"
        bad.write_text("@0\n@40000\n")
        result = runner.invoke(main, [str(bad), "--intermediate"])
        assert result.exit_code == 1
        assert not bad.with_suffix(".hack").exists()
        assert not bad.with_suffix(".intm").exists()

    def test_stops_at_first_failing_unit(self, runner, sources, tmp_path):
        bad = tmp_path / "Bad.asm"
        bad.write_text("D=\n")
        result = runner.invoke(main, [str(bad), str(sources["max"])])
        assert result.exit_code == 1
        assert not sources["max"].with_suffix(".hack").exists()

    def test_duplicate_labels_reject(self, runner, tmp_path):
        source = tmp_path / "Dup.asm"
        source.write_text("(X)\n@X\n(X)\n0;JMP\n")
        result = runner.invoke(main, [str(source), "--duplicate-labels", "reject"])
        assert result.exit_code == 1
        assert "duplicate label 'X'" in result.output

    def test_duplicate_labels_keep_first_default(self, runner, tmp_path):
        source = tmp_path / "Dup.asm"
        source.write_text("(X)\n@X\n(X)\n0;JMP\n")
        result = runner.invoke(main, [str(source)])
        assert result.exit_code == 0

    def test_bad_table_file(self, runner, sources, tmp_path):
        table = tmp_path / "jump.txt"
        table.write_text("JMP 1111\n")
        result = runner.invoke(main, [str(sources["max"]), "--jump-table", str(table)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Configuration error" in result.output
        assert "jump.txt:1" in result.output

    def test_bad_policy_choice(self, runner, sources):
        result = runner.invoke(main, [str(sources["max"]), "--duplicate-labels", "maybe"])
        assert result.exit_code == 2


# =============================================================================
# Tables and Environment
# =============================================================================

class TestConfiguration:
    """Tests for table options and HACKASM_* environment variables."""

    def test_custom_tables(self, runner, tmp_path):
        dest = tmp_path / "dest.txt"
        dest.write_text("D 010\n")
        comp = tmp_path / "comp.txt"
        comp.write_text("// only A\nA 0110000\n")
        source = tmp_path / "Tiny.asm"
        source.write_text("@7\nD=A\n")
        result = runner.invoke(main, [
            str(source), "--dest-table", str(dest), "--comp-table", str(comp),
        ])
        assert result.exit_code == 0
        assert source.with_suffix(".hack").read_text().splitlines() == [
            "0000000000000111", "1110110000010000",
        ]

    def test_custom_table_rejects_missing_mnemonic(self, runner, tmp_path):
        comp = tmp_path / "comp.txt"
        comp.write_text("A 0110000\n")
        source = tmp_path / "Tiny.asm"
        source.write_text("D=M\n")
        result = runner.invoke(main, [str(source), "--comp-table", str(comp)])
        assert result.exit_code == 1

    def test_env_intermediate(self, runner, sources):
        result = runner.invoke(main, [str(sources["add"])], env={"HACKASM_INTERMEDIATE": "1"})
        assert result.exit_code == 0
        assert sources["add"].with_suffix(".intm").exists()

    def test_cli_overrides_env(self, runner, sources):
        result = runner.invoke(
            main, [str(sources["add"]), "--no-intermediate"],
            env={"HACKASM_INTERMEDIATE": "yes"},
        )
        assert result.exit_code == 0
        assert not sources["add"].with_suffix(".intm").exists()

    def test_env_duplicate_labels(self, runner, tmp_path):
        source = tmp_path / "Dup.asm"
        source.write_text("(X)\n@X\n(X)\n")
        result = runner.invoke(main, [str(source)], env={"HACKASM_DUPLICATE_LABELS": "REJECT"})
        assert result.exit_code == 1

    def test_env_bad_policy(self, runner, sources):
        result = runner.invoke(main, [str(sources["add"])],
                               env={"HACKASM_DUPLICATE_LABELS": "sometimes"})
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "sometimes" in result.output

    def test_env_predefined(self, runner, tmp_path):
        seed = tmp_path / "symbols.txt"
        seed.write_text("LED 24577\n")
        source = tmp_path / "Led.asm"
        source.write_text("@LED\n")
        result = runner.invoke(main, [str(source)], env={"HACKASM_PREDEFINED": str(seed)})
        assert result.exit_code == 0
        assert source.with_suffix(".hack").read_text() == "0110000000000001\n"


# =============================================================================
# Verbose Output
# =============================================================================

class TestVerbose:
    """Tests for -v/--verbose progress messages."""

    def test_verbose_messages(self, runner, sources, max_hack):
        result = runner.invoke(main, [str(sources["max"]), "-v"])
        assert result.exit_code == 0
        assert "Assembling" in result.output
        assert f"Wrote {len(max_hack)} instructions" in result.output
        assert "3 labels, 0 variables" in result.output

    def test_quiet_by_default(self, runner, sources):
        result = runner.invoke(main, [str(sources["max"])])
        assert "Assembling" not in result.output

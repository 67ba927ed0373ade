"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Max.hack next to Max.asm):
    $ hackasm Max.asm

Several units in one run:
    $ hackasm add/Add.asm max/Max.asm pong/Pong.asm rect/Rect.asm

With output file, intermediate source and symbol table:
    $ hackasm Max.asm -o build/Max.hack --intermediate -s Max.sym

With replacement mnemonic tables:
    $ hackasm --dest-table dest.txt --comp-table comp.txt \\
              --jump-table jump.txt --predefined symbols.txt Max.asm

Settings not given on the command line are taken from the HACKASM_*
environment variables (see hack_assembler.config).
"""

from pathlib import Path
from typing import Optional
import logging

import click

from hack_assembler import __version__
from hack_assembler.assembler import DuplicateLabelPolicy
from hack_assembler.cli.errors import handle_cli_exception
from hack_assembler.config import AssemblerConfig, parse_policy

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


_TABLE_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack; single input only)",
)
@click.option(
    "--intermediate/--no-intermediate",
    default=None,
    help="Also write the resolved source (labels removed, operands numeric) "
         "as a .intm file next to the output",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file (single input only)",
)
@click.option("--dest-table", type=_TABLE_PATH, help="dest mnemonic table file")
@click.option("--comp-table", type=_TABLE_PATH, help="comp mnemonic table file")
@click.option("--jump-table", type=_TABLE_PATH, help="jump mnemonic table file")
@click.option(
    "--predefined",
    type=_TABLE_PATH,
    help="Extra predefined symbols file (NAME VALUE per line). "
         "SP, LCL, ARG, THIS, THAT, R0-R15, SCREEN and KBD are always defined.",
)
@click.option(
    "--duplicate-labels",
    type=click.Choice([p.value for p in DuplicateLabelPolicy], case_sensitive=False),
    default=None,
    help="How to treat a label defined twice. Default: keep-first",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_files: tuple[Path, ...],
    output: Optional[Path],
    intermediate: Optional[bool],
    symbols: Optional[Path],
    dest_table: Optional[Path],
    comp_table: Optional[Path],
    jump_table: Optional[Path],
    predefined: Optional[Path],
    duplicate_labels: Optional[str],
    verbose: bool,
) -> None:
    """
    Assemble Hack source code into .hack machine code.

    INPUT_FILES are the assembly source files (.asm) to assemble. Each file
    is a separate unit with its own symbol table. Assembly stops at the
    first file with an error; no output is written for that file.

    \b
    Examples:
        hackasm Max.asm                  # Outputs Max.hack
        hackasm Max.asm -o out.hack      # Specify output file
        hackasm Add.asm Max.asm          # Several files
        hackasm --intermediate Max.asm   # Also write Max.intm
    """
    setup_logging(verbose)

    if len(input_files) > 1 and (output is not None or symbols is not None):
        raise click.UsageError("-o/--output and -s/--symbols need a single input file")

    try:
        config = AssemblerConfig.from_env()
        if dest_table is not None:
            config.dest_table = dest_table
        if comp_table is not None:
            config.comp_table = comp_table
        if jump_table is not None:
            config.jump_table = jump_table
        if predefined is not None:
            config.predefined_symbols = predefined
        if duplicate_labels is not None:
            config.duplicate_labels = parse_policy(duplicate_labels)
        if intermediate is not None:
            config.write_intermediate = intermediate

        logger.debug(f"Configuration: {config}")
        asm = config.build_assembler()

        if verbose:
            click.echo(f"Duplicate labels: {config.duplicate_labels.value}")

        for input_file in input_files:
            output_file = output if output is not None else input_file.with_suffix(".hack")

            if verbose:
                click.echo(f"Assembling {input_file}...")

            words = asm.assemble_file(input_file)

            output_file.parent.mkdir(parents=True, exist_ok=True)
            asm.write_hack(output_file)
            if verbose:
                click.echo(f"Wrote {len(words)} instructions to {output_file}")

            if config.write_intermediate:
                intm_file = output_file.with_suffix(".intm")
                asm.write_intermediate(intm_file)
                if verbose:
                    click.echo(f"Wrote intermediate source to {intm_file}")

            if symbols:
                asm.write_symbols(symbols)
                if verbose:
                    click.echo(f"Wrote symbols to {symbols}")

            if verbose:
                table = asm.get_symbol_table()
                click.echo(
                    f"{input_file}: {len(table.labels())} labels, "
                    f"{len(table.variables())} variables"
                )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()

"""
Hack Assembler - Test Configuration
===================================

Shared fixtures: sample programs and their expected machine code.
"""

import pytest
from pathlib import Path


# ═══════════════════════════════════════════════════════════════════════════════
# SAMPLE PROGRAMS
# ═══════════════════════════════════════════════════════════════════════════════

ADD_SOURCE = """\
// Computes R0 = 2 + 3
@2
D=A
@3
D=D+A
@0
M=D
"""

ADD_HACK = [
    "0000000000000010",
    "1110110000010000",
    "0000000000000011",
    "1110000010010000",
    "0000000000000000",
    "1110001100001000",
]

MAX_SOURCE = """\
// Computes R2 = max(R0, R1)

   @R0
   D=M              // D = first number
   @R1
   D=D-M            // D = first number - second number
   @OUTPUT_FIRST
   D;JGT            // if D>0 (first is greater) goto output_first
   @R1
   D=M              // D = second number
   @OUTPUT_D
   0;JMP            // goto output_d
(OUTPUT_FIRST)
   @R0
   D=M              // D = first number
(OUTPUT_D)
   @R2
   M=D              // M[2] = D (greatest number)
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP            // infinite loop
"""

MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]

SUM_SOURCE = """\
// Adds 1..100 into sum
    @i
    M=1     // i = 1
    @sum
    M=0     // sum = 0
(LOOP)
    @i
    D=M
    @100
    D=D-A
    @END
    D;JGT   // if (i-100) > 0 goto END
    @i
    D=M
    @sum
    M=D+M   // sum += i
    @i
    M=M+1   // i++
    @LOOP
    0;JMP
(END)
    @END
    0;JMP
"""


@pytest.fixture
def add_source() -> str:
    return ADD_SOURCE


@pytest.fixture
def add_hack() -> list[str]:
    return list(ADD_HACK)


@pytest.fixture
def max_source() -> str:
    return MAX_SOURCE


@pytest.fixture
def max_hack() -> list[str]:
    return list(MAX_HACK)


@pytest.fixture
def sum_source() -> str:
    return SUM_SOURCE


@pytest.fixture
def max_file(tmp_path: Path) -> Path:
    path = tmp_path / "Max.asm"
    path.write_text(MAX_SOURCE)
    return path

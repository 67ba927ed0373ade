"""
Hack Assembler Command-Line Interface
=====================================

This package provides the command-line tool for the Hack assembler:

- **hackasm**: assembles one or more ``.asm`` files into ``.hack`` files

The tool is a Click-based CLI application with built-in help and
consistent error reporting and exit codes.
"""

__all__ = ["hackasm"]

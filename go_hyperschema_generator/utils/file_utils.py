"""
File utilities for the Hyper-Schema generator.

This module provides the input and output operations of the generator:
reading the schema document from a file or standard input and writing the
generated Go source to a file or standard output.
"""

import sys
from pathlib import Path
from typing import Final, TextIO

# Conventional name for reading the schema from standard input
STDIN_MARKER: Final = "-"


def read_schema_source(source: str | Path, stdin: TextIO | None = None) -> str:
    """Read the raw schema document.

    Args:
        source: Path to the schema file, or ``-`` to read standard input.
        stdin: Stream used for ``-``; defaults to ``sys.stdin``.

    Returns:
        The document text.

    Raises:
        FileNotFoundError: If the schema file does not exist.
    """
    if str(source) == STDIN_MARKER:
        return (stdin or sys.stdin).read()
    return Path(source).read_text(encoding="utf-8")


def write_output(content: str, output: Path | None = None, stdout: TextIO | None = None) -> None:
    """Write generated source to disk or to standard output.

    Args:
        content: Generated source text.
        output: Destination file; parent directories are created as needed.
            When omitted the content goes to ``stdout``.
        stdout: Stream used when no output path is given; defaults to ``sys.stdout``.
    """
    if output is None:
        stream = stdout or sys.stdout
        stream.write(content)
        if not content.endswith("\n"):
            stream.write("\n")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")

"""
# ==============================================================================
# Module: pathway_bn/kg/readers.py
# ==============================================================================
# Purpose: Line-oriented tokenization of the three text inputs
#          (interaction map, central dogma, pathway)
#
# Input:
#   - A path, an open text stream, or any iterable of lines
#
# Output:
#   - (line_number, fields) records with a validated field count
# ==============================================================================
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Collection, Iterable, Iterator, List, Tuple, Union

from pathway_bn.core.exceptions import MalformedInputError

logger = logging.getLogger(__name__)

LineSource = Union[str, Path, Iterable[str]]


def tokenize_line(line: str) -> List[str]:
    """
    Split one input line into fields.

    Tab-separated when the line has a tab (entity names may contain spaces),
    whitespace-separated otherwise.
    """
    line = line.rstrip("\r\n")
    if "\t" in line:
        return [f.strip() for f in line.split("\t") if f.strip()]
    return line.split()


def open_lines(source: LineSource) -> Iterable[str]:
    """
    Normalize an input source to an iterable of lines.

    Paths are read eagerly so the file handle is closed before parsing
    starts. A ``str`` holding a newline is the text itself; any other
    ``str`` is a path.

    Raises:
        FileNotFoundError: if a path does not name an existing file
    """
    if isinstance(source, str) and "\n" in source:
        return io.StringIO(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")
        return path.read_text(encoding="utf-8").splitlines()
    return source


def iter_records(
    lines: Iterable[str],
    expected: Collection[int],
    source: str = "<input>",
) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line_number, fields) for every non-blank line.

    Args:
        lines: Input lines
        expected: Allowed field counts
        source: Name used in error messages

    Raises:
        MalformedInputError: if a line has a field count not in expected
    """
    for line_number, line in enumerate(lines, 1):
        fields = tokenize_line(line)
        if not fields:
            continue
        if len(fields) not in expected:
            allowed = " or ".join(str(n) for n in sorted(expected))
            raise MalformedInputError(
                f"expected {allowed} fields, got {len(fields)}: {line.rstrip()!r}",
                source=source,
                line_number=line_number,
            )
        yield line_number, fields

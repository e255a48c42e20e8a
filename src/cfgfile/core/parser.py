"""
Parser for cfg documents.

Splits input into lines, strips comments, classifies each line and groups
the resulting tuples into records:

    - empty (only whitespace): skipped
    - unindented: starts a new record
    - indented: appended to the most recent record

The first error aborts the whole parse; no partial document is returned.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from . import ir
from .environment import DEFAULT_SETTINGS, CfgSettings
from .errors import CfgIOError, OrphanIndentedTupleError, make_parse_error
from .lexer import is_space, tokenize_line

logger = logging.getLogger(__name__)


def strip_comment(line: str) -> str:
    """
    Drop everything from the first ``#`` onward.

    This happens before quotes are recognised, so a ``#`` inside a quoted
    field also starts a comment.
    """
    index = line.find("#")
    if index >= 0:
        return line[:index]
    return line


def _first_non_space(line: str) -> int:
    for i, ch in enumerate(line):
        if not is_space(ch):
            return i
    return -1


def parse_lines(
    lines: Iterable[str],
    settings: CfgSettings | None = None,
    file: Path | None = None,
) -> ir.Document:
    """
    Parse an iterable of lines into a Document.

    Args:
        lines: Source lines, with or without trailing newlines
        settings: Parse settings
        file: Source file path (for error reporting)

    Returns:
        The parsed Document

    Raises:
        ParseError: If the text is not a valid cfg document
    """
    settings = settings or DEFAULT_SETTINGS
    records: list[ir.Record] = []

    for line_no, raw in enumerate(lines, start=1):
        line = strip_comment(raw)

        first = _first_non_space(line)
        if first < 0:
            if settings.verbose:
                logger.debug("empty → %r", raw)
            continue

        indented = first > 0
        if settings.verbose:
            logger.debug("%s → %r", "tuple in record" if indented else "new record", raw)

        if indented and not records:
            raise make_parse_error(
                "Indented tuple with no parent record; "
                "the first tuple must be unindented and thus start a record",
                line_no,
                first + 1,
                file,
                raw.rstrip("\r\n"),
                error_class=OrphanIndentedTupleError,
            )

        attributes = tokenize_line(line, line_no, settings, file)
        if not attributes:
            # e.g. a lone '=': nothing survives, treat like a blank line
            if settings.verbose:
                logger.debug("no attributes → %r", raw)
            continue

        tuple_ = ir.Tuple(attributes=attributes)
        if indented:
            records[-1].tuples.append(tuple_)
        else:
            records.append(ir.Record(tuples=[tuple_]))

    return ir.Document(records=records)


def parse(
    text: str,
    settings: CfgSettings | None = None,
    file: Path | None = None,
) -> ir.Document:
    """
    Parse cfg text into a Document.

    Args:
        text: Complete cfg source
        settings: Parse settings
        file: Source file path (for error reporting)

    Returns:
        The parsed Document

    Raises:
        UnterminatedQuoteError: If a line ends inside a quoted field
        OrphanIndentedTupleError: If an indented line precedes every record
    """
    # StringIO splits on '\n' only and keeps line endings
    return parse_lines(io.StringIO(text), settings, file)


def load(
    stream: TextIO,
    settings: CfgSettings | None = None,
    file: Path | None = None,
) -> ir.Document:
    """
    Read and parse a cfg document from a text stream.

    Read failures (``OSError``, decoding errors) are raised as CfgIOError.
    """
    if file is None:
        name = getattr(stream, "name", None)
        if isinstance(name, str):
            file = Path(name)

    try:
        lines = list(_read_lines(stream))
    except (OSError, UnicodeDecodeError) as e:
        raise CfgIOError(f"Failed to read cfg input: {e}", cause=e) from e

    return parse_lines(lines, settings, file)


def _read_lines(stream: TextIO) -> Iterable[str]:
    while True:
        line = stream.readline()
        if not line:
            return
        yield line

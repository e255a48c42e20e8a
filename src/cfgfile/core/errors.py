"""
Error types for cfg parsing and I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .environment import QuoteStyle


class CfgError(Exception):
    """Base exception for all cfgfile errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(CfgError):
    """
    Raised when cfg text cannot be parsed.

    Every parse error is fatal for the whole document; the parser never
    returns a partially built result.
    """

    pass


class UnterminatedQuoteError(ParseError):
    """Raised when a line ends while a single or double quote is still open."""

    def __init__(
        self,
        message: str,
        kind: "QuoteStyle",
        context: Optional["ErrorContext"] = None,
    ):
        self.kind = kind
        super().__init__(message, context)


class OrphanIndentedTupleError(ParseError):
    """Raised when an indented line appears before any record has been opened."""

    pass


class CfgIOError(CfgError):
    """
    Raised when the underlying stream fails while reading.

    The original exception is kept on ``cause`` (and chained as ``__cause__``).
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed)
        column: Character offset within the line (1-indexed)
        file: Optional path of the source being parsed
        snippet: Optional source text around the error location
    """

    line: int
    column: int
    file: Path | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "hosts.cfg:10:5" or "10:5"
        """
        location = f"{self.line}:{self.column}"
        if self.file:
            location = f"{self.file}:{location}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format snippet lines with line numbers and an error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # The snippet is the offending line only, so it starts at self.line
        for i, line in enumerate(lines):
            line_num = self.line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def make_parse_error(
    message: str,
    line: int,
    column: int,
    file: Path | None = None,
    snippet: str | None = None,
    error_class: type[ParseError] = ParseError,
) -> ParseError:
    """
    Helper to create a ParseError (or subclass) with context.

    Args:
        message: Error description
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional source file path
        snippet: Optional code snippet
        error_class: ParseError subclass to instantiate

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(line=line, column=column, file=file, snippet=snippet)
    return error_class(message, context)


def make_unterminated_quote_error(
    kind: "QuoteStyle",
    line: int,
    column: int,
    file: Path | None = None,
    snippet: str | None = None,
) -> UnterminatedQuoteError:
    """Helper to create an UnterminatedQuoteError for the given quote kind."""
    label = "single" if kind.value == "'" else "double"
    context = ErrorContext(line=line, column=column, file=file, snippet=snippet)
    return UnterminatedQuoteError(f"Unterminated {label} quote ({kind.value})", kind, context)

"""
Line lexer for cfg text.

Turns the text of a single (comment-stripped) line into the attributes of
one tuple. The lexer is a small state machine driven one character at a
time; a word buffer collects the characters of the current name or value
and a pending name waits for its value.

Quoting rules:
    - ``'...'`` and ``"..."`` quote names or values containing whitespace
    - a doubled quote (``''`` or ``""``) is one literal quote character
    - a quote of the other kind inside a quoted field is literal
    - a bare word directly followed by a quote is its own valueless attribute
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from .environment import DEFAULT_SETTINGS, CfgSettings, QuoteStyle
from .errors import make_unterminated_quote_error
from .ir import Attribute

logger = logging.getLogger(__name__)


class LexState(Enum):
    """States of the line lexer."""

    NAME = "Name"  # name=
    VALUE = "Value"  # name=val
    EQUALS = "Equals"  # =
    SINGLE_QUOTE_OPEN = "'Begin"  # in a 'foo
    DOUBLE_QUOTE_OPEN = '"Begin'  # in a "bar
    SINGLE_QUOTE_CLOSED = "'End"  # closed a 'foo'
    DOUBLE_QUOTE_CLOSED = '"End'  # closed a "bar"


_OPEN = {
    QuoteStyle.SINGLE: LexState.SINGLE_QUOTE_OPEN,
    QuoteStyle.DOUBLE: LexState.DOUBLE_QUOTE_OPEN,
}
_CLOSED = {
    QuoteStyle.SINGLE: LexState.SINGLE_QUOTE_CLOSED,
    QuoteStyle.DOUBLE: LexState.DOUBLE_QUOTE_CLOSED,
}
_QUOTE_OPEN_STATES = frozenset(_OPEN.values())
_QUOTE_CLOSED_STATES = frozenset(_CLOSED.values())

# File, group, record and unit separators are not field separators
_NOT_SPACE = frozenset("\x1c\x1d\x1e\x1f")


def is_space(ch: str) -> bool:
    """Check whether ``ch`` separates fields."""
    return ch.isspace() and ch not in _NOT_SPACE


class LineLexer:
    """
    Lexer for one line of cfg text.

    Converts the line into a list of attributes in left-to-right order.
    """

    def __init__(
        self,
        text: str,
        line: int = 1,
        settings: CfgSettings | None = None,
        file: Path | None = None,
    ):
        """
        Initialize lexer.

        Args:
            text: Line text, with any comment already removed
            line: Line number (1-indexed, for error reporting)
            settings: Parse settings; ``verbose`` enables tracing
            file: Source file path (for error reporting)
        """
        self.text = text
        self.line = line
        self.file = file
        self.verbose = (settings or DEFAULT_SETTINGS).verbose
        self.pos = 0
        self.state = LexState.NAME
        self.word: list[str] = []
        self.name = ""
        self.quote_column = 0  # column of the quote that opened the current field
        self.attributes: list[Attribute] = []

    @property
    def column(self) -> int:
        """Column (1-indexed) of the current character."""
        return self.pos + 1

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character."""
        self.pos += 1

    def take_word(self) -> str:
        """Return the buffered word and reset the buffer."""
        word = "".join(self.word)
        self.word.clear()
        return word

    def commit(self, name: str, value: str | None) -> None:
        """Append a completed attribute and clear the pending name."""
        self.name = ""
        if not name and not value:
            # Stray whitespace/quote sequences commit empty attributes
            if self.verbose:
                logger.debug("discarding empty attribute at %d:%d", self.line, self.column)
            return
        self.attributes.append(Attribute(name=name, value=value))

    def handle_whitespace(self, ch: str) -> None:
        """Whitespace ends the pending field unless a quote is open."""
        state = self.state
        if state in _QUOTE_OPEN_STATES:
            self.word.append(ch)
            return

        if state is LexState.NAME:
            # Valueless name; '=' is optional after a name
            self.commit(self.take_word(), None)
        elif state is LexState.EQUALS:
            # 'name=' with nothing after it
            self.word.clear()
            self.commit(self.name, "")
        else:
            # VALUE or a closed quote
            self.commit(self.name, self.take_word() or None)
        self.state = LexState.NAME

    def handle_equals(self) -> None:
        if self.state in _QUOTE_OPEN_STATES:
            self.word.append("=")
        elif self.state is LexState.NAME:
            self.name = self.take_word()
            self.state = LexState.EQUALS
        else:
            self.state = LexState.EQUALS

    def handle_quote(self, quote: QuoteStyle) -> None:
        """Handle a single or double quote; both kinds behave the same."""
        if self.peek_char() == quote.value:
            # Doubled quote: 'foo '' bar' => foo ' bar
            self.advance()
            self.word.append(quote.value)
            return

        if self.state is _OPEN[quote.other]:
            self.word.append(quote.value)
            return

        if self.state is _OPEN[quote]:
            if not self.name:
                self.name = self.take_word()
            else:
                self.commit(self.name, self.take_word())
            self.state = _CLOSED[quote]
            return

        if self.state is LexState.NAME and self.word:
            # A bare name preceded the quote, commit it first
            self.commit(self.take_word(), None)

        self.quote_column = self.column
        self.state = _OPEN[quote]

    def finish(self) -> None:
        """End of line: close the pending field or fail on an open quote."""
        if self.state is LexState.SINGLE_QUOTE_OPEN:
            raise make_unterminated_quote_error(
                QuoteStyle.SINGLE, self.line, self.quote_column, self.file, self.text.rstrip("\n")
            )
        if self.state is LexState.DOUBLE_QUOTE_OPEN:
            raise make_unterminated_quote_error(
                QuoteStyle.DOUBLE, self.line, self.quote_column, self.file, self.text.rstrip("\n")
            )

        # A line normally ends in a newline, which already committed everything.
        # Lines cut short by a comment or end of input end here instead.
        if self.state is not LexState.NAME or self.word:
            self.handle_whitespace("\n")

    def tokenize(self) -> list[Attribute]:
        """
        Lex the entire line.

        Returns:
            Attributes in source order (possibly empty)

        Raises:
            UnterminatedQuoteError: If the line ends inside a quoted field
        """
        while (ch := self.current_char()) is not None:
            if self.verbose:
                logger.debug("%r => %s", ch, self.state.value)

            if is_space(ch):
                self.handle_whitespace(ch)
            elif ch == "=":
                self.handle_equals()
            elif ch == "'":
                self.handle_quote(QuoteStyle.SINGLE)
            elif ch == '"':
                self.handle_quote(QuoteStyle.DOUBLE)
            else:
                # Part of a name or value
                if self.state is LexState.EQUALS:
                    self.state = LexState.VALUE
                self.word.append(ch)

            self.advance()

        self.finish()
        return self.attributes


def tokenize_line(
    text: str,
    line: int = 1,
    settings: CfgSettings | None = None,
    file: Path | None = None,
) -> list[Attribute]:
    """
    Convenience function to lex one line into attributes.

    Args:
        text: Line text without comment
        line: Line number for error reporting
        settings: Parse settings
        file: Source file path for error reporting

    Returns:
        List of attributes
    """
    lexer = LineLexer(text, line, settings, file)
    return lexer.tokenize()

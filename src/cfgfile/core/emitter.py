"""
Emitter for cfg documents.

Renders a Document back to text that parses to an equivalent Document.
Output is canonical rather than a copy of the input:

    - every attribute is written as ``name=value`` (``name=`` when valueless)
    - each attribute is followed by a single space
    - a record's first tuple is unindented, later tuples start with a tab
    - records are not separated by blank lines

A field is quoted when it contains whitespace or ``=``, or is made up of
nothing but quote characters. Inside a quoted field the quote character in
use is doubled. Quote characters in an unquoted field are always doubled.
A nameless attribute made only of quotes is written directly after the
closing quote of the value before it, which is where the lexer found it.
"""

from __future__ import annotations

import re
from typing import TextIO

from . import ir
from .environment import DEFAULT_SETTINGS, CfgSettings, QuoteStyle

_NEEDS_QUOTES = re.compile(r"[\s=]")
_QUOTE_CHARS = re.compile(r"['\"]")


def needs_quotes(text: str) -> bool:
    """Check whether a name or value must be quoted to survive a re-parse."""
    if _NEEDS_QUOTES.search(text):
        return True
    # Doubled quotes right after '=' would be dropped with the empty value
    return bool(text) and not _QUOTE_CHARS.sub("", text)


def quote_field(text: str, quote: QuoteStyle = QuoteStyle.DOUBLE) -> str:
    """
    Quote ``text`` if required, otherwise escape it in place.

    A field that starts with the requested quote character is written with
    the other one, since a leading doubled quote would read as a literal.
    """
    if not needs_quotes(text):
        return _double_quotes(text)

    if text.startswith(quote.value):
        quote = quote.other
    return _wrap(text, quote)


def _double_quotes(text: str) -> str:
    return _QUOTE_CHARS.sub(lambda m: m.group(0) * 2, text)


def _wrap(text: str, quote: QuoteStyle) -> str:
    q = quote.value
    other = quote.other.value
    escaped = text.replace(q, q + q)
    # A run of the other quote would collapse pairwise on re-parse
    escaped = re.sub(f"{re.escape(other)}{{2,}}", lambda m: m.group(0) * 2, escaped)
    return f"{q}{escaped}{q}"


def _is_quote_run(attr: ir.Attribute) -> bool:
    """A nameless attribute whose value is nothing but quote characters."""
    return not attr.name and bool(attr.value) and not _QUOTE_CHARS.sub("", attr.value or "")


def _emit_glued(attr: ir.Attribute, run: str, quote: QuoteStyle) -> str | None:
    """
    Render ``attr`` with ``run`` written straight after its closing quote.

    Doubled quotes that follow the quote closing a value (``b='x'""``) lex as
    a nameless attribute of their own, and that is the only way to produce
    one made of quotes alone. The closing quote has to differ from the first
    character of the run, and a leading run of the closing quote in the value
    is written bare, ahead of the opening quote. Returns None when the value
    has nothing left to quote.
    """
    value = attr.value or ""
    close = QuoteStyle.SINGLE if run.startswith('"') else QuoteStyle.DOUBLE
    rest = value.lstrip(close.value)
    if not rest:
        return None
    lead = close.value * 2 * (len(value) - len(rest))
    return f"{quote_field(attr.name, quote)}={lead}{_wrap(rest, close)}{_double_quotes(run)}"


def emit_attribute(attr: ir.Attribute, quote: QuoteStyle = QuoteStyle.DOUBLE) -> str:
    """Render ``name=value``."""
    return f"{quote_field(attr.name, quote)}={quote_field(attr.value or '', quote)}"


def emit_tuple(tuple_: ir.Tuple, quote: QuoteStyle = QuoteStyle.DOUBLE) -> str:
    """Render a tuple's attributes, each followed by a space."""
    attrs = tuple_.attributes
    parts: list[str] = []
    i = 0
    while i < len(attrs):
        attr = attrs[i]
        glued = None
        if attr.value and i + 1 < len(attrs) and _is_quote_run(attrs[i + 1]):
            glued = _emit_glued(attr, attrs[i + 1].value or "", quote)
        if glued is None:
            parts.append(emit_attribute(attr, quote))
            i += 1
        else:
            parts.append(glued)
            i += 2
    return "".join(p + " " for p in parts)


def emit_record(record: ir.Record, quote: QuoteStyle = QuoteStyle.DOUBLE) -> str:
    """Render a record: first tuple unindented, the rest tab-indented."""
    first, *rest = record.tuples
    out = emit_tuple(first, quote) + "\n"
    for t in rest:
        out += "\t" + emit_tuple(t, quote) + "\n"
    return out


def emit(
    doc: ir.Document,
    quote: QuoteStyle | None = None,
    settings: CfgSettings | None = None,
) -> str:
    """
    Render a whole document.

    Args:
        doc: Document to render
        quote: Quote style for fields that need quoting; overrides settings
        settings: Settings supplying the quote style (default double)

    Returns:
        cfg text
    """
    quote = quote or (settings or DEFAULT_SETTINGS).quote
    return "".join(emit_record(r, quote) for r in doc.records)


def dump(
    doc: ir.Document,
    stream: TextIO,
    quote: QuoteStyle | None = None,
    settings: CfgSettings | None = None,
) -> None:
    """Write the rendered document to a text stream."""
    stream.write(emit(doc, quote, settings))

"""Core cfgfile functionality: document model, lexer, parser, emitter, settings."""

from . import ir
from .emitter import dump, emit
from .environment import CfgSettings, QuoteStyle, settings_from_env
from .errors import (
    CfgError,
    CfgIOError,
    ErrorContext,
    OrphanIndentedTupleError,
    ParseError,
    UnterminatedQuoteError,
)
from .ir import Attribute, Cfg, Document, Record, Tuple
from .parser import load, parse

__all__ = [
    "ir",
    "Attribute",
    "Tuple",
    "Record",
    "Document",
    "Cfg",
    "parse",
    "load",
    "emit",
    "dump",
    "QuoteStyle",
    "CfgSettings",
    "settings_from_env",
    "CfgError",
    "ParseError",
    "UnterminatedQuoteError",
    "OrphanIndentedTupleError",
    "CfgIOError",
    "ErrorContext",
]

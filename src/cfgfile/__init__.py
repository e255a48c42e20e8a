"""
cfgfile - reader and writer for cfg(2) style configuration files.

A cfg file is made of records; each record is an unindented line followed
by any number of indented lines (tuples), and each tuple holds
``name`` or ``name=value`` attributes.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.emitter import dump, emit
from .core.environment import CfgSettings, QuoteStyle, settings_from_env
from .core.errors import (
    CfgError,
    CfgIOError,
    OrphanIndentedTupleError,
    ParseError,
    UnterminatedQuoteError,
)
from .core.ir import Attribute, Cfg, Document, Record, Tuple
from .core.parser import load, parse

__version__ = get_version()

__all__ = [
    "__version__",
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
]

"""
Settings for parsing and emitting cfg text.

Settings are explicit values passed into ``parse``/``load``/``dump`` rather
than process-wide toggles, so repeated calls in one process never interfere
with each other.

Environment variables (read only by ``settings_from_env``):
    - CFGFILE_VERBOSE: ``1``, ``true``, ``yes`` or ``on`` enables per-character
      tracing at DEBUG level
    - CFGFILE_QUOTE: ``single`` or ``double`` selects the emitter quote style

Usage:
    from cfgfile.core.environment import CfgSettings, QuoteStyle

    settings = CfgSettings(verbose=True, quote=QuoteStyle.SINGLE)
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

VERBOSE_ENV_VAR = "CFGFILE_VERBOSE"
QUOTE_ENV_VAR = "CFGFILE_QUOTE"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("", "0", "false", "no", "off")


class QuoteStyle(StrEnum):
    """Quote character used when an emitted field needs quoting."""

    SINGLE = "'"
    DOUBLE = '"'

    @property
    def other(self) -> QuoteStyle:
        """The opposite quote kind."""
        return QuoteStyle.DOUBLE if self is QuoteStyle.SINGLE else QuoteStyle.SINGLE


class CfgSettings(BaseModel):
    """
    Options threaded through a parse or emit call.

    Attributes:
        verbose: Trace line classification and lexer state transitions
        quote: Quote style used by the emitter
    """

    verbose: bool = False
    quote: QuoteStyle = QuoteStyle.DOUBLE

    model_config = ConfigDict(frozen=True)


DEFAULT_SETTINGS = CfgSettings()


def settings_from_env() -> CfgSettings:
    """Build settings from CFGFILE_VERBOSE and CFGFILE_QUOTE.

    Unknown values are logged and replaced by the defaults.

    Examples:
        >>> import os
        >>> os.environ["CFGFILE_QUOTE"] = "single"
        >>> settings_from_env().quote
        <QuoteStyle.SINGLE: "'">
    """
    verbose_value = os.environ.get(VERBOSE_ENV_VAR, "").lower().strip()
    if verbose_value in _TRUTHY:
        verbose = True
    elif verbose_value in _FALSY:
        verbose = False
    else:
        logger.warning(
            "Unknown %s value '%s'. Valid values: 1, true, yes, on, 0, false, no, off. "
            "Defaulting to off.",
            VERBOSE_ENV_VAR,
            verbose_value,
        )
        verbose = False

    quote_value = os.environ.get(QUOTE_ENV_VAR, "").lower().strip()
    if quote_value in ("single", "'"):
        quote = QuoteStyle.SINGLE
    elif quote_value in ("double", '"', ""):
        quote = QuoteStyle.DOUBLE
    else:
        logger.warning(
            "Unknown %s value '%s'. Valid values: single, double. Defaulting to double.",
            QUOTE_ENV_VAR,
            quote_value,
        )
        quote = QuoteStyle.DOUBLE

    return CfgSettings(verbose=verbose, quote=quote)

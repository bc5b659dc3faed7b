"""
Declarg faults (errors raised while scanning and validating).

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by the stage that raises them to keep logs and searches
  predictable.
- ParserException: base type that carries a detail message plus read-only
  options (code, title, token, argument, ...); rendering.render_error lays it
  out for the terminal.
- One subclass per error kind so callers can catch precisely what they expect.
- trigger(): central entry point to surface a fault with extra options.

Integration
- The scanner and the validator call trigger(fault, **ctx); the fault is
  raised and travels up to Parser.parse, which turns it into a Failed outcome.
- Actions (post-resolution callbacks) may raise any ParserException
  themselves, or call session.fail(...) which raises a DelegatedError.
"""
import copy
from enum import IntEnum
from types import MappingProxyType

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping
    - scanning (1111x): UNKNOWN_LONG_OPTION, UNKNOWN_SHORT_OPTION, MISSING_VALUE,
      ILLEGAL_GROUPING
    - positionals (1112x): NOT_ENOUGH_POSITIONALS, TOO_MANY_POSITIONALS
    - validation (1113x/1114x): MISSING_REQUIRED, INVALID_CHOICE, OUT_OF_RANGE,
      INVALID_INTEGER, INVALID_FLOAT, INVALID_BOOLEAN
    - delegated (1115x): DELEGATED_ERROR
    """
    # --- scanning errors ---
    UNKNOWN_LONG_OPTION     = 11111
    UNKNOWN_SHORT_OPTION    = 11112
    MISSING_VALUE           = 11113
    ILLEGAL_GROUPING        = 11114

    # --- positional errors ---
    NOT_ENOUGH_POSITIONALS  = 11121
    TOO_MANY_POSITIONALS    = 11122

    # --- validation errors ---
    MISSING_REQUIRED        = 11131
    INVALID_CHOICE          = 11141
    OUT_OF_RANGE            = 11142
    INVALID_INTEGER         = 11143
    INVALID_FLOAT           = 11144
    INVALID_BOOLEAN         = 11145

    # --- delegated errors ---
    DELEGATED_ERROR         = 11151

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserException(Exception):
    """
    base error of the parsing engine.

    attributes
    - message: the detail line shown between the usage line and the help hint.
    - options: read-only mapping of context (code, title, token, argument, ...).
    """
    code = Unset
    title = "parsing error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"code": type(self).code, "title": type(self).title} | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownLongOptionError(ParserException):
    code = FaultCode.UNKNOWN_LONG_OPTION
    title = "unknown option"


class UnknownShortOptionError(ParserException):
    code = FaultCode.UNKNOWN_SHORT_OPTION
    title = "unknown short option"


class MissingValueError(ParserException):
    code = FaultCode.MISSING_VALUE
    title = "missing value"


class IllegalGroupingError(ParserException):
    code = FaultCode.ILLEGAL_GROUPING
    title = "illegal grouping"


class NotEnoughPositionalsError(ParserException):
    code = FaultCode.NOT_ENOUGH_POSITIONALS
    title = "not enough positionals"


class TooManyPositionalsError(ParserException):
    code = FaultCode.TOO_MANY_POSITIONALS
    title = "too many positionals"


class MissingRequiredError(ParserException):
    code = FaultCode.MISSING_REQUIRED
    title = "missing required option"


class InvalidChoiceError(ParserException):
    code = FaultCode.INVALID_CHOICE
    title = "invalid choice"


class OutOfRangeError(ParserException):
    code = FaultCode.OUT_OF_RANGE
    title = "value out of range"


class InvalidIntegerError(ParserException):
    code = FaultCode.INVALID_INTEGER
    title = "invalid integer"


class InvalidFloatError(ParserException):
    code = FaultCode.INVALID_FLOAT
    title = "invalid float"


class InvalidBooleanError(ParserException):
    code = FaultCode.INVALID_BOOLEAN
    title = "invalid boolean"


class DelegatedError(ParserException):
    code = FaultCode.DELEGATED_ERROR
    title = "delegated error"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParserException).
    - options are merged into the fault via copy.replace before triggering.
    - ParserException.__trigger__ raises, so this function never returns for them.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParserException",
    "UnknownLongOptionError",
    "UnknownShortOptionError",
    "MissingValueError",
    "IllegalGroupingError",
    "NotEnoughPositionalsError",
    "TooManyPositionalsError",
    "MissingRequiredError",
    "InvalidChoiceError",
    "OutOfRangeError",
    "InvalidIntegerError",
    "InvalidFloatError",
    "InvalidBooleanError",
    "DelegatedError",
    "trigger",
)

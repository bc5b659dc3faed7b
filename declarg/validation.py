"""
Post-scan validation and conversion.

validate(session) runs once after the scan, over every option and then every
positional, in declaration order. For each specification:

1. defaults: an omitted value-bearing argument takes its default; an omitted
   required option fails; anything else omitted is skipped.
2. value checks: membership in choices, then conversion by type tag
   (int/float/bool) with range checks.
3. action: the bound post-resolution callback, if any.

The first failure aborts the whole parse (no aggregation).

Numeric literals follow the C library conventions:
integers are read like strtol(base=0) (optional sign, 0x hex, leading-0 octal,
decimal) and floats like strtod (decimal, exponent, hex-float, inf, nan). In
both cases the longest valid prefix is converted and trailing text is ignored;
a value with no digits at all is rejected.
"""
import logging
import re

from .arguments import Option
from .faults import *
from .scanner import ParserInterrupt
from .utils import Unset

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"\s*(?P<sign>[+-]?)(?P<digits>0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_FLOAT = re.compile(
    r"""
    \s*
    (?P<literal>
        [+-]?
        (?:
            (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)
          | (?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?
          | inf(?:inity)?
          | nan
        )
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)


def parse_int(raw, /):
    """
    Convert the integer literal at the start of raw; None when there are no digits.

    Examples
    - "42" -> 42, "-0x1f" -> -31, "017" -> 15, "12abc" -> 12, "abc" -> None
    """
    if not (match := _INTEGER.match(raw)):
        return None
    digits = match["digits"]
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if match["sign"] == "-" else value


def parse_float(raw, /):
    """
    Convert the floating-point literal at the start of raw; None when there are no digits.

    Examples
    - "2" -> 2.0, "1e3" -> 1000.0, "0x1p4" -> 16.0, "-inf" -> -inf, "x" -> None
    """
    if not (match := _FLOAT.match(raw)):
        return None
    if match["hex"]:
        return float.fromhex(match["literal"])
    return float(match["literal"])


def label(session, argument, /):
    """
    Name of the argument as shown in messages: --name for options, name for positionals.
    """
    if isinstance(argument, Option):
        return session.config.long_prefix + argument.name
    return argument.name


def _in_bounds(value, bounds, /):
    if bounds is Unset:
        return True
    low, high = bounds
    # written so that NaN never passes a bounded check
    return (low is None or value >= low) and (high is None or value <= high)


def _out_of_range(session, argument, result, number, /):
    low, high = argument.bounds
    minimum = number % low if low is not None else "-inf"
    maximum = number % high if high is not None else "inf"
    trigger(
        OutOfRangeError(
            "Invalid value for option '%s', '%s' is out of range. (min value: %s, max value: %s)"
            % (label(session, argument), result.raw, minimum, maximum)
        ),
        argument=argument,
        value=result.raw,
    )


def _convert(session, argument, result):
    raw = result.raw

    if argument.choices and raw not in argument.choices:
        trigger(
            InvalidChoiceError(
                "Invalid value for option '%s', '%s' is not in '%s'."
                % (label(session, argument), raw, " ".join(argument.choices))
            ),
            argument=argument,
            value=raw,
            choices=argument.choices,
        )

    if argument.type is int:
        if (value := parse_int(raw)) is None:
            trigger(
                InvalidIntegerError(
                    "Invalid value for option '%s', '%s' is not an integer." % (label(session, argument), raw)
                ),
                argument=argument,
                value=raw,
            )
        if not _in_bounds(value, argument.bounds):
            _out_of_range(session, argument, result, "%d")
        result._as_int = value

    elif argument.type is float:
        if (value := parse_float(raw)) is None:
            trigger(
                InvalidFloatError(
                    "Invalid value for option '%s', '%s' is not a float." % (label(session, argument), raw)
                ),
                argument=argument,
                value=raw,
            )
        if not _in_bounds(value, argument.bounds):
            _out_of_range(session, argument, result, "%f")
        result._as_float = value

    elif argument.type is bool:
        truthy = raw in session.config.true_synonyms
        if not truthy and raw not in session.config.false_synonyms:
            trigger(
                InvalidBooleanError(
                    "Invalid value for option %s, '%s' is not a boolean. (accepted: %s %s)" % (
                        label(session, argument),
                        raw,
                        " ".join(session.config.true_synonyms),
                        " ".join(session.config.false_synonyms),
                    )
                ),
                argument=argument,
                value=raw,
            )
        result._as_bool = truthy


def _act(session, argument, result):
    logger.debug("running action of %r", argument.name)
    try:
        argument(session, result)
    except (ParserException, ParserInterrupt):
        raise
    except Exception as exception:
        trigger(
            DelegatedError(
                "Action of option '%s' failed: %s"
                % (label(session, argument), str(exception) or type(exception).__name__)
            ),
            argument=argument,
            exception=exception,
        )


def check(session, argument, /):
    """
    Validate and convert one specification's result in place.
    """
    result = session.result(argument)

    if not result.specified:
        if argument.needs_value and argument.default is not Unset:
            logger.debug("applying default %r to %r", argument.default, argument.name)
            result._specified = True
            result._raw = argument.default
        elif argument.required:
            trigger(
                MissingRequiredError(
                    "Option '%s' is required but you did not specify it." % label(session, argument)
                ),
                argument=argument,
            )
        else:
            return

    if argument.needs_value:
        _convert(session, argument, result)

    if argument.action is not Unset:
        _act(session, argument, result)


def validate(session, /):
    """
    Run check() over options then positionals, in declaration order.
    """
    for argument in (*session.options, *session.positionals):
        check(session, argument)


__all__ = (
    "parse_int",
    "parse_float",
    "label",
    "check",
    "validate",
)

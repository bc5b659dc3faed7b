"""
Declarg parser layer: tie specifications, configuration and the engine together.

What this module provides
- Parser: owns the option and positional tables plus a Config, and offers
  • parse(argv): pure parsing; returns a tagged outcome (Parsed, HelpRequested,
    AttributionRequested or Failed) without printing or exiting.
  • __invoke__(argv): the boundary adapter; prints help/errors on the right
    stream and exits with the conventional status, or returns the Results.
- invoke(parser, argv): convenience runner around __invoke__.
- parse_arguments(argv, options, positionals, **config): one-call helper for
  scripts that do not need to keep a Parser around.
- discard_extra_values(value, context): extra-value handler that ignores extras.

Quick start
    from declarg import Option, Positional, parse_arguments

    results = parse_arguments(
        None,
        [Option("int", "Values are considered as int.", "i")],
        [
            Positional("operation", "Operation.", choices="add sub mult div"),
            Positional("left-value", "Left operand", type=float),
            Positional("right-value", "Right operand", type=float),
        ],
        description="Calculate the result of a binary operation.",
        required_positionals=3,
    )
    print(results["left-value"].as_float)

Argument vector convention
- argv[0] is the program name and is not scanned, unless Config.program_name
  is set, in which case argv[0] is scanned like every other token.
"""
import functools
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable

from .arguments import Option, Positional
from .config import Config
from .faults import ParserException
from .outcomes import *
from .rendering import *
from .scanner import Session, HelpInterrupt, AttributionInterrupt
from .utils import *
from .validation import validate

logger = logging.getLogger(__name__)


def _resolve(kind, object, /):
    """
    Internal: return the spec behind a table entry.

    Entries are either specs of the expected kind or objects exposing the
    matching hook (__option__ for options, __positional__ for positionals).
    """
    if isinstance(object, kind):
        return object

    hook = f"__{kind.__typename__}__"
    if not hasattr(object, hook) or not callable(getattr(object, hook)):
        raise TypeError(f"parser {kind.__typename__}s must be an iterable of {kind.__typename__}s")
    argument = getattr(object, hook)()
    if not isinstance(argument, kind):
        raise TypeError(f"{hook}() non-{kind.__typename__} returned")
    return argument


def _sanitize_table(kind, table, /):
    """
    Internal: validate a specification table and return it as a tuple.

    Raises
    - TypeError: when an entry neither is nor resolves to a spec of the expected kind.
    - ValueError: on duplicate names (and duplicate short aliases for options).
    """
    if isinstance(table, Option | Positional) or not isinstance(table, Iterable):
        raise TypeError(f"parser {kind.__typename__}s must be an iterable of {kind.__typename__}s")

    table = tuple(map(functools.partial(_resolve, kind), table))
    names = set()
    shorts = set()
    for argument in table:
        if argument.name in names:
            raise ValueError(f"parser {kind.__typename__} name {argument.name!r} is already in use")
        names.add(argument.name)
        if getattr(argument, "short", Unset):
            if argument.short in shorts:
                raise ValueError(f"parser {kind.__typename__} short alias {argument.short!r} is already in use")
            shorts.add(argument.short)
    return table


def _tokens(argv, /):
    """
    Normalize the argv parameter into a list of strings.

    - None / Unset: sys.argv
    - str: shell-like string, split with shlex.split
    - Iterable[str]: used as-is (each element must be a string)
    """
    if argv is None or argv is Unset:
        return list(sys.argv)
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Parser:
    """
    Declarative command-line parser.

    Responsibilities
    - Hold the specification tables (options and positionals, independent
      namespaces) and the configuration; both are read-only after construction.
    - Run one parse per call on a fresh Session: scan, check the positional
      count, validate, and package the outcome.
    - Render help, errors and the attribution notice through the rendering module.

    Construction
    - Parser(options, positionals, config) or Parser(options, positionals, **config)
      where **config are the Config keyword arguments.
    """

    options = mirror("options")
    positionals = mirror("positionals")
    config = mirror("config")

    def __init__(self, options=(), positionals=(), config=Unset, /, **settings):
        if config is not Unset and settings:
            raise TypeError("parser takes either a config or config keyword arguments, not both")
        if config is Unset:
            config = Config(**settings)
        elif not isinstance(config, Config):
            raise TypeError("parser 'config' must be a config")

        self._options = _sanitize_table(Option, options)
        self._positionals = _sanitize_table(Positional, positionals)
        self._config = config

    def session(self, argv=Unset, /):
        """
        Create the Session for one parse over argv.
        """
        tokens = _tokens(argv)
        if self._config.program_name is not None:
            program = self._config.program_name
        elif tokens:
            program = tokens.pop(0)
        else:
            program = os.path.basename(sys.argv[0])
        return Session(self._config, self._options, self._positionals, tokens, program=program)

    def parse(self, argv=Unset, /):
        """
        Parse argv and return a tagged outcome; never prints, never exits.
        """
        session = self.session(argv)
        logger.debug("parsing %d token(s) for %r", len(session.tokens), session.program)
        try:
            session.scan()
            validate(session)
        except HelpInterrupt:
            return HelpRequested(render_help(session))
        except AttributionInterrupt:
            return AttributionRequested(render_attribution(session))
        except ParserException as fault:
            logger.debug("parse failed: %s", fault)
            return Failed(fault, render_error(session, fault))
        return Parsed(session.freeze())

    def help(self, argv=Unset, /):
        """
        Return the help text as a rich Text (program name taken from argv).
        """
        return render_help(self.session(argv))

    def usage(self, argv=Unset, /):
        return render_usage(self.session(argv))

    def __invoke__(self, argv=Unset, /):
        """
        Parse argv; print and exit on help, attribution or failure.

        Behavior
        - Parsed: return its Results.
        - HelpRequested / AttributionRequested: print to stdout, exit status 0.
        - Failed: print the error report to stderr, exit status 1.
        """
        outcome = self.parse(argv)
        if not outcome.terminal:
            return outcome.results
        emit(outcome.text, stderr=outcome.stderr)
        sys.exit(outcome.status)

    def __repr__(self):
        return "parser(options=%r, positionals=%r, config=%r)" % (
            self._options, self._positionals, self._config
        )


def invoke(parser, argv=Unset, /):
    """
    Convenience runner: call parser.__invoke__(argv).

    Raises
    - TypeError: when the object does not implement __invoke__.
    """
    if hasattr(parser, "__invoke__") and callable(parser.__invoke__):
        return parser.__invoke__(argv)
    raise TypeError("invoke() first argument must implement __invoke__ method") from None


def parse_arguments(argv, options=(), positionals=(), /, **config):
    """
    Build a Parser and invoke it once; return the Results or exit.
    """
    return invoke(Parser(options, positionals, **config), coalesce(argv, None))


def discard_extra_values(value, context, /):
    """
    Extra-value handler that silently ignores extra positional values.
    """


__all__ = (
    "Parser",
    "invoke",
    "parse_arguments",
    "discard_extra_values",
)

"""
Parse results.

Result holds what the engine resolved for one specification; Results is the
keyed collection handed back to the caller once a parse succeeds. Both are
written only by the engine during a parse and exposed through read-only
properties afterwards.
"""
from types import MappingProxyType

from .arguments import Option, Positional
from .utils import *


class Result:
    """
    Outcome of scanning and validation for a single specification.

    Properties
    - argument: the Option or Positional this result belongs to.
    - specified: True when given on the command line or filled by a default.
    - raw: the raw text ("" for a specified option without value, None when
      not specified).
    - as_int / as_float / as_bool: typed value for the declared type only,
      None otherwise.
    - value: typed value when a type is declared, else raw.
    """

    argument = mirror("argument")
    specified = mirror("specified")
    raw = mirror("raw")
    as_int = mirror("as_int")
    as_float = mirror("as_float")
    as_bool = mirror("as_bool")

    def __init__(self, argument, /):
        if not isinstance(argument, Option | Positional):
            raise TypeError("result argument must be an option or a positional")
        self._argument = argument
        self._specified = False
        self._raw = None
        self._as_int = None
        self._as_float = None
        self._as_bool = None

    @property
    def name(self):
        return self._argument.name

    @property
    def value(self):
        return {
            int: self._as_int,
            float: self._as_float,
            bool: self._as_bool,
        }.get(self._argument.type, self._raw)

    def __bool__(self):
        return self._specified

    def __repr__(self):
        return "result(name=%r, specified=%r, raw=%r, value=%r)" % (self.name, self.specified, self.raw, self.value)

    def __rich_repr__(self):
        yield "name", self.name
        yield "specified", self.specified
        yield "raw", self.raw
        yield "value", self.value


class Results:
    """
    Name-to-result mapping returned by a successful parse.

    Options and positionals live in independent namespaces, available through
    the `options` and `positionals` views. Indexing the Results directly looks
    up options first, then positionals.

    Extra attributes
    - extras: tuple of extra values forwarded to the configured extra handler.
    - remaining: tokens left unconsumed when stop-at-last-positional ended the scan.
    """

    def __init__(self, options, positionals, /, extras=(), remaining=()):
        self._options = MappingProxyType(dict(options))
        self._positionals = MappingProxyType(dict(positionals))
        self._extras = tuple(extras)
        self._remaining = tuple(remaining)

    @property
    def options(self):
        return self._options

    @property
    def positionals(self):
        return self._positionals

    @property
    def extras(self):
        return self._extras

    @property
    def remaining(self):
        return self._remaining

    def __getitem__(self, name, /):
        try:
            return self._options[name]
        except KeyError:
            pass
        try:
            return self._positionals[name]
        except KeyError:
            raise KeyError(name) from None

    def __contains__(self, name, /):
        return name in self._options or name in self._positionals

    def __iter__(self):
        yield from self._options
        yield from (name for name in self._positionals if name not in self._options)

    def __len__(self):
        return sum(1 for _ in self)

    def get(self, name, default=None, /):
        try:
            return self[name]
        except KeyError:
            return default

    def __repr__(self):
        return "results(options=%r, positionals=%r, extras=%r, remaining=%r)" % (
            dict(self._options), dict(self._positionals), self._extras, self._remaining
        )


__all__ = (
    "Result",
    "Results",
)

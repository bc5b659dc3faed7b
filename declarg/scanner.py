"""
Token scanner/matcher and positional assigner.

A Session walks the argument vector once, left to right. At each cursor
position the current token is classified, in this order:

1. the no-more-options marker (disables option recognition for good),
2. a long option (--name [value]),
3. a cluster of short options (-xyz, -Lvalue, -L value),
4. anything else: a plain value routed to the next positional slot, or to the
   extra-value handler once every slot is filled.

Faults are raised through trigger() and end the scan immediately. Help and
attribution requests unwind through HelpInterrupt/AttributionInterrupt, which
the Parser turns into the matching outcome.
"""
import logging
from types import MappingProxyType

from .faults import *
from .results import Result, Results

logger = logging.getLogger(__name__)

# Long name of the always-available attribution option.
ATTRIBUTION = "declarg"
# Long name and short code of the help option (unless help is suppressed).
HELP = "help"
HELP_CODE = "h"


class ParserInterrupt(Exception):
    """
    internal control flow: the scan stops without a fault.
    """


class HelpInterrupt(ParserInterrupt):
    pass


class AttributionInterrupt(ParserInterrupt):
    pass


class Session:
    """
    Transient state of one parse call.

    Holds the resolved configuration, the ordered specification tables, the
    token list with its cursor, the number of positional slots filled so far,
    the no-more-options flag and one Result per specification. A Session is
    created by Parser.parse and discarded when the call returns.

    Actions receive the session as their first argument; session.fail(...) is
    the way for them to abort the parse with a custom message.
    """

    def __init__(self, config, options, positionals, tokens, /, *, program=""):
        self.config = config
        self.options = tuple(options)
        self.positionals = tuple(positionals)
        self.tokens = tuple(tokens)
        self.program = program
        self.index = 0
        self.filled = 0
        self.terminated = False
        self.extras = []
        self.remaining = ()
        self._results = {argument: Result(argument) for argument in (*self.options, *self.positionals)}
        self._longs = {option.name: option for option in self.options}
        self._shorts = {option.short: option for option in self.options if option.short}

    @property
    def results(self):
        """
        Read-only view of the results, keyed by specification.
        """
        return MappingProxyType(self._results)

    def result(self, argument, /):
        return self._results[argument]

    def freeze(self):
        """
        Build the Results handed to the caller.
        """
        return Results(
            {option.name: self._results[option] for option in self.options},
            {positional.name: self._results[positional] for positional in self.positionals},
            self.extras,
            self.remaining,
        )

    def fail(self, message, /, **options):
        """
        Abort the parse with a caller-defined message (for actions).
        """
        trigger(DelegatedError(message), **options)

    def _specify(self, argument, value):
        result = self._results[argument]
        result._specified = True
        result._raw = value

    def _value(self, token):
        """
        Return the token after the cursor, the value of a spaced option.
        """
        try:
            return self.tokens[self.index + 1]
        except IndexError:
            trigger(
                MissingValueError("No value provided for option: %s" % token),
                token=token,
                index=self.index,
            )

    def _match_long(self, token):
        """
        Try to read the token as a long option; return the tokens consumed.
        """
        prefix = self.config.long_prefix
        if not prefix or not token.startswith(prefix):
            return 0
        name = token[len(prefix):]

        if name == ATTRIBUTION:
            raise AttributionInterrupt
        if not self.config.no_help and name == HELP:
            raise HelpInterrupt

        try:
            option = self._longs[name]
        except KeyError:
            # with identical prefixes the token may still be a short cluster
            if prefix == self.config.short_prefix:
                return 0
            trigger(UnknownLongOptionError("Unknown option: %s" % token), token=token, index=self.index)

        if option.needs_value:
            self._specify(option, self._value(token))
            logger.debug("matched long option %r with value at %d", option.name, self.index)
            return 2
        self._specify(option, "")
        logger.debug("matched long option %r at %d", option.name, self.index)
        return 1

    def _match_short(self, token):
        """
        Try to read the token as a cluster of short options; return the tokens consumed.
        """
        prefix = self.config.short_prefix
        if not prefix or not token.startswith(prefix) or token == prefix:
            return 0
        cluster = token[len(prefix):]

        grouped = False
        while cluster:
            code, cluster = cluster[0], cluster[1:]
            if not self.config.no_help and code == HELP_CODE:
                raise HelpInterrupt

            try:
                option = self._shorts[code]
            except KeyError:
                trigger(
                    UnknownShortOptionError("Unknown option: %s%s in %s" % (prefix, code, token)),
                    token=token,
                    index=self.index,
                )

            if not option.needs_value:
                self._specify(option, "")
                grouped = True
                continue

            if grouped:
                trigger(
                    IllegalGroupingError(
                        "%s%s requires a value, so it cannot be used in group, but you entered: %s"
                        % (prefix, code, token)
                    ),
                    token=token,
                    index=self.index,
                    argument=option,
                )
            if cluster:
                # attached value: -L5
                self._specify(option, cluster)
                return 1
            self._specify(option, self._value(token))
            return 2
        return 1

    def _assign(self, token):
        """
        Route a plain token to the next positional slot or to the extra-value handler.

        Returns True when the scan must stop (stop-at-last-positional reached).
        """
        if self.filled < len(self.positionals):
            self._specify(argument := self.positionals[self.filled], token)
            logger.debug("assigned %r to positional %r", token, argument.name)
        elif self.config.extra is None:
            trigger(
                TooManyPositionalsError(
                    "Only %d positional arguments are accepted, but you gave '%s'"
                    % (len(self.positionals), token)
                ),
                token=token,
                index=self.index,
            )
        else:
            logger.debug("forwarding extra value %r", token)
            self.config.extra(token, self.config.context)
            self.extras.append(token)

        self.filled += 1
        return self.config.stop_at_last_positional and self.filled == len(self.positionals)

    def match(self, token):
        """
        Classify the token at the cursor; return the tokens consumed (0: plain value).
        """
        if self.terminated:
            return 0
        if self.config.marker and token == self.config.marker:
            self.terminated = True
            logger.debug("no-more-options marker at %d", self.index)
            return 1
        return self._match_long(token) or self._match_short(token)

    def scan(self):
        """
        Consume the whole token list (or up to the last positional in stop mode).
        """
        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            if consumed := self.match(token):
                self.index += consumed
                continue
            self.index += 1
            if self._assign(token):
                self.remaining = self.tokens[self.index:]
                logger.debug("stopped at last positional, %d token(s) left", len(self.remaining))
                break

        if self.filled < self.config.required_positionals:
            trigger(NotEnoughPositionalsError(
                "At least %d positional arguments are required, but you gave %d arguments."
                % (self.config.required_positionals, self.filled)
            ))


__all__ = (
    "Session",
    "ParserInterrupt",
    "HelpInterrupt",
    "AttributionInterrupt",
    "ATTRIBUTION",
    "HELP",
    "HELP_CODE",
)

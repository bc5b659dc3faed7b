"""
Scanner tests (token classification, clustering, positional assignment).

Scope
- Long options, with and without values.
- Short option clusters, attached and spaced values, illegal grouping.
- No-more-options marker and disabled prefixes.
- Positional overflow, extra-value handler and stop-at-last-positional mode.
- Reserved help and attribution options.

Conventions
- Test method names follow CamelCase per project convention.
- Each test builds a Parser and scans through its Session directly.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from declarg import Parser, Option, Positional
from declarg.faults import (
    UnknownLongOptionError,
    UnknownShortOptionError,
    MissingValueError,
    IllegalGroupingError,
    NotEnoughPositionalsError,
    TooManyPositionalsError,
)
from declarg.scanner import HelpInterrupt, AttributionInterrupt


def make(positionals=(), /, **config):
    return Parser(
        [
            Option("verbose", "Verbose output.", "v"),
            Option("quiet", "Quiet output.", "q"),
            Option("max-depth", "Nesting limit.", "L", type=int),
            Option("name", "A name.", needs_value=True),
        ],
        positionals,
        **config,
    )


def scan(parser, argv):
    session = parser.session(argv)
    session.scan()
    return session


def specified(session):
    return {result.name: result.raw for result in session.results.values() if result.specified}


class TestLongOptions(TestCase):

    def testFlag(self):
        session = scan(make(), "prog --verbose")
        self.assertEqual(specified(session), {"verbose": ""})

    def testValueFromNextToken(self):
        session = scan(make(), "prog --name Bob --max-depth 3")
        self.assertEqual(specified(session), {"name": "Bob", "max-depth": "3"})

    def testValueMayLookLikeAnOption(self):
        session = scan(make(), "prog --name --verbose")
        self.assertEqual(specified(session), {"name": "--verbose"})

    def testMissingValue(self):
        with self.assertRaises(MissingValueError) as context:
            scan(make(), "prog --name")
        self.assertEqual(str(context.exception), "No value provided for option: --name")

    def testUnknownLongOption(self):
        with self.assertRaises(UnknownLongOptionError) as context:
            scan(make(), "prog --nope")
        self.assertEqual(str(context.exception), "Unknown option: --nope")
        self.assertEqual(context.exception.options["token"], "--nope")

    def testLastOccurrenceWins(self):
        session = scan(make(), "prog --name a --name b")
        self.assertEqual(specified(session), {"name": "b"})


class TestShortClusters(TestCase):

    def testClusterEqualsSeparateFlags(self):
        self.assertEqual(
            specified(scan(make(), "prog -vq")),
            specified(scan(make(), "prog -v -q")),
        )

    def testAttachedValue(self):
        self.assertEqual(specified(scan(make(), "prog -L5")), {"max-depth": "5"})

    def testSpacedValue(self):
        self.assertEqual(specified(scan(make(), "prog -L 5")), {"max-depth": "5"})

    def testAttachedValueEndsCluster(self):
        self.assertEqual(specified(scan(make(), "prog -Lvq")), {"max-depth": "vq"})

    def testValueOptionAfterFlagIsIllegalGrouping(self):
        with self.assertRaises(IllegalGroupingError) as context:
            scan(make(), "prog -vL5")
        self.assertEqual(
            str(context.exception),
            "-L requires a value, so it cannot be used in group, but you entered: -vL5",
        )

    def testMissingShortValue(self):
        with self.assertRaises(MissingValueError) as context:
            scan(make(), "prog -L")
        self.assertEqual(str(context.exception), "No value provided for option: -L")

    def testUnknownShortOption(self):
        with self.assertRaises(UnknownShortOptionError) as context:
            scan(make(), "prog -vx")
        self.assertEqual(str(context.exception), "Unknown option: -x in -vx")

    def testBarePrefixIsAValue(self):
        session = scan(make([Positional("file")]), "prog -")
        self.assertEqual(specified(session), {"file": "-"})


class TestMarker(TestCase):

    def testMarkerDisablesOptions(self):
        session = scan(make([Positional("a"), Positional("b")]), "prog -- -v --")
        self.assertEqual(specified(session), {"a": "-v", "b": "--"})
        self.assertTrue(session.terminated)

    def testCustomMarker(self):
        session = scan(make([Positional("a")], marker="++"), "prog ++ --verbose")
        self.assertEqual(specified(session), {"a": "--verbose"})

    def testEmptyMarkerDisablesIt(self):
        with self.assertRaises(UnknownLongOptionError) as context:
            scan(make(marker=""), "prog --")
        self.assertEqual(str(context.exception), "Unknown option: --")


class TestPrefixes(TestCase):

    def testDisabledShortPrefix(self):
        session = scan(make([Positional("a")], short_prefix=""), "prog -v")
        self.assertEqual(specified(session), {"a": "-v"})

    def testDisabledLongPrefix(self):
        session = scan(make([Positional("a")], long_prefix=""), "prog verbose -q")
        self.assertEqual(specified(session), {"a": "verbose", "quiet": ""})

    def testCustomPrefixes(self):
        session = scan(make(short_prefix="/", long_prefix="//"), "prog //verbose /L3")
        self.assertEqual(specified(session), {"verbose": "", "max-depth": "3"})

    def testIdenticalPrefixesFallBackToCluster(self):
        parser = make(short_prefix="-", long_prefix="-", marker="")
        self.assertEqual(specified(scan(parser, "prog -verbose")), {"verbose": ""})
        self.assertEqual(specified(scan(parser, "prog -vq")), {"verbose": "", "quiet": ""})
        with self.assertRaises(UnknownShortOptionError):
            scan(parser, "prog -nope")


class TestPositionals(TestCase):

    def testAssignedInOrder(self):
        session = scan(make([Positional("a"), Positional("b")]), "prog x -v y")
        self.assertEqual(specified(session), {"a": "x", "b": "y", "verbose": ""})
        self.assertEqual(session.filled, 2)

    def testOverflowWithoutHandler(self):
        with self.assertRaises(TooManyPositionalsError) as context:
            scan(make([Positional("a")]), "prog x y")
        self.assertEqual(str(context.exception), "Only 1 positional arguments are accepted, but you gave 'y'")

    def testOverflowWithHandler(self):
        received = []
        parser = make(
            [Positional("a")],
            extra=lambda value, context: received.append((value, context)),
            context="ctx",
        )
        session = scan(parser, "prog x y z")
        self.assertEqual(received, [("y", "ctx"), ("z", "ctx")])
        self.assertEqual(session.extras, ["y", "z"])
        self.assertEqual(session.filled, 3)

    def testNotEnoughPositionals(self):
        with self.assertRaises(NotEnoughPositionalsError) as context:
            scan(make([Positional("a"), Positional("b")], required_positionals=2), "prog x")
        self.assertEqual(
            str(context.exception),
            "At least 2 positional arguments are required, but you gave 1 arguments.",
        )

    def testStopAtLastPositional(self):
        parser = make([Positional("command")], stop_at_last_positional=True)
        session = scan(parser, "prog -q run -v --nope x")
        self.assertEqual(specified(session), {"quiet": "", "command": "run"})
        self.assertEqual(session.remaining, ("-v", "--nope", "x"))

    def testStopModeWithoutPositionalsScansEverything(self):
        session = scan(make(stop_at_last_positional=True, extra=lambda value, context: None), "prog a -v")
        self.assertEqual(session.extras, ["a"])
        self.assertEqual(session.remaining, ())


class TestReservedOptions(TestCase):

    def testLongHelp(self):
        with self.assertRaises(HelpInterrupt):
            scan(make(), "prog --help")

    def testShortHelpInsideCluster(self):
        with self.assertRaises(HelpInterrupt):
            scan(make(), "prog -vh")

    def testHelpStopsBeforeLaterFaults(self):
        with self.assertRaises(HelpInterrupt):
            scan(make(), "prog --help --nope")

    def testSuppressedHelp(self):
        with self.assertRaises(UnknownLongOptionError):
            scan(make(no_help=True), "prog --help")
        with self.assertRaises(UnknownShortOptionError) as context:
            scan(make(no_help=True), "prog -h")
        self.assertEqual(str(context.exception), "Unknown option: -h in -h")

    def testAttributionIgnoresHelpSuppression(self):
        with self.assertRaises(AttributionInterrupt):
            scan(make(no_help=True), "prog --declarg")


if __name__ == "__main__":
    unittest.main()

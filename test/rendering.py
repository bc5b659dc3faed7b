"""
Rendering tests (usage, help, error and attribution layouts).

Scope
- Byte-exact layouts for a fixed table and configuration.
- Idempotence of help rendering.
- Colors never change the plain text.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from declarg import Parser, Option, Positional
from declarg.rendering import (
    NOTICE,
    render_usage,
    render_help,
    render_error,
    render_attribution,
)


def copier(**config):
    return Parser(
        [
            Option("verbose", "Verbose output.", "v"),
            Option("level", "Level.", required=True, type=int),
        ],
        [
            Positional("src", "Source."),
            Positional("dst", "Destination."),
        ],
        **{"required_positionals": 1, **config},
    )


USAGE = "USAGE: cp [--verbose|-v] --level ... [--] <src> [dst] \n"


class TestUsage(TestCase):

    def testUsageLine(self):
        self.assertEqual(copier().usage("cp").plain, USAGE)

    def testNoMarker(self):
        self.assertEqual(
            copier(marker="").usage("cp").plain,
            "USAGE: cp [--verbose|-v] --level ... <src> [dst] \n",
        )

    def testShortAliasHiddenWithoutShortPrefix(self):
        self.assertEqual(
            copier(short_prefix="").usage("cp").plain,
            "USAGE: cp [--verbose] --level ... [--] <src> [dst] \n",
        )

    def testCustomUsage(self):
        self.assertEqual(copier(usage="cp [options] SRC [DST]").usage("cp").plain, "USAGE: cp [options] SRC [DST]\n")

    def testProgramNameFromConfig(self):
        self.assertTrue(copier(program_name="copy").usage([]).plain.startswith("USAGE: copy [--verbose|-v]"))

    def testEmptyTables(self):
        self.assertEqual(Parser().usage("prog").plain, "USAGE: prog [--] \n")


class TestHelp(TestCase):

    def testHelpLayout(self):
        parser = copier(description="Copy things.", epilog="Bye.")
        expected = (
            "Copy things.\n"
            + USAGE
            + "\n  Positional Arguments:\n"
            + "    <src>" + " " * 21 + "Source.\n"
            + "    [dst]" + " " * 21 + "Destination.\n"
            + "\n  Options:\n"
            + "    --declarg" + " " * 17 + "License attribution for the declarg library.\n"
            + "    --help" + " " * 20 + "Show this message.\n"
            + "    [--verbose|-v]" + " " * 12 + "Verbose output.\n"
            + "    --level ..." + " " * 15 + "Level.\n"
            + "Bye.\n"
        )
        self.assertEqual(parser.help("cp").plain, expected)

    def testSuppressedHelpEntry(self):
        text = copier(no_help=True).help("cp").plain
        self.assertNotIn("--help", text)
        self.assertIn("--declarg", text)

    def testLongEntriesKeepOneSpace(self):
        parser = Parser([Option("a-really-long-option-name", "Long.", "x", type=int)])
        self.assertIn("    [--a-really-long-option-name|-x ...] Long.\n", parser.help("prog").plain)

    def testHelpTextsShareOneColumn(self):
        lines = copier().help("cp").plain.splitlines()
        columns = {
            line.index(help)
            for line in lines
            for help in ("Source.", "Destination.", "Show this message.", "Verbose output.", "Level.")
            if line.endswith(help)
        }
        self.assertEqual(columns, {30})

    def testLongPositionalKeepsBothSeparators(self):
        parser = Parser([], [Positional("a-really-long-positional-name", "Long.")])
        self.assertIn("    [a-really-long-positional-name]  Long.\n", parser.help("prog").plain)

    def testHelpIsIdempotent(self):
        parser = copier(description="Copy things.")
        self.assertEqual(parser.help("cp").plain, parser.help("cp").plain)

    def testColorsKeepPlainText(self):
        self.assertEqual(copier(colorful=True).help("cp").plain, copier().help("cp").plain)
        self.assertTrue(copier(colorful=True).help("cp").spans)

    def testHelpOutcome(self):
        parser = copier()
        outcome = parser.parse("cp --help")
        self.assertEqual(outcome.text.plain, parser.help("cp").plain)
        self.assertEqual(outcome.status, 0)
        self.assertFalse(outcome.stderr)


class TestError(TestCase):

    def testErrorLayout(self):
        outcome = copier().parse("cp --level 1")
        self.assertEqual(
            outcome.text.plain,
            "ERROR!\n"
            + USAGE
            + "At least 1 positional arguments are required, but you gave 0 arguments.\n"
            + "Type 'cp --help' for more information.\n",
        )
        self.assertEqual(outcome.status, 1)
        self.assertTrue(outcome.stderr)

    def testErrorWithoutHint(self):
        outcome = copier(no_help=True).parse("cp a")
        self.assertEqual(
            outcome.text.plain,
            "ERROR!\n" + USAGE + "Option '--level' is required but you did not specify it.\n",
        )

    def testHintUsesLongPrefix(self):
        outcome = copier(long_prefix="++").parse("cp ++nope")
        self.assertTrue(outcome.text.plain.endswith("Unknown option: ++nope\nType 'cp ++help' for more information.\n"))


class TestAttribution(TestCase):

    def testNotice(self):
        outcome = copier(no_help=True).parse("cp --declarg")
        self.assertEqual(outcome.text.plain, "\n".join(NOTICE) + "\n")
        self.assertEqual(outcome.status, 0)


class TestRenderers(TestCase):

    def testRenderersShareTheSession(self):
        session = copier().session("cp")
        self.assertEqual(render_usage(session).plain, USAGE)
        self.assertTrue(render_help(session).plain.startswith(USAGE))
        self.assertEqual(render_attribution(session).plain, "\n".join(NOTICE) + "\n")
        self.assertTrue(render_error(session, ValueError("bad")).plain.startswith("ERROR!\n" + USAGE + "bad\n"))


if __name__ == "__main__":
    unittest.main()

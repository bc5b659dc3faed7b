"""
Help, usage, error and attribution rendering.

Every renderer takes the parsing session (configuration, specification tables
and program name) and returns a rich Text. The layout is fixed and must stay
byte-identical for a given table and configuration; styling is only layered on
top when the configuration enables colors, so Text.plain is always the exact
output.

Layout
- usage:    "USAGE: prog [--name|-n ...] --req [--] <pos> [opt] \\n"
- help:     description, usage, "Positional Arguments" and "Options" sections
            with help texts aligned on a fixed column, epilog.
- error:    "ERROR!", usage, detail message, rerun-with-help hint.

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .scanner import ATTRIBUTION, HELP

# Column at which help texts start, counted from the entry decoration.
PADDING = 25

NOTICE = (
    "Copyright (c) 2026 The declarg authors",
    "This program uses declarg, a MIT-licensed Python library, for its command-line interface.",
    "declarg is distributed under the terms of the MIT License.",
)


def _palette(session):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",
        "epilog-section": "#737373",

        # === Sections / arguments ===
        "group-label": "bold #FFFFFF",
        "argument-description": "#9CA3AF",
        "option-name": "bold #00E6FF",
        "positional-name": "bold #FFD600",
        "metavar": "bold #FFD600",

        # === Errors ===
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
        "hint": "italic #9CE19C",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if session.config.colorful else ""

    return styler


def _option(session, option, styler):
    """
    Decorated option entry: [--name|-n ...] (no brackets when required).
    """
    config = session.config
    entry = Text()
    if not option.required:
        entry.append("[")
    entry.append(config.long_prefix + option.name, styler("option-name"))
    if config.short_prefix and option.short:
        entry.append("|").append(config.short_prefix + option.short, styler("option-name"))
    if option.needs_value:
        entry.append(" ").append("...", styler("metavar"))
    if not option.required:
        entry.append("]")
    return entry


def _positional(session, index, positional, styler):
    """
    Decorated positional entry: <name> within the required count, [name] beyond.
    """
    name = Text(positional.name, styler("positional-name"))
    if index < session.config.required_positionals:
        return Text.assemble("<", name, ">")
    return Text.assemble("[", name, "]")


def render_usage(session, /):
    """
    Return the usage line, terminated by a newline.
    """
    styler = _palette(session)
    config = session.config

    usage = Text()
    usage.append("USAGE:", styler("usage-label")).append(" ")

    if config.usage is not None:
        return usage.append(config.usage).append("\n")

    usage.append(session.program, styler("program-name")).append(" ")
    for option in session.options:
        usage.append(_option(session, option, styler)).append(" ")
    if config.marker:
        usage.append("[%s] " % config.marker)
    for index, positional in enumerate(session.positionals):
        usage.append(_positional(session, index, positional, styler)).append(" ")
    return usage.append("\n")


def _entry(entry, width, help, styler):
    return Text.assemble(
        "    ",
        entry,
        " " * max(width, 0),
        " ",
        Text(help, styler("argument-description")),
        "\n",
    )


def render_help(session, /):
    """
    Return the full help text: description, usage, argument sections and epilog.
    """
    styler = _palette(session)
    config = session.config
    renders = Text()

    if config.description is not None:
        renders.append(config.description, styler("description-section")).append("\n")

    renders.append(render_usage(session))

    renders.append("\n  ").append("Positional Arguments:", styler("group-label")).append("\n")
    for index, positional in enumerate(session.positionals):
        entry = _positional(session, index, positional, styler)
        # one separator after the bracketed name, then padding counted without the brackets
        renders.append(_entry(
            Text.assemble(entry, " "), PADDING - 3 - len(positional.name), positional.help, styler
        ))

    renders.append("\n  ").append("Options:", styler("group-label")).append("\n")
    attribution = Text(config.long_prefix + ATTRIBUTION, styler("option-name"))
    renders.append(_entry(
        attribution, PADDING - len(attribution), "License attribution for the declarg library.", styler
    ))
    if not config.no_help:
        helper = Text(config.long_prefix + HELP, styler("option-name"))
        renders.append(_entry(helper, PADDING - len(helper), "Show this message.", styler))
    for option in session.options:
        entry = _option(session, option, styler)
        renders.append(_entry(entry, PADDING - len(entry), option.help, styler))

    if config.epilog is not None:
        renders.append(config.epilog, styler("epilog-section")).append("\n")

    return renders


def render_error(session, fault, /):
    """
    Return the canonical error report for a fault.
    """
    styler = _palette(session)
    config = session.config

    report = Text()
    report.append("ERROR!", styler("error-title")).append("\n")
    report.append(render_usage(session))
    report.append(str(fault), styler("error-message"))
    if not config.no_help:
        report.append("\n").append(
            "Type '%s %s%s' for more information." % (session.program, config.long_prefix, HELP),
            styler("hint"),
        )
    return report.append("\n")


def render_attribution(session, /):
    """
    Return the fixed attribution notice of the library.
    """
    styler = _palette(session)
    return Text("\n".join(NOTICE) + "\n", styler("description-section"))


def emit(text, /, *, stderr=False):
    """
    Print a rendered Text exactly as built (no wrapping, no highlighting).
    """
    Console(stderr=stderr, highlight=False).print(text, end="", soft_wrap=True)


__all__ = (
    "PADDING",
    "NOTICE",
    "render_usage",
    "render_help",
    "render_error",
    "render_attribution",
    "emit",
)

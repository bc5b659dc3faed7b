"""
Iterate recursively over a directory and print its files.

Demonstrates typed options with bounds and defaults, a boolean option and a
positional whose action checks that it names an existing directory.
"""
import os
import os.path

from rich.console import Console

from declarg import *

console = Console(highlight=False)


@positional("root", "Root directory to be iterated over.", default=".")
def root(session, result):
    if not os.path.isdir(result.raw):
        session.fail("Invalid value for option '%s': '%s' is not a path to a directory." % (result.name, result.raw))


parser = Parser(
    [
        Option("follow-symlink", "Follow symbolic links for directories.", type=bool, default="false"),
        Option("full-path", "Print full path.", "f"),
        Option("max-depth", "How much the iteration can be nested.", "L", type=int, bounds=(1, 50), default="5"),
    ],
    [root],
    description="Iterate recursively over a directory and print its files.",
)


def walk(directory, depth, *, limit, follow, full, base):
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        folder = entry.is_dir(follow_symlinks=follow)
        shown = entry.path if full else os.path.relpath(entry.path, base)
        console.print("    " * depth + "  - " + shown + ("/" if folder else ""))
        if folder and depth + 1 < limit:
            walk(entry.path, depth + 1, limit=limit, follow=follow, full=full, base=base)


if __name__ == '__main__':
    results = invoke(parser)
    base = os.path.normpath(os.path.abspath(results["root"].raw))
    console.print(base)
    walk(
        base,
        0,
        limit=results["max-depth"].as_int,
        follow=results["follow-symlink"].as_bool,
        full=results["full-path"].specified,
        base=base,
    )

"""
Tagged outcomes of Parser.parse.

parse() never prints and never exits; it returns one of:

- Parsed(results)             scan and validation succeeded
- HelpRequested(text)         --help / -h was given (status 0)
- AttributionRequested(text)  --declarg was given (status 0)
- Failed(fault, text)         the first fault met (status 1)

The boundary adapter (Parser.__invoke__ / invoke) prints `text` on the right
stream and exits with `status`; Parsed is handed back to the caller.
"""
from .utils import mirror


class Outcome:
    """
    base of every outcome; subclasses set status and stderr.
    """
    status = 0
    stderr = False
    # terminal outcomes end the program at the boundary
    terminal = True

    text = mirror("text")

    def __init__(self, text=None, /):
        self._text = text

    def __bool__(self):
        return not self.terminal

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._text.plain if self._text is not None else None)


class Parsed(Outcome):
    terminal = False

    results = mirror("results")

    def __init__(self, results, /):
        super().__init__()
        self._results = results

    def __getitem__(self, name, /):
        return self._results[name]

    def __repr__(self):
        return "Parsed(%r)" % (self._results,)


class HelpRequested(Outcome):
    pass


class AttributionRequested(Outcome):
    pass


class Failed(Outcome):
    status = 1
    stderr = True

    fault = mirror("fault")

    def __init__(self, fault, text, /):
        super().__init__(text)
        self._fault = fault

    @property
    def message(self):
        return str(self._fault)

    @property
    def code(self):
        return self._fault.code

    def __repr__(self):
        return "Failed(%r)" % (self.message,)


__all__ = (
    "Outcome",
    "Parsed",
    "HelpRequested",
    "AttributionRequested",
    "Failed",
)

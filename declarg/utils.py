"""
Small helpers shared by the specification, configuration and engine modules.

- Unset: "not given" marker for keyword arguments where None is a legitimate
  value (Config.program_name, Option.short, bounds, defaults).
- coalesce(value, default): resolve Unset to a default.
- rename(...): give generated wrappers (decorators, mirror getters) a readable name.
- mirror("field"): read-only property over self._field, used by every public
  object of the package.
- words(source): allowed values and boolean synonyms as ordered tuples.

    >>> coalesce(Unset, "--")
    '--'
    >>> words("add sub  mult")
    ('add', 'sub', 'mult')
"""
import builtins
import functools
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker; there is exactly one instance.

    Unset is falsy and prints as "Unset". It can appear in isinstance() unions
    (str | Unset) so metadata checks read naturally.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, object otherwise (None, 0 and "" are kept).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__/__qualname__ and returns the callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("@rename() argument must be a string")

        def decorator(callable):
            if not builtins.callable(callable):
                raise TypeError("@rename() must be applied to a callable")
            return rename(callable, name)

        return rename(decorator, "rename")

    if len(parameters) != 2:
        raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))

    callable, name = parameters
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() first argument must be a updatable callable") from None
    return callable


def _freeze(object):
    # mappings become proxies, sequences (other than strings) become tuples
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    return object


def mirror(name, /):
    """
    Read-only property returning self._<name>, frozen when it is a container.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def words(source, /):
    """
    Normalize a list of exact-match strings into an ordered tuple.

    Accepts either a space-delimited string ("add sub mult") or an iterable of
    strings. Duplicates are dropped while keeping the first occurrence, so the
    resulting order is stable for help and error messages.

    Raises
    - TypeError: when source is neither a string nor an iterable of strings.
    - ValueError: when an entry is empty or contains whitespace.
    """
    if isinstance(source, str):
        return tuple(dict.fromkeys(source.split()))
    if not isinstance(source, Iterable):
        raise TypeError("words() argument must be a string or an iterable of strings")

    entries = {}
    for entry in source:
        if not isinstance(entry, str):
            raise TypeError("words() entries must be strings")
        if not entry or entry.split() != [entry]:
            raise ValueError("words() entries must be non-empty and contain no whitespace")
        entries.setdefault(entry)
    return tuple(entries)


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "words",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)

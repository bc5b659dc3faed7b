r"""
Declarg argument specifications and decorators.

Overview
- Specs
  • Option: named argument matched by its long name (e.g. --max-depth) and,
    optionally, a single-character short alias (e.g. -L).
  • Positional: value assigned by position in the argument vector.

- Decorators
  • @option(...): build an Option and bind the decorated function as its action.
  • @positional(...): build a Positional and bind the decorated function as its action.
  Each decorator returns the configured spec whose __call__ forwards to the action.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ through read-only properties.

Metadata (sanitized on construction)
- Shared
  • name: non-empty string without whitespace (unique per table, checked by the parser).
  • help: str (defaults to "").
  • type: None | int | float | bool.
  • choices: exact-match strings (tuple or space-delimited string), untyped only.
  • bounds: Unset (unbounded) or (low, high) inclusive; either side may be None.
  • default: Unset | str (raw text, converted like user input).
  • context: opaque user data, never read by the library.
  • action: Unset | callable(session, result), run after conversion succeeds.
- Option only
  • short: Unset | single character.
  • required: bool.
  • needs_value: bool, forced to True by a type or by choices.

Quick example:
    >>> from declarg.arguments import Option, positional
    >>> depth = Option("max-depth", "How much the iteration can be nested.", "L",
    ...                type=int, bounds=(1, 50), default="5")
    >>> @positional("root", "Root directory.", default=".")
    ... def root(session, result): ...
"""
import functools
import operator
import re
from numbers import Real

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='max-depth', help='...', short='L', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate metadata shared by Option and Positional.

    Responsibilities
    - name: non-empty string without whitespace.
    - help: string, defaults to "".
    - type/choices: exactly one of the type tags, or untyped with optional choices.
    - bounds: only for numeric types; normalized to Unset or a (low, high) tuple.
    - default: Unset or string.
    - action: Unset or callable.

    Raises
    - TypeError: on wrongly typed metadata or incompatible combinations.
    - ValueError: on empty/malformed names or inverted bounds.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name or name.split() != [name]:
        raise ValueError(f"{cls.__typename__} 'name' must be non-empty and contain no whitespace")

    if not isinstance(help := metadata["help"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = coalesce(help, "")

    if (type := metadata["type"]) not in (None, int, float, bool):
        raise TypeError(f"{cls.__typename__} 'type' must be one of None, int, float or bool")

    metadata["choices"] = words(metadata["choices"])
    if metadata["choices"] and type is not None:
        raise TypeError(f"{cls.__typename__} cannot have both 'type' and 'choices'")

    if (bounds := metadata["bounds"]) is not Unset:
        if type not in (int, float):
            raise TypeError(f"{cls.__typename__} 'bounds' require an int or float 'type'")
        if not isinstance(bounds, tuple | list) or len(bounds) != 2:
            raise TypeError(f"{cls.__typename__} 'bounds' must be a (low, high) pair")
        for bound in bounds:
            # bool is a Real subclass but never a meaningful bound
            if bound is not None and (not isinstance(bound, Real) or isinstance(bound, bool)):
                raise TypeError(f"{cls.__typename__} 'bounds' must contain numbers or None")
            if type is int and isinstance(bound, float) and not bound.is_integer():
                raise TypeError(f"{cls.__typename__} 'bounds' must be integral for an int 'type'")
        low, high = bounds
        if low is not None and high is not None and low > high:
            raise ValueError(f"{cls.__typename__} 'bounds' low value cannot exceed the high value")
        if low is None and high is None:
            bounds = Unset
        metadata["bounds"] = bounds if bounds is Unset else (low, high)

    if not isinstance(metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")

    if metadata["action"] is not Unset and not callable(metadata["action"]):
        raise TypeError(f"{cls.__typename__} 'action' must be callable")


class Option(metaclass=ArgumentType):
    """
    Named argument specification.

    An Option is matched either by its long name behind the long prefix
    (--name) or by its short alias behind the short prefix (-n). Options that
    need a value take it from the next token (or, for short aliases, from the
    rest of the token); the others are presence-only switches.

    Highlights
    - needs_value is derived: a type tag or a choices list forces it to True.
    - A default only makes sense for value-bearing options; it is rejected otherwise.
    - required options fail validation when omitted and no default applies.
    """

    __introspectable__ = (
        "name",
        "help",
        "short",
        "required",
        "needs_value",
        "type",
        "choices",
        "bounds",
        "default",
        "context",
        "action",
    )

    def __new__(
            cls,
            name,
            help=Unset,
            short=Unset,
            /,
            *,
            required=False,
            needs_value=False,
            type=None,
            choices=(),
            bounds=Unset,
            default=Unset,
            context=None,
            action=Unset
    ):
        """
        Construct an Option spec with the provided metadata.

        Parameters
        - name: str
          Long name, matched after the long prefix (e.g. "max-depth" for --max-depth).
        - help: str
          Help text shown in the options section.
        - short: Unset | str
          Single-character alias matched after the short prefix.
        - required: bool
          Fail validation when the option is omitted and has no default.
        - needs_value: bool
          Whether the option consumes a value; implied by type and choices.
        - type: None | int | float | bool
          Conversion applied to the raw value after scanning.
        - choices: str | Iterable[str]
          Allowed raw values (exact, whole-token match).
        - bounds: Unset | (low, high)
          Inclusive numeric range; None on a side leaves it open.
        - default: Unset | str
          Raw value used when the option is omitted.
        - context: Any
          Opaque data available to the action through result.argument.context.
        - action: Unset | Callable[[Session, Result], Any]
          Post-resolution callback.
        """
        metadata = {
            "name": name,
            "help": help,
            "short": short,
            "required": bool(required),
            "needs_value": bool(needs_value),
            "type": type,
            "choices": choices,
            "bounds": bounds,
            "default": default,
            "context": context,
            "action": action,
        }
        _sanitize_metadata(cls, metadata)

        if not isinstance(short := metadata["short"], str | Unset):
            raise TypeError(f"{cls.__typename__} 'short' must be a string")
        elif isinstance(short, str) and (len(short) != 1 or short.isspace()):
            raise ValueError(f"{cls.__typename__} 'short' must be a single non-blank character")

        metadata["needs_value"] |= metadata["type"] is not None or bool(metadata["choices"])

        if metadata["default"] is not Unset and not metadata["needs_value"]:
            raise TypeError(f"{cls.__typename__} without a value cannot have a 'default'")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, session, result, /):
        """
        Forward to the bound action; no-op when none is bound.
        """
        if self._action is Unset:
            return
        return self._action(session, result)

    def __option__(self):
        """
        Introspection hook: identify this spec as an Option.
        """
        return self


class Positional(metaclass=ArgumentType):
    """
    Positional argument specification.

    Positionals are filled in declaration order by plain tokens. They always
    carry a value; whether they must be present is decided by the parser's
    required_positionals count rather than per spec.
    """

    __introspectable__ = (
        "name",
        "help",
        "type",
        "choices",
        "bounds",
        "default",
        "context",
        "action",
    )

    # Positionals are value-bearing by definition and never individually required.
    needs_value = True
    required = False

    def __new__(
            cls,
            name,
            help=Unset,
            /,
            *,
            type=None,
            choices=(),
            bounds=Unset,
            default=Unset,
            context=None,
            action=Unset
    ):
        metadata = {
            "name": name,
            "help": help,
            "type": type,
            "choices": choices,
            "bounds": bounds,
            "default": default,
            "context": context,
            "action": action,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, session, result, /):
        if self._action is Unset:
            return
        return self._action(session, result)

    def __positional__(self):
        """
        Introspection hook: identify this spec as a Positional.
        """
        return self


def option(*args, **kwargs):
    """
    Decorator/factory for defining an option with a post-resolution action.

    Usage
        @option("root", "Root directory.", needs_value=True, default=".")
        def root(session, result):
            if not os.path.isdir(result.raw):
                session.fail("'%s' is not a directory." % result.raw)

    Behavior
    - Validates that it decorates a callable and enforces single application.
    - Binds the provided function as the Option's action.
    - Returns the configured Option instance.
    """
    option = Option(*args, **kwargs)

    @rename("option")
    def wrapper(action, /):
        if not callable(action):
            raise TypeError("@option() must be applied to a callable")
        if option._action is not Unset:
            raise TypeError("@option() must be applied only once")
        option._action = action
        return option

    return wrapper


def positional(*args, **kwargs):
    """
    Decorator/factory for defining a positional with a post-resolution action.

    Same contract as @option(...), building a Positional instead.
    """
    positional = Positional(*args, **kwargs)

    @rename("positional")
    def wrapper(action, /):
        if not callable(action):
            raise TypeError("@positional() must be applied to a callable")
        if positional._action is not Unset:
            raise TypeError("@positional() must be applied only once")
        positional._action = action
        return positional

    return wrapper


__all__ = (
    # Classes (specifications)
    "Option",
    "Positional",

    # Decorators
    "option",
    "positional",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType

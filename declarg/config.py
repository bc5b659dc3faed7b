"""
Parsing configuration.

Config gathers every knob of a parse in one immutable object and applies the
documented defaults:

    short_prefix              "-"     (empty string disables short options)
    long_prefix               "--"    (empty string disables long options)
    marker                    "--"    (no-more-options token; empty disables it)
    true_synonyms             "1 true True TRUE y Y yes Yes YES"
    false_synonyms            "0 false False FALSE n N no No NO"
    no_help                   False   (suppress --help/-h and the help hint)
    stop_at_last_positional   False
    required_positionals      0
    extra / context           None    (overflow of positionals is fatal)

Presentation-only fields (program_name, description, usage, epilog, colorful)
are consumed by the renderer.
"""
from .utils import *


DEFAULT_TRUE_SYNONYMS = "1 true True TRUE y Y yes Yes YES"
DEFAULT_FALSE_SYNONYMS = "0 false False FALSE n N no No NO"


def _sanitize_string(metadata, name, /, *, nullable=False):
    if nullable and metadata[name] is None:
        return
    if not isinstance(metadata[name], str):
        raise TypeError(f"config '{name}' must be a string")


class Config:
    """
    Resolved, read-only configuration for one Parser.

    Notes
    - Unset fields take the documented defaults at construction.
    - Synonym lists are normalized to ordered tuples and must be disjoint: a
      token cannot be both true and false.
    - program_name: when None, the first argv token is the program name and is
      not scanned; when set, the first token is scanned like any other.
    """

    __fields__ = (
        "short_prefix",
        "long_prefix",
        "marker",
        "true_synonyms",
        "false_synonyms",
        "no_help",
        "stop_at_last_positional",
        "required_positionals",
        "extra",
        "context",
        "program_name",
        "description",
        "usage",
        "epilog",
        "colorful",
    )

    short_prefix = mirror("short_prefix")
    long_prefix = mirror("long_prefix")
    marker = mirror("marker")
    true_synonyms = mirror("true_synonyms")
    false_synonyms = mirror("false_synonyms")
    no_help = mirror("no_help")
    stop_at_last_positional = mirror("stop_at_last_positional")
    required_positionals = mirror("required_positionals")
    extra = mirror("extra")
    context = mirror("context")
    program_name = mirror("program_name")
    description = mirror("description")
    usage = mirror("usage")
    epilog = mirror("epilog")
    colorful = mirror("colorful")

    def __init__(
            self,
            *,
            short_prefix=Unset,
            long_prefix=Unset,
            marker=Unset,
            true_synonyms=Unset,
            false_synonyms=Unset,
            no_help=False,
            stop_at_last_positional=False,
            required_positionals=0,
            extra=None,
            context=None,
            program_name=None,
            description=None,
            usage=None,
            epilog=None,
            colorful=False
    ):
        metadata = {
            "short_prefix": coalesce(short_prefix, "-"),
            "long_prefix": coalesce(long_prefix, "--"),
            "marker": coalesce(marker, "--"),
            "true_synonyms": words(coalesce(true_synonyms, DEFAULT_TRUE_SYNONYMS)),
            "false_synonyms": words(coalesce(false_synonyms, DEFAULT_FALSE_SYNONYMS)),
            "no_help": bool(no_help),
            "stop_at_last_positional": bool(stop_at_last_positional),
            "required_positionals": required_positionals,
            "extra": extra,
            "context": context,
            "program_name": program_name,
            "description": description,
            "usage": usage,
            "epilog": epilog,
            "colorful": bool(colorful),
        }

        for name in ("short_prefix", "long_prefix", "marker"):
            _sanitize_string(metadata, name)
        for name in ("program_name", "description", "usage", "epilog"):
            _sanitize_string(metadata, name, nullable=True)

        if not metadata["true_synonyms"] or not metadata["false_synonyms"]:
            raise ValueError("config synonym lists cannot be empty")
        if overlap := set(metadata["true_synonyms"]) & set(metadata["false_synonyms"]):
            raise ValueError("config synonym lists must be disjoint, both contain %s" % " ".join(sorted(overlap)))

        count = metadata["required_positionals"]
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError("config 'required_positionals' must be an integer")
        elif count < 0:
            raise ValueError("config 'required_positionals' cannot be negative")

        if metadata["extra"] is not None and not callable(metadata["extra"]):
            raise TypeError("config 'extra' must be callable")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __repr__(self):
        return "config(%s)" % ", ".join("%s=%r" % (name, getattr(self, name)) for name in self.__fields__)


__all__ = (
    "Config",
    "DEFAULT_TRUE_SYNONYMS",
    "DEFAULT_FALSE_SYNONYMS",
)

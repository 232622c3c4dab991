"""
Argyle utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the parser, resolver, dispatcher and help layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level cli/help layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- camel_case(word) / kebab_case(word)
  • Identifier transforms: parameter names become camel-cased result keys,
    flag keys become kebab-cased switches for display and matching.

- is_valid_script_name(name)
  • A script or command name is accepted when it is non-empty and has no whitespace.

Quick examples
    >>> camel_case("value-name")
    'valueName'
    >>> kebab_case("dryRun")
    'dry-run'
    >>> kebab_case("dry_run")
    'dry-run'
"""
import functools
import re
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
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


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    Falsey values like None, 0, "", or [] are preserved as-is; only Unset
    is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


_CAMEL_PATTERN = re.compile(r"[\W_]([a-z\d])?", re.IGNORECASE)
_KEBAB_PATTERN = re.compile(r"\B([A-Z])")


@functools.cache
def camel_case(word, /):
    """
    Convert a free-form name to its camel-cased key.

    Every non-word character (or underscore) is dropped; when it is followed
    by a letter or digit, that character is upper-cased. Runs of separators
    collapse, a leading separator capitalizes the first letter, and a trailing
    separator disappears.

    Examples
    - camel_case("hello-world")     -> "helloWorld"
    - camel_case("hello--world")    -> "helloWorld"
    - camel_case("-hello")          -> "Hello"
    - camel_case("hello-")          -> "hello"
    - camel_case("value_name-here") -> "valueNameHere"
    """
    if not isinstance(word, str):
        raise TypeError("camel_case() argument must be a string")
    return _CAMEL_PATTERN.sub(lambda match: (match.group(1) or "").upper(), word)


@functools.cache
def kebab_case(word, /):
    """
    Convert a camel-cased (or snake_cased) key to its kebab-cased switch name.

    Examples
    - kebab_case("helloWorld") -> "hello-world"
    - kebab_case("dry_run")    -> "dry-run"
    - kebab_case("help")       -> "help"
    """
    if not isinstance(word, str):
        raise TypeError("kebab_case() argument must be a string")
    return _KEBAB_PATTERN.sub(r"-\1", word).replace("_", "-").lower()


def is_valid_script_name(name, /):
    """
    Check whether a script or command name is a single, non-empty word.
    """
    return isinstance(name, str) and len(name) > 0 and not any(char.isspace() for char in name)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "camel_case",
    "kebab_case",
    "is_valid_script_name",
)

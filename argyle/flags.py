"""
Argyle flag tokenizer.

Scope
- FlagSpec / normalize_flag(): validate and normalize one flag schema entry.
- parse_flags(): turn raw argv into parsed flag values, unknown flags and
  leftover positional tokens (with a separate bucket for tokens after "--").

Schema entries
- a type callable (bool, str, int, float or any one-argument callable);
- a one-element list or tuple ([str]) for a flag that may repeat;
- a mapping {"type": ..., "alias": ..., "default": ..., "description": ...,
  "placeholder": ...}.

Token forms
- --name, --name=value, --kebab-name (for a camel-cased or snake_cased key);
- -a, grouped aliases -abc (only the last one may take a value), -a=value;
- "--" ends flag parsing: every later token is positional and also lands in
  the "separated" bucket;
- "-" on its own and negative numbers ("-1", "-0.5") are positional.

Value rules
- a boolean flag never consumes the next token; "=false", "=0" and "=" are false;
- any other flag takes its inline value or the next token that is not itself
  a flag; without one, the type is called with "";
- a repeatable flag collects every occurrence, a plain flag keeps the last;
- absent flags get their default (callable defaults are called), None, or []
  for repeatable flags.
- exceptions raised by type callables propagate unchanged.
"""
import re
from collections.abc import Mapping
from typing import Any, Callable, NamedTuple

from .faults import ConfigError
from .utils import Unset, kebab_case

_NUMBER = re.compile(r"^-\.?\d")
_FALSE = frozenset(("", "0", "false"))
_SCHEMA_KEYS = frozenset(("type", "alias", "default", "description", "placeholder"))


class FlagSpec(NamedTuple):
    key: str
    type: Callable[[str], Any]
    multiple: bool
    alias: str | None
    default: Any
    description: str | None
    placeholder: str | None

    @property
    def names(self):
        return tuple(dict.fromkeys((self.key, kebab_case(self.key))))

    def resolve_default(self):
        default = self.default() if callable(self.default) else self.default
        if default is Unset:
            return [] if self.multiple else None
        if self.multiple and isinstance(default, list | tuple):
            return list(default)
        return default


class ParsedFlags(NamedTuple):
    flags: dict[str, Any]
    unknown_flags: dict[str, list]
    arguments: list[str]
    separated: list[str]


def normalize_flag(key, entry, /):
    """
    Validate one schema entry and normalize it to a FlagSpec.

    Raises ConfigError for a non-string key, a missing or non-callable type,
    unknown mapping keys, or an alias that is not a single character.
    """
    if not isinstance(key, str) or not key:
        raise ConfigError(f"Invalid flag name: {key!r}. Flag names must be non-empty strings")

    alias = description = placeholder = None
    default = Unset

    if isinstance(entry, Mapping):
        if unknown := set(entry) - _SCHEMA_KEYS:
            raise ConfigError(f'Flag "{key}" has unknown option(s): {", ".join(sorted(map(str, unknown)))}')
        if "type" not in entry:
            raise ConfigError(f'Flag "{key}" must declare a type')
        kind = entry["type"]
        alias = entry.get("alias")
        default = entry.get("default", Unset)
        description = entry.get("description")
        placeholder = entry.get("placeholder")
    else:
        kind = entry

    multiple = isinstance(kind, list | tuple)
    if multiple:
        if len(kind) != 1:
            raise ConfigError(f'Flag "{key}" repeatable type must have exactly one element type')
        kind, = kind

    if not callable(kind):
        raise ConfigError(f'Flag "{key}" type must be callable')

    if alias is not None and (not isinstance(alias, str) or len(alias) != 1):
        raise ConfigError(f'Flag alias "{alias}" must be a single character')

    return FlagSpec(key, kind, multiple, alias, default, description, placeholder)


def normalize_schema(schema, /):
    """
    Normalize a whole flag schema, checking that names and aliases are unique.

    Returns (specs, longs, shorts): specs by key, and lookups from long names
    and from aliases to specs.
    """
    if schema is None:
        schema = {}
    if not isinstance(schema, Mapping):
        raise ConfigError("Flags must be a mapping of flag names to flag types")

    specs = {key: normalize_flag(key, entry) for key, entry in schema.items()}
    longs, shorts = {}, {}

    for spec in specs.values():
        for name in spec.names:
            if longs.setdefault(name, spec) is not spec:
                raise ConfigError(f'Duplicate flags named "{name}"')
        if spec.alias is not None and shorts.setdefault(spec.alias, spec) is not spec:
            raise ConfigError(f'Duplicate flags named "{spec.alias}"')

    return specs, longs, shorts


def is_flag(token, /):
    """Whether a token is shaped like a flag (not "-", "--" or a negative number)."""
    return len(token) > 1 and token.startswith("-") and token != "--" and not _NUMBER.match(token)


def _split(token):
    # yields (name, inline value or None, lookup) for each flag in a token
    if token.startswith("--"):
        name, equals, value = token[2:].partition("=")
        return [(name, value if equals else None, "long")]
    body, equals, value = token[1:].partition("=")
    if not body:
        return []
    names = [(char, None, "short") for char in body[:-1]]
    names.append((body[-1], value if equals else None, "short"))
    return names


def _boolean(value):
    return value is None or value.lower() not in _FALSE


def parse_flags(schema, argv, /, *, ignore=None, ignore_unknown=False):
    """
    Tokenize argv against a flag schema.

    Parameters
    - schema: mapping of flag keys to schema entries (see module docstring).
    - argv: iterable of raw string tokens.
    - ignore: optional callable ignore(kind, token, value) where kind is
      "argument", "known-flag" or "unknown-flag"; a truthy return skips the
      token entirely. It may be stateful.
    - ignore_unknown: treat tokens with unknown flags as positional arguments.

    Returns
    - ParsedFlags(flags, unknown_flags, arguments, separated)
    """
    specs, longs, shorts = normalize_schema(schema)

    def lookup(name, kind):
        if kind == "short":
            return shorts.get(name) or longs.get(name)
        return longs.get(name)

    collected = {}
    unknown_flags = {}
    arguments = []
    separated = []

    tokens = list(argv)
    index = 0

    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == "--":
            arguments.extend(tokens[index:])
            separated.extend(tokens[index:])
            break

        names = _split(token) if is_flag(token) else []

        if not names or (ignore_unknown and any(lookup(name, kind) is None for name, _, kind in names)):
            if ignore is not None and ignore("argument", token, None):
                continue
            arguments.append(token)
            continue

        for position, (name, value, kind) in enumerate(names):
            spec = lookup(name, kind)

            if spec is None:
                if ignore is not None and ignore("unknown-flag", name, value):
                    continue
                unknown_flags.setdefault(name, []).append(True if value is None else value)
                continue

            if ignore is not None and ignore("known-flag", name, value):
                continue

            if spec.type is bool:
                parsed = _boolean(value)
            else:
                last = position == len(names) - 1
                if value is None and last and index < len(tokens) and not is_flag(tokens[index]) and tokens[index] != "--":
                    value = tokens[index]
                    index += 1
                parsed = spec.type("" if value is None else value)

            collected.setdefault(spec.key, []).append(parsed)

    flags = {}
    for key, spec in specs.items():
        if key in collected:
            flags[key] = collected[key] if spec.multiple else collected[key][-1]
        else:
            flags[key] = spec.resolve_default()

    return ParsedFlags(flags, unknown_flags, arguments, separated)


__all__ = (
    "FlagSpec",
    "ParsedFlags",
    "normalize_flag",
    "normalize_schema",
    "is_flag",
    "parse_flags",
)

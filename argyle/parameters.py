"""
Argyle positional parameters: grammar, compilation and resolution.

Scope
- ParameterSpec: one parsed parameter (name, required, spread).
- parse_parameters(): compile raw patterns ("<name>", "[name]", "<name...>")
  into ParameterSpec lists, failing fast on the first invalid pattern.
- split_parameters() / compile_parameters(): handle the literal "--" split
  point; each side is an independent segment with its own ordering rules.
- resolve_arguments(): map positional tokens to camel-cased names.
- Arguments: the positional bag (a list of raw tokens with named access and
  a "--" sub-bag for tokens after the separator).

Grammar rules (per segment)
- a pattern is wrapped in <> (required) or [] (optional);
- a required parameter may not follow an optional one;
- a spread parameter ("...") must be last;
- names may not contain any of  | \\ { } ( ) [ ] ^ $ + * ? .

Failure semantics
- grammar problems and duplicated names are configuration faults (raised);
- a required parameter without a value is a user-input fault: a message is
  printed, help is shown and the process exits with status 1.
"""
import functools
import json
import re
from typing import NamedTuple

from .faults import GrammarError, DuplicateParameterError, MissingParameterError, trigger
from .utils import camel_case

SEPARATOR = "--"

_RESERVED = re.compile(r"[|\\{}()[\]^$+*?.]")
_quote = functools.partial(json.dumps, ensure_ascii=False)


class ParameterSpec(NamedTuple):
    name: str
    required: bool
    spread: bool


class Grammar(NamedTuple):
    """Compiled parameters; ``after`` is None when no "--" split point was declared."""
    before: list[ParameterSpec]
    after: list[ParameterSpec] | None


def parse_parameters(patterns, /):
    """
    Compile a list of raw parameter patterns into ParameterSpec entries.

    Single left-to-right scan, fail-fast: the first invalid pattern raises a
    GrammarError. The literal "--" is not a valid pattern here; callers split
    on it first (see split_parameters).

    Examples
    - ["<source>", "[target]"]  -> [("source", True, False), ("target", False, False)]
    - ["<files...>"]            -> [("files", True, True)]
    """
    parameters = []
    optional = None
    spread = None

    for pattern in patterns:
        if not isinstance(pattern, str):
            raise GrammarError(f"Invalid parameter: {pattern!r}. Parameters must be strings")

        if spread:
            raise GrammarError(f"Invalid parameter: Spread parameter {_quote(spread)} must be last")

        if pattern.startswith("<") and pattern.endswith(">") and len(pattern) > 1:
            required = True
            if optional:
                raise GrammarError(
                    f"Invalid parameter: Required parameter {_quote(pattern)} "
                    f"cannot come after optional parameter {_quote(optional)}"
                )
        elif pattern.startswith("[") and pattern.endswith("]") and len(pattern) > 1:
            required = False
            optional = pattern
        else:
            raise GrammarError(
                f"Invalid parameter: {_quote(pattern)}. "
                "Must be wrapped in <> (required parameter) or [] (optional parameter)"
            )

        name = pattern[1:-1]
        if name.endswith("..."):
            spread = pattern
            name = name[:-3]

        if match := _RESERVED.search(name):
            raise GrammarError(
                f"Invalid parameter: {_quote(pattern)}. Invalid character found {_quote(match.group())}"
            )
        if not name:
            raise GrammarError(f"Invalid parameter: {_quote(pattern)}. Parameter name is required")

        parameters.append(ParameterSpec(name, required, bool(spread)))

    return parameters


def split_parameters(patterns, /):
    """
    Slice raw patterns at the first literal "--".

    Returns (before, after) where after is None if no "--" is present.
    """
    patterns = list(patterns)
    try:
        index = patterns.index(SEPARATOR)
    except ValueError:
        return patterns, None
    return patterns[:index], patterns[index + 1:]


def compile_parameters(patterns, /):
    """
    Parse both segments of a pattern list and check names are unique.

    Duplicate camel-cased names (across both segments) raise a
    DuplicateParameterError before any argv is looked at.
    """
    before, after = split_parameters(patterns)
    grammar = Grammar(parse_parameters(before), None if after is None else parse_parameters(after))

    seen = set()
    for parameter in (*grammar.before, *(grammar.after or ())):
        key = camel_case(parameter.name)
        if key in seen:
            raise DuplicateParameterError(f"Invalid parameter: {_quote(parameter.name)} is used more than once.")
        seen.add(key)

    return grammar


def _map_segment(mapping, parameters, tokens, show_help):
    for index, (name, required, spread) in enumerate(parameters):
        key = camel_case(name)
        if key in mapping:
            raise DuplicateParameterError(f"Invalid parameter: {_quote(name)} is used more than once.")

        if spread:
            value = list(tokens[index:])
        else:
            value = tokens[index] if index < len(tokens) else None

        if required and not value:
            trigger(MissingParameterError(f"Missing required parameter {_quote(name)}\n"), show_help=show_help)

        mapping[key] = value

        # a spread parameter exhausts the segment
        if spread:
            break


def resolve_arguments(grammar, arguments, separated=(), /, show_help=None):
    """
    Map positional tokens to camel-cased parameter names.

    Parameters
    - grammar: Grammar from compile_parameters().
    - arguments: every positional token, including those after "--".
    - separated: the tokens that came after "--" (a suffix of arguments).
    - show_help: zero-argument callable used on the missing-parameter path.

    Returns
    - dict mapping camel-cased names to a string (or None for an absent
      optional parameter) or a list of strings for spread parameters.
    """
    arguments = list(arguments)
    separated = list(separated)
    mapping = {}

    if grammar.after is None:
        _map_segment(mapping, grammar.before, arguments, show_help)
    else:
        _map_segment(mapping, grammar.before, arguments[:len(arguments) - len(separated)], show_help)
        _map_segment(mapping, grammar.after, separated, show_help)

    return mapping


class Arguments(list):
    """
    Positional bag: the raw leftover tokens, in order.

    Resolved parameters are available both as items (bag["name"]) and as
    attributes (bag.name); tokens after "--" are available as bag["--"].
    A parameter named like a list method or property (count, index,
    separated, ...) takes precedence on attribute access. Indexed access
    (bag[0]) and list equality are untouched.
    """

    def __init__(self, tokens=(), separated=(), named=None):
        super().__init__(tokens)
        self._separated = list(separated)
        self._named = dict(named or {})

    @property
    def separated(self):
        return self._separated

    @property
    def named(self):
        return dict(self._named)

    def __getitem__(self, key):
        if isinstance(key, str):
            if key == SEPARATOR:
                return self._separated
            try:
                return self._named[key]
            except KeyError:
                raise KeyError(key) from None
        return super().__getitem__(key)

    def __getattribute__(self, name):
        # resolved parameters win over list methods (count, index, ...)
        named = object.__getattribute__(self, "__dict__").get("_named")
        if named and name in named:
            return named[name]
        return super().__getattribute__(name)

    def __getattr__(self, name):
        named = self.__dict__.get("_named", {})
        try:
            return named[name]
        except KeyError:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'") from None

    def __repr__(self):
        return f"{type(self).__name__}({list(self)!r}, separated={self._separated!r}, named={self._named!r})"

    def __rich_repr__(self):
        yield list(self)
        yield "separated", self._separated
        yield "named", self._named


__all__ = (
    "ParameterSpec",
    "Grammar",
    "Arguments",
    "parse_parameters",
    "split_parameters",
    "compile_parameters",
    "resolve_arguments",
)

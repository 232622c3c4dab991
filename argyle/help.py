"""
Argyle help document generation.

Scope
- HelpDocumentNode: one typed unit of a help document (type, data, id).
- generate_help(): a pure function turning program or command options into
  an ordered list of nodes.
- render_flags(): build the flags table node (sorted rows, shared alias
  column, responsive breakpoints).

Document order
- name      text     "<parent> <name> v<version>"
- description text   help["description"]
- usage     section  explicit help["usage"], or synthesized from name/flags/parameters
- commands  section  table of command name → description
- flags     section  flags table (see render_flags)
- examples  section  help["examples"]
- aliases   section  comma-joined command aliases

Every builder is optional and returns None when it does not apply. Node
types name methods on the Renderers object that will render them; the
document is plain mutable data so custom help renderers may reorder,
replace or extend it before rendering.
"""
from collections.abc import Mapping
from typing import Any, NamedTuple

from .parameters import SEPARATOR
from .utils import kebab_case

FLAG_TABLE_BREAKPOINTS = {
    "> 80": [
        {"width": "content-width", "padding_left": 2, "padding_right": 8},
        {"width": "auto"},
    ],
    "> 40": [
        {"width": "auto", "padding_left": 2, "padding_right": 8, "preprocess": str.strip},
        {"width": "100%", "padding_left": 2, "padding_bottom": 1},
    ],
    "> 0": {
        "stdout_columns": 1000,
        "columns": [
            {"width": "content-width", "padding_left": 2, "padding_right": 8},
            {"width": "content-width"},
        ],
    },
}

COMMAND_TABLE_OPTIONS = [
    {"width": "content-width", "padding_left": 2, "padding_right": 8},
]


class HelpDocumentNode:
    """
    one node of a help document.

    type names the Renderers method that renders it, data is whatever that
    method expects, id (optional) lets custom renderers find known sections.
    """
    __slots__ = ("type", "data", "id")

    def __init__(self, type, data=None, id=None):
        self.type = type
        self.data = data
        self.id = id

    def __eq__(self, other):
        if not isinstance(other, HelpDocumentNode):
            return NotImplemented
        return (self.type, self.data, self.id) == (other.type, other.data, other.id)

    def __repr__(self):
        return f"{type(self).__name__}(type={self.type!r}, data={self.data!r}, id={self.id!r})"

    def __rich_repr__(self):
        yield "type", self.type
        yield "data", self.data
        yield "id", self.id, None


class FlagData(NamedTuple):
    name: str
    flag: Any
    flag_formatted: str
    aliases_enabled: bool
    alias_formatted: str | None


def _help(options):
    help = options.get("help")
    return help if isinstance(help, Mapping) else {}


def _full_name(options):
    parent = options.get("parent") or {}
    if parent.get("name"):
        return f"{parent['name']} {options['name']}"
    return options["name"]


def _version(options):
    if not options:
        return None
    if options.get("version"):
        return options["version"]
    return _help(options).get("version")


def _name(options):
    name = []
    if options.get("name"):
        name.append(_full_name(options))
    if version := _version(options) or _version(options.get("parent")):
        name.append(f"v{version}")
    if not name:
        return None
    return HelpDocumentNode("text", " ".join(name) + "\n", id="name")


def _description(options):
    if not (description := _help(options).get("description")):
        return None
    return HelpDocumentNode("text", f"{description}\n", id="description")


def _usage(options):
    help = _help(options)

    if "usage" in help:
        usage = help["usage"]
        if not usage:
            return None
        if not isinstance(usage, str):
            usage = "\n".join(usage)
        return HelpDocumentNode("section", {"title": "Usage:", "body": usage}, id="usage")

    if not options.get("name"):
        return None

    usages = []
    usage = [_full_name(options)]

    if options.get("flags"):
        usage.append("[flags...]")

    if parameters := list(options.get("parameters") or ()):
        try:
            index = parameters.index(SEPARATOR)
        except ValueError:
            required = False
        else:
            required = any(parameter.startswith("<") for parameter in parameters[index + 1:])
        usage.append(" ".join(
            parameter if parameter != SEPARATOR else SEPARATOR if required else f"[{SEPARATOR}]"
            for parameter in parameters
        ))

    if len(usage) > 1:
        usages.append(" ".join(usage))

    if options.get("commands"):
        usages.append(f"{options['name']} <command>")

    if not usages:
        return None
    return HelpDocumentNode("section", {"title": "Usage:", "body": "\n".join(usages)}, id="usage")


def _commands(options):
    if not (commands := options.get("commands")):
        return None

    rows = []
    for command in commands:
        help = _help(command.options)
        rows.append([command.options["name"], help.get("description") or ""])

    table = HelpDocumentNode("table", {"table_data": rows, "table_options": COMMAND_TABLE_OPTIONS})
    return HelpDocumentNode("section", {"title": "Commands:", "body": table, "indent_body": 0}, id="commands")


def _flags(options):
    if not (flags := options.get("flags")):
        return None
    return HelpDocumentNode("section", {"title": "Flags:", "body": render_flags(flags), "indent_body": 0}, id="flags")


def _examples(options):
    if not (examples := _help(options).get("examples")):
        return None
    if not isinstance(examples, str):
        examples = "\n".join(examples)
    if not examples:
        return None
    return HelpDocumentNode("section", {"title": "Examples:", "body": examples}, id="examples")


def _aliases(options):
    if not (alias := options.get("alias")):
        return None
    aliases = alias if isinstance(alias, str) else ", ".join(alias)
    return HelpDocumentNode("section", {"title": "Aliases:", "body": aliases}, id="aliases")


_BUILDERS = (_name, _description, _usage, _commands, _flags, _examples, _aliases)


def generate_help(options, /):
    """
    Build the help document for program or command options.

    Parameters
    - options: mapping with any of name, version, parameters, flags, commands,
      alias, help (mapping with description, usage, examples, version) and,
      for commands, parent (the program options).

    Returns
    - list[HelpDocumentNode]: the applicable sections, in document order.
    """
    return [node for node in (builder(options) for builder in _BUILDERS) if node is not None]


def _sort_key(name):
    return name.casefold(), name.swapcase()


def _alias(flag):
    return flag.get("alias") if isinstance(flag, Mapping) else None


def render_flags(flags, /):
    """
    Build the flags table node.

    Rows are sorted by flag key (case-insensitive first, lower case before
    upper case on ties). If any flag has an alias, every row reserves the
    alias column so long names line up. Each row has a flag_name cell and a
    flag_description cell, both carrying the same FlagData.
    """
    names = sorted(flags, key=_sort_key)
    aliases_enabled = any(_alias(flags[name]) is not None for name in names)

    rows = []
    for name in names:
        alias = _alias(flags[name])
        data = FlagData(
            name=name,
            flag=flags[name],
            flag_formatted=f"--{kebab_case(name)}",
            aliases_enabled=aliases_enabled,
            alias_formatted=None if alias is None else f"-{alias}",
        )
        rows.append([HelpDocumentNode("flag_name", data), HelpDocumentNode("flag_description", data)])

    return HelpDocumentNode("table", {"table_data": rows, "table_breakpoints": FLAG_TABLE_BREAKPOINTS})


__all__ = (
    "HelpDocumentNode",
    "FlagData",
    "FLAG_TABLE_BREAKPOINTS",
    "COMMAND_TABLE_OPTIONS",
    "generate_help",
    "render_flags",
)

"""
Argyle dispatcher: the cli() entry point.

Scope
- cli(options, callback=None, argv=None): validate program options, select a
  subcommand (if any), tokenize flags, short-circuit on --version/--help,
  resolve positional parameters and hand the result to the callback.
- ParsedArgv: the result; valid immediately and awaitable when the callback
  returned an awaitable.

Behavior
- Configuration problems raise (ConfigError and subclasses) before argv is
  inspected: missing options, invalid script name, unknown options, invalid
  parameter grammar, duplicate command names/aliases.
- The first argv token selects a command (by name or alias) when commands are
  declared; a command always wins over a root flag or parameter of the same name.
- --version (only when a version is configured and the caller declares no
  version flag of its own) prints the version and exits 0.
- --help / -h (unless help is False) prints the help document and exits 0.
- A missing required parameter prints an error and the help, then exits 1.
- Exceptions raised by the callback or by flag types propagate unchanged.

Implicit flags
- {"version": bool} and {"help": bool, alias "h"} are defaults; a flag of the
  same name declared by the caller replaces them.
"""
import asyncio
import inspect
import json
import logging
import sys
from collections.abc import Mapping

from rich.console import Console

from .commands import COMMAND_OPTIONS, Command, build_registry, validate_options
from .faults import ConfigError
from .flags import parse_flags
from .help import generate_help
from .parameters import Arguments, compile_parameters, resolve_arguments
from .renderers import Renderers
from .utils import Unset, is_valid_script_name

log = logging.getLogger(__name__)

ROOT_OPTIONS = COMMAND_OPTIONS - {"alias"} | {"version", "commands"}

VERSION_FLAG = {"type": bool, "description": "Show version"}
HELP_FLAG = {"type": bool, "alias": "h", "description": "Show help"}


class ParsedArgv:
    """
    result of a cli() call.

    attributes
    - command: the selected command name, or None for the program itself.
    - flags: parsed flag values keyed by flag name (implicit flags included).
    - arguments (alias: _): positional tokens with named parameter access.
    - unknown_flags: flags not in the schema, name → list of values.
    - pending: what the callback returned when it was awaitable, else None.

    the fields are valid as soon as cli() returns; ``await parsed`` waits for
    the pending callback (re-raising its exception) and returns ``parsed``.
    """
    __slots__ = ("command", "flags", "arguments", "unknown_flags", "pending", "_show_help", "_show_version")

    def __init__(self, command, flags, arguments, unknown_flags, *, show_help, show_version):
        self.command = command
        self.flags = flags
        self.arguments = arguments
        self.unknown_flags = unknown_flags
        self.pending = None
        self._show_help = show_help
        self._show_version = show_version

    @property
    def _(self):
        return self.arguments

    def show_help(self, help_options=None):
        """Print the help document, optionally with replacement help options."""
        self._show_help(help_options)

    def show_version(self):
        """Print the configured version."""
        self._show_version()

    async def _settle(self):
        if self.pending is not None:
            await self.pending
        return self

    def __await__(self):
        return self._settle().__await__()

    def __repr__(self):
        return (
            f"{type(self).__name__}(command={self.command!r}, flags={self.flags!r}, "
            f"arguments={self.arguments!r}, unknown_flags={self.unknown_flags!r})"
        )

    def __rich_repr__(self):
        yield "command", self.command
        yield "flags", self.flags
        yield "arguments", self.arguments
        yield "unknown_flags", self.unknown_flags
        yield "pending", self.pending, None


def _version_enabled(options):
    return bool(options.get("version")) and "version" not in (options.get("flags") or {})


def _effective_flags(options):
    implicit = {}
    if _version_enabled(options):
        implicit["version"] = VERSION_FLAG
    if options.get("help", Unset) is not False:
        implicit["help"] = HELP_FLAG
    return {**implicit, **(options.get("flags") or {})}


def _show_version(options):
    version = options.get("version") or (options.get("parent") or {}).get("version") or ""
    Console().out(version, highlight=False)


def _show_help(options, flags, help_options=None):
    help = options.get("help", Unset)
    document = {**options, "flags": flags}
    if help_options is not None:
        document["help"] = help_options

    nodes = generate_help(document)
    renderers = Renderers()

    if isinstance(help, Mapping) and callable(help.get("render")):
        output = help["render"](nodes, renderers)
    else:
        output = renderers.render(nodes)

    Console().out(output, highlight=False)


def _dispatch(command, options, callback, argv):
    flags = _effective_flags(options)
    grammar = compile_parameters(options.get("parameters") or ())

    parsed = parse_flags(
        flags,
        argv,
        ignore=options.get("ignore_argv"),
        ignore_unknown=bool(options.get("ignore_unknown_flags")),
    )

    def show_version():
        _show_version(options)

    def show_help(help_options=None):
        _show_help(options, flags, help_options)

    if _version_enabled(options) and parsed.flags.get("version") is True:
        log.debug("version requested for %r", options.get("name"))
        show_version()
        sys.exit(0)

    if options.get("help", Unset) is not False and parsed.flags.get("help") is True:
        log.debug("help requested for %r", options.get("name"))
        show_help()
        sys.exit(0)

    mapping = {}
    if options.get("parameters"):
        mapping = resolve_arguments(grammar, parsed.arguments, parsed.separated, show_help=show_help)

    result = ParsedArgv(
        command,
        parsed.flags,
        Arguments(parsed.arguments, parsed.separated, mapping),
        parsed.unknown_flags,
        show_help=show_help,
        show_version=show_version,
    )

    if callable(callback):
        returned = callback(result)
        if inspect.isawaitable(returned):
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                result.pending = returned
            else:
                result.pending = asyncio.ensure_future(returned)

    return result


def cli(options=None, callback=None, argv=None, /):
    """
    Parse argv for a program (and its commands) and run the matching callback.

    Parameters
    - options: program options mapping. Keys: name, version, parameters,
      flags, commands, help (mapping with description, usage, examples,
      version, render; or False), ignore_argv, ignore_unknown_flags.
    - callback: optional callable receiving the ParsedArgv for the program.
    - argv: tokens to parse; defaults to sys.argv[1:].

    Returns
    - ParsedArgv

    Raises
    - ConfigError (and subclasses) for invalid configuration.
    - SystemExit on --version/--help (status 0) and on a missing required
      parameter (status 1).
    """
    if options is None:
        raise ConfigError("Options is required")
    if not isinstance(options, Mapping):
        raise ConfigError("Options must be a mapping")
    if "name" in options and not is_valid_script_name(options["name"]):
        raise ConfigError(f"Invalid script name: {json.dumps(options['name'], ensure_ascii=False, default=str)}")
    if (version := options.get("version")) is not None and not isinstance(version, str):
        raise ConfigError("Version must be a string")
    if callback is not None and not callable(callback):
        raise ConfigError("Callback must be callable")

    validate_options(options, ROOT_OPTIONS)

    commands = options.get("commands") or ()
    if isinstance(commands, str | Mapping) or not all(isinstance(item, Command) for item in commands):
        raise ConfigError("Commands must be a list of commands created with command()")

    argv = sys.argv[1:] if argv is None else list(argv)

    if commands:
        registry = build_registry(commands)
        if argv and is_valid_script_name(argv[0]) and (command := registry.find(argv[0])):
            log.debug("dispatching %r to command %r", argv[0], command.name)
            return _dispatch(command.name, {**command.options, "parent": options}, command.callback, argv[1:])

    return _dispatch(None, options, callback, argv)


__all__ = (
    "ParsedArgv",
    "cli",
)

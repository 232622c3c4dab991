"""
Argyle commands: declaration and registry.

Scope
- Command: immutable (options, callback) pair describing one subcommand.
- command(): validate command options eagerly and build a Command.
- CommandRegistry / build_registry(): name and alias lookup for dispatch.

Command options
- name (required, one word), alias (str or list of str), parameters, flags,
  help (mapping or False), ignore_argv, ignore_unknown_flags.

Notes
- Validation happens when the command is declared; the registry rejects
  duplicate names/aliases when it is built, before any argv is inspected.
- Commands never own a parent; the dispatcher attaches the program options
  to a copy of the command options for help rendering only.
"""
import logging
from collections.abc import Mapping
from types import MappingProxyType

from .faults import ConfigError, DuplicateCommandError
from .flags import normalize_schema
from .parameters import compile_parameters
from .utils import is_valid_script_name

log = logging.getLogger(__name__)

COMMAND_OPTIONS = frozenset((
    "name",
    "alias",
    "parameters",
    "flags",
    "help",
    "ignore_argv",
    "ignore_unknown_flags",
))


def validate_options(options, allowed, /):
    """
    Check option keys and value types shared by programs and commands.

    Raises ConfigError on unknown keys or wrongly-typed values.
    """
    if unknown := set(options) - allowed:
        raise ConfigError(f"Unknown option(s): {', '.join(sorted(map(str, unknown)))}")

    if (parameters := options.get("parameters")) is not None:
        if isinstance(parameters, str) or not all(isinstance(parameter, str) for parameter in parameters):
            raise ConfigError("Parameters must be a list of strings")
        compile_parameters(parameters)

    if (flags := options.get("flags")) is not None:
        normalize_schema(flags)

    if (help := options.get("help")) is not None and help is not False and not isinstance(help, Mapping):
        raise ConfigError("Help must be a mapping of help options or False")

    if (ignore := options.get("ignore_argv")) is not None and not callable(ignore):
        raise ConfigError("ignore_argv must be callable")

    if (alias := options.get("alias")) is not None:
        aliases = [alias] if isinstance(alias, str) else alias
        if not all(isinstance(item, str) and is_valid_script_name(item) for item in aliases):
            raise ConfigError(f"Invalid command alias {alias!r}. Command aliases must be one word.")


class Command:
    """
    a declared subcommand.

    options is a read-only view of the declared command options; callback
    (optional) receives the parsed result when the command is dispatched.
    """
    __slots__ = ("options", "callback")

    def __init__(self, options, callback=None):
        object.__setattr__(self, "options", MappingProxyType(dict(options)))
        object.__setattr__(self, "callback", callback)

    def __setattr__(self, name, value):
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    @property
    def name(self):
        return self.options["name"]

    @property
    def aliases(self):
        alias = self.options.get("alias")
        if alias is None:
            return ()
        return (alias,) if isinstance(alias, str) else tuple(alias)

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"

    def __rich_repr__(self):
        yield "name", self.name
        yield "aliases", self.aliases, ()
        yield "callback", self.callback, None


def command(options=None, callback=None, /):
    """
    Declare a subcommand.

    Parameters
    - options: mapping of command options (see module docstring).
    - callback: optional callable receiving the parsed result.

    Raises
    - ConfigError: options missing, name missing, name not a single word,
      unknown options or wrongly-typed values.
    """
    if options is None:
        raise ConfigError("Command options are required")
    if not isinstance(options, Mapping):
        raise ConfigError("Command options must be a mapping")
    if "name" not in options or options["name"] is None:
        raise ConfigError("Command name is required")
    if not is_valid_script_name(options["name"]):
        raise ConfigError(f'Invalid command name "{options["name"]}". Command names must be one word.')
    if callback is not None and not callable(callback):
        raise ConfigError("Command callback must be callable")

    validate_options(options, COMMAND_OPTIONS)
    return Command(options, callback)


class CommandRegistry(Mapping):
    """
    read-only lookup from command names and aliases to commands.
    """

    def __init__(self, commands=()):
        self._lookup = {}
        self._commands = []
        for command in commands:
            if not isinstance(command, Command):
                raise ConfigError(f"Invalid command: {command!r}. Commands must be created with command()")
            for name in (command.name, *command.aliases):
                if name in self._lookup:
                    raise DuplicateCommandError(f'Duplicate command name found: "{name}"')
                self._lookup[name] = command
            self._commands.append(command)

    def __getitem__(self, name):
        return self._lookup[name]

    def __iter__(self):
        return iter(self._lookup)

    def __len__(self):
        return len(self._lookup)

    @property
    def commands(self):
        return tuple(self._commands)

    def find(self, name):
        """Return the command registered under a name or alias, or None."""
        command = self._lookup.get(name)
        if command is not None:
            log.debug("matched command %r for %r", command.name, name)
        return command


def build_registry(commands, /):
    """Build a registry, raising DuplicateCommandError on any repeated name or alias."""
    return CommandRegistry(commands or ())


__all__ = (
    "Command",
    "CommandRegistry",
    "command",
    "build_registry",
    "validate_options",
    "COMMAND_OPTIONS",
)

"""
Argyle faults (configuration errors, user-input errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the package
  can surface. Codes are grouped by domain to keep logs/searches predictable.
- CommandException: base type carrying message + options; subclasses decide
  how they surface themselves through __trigger__.
- trigger(): central entry point to surface any fault with runtime options.

Two disjoint fault families
- Configuration faults (ConfigError and its subclasses, RenderError) are
  programmer mistakes. They are raised synchronously and never caught
  internally; they abort program startup before any user input is consulted.
- User-input faults (MissingParameterError) are end-user mistakes. They are
  never raised; they print a one-line message to stderr, show help, and exit
  the process with status 1.

Integration
- Library code builds a fault with its message and calls trigger(fault, **ctx).
- Errors raised by user-supplied flag types are not faults; they propagate unchanged.
"""
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - user input (111xx)
      • MISSING_PARAMETER
    - configuration (131xx)
      • MISSING_OPTIONS, INVALID_OPTION, INVALID_SCRIPT_NAME, INVALID_COMMAND,
        DUPLICATE_COMMAND
    - parameter grammar (132xx)
      • INVALID_PARAMETER, DUPLICATE_PARAMETER
    - rendering (133xx)
      • INVALID_NODE
    """
    # --- user input errors (11xxx) ---
    MISSING_PARAMETER   = 11125

    # --- configuration errors (13xxx) ---
    MISSING_OPTIONS     = 13101
    INVALID_OPTION      = 13102
    INVALID_SCRIPT_NAME = 13103
    INVALID_COMMAND     = 13104
    DUPLICATE_COMMAND   = 13105

    # --- parameter grammar errors (13xxx) ---
    INVALID_PARAMETER   = 13201
    DUPLICATE_PARAMETER = 13202

    # --- rendering errors (13xxx) ---
    INVALID_NODE        = 13301


class CommandException(Exception):
    """
    base fault: a message plus read-only options describing the context.

    the default surfacing strategy is to raise; subclasses may override
    __trigger__ to render themselves instead.
    """
    code = None

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)
        if "code" in options:
            self.code = options["code"]

    def __rich__(self):
        return Text(f"Error: {self.message}")

    def __trigger__(self) -> None:
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigError(CommandException):
    code = FaultCode.INVALID_OPTION


class GrammarError(ConfigError):
    code = FaultCode.INVALID_PARAMETER


class DuplicateParameterError(GrammarError):
    code = FaultCode.DUPLICATE_PARAMETER


class DuplicateCommandError(ConfigError):
    code = FaultCode.DUPLICATE_COMMAND


class RenderError(CommandException):
    code = FaultCode.INVALID_NODE


class MissingParameterError(CommandException):
    """
    a required positional parameter received no value.

    options
    - show_help: zero-argument callable printing the help document.

    surfacing prints "Error: <message>" to stderr, shows help, and exits
    with status 1.
    """
    code = FaultCode.MISSING_PARAMETER

    def __trigger__(self) -> None:
        Console(stderr=True).print(self, highlight=False, soft_wrap=True)
        if show_help := self.options.get("show_help"):
            show_help()
        sys.exit(1)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - configuration faults raise; user-input faults print and exit.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "ConfigError",
    "GrammarError",
    "DuplicateParameterError",
    "DuplicateCommandError",
    "RenderError",
    "MissingParameterError",
    "trigger",
)

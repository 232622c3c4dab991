"""
Argyle help renderers.

Scope
- Renderers: the strategy object that turns help document nodes into text.
  Every node type is a method name; render() is the single dispatch point.

Customization
- Pass replacement functions as keyword arguments
  (Renderers(flag_operator=lambda self: "=")) or to override(); they are bound
  to the instance like methods, so they receive self and may call the other
  renderers (self.bold, self.render, ...).
- Plain attribute assignment (renderers.flag_operator = lambda: "=") stores
  an unbound callable taking only the node data.
- render() and the built-in methods look renderers up on the instance, so
  replacements are honored everywhere. New node types work the same way:
  add a renderer under a new name and emit nodes of that type.
- A Renderers instance is built per render cycle; replacements never leak
  into the next one.

Output
- bold/heading use ANSI bold (closed with "normal intensity", so surrounding
  styles survive) when the console supports color and upper-case the text
  otherwise.
- tables are laid out for the console width (see argyle.columns).
"""
import json
import textwrap
from collections.abc import Mapping
from types import MethodType

from rich.console import Console

from .columns import breakpoints, render_columns
from .faults import RenderError
from .help import HelpDocumentNode
from .utils import Unset, coalesce

_BOLD = "\x1b[1m{}\x1b[22m"
_RESERVED = frozenset(("render", "override", "console", "colorful"))


def supports_color(console, /):
    """Whether a rich console will show ANSI styles."""
    return console.color_system is not None and not console.no_color


class Renderers:
    def __init__(self, console=None, /, *, colorful=Unset, **overrides):
        self.console = console if console is not None else Console()
        self.colorful = bool(coalesce(colorful, supports_color(self.console)))
        self.override(**overrides)

    def override(self, **handlers):
        """Replace (or add) node renderers on this instance, bound as methods."""
        for name, handler in handlers.items():
            if name.startswith("_") or name in _RESERVED:
                raise RenderError(f"Invalid node type: {name!r} cannot be overridden")
            if not callable(handler):
                raise RenderError(f"Invalid node type: {name!r} renderer must be callable")
            setattr(self, name, MethodType(handler, self))
        return self

    def text(self, text):
        return text

    def bold(self, text):
        if self.colorful:
            return _BOLD.format(text)
        return text.upper()

    def indent_text(self, data):
        return textwrap.indent(data["text"], " " * data["spaces"], lambda line: True)

    def heading(self, text):
        return self.bold(text)

    def section(self, data):
        title = data.get("title")
        body = data.get("body")
        output = ""
        if title:
            output += self.heading(title) + "\n"
        if body:
            output += self.indent_text({"text": self.render(body), "spaces": data.get("indent_body", 2)})
        return output + "\n"

    def table(self, data):
        rows = [[self.render(cell) for cell in row] for row in data["table_data"]]
        if data.get("table_breakpoints"):
            options = breakpoints(data["table_breakpoints"])
        else:
            options = data.get("table_options")
        return render_columns(rows, options, width=self.console.width, colorful=self.colorful)

    def flag_parameter(self, kind):
        if kind is bool:
            return ""
        if kind is str:
            return "<string>"
        if kind is int or kind is float:
            return "<number>"
        if isinstance(kind, list | tuple) and kind:
            return self.flag_parameter(kind[0])
        return "<value>"

    def flag_operator(self):
        return " "

    def flag_name(self, data):
        flag = data.flag
        text = ""

        if data.alias_formatted:
            text += f"{data.alias_formatted}, "
        elif data.aliases_enabled:
            text += "    "

        text += data.flag_formatted

        if isinstance(flag, Mapping) and isinstance(flag.get("placeholder"), str):
            text += f"{self.flag_operator()}{flag['placeholder']}"
        elif placeholder := self.flag_parameter(flag["type"] if isinstance(flag, Mapping) else flag):
            text += f"{self.flag_operator()}{placeholder}"

        return text

    def flag_default(self, value):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)

    def flag_description(self, data):
        flag = data.flag
        if not isinstance(flag, Mapping):
            return ""

        text = flag.get("description") or ""

        if "default" in flag:
            default = flag["default"]
            if callable(default):
                default = default()
            if default:
                text += f" (default: {self.flag_default(default)})"

        return text

    def render(self, nodes):
        """
        Render a string, a node, or a list of those (joined by newlines).

        Nodes are HelpDocumentNode instances or mappings with "type" and
        "data"; the type names the renderer to call with the node data.
        """
        if isinstance(nodes, str):
            return nodes

        if isinstance(nodes, list | tuple):
            return "\n".join(self.render(node) for node in nodes)

        if isinstance(nodes, HelpDocumentNode):
            kind, data = nodes.type, nodes.data
        elif isinstance(nodes, Mapping) and "type" in nodes:
            kind, data = nodes["type"], nodes.get("data")
        else:
            raise RenderError(f"Invalid node type: {nodes!r}")

        if not isinstance(kind, str) or kind.startswith("_") or kind in _RESERVED:
            raise RenderError(f"Invalid node type: {nodes!r}")

        renderer = getattr(self, kind, None)
        if not callable(renderer):
            raise RenderError(f"Invalid node type: {nodes!r}")

        return renderer(data)


def render(nodes, renderers=None, /):
    """Render nodes with the given (or a default) Renderers instance."""
    return (renderers if renderers is not None else Renderers()).render(nodes)


__all__ = (
    "Renderers",
    "supports_color",
    "render",
)

"""
Help renderer tests.

Scope
- Color detection and the plain/ANSI bold fallbacks.
- Built-in node renderers: text, indent_text, section, flag_parameter,
  flag_name, flag_description, table.
- Dispatch by node type, per-instance overrides and custom node types.
- A whole document rendered at wide, medium and narrow widths.

Conventions
- Test method names follow CamelCase per project convention.
- Consoles are built with an explicit width and color system so results do
  not depend on the terminal running the tests.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from argyle.faults import RenderError
from argyle.help import FlagData, HelpDocumentNode, generate_help, render_flags
from argyle.renderers import Renderers, render, supports_color

HELP = {"type": bool, "alias": "h", "description": "Show help"}


def plain(width=120, **overrides):
    return Renderers(Console(width=width, color_system=None), colorful=False, **overrides)


def flag(name, entry, aliases_enabled=False, alias=None):
    return FlagData(name, entry, f"--{name}", aliases_enabled, alias)


class TestColor(TestCase):
    def testSupportsColor(self):
        self.assertFalse(supports_color(Console(color_system=None)))
        self.assertTrue(supports_color(Console(force_terminal=True, color_system="standard", no_color=False)))
        self.assertFalse(supports_color(Console(force_terminal=True, color_system="standard", no_color=True)))

    def testPlainBoldUppercases(self):
        self.assertEqual(plain().bold("Flags:"), "FLAGS:")
        self.assertEqual(plain().heading("Usage:"), "USAGE:")

    def testColorfulBold(self):
        renderers = Renderers(Console(width=80, color_system=None), colorful=True)
        self.assertEqual(renderers.heading("Flags:"), "\x1b[1mFlags:\x1b[22m")

    def testColorfulBoldKeepsSurroundingStyles(self):
        renderers = Renderers(Console(width=80, color_system=None), colorful=True)
        underlined = f"\x1b[4m{renderers.bold('Flags')}:\x1b[24m"
        self.assertEqual(underlined, "\x1b[4m\x1b[1mFlags\x1b[22m:\x1b[24m")
        self.assertNotIn("\x1b[0m", underlined)

    def testDetectedFromConsole(self):
        console = Console(force_terminal=True, color_system="standard", no_color=False)
        self.assertTrue(Renderers(console).colorful)
        self.assertFalse(Renderers(Console(color_system=None)).colorful)


class TestNodeRenderers(TestCase):
    def setUp(self):
        self.renderers = plain()

    def testText(self):
        self.assertEqual(self.renderers.render(HelpDocumentNode("text", "hello\n")), "hello\n")

    def testIndentText(self):
        self.assertEqual(self.renderers.indent_text({"text": "a\n\nb", "spaces": 2}), "  a\n  \n  b")

    def testSection(self):
        self.assertEqual(
            self.renderers.section({"title": "Usage:", "body": "npm <command>"}),
            "USAGE:\n  npm <command>\n",
        )
        self.assertEqual(self.renderers.section({"title": "Usage:"}), "USAGE:\n\n")
        self.assertEqual(self.renderers.section({"body": "x", "indent_body": 0}), "x\n")

    def testFlagParameter(self):
        self.assertEqual(self.renderers.flag_parameter(bool), "")
        self.assertEqual(self.renderers.flag_parameter(str), "<string>")
        self.assertEqual(self.renderers.flag_parameter(int), "<number>")
        self.assertEqual(self.renderers.flag_parameter(float), "<number>")
        self.assertEqual(self.renderers.flag_parameter([str]), "<string>")
        self.assertEqual(self.renderers.flag_parameter(lambda value: value), "<value>")

    def testFlagOperator(self):
        self.assertEqual(self.renderers.flag_operator(), " ")

    def testFlagName(self):
        self.assertEqual(self.renderers.flag_name(flag("help", HELP, True, "-h")), "-h, --help")
        self.assertEqual(self.renderers.flag_name(flag("name", str, True)), "    --name <string>")
        self.assertEqual(self.renderers.flag_name(flag("tag", {"type": [str]})), "--tag <string>")
        self.assertEqual(
            self.renderers.flag_name(flag("out", {"type": str, "placeholder": "<dir>"})),
            "--out <dir>",
        )

    def testFlagDescription(self):
        self.assertEqual(self.renderers.flag_description(flag("help", HELP)), "Show help")
        self.assertEqual(self.renderers.flag_description(flag("name", str)), "")
        self.assertEqual(
            self.renderers.flag_description(flag("mode", {"type": str, "description": "Mode", "default": "dev"})),
            'Mode (default: "dev")',
        )
        self.assertEqual(
            self.renderers.flag_description(flag("size", {"type": int, "description": "Size", "default": lambda: 3})),
            "Size (default: 3)",
        )
        self.assertEqual(
            self.renderers.flag_description(flag("size", {"type": int, "description": "Size", "default": 0})),
            "Size",
        )

    def testFlagDefault(self):
        self.assertEqual(self.renderers.flag_default(["a", "b"]), '["a","b"]')
        self.assertEqual(self.renderers.flag_default({"a": 1}), '{"a":1}')

    def testListsJoinWithNewlines(self):
        self.assertEqual(self.renderers.render(["a", HelpDocumentNode("text", "b")]), "a\nb")

    def testMappingNodes(self):
        self.assertEqual(self.renderers.render({"type": "text", "data": "x"}), "x")


class TestNodeDispatch(TestCase):
    def testInvalidNodeTypes(self):
        renderers = plain()
        for node in ({"type": "nope"}, {"type": "render"}, {"type": "_private"}, {"data": "x"}, 42):
            with self.subTest(node=node), self.assertRaisesRegex(RenderError, "Invalid node type"):
                renderers.render(node)

    def testOverrideAtConstruction(self):
        renderers = plain(flag_operator=lambda self: "=")
        self.assertEqual(renderers.flag_name(flag("name", str)), "--name=<string>")

    def testOverrideByAssignment(self):
        renderers = plain()
        renderers.flag_operator = lambda: "="
        self.assertEqual(renderers.render(HelpDocumentNode("flag_name", flag("name", str))), "--name=<string>")

    def testCustomNodeType(self):
        renderers = plain().override(shout=lambda self, data: data.upper())
        self.assertEqual(renderers.render([{"type": "shout", "data": "custom"}, "plain"]), "CUSTOM\nplain")

    def testOverridesAreBoundToTheInstance(self):
        renderers = plain(shout=lambda self, data: self.bold(data))
        self.assertEqual(renderers.render({"type": "shout", "data": "hi"}), "HI")

    def testOverrideCanRenderNestedNodes(self):
        def boxed(self, data):
            return f"[{self.render(data)}]"

        renderers = plain().override(boxed=boxed)
        self.assertEqual(renderers.render({"type": "boxed", "data": HelpDocumentNode("text", "x")}), "[x]")

    def testOverriddenBuiltinIsUsedByOtherRenderers(self):
        renderers = plain(heading=lambda self, text: f"== {self.bold(text)} ==")
        self.assertEqual(renderers.section({"title": "Usage:", "body": "x"}), "== USAGE: ==\n  x\n")

    def testReservedNamesCannotBeOverridden(self):
        for name in ("render", "override", "_private"):
            with self.subTest(name=name), self.assertRaises(RenderError):
                plain().override(**{name: lambda data: data})

    def testOverrideMustBeCallable(self):
        with self.assertRaises(RenderError):
            plain(text="not callable")

    def testOverridesDoNotLeak(self):
        plain(flag_operator=lambda self: "=")
        self.assertEqual(plain().flag_operator(), " ")

    def testModuleRender(self):
        self.assertEqual(render(["a", "b"], plain()), "a\nb")


class TestDocument(TestCase):
    def testFlagsTableWide(self):
        table = render_flags({"help": HELP})
        self.assertEqual(plain(120).render(table), "  -h, --help        Show help")

    def testFlagsTableStacked(self):
        table = render_flags({"help": HELP})
        self.assertEqual(plain(60).render(table), "  -h, --help\n  Show help\n")

    def testFlagsTableNarrowDoesNotWrap(self):
        table = render_flags({"help": HELP})
        self.assertEqual(plain(30).render(table), "  -h, --help        Show help")

    def testWholeDocument(self):
        nodes = generate_help({"name": "npm", "version": "1.0.0", "flags": {"help": HELP}})
        self.assertEqual(
            plain().render(nodes),
            "npm v1.0.0\n"
            "\n"
            "USAGE:\n"
            "  npm [flags...]\n"
            "\n"
            "FLAGS:\n"
            "  -h, --help        Show help\n",
        )


if __name__ == "__main__":
    unittest.main()

"""
Help document generation tests.

Scope
- Section builders: name/version (own, help-only and inherited), description,
  explicit and synthesized usage, commands, flags, examples, aliases.
- Document order and node ids.
- Flags table: sorting, shared alias column, breakpoints.

Conventions
- Test method names follow CamelCase per project convention.
- generate_help() is pure; these tests never render or print.
"""
import unittest
from unittest import TestCase

from argyle.commands import command
from argyle.help import FLAG_TABLE_BREAKPOINTS, FlagData, HelpDocumentNode, generate_help, render_flags


def node(nodes, id):
    return next(item for item in nodes if item.id == id)


class TestNameAndVersion(TestCase):
    def testNameAndVersion(self):
        nodes = generate_help({"name": "npm", "version": "1.0.0"})
        self.assertEqual(nodes[0], HelpDocumentNode("text", "npm v1.0.0\n", id="name"))

    def testHelpVersion(self):
        nodes = generate_help({"name": "npm", "help": {"version": "2.0.0"}})
        self.assertEqual(nodes[0].data, "npm v2.0.0\n")

    def testInheritedFromParent(self):
        nodes = generate_help({"name": "install", "parent": {"name": "npm", "version": "3.0.0"}})
        self.assertEqual(nodes[0].data, "npm install v3.0.0\n")

    def testVersionOnly(self):
        nodes = generate_help({"version": "1.2.3"})
        self.assertEqual(nodes[0].data, "v1.2.3\n")

    def testNothingToShow(self):
        self.assertEqual(generate_help({}), [])


class TestUsage(TestCase):
    def testSynthesized(self):
        nodes = generate_help({"name": "cp", "flags": {"force": bool}, "parameters": ["<source>", "[target]"]})
        self.assertEqual(node(nodes, "usage").data, {"title": "Usage:", "body": "cp [flags...] <source> [target]"})

    def testOptionalSeparator(self):
        nodes = generate_help({"name": "run", "parameters": ["<script>", "--", "[args...]"]})
        self.assertEqual(node(nodes, "usage").data["body"], "run <script> [--] [args...]")

    def testRequiredSeparator(self):
        nodes = generate_help({"name": "run", "parameters": ["<script>", "--", "<args...>"]})
        self.assertEqual(node(nodes, "usage").data["body"], "run <script> -- <args...>")

    def testCommandsLine(self):
        install = command({"name": "install"})
        nodes = generate_help({"name": "npm", "flags": {"help": bool}, "commands": [install]})
        self.assertEqual(node(nodes, "usage").data["body"], "npm [flags...]\nnpm <command>")

    def testSubcommandUsesFullName(self):
        nodes = generate_help({"name": "install", "parameters": ["<package>"], "parent": {"name": "npm"}})
        self.assertEqual(node(nodes, "usage").data["body"], "npm install <package>")

    def testNameAloneHasNoUsage(self):
        nodes = generate_help({"name": "npm"})
        self.assertEqual([item.id for item in nodes], ["name"])

    def testExplicitString(self):
        nodes = generate_help({"name": "npm", "help": {"usage": "npm <thing>"}})
        self.assertEqual(node(nodes, "usage").data["body"], "npm <thing>")

    def testExplicitList(self):
        nodes = generate_help({"name": "npm", "help": {"usage": ["npm a", "npm b"]}})
        self.assertEqual(node(nodes, "usage").data["body"], "npm a\nnpm b")

    def testExplicitFalseSuppresses(self):
        nodes = generate_help({"name": "npm", "flags": {"help": bool}, "help": {"usage": False}})
        self.assertNotIn("usage", [item.id for item in nodes])


class TestSections(TestCase):
    def testOrder(self):
        install = command({"name": "install", "help": {"description": "Install a package"}})
        nodes = generate_help({
            "name": "install",
            "version": "1.0.0",
            "alias": ["i", "add"],
            "flags": {"global": bool},
            "commands": [install],
            "help": {"description": "Install things", "examples": ["npm i lodash", "npm add rich"]},
        })
        self.assertEqual(
            [item.id for item in nodes],
            ["name", "description", "usage", "commands", "flags", "examples", "aliases"],
        )

    def testDescription(self):
        nodes = generate_help({"help": {"description": "Does things"}})
        self.assertEqual(nodes, [HelpDocumentNode("text", "Does things\n", id="description")])

    def testCommandsTable(self):
        install = command({"name": "install", "help": {"description": "Install a package"}})
        run = command({"name": "run"})
        section = node(generate_help({"commands": [install, run]}), "commands")
        self.assertEqual(section.type, "section")
        self.assertEqual(section.data["title"], "Commands:")
        self.assertEqual(section.data["indent_body"], 0)
        self.assertEqual(section.data["body"].type, "table")
        self.assertEqual(section.data["body"].data["table_data"], [["install", "Install a package"], ["run", ""]])

    def testFlagsSection(self):
        section = node(generate_help({"flags": {"help": bool}}), "flags")
        self.assertEqual(section.data["title"], "Flags:")
        self.assertEqual(section.data["indent_body"], 0)
        self.assertEqual(section.data["body"].data["table_breakpoints"], FLAG_TABLE_BREAKPOINTS)

    def testExamplesJoined(self):
        section = node(generate_help({"help": {"examples": ["a", "b"]}}), "examples")
        self.assertEqual(section.data, {"title": "Examples:", "body": "a\nb"})

    def testEmptyExamplesSkipped(self):
        self.assertEqual(generate_help({"help": {"examples": []}}), [])

    def testAliases(self):
        self.assertEqual(node(generate_help({"alias": ["i", "add"]}), "aliases").data["body"], "i, add")
        self.assertEqual(node(generate_help({"alias": "i"}), "aliases").data["body"], "i")


class TestFlagsTable(TestCase):
    def testSortedRows(self):
        table = render_flags({"zeta": str, "alpha": int, "Beta": bool})
        self.assertEqual([row[0].data.name for row in table.data["table_data"]], ["alpha", "Beta", "zeta"])

    def testRowCells(self):
        table = render_flags({"dryRun": bool})
        name, description = table.data["table_data"][0]
        self.assertEqual(name.type, "flag_name")
        self.assertEqual(description.type, "flag_description")
        self.assertIs(name.data, description.data)
        self.assertEqual(name.data, FlagData("dryRun", bool, "--dry-run", False, None))

    def testAliasesEnabledForEveryRow(self):
        table = render_flags({"alpha": str, "zeta": {"type": bool, "alias": "z"}})
        rows = [row[0].data for row in table.data["table_data"]]
        self.assertTrue(all(row.aliases_enabled for row in rows))
        self.assertIsNone(rows[0].alias_formatted)
        self.assertEqual(rows[1].alias_formatted, "-z")

    def testBreakpoints(self):
        self.assertEqual(list(FLAG_TABLE_BREAKPOINTS), ["> 80", "> 40", "> 0"])
        self.assertEqual(FLAG_TABLE_BREAKPOINTS["> 0"]["stdout_columns"], 1000)


if __name__ == "__main__":
    unittest.main()

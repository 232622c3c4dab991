"""
Tests for the utility helpers.

Scope
- Case conversion between free-form names, camel-cased keys and kebab-cased switches.
- Script/command name validation.
- The Unset sentinel and coalesce().

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argyle.utils import Unset, UnsetType, coalesce, camel_case, kebab_case, is_valid_script_name


class TestCaseConversion(TestCase):
    def testCamelCaseJoinsWords(self):
        self.assertEqual(camel_case("hello-world"), "helloWorld")
        self.assertEqual(camel_case("value_name-here"), "valueNameHere")

    def testCamelCaseCollapsesSeparators(self):
        self.assertEqual(camel_case("hello--world"), "helloWorld")

    def testCamelCaseEdges(self):
        self.assertEqual(camel_case("-hello"), "Hello")
        self.assertEqual(camel_case("hello-"), "hello")
        self.assertEqual(camel_case("1value"), "1value")
        self.assertEqual(camel_case("alreadyCamel"), "alreadyCamel")

    def testKebabCaseFromCamel(self):
        self.assertEqual(kebab_case("helloWorld"), "hello-world")
        self.assertEqual(kebab_case("dryRunMode"), "dry-run-mode")

    def testKebabCaseFromSnake(self):
        self.assertEqual(kebab_case("dry_run"), "dry-run")

    def testKebabCaseKeepsPlainNames(self):
        self.assertEqual(kebab_case("help"), "help")
        self.assertEqual(kebab_case("Beta"), "beta")

    def testNonStringRaises(self):
        with self.assertRaises(TypeError):
            camel_case(1)
        with self.assertRaises(TypeError):
            kebab_case(None)


class TestScriptName(TestCase):
    def testSingleWordIsValid(self):
        self.assertTrue(is_valid_script_name("npm"))
        self.assertTrue(is_valid_script_name("run-script"))

    def testWhitespaceIsInvalid(self):
        self.assertFalse(is_valid_script_name("run script"))
        self.assertFalse(is_valid_script_name("tab\tname"))

    def testEmptyOrMissingIsInvalid(self):
        self.assertFalse(is_valid_script_name(""))
        self.assertFalse(is_valid_script_name(None))


class TestUnset(TestCase):
    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testCannotSubclass(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


if __name__ == "__main__":
    unittest.main()

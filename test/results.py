"""
Results module behavioral tests.

Scope
- Validate retrieval by descriptor identity, defaults and membership.
- Validate that results are read-only snapshots of one parse.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argship import Option, Parser, ParseResult


class TestParseResult(TestCase):
    """Behavioral tests for ParseResult."""

    def setUp(self):
        self.parser = Parser("tool")
        self.name = self.parser.add_option("--name")
        self.include = self.parser.add_option("--include", "-I", kind=list[str])
        self.verbose = self.parser.add_option("--verbose", kind=bool)
        self.build = self.parser.add_subparser("build")

    def testGetPresent(self):
        result = self.parser.parse(["--name", "x", "-I", "a", "--include", "b"])
        self.assertIsInstance(result, ParseResult)
        self.assertEqual(result.get(self.name), "x")
        self.assertEqual(result.get(self.include), ["a", "b"])

    def testGetAbsentUsesDefault(self):
        result = self.parser.parse([])
        self.assertIsNone(result.get(self.name))
        self.assertEqual(result.get(self.name, "fallback"), "fallback")
        self.assertNotIn(self.verbose, result)

    def testContains(self):
        result = self.parser.parse(["--verbose"])
        self.assertIn(self.verbose, result)
        self.assertIs(result.get(self.verbose), True)
        self.assertNotIn(self.name, result)

    def testForeignDescriptorIsAbsent(self):
        result = self.parser.parse(["--name", "x"])
        self.assertNotIn(Option("--name"), result)

    def testGetRejectsNonDescriptors(self):
        result = self.parser.parse([])
        with self.assertRaises(TypeError):
            result.get("--name")

    def testRepeatedValuesAreCopies(self):
        result = self.parser.parse(["-I", "a"])
        values = result.get(self.include)
        values.append("mutated")
        self.assertEqual(result.get(self.include), ["a"])

    def testResultsAreIndependent(self):
        first = self.parser.parse(["--name", "one"])
        second = self.parser.parse(["--name", "two"])
        self.assertEqual(first.get(self.name), "one")
        self.assertEqual(second.get(self.name), "two")

    def testSubparserSelection(self):
        result = self.parser.parse(["build"])
        self.assertEqual(result.subparser(self.parser), "build")
        self.assertIsNone(result.subparser(self.build))
        self.assertEqual(result.selections, ((self.parser, "build"),))
        self.assertIs(result.parser, self.parser)

    def testNoSubparserSelected(self):
        result = self.parser.parse(["--verbose"])
        self.assertIsNone(result.subparser(self.parser))
        self.assertEqual(result.selections, ())

    def testSubparserRejectsNonParsers(self):
        with self.assertRaises(TypeError):
            self.parser.parse([]).subparser("build")

    def testRepr(self):
        result = self.parser.parse(["build"])
        self.assertIn("selections=(('tool', 'build'),)", repr(result))


if __name__ == "__main__":
    unittest.main()

# python
"""
Arguments module behavioral tests (descriptors, arities, validation).

Scope
- Validate public descriptors (Cardinal, Option): construction, normalization, arity.
- Validate metadata constraints (names validation, usage trimming, explicit None rejected).
- Validate identity semantics and representations.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import enum
import unittest
from unittest import TestCase

from argship import Arity, Cardinal, Option, INT, STRING, ChoiceKind, ConversionError


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class TestCardinal(TestCase):
    """Behavioral tests for Cardinal (positional) descriptors."""

    def testCardinalDefaults(self):
        c = Cardinal("FILE")
        self.assertEqual(c.label, "FILE")
        self.assertIs(c.kind, STRING)
        self.assertIs(c.arity, Arity.SCALAR)
        self.assertIsNone(c.usage)
        self.assertFalse(c.optional)

    def testCardinalLabelIsTrimmed(self):
        self.assertEqual(Cardinal("  FILE ").label, "FILE")

    def testCardinalLabelMustBeNonEmpty(self):
        with self.assertRaises(ValueError):
            Cardinal("   ")

    def testCardinalLabelMayContainSpaces(self):
        self.assertEqual(Cardinal("package name").label, "package name")

    def testCardinalUsageExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Cardinal("FILE", usage=None)

    def testCardinalUsageEmptyRejected(self):
        with self.assertRaises(ValueError):
            Cardinal("FILE", usage="  ")

    def testCardinalCannotBeArrayValued(self):
        with self.assertRaises(TypeError):
            Cardinal("FILES", kind=list[str])

    def testCardinalKindResolution(self):
        self.assertIs(Cardinal("N", kind=int).kind, INT)
        self.assertEqual(Cardinal("C", kind=Color).typename, "Color")

    def testCardinalConvert(self):
        c = Cardinal("N", kind=int)
        self.assertEqual(c.convert("42"), 42)
        with self.assertRaises(ConversionError):
            c.convert("forty-two")

    def testCardinalOptionalFlag(self):
        self.assertTrue(Cardinal("FILE", optional=True).optional)

    def testCardinalUnsupportedKindRejected(self):
        with self.assertRaises(TypeError):
            Cardinal("X", kind=float)


class TestOption(TestCase):
    """Behavioral tests for Option (named) descriptors."""

    def testOptionNames(self):
        o = Option("--branch", "-b")
        self.assertEqual(o.names, ("--branch", "-b"))
        self.assertEqual(o.name, "--branch")
        self.assertEqual(o.shortname, "-b")

    def testOptionWithoutShortname(self):
        self.assertIsNone(Option("--branch").shortname)

    def testOptionNamesRejectUnderscore(self):
        with self.assertRaises(ValueError):
            Option("--no_fly")

    def testOptionNamesRequireDash(self):
        with self.assertRaises(ValueError):
            Option("branch")

    def testOptionNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            Option(5)

    def testOptionDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            Option("--dup", "--dup")

    def testOptionNamesAllowI18N(self):
        o = Option("--名-前")
        self.assertIn("--名-前", o.names)

    def testOptionSingleDashLongNames(self):
        self.assertEqual(Option("-Xld", kind=list[str]).name, "-Xld")

    def testOptionArityFromKind(self):
        self.assertIs(Option("--name").arity, Arity.SCALAR)
        self.assertIs(Option("--count", kind=int).arity, Arity.SCALAR)
        self.assertIs(Option("--verbose", kind=bool).arity, Arity.FLAG)
        self.assertIs(Option("--include", kind=list[str]).arity, Arity.REPEATED)
        self.assertIs(Option("--mode", kind=ChoiceKind(["a", "b"])).arity, Arity.SCALAR)

    def testOptionTypename(self):
        self.assertEqual(Option("--count", kind=int).typename, "Int")
        self.assertEqual(Option("--include", kind=list[str]).typename, "[String]")

    def testOptionUsageTrimmed(self):
        self.assertEqual(Option("--name", usage="  The name ").usage, "The name")

    def testOptionUsageExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Option("--name", usage=None)


class TestIdentity(TestCase):
    """Descriptors are compared by identity, never by declaration content."""

    def testSameNamesAreDistinct(self):
        first, second = Option("--name"), Option("--name")
        self.assertNotEqual(first, second)
        self.assertEqual(len({first, second}), 2)

    def testDescriptorIsHashable(self):
        c = Cardinal("FILE")
        self.assertEqual({c: 1}[c], 1)


class TestRepresentation(TestCase):
    """Representations expose the introspectable fields in declaration order."""

    def testCardinalRepr(self):
        self.assertTrue(repr(Cardinal("FILE")).startswith("cardinal(label='FILE', kind=Kind('String')"))

    def testOptionRepr(self):
        self.assertTrue(repr(Option("--branch", "-b")).startswith("option(names=('--branch', '-b')"))

    def testRichRepr(self):
        fields = dict(Option("--verbose", kind=bool, usage="Talk").__rich_repr__())
        self.assertEqual(fields["names"], ("--verbose",))
        self.assertIs(fields["arity"], Arity.FLAG)
        self.assertEqual(fields["usage"], "Talk")

    def testFieldsAreReadOnly(self):
        o = Option("--branch")
        with self.assertRaises(AttributeError):
            o.names = ("--other",)


if __name__ == "__main__":
    unittest.main()

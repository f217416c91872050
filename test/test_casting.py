"""
Coercion tests (permissive coercion policy).

Scope
- Validate str/float/bool/untyped coercion as applied to positional and option tokens.
- Validate the numeric grammar (decimal, prefixed integers, Infinity, nan fallback).
- Validate the Boolean coercion law.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from burrow.casting import cast, number, boolean, malformed
from burrow.utils import Unset


class TestNumber(TestCase):
    """Numeric parse used by Number and Boolean definitions."""

    def testDecimalForms(self):
        self.assertEqual(number("42"), 42.0)
        self.assertEqual(number("-1.5e3"), -1500.0)
        self.assertEqual(number(".5"), 0.5)
        self.assertEqual(number("3."), 3.0)

    def testSurroundingWhitespaceIgnored(self):
        self.assertEqual(number("  7 "), 7.0)

    def testEmptyTokenIsZero(self):
        self.assertEqual(number(""), 0.0)

    def testPrefixedIntegers(self):
        self.assertEqual(number("0x10"), 16.0)
        self.assertEqual(number("0o17"), 15.0)
        self.assertEqual(number("0b101"), 5.0)

    def testInfinity(self):
        self.assertEqual(number("Infinity"), math.inf)
        self.assertEqual(number("-Infinity"), -math.inf)

    def testMalformedIsNan(self):
        for token in ("abc", "inf", "nan", "1_000", "1.2.3", "12px", "\u0661\u0662", "\uff13"):
            with self.subTest(token=token):
                self.assertTrue(math.isnan(number(token)))

    def testAlwaysFloat(self):
        self.assertIsInstance(number("3"), float)


class TestBoolean(TestCase):
    """Boolean coercion law."""

    def testFalseInAnyCasing(self):
        for token in ("false", "FALSE", "False", "fAlSe"):
            with self.subTest(token=token):
                self.assertIs(boolean(token), False)

    def testZeroIsFalse(self):
        self.assertIs(boolean("0"), False)
        self.assertIs(boolean("0.0"), False)

    def testNonZeroIsTrue(self):
        self.assertIs(boolean("2"), True)
        self.assertIs(boolean("-1"), True)

    def testNotANumberIsTrue(self):
        self.assertIs(boolean("yes"), True)
        self.assertIs(boolean("no"), True)


class TestCast(TestCase):
    """cast() dispatch on declared types."""

    def testStringPassthrough(self):
        self.assertEqual(cast(" a b ", str), " a b ")

    def testNumber(self):
        self.assertEqual(cast("12", float), 12.0)
        self.assertTrue(math.isnan(cast("twelve", float)))

    def testBoolean(self):
        self.assertIs(cast("false", bool), False)
        self.assertIs(cast("yes", bool), True)

    def testUntypedIsNone(self):
        self.assertIsNone(cast("anything", Unset))
        self.assertIsNone(cast("anything"))

    def testMalformedOnlyForNumbers(self):
        self.assertTrue(malformed("abc", float))
        self.assertFalse(malformed("12", float))
        self.assertFalse(malformed("abc", bool))
        self.assertFalse(malformed("abc", str))


if __name__ == "__main__":
    unittest.main()

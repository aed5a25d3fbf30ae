# python
"""
Normalizer module behavioral tests (decoding, splitting and rule priority).

Conventions
- Test method names follow CamelCase per project convention.
- resolve() is exercised against a small fixed registry.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argstream import Registry
from argstream.normalizer import Rule, decode, split_attached, split_glued, resolve


class TestDecode(TestCase):
    """Behavioral tests for strict UTF-8 decoding."""

    def testValidText(self):
        self.assertEqual(decode(b"--help"), "--help")
        self.assertEqual(decode("héllo".encode()), "héllo")
        self.assertEqual(decode(b""), "")

    def testInvalidText(self):
        self.assertIsNone(decode(b"-\xff"))
        self.assertIsNone(decode(b"\xed\xa0\x80"))  # encoded surrogate

    def testRequiresBytes(self):
        with self.assertRaises(TypeError):
            decode("--help")


class TestSplitting(TestCase):
    """Behavioral tests for the '=' and glued splitters."""

    def testAttachedSplitsAtFirstEquals(self):
        self.assertEqual(split_attached("--threads=8"), ("--threads", "8"))
        self.assertEqual(split_attached("-j=a=b"), ("-j", "a=b"))
        self.assertEqual(split_attached("-j="), ("-j", ""))

    def testAttachedNeedsDashAndEquals(self):
        self.assertIsNone(split_attached("a=b"))
        self.assertIsNone(split_attached("--threads"))

    def testGluedSplitsAfterShortKey(self):
        self.assertEqual(split_glued("-j5"), ("-j", "5"))
        self.assertEqual(split_glued("-j=5"), ("-j", "=5"))

    def testGluedNeedsSingleDashAndTrailer(self):
        self.assertIsNone(split_glued("-j"))
        self.assertIsNone(split_glued("--j5"))
        self.assertIsNone(split_glued("j5"))
        self.assertIsNone(split_glued(""))


class TestResolve(TestCase):
    """Behavioral tests for the first-match-wins rule order."""

    def setUp(self):
        self.registry = (
            Registry()
            .with_switches(["-h", "--help"])
            .with_options(["-j", "--threads"])
            .with_command("build")
        )

    def testExactSwitch(self):
        keyword, value, rule = resolve("-h", self.registry)
        self.assertEqual(keyword.text, "-h")
        self.assertIsNone(value)
        self.assertIs(rule, Rule.SWITCH)

    def testExactOptionLeavesValueToCaller(self):
        resolution = resolve("--threads", self.registry)
        self.assertEqual(resolution.keyword.text, "--threads")
        self.assertIsNone(resolution.value)
        self.assertIs(resolution.rule, Rule.OPTION)

    def testAttachedBeatsGlued(self):
        resolution = resolve("-j=5", self.registry)
        self.assertEqual((resolution.keyword.text, resolution.value), ("-j", "5"))
        self.assertIs(resolution.rule, Rule.ATTACHED)

    def testAttachedEmptyValue(self):
        resolution = resolve("--threads=", self.registry)
        self.assertEqual(resolution.value, "")
        self.assertIs(resolution.rule, Rule.ATTACHED)

    def testGluedShortOption(self):
        resolution = resolve("-j5", self.registry)
        self.assertEqual((resolution.keyword.text, resolution.value), ("-j", "5"))
        self.assertIs(resolution.rule, Rule.GLUED)

    def testGluedKeepsLaterEquals(self):
        resolution = resolve("-jx=5", self.registry)
        self.assertEqual(resolution.value, "x=5")
        self.assertIs(resolution.rule, Rule.GLUED)

    def testLongOptionsDoNotGlue(self):
        self.assertIsNone(resolve("--threads8", self.registry))

    def testSwitchWithAttachedValueFallsThrough(self):
        self.assertIsNone(resolve("-h=1", self.registry))
        self.assertIsNone(resolve("--help=yes", self.registry))

    def testSwitchesDoNotGlue(self):
        self.assertIsNone(resolve("-hv", self.registry))

    def testPositionalAndCommandsAreLeftToCaller(self):
        self.assertIsNone(resolve("extra", self.registry))
        self.assertIsNone(resolve("build", self.registry))
        self.assertIsNone(resolve("", self.registry))
        self.assertIsNone(resolve("-", self.registry))


if __name__ == "__main__":
    unittest.main()

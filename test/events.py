# python
"""
Events module behavioral tests (value semantics, raw bytes, pattern matching).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import dataclasses
import pathlib
import unittest
from unittest import TestCase

from argstream import Argument, Key, KeyWithValue, Command, Other, InvalidUtf8, Path


class TestEvents(TestCase):
    """Behavioral tests for the event variants."""

    def testAllVariantsDeriveFromArgument(self):
        for event in (Key("-h"), KeyWithValue("-j", "4"), Command("build"), Other("x"), InvalidUtf8(b"\xff"), Path("x")):
            with self.subTest(event=event):
                self.assertIsInstance(event, Argument)

    def testFrozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            Key("-h").name = "-v"

    def testHashable(self):
        self.assertEqual(len({Other("x"), Other("x"), Path("x")}), 2)

    def testRawBytes(self):
        self.assertEqual(Key("--help").raw, b"--help")
        self.assertEqual(KeyWithValue("-j", "4").raw, b"-j=4")
        self.assertEqual(Command("build").raw, b"build")
        self.assertEqual(Other("héllo").raw, "héllo".encode())
        self.assertEqual(InvalidUtf8(b"-\xff").raw, b"-\xff")
        self.assertEqual(Path("a.txt").raw, b"a.txt")

    def testBaseIsAbstract(self):
        with self.assertRaises(TypeError):
            Argument()

    def testPathProperty(self):
        self.assertEqual(Path("dir/a.txt").path, pathlib.Path("dir", "a.txt"))

    def testPatternMatching(self):
        def describe(event):
            match event:
                case KeyWithValue("-j", value):
                    return "jobs=%s" % value
                case Key(name):
                    return "switch %s" % name
                case Other(value) | Path(value):
                    return "positional %s" % value
                case InvalidUtf8(value):
                    return "bytes %r" % value
            return "other"

        self.assertEqual(describe(KeyWithValue("-j", "4")), "jobs=4")
        self.assertEqual(describe(Key("-h")), "switch -h")
        self.assertEqual(describe(Path("a")), "positional a")
        self.assertEqual(describe(InvalidUtf8(b"\xff")), "bytes b'\\xff'")
        self.assertEqual(describe(Command("build")), "other")


if __name__ == "__main__":
    unittest.main()

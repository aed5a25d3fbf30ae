# python
"""
Utilities module behavioral tests (Unset, coalesce, rename, storage guard, ordinals).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argstream.utils import Unset, UnsetType, StorageGuard, coalesce, rename, view, ordinal


class TestUnset(TestCase):
    """Behavioral tests for the sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Custom(UnsetType):  # NOQA: F-841
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "x"), "x")
        self.assertIsNone(coalesce(None, "x"))
        self.assertEqual(coalesce(b"", "x"), b"")


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testDirectForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("other")
        def function():
            pass

        self.assertEqual(function.__name__, "other")

    def testArgumentChecks(self):
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(len, "x")
        with self.assertRaises(TypeError):
            rename()


class TestStorageGuard(TestCase):
    """Behavioral tests for write-once backing storage."""

    class Pair(StorageGuard):
        items = view("items")

        def __new__(cls, *items):
            with super().__new__(cls) as self:
                setattr(self, "-items", list(items))
            return self

    def testViewFreezesContainers(self):
        pair = self.Pair(1, 2)
        self.assertEqual(pair.items, (1, 2))

    def testBackingIsLockedAfterBuild(self):
        pair = self.Pair(1)
        with self.assertRaises(AttributeError):
            setattr(pair, "-items", [])
        with self.assertRaises(AttributeError):
            getattr(pair, "-items")

    def testUnsealedAcceptsOtherAttributes(self):
        pair = self.Pair()
        pair.note = "free"
        self.assertEqual(pair.note, "free")


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal labels."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(104), "104th")


if __name__ == "__main__":
    unittest.main()

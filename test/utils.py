"""
Utils module behavioral tests (sentinel, coalesce, read-only mirrors).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from cmdapp.utils import Unset, UnsetType, coalesce, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(None, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestMirror(TestCase):
    """Behavioral tests for mirror() read-only properties."""

    class Holder:
        items = mirror("items")
        table = mirror("table")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"a": 1}

    def testExposesFrozenCopies(self):
        holder = self.Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)

    def testIsReadOnly(self):
        holder = self.Holder()
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testAccessorIsNamed(self):
        self.assertEqual(self.Holder.items.fget.__name__, "items")


if __name__ == "__main__":
    unittest.main()
